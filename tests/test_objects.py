import json

import pytest

from analysis_pipeline.data_product import PipelineDataProduct
from analysis_pipeline.objects import Histogram1D, Parameter


@pytest.fixture
def hist():
    return Histogram1D("h", "A histogram", 10, 0.0, 1.0)


def test_underflow_bin(hist):
    assert hist.find_bin(-0.5) == 0


def test_overflow_bin_includes_upper_edge(hist):
    assert hist.find_bin(1.0) == hist.bins + 1
    assert hist.find_bin(7.0) == hist.bins + 1


def test_lower_edge_is_first_bin(hist):
    assert hist.find_bin(0.0) == 1


def test_nan_goes_to_overflow(hist):
    assert hist.find_bin(float("nan")) == hist.bins + 1


def test_find_bin_is_monotonic(hist):
    values = [i / 37 for i in range(37)]
    indices = [hist.find_bin(v) for v in values]
    assert indices == sorted(indices)
    assert all(1 <= i <= hist.bins for i in indices)


def test_fill_returns_bin_and_increments(hist):
    index = hist.fill(0.33)
    assert index == hist.find_bin(0.33)
    assert hist.bin_content(index) == 1.0
    assert hist.entries == 1


def test_fill_with_weight(hist):
    index = hist.fill(0.5, 2.5)
    hist.fill(0.5, 2.5)
    assert hist.bin_content(index) == 5.0
    assert hist.entries == 2


def test_sum_of_contents_matches_fills(hist):
    for value in (-1.0, 0.1, 0.2, 0.9, 1.0, 3.0):
        hist.fill(value)
    assert sum(hist.contents) == 6.0
    assert len(hist.contents) == hist.bins + 2


def test_bin_content_out_of_range_is_zero(hist):
    hist.fill(0.5)
    assert hist.bin_content(-1) == 0.0
    assert hist.bin_content(hist.bins + 2) == 0.0


@pytest.mark.parametrize("bins", [0, -3])
def test_rejects_non_positive_bins(bins):
    with pytest.raises(ValueError):
        Histogram1D("h", "h", bins, 0.0, 1.0)


def test_rejects_empty_range():
    with pytest.raises(ValueError):
        Histogram1D("h", "h", 5, 1.0, 1.0)


def test_to_dict_is_json_round_trippable(hist):
    hist.fill(0.25)
    data = hist.to_dict()
    restored = json.loads(json.dumps(data))
    assert restored == data
    assert restored["name"] == "h"
    assert restored["title"] == "A histogram"
    assert restored["contents"] == list(hist.contents)


def test_histogram_serialises_through_product(hist):
    hist.fill(0.75)
    product = PipelineDataProduct(hist, name="h")
    data = product.to_json()
    assert data["_typename"] == "Histogram1D"
    assert data["entries"] == 1
    assert len(data["contents"]) == hist.bins + 2


def test_parameter_member_reflection():
    product = PipelineDataProduct(Parameter("random_value", 0.5))
    assert product.get_member("value") == (0.5, "float")
    assert product.get_member("name") == ("random_value", "str")
    assert product.class_name == "Parameter"
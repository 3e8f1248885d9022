import logging
from dataclasses import dataclass

from analysis_pipeline.data_product import PipelineDataProduct


@dataclass
class Point:
    x: float
    y: int


class Plain:
    def __init__(self):
        self.value = 4
        self._hidden = "no"


class Custom:
    def to_dict(self):
        return {"entries": [1, 2]}


class Broken:
    def __init__(self):
        self.handle = object()


def test_empty_product_defaults():
    product = PipelineDataProduct()
    assert product.object is None
    assert product.class_name == ""
    assert product.name == ""
    assert product.tags == frozenset()


def test_set_object_and_class_name():
    product = PipelineDataProduct()
    point = Point(1.5, 2)
    product.set_object(point)
    assert product.object is point
    assert product.class_name == "Point"


def test_set_object_none_keeps_previous(caplog):
    point = Point(1.0, 1)
    product = PipelineDataProduct(point)
    with caplog.at_level(logging.WARNING):
        product.set_object(None)
    assert product.object is point
    assert any("None" in record.message for record in caplog.records)


def test_get_member_dataclass():
    product = PipelineDataProduct(Point(1.5, 2))
    assert product.get_member("x") == (1.5, "float")
    assert product.get_member("y") == (2, "int")


def test_get_member_missing_and_empty():
    product = PipelineDataProduct(Point(1.5, 2))
    assert product.get_member("z") == (None, "")
    assert PipelineDataProduct().get_member("x") == (None, "")


def test_get_member_plain_object_skips_private():
    product = PipelineDataProduct(Plain())
    assert product.get_member("value") == (4, "int")
    assert product.get_member("_hidden") == (None, "")


def test_all_members_sorted():
    product = PipelineDataProduct(Point(3.0, 9))
    members = product.all_members()
    assert list(members) == ["x", "y"]
    assert members["x"] == (3.0, "float")
    assert PipelineDataProduct().all_members() == {}


def test_to_json_of_dataclass():
    product = PipelineDataProduct(Point(1.5, 2), name="pt")
    assert product.to_json() == {"_typename": "Point", "x": 1.5, "y": 2}


def test_to_json_uses_to_dict():
    product = PipelineDataProduct(Custom())
    assert product.to_json() == {"_typename": "Custom", "entries": [1, 2]}


def test_to_json_empty_and_unserialisable(caplog):
    assert PipelineDataProduct().to_json() is None
    product = PipelineDataProduct(Broken(), name="bad")
    with caplog.at_level(logging.ERROR):
        assert product.to_json() is None
    assert any("bad" in record.message for record in caplog.records)


def test_tags_management():
    product = PipelineDataProduct()
    product.add_tag("a")
    product.add_tag("b")
    product.add_tag("a")
    assert product.tags == {"a", "b"}
    assert product.has_tag("a")
    product.remove_tag("a")
    product.remove_tag("missing")
    assert not product.has_tag("a")
    assert product.tags == {"b"}


def test_tags_snapshot_is_independent():
    product = PipelineDataProduct(tags=["x"])
    snapshot = product.tags
    product.add_tag("y")
    assert snapshot == {"x"}
    assert product.tags == {"x", "y"}
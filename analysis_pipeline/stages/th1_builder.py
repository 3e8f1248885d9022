"""A stage that fills a one-dimensional histogram from a product's member."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from analysis_pipeline.data_product import PipelineDataProduct
from analysis_pipeline.objects import Histogram1D
from analysis_pipeline.product_manager import PipelineDataProductManager
from analysis_pipeline.stages.base import BaseStage, StageConfigError

log = logging.getLogger(__name__)

_NUMERIC_TYPES = frozenset({"float", "int"})


class TH1BuilderStage(BaseStage):
    """Reads a numeric member of one product and fills it into a histogram product."""

    def __init__(self) -> None:
        super().__init__()
        self._input_product = ""
        self._histogram_name = "hist"
        self._value_key = "value"
        self._title = ""
        self._bins = 100
        self._min = 0.0
        self._max = 1.0

    @property
    def name(self) -> str:
        return "TH1BuilderStage"

    def _option(self, key: str, default: Any, kinds: tuple[type, ...], label: str) -> Any:
        value = self.parameters.get(key, default)
        if isinstance(value, bool) or not isinstance(value, kinds):
            raise StageConfigError(f"{self.name}: '{key}' must be {label}")
        return value

    def on_init(self) -> None:
        if not isinstance(self.parameters, Mapping):
            raise StageConfigError(f"{self.name}: configuration must be an object")
        self._input_product = self._option("input_product", "", (str,), "a string")
        self._histogram_name = self._option("product_name", "hist", (str,), "a string")
        self._value_key = self._option("value_key", "value", (str,), "a string")
        self._title = self._option("title", self._histogram_name, (str,), "a string")
        self._bins = int(self._option("bins", 100, (int, float), "a number"))
        self._min = float(self._option("min", 0.0, (int, float), "a number"))
        self._max = float(self._option("max", 1.0, (int, float), "a number"))

        if not self._input_product:
            raise StageConfigError("TH1BuilderStage: input_product is required")

        log.debug(
            "[%s] Configured to read from '%s', extract key '%s', and fill '%s'",
            self.name,
            self._input_product,
            self._value_key,
            self._histogram_name,
        )

    def process(self) -> None:
        manager = self.manager
        try:
            self._fill(manager)
        except Exception as error:
            log.error("[%s] Exception in process: %s", self.name, error)

    def _fill(self, manager: PipelineDataProductManager) -> None:
        if not manager.has_product(self._input_product):
            log.error("[%s] Input product '%s' not found", self.name, self._input_product)
            return

        with manager.checkout_read(self._input_product) as handle:
            if not handle.valid:
                log.error(
                    "[%s] Failed to lock input product '%s'", self.name, self._input_product
                )
                return
            value, type_name = handle.product.get_member(self._value_key)

        if not type_name:
            log.error(
                "[%s] Member '%s' not found in product '%s'",
                self.name,
                self._value_key,
                self._input_product,
            )
            return
        if type_name not in _NUMERIC_TYPES:
            log.error("[%s] Unsupported member type '%s'", self.name, type_name)
            return
        value_to_fill = float(value)

        if not manager.has_product(self._histogram_name):
            histogram = Histogram1D(
                self._histogram_name, self._title, self._bins, self._min, self._max
            )
            product = PipelineDataProduct(
                histogram,
                name=self._histogram_name,
                tags=("histogram", "built_by_th1_builder"),
            )
            manager.add_or_update(self._histogram_name, product)

        with manager.checkout_write(self._histogram_name) as handle:
            if not handle.valid:
                log.error(
                    "[%s] Failed to lock histogram product '%s'",
                    self.name,
                    self._histogram_name,
                )
                return
            histogram = handle.product.object
            if not isinstance(histogram, Histogram1D):
                log.error(
                    "[%s] Object named '%s' exists but is not a histogram",
                    self.name,
                    self._histogram_name,
                )
                return
            histogram.fill(value_to_fill)
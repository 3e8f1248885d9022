"""A stage that removes named products from the manager."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from analysis_pipeline.stages.base import BaseStage, StageConfigError

log = logging.getLogger(__name__)


class ClearProductsStage(BaseStage):
    """Removes the products listed under the ``products`` parameter."""

    def __init__(self) -> None:
        super().__init__()
        self._products_to_clear: list[str] = []

    @property
    def name(self) -> str:
        return "ClearProductsStage"

    def on_init(self) -> None:
        products = (
            self.parameters.get("products") if isinstance(self.parameters, Mapping) else None
        )
        if not isinstance(products, list):
            raise StageConfigError(
                "ClearProductsStage requires a 'products' array in configuration"
            )
        if not all(isinstance(name, str) for name in products):
            raise StageConfigError("ClearProductsStage: every product name must be a string")
        self._products_to_clear = list(products)
        log.debug(
            "[%s] Initialized with %d products to clear",
            self.name,
            len(self._products_to_clear),
        )

    def process(self) -> None:
        if not self._products_to_clear:
            return
        self.manager.remove_multiple(self._products_to_clear)
        for name in self._products_to_clear:
            log.debug("[%s] Removed product '%s'", self.name, name)
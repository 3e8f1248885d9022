"""Base classes for pipeline stages."""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from analysis_pipeline.input_bundle import InputBundle
    from analysis_pipeline.product_manager import PipelineDataProductManager


class StageConfigError(ValueError):
    """Raised when a stage is given an unusable configuration."""


class BaseStage(ABC):
    """A unit of work that reads and writes products in a shared manager."""

    def __init__(self) -> None:
        self.parameters: Any = {}
        self._manager: PipelineDataProductManager | None = None

    def init(self, parameters: Any, manager: PipelineDataProductManager) -> None:
        """Store a copy of ``parameters`` and the shared manager, then run ``on_init``."""
        self.parameters = {} if parameters is None else copy.deepcopy(parameters)
        self._manager = manager
        self.on_init()

    def on_init(self) -> None:
        """Hook for subclasses to read their parameters."""

    @abstractmethod
    def process(self) -> None:
        """Run the stage once."""

    @property
    @abstractmethod
    def name(self) -> str:
        """The stage's name."""

    @property
    def manager(self) -> PipelineDataProductManager:
        """The shared product manager given to ``init``."""
        if self._manager is None:
            raise RuntimeError(f"{type(self).__name__} has not been initialised")
        return self._manager


class BaseInputStage(BaseStage):
    """A stage that receives externally supplied input."""

    @abstractmethod
    def set_input(self, bundle: InputBundle) -> None:
        """Receive the input bundle for the next run."""
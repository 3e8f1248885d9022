"""Analysis objects produced and consumed by pipeline stages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class Parameter:
    """A single named numeric value."""

    name: str
    value: float


class Histogram1D:
    """A fixed-binning one-dimensional histogram with underflow and overflow bins.

    Bin 0 is the underflow bin, bins 1..``bins`` cover ``[xmin, xmax)`` and
    bin ``bins + 1`` is the overflow bin.
    """

    def __init__(self, name: str, title: str, bins: int, xmin: float, xmax: float) -> None:
        if bins < 1:
            raise ValueError(f"Histogram1D '{name}': bins must be at least 1, got {bins}")
        if not xmax > xmin:
            raise ValueError(
                f"Histogram1D '{name}': xmax ({xmax}) must be greater than xmin ({xmin})"
            )
        self.name = name
        self.title = title
        self.bins = int(bins)
        self.xmin = float(xmin)
        self.xmax = float(xmax)
        self.entries = 0
        self._contents = [0.0] * (self.bins + 2)

    @property
    def contents(self) -> tuple[float, ...]:
        """Contents of every bin, underflow and overflow included."""
        return tuple(self._contents)

    def find_bin(self, value: float) -> int:
        """Index of the bin that ``value`` falls into."""
        if value < self.xmin:
            return 0
        if not value < self.xmax:
            return self.bins + 1
        index = 1 + int(self.bins * (value - self.xmin) / (self.xmax - self.xmin))
        return min(index, self.bins)

    def fill(self, value: float, weight: float = 1.0) -> int:
        """Add ``weight`` to the bin holding ``value`` and return that bin's index."""
        index = self.find_bin(value)
        self._contents[index] += weight
        self.entries += 1
        return index

    def bin_content(self, index: int) -> float:
        """Content of bin ``index``; indices outside the histogram read as 0."""
        if 0 <= index <= self.bins + 1:
            return self._contents[index]
        return 0.0

    def to_dict(self) -> dict[str, Any]:
        """A JSON-compatible description of the histogram."""
        return {
            "name": self.name,
            "title": self.title,
            "bins": self.bins,
            "xmin": self.xmin,
            "xmax": self.xmax,
            "entries": self.entries,
            "contents": list(self._contents),
        }
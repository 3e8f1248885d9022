"""A keyed container of heterogeneous values handed to input stages."""

from __future__ import annotations

from typing import Any


class InputBundle:
    """Holds arbitrary objects under string keys with typed retrieval."""

    def __init__(self) -> None:
        self._data: dict[str, Any] = {}

    def set(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        self._data[key] = value

    def get(self, key: str, expected_type: type | tuple[type, ...] | None = None) -> Any:
        """Return the value under ``key``.

        Raises KeyError if the key is absent and TypeError if the stored
        value is not an instance of ``expected_type``.
        """
        try:
            value = self._data[key]
        except KeyError:
            raise KeyError(f"InputBundle: key '{key}' not found") from None
        if expected_type is not None and not isinstance(value, expected_type):
            raise TypeError(f"InputBundle: bad type cast for key '{key}'")
        return value

    def has(self, key: str, expected_type: type | tuple[type, ...]) -> bool:
        """True if ``key`` exists and holds an instance of ``expected_type``."""
        if key not in self._data:
            return False
        return isinstance(self._data[key], expected_type)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)

    def remove(self, key: str) -> None:
        """Drop ``key`` if present; absent keys are ignored."""
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        """Return the stored keys."""
        return list(self._data)

    def clear(self) -> None:
        """Remove every entry."""
        self._data.clear()

    def describe(self) -> str:
        """One line per entry: ``key -> type name``."""
        return "".join(
            f"{key} -> {type(value).__name__}\n" for key, value in self._data.items()
        )
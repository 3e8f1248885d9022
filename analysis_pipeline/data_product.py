"""A named, tagged wrapper around an analysis object."""

from __future__ import annotations

import dataclasses
import json
import logging
from collections.abc import Iterable, Mapping
from typing import Any

log = logging.getLogger(__name__)


def _members_of(obj: Any) -> dict[str, Any]:
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {field.name: getattr(obj, field.name) for field in dataclasses.fields(obj)}
    try:
        attributes = vars(obj)
    except TypeError:
        attributes = {}
        for cls in type(obj).__mro__:
            for slot in getattr(cls, "__slots__", ()):
                if hasattr(obj, slot):
                    attributes[slot] = getattr(obj, slot)
    return {name: value for name, value in attributes.items() if not name.startswith("_")}


class PipelineDataProduct:
    """Wraps an object and carries a name, a set of tags and reflection helpers."""

    def __init__(self, obj: Any = None, name: str = "", tags: Iterable[str] = ()) -> None:
        self._object = obj
        self.name = name
        self._tags: set[str] = set(tags)

    @property
    def object(self) -> Any:
        """The wrapped object, or None."""
        return self._object

    def set_object(self, obj: Any) -> None:
        """Replace the wrapped object; a None value is ignored with a warning."""
        if obj is None:
            log.warning("PipelineDataProduct.set_object called with None")
            return
        self._object = obj

    @property
    def class_name(self) -> str:
        """Class name of the wrapped object, or an empty string."""
        if self._object is None:
            return ""
        return type(self._object).__name__

    def get_member(self, member_name: str) -> tuple[Any, str]:
        """Return ``(value, type name)`` of a public member, or ``(None, "")``."""
        if self._object is None:
            return None, ""
        members = _members_of(self._object)
        if member_name not in members:
            log.warning(
                "Member '%s' not found in class '%s'", member_name, self.class_name
            )
            return None, ""
        value = members[member_name]
        return value, type(value).__name__

    def all_members(self) -> dict[str, tuple[Any, str]]:
        """All public members as ``name -> (value, type name)``, sorted by name."""
        if self._object is None:
            return {}
        members = _members_of(self._object)
        return {
            name: (members[name], type(members[name]).__name__) for name in sorted(members)
        }

    def to_json(self) -> dict[str, Any] | None:
        """JSON-compatible dict of the object, or None if absent or unserialisable."""
        if self._object is None:
            return None
        try:
            to_dict = getattr(self._object, "to_dict", None)
            data = to_dict() if callable(to_dict) else _members_of(self._object)
            if not isinstance(data, Mapping):
                raise TypeError(f"to_dict returned {type(data).__name__}, not a mapping")
            payload = {"_typename": self.class_name, **data}
            return json.loads(json.dumps(payload))
        except (TypeError, ValueError) as error:
            log.error("Failed to serialize PipelineDataProduct '%s': %s", self.name, error)
            return None

    def add_tag(self, tag: str) -> None:
        self._tags.add(tag)

    def remove_tag(self, tag: str) -> None:
        self._tags.discard(tag)

    def has_tag(self, tag: str) -> bool:
        return tag in self._tags

    @property
    def tags(self) -> frozenset[str]:
        """A snapshot of the current tags."""
        return frozenset(self._tags)
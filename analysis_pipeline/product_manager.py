"""Thread-safe registry of named data products with per-product locking."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

from analysis_pipeline.data_product import PipelineDataProduct
from analysis_pipeline.product_lock import LockMode, PipelineDataProductLock, SharedLock

log = logging.getLogger(__name__)


class ProductNotFoundError(LookupError):
    """Raised when a product is requested that the manager does not hold."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Product not found: {name}")
        self.name = name


@dataclass
class _Entry:
    product: PipelineDataProduct
    lock: SharedLock = field(default_factory=SharedLock)


@contextmanager
def _held(lock: SharedLock, mode: LockMode) -> Iterator[None]:
    lock.acquire(mode)
    try:
        yield
    finally:
        lock.release(mode)


class PipelineDataProductManager:
    """Owns data products by name and hands out read or write checkouts."""

    def __init__(self) -> None:
        self._lock = SharedLock()
        self._entries: dict[str, _Entry] = {}

    def _store(self, name: str, product: PipelineDataProduct) -> None:
        product.name = name
        entry = self._entries.get(name)
        if entry is None:
            self._entries[name] = _Entry(product)
        else:
            entry.product = product

    def add_or_update(self, name: str, product: PipelineDataProduct | None) -> None:
        """Store ``product`` under ``name``; a None product is ignored with a warning."""
        if product is None:
            log.warning(
                "[PipelineDataProductManager] Tried to add/update null product for '%s'", name
            )
            return
        with _held(self._lock, LockMode.WRITE):
            self._store(name, product)

    def add_or_update_multiple(
        self,
        products: Mapping[str, PipelineDataProduct | None]
        | Iterable[tuple[str, PipelineDataProduct | None]],
    ) -> None:
        """Store several products at once; None products are skipped."""
        pairs = list(products.items() if isinstance(products, Mapping) else products)
        with _held(self._lock, LockMode.WRITE):
            for name, product in pairs:
                if product is None:
                    log.warning(
                        "[PipelineDataProductManager] Skipping null product for '%s'", name
                    )
                    continue
                self._store(name, product)

    def remove(self, name: str) -> None:
        with _held(self._lock, LockMode.WRITE):
            self._entries.pop(name, None)

    def remove_multiple(self, names: Iterable[str]) -> None:
        names = list(names)
        with _held(self._lock, LockMode.WRITE):
            for name in names:
                self._entries.pop(name, None)

    def clear(self) -> None:
        with _held(self._lock, LockMode.WRITE):
            self._entries.clear()

    def names(self) -> list[str]:
        """Names of all held products."""
        with _held(self._lock, LockMode.READ):
            return list(self._entries)

    def has_product(self, name: str) -> bool:
        with _held(self._lock, LockMode.READ):
            return name in self._entries

    def has_products(self, names: Iterable[str]) -> list[bool]:
        """One flag per requested name, in the given order."""
        names = list(names)
        with _held(self._lock, LockMode.READ):
            return [name in self._entries for name in names]

    def existing_products(self, names: Iterable[str]) -> list[str]:
        """The requested names that are present, in the given order."""
        names = list(names)
        with _held(self._lock, LockMode.READ):
            return [name for name in names if name in self._entries]

    def _find(self, name: str) -> _Entry:
        try:
            return self._entries[name]
        except KeyError:
            raise ProductNotFoundError(name) from None

    def _checkout(self, name: str, mode: LockMode) -> PipelineDataProductLock:
        with _held(self._lock, LockMode.READ):
            entry = self._find(name)
        entry.lock.acquire(mode)
        return PipelineDataProductLock(entry.product, entry.lock, mode)

    def checkout_read(self, name: str) -> PipelineDataProductLock:
        """Check out a product for shared reading."""
        return self._checkout(name, LockMode.READ)

    def checkout_write(self, name: str) -> PipelineDataProductLock:
        """Check out a product for exclusive writing."""
        return self._checkout(name, LockMode.WRITE)

    def _checkout_multiple(
        self, names: Iterable[str], mode: LockMode
    ) -> list[PipelineDataProductLock]:
        sorted_names = sorted(names)
        if mode is LockMode.WRITE and len(set(sorted_names)) != len(sorted_names):
            raise ValueError("Cannot check out the same product for writing twice")
        with _held(self._lock, LockMode.READ):
            entries = [self._find(name) for name in sorted_names]
        handles: list[PipelineDataProductLock] = []
        try:
            for entry in entries:
                entry.lock.acquire(mode)
                handles.append(PipelineDataProductLock(entry.product, entry.lock, mode))
        except BaseException:
            for handle in handles:
                handle.release()
            raise
        return handles

    def checkout_read_multiple(self, names: Iterable[str]) -> list[PipelineDataProductLock]:
        """Check out several products for reading, locked in sorted name order."""
        return self._checkout_multiple(names, LockMode.READ)

    def checkout_write_multiple(self, names: Iterable[str]) -> list[PipelineDataProductLock]:
        """Check out several products for writing, locked in sorted name order."""
        return self._checkout_multiple(names, LockMode.WRITE)

    def extract_product(self, name: str) -> PipelineDataProduct | None:
        """Remove a product and hand it to the caller; None if it is absent."""
        with _held(self._lock, LockMode.WRITE):
            entry = self._entries.get(name)
            if entry is None:
                log.warning(
                    "[PipelineDataProductManager] Tried to extract non-existent product '%s'",
                    name,
                )
                return None
            with _held(entry.lock, LockMode.WRITE):
                del self._entries[name]
                return entry.product

    def serialize_all(self) -> dict[str, Any]:
        """JSON-compatible mapping of every product name to its serialised object."""
        with _held(self._lock, LockMode.READ):
            output: dict[str, Any] = {}
            for name, entry in self._entries.items():
                with _held(entry.lock, LockMode.READ):
                    output[name] = entry.product.to_json()
            return output

    def all_tags(self) -> set[str]:
        """Every tag used by any held product."""
        with _held(self._lock, LockMode.READ):
            return {tag for entry in self._entries.values() for tag in entry.product.tags}

    def _names_where(self, predicate) -> list[str]:
        with _held(self._lock, LockMode.READ):
            return [
                name for name, entry in self._entries.items() if predicate(entry.product.tags)
            ]

    def _remove_where(self, predicate) -> None:
        with _held(self._lock, LockMode.WRITE):
            doomed = [
                name for name, entry in self._entries.items() if predicate(entry.product.tags)
            ]
            for name in doomed:
                del self._entries[name]

    def remove_by_tag(self, tag: str) -> None:
        self._remove_where(lambda tags: tag in tags)

    def remove_excluding_tag(self, tag: str) -> None:
        self._remove_where(lambda tags: tag not in tags)

    def names_with_tag(self, tag: str) -> list[str]:
        return self._names_where(lambda tags: tag in tags)

    def remove_by_tags(self, tags: Iterable[str]) -> None:
        """Remove products carrying any of ``tags``."""
        wanted = frozenset(tags)
        self._remove_where(lambda product_tags: not wanted.isdisjoint(product_tags))

    def remove_excluding_tags(self, tags: Iterable[str]) -> None:
        """Remove products carrying none of ``tags``."""
        wanted = frozenset(tags)
        self._remove_where(lambda product_tags: wanted.isdisjoint(product_tags))

    def names_with_any_tags(self, tags: Iterable[str]) -> list[str]:
        wanted = frozenset(tags)
        return self._names_where(lambda product_tags: not wanted.isdisjoint(product_tags))

    def names_with_all_tags(self, tags: Iterable[str]) -> list[str]:
        wanted = frozenset(tags)
        return self._names_where(lambda product_tags: wanted <= product_tags)

    def names_with_exact_tags(self, tags: Iterable[str]) -> list[str]:
        wanted = frozenset(tags)
        return self._names_where(lambda product_tags: product_tags == wanted)

    def names_with_no_tags(self) -> list[str]:
        return self._names_where(lambda product_tags: not product_tags)
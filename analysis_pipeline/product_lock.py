"""Reader/writer locking and the handle that keeps a product checked out."""

from __future__ import annotations

import enum
import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from analysis_pipeline.data_product import PipelineDataProduct


class LockMode(enum.Enum):
    READ = "read"
    WRITE = "write"


class SharedLock:
    """A lock allowing many readers or one writer; waiting writers block new readers."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0

    def acquire_read(self) -> None:
        with self._cond:
            while self._writer or self._waiting_writers:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            if self._readers == 0:
                raise RuntimeError("release_read called without a held read lock")
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._waiting_writers += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._waiting_writers -= 1
            self._writer = True

    def release_write(self) -> None:
        with self._cond:
            if not self._writer:
                raise RuntimeError("release_write called without a held write lock")
            self._writer = False
            self._cond.notify_all()

    def acquire(self, mode: LockMode) -> None:
        if mode is LockMode.READ:
            self.acquire_read()
        else:
            self.acquire_write()

    def release(self, mode: LockMode) -> None:
        if mode is LockMode.READ:
            self.release_read()
        else:
            self.release_write()


class PipelineDataProductLock:
    """Access to a checked-out product; holds an already acquired lock until released."""

    def __init__(
        self, product: PipelineDataProduct | None, lock: SharedLock, mode: LockMode
    ) -> None:
        self._product = product
        self._lock: SharedLock | None = lock
        self._mode = mode

    @property
    def product(self) -> PipelineDataProduct | None:
        return self._product

    @property
    def mode(self) -> LockMode:
        return self._mode

    @property
    def valid(self) -> bool:
        return self._product is not None

    def release(self) -> None:
        """Release the underlying lock; later calls do nothing."""
        lock, self._lock = self._lock, None
        self._product = None
        if lock is not None:
            lock.release(self._mode)

    def __enter__(self) -> PipelineDataProductLock:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

    def __del__(self) -> None:
        if getattr(self, "_lock", None) is not None:
            self.release()
#!/usr/bin/env python3
"""
Lock strategies for the assignment coordinator.

A transition touches the student row and up to two supervisor rows without a
cross-request guard at the database level. The keyed strategy serializes
transitions that share a student or a supervisor inside this process.

Keys are always acquired in sorted order within one ``hold`` call, and the
coordinator only ever nests a supervisor ``hold`` inside a student ``hold``,
so two transitions cannot wait on each other.
"""

import contextlib
import logging
from threading import Lock, RLock
from typing import Dict, Iterator, Optional, Protocol

logger = logging.getLogger(__name__)


class LockStrategy(Protocol):
    def hold(self, *keys: Optional[str]) -> contextlib.AbstractContextManager:
        ...

    def forget(self, *keys: Optional[str]) -> None:
        ...


class NullLockStrategy:
    """No in-process locking: concurrent transitions may interleave."""

    @contextlib.contextmanager
    def hold(self, *keys: Optional[str]) -> Iterator[None]:
        yield

    def forget(self, *keys: Optional[str]) -> None:
        pass


class KeyedLockStrategy:
    """One re-entrant mutex per key, created on first use."""

    def __init__(self):
        self._guard = Lock()
        self._locks: Dict[str, RLock] = {}

    def _lock_for(self, key: str) -> RLock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = RLock()
                self._locks[key] = lock
            return lock

    @property
    def size(self) -> int:
        """Number of keys currently tracked."""
        return len(self._locks)

    @contextlib.contextmanager
    def hold(self, *keys: Optional[str]) -> Iterator[None]:
        ordered = sorted({k for k in keys if k})
        acquired = []
        try:
            for key in ordered:
                lock = self._lock_for(key)
                lock.acquire()
                acquired.append(lock)
            yield
        finally:
            for lock in reversed(acquired):
                lock.release()

    def forget(self, *keys: Optional[str]) -> None:
        """
        Drop the mutexes of records that no longer exist.

        A thread already waiting on a dropped mutex still gets it; it will
        find the record gone.
        """
        with self._guard:
            for key in keys:
                if key:
                    self._locks.pop(key, None)


def student_key(student_id: Optional[str]) -> Optional[str]:
    return f"student:{student_id}" if student_id else None


def supervisor_key(supervisor_id: Optional[str]) -> Optional[str]:
    return f"supervisor:{supervisor_id}" if supervisor_id else None


def build_lock_strategy(name: str = "keyed") -> LockStrategy:
    if name == "none":
        logger.warning("Assignment locking disabled; concurrent assignments may exceed quotas")
        return NullLockStrategy()
    if name == "keyed":
        return KeyedLockStrategy()
    raise ValueError(f"Unknown lock strategy: {name!r} (expected 'keyed' or 'none')")

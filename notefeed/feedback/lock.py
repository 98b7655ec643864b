from __future__ import annotations

import contextlib
import threading
import typing as t

from notefeed.model import GradeID


class GradeLocks(object):
    """Per-grade mutual exclusion within this process.

    A lock exists only while some caller holds or waits on it. Locks are
    reentrant, so a holder may call other locked operations on the same grade.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[GradeID, tuple[threading.RLock, int]] = {}

    @contextlib.contextmanager
    def hold(self, grade_id: GradeID) -> t.Iterator[None]:
        with self._guard:
            lock, waiters = self._locks.get(grade_id, (None, 0))
            if lock is None:
                lock = threading.RLock()
            self._locks[grade_id] = (lock, waiters + 1)

        try:
            with lock:
                yield
        finally:
            with self._guard:
                _, waiters = self._locks[grade_id]
                if waiters == 1:
                    del self._locks[grade_id]
                else:
                    self._locks[grade_id] = (lock, waiters - 1)

    def __len__(self) -> int:
        return len(self._locks)

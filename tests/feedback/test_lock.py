"""Tests for notefeed.feedback.lock module."""

from __future__ import annotations

import threading
import time

from notefeed.feedback import GradeLocks


class TestGradeLocks(object):
    def test_registry_empties_after_release(self) -> None:
        locks = GradeLocks()
        with locks.hold(1):
            assert len(locks) == 1
        assert len(locks) == 0

    def test_reentrant(self) -> None:
        locks = GradeLocks()
        with locks.hold(1):
            with locks.hold(1):
                assert len(locks) == 1
        assert len(locks) == 0

    def test_released_on_error(self) -> None:
        locks = GradeLocks()
        try:
            with locks.hold(1):
                raise RuntimeError("boom")
        except RuntimeError:
            pass
        assert len(locks) == 0

    def test_same_grade_is_serialized(self) -> None:
        locks = GradeLocks()
        entered = threading.Event()
        events: list[str] = []

        def hold_first() -> None:
            with locks.hold(1):
                entered.set()
                time.sleep(0.1)
                events.append("first done")

        def hold_second() -> None:
            entered.wait()
            with locks.hold(1):
                events.append("second in")

        threads = [threading.Thread(target=hold_first), threading.Thread(target=hold_second)]
        for th in threads:
            th.start()
        for th in threads:
            th.join(timeout=5)

        assert events == ["first done", "second in"]
        assert len(locks) == 0

    def test_other_grades_do_not_block(self) -> None:
        locks = GradeLocks()
        acquired = threading.Event()

        def hold_other() -> None:
            with locks.hold(2):
                acquired.set()

        with locks.hold(1):
            th = threading.Thread(target=hold_other)
            th.start()
            assert acquired.wait(timeout=5)
            th.join(timeout=5)

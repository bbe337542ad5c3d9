"""Tests for LazyCell."""

import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from concurrent_memo.infrastructure.caching.lazy_cell import CellState, LazyCell


class TestLazyCell:
    def test_thunk_not_run_until_read(self):
        calls = []
        cell = LazyCell(lambda: calls.append("run") or 42)

        assert calls == []
        assert cell.state is CellState.PENDING
        assert cell.is_value_created is False

        assert cell.value == 42
        assert cell.state is CellState.CREATED
        assert cell.is_value_created is True

    def test_value_computed_once(self):
        calls = []

        def thunk():
            calls.append(1)
            return object()

        cell = LazyCell(thunk)

        first = cell.value
        second = cell.value

        assert first is second
        assert len(calls) == 1

    def test_concurrent_readers_share_one_evaluation(self):
        """Readers arriving during evaluation block and read the same value."""
        calls = []
        lock = threading.Lock()

        def slow():
            with lock:
                calls.append(1)
            time.sleep(0.1)
            return object()

        cell = LazyCell(slow)

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda _: cell.value, range(8)))

        assert len(calls) == 1
        assert all(result is results[0] for result in results)

    def test_failure_is_kept_on_the_cell(self):
        """Every reader of a failed cell sees the same exception object."""
        calls = []

        def boom():
            calls.append(1)
            raise RuntimeError("boom")

        cell = LazyCell(boom)

        with pytest.raises(RuntimeError) as first:
            _ = cell.value
        with pytest.raises(RuntimeError) as second:
            _ = cell.value

        assert first.value is second.value
        assert cell.state is CellState.FAILED
        assert len(calls) == 1

    def test_thunk_released_after_resolution(self):
        cell = LazyCell(lambda: 1)

        _ = cell.value

        assert cell._thunk is None

    def test_repr(self):
        assert repr(LazyCell(lambda: 1)) == "LazyCell(state=pending)"

"""
Tests for the observable store and result values.
"""

import pytest

from swiftcard.result import Failure, Success
from swiftcard.store import ObservableStore


class TestObservableStore:
    """Test cases for ObservableStore."""

    @pytest.fixture
    def store(self):
        """Create store with an initial value."""
        return ObservableStore(0)

    def test_initial_state(self, store):
        assert store.value == 0
        assert store.version == 0

    def test_set_bumps_version(self, store):
        assert store.set(5) == 1
        assert store.set(6) == 2
        assert store.value == 6

    def test_update(self, store):
        store.set(2)
        store.update(lambda v: v * 10)

        assert store.value == 20
        assert store.version == 2

    def test_subscribe_emits_current(self, store):
        seen = []
        store.subscribe(seen.append)
        store.set(1)

        assert seen == [0, 1]

    def test_subscribe_without_current(self, store):
        seen = []
        store.subscribe(seen.append, emit_current=False)
        store.set(1)

        assert seen == [1]

    def test_unsubscribe(self, store):
        seen = []
        unsubscribe = store.subscribe(seen.append, emit_current=False)
        unsubscribe()
        unsubscribe()
        store.set(1)

        assert seen == []
        assert store.subscriber_count == 0

    def test_failing_listener_does_not_block_others(self, store):
        """Test one broken listener does not stop notification."""
        seen = []

        def broken(_value):
            raise RuntimeError("boom")

        store.subscribe(broken, emit_current=False)
        store.subscribe(seen.append, emit_current=False)
        store.set(3)

        assert seen == [3]

    def test_listener_can_read_store(self, store):
        """Test listeners run outside the lock."""
        seen = []
        store.subscribe(lambda _v: seen.append(store.version), emit_current=False)
        store.set(1)

        assert seen == [1]


class TestResult:
    """Test cases for Success and Failure."""

    def test_success(self):
        result = Success("ok")

        assert result.success is True
        assert result.unwrap() == "ok"

    def test_failure(self):
        error = ValueError("bad input")
        result = Failure(error)

        assert result.success is False
        assert result.message == "bad input"
        with pytest.raises(ValueError):
            result.unwrap()

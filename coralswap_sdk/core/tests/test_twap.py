"""
Tests for TWAP computation and the observation cache.
"""

from concurrent.futures import ThreadPoolExecutor

import pytest

from ..errors import CoralSwapError, ErrorKind
from ..twap import ObservationBuffer, ObservationCache, compute_twap
from ..types import TWAPObservation


def obs(price0: int, price1: int, timestamp: int) -> TWAPObservation:
    return TWAPObservation(price0, price1, timestamp)


class TestComputeTwap:
    """Test averaging between two observations."""

    def test_average(self):
        result = compute_twap(obs(1000, 2000, 100), obs(11_000, 22_000, 200))
        assert result == (100, 200, 100)

    def test_truncates_toward_zero(self):
        """Test that a negative delta truncates rather than floors."""
        price0, _, window = compute_twap(obs(5000, 0, 0), obs(1000, 0, 3))
        assert window == 3
        assert price0 == -1333

    @pytest.mark.parametrize("end_timestamp", [100, 99])
    def test_rejects_non_increasing_window(self, end_timestamp):
        with pytest.raises(CoralSwapError) as exc_info:
            compute_twap(obs(0, 0, 100), obs(10, 10, end_timestamp))
        assert exc_info.value.kind is ErrorKind.VALIDATION


class TestObservationBuffer:
    """Test the bounded FIFO."""

    def test_evicts_oldest(self):
        buffer = ObservationBuffer(capacity=3)
        for t in range(5):
            buffer.append(obs(t, t, t))

        assert len(buffer) == 3
        assert buffer.oldest().block_timestamp_last == 2
        assert buffer.newest().block_timestamp_last == 4
        assert [o.block_timestamp_last for o in buffer.snapshot()] == [2, 3, 4]

    def test_empty(self):
        buffer = ObservationBuffer()
        assert buffer.oldest() is None
        assert buffer.newest() is None
        assert len(buffer) == 0

    def test_clear(self):
        buffer = ObservationBuffer(capacity=2)
        buffer.append(obs(1, 1, 1))
        buffer.clear()
        assert len(buffer) == 0

    def test_rejects_tiny_capacity(self):
        with pytest.raises(CoralSwapError) as exc_info:
            ObservationBuffer(capacity=1)
        assert exc_info.value.kind is ErrorKind.VALIDATION


class TestObservationCache:
    """Test per-pool buffering."""

    def test_append_returns_length(self):
        cache = ObservationCache(capacity=2)
        assert cache.append("pool", obs(1, 1, 1)) == 1
        assert cache.append("pool", obs(2, 2, 2)) == 2
        assert cache.append("pool", obs(3, 3, 3)) == 2

    def test_window_needs_two(self):
        cache = ObservationCache()
        assert cache.window("pool") is None
        cache.append("pool", obs(1, 1, 1))
        assert cache.window("pool") is None
        cache.append("pool", obs(2, 2, 5))

        start, end = cache.window("pool")
        assert start.block_timestamp_last == 1
        assert end.block_timestamp_last == 5

    def test_pools_are_isolated(self):
        cache = ObservationCache(capacity=2)
        for t in range(3):
            cache.append("a", obs(t, t, t))
        cache.append("b", obs(9, 9, 9))

        assert cache.count("a") == 2
        assert cache.count("b") == 1
        assert cache.snapshot("b") == [obs(9, 9, 9)]

    def test_clear_one_pool(self):
        cache = ObservationCache()
        cache.append("a", obs(1, 1, 1))
        cache.append("b", obs(1, 1, 1))

        cache.clear("a")

        assert cache.count("a") == 0
        assert cache.count("b") == 1

    def test_clear_all(self):
        cache = ObservationCache()
        cache.append("a", obs(1, 1, 1))
        cache.append("b", obs(1, 1, 1))

        cache.clear()

        assert cache.count("a") == 0
        assert cache.count("b") == 0
        assert cache.snapshot("a") == []

    def test_custom_buffer_factory(self):
        created = []

        def factory(capacity):
            created.append(capacity)
            return ObservationBuffer(capacity)

        cache = ObservationCache(capacity=7, buffer_factory=factory)
        cache.append("a", obs(1, 1, 1))
        cache.append("a", obs(2, 2, 2))

        assert created == [7]

    def test_concurrent_appends(self):
        """Test that threaded appends to one pool never exceed capacity."""
        cache = ObservationCache(capacity=50)

        def worker(offset):
            for t in range(100):
                cache.append("pool", obs(t, t, offset + t))

        with ThreadPoolExecutor(max_workers=4) as executor:
            list(executor.map(worker, range(0, 400, 100)))

        assert cache.count("pool") == 50

"""
Time-weighted average prices from cumulative price accumulators.

compute_twap() is pure. ObservationBuffer is a bounded FIFO of observations
for one pool; ObservationCache keys buffers by pool id and serializes access
to each buffer with its own lock, so different pools never contend.
"""

import logging
import threading
from collections import deque
from typing import Callable, Dict, List, Optional, Tuple

from .amounts import safe_div
from .constants import MAX_OBSERVATIONS
from .errors import CoralSwapError
from .types import TWAPObservation

logger = logging.getLogger(__name__)


def compute_twap(
    start: TWAPObservation, end: TWAPObservation
) -> Tuple[int, int, int]:
    """
    Average prices between two observations.

    Args:
        start: Earlier observation
        end: Later observation (must strictly follow start)

    Returns:
        (price0_twap, price1_twap, time_window)

    Raises:
        CoralSwapError: VALIDATION if end does not strictly follow start
    """
    time_window = end.block_timestamp_last - start.block_timestamp_last
    if time_window <= 0:
        raise CoralSwapError.validation(
            "End observation must be after start observation",
            start_timestamp=start.block_timestamp_last,
            end_timestamp=end.block_timestamp_last,
        )
    price0_twap = safe_div(
        end.price0_cumulative_last - start.price0_cumulative_last, time_window
    )
    price1_twap = safe_div(
        end.price1_cumulative_last - start.price1_cumulative_last, time_window
    )
    return price0_twap, price1_twap, time_window


class ObservationBuffer:
    """Bounded FIFO of observations for a single pool; oldest evicted first."""

    def __init__(self, capacity: int = MAX_OBSERVATIONS):
        if capacity < 2:
            raise CoralSwapError.validation(
                "Observation capacity must be at least 2", capacity=capacity
            )
        self.capacity = capacity
        self._observations: deque = deque(maxlen=capacity)

    def append(self, observation: TWAPObservation) -> None:
        self._observations.append(observation)

    def oldest(self) -> Optional[TWAPObservation]:
        return self._observations[0] if self._observations else None

    def newest(self) -> Optional[TWAPObservation]:
        return self._observations[-1] if self._observations else None

    def snapshot(self) -> List[TWAPObservation]:
        return list(self._observations)

    def clear(self) -> None:
        self._observations.clear()

    def __len__(self) -> int:
        return len(self._observations)


class ObservationCache:
    """
    Per-pool observation buffers, created lazily on first append.

    Each pool's buffer is guarded by its own lock; a separate registry lock
    only covers creating and dropping entries. buffer_factory replaces the
    default FIFO buffer with another eviction policy.
    """

    def __init__(
        self,
        capacity: int = MAX_OBSERVATIONS,
        buffer_factory: Optional[Callable[[int], ObservationBuffer]] = None,
    ):
        if capacity < 2:
            raise CoralSwapError.validation(
                "Observation capacity must be at least 2", capacity=capacity
            )
        self.capacity = capacity
        self._buffer_factory = buffer_factory or ObservationBuffer
        self._buffers: Dict[str, ObservationBuffer] = {}
        self._locks: Dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def _entry(self, pool_id: str) -> Tuple[ObservationBuffer, threading.Lock]:
        with self._registry_lock:
            if pool_id not in self._buffers:
                self._buffers[pool_id] = self._buffer_factory(self.capacity)
                self._locks[pool_id] = threading.Lock()
                logger.debug(f"Created observation buffer for pool {pool_id}")
            return self._buffers[pool_id], self._locks[pool_id]

    def append(self, pool_id: str, observation: TWAPObservation) -> int:
        """Append an observation; returns the pool's buffer length afterwards."""
        buffer, lock = self._entry(pool_id)
        with lock:
            buffer.append(observation)
            return len(buffer)

    def window(
        self, pool_id: str
    ) -> Optional[Tuple[TWAPObservation, TWAPObservation]]:
        """Oldest and newest observations, or None with fewer than two."""
        with self._registry_lock:
            buffer = self._buffers.get(pool_id)
            lock = self._locks.get(pool_id)
        if buffer is None:
            return None
        with lock:
            if len(buffer) < 2:
                return None
            return buffer.oldest(), buffer.newest()

    def snapshot(self, pool_id: str) -> List[TWAPObservation]:
        with self._registry_lock:
            buffer = self._buffers.get(pool_id)
            lock = self._locks.get(pool_id)
        if buffer is None:
            return []
        with lock:
            return buffer.snapshot()

    def count(self, pool_id: str) -> int:
        with self._registry_lock:
            buffer = self._buffers.get(pool_id)
        return len(buffer) if buffer is not None else 0

    def clear(self, pool_id: Optional[str] = None) -> None:
        """Drop one pool's buffer, or every buffer when pool_id is None."""
        with self._registry_lock:
            if pool_id is None:
                self._buffers.clear()
                self._locks.clear()
            else:
                self._buffers.pop(pool_id, None)
                self._locks.pop(pool_id, None)


__all__ = [
    "compute_twap",
    "ObservationBuffer",
    "ObservationCache",
]

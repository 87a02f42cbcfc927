"""Process-local read cache for counter peeks."""

import time
from collections.abc import Callable
from dataclasses import dataclass

from docseq.core.modules.counter.models import CounterSet


@dataclass
class CachedCounterSnapshot:
    snapshot: CounterSet
    fetched_at: float
    ttl: float

    def is_fresh(self, at: float) -> bool:
        return at - self.fetched_at < self.ttl


class CounterCache:
    """Advisory snapshot of the CounterSet with a fixed time-to-live.

    Owned by one CounterService instance. Never consulted when handing out numbers.
    """

    def __init__(self, ttl_seconds: float = 60.0, clock: Callable[[], float] = time.monotonic) -> None:
        self._ttl = ttl_seconds
        self._clock = clock
        self._entry: CachedCounterSnapshot | None = None

    @property
    def ttl(self) -> float:
        return self._ttl

    def get(self) -> CounterSet | None:
        """Return the snapshot if still fresh, dropping it once expired."""
        if self._entry is None:
            return None
        if not self._entry.is_fresh(self._clock()):
            self._entry = None
            return None
        return self._entry.snapshot

    def put(self, snapshot: CounterSet) -> None:
        self._entry = CachedCounterSnapshot(snapshot=snapshot, fetched_at=self._clock(), ttl=self._ttl)

    def invalidate(self) -> None:
        self._entry = None

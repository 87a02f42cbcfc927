"""Shared pytest fixtures."""

import asyncio
from collections.abc import Callable

import pytest

from docseq.config import Config
from docseq.core.modules.counter.cache import CounterCache
from docseq.core.modules.counter.models import CounterPath, CounterSet
from docseq.core.modules.counter.retry import RetryConfig
from docseq.core.modules.counter.service import CounterService
from docseq.core.modules.counter.store import CounterStore, StoreConflictError
from docseq.errors import StoreUnavailableError


class FakeCounterStore(CounterStore):
    """In-memory store; a lock serializes read-modify-write like a transactional store."""

    def __init__(self, counter_set: CounterSet | None = None) -> None:
        self.counter_set = counter_set
        self.rmw_calls = 0
        self.writes = 0
        self.reads = 0
        self._lock = asyncio.Lock()

    async def read(self) -> CounterSet | None:
        self.reads += 1
        return self.counter_set.model_copy(deep=True) if self.counter_set else None

    async def write(self, counter_set: CounterSet) -> None:
        self.writes += 1
        self.counter_set = counter_set.model_copy(deep=True)

    async def read_modify_write(self, path: CounterPath, fn: Callable[[int | None], int]) -> int | None:
        self.rmw_calls += 1
        async with self._lock:
            current = self.counter_set.get_value(path) if self.counter_set else None
            await asyncio.sleep(0)  # Let concurrent callers pile up on the lock
            self.counter_set = (self.counter_set or CounterSet()).with_value(path, fn(current))
            self.writes += 1
            return current

    async def remove(self, path: CounterPath) -> bool:
        async with self._lock:
            if self.counter_set is None or self.counter_set.get_value(path) is None:
                return False
            section = self.counter_set.customer_counters if path.customer_id is not None else self.counter_set.global_counters
            del section[path.customer_id if path.customer_id is not None else path.counter_key]
            self.writes += 1
            return True


class SlowReadCounterStore(FakeCounterStore):
    """Whole-document reads take a while, so other writers can commit meanwhile."""

    async def read(self) -> CounterSet | None:
        snapshot = await super().read()
        await asyncio.sleep(0.01)
        return snapshot


class ConflictingCounterStore(FakeCounterStore):
    """Loses the first `conflicts` read-modify-write attempts to a phantom writer."""

    def __init__(self, conflicts: int) -> None:
        super().__init__()
        self.conflicts = conflicts

    async def read_modify_write(self, path: CounterPath, fn: Callable[[int | None], int]) -> int | None:
        if self.conflicts > 0:
            self.conflicts -= 1
            self.rmw_calls += 1
            raise StoreConflictError(path.field)
        return await super().read_modify_write(path, fn)


class UnavailableCounterStore(FakeCounterStore):
    """Every round trip fails as if MongoDB were down."""

    async def read(self) -> CounterSet | None:
        raise StoreUnavailableError

    async def read_modify_write(self, path: CounterPath, fn: Callable[[int | None], int]) -> int | None:
        self.rmw_calls += 1
        raise StoreUnavailableError


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


NO_WAIT_RETRY = RetryConfig(max_attempts=5, initial_wait=0, max_wait=0, jitter=0)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_store():
    return FakeCounterStore


@pytest.fixture
def store():
    return FakeCounterStore()


@pytest.fixture
def make_service(clock):
    """Build a CounterService around any store, with instant retries and a fake clock."""

    def _make(store: CounterStore, retry_config: RetryConfig = NO_WAIT_RETRY) -> CounterService:
        return CounterService(store, cache=CounterCache(ttl_seconds=60, clock=clock), retry_config=retry_config)

    return _make


@pytest.fixture
def service(store, make_service):
    return make_service(store)


@pytest.fixture
def slow_read_store():
    return SlowReadCounterStore()


@pytest.fixture
def conflicting_store():
    return ConflictingCounterStore


@pytest.fixture
def unavailable_store():
    return UnavailableCounterStore()


@pytest.fixture
def config():
    return Config(
        _env_file=None,
        database_url="mongodb://localhost:27017/docseq_test",
        retry_initial_wait=0,
        retry_max_wait=0,
        retry_jitter=0,
    )

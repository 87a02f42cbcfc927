from collections.abc import Callable, Mapping

import structlog

from docseq.core.modules.counter.cache import CounterCache
from docseq.core.modules.counter.models import CounterKey, CounterPath, CounterSet, default_global_counters
from docseq.core.modules.counter.resolver import resolve_counter_path, validate_counter_key, validate_customer_id
from docseq.core.modules.counter.retry import RetryConfig, get_counter_retrying
from docseq.core.modules.counter.store import CounterStore, StoreConflictError
from docseq.core.modules.numbering.models import DocumentNumber
from docseq.core.modules.numbering.utils import build_document_number, normalize_affix
from docseq.core.service import Service
from docseq.errors import AllocationConflictError, InvalidValueError, NotFoundError
from docseq.utils import now

logger = structlog.get_logger(__name__)


def _advance(current: int | None) -> int:
    # Stored value is the next number to hand out, absent means 1
    return (1 if current is None else current) + 1


def _require_positive(value: int, label: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidValueError(f"Counter '{label}' must be a positive integer, got {value!r}")
    return value


class CounterService(Service):
    """Allocates unique, gap-free document numbers per counter.

    Every increment goes through the store's read_modify_write with bounded
    retries. The cache only answers peeks and is never used for allocation.
    """

    def __init__(
        self,
        store: CounterStore,
        cache: CounterCache | None = None,
        retry_config: RetryConfig | None = None,
        width: int = 5,
    ) -> None:
        self._store = store
        self._cache = cache if cache is not None else CounterCache()
        self._retry_config = retry_config or RetryConfig()
        self._width = width

    async def on_start(self) -> None:
        logger.debug("counter_service_started", cache_ttl=self._cache.ttl, width=self._width)

    async def allocate_next(
        self, counter_key: str, customer_id: str | None = None, affix: str | None = None
    ) -> DocumentNumber:
        """Allocate the next number of a global or per-customer counter.

        The value read is handed out and its successor is stored. Raises
        AllocationConflictError when the retry budget is exhausted.
        """
        path = resolve_counter_path(counter_key, customer_id)
        affix = normalize_affix(affix)
        previous = await self._modify(path, _advance)
        self._cache.invalidate()

        sequence = 1 if previous is None else previous
        number = build_document_number(path.counter_key, sequence, self._width, affix)
        logger.debug("counter_allocated", field=path.field, sequence=sequence, number=number.formatted)
        return number

    async def peek_current(self, counter_key: str, customer_id: str | None = None) -> int:
        """Return the value the next allocation would get. Display only."""
        path = resolve_counter_path(counter_key, customer_id)
        snapshot = self._cache.get()
        if snapshot is None:
            snapshot = await self._store.read() or CounterSet()
            self._cache.put(snapshot)
        value = snapshot.get_value(path)
        return 1 if value is None else value

    async def preview_next(
        self, counter_key: str, customer_id: str | None = None, affix: str | None = None
    ) -> DocumentNumber:
        path = resolve_counter_path(counter_key, customer_id)
        sequence = await self.peek_current(path.counter_key, path.customer_id)
        return build_document_number(path.counter_key, sequence, self._width, affix)

    async def get_counters(self) -> CounterSet:
        """Read the full CounterSet from the store, bypassing the cache."""
        counter_set = await self._store.read() or CounterSet()
        self._cache.put(counter_set)
        return counter_set

    async def set_counters(
        self, global_counters: Mapping[str, int], customer_counters: Mapping[str, int]
    ) -> CounterSet:
        """Replace all counters with the given values.

        Well-known keys missing from `global_counters` are set to 1; customer
        counters not listed are dropped.
        """
        validated_global = default_global_counters()
        for key, value in global_counters.items():
            validated_global[validate_counter_key(key)] = _require_positive(value, key)
        validated_customer = {
            validate_customer_id(customer_id): _require_positive(value, customer_id)
            for customer_id, value in customer_counters.items()
        }

        counter_set = CounterSet(
            global_counters=validated_global, customer_counters=validated_customer, last_updated=now()
        )
        await self._store.write(counter_set)
        self._cache.invalidate()
        logger.warning(
            "counters_overridden",
            global_counters=validated_global,
            customer_counter_count=len(validated_customer),
        )
        return counter_set

    async def set_counter(self, counter_key: str, value: int, customer_id: str | None = None) -> CounterSet:
        """Overwrite a single counter. Concurrent allocations of other counters are kept."""
        path = resolve_counter_path(counter_key, customer_id)
        _require_positive(value, path.field)
        previous = await self._modify(path, lambda _: value)
        self._cache.invalidate()
        logger.warning("counter_overridden", field=path.field, previous=previous, value=value)
        return await self.get_counters()

    async def remove_customer_counter(self, customer_id: str) -> None:
        """Drop a customer's sub-sequence, its next allocation starts at 1 again."""
        path = resolve_counter_path(CounterKey.CO, customer_id)
        if not await self._store.remove(path):
            raise NotFoundError(f"Customer counter '{customer_id}' not found")
        self._cache.invalidate()
        logger.info("customer_counter_removed", customer_id=customer_id)

    async def reset_counters(self) -> CounterSet:
        """Set every global counter back to 1 and drop all customer counters.

        Destructive: numbers issued before the reset will be handed out again.
        """
        previous = await self._store.read()
        counter_set = CounterSet()
        await self._store.write(counter_set)
        self._cache.invalidate()
        logger.warning(
            "counters_reset",
            previous_global_counters=previous.global_counters if previous else None,
            previous_customer_counter_count=len(previous.customer_counters) if previous else 0,
        )
        return counter_set

    async def _modify(self, path: CounterPath, fn: Callable[[int | None], int]) -> int | None:
        previous: int | None = None
        try:
            async for attempt in get_counter_retrying(self._retry_config):
                with attempt:
                    previous = await self._store.read_modify_write(path, fn)
        except StoreConflictError as e:
            logger.warning("counter_allocation_conflict", field=path.field, attempts=self._retry_config.max_attempts)
            raise AllocationConflictError from e
        return previous

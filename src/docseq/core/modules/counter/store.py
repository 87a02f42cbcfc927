"""Durable storage of the CounterSet."""

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any

import structlog
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import ConnectionFailure, DuplicateKeyError

from docseq.core.modules.counter.models import CounterPath, CounterSet
from docseq.errors import StoreUnavailableError
from docseq.utils import now

logger = structlog.get_logger(__name__)


class StoreConflictError(Exception):
    """Raised when a read-modify-write lost against a concurrent writer."""


class CounterStore(ABC):
    """Storage contract the counter service relies on."""

    @abstractmethod
    async def read(self) -> CounterSet | None:
        """Return the stored CounterSet, or None if none was written yet."""

    @abstractmethod
    async def write(self, counter_set: CounterSet) -> None:
        """Replace the whole CounterSet. Not guarded against concurrent writers."""

    @abstractmethod
    async def read_modify_write(self, path: CounterPath, fn: Callable[[int | None], int]) -> int | None:
        """Atomically replace one counter with `fn(current)` and return `current`.

        Raises StoreConflictError if another writer changed the counter in between;
        in that case nothing was written.
        """

    @abstractmethod
    async def remove(self, path: CounterPath) -> bool:
        """Atomically delete one counter. Returns False if it did not exist."""


@contextmanager
def _store_errors() -> Iterator[None]:
    try:
        yield
    except ConnectionFailure as e:
        logger.warning("counter_store_unavailable", error=str(e))
        raise StoreUnavailableError from e


def _raw_value(doc: dict[str, Any], path: CounterPath) -> int | None:
    # Raw document value; pydantic defaults must never reach the CAS guard
    section = doc.get("customer_counters" if path.customer_id is not None else "global_counters") or {}
    value = section.get(path.customer_id if path.customer_id is not None else path.counter_key)
    return None if value is None else int(value)


class MongoCounterStore(CounterStore):
    """CounterSet kept in a single MongoDB document.

    Counter updates are compare-and-swap on the individual field, so unrelated
    counters never conflict with each other.
    """

    def __init__(self, collection: AsyncCollection[dict[str, Any]], record_id: str = "counters") -> None:
        self._collection = collection
        self._record_id = record_id

    async def read(self) -> CounterSet | None:
        with _store_errors():
            doc = await self._collection.find_one({"_id": self._record_id})
        if doc is None:
            return None
        return CounterSet.model_validate(doc)

    async def write(self, counter_set: CounterSet) -> None:
        with _store_errors():
            await self._collection.replace_one({"_id": self._record_id}, self._to_mongo(counter_set), upsert=True)

    async def read_modify_write(self, path: CounterPath, fn: Callable[[int | None], int]) -> int | None:
        with _store_errors():
            doc = await self._collection.find_one({"_id": self._record_id})
            if doc is None:
                counter_set = CounterSet()
                current = counter_set.get_value(path)
                try:
                    await self._collection.insert_one(self._to_mongo(counter_set.with_value(path, fn(current))))
                except DuplicateKeyError as e:
                    raise StoreConflictError(path.field) from e
                return current

            current = _raw_value(doc, path)
            guard: dict[str, Any] = {path.field: current} if current is not None else {path.field: {"$exists": False}}
            result = await self._collection.update_one(
                {"_id": self._record_id, **guard},
                {"$set": {path.field: fn(current), "last_updated": now()}},
            )
        if result.matched_count == 0:
            raise StoreConflictError(path.field)
        return current

    async def remove(self, path: CounterPath) -> bool:
        with _store_errors():
            result = await self._collection.update_one(
                {"_id": self._record_id, path.field: {"$exists": True}},
                {"$unset": {path.field: ""}, "$set": {"last_updated": now()}},
            )
        return result.matched_count > 0

    def _to_mongo(self, counter_set: CounterSet) -> dict[str, Any]:
        return {"_id": self._record_id, **counter_set.model_dump()}

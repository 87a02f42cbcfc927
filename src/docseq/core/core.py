from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any
from urllib.parse import urlparse

from pymongo import AsyncMongoClient

from docseq.config import Config
from docseq.core.modules.counter.cache import CounterCache
from docseq.core.modules.counter.retry import RetryConfig
from docseq.core.modules.counter.service import CounterService
from docseq.core.modules.counter.store import CounterStore, MongoCounterStore
from docseq.core.service import Service


class Services:
    """Service registry wired from config and a counter store."""

    counter: CounterService

    def __init__(self, config: Config, store: CounterStore) -> None:
        self.counter = CounterService(
            store,
            cache=CounterCache(ttl_seconds=config.cache_ttl_seconds),
            retry_config=RetryConfig.from_config(config),
            width=config.document_number_width,
        )
        # Order matters for startup
        self._services: list[Service] = [self.counter]

    async def start_all(self) -> None:
        for service in self._services:
            await service.on_start()

    async def stop_all(self) -> None:
        for service in reversed(self._services):
            await service.on_stop()


class Core:
    """Container providing config, the counter store, and all service instances."""

    config: Config
    mongo_client: AsyncMongoClient[dict[str, Any]] | None
    store: CounterStore
    services: Services

    def __init__(self, config: Config, store: CounterStore | None = None) -> None:
        """Initialize core; without an explicit store, counters live in MongoDB."""
        self.config = config
        self.mongo_client = None
        if store is None:
            self.mongo_client = AsyncMongoClient(config.database_url, tz_aware=True)
            database = self.mongo_client.get_database(urlparse(config.database_url).path[1:] or None)
            store = MongoCounterStore(database.get_collection("counters"), config.counters_record_id)
        self.store = store
        self.services = Services(config, store)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Manage application lifecycle - startup and shutdown."""
        await self.on_start()
        try:
            yield
        finally:
            await self.on_stop()

    async def on_start(self) -> None:
        await self.services.start_all()

    async def on_stop(self) -> None:
        """Stop services and close the MongoDB connection if we own one."""
        await self.services.stop_all()
        if self.mongo_client is not None:
            await self.mongo_client.aclose()

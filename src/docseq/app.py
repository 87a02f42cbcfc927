from collections.abc import AsyncGenerator, Mapping
from contextlib import asynccontextmanager

from docseq.config import Config
from docseq.core.core import Core
from docseq.core.modules.counter.models import CounterSet
from docseq.core.modules.counter.store import CounterStore
from docseq.core.modules.numbering.models import DocumentNumber
from docseq.core.modules.numbering.utils import format_document_number, parse_document_number


class App:
    """Facade for all application operations, delegates to Core services."""

    def __init__(self, config: Config, store: CounterStore | None = None) -> None:
        self._core = Core(config, store)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    async def allocate_document_number(
        self, counter_key: str, customer_id: str | None = None, affix: str | None = None
    ) -> DocumentNumber:
        """Allocate the next document number for a counter."""
        return await self._core.services.counter.allocate_next(counter_key, customer_id, affix)

    async def peek_next_value(self, counter_key: str, customer_id: str | None = None) -> int:
        return await self._core.services.counter.peek_current(counter_key, customer_id)

    async def preview_document_number(
        self, counter_key: str, customer_id: str | None = None, affix: str | None = None
    ) -> DocumentNumber:
        return await self._core.services.counter.preview_next(counter_key, customer_id, affix)

    async def get_counters(self) -> CounterSet:
        return await self._core.services.counter.get_counters()

    async def set_counters(self, global_counters: Mapping[str, int], customer_counters: Mapping[str, int]) -> CounterSet:
        """Replace all counters (administrative override)."""
        return await self._core.services.counter.set_counters(global_counters, customer_counters)

    async def set_counter(self, counter_key: str, value: int, customer_id: str | None = None) -> CounterSet:
        return await self._core.services.counter.set_counter(counter_key, value, customer_id)

    async def remove_customer_counter(self, customer_id: str) -> None:
        await self._core.services.counter.remove_customer_counter(customer_id)

    async def reset_counters(self) -> CounterSet:
        """Reset all counters to 1 (destructive)."""
        return await self._core.services.counter.reset_counters()

    def format_document_number(self, prefix: str, sequence: int, width: int | None = None, affix: str | None = None) -> str:
        return format_document_number(prefix, sequence, width if width is not None else self._core.config.document_number_width, affix)

    def parse_document_number(self, value: str) -> DocumentNumber:
        return parse_document_number(value)

    def get_version(self) -> dict[str, str]:
        """Get build and version information."""
        config = self._core.config
        return {
            "git_commit_hash": config.git_commit_hash,
            "git_commit_date": config.git_commit_date,
            "build_time": config.build_time,
        }

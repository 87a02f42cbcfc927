"""Counters for sequential document numbering."""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, PositiveInt

from docseq.utils import now


class CounterKey(StrEnum):
    """Well-known global counters."""

    MO = "MO"  # Manufacturing orders
    PO = "PO"  # Purchase orders
    CO = "CO"  # Customer orders
    LOT = "LOT"  # Inventory lots/batches


def default_global_counters() -> dict[str, int]:
    return {key.value: 1 for key in CounterKey}


class CounterPath(BaseModel):
    """Location of a single counter inside the CounterSet."""

    model_config = ConfigDict(frozen=True)

    counter_key: str
    customer_id: str | None = None

    @property
    def field(self) -> str:
        """Dotted MongoDB field path of the counter."""
        if self.customer_id is not None:
            return f"customer_counters.{self.customer_id}"
        return f"global_counters.{self.counter_key}"


class CounterSet(BaseModel):
    """All sequence counters of the system, stored as one document.

    Each value is the next number to hand out, so absent counters read as 1.
    """

    global_counters: dict[str, PositiveInt] = Field(default_factory=default_global_counters)
    customer_counters: dict[str, PositiveInt] = Field(default_factory=dict)
    last_updated: datetime = Field(default_factory=now)

    def get_value(self, path: CounterPath) -> int | None:
        if path.customer_id is not None:
            return self.customer_counters.get(path.customer_id)
        return self.global_counters.get(path.counter_key)

    def with_value(self, path: CounterPath, value: int) -> "CounterSet":
        """Return a copy with one counter replaced."""
        updated = self.model_copy(deep=True)
        if path.customer_id is not None:
            updated.customer_counters[path.customer_id] = value
        else:
            updated.global_counters[path.counter_key] = value
        updated.last_updated = now()
        return updated

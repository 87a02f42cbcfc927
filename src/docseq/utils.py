import re
from datetime import UTC, datetime

# Letters, "_" and "-" only: a digit would make the prefix/sequence split ambiguous
COUNTER_KEY_RE = re.compile(r"^[A-Za-z][A-Za-z_-]{0,15}$")
# Must be usable as a MongoDB field name
CUSTOMER_ID_RE = re.compile(r"^[^.$\s][^.\s]{0,127}$")
AFFIX_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_-]*$")


def is_counter_key(value: str) -> bool:
    return bool(COUNTER_KEY_RE.fullmatch(value))


def is_customer_id(value: str) -> bool:
    return bool(CUSTOMER_ID_RE.fullmatch(value))


def is_affix(value: str) -> bool:
    return bool(AFFIX_RE.fullmatch(value))


def now() -> datetime:
    return datetime.now(UTC)

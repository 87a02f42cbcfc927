"""Resolution of (counter key, customer id) pairs to counter paths."""

from docseq import utils
from docseq.core.modules.counter.models import CounterPath
from docseq.errors import InvalidKeyError


def validate_counter_key(counter_key: str) -> str:
    if not isinstance(counter_key, str) or not utils.is_counter_key(counter_key):
        raise InvalidKeyError(f"Invalid counter key: '{counter_key}'")
    return str(counter_key)


def validate_customer_id(customer_id: str) -> str:
    if not isinstance(customer_id, str) or not utils.is_customer_id(customer_id):
        raise InvalidKeyError(f"Invalid customer id: '{customer_id}'")
    return str(customer_id)


def resolve_counter_path(counter_key: str, customer_id: str | None = None) -> CounterPath:
    """Resolve to the global counter, or to the customer's own sub-sequence.

    Customer counters are created on first use like global ones.
    """
    key = validate_counter_key(counter_key)
    if customer_id is None:
        return CounterPath(counter_key=key)
    return CounterPath(counter_key=key, customer_id=validate_customer_id(customer_id))

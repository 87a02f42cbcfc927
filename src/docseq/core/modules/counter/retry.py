"""Bounded retry policy for counter writes using tenacity."""

from dataclasses import dataclass

import structlog
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
    wait_random,
)

from docseq.config import Config
from docseq.core.modules.counter.store import StoreConflictError
from docseq.errors import StoreUnavailableError

logger = structlog.get_logger(__name__)


@dataclass
class RetryConfig:
    """Configuration for counter write retries with jittered exponential backoff."""

    max_attempts: int = 5
    initial_wait: float = 0.05
    max_wait: float = 1.0
    jitter: float = 0.05

    @classmethod
    def from_config(cls, config: Config) -> "RetryConfig":
        return cls(
            max_attempts=config.retry_max_attempts,
            initial_wait=config.retry_initial_wait,
            max_wait=config.retry_max_wait,
            jitter=config.retry_jitter,
        )


def _log_retry(retry_state: RetryCallState) -> None:
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        "counter_write_retry",
        attempt=retry_state.attempt_number,
        error_type=type(exc).__name__,
        error=str(exc),
    )


def get_counter_retrying(config: RetryConfig | None = None) -> AsyncRetrying:
    """Get configured AsyncRetrying for store conflicts and outages.

    Usage:
        async for attempt in get_counter_retrying():
            with attempt:
                previous = await store.read_modify_write(path, fn)

    The last error is re-raised once attempts are exhausted.
    """
    cfg = config or RetryConfig()
    return AsyncRetrying(
        retry=retry_if_exception_type((StoreConflictError, StoreUnavailableError)),
        stop=stop_after_attempt(cfg.max_attempts),
        wait=wait_exponential(multiplier=cfg.initial_wait, max=cfg.max_wait) + wait_random(0, cfg.jitter),
        before_sleep=_log_retry,
        reraise=True,
    )

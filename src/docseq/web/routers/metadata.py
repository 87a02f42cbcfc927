"""Metadata endpoints for exposing system information."""

from fastapi import APIRouter

from docseq.core.modules.counter.models import CounterKey
from docseq.web.deps import AppDep

router = APIRouter(tags=["metadata"])


@router.get(
    "/metadata/counter-keys",
    summary="Get well-known counter keys",
    description="Returns the global counters that always exist. Other keys are created on first allocation.",
    operation_id="getCounterKeys",
)
async def get_counter_keys() -> list[CounterKey]:
    return list(CounterKey)


@router.get(
    "/metadata/version",
    summary="Get version information",
    description="Returns build and version information including git commit hash, commit date, and build time.",
    operation_id="getVersion",
)
async def get_version(app: AppDep) -> dict[str, str]:
    return app.get_version()

from typing import Annotated

from fastapi import APIRouter, Query
from pydantic import BaseModel, Field

from docseq.core.modules.counter.models import CounterSet
from docseq.core.modules.numbering.models import DocumentNumber
from docseq.web.deps import AppDep
from docseq.web.openapi import ErrorResponse

router: APIRouter = APIRouter(tags=["counters"])


class AllocateRequest(BaseModel):
    """Request to allocate a document number."""

    customer_id: str | None = Field(None, description="Allocate from this customer's own sequence")
    affix: str | None = Field(None, description="Customer order affix appended after the number, e.g. ACME")

    model_config = {"json_schema_extra": {"examples": [{}, {"customer_id": "cust-17", "affix": "ACME"}]}}


class NextValueResponse(BaseModel):
    """The value the next allocation would receive (advisory)."""

    counter_key: str
    customer_id: str | None = None
    next_value: int
    preview: str


class SetCountersRequest(BaseModel):
    """Complete replacement of all counters."""

    global_counters: dict[str, int] = Field(default_factory=dict, description="Counter key to next value")
    customer_counters: dict[str, int] = Field(default_factory=dict, description="Customer id to next value")

    model_config = {
        "json_schema_extra": {
            "examples": [{"global_counters": {"MO": 42, "PO": 7, "CO": 120, "LOT": 901}, "customer_counters": {}}]
        }
    }


class SetCounterRequest(BaseModel):
    """New next value for a single counter."""

    value: int = Field(..., description="Next value to hand out")
    customer_id: str | None = None


@router.post(
    "/counters/{counter_key}/allocate",
    summary="Allocate document number",
    description=(
        "Allocate the next unique number of a counter and return it formatted. "
        "Concurrent callers never receive the same number."
    ),
    operation_id="allocateDocumentNumber",
    status_code=201,
    responses={
        201: {"description": "Number allocated"},
        400: {"model": ErrorResponse, "description": "Invalid counter key, customer id or affix"},
        409: {"model": ErrorResponse, "description": "Too much contention, try again"},
        503: {"model": ErrorResponse, "description": "Counter store unavailable"},
    },
)
async def allocate_document_number(
    counter_key: str, app: AppDep, request: AllocateRequest | None = None
) -> DocumentNumber:
    request = request or AllocateRequest()
    return await app.allocate_document_number(counter_key, request.customer_id, request.affix)


@router.get(
    "/counters/{counter_key}/next",
    summary="Peek next value",
    description="Return the value the next allocation would get. For display only, never use it on a document.",
    operation_id="peekNextValue",
    responses={
        200: {"description": "Next value"},
        400: {"model": ErrorResponse, "description": "Invalid counter key, customer id or affix"},
    },
)
async def peek_next_value(
    counter_key: str,
    app: AppDep,
    customer_id: Annotated[str | None, Query(description="Customer sequence to peek")] = None,
    affix: Annotated[str | None, Query(description="Customer affix to show in the preview")] = None,
) -> NextValueResponse:
    preview = await app.preview_document_number(counter_key, customer_id, affix)
    return NextValueResponse(
        counter_key=counter_key, customer_id=customer_id, next_value=preview.sequence, preview=preview.formatted
    )


@router.get(
    "/counters",
    summary="Get all counters",
    operation_id="getCounters",
)
async def get_counters(app: AppDep) -> CounterSet:
    return await app.get_counters()


@router.put(
    "/counters",
    summary="Replace all counters",
    description=(
        "Administrative override. Well-known counters that are omitted are set to 1 "
        "and customer counters that are omitted are removed."
    ),
    operation_id="setCounters",
    responses={
        200: {"description": "Counters replaced"},
        400: {"model": ErrorResponse, "description": "Invalid key or non-positive value"},
    },
)
async def set_counters(request: SetCountersRequest, app: AppDep) -> CounterSet:
    return await app.set_counters(request.global_counters, request.customer_counters)


@router.post(
    "/counters/reset",
    summary="Reset all counters",
    description="Set all global counters to 1 and remove customer counters. Previously issued numbers will repeat.",
    operation_id="resetCounters",
)
async def reset_counters(app: AppDep) -> CounterSet:
    return await app.reset_counters()


@router.put(
    "/counters/{counter_key}",
    summary="Set one counter",
    operation_id="setCounter",
    responses={
        200: {"description": "Counter updated"},
        400: {"model": ErrorResponse, "description": "Invalid key or value"},
    },
)
async def set_counter(counter_key: str, request: SetCounterRequest, app: AppDep) -> CounterSet:
    return await app.set_counter(counter_key, request.value, request.customer_id)


@router.delete(
    "/customer-counters/{customer_id}",
    summary="Remove customer counter",
    operation_id="removeCustomerCounter",
    status_code=204,
    responses={
        204: {"description": "Customer counter removed"},
        404: {"model": ErrorResponse, "description": "Customer has no counter"},
    },
)
async def remove_customer_counter(customer_id: str, app: AppDep) -> None:
    await app.remove_customer_counter(customer_id)

from typing import Annotated

from fastapi import APIRouter, Query
from pydantic import BaseModel

from docseq.core.modules.numbering.models import DocumentNumber
from docseq.web.deps import AppDep
from docseq.web.openapi import ErrorResponse

router: APIRouter = APIRouter(tags=["document-numbers"])


class FormattedResponse(BaseModel):
    formatted: str


@router.get(
    "/document-numbers/parse",
    summary="Parse document number",
    description="Split a document number such as MO00042 into prefix, sequence and affix.",
    operation_id="parseDocumentNumber",
    responses={
        200: {"description": "Parsed document number"},
        400: {"model": ErrorResponse, "description": "Malformed document number"},
    },
)
async def parse_document_number(value: Annotated[str, Query(description="Document number")], app: AppDep) -> DocumentNumber:
    return app.parse_document_number(value)


@router.get(
    "/document-numbers/format",
    summary="Format document number",
    operation_id="formatDocumentNumber",
    responses={
        200: {"description": "Formatted document number"},
        400: {"model": ErrorResponse, "description": "Invalid prefix, sequence, width or affix"},
    },
)
async def format_document_number(
    prefix: str,
    sequence: int,
    app: AppDep,
    width: int | None = None,
    affix: str | None = None,
) -> FormattedResponse:
    return FormattedResponse(formatted=app.format_document_number(prefix, sequence, width, affix))

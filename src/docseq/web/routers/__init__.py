from docseq.web.routers.counters import router as counters_router
from docseq.web.routers.document_numbers import router as document_numbers_router
from docseq.web.routers.metadata import router as metadata_router

__all__ = [
    "counters_router",
    "document_numbers_router",
    "metadata_router",
]

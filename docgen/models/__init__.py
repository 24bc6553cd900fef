"""
Data models for the document service.

Contains Pydantic models for request/response validation and serialization.
"""

from docgen.models.document_models import (
    Alignment,
    CellKind,
    CellStyle,
    DelimitedRequest,
    ErrorResponse,
    GeneratedDocument,
    GenerationRequest,
    HealthResponse,
    SaveDocumentResponse,
    SpreadsheetRequest,
    StyleSet,
)

__all__ = [
    "Alignment",
    "CellKind",
    "CellStyle",
    "StyleSet",
    "GenerationRequest",
    "DelimitedRequest",
    "SpreadsheetRequest",
    "GeneratedDocument",
    "SaveDocumentResponse",
    "HealthResponse",
    "ErrorResponse",
]

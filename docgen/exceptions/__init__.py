"""
Custom exceptions for the document service.

Provides type-safe, descriptive exceptions for error handling throughout
the application.
"""

from docgen.exceptions.document_exceptions import (
    AuthenticationError,
    DocumentServiceError,
    EmptyDataError,
    EmptyHeadersError,
    InvalidFormDataError,
    InvalidSheetNameError,
    RowLengthError,
    SerializationError,
    StructureError,
    StyleError,
    WriteError,
)
from docgen.exceptions.document_exceptions import (
    PermissionError as DocumentPermissionError,
)

__all__ = [
    "DocumentServiceError",
    "StructureError",
    "EmptyHeadersError",
    "EmptyDataError",
    "RowLengthError",
    "InvalidSheetNameError",
    "StyleError",
    "WriteError",
    "SerializationError",
    "InvalidFormDataError",
    "AuthenticationError",
    "DocumentPermissionError",
]

"""
Custom exceptions for document generation.

This module defines a hierarchy of exceptions for the failure modes of
CSV and XLSX generation. All exceptions inherit from DocumentServiceError
so transports can catch every generation failure with a single clause.

Example:
    try:
        service.generate_csv(request)
    except RowLengthError as e:
        logger.error("Row %d is ragged", e.row_number)
    except DocumentServiceError as e:
        logger.error("Generation failed: %s", e)
"""


class DocumentServiceError(Exception):
    """
    Base exception for all document service errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code for API responses.
        details: Optional additional context about the error.
    """

    def __init__(
        self,
        message: str,
        error_code: str = "DOCUMENT_ERROR",
        details: dict | None = None,
    ) -> None:
        """
        Initialize the DocumentServiceError.

        Args:
            message: Human-readable error description.
            error_code: Machine-readable error code for API responses.
            details: Optional additional context about the error.
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def to_dict(self) -> dict:
        """
        Convert exception to a dictionary for API responses.

        Returns:
            Dictionary containing error_code, message, and details.
        """
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class StructureError(DocumentServiceError):
    """
    Raised when the headers or rows of a request are not a valid table.

    Subclasses identify the specific structural problem.
    """


class EmptyHeadersError(StructureError):
    """Raised when a request carries no headers."""

    def __init__(self) -> None:
        super().__init__(
            message="headers cannot be empty",
            error_code="EMPTY_HEADERS",
        )


class EmptyDataError(StructureError):
    """Raised when a request carries no data rows."""

    def __init__(self) -> None:
        super().__init__(
            message="data cannot be empty",
            error_code="EMPTY_DATA",
        )


class RowLengthError(StructureError):
    """
    Raised when a data row does not have one value per header.

    Attributes:
        row_number: 1-based index of the offending data row.
        expected: Number of headers.
        actual: Number of values in the row.
    """

    def __init__(self, row_number: int, expected: int, actual: int) -> None:
        """
        Initialize the RowLengthError.

        Args:
            row_number: 1-based index of the offending data row.
            expected: Number of headers.
            actual: Number of values in the row.
        """
        self.row_number = row_number
        self.expected = expected
        self.actual = actual

        super().__init__(
            message=f"row {row_number} has {actual} columns, expected {expected}",
            error_code="ROW_LENGTH_MISMATCH",
            details={
                "row_number": row_number,
                "expected": expected,
                "actual": actual,
            },
        )


class InvalidSheetNameError(DocumentServiceError):
    """
    Raised when the workbook engine refuses a sheet name.

    Attributes:
        sheet_name: The rejected sheet name.
        reason: Why the engine rejected it.
    """

    def __init__(self, sheet_name: str, reason: str | None = None) -> None:
        self.sheet_name = sheet_name
        self.reason = reason

        message = f"Invalid sheet name: {sheet_name}"
        if reason:
            message += f" - {reason}"

        super().__init__(
            message=message,
            error_code="INVALID_SHEET_NAME",
            details={
                "sheet_name": sheet_name,
                "reason": reason,
            },
        )


class StyleError(DocumentServiceError):
    """
    Raised when a cell style cannot be compiled by the workbook engine.

    Attributes:
        target: Which style failed ("header" or "data").
        reason: Specific reason for the failure.
    """

    def __init__(self, target: str, reason: str | None = None) -> None:
        """
        Initialize the StyleError.

        Args:
            target: Which style failed ("header" or "data").
            reason: Specific reason for the failure.
        """
        self.target = target
        self.reason = reason

        message = f"Failed to create {target} style"
        if reason:
            message += f": {reason}"

        super().__init__(
            message=message,
            error_code="STYLE_ERROR",
            details={
                "target": target,
                "reason": reason,
            },
        )


class WriteError(DocumentServiceError):
    """
    Raised when writing to the output sink fails.

    Attributes:
        operation: The specific write operation that failed.
        reason: Specific reason for the write failure.
        row_number: 1-based data row being written, if any.
    """

    def __init__(
        self,
        operation: str = "write",
        reason: str | None = None,
        row_number: int | None = None,
    ) -> None:
        """
        Initialize the WriteError.

        Args:
            operation: The specific write operation that failed.
            reason: Specific reason for the write failure.
            row_number: 1-based data row being written, if any.
        """
        self.operation = operation
        self.reason = reason
        self.row_number = row_number

        if row_number is not None:
            message = f"Failed to {operation} row {row_number}"
        else:
            message = f"Failed to {operation}"
        if reason:
            message += f": {reason}"

        super().__init__(
            message=message,
            error_code="WRITE_ERROR",
            details={
                "operation": operation,
                "reason": reason,
                "row_number": row_number,
            },
        )


class SerializationError(DocumentServiceError):
    """Raised when the finished workbook cannot be serialized."""

    def __init__(self, reason: str | None = None) -> None:
        self.reason = reason

        message = "Failed to serialize workbook"
        if reason:
            message += f": {reason}"

        super().__init__(
            message=message,
            error_code="SERIALIZATION_ERROR",
            details={"reason": reason},
        )


class InvalidFormDataError(DocumentServiceError):
    """
    Raised when a form field does not hold the expected JSON document.

    Attributes:
        field: Name of the offending form field.
        reason: Why decoding failed.
    """

    def __init__(self, field: str, reason: str | None = None) -> None:
        self.field = field
        self.reason = reason

        super().__init__(
            message=f"Invalid {field} format",
            error_code=f"INVALID_{field.upper()}_FORMAT",
            details={
                "field": field,
                "reason": reason,
            },
        )


class AuthenticationError(DocumentServiceError):
    """Raised when a request does not carry the configured API key."""

    def __init__(self) -> None:
        super().__init__(
            message="Unauthorized",
            error_code="UNAUTHORIZED",
        )


class PermissionError(DocumentServiceError):
    """
    Raised when saving a document is denied due to permissions.

    Attributes:
        file_path: Path to the file with permission issues.
        operation: The operation that was denied.
    """

    def __init__(
        self,
        file_path: str,
        operation: str = "write",
    ) -> None:
        """
        Initialize the PermissionError.

        Args:
            file_path: Path to the file with permission issues.
            operation: The operation that was denied.
        """
        self.file_path = file_path
        self.operation = operation

        super().__init__(
            message=f"Permission denied for {operation} on: {file_path}",
            error_code="PERMISSION_DENIED",
            details={
                "file_path": file_path,
                "operation": operation,
            },
        )

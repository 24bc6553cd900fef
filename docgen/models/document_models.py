"""
Pydantic models for document generation.

This module contains the request and response models used by the service
layer and by both transports (FastAPI and MCP). A request is built fresh
for every generation call, defaulted, validated and consumed by exactly
one generator.

All models use Pydantic v2 for validation, serialization, and
JSON Schema generation for OpenAPI documentation.
"""

import logging
from enum import Enum
from typing import Any, ClassVar

from pydantic import BaseModel, Field, field_validator

from docgen.exceptions.document_exceptions import (
    EmptyDataError,
    EmptyHeadersError,
    RowLengthError,
)

logger = logging.getLogger(__name__)

DEFAULT_DELIMITER = ","
DEFAULT_ENCODING = "UTF-8"
DEFAULT_CSV_FILENAME = "export.csv"
DEFAULT_EXCEL_FILENAME = "export.xlsx"
DEFAULT_SHEET_NAME = "Sheet1"

CSV_MEDIA_TYPE = "text/csv"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


class CellKind(str, Enum):
    """
    Closed set of cell value kinds understood by the generators.

    Every untyped cell value is classified into exactly one kind before
    it is serialized; anything unrecognized is OTHER.
    """

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    ABSENT = "absent"
    OTHER = "other"


class Alignment(str, Enum):
    """Horizontal alignment values accepted in a CellStyle."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class CellStyle(BaseModel):
    """
    Visual style applied uniformly to a range of cells.

    Attributes:
        bold: Whether the font is bold.
        font_size: Font size in points. Unset when None.
        font_color: Font color, "#RRGGBB", "RRGGBB" or a color name.
        background: Solid fill color, same notation as font_color.
        alignment: Horizontal alignment. Unrecognized values are ignored.
    """

    bold: bool = Field(
        default=False,
        description="Whether the font is bold",
    )
    font_size: float | None = Field(
        default=None,
        gt=0,
        description="Font size in points",
    )
    font_color: str | None = Field(
        default=None,
        description="Font color (e.g., '#FF0000')",
    )
    background: str | None = Field(
        default=None,
        description="Background fill color (e.g., '#FFFF00')",
    )
    alignment: str | None = Field(
        default=None,
        description="Horizontal alignment: left, center or right",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"bold": True, "font_size": 12, "background": "#DDEBF7"},
                {"alignment": "center", "font_color": "#333333"},
            ]
        }
    }

    @field_validator("font_size", mode="before")
    @classmethod
    def zero_font_size_is_unset(cls, v: Any) -> Any:
        """Treat a font size of 0 as unset."""
        if v == 0:
            return None
        return v

    @property
    def horizontal_alignment(self) -> Alignment | None:
        """The recognized alignment, or None if unset or unrecognized."""
        if not self.alignment:
            return None
        try:
            return Alignment(self.alignment.strip().lower())
        except ValueError:
            return None


class StyleSet(BaseModel):
    """
    Styles for the header row and the data rectangle of a sheet.

    Attributes:
        header_style: Style applied to every header cell.
        data_style: Style applied to every data cell.
    """

    header_style: CellStyle | None = Field(
        default=None,
        description="Style applied to the header row",
    )
    data_style: CellStyle | None = Field(
        default=None,
        description="Style applied to all data cells",
    )


class GenerationRequest(BaseModel):
    """
    Base request shared by the CSV and XLSX generators.

    Attributes:
        headers: Column headers. Cannot be reassigned once set.
        rows: Data rows; each must have one value per header.
        filename: Download filename. Defaulted per format.
    """

    DEFAULT_FILENAME: ClassVar[str] = DEFAULT_CSV_FILENAME

    headers: tuple[str, ...] = Field(
        frozen=True,
        description="Ordered list of column headers",
    )
    rows: list[list[Any]] = Field(
        description="List of rows, where each row is a list of values",
    )
    filename: str | None = Field(
        default=None,
        description="Filename for the generated document",
    )

    def apply_defaults(self) -> None:
        """Fill unset optional fields with their default values."""
        if not self.filename:
            self.filename = self.DEFAULT_FILENAME

    def validate_structure(self) -> None:
        """
        Check that the request describes a non-empty table.

        Raises:
            EmptyHeadersError: If there are no headers.
            EmptyDataError: If there are no data rows.
        """
        if len(self.headers) == 0:
            raise EmptyHeadersError()
        if len(self.rows) == 0:
            raise EmptyDataError()

    def prepare(self) -> None:
        """Apply defaults, then validate the structure."""
        self.apply_defaults()
        self.validate_structure()

    def check_row(self, index: int, row: list[Any]) -> None:
        """
        Check that a data row has exactly one value per header.

        Args:
            index: 0-based index of the row in ``rows``.
            row: The row to check.

        Raises:
            RowLengthError: If the row length differs from the header count.
        """
        if len(row) != len(self.headers):
            raise RowLengthError(
                row_number=index + 1,
                expected=len(self.headers),
                actual=len(row),
            )


class DelimitedRequest(GenerationRequest):
    """
    Request for a delimited text (CSV) document.

    Attributes:
        delimiter: Single field separator character. Defaults to ",".
        encoding: Encoding label. Informational only; output is UTF-8.
    """

    DEFAULT_FILENAME: ClassVar[str] = DEFAULT_CSV_FILENAME

    delimiter: str | None = Field(
        default=None,
        description="Single-character field delimiter. Defaults to ','.",
    )
    encoding: str | None = Field(
        default=None,
        description="Encoding label. Defaults to 'UTF-8'.",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "headers": ["Name", "Age"],
                    "rows": [["Alice", 30], ["Bob", 25]],
                    "delimiter": ";",
                }
            ]
        }
    }

    @field_validator("delimiter")
    @classmethod
    def single_character_delimiter(cls, v: str | None) -> str | None:
        """Fall back to the default delimiter when more than one character is given."""
        if v is not None and len(v) > 1:
            logger.warning(
                "Ignoring multi-character delimiter %r, using %r",
                v,
                DEFAULT_DELIMITER,
            )
            return DEFAULT_DELIMITER
        return v

    def apply_defaults(self) -> None:
        super().apply_defaults()
        if not self.delimiter:
            self.delimiter = DEFAULT_DELIMITER
        if not self.encoding:
            self.encoding = DEFAULT_ENCODING


class SpreadsheetRequest(GenerationRequest):
    """
    Request for a single-sheet XLSX document.

    Attributes:
        sheet_name: Name of the only sheet. Defaults to "Sheet1".
        auto_size: Whether to give every column a fixed readable width.
        styles: Optional header and data styles.
    """

    DEFAULT_FILENAME: ClassVar[str] = DEFAULT_EXCEL_FILENAME

    sheet_name: str | None = Field(
        default=None,
        description="Name of the sheet. Defaults to 'Sheet1'.",
    )
    auto_size: bool = Field(
        default=False,
        description="Whether to set a fixed width on every column",
    )
    styles: StyleSet | None = Field(
        default=None,
        description="Optional header and data styles",
    )

    def apply_defaults(self) -> None:
        super().apply_defaults()
        if not self.sheet_name:
            self.sheet_name = DEFAULT_SHEET_NAME


class GeneratedDocument(BaseModel):
    """
    A finished document held in memory.

    Attributes:
        content: The document bytes.
        filename: Sanitized download filename.
        media_type: MIME type of the document.
        rows_written: Number of data rows written (header excluded).
        size_bytes: Size of the content in bytes.
        processing_time_ms: Time taken to generate the document.
    """

    content: bytes = Field(
        description="The document bytes",
    )
    filename: str = Field(
        description="Sanitized download filename",
    )
    media_type: str = Field(
        description="MIME type of the document",
    )
    rows_written: int = Field(
        ge=0,
        description="Number of data rows written",
    )
    size_bytes: int = Field(
        ge=0,
        description="Size of the document in bytes",
    )
    processing_time_ms: float | None = Field(
        default=None,
        ge=0,
        description="Time taken to generate the document in milliseconds",
    )


class SaveDocumentResponse(BaseModel):
    """
    Result of saving a generated document to disk.

    Attributes:
        success: Whether the document was saved.
        file_path: Absolute path of the written file.
        rows_written: Number of data rows written.
        file_size_bytes: Size of the written file in bytes.
        processing_time_ms: Time taken to generate the document.
    """

    success: bool = Field(
        default=True,
        description="Whether the document was saved",
    )
    file_path: str = Field(
        description="Absolute path of the written file",
    )
    rows_written: int = Field(
        ge=0,
        description="Number of data rows written",
    )
    file_size_bytes: int = Field(
        ge=0,
        description="Size of the written file in bytes",
    )
    processing_time_ms: float | None = Field(
        default=None,
        ge=0,
        description="Time taken to generate the document in milliseconds",
    )


class HealthResponse(BaseModel):
    """Health check payload."""

    status: str = "ok"
    services: dict[str, str] = Field(default_factory=dict)
    version: str
    timestamp: str


class ErrorResponse(BaseModel):
    """
    Standard error response model for the API.

    Attributes:
        success: Always False for error responses.
        error_code: Machine-readable error code.
        message: Human-readable error description.
        details: Additional error context.
    """

    success: bool = Field(
        default=False,
        description="Always False for error responses",
    )
    error_code: str = Field(
        description="Machine-readable error code",
    )
    message: str = Field(
        description="Human-readable error description",
    )
    details: dict | None = Field(
        default=None,
        description="Additional error context",
    )

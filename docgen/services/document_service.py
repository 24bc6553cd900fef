"""
Core document service layer.

This module provides the DocumentService class which encapsulates CSV and
XLSX generation and serves as the single entry point for both FastAPI and
MCP interfaces. It implements the Service Layer pattern to keep the
generators independent of the transports.

The service coordinates between the CsvAdapter and the XlsxWriterAdapter,
sanitizes names before they leave or enter the engine, and measures each
generation.

Example:
    service = DocumentService()

    document = service.generate_csv(DelimitedRequest(
        headers=["Name", "Age"],
        rows=[["Alice", 30], ["Bob", 25]],
    ))
    document.content  # b"Name,Age\\nAlice,30\\nBob,25\\n"

    service.save_document(document, "/tmp/people.csv")
"""

import io
import logging
import os
import time
from pathlib import Path
from typing import BinaryIO

from docgen.adapters.csv_adapter import CsvAdapter
from docgen.adapters.xlsxwriter_adapter import XlsxWriterAdapter
from docgen.exceptions.document_exceptions import DocumentServiceError, WriteError
from docgen.exceptions.document_exceptions import PermissionError as DocumentPermissionError
from docgen.models.document_models import (
    CSV_MEDIA_TYPE,
    XLSX_MEDIA_TYPE,
    DelimitedRequest,
    GeneratedDocument,
    GenerationRequest,
    SaveDocumentResponse,
    SpreadsheetRequest,
)
from docgen.utils.naming import sanitize_filename, sanitize_sheet_name

logger = logging.getLogger(__name__)


class DocumentService:
    """
    Core service layer for document generation.

    The service holds no per-request state; every call builds its own
    buffers and workbook, so one instance is shared by all requests.

    Attributes:
        csv_adapter: CsvAdapter instance for delimited output.
        xlsx_adapter: XlsxWriterAdapter instance for spreadsheet output.

    Example:
        service = DocumentService()
        document = service.generate_excel(SpreadsheetRequest(
            headers=["Name", "Age"],
            rows=[["Alice", 30]],
            sheet_name="People",
        ))
    """

    def __init__(
        self,
        csv_adapter: CsvAdapter | None = None,
        xlsx_adapter: XlsxWriterAdapter | None = None,
    ) -> None:
        """
        Initialize the DocumentService.

        Args:
            csv_adapter: Optional CsvAdapter instance.
                         If None, creates a new instance.
            xlsx_adapter: Optional XlsxWriterAdapter instance.
                          If None, creates a new instance.
        """
        self.csv_adapter = csv_adapter or CsvAdapter()
        self.xlsx_adapter = xlsx_adapter or XlsxWriterAdapter()

    def write_csv(self, request: DelimitedRequest, sink: BinaryIO) -> int:
        """
        Stream a CSV document into a caller-owned sink.

        Args:
            request: The delimited request.
            sink: Writable binary stream. It is never closed.

        Returns:
            Number of data rows written.
        """
        return self.csv_adapter.write(request, sink)

    def write_excel(self, request: SpreadsheetRequest, sink: BinaryIO) -> int:
        """
        Write an XLSX document into a caller-owned sink.

        The sheet name is sanitized before it reaches the workbook engine.

        Args:
            request: The spreadsheet request.
            sink: Writable binary stream.

        Returns:
            Number of data rows written.
        """
        request.sheet_name = sanitize_sheet_name(request.sheet_name)
        return self.xlsx_adapter.write(request, sink)

    def generate_csv(self, request: DelimitedRequest) -> GeneratedDocument:
        """
        Generate a CSV document in memory.

        Args:
            request: The delimited request.

        Returns:
            GeneratedDocument with the CSV bytes and a sanitized filename.

        Raises:
            StructureError: If the headers or rows are not a valid table.
            WriteError: If writing fails.
        """
        return self._generate(
            request,
            self.write_csv,
            extension=".csv",
            media_type=CSV_MEDIA_TYPE,
        )

    def generate_excel(self, request: SpreadsheetRequest) -> GeneratedDocument:
        """
        Generate an XLSX document in memory.

        Args:
            request: The spreadsheet request.

        Returns:
            GeneratedDocument with the workbook bytes and a sanitized filename.

        Raises:
            StructureError: If the headers or rows are not a valid table.
            InvalidSheetNameError: If the sheet name is rejected.
            StyleError: If a style cannot be compiled.
            SerializationError: If the workbook cannot be serialized.
            WriteError: If writing fails.
        """
        return self._generate(
            request,
            self.write_excel,
            extension=".xlsx",
            media_type=XLSX_MEDIA_TYPE,
        )

    def _generate(
        self,
        request: GenerationRequest,
        write,
        extension: str,
        media_type: str,
    ) -> GeneratedDocument:
        start_time = time.time()
        buffer = io.BytesIO()

        try:
            rows_written = write(request, buffer)
        except DocumentServiceError:
            raise
        except Exception as e:
            raise WriteError(
                operation="generate document",
                reason=str(e),
            ) from e

        content = buffer.getvalue()
        processing_time = (time.time() - start_time) * 1000
        filename = sanitize_filename(request.filename, extension)

        logger.info(
            "Generated %s: %d rows, %d bytes in %.2f ms",
            filename,
            rows_written,
            len(content),
            processing_time,
        )

        return GeneratedDocument(
            content=content,
            filename=filename,
            media_type=media_type,
            rows_written=rows_written,
            size_bytes=len(content),
            processing_time_ms=round(processing_time, 2),
        )

    def _validate_output_path(
        self,
        file_path: str,
        extension: str,
        overwrite: bool = False,
    ) -> Path:
        """
        Validate and prepare the output file path.

        Args:
            file_path: Path where the file will be written.
            extension: Extension the file must carry, e.g. ".csv".
            overwrite: Whether to overwrite if the file exists.

        Returns:
            Path object for the output file.

        Raises:
            WriteError: If the file exists and overwrite is False.
            DocumentPermissionError: If the directory is not writable.
        """
        if not file_path.lower().endswith(extension):
            file_path = file_path + extension
        path = Path(file_path)

        if path.exists() and not overwrite:
            raise WriteError(
                operation=f"create {file_path}",
                reason="File already exists and overwrite is False",
            )

        parent = path.parent
        if not parent.exists():
            try:
                parent.mkdir(parents=True, exist_ok=True)
            except PermissionError as e:
                raise DocumentPermissionError(
                    file_path=str(parent),
                    operation="create directory",
                ) from e
            except OSError as e:
                raise WriteError(
                    operation=f"create directory {parent}",
                    reason=str(e),
                ) from e

        if not os.access(str(parent), os.W_OK):
            raise DocumentPermissionError(
                file_path=file_path,
                operation="write",
            )

        return path

    def save_document(
        self,
        document: GeneratedDocument,
        file_path: str,
        overwrite: bool = False,
    ) -> SaveDocumentResponse:
        """
        Save a generated document to disk.

        The document's extension is appended to ``file_path`` if missing.

        Args:
            document: The generated document.
            file_path: Destination path.
            overwrite: Whether to replace an existing file.

        Returns:
            SaveDocumentResponse describing the written file.

        Raises:
            WriteError: If the file exists or cannot be written.
            DocumentPermissionError: If writing is denied.
        """
        extension = Path(document.filename).suffix.lower()
        path = self._validate_output_path(file_path, extension, overwrite)

        try:
            path.write_bytes(document.content)
        except PermissionError as e:
            raise DocumentPermissionError(
                file_path=str(path),
                operation="write",
            ) from e
        except OSError as e:
            raise WriteError(
                operation=f"write {path}",
                reason=str(e),
            ) from e

        return SaveDocumentResponse(
            success=True,
            file_path=str(path.absolute()),
            rows_written=document.rows_written,
            file_size_bytes=path.stat().st_size,
            processing_time_ms=document.processing_time_ms,
        )

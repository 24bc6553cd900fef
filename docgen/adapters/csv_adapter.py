"""
CSV adapter for delimited text output.

This module provides the CsvAdapter class that serializes a
DelimitedRequest through the standard library csv writer. Fields are
coerced to text, quoted only when they contain the delimiter, a quote or
a line break, and encoded as UTF-8 onto a caller-supplied binary sink.

Example:
    adapter = CsvAdapter()
    buffer = io.BytesIO()
    adapter.write(
        DelimitedRequest(headers=["Name", "Age"], rows=[["Alice", 30]]),
        buffer,
    )
    buffer.getvalue()  # b"Name,Age\\nAlice,30\\n"
"""

import csv
import logging
from typing import Any, BinaryIO

from docgen.exceptions.document_exceptions import WriteError
from docgen.models.document_models import DelimitedRequest
from docgen.utils.cells import to_text

logger = logging.getLogger(__name__)


class _Utf8Sink:
    """Text-to-bytes shim so csv.writer can write onto a binary sink."""

    def __init__(self, sink: BinaryIO) -> None:
        self._sink = sink

    def write(self, text: str) -> Any:
        return self._sink.write(text.encode("utf-8"))


class CsvAdapter:
    """
    Adapter for delimited text generation.

    The adapter never closes the sink it is given; it only writes to it
    and flushes it once every row has been written.

    Attributes:
        QUOTE_CHAR: Character used to quote fields.
        LINE_TERMINATOR: Record separator.
    """

    QUOTE_CHAR = '"'
    LINE_TERMINATOR = "\n"

    def _create_writer(self, stream: _Utf8Sink, delimiter: str) -> Any:
        try:
            return csv.writer(
                stream,
                delimiter=delimiter,
                quotechar=self.QUOTE_CHAR,
                quoting=csv.QUOTE_MINIMAL,
                lineterminator=self.LINE_TERMINATOR,
            )
        except (csv.Error, TypeError, ValueError) as e:
            raise WriteError(
                operation="create writer",
                reason=str(e),
            ) from e

    def write(self, request: DelimitedRequest, sink: BinaryIO) -> int:
        """
        Write the header and data rows of a request to a binary sink.

        Args:
            request: The delimited request. Defaults are applied in place.
            sink: Writable binary stream. It is flushed but never closed.

        Returns:
            Number of data rows written.

        Raises:
            EmptyHeadersError: If the request has no headers.
            EmptyDataError: If the request has no rows.
            RowLengthError: If a row does not match the header count.
            WriteError: If writing or flushing the sink fails.
        """
        request.prepare()

        writer = self._create_writer(_Utf8Sink(sink), request.delimiter)

        try:
            writer.writerow(request.headers)
        except (csv.Error, OSError, ValueError) as e:
            raise WriteError(operation="write headers", reason=str(e)) from e

        for index, row in enumerate(request.rows):
            request.check_row(index, row)
            try:
                writer.writerow([to_text(value) for value in row])
            except (csv.Error, OSError, ValueError) as e:
                raise WriteError(
                    operation="write",
                    reason=str(e),
                    row_number=index + 1,
                ) from e

        flush = getattr(sink, "flush", None)
        if flush is not None:
            try:
                flush()
            except (OSError, ValueError) as e:
                raise WriteError(operation="flush output", reason=str(e)) from e

        logger.debug(
            "Wrote %d CSV rows with delimiter %r",
            len(request.rows),
            request.delimiter,
        )
        return len(request.rows)

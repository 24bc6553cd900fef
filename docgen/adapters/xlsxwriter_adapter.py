"""
XlsxWriter adapter for spreadsheet output.

This module provides the XlsxWriterAdapter class that builds a single-sheet
workbook from a SpreadsheetRequest. The workbook is assembled in an
in-memory scratch buffer and only copied to the caller's sink once it has
been serialized successfully.

Features:
    - Native cell types (numbers stay numbers, booleans stay booleans)
    - Header and data styles compiled once into XlsxWriter formats
    - Fixed-width column sizing
    - A1 addressing for every cell written

Example:
    adapter = XlsxWriterAdapter()
    buffer = io.BytesIO()
    adapter.write(
        SpreadsheetRequest(
            headers=["Name", "Age"],
            rows=[["Alice", 30], ["Bob", 25]],
            sheet_name="People",
            styles=StyleSet(header_style=CellStyle(bold=True)),
        ),
        buffer,
    )
"""

import contextlib
import io
import logging
import math
import re
from collections.abc import Iterator
from typing import Any, BinaryIO

import xlsxwriter
from xlsxwriter.exceptions import InvalidWorksheetName
from xlsxwriter.format import Format
from xlsxwriter.workbook import Workbook
from xlsxwriter.worksheet import Worksheet

from docgen.exceptions.document_exceptions import (
    InvalidSheetNameError,
    SerializationError,
    StyleError,
    WriteError,
)
from docgen.models.document_models import (
    DEFAULT_SHEET_NAME,
    CellKind,
    CellStyle,
    SpreadsheetRequest,
)
from docgen.utils.cells import cell_reference, classify, column_letter, to_text

logger = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"^[0-9A-Fa-f]{6}$")

# Non-zero return codes of the XlsxWriter write_* methods.
_STATUS_REASONS = {
    -1: "cell is outside the worksheet",
    -2: "string exceeds 32767 characters",
}


class XlsxWriterAdapter:
    """
    Adapter for XlsxWriter workbook generation.

    Each call to ``write`` owns its own workbook and scratch buffer, so a
    single adapter instance can serve concurrent callers.

    Attributes:
        AUTO_SIZE_COLUMN_WIDTH: Width given to every column when auto-sizing.
        WORKBOOK_OPTIONS: Options passed to every XlsxWriter workbook.
    """

    AUTO_SIZE_COLUMN_WIDTH = 15
    WORKBOOK_OPTIONS = {
        "in_memory": True,
    }

    @contextlib.contextmanager
    def _scratch_workbook(self) -> Iterator[tuple[Workbook, io.BytesIO]]:
        """
        Open a workbook over a private buffer and release both on exit.

        Yields:
            Tuple of (workbook, scratch buffer).
        """
        scratch = io.BytesIO()
        workbook = xlsxwriter.Workbook(scratch, self.WORKBOOK_OPTIONS)
        try:
            yield workbook, scratch
        finally:
            if not workbook.fileclosed:
                # Release only; the failure that got us here is already propagating.
                with contextlib.suppress(Exception):
                    workbook.close()
            scratch.close()

    def _add_worksheet(self, workbook: Workbook, sheet_name: str) -> Worksheet:
        try:
            if sheet_name == DEFAULT_SHEET_NAME:
                return workbook.add_worksheet()
            return workbook.add_worksheet(sheet_name)
        except InvalidWorksheetName as e:
            raise InvalidSheetNameError(sheet_name=sheet_name, reason=str(e)) from e

    @staticmethod
    def _normalize_color(color: str) -> str:
        color = color.strip()
        if _HEX_COLOR.match(color):
            return f"#{color}"
        return color

    def _compile_style(
        self,
        workbook: Workbook,
        style: CellStyle,
        target: str,
    ) -> Format:
        """
        Compile a CellStyle into a reusable XlsxWriter format.

        Args:
            workbook: Workbook that will own the format.
            style: The style to compile.
            target: "header" or "data", used in error reports.

        Returns:
            The compiled Format handle.

        Raises:
            StyleError: If XlsxWriter rejects the style.
        """
        properties: dict[str, Any] = {}

        if style.bold:
            properties["bold"] = True
        if style.font_size is not None:
            properties["font_size"] = style.font_size
        if style.font_color:
            properties["font_color"] = self._normalize_color(style.font_color)
        if style.background:
            properties["pattern"] = 1
            properties["bg_color"] = self._normalize_color(style.background)

        alignment = style.horizontal_alignment
        if alignment is not None:
            properties["align"] = alignment.value

        try:
            return workbook.add_format(properties)
        except Exception as e:
            raise StyleError(target=target, reason=str(e)) from e

    def _write_cell(
        self,
        worksheet: Worksheet,
        reference: str,
        value: Any,
        cell_format: Format | None = None,
    ) -> int:
        """
        Write a value to a cell using its native spreadsheet type.

        None produces no value; with a format it leaves a styled blank.
        Numbers a spreadsheet cannot hold (NaN, infinities and integers
        beyond the float range) are written as their delimited-text form.

        Returns:
            The XlsxWriter status code (0 on success, negative on failure).
        """
        kind = classify(value)
        if kind is CellKind.ABSENT:
            return worksheet.write_blank(reference, None, cell_format)
        if kind is CellKind.BOOLEAN:
            return worksheet.write_boolean(reference, bool(value), cell_format)
        if kind is CellKind.FLOAT and not math.isfinite(value):
            return worksheet.write_string(reference, to_text(value), cell_format)
        if kind in (CellKind.INTEGER, CellKind.FLOAT):
            try:
                return worksheet.write_number(reference, value, cell_format)
            except OverflowError:
                return worksheet.write_string(reference, to_text(value), cell_format)
        if kind is CellKind.STRING:
            return worksheet.write_string(reference, value, cell_format)
        return worksheet.write_string(reference, to_text(value), cell_format)

    def _populate(self, workbook: Workbook, request: SpreadsheetRequest) -> None:
        worksheet = self._add_worksheet(workbook, request.sheet_name)
        styles = request.styles
        column_count = len(request.headers)

        header_format = None
        if styles is not None and styles.header_style is not None:
            header_format = self._compile_style(workbook, styles.header_style, "header")

        for col_idx, header in enumerate(request.headers):
            status = self._write_cell(
                worksheet,
                cell_reference(col_idx, 1),
                header,
                header_format,
            )
            if status != 0:
                raise WriteError(
                    operation="write headers",
                    reason=f"column {col_idx + 1}: {_STATUS_REASONS.get(status, status)}",
                )

        # Applied per cell; blanks are written too, so the whole data rectangle carries it.
        data_format = None
        if styles is not None and styles.data_style is not None:
            data_format = self._compile_style(workbook, styles.data_style, "data")

        for row_idx, row_data in enumerate(request.rows):
            request.check_row(row_idx, row_data)
            excel_row = row_idx + 2
            for col_idx, value in enumerate(row_data):
                status = self._write_cell(
                    worksheet,
                    cell_reference(col_idx, excel_row),
                    value,
                    data_format,
                )
                if status != 0:
                    raise WriteError(
                        operation="write",
                        reason=str(_STATUS_REASONS.get(status, status)),
                        row_number=row_idx + 1,
                    )

        if request.auto_size:
            worksheet.set_column(
                f"{column_letter(0)}:{column_letter(column_count - 1)}",
                self.AUTO_SIZE_COLUMN_WIDTH,
            )

    def write(self, request: SpreadsheetRequest, sink: BinaryIO) -> int:
        """
        Build a workbook for the request and write it to a binary sink.

        Args:
            request: The spreadsheet request. Defaults are applied in place.
            sink: Writable binary stream that receives the finished file.

        Returns:
            Number of data rows written.

        Raises:
            EmptyHeadersError: If the request has no headers.
            EmptyDataError: If the request has no rows.
            RowLengthError: If a row does not match the header count.
            InvalidSheetNameError: If XlsxWriter rejects the sheet name.
            StyleError: If a style cannot be compiled.
            SerializationError: If the workbook cannot be serialized.
            WriteError: If copying the result to the sink fails.
        """
        request.prepare()

        with self._scratch_workbook() as (workbook, scratch):
            self._populate(workbook, request)

            try:
                workbook.close()
            except Exception as e:
                raise SerializationError(reason=str(e)) from e

            try:
                sink.write(scratch.getvalue())
            except (OSError, ValueError) as e:
                raise WriteError(operation="write workbook", reason=str(e)) from e

        logger.debug(
            "Wrote %d rows to sheet %r",
            len(request.rows),
            request.sheet_name,
        )
        return len(request.rows)

"""
Tests for the XlsxWriterAdapter.

Tests single-sheet workbook generation using XlsxWriter, reading the
result back with openpyxl.
"""

import io
import math

import pytest
from xlsxwriter.workbook import Workbook

from docgen.adapters.xlsxwriter_adapter import XlsxWriterAdapter
from docgen.exceptions.document_exceptions import (
    EmptyHeadersError,
    InvalidSheetNameError,
    RowLengthError,
    SerializationError,
    StyleError,
    WriteError,
)
from docgen.models.document_models import CellStyle, SpreadsheetRequest, StyleSet


def _write(adapter: XlsxWriterAdapter, request: SpreadsheetRequest) -> bytes:
    sink = io.BytesIO()
    adapter.write(request, sink)
    return sink.getvalue()


class TestXlsxWriterAdapterBasicWrite:
    """Tests for basic workbook output."""

    def test_people_sheet(
        self,
        xlsxwriter_adapter: XlsxWriterAdapter,
        open_workbook,
        people_headers: list[str],
        people_rows: list[list],
    ) -> None:
        """Test the bold header, sheet name and numeric cells of a simple table."""
        content = _write(
            xlsxwriter_adapter,
            SpreadsheetRequest(
                headers=people_headers,
                rows=people_rows,
                sheet_name="People",
                styles=StyleSet(header_style=CellStyle(bold=True)),
            ),
        )

        workbook = open_workbook(content)
        assert workbook.sheetnames == ["People"]

        sheet = workbook["People"]
        assert sheet["A1"].value == "Name"
        assert sheet["A1"].font.b is True
        assert sheet["B2"].value == 30
        assert isinstance(sheet["B2"].value, int)
        assert sheet["B2"].data_type == "n"

    def test_default_sheet_name(
        self,
        xlsxwriter_adapter: XlsxWriterAdapter,
        open_workbook,
    ) -> None:
        """Test that the default sheet is named Sheet1."""
        content = _write(xlsxwriter_adapter, SpreadsheetRequest(headers=["A"], rows=[[1]]))

        assert open_workbook(content).sheetnames == ["Sheet1"]

    def test_populated_rows(
        self,
        xlsxwriter_adapter: XlsxWriterAdapter,
        open_workbook,
        sample_headers: list[str],
        sample_data: list[list],
    ) -> None:
        """Test that the populated range is the header plus every data row."""
        content = _write(
            xlsxwriter_adapter,
            SpreadsheetRequest(headers=sample_headers, rows=sample_data),
        )

        sheet = open_workbook(content).active
        assert sheet.max_row == len(sample_data) + 1
        assert sheet.max_column == len(sample_headers)
        assert [cell.value for cell in sheet[1]] == sample_headers
        assert [cell.value for cell in sheet[6]] == ["Eve", 32, "Marketing"]

    def test_wide_table_addressing(
        self,
        xlsxwriter_adapter: XlsxWriterAdapter,
        open_workbook,
    ) -> None:
        """Test that columns past Z land on two-letter references."""
        headers = [f"h{i}" for i in range(30)]
        rows = [list(range(30))]

        sheet = open_workbook(
            _write(xlsxwriter_adapter, SpreadsheetRequest(headers=headers, rows=rows))
        ).active

        assert sheet["Z1"].value == "h25"
        assert sheet["AD1"].value == "h29"
        assert sheet["AD2"].value == 29


class TestXlsxWriterAdapterDataTypes:
    """Tests for native cell types."""

    def test_mixed_types(
        self,
        xlsxwriter_adapter: XlsxWriterAdapter,
        open_workbook,
    ) -> None:
        """Test that values keep their native types."""
        content = _write(
            xlsxwriter_adapter,
            SpreadsheetRequest(
                headers=["Text", "Integer", "Float", "Boolean", "Nullable"],
                rows=[["String", 42, 3.14, True, None]],
            ),
        )

        sheet = open_workbook(content).active
        assert sheet["A2"].value == "String"
        assert sheet["B2"].value == 42
        assert sheet["C2"].value == 3.14
        assert sheet["D2"].value is True
        assert sheet["E2"].value is None

    def test_absent_is_not_text(
        self,
        xlsxwriter_adapter: XlsxWriterAdapter,
        open_workbook,
    ) -> None:
        """Test that None is an empty cell, not the text None or null."""
        content = _write(
            xlsxwriter_adapter,
            SpreadsheetRequest(
                headers=["A", "B"],
                rows=[[None, "x"]],
                styles=StyleSet(data_style=CellStyle(bold=True)),
            ),
        )

        cell = open_workbook(content).active["A2"]
        assert cell.value is None
        assert cell.value not in ("None", "null")

    def test_formula_like_strings_stay_strings(
        self,
        xlsxwriter_adapter: XlsxWriterAdapter,
        open_workbook,
    ) -> None:
        """Test that strings are written verbatim."""
        content = _write(
            xlsxwriter_adapter,
            SpreadsheetRequest(headers=["A", "B"], rows=[["=1+1", "00123"]]),
        )

        sheet = open_workbook(content).active
        assert sheet["A2"].value == "=1+1"
        assert sheet["B2"].value == "00123"

    def test_non_finite_numbers(
        self,
        xlsxwriter_adapter: XlsxWriterAdapter,
        open_workbook,
    ) -> None:
        """Test that NaN and infinities are written as their text form."""
        content = _write(
            xlsxwriter_adapter,
            SpreadsheetRequest(
                headers=["A", "B", "C"],
                rows=[[math.nan, math.inf, -math.inf]],
            ),
        )

        sheet = open_workbook(content).active
        assert [cell.value for cell in sheet[2]] == ["NaN", "+Inf", "-Inf"]
        assert all(cell.data_type == "s" for cell in sheet[2])

    def test_integer_beyond_float_range(
        self,
        xlsxwriter_adapter: XlsxWriterAdapter,
        open_workbook,
    ) -> None:
        """Test that an integer too large for a number cell keeps its digits."""
        value = 10**400
        content = _write(
            xlsxwriter_adapter,
            SpreadsheetRequest(headers=["A", "B"], rows=[[value, 7]]),
        )

        sheet = open_workbook(content).active
        assert sheet["A2"].value == str(value)
        assert sheet["B2"].value == 7

    def test_other_values_rendered_as_text(
        self,
        xlsxwriter_adapter: XlsxWriterAdapter,
        open_workbook,
    ) -> None:
        """Test the generic fallback for unsupported values."""
        content = _write(
            xlsxwriter_adapter,
            SpreadsheetRequest(headers=["A"], rows=[[[1, 2]]]),
        )

        assert open_workbook(content).active["A2"].value == "[1, 2]"


class TestXlsxWriterAdapterStyles:
    """Tests for header and data styles."""

    def test_header_style_properties(
        self,
        xlsxwriter_adapter: XlsxWriterAdapter,
        open_workbook,
    ) -> None:
        """Test font, fill and alignment of the header row."""
        style = CellStyle(
            bold=True,
            font_size=14,
            font_color="FF0000",
            background="#DDEBF7",
            alignment="Center",
        )
        content = _write(
            xlsxwriter_adapter,
            SpreadsheetRequest(
                headers=["A", "B"],
                rows=[[1, 2]],
                styles=StyleSet(header_style=style),
            ),
        )

        sheet = open_workbook(content).active
        for ref in ("A1", "B1"):
            cell = sheet[ref]
            assert cell.font.b is True
            assert cell.font.sz == 14
            assert cell.font.color.rgb.endswith("FF0000")
            assert cell.fill.fill_type == "solid"
            assert cell.fill.fgColor.rgb.endswith("DDEBF7")
            assert cell.alignment.horizontal == "center"

        assert not sheet["A2"].font.b

    def test_data_style_covers_rectangle(
        self,
        xlsxwriter_adapter: XlsxWriterAdapter,
        open_workbook,
        sample_headers: list[str],
        sample_data: list[list],
    ) -> None:
        """Test that every data cell gets the data style and headers do not."""
        content = _write(
            xlsxwriter_adapter,
            SpreadsheetRequest(
                headers=sample_headers,
                rows=sample_data,
                styles=StyleSet(data_style=CellStyle(alignment="right")),
            ),
        )

        sheet = open_workbook(content).active
        for row in sheet.iter_rows(min_row=2, max_row=6, max_col=3):
            for cell in row:
                assert cell.alignment.horizontal == "right"
        assert sheet["A1"].alignment.horizontal is None

    def test_data_style_on_blank_cells(
        self,
        xlsxwriter_adapter: XlsxWriterAdapter,
        open_workbook,
    ) -> None:
        """Test that empty cells inside the data rectangle are styled too."""
        content = _write(
            xlsxwriter_adapter,
            SpreadsheetRequest(
                headers=["A", "B", "C"],
                rows=[["x", None, 1], [None, None, None]],
                styles=StyleSet(data_style=CellStyle(bold=True, background="FFFF00")),
            ),
        )

        sheet = open_workbook(content).active
        for ref in ("B2", "A3", "B3", "C3"):
            cell = sheet[ref]
            assert cell.value is None
            assert cell.font.b is True
            assert cell.fill.fgColor.rgb.endswith("FFFF00")

    def test_unrecognized_alignment_ignored(
        self,
        xlsxwriter_adapter: XlsxWriterAdapter,
        open_workbook,
    ) -> None:
        """Test that an unknown alignment is not an error."""
        content = _write(
            xlsxwriter_adapter,
            SpreadsheetRequest(
                headers=["A"],
                rows=[[1]],
                styles=StyleSet(header_style=CellStyle(bold=True, alignment="diagonal")),
            ),
        )

        cell = open_workbook(content).active["A1"]
        assert cell.font.b is True
        assert cell.alignment.horizontal is None

    def test_style_compiled_once_per_target(
        self,
        xlsxwriter_adapter: XlsxWriterAdapter,
        monkeypatch: pytest.MonkeyPatch,
        sample_headers: list[str],
        sample_data: list[list],
    ) -> None:
        """Test that each style becomes exactly one format."""
        calls = []
        original = Workbook.add_format

        def counting_add_format(self, properties=None):
            calls.append(properties)
            return original(self, properties)

        monkeypatch.setattr(Workbook, "add_format", counting_add_format)

        _write(
            xlsxwriter_adapter,
            SpreadsheetRequest(
                headers=sample_headers,
                rows=sample_data,
                styles=StyleSet(
                    header_style=CellStyle(bold=True),
                    data_style=CellStyle(alignment="left"),
                ),
            ),
        )

        assert calls.count({"bold": True}) == 1
        assert calls.count({"align": "left"}) == 1

    def test_style_failure(
        self,
        xlsxwriter_adapter: XlsxWriterAdapter,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test that a rejected style aborts generation."""

        original = Workbook.add_format

        def failing_add_format(self, properties=None):
            if properties and "font_color" in properties:
                raise ValueError("bad color")
            return original(self, properties)

        monkeypatch.setattr(Workbook, "add_format", failing_add_format)
        sink = io.BytesIO()

        with pytest.raises(StyleError) as exc_info:
            xlsxwriter_adapter.write(
                SpreadsheetRequest(
                    headers=["A"],
                    rows=[[1]],
                    styles=StyleSet(header_style=CellStyle(font_color="nope")),
                ),
                sink,
            )

        assert exc_info.value.target == "header"
        assert "bad color" in exc_info.value.message
        assert sink.getvalue() == b""


class TestXlsxWriterAdapterColumnWidth:
    """Tests for fixed-width column sizing."""

    def test_auto_size_sets_fixed_width(
        self,
        xlsxwriter_adapter: XlsxWriterAdapter,
        open_workbook,
    ) -> None:
        """Test that auto_size gives the columns the constant width."""
        content = _write(
            xlsxwriter_adapter,
            SpreadsheetRequest(
                headers=["Short", "Long"],
                rows=[["a", "This is a much longer text value"]],
                auto_size=True,
            ),
        )

        sheet = open_workbook(content).active
        width = sheet.column_dimensions["A"].width
        assert width == pytest.approx(XlsxWriterAdapter.AUTO_SIZE_COLUMN_WIDTH, abs=1)

    def test_no_auto_size(
        self,
        xlsxwriter_adapter: XlsxWriterAdapter,
        open_workbook,
    ) -> None:
        """Test that no column widths are written without auto_size."""
        content = _write(
            xlsxwriter_adapter,
            SpreadsheetRequest(headers=["A"], rows=[["Data1"]], auto_size=False),
        )

        sheet = open_workbook(content).active
        assert "A" not in sheet.column_dimensions or not sheet.column_dimensions["A"].customWidth


class TestXlsxWriterAdapterFailures:
    """Tests for validation and serialization failures."""

    def test_empty_headers(self, xlsxwriter_adapter: XlsxWriterAdapter) -> None:
        """Test that empty headers are rejected."""
        with pytest.raises(EmptyHeadersError):
            xlsxwriter_adapter.write(SpreadsheetRequest(headers=[], rows=[[1]]), io.BytesIO())

    def test_row_mismatch_writes_nothing(self, xlsxwriter_adapter: XlsxWriterAdapter) -> None:
        """Test that a ragged row aborts and leaves the sink untouched."""
        sink = io.BytesIO()

        with pytest.raises(RowLengthError) as exc_info:
            xlsxwriter_adapter.write(
                SpreadsheetRequest(headers=["A", "B"], rows=[[1, 2], [3, 4], [5]]),
                sink,
            )

        assert exc_info.value.row_number == 3
        assert exc_info.value.actual == 1
        assert sink.getvalue() == b""

    def test_oversized_string_rejected(self, xlsxwriter_adapter: XlsxWriterAdapter) -> None:
        """Test that a string longer than a cell can hold is not truncated."""
        sink = io.BytesIO()

        with pytest.raises(WriteError) as exc_info:
            xlsxwriter_adapter.write(
                SpreadsheetRequest(headers=["A", "B"], rows=[["ok", 1], ["x" * 40000, 2]]),
                sink,
            )

        assert exc_info.value.row_number == 2
        assert exc_info.value.reason == "string exceeds 32767 characters"
        assert sink.getvalue() == b""

    def test_oversized_header_rejected(self, xlsxwriter_adapter: XlsxWriterAdapter) -> None:
        """Test that an oversized header aborts generation."""
        with pytest.raises(WriteError) as exc_info:
            xlsxwriter_adapter.write(
                SpreadsheetRequest(headers=["h" * 32768], rows=[[1]]),
                io.BytesIO(),
            )

        assert exc_info.value.operation == "write headers"
        assert "32767" in exc_info.value.message

    def test_illegal_sheet_name(self, xlsxwriter_adapter: XlsxWriterAdapter) -> None:
        """Test that an unsanitized sheet name is reported."""
        with pytest.raises(InvalidSheetNameError) as exc_info:
            xlsxwriter_adapter.write(
                SpreadsheetRequest(headers=["A"], rows=[[1]], sheet_name="a/b"),
                io.BytesIO(),
            )

        assert exc_info.value.sheet_name == "a/b"

    def test_serialization_failure(
        self,
        xlsxwriter_adapter: XlsxWriterAdapter,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test that a failure while finalizing the workbook is surfaced."""

        def failing_store(self):
            raise OSError("zip failed")

        monkeypatch.setattr(Workbook, "_store_workbook", failing_store)
        sink = io.BytesIO()

        with pytest.raises(SerializationError) as exc_info:
            xlsxwriter_adapter.write(SpreadsheetRequest(headers=["A"], rows=[[1]]), sink)

        assert exc_info.value.error_code == "SERIALIZATION_ERROR"
        assert sink.getvalue() == b""

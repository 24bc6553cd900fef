"""
Test fixtures and utilities for the document service tests.

This module provides shared fixtures including temporary directories,
sample tables, adapter and service instances, and a helper to load
generated workbooks back with openpyxl.
"""

import io
import tempfile
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from openpyxl import load_workbook
from openpyxl.workbook.workbook import Workbook

from docgen.adapters.csv_adapter import CsvAdapter
from docgen.adapters.xlsxwriter_adapter import XlsxWriterAdapter
from docgen.services.document_service import DocumentService


@pytest.fixture
def document_service() -> DocumentService:
    """
    Create a DocumentService instance for testing.

    Returns:
        DocumentService instance.
    """
    return DocumentService()


@pytest.fixture
def csv_adapter() -> CsvAdapter:
    """
    Create a CsvAdapter instance for testing.

    Returns:
        CsvAdapter instance.
    """
    return CsvAdapter()


@pytest.fixture
def xlsxwriter_adapter() -> XlsxWriterAdapter:
    """
    Create an XlsxWriterAdapter instance for testing.

    Returns:
        XlsxWriterAdapter instance.
    """
    return XlsxWriterAdapter()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """
    Create a temporary directory for test files.

    Yields:
        Path to the temporary directory.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def people_headers() -> list[str]:
    """Headers of the two-person table used in end-to-end checks."""
    return ["Name", "Age"]


@pytest.fixture
def people_rows() -> list[list]:
    """Rows of the two-person table used in end-to-end checks."""
    return [["Alice", 30], ["Bob", 25]]


@pytest.fixture
def sample_headers() -> list[str]:
    """
    Return sample headers for write tests.

    Returns:
        List of column headers.
    """
    return ["Name", "Age", "Department"]


@pytest.fixture
def sample_data() -> list[list]:
    """
    Return sample data for write tests.

    Returns:
        List of rows with sample data.
    """
    return [
        ["Alice", 30, "Engineering"],
        ["Bob", 25, "Marketing"],
        ["Charlie", 35, "Sales"],
        ["Diana", 28, "Engineering"],
        ["Eve", 32, "Marketing"],
    ]


@pytest.fixture
def open_workbook() -> Callable[[bytes], Workbook]:
    """
    Return a helper that loads XLSX bytes with openpyxl.

    Returns:
        Function mapping workbook bytes to an openpyxl Workbook.
    """

    def _open(content: bytes) -> Workbook:
        return load_workbook(io.BytesIO(content))

    return _open

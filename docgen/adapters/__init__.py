"""
Adapters for document output formats.

Implements the adapter pattern for the two output engines:
- CsvAdapter: Delimited text through the standard library csv writer
- XlsxWriterAdapter: Single-sheet workbooks through XlsxWriter
"""

from docgen.adapters.csv_adapter import CsvAdapter
from docgen.adapters.xlsxwriter_adapter import XlsxWriterAdapter

__all__ = [
    "CsvAdapter",
    "XlsxWriterAdapter",
]

"""
Pure helpers shared by the adapters and the service layer.
"""

from docgen.utils.cells import (
    cell_reference,
    classify,
    column_letter,
    format_float,
    to_text,
)
from docgen.utils.naming import sanitize_filename, sanitize_sheet_name

__all__ = [
    "column_letter",
    "cell_reference",
    "classify",
    "format_float",
    "to_text",
    "sanitize_filename",
    "sanitize_sheet_name",
]

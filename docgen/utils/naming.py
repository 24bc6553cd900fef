"""
Sanitizers for names that leave the service.

Filenames end up in a Content-Disposition header and sheet names must
satisfy the spreadsheet naming rules before they reach the workbook engine.
"""

from docgen.models.document_models import DEFAULT_SHEET_NAME

MAX_SHEET_NAME_LENGTH = 31

_FILENAME_REPLACEMENTS = ("/", "\\", "..")
_SHEET_NAME_FORBIDDEN = ("/", "\\", "[", "]", "*", "?", ":")


def sanitize_filename(filename: str, extension: str) -> str:
    """
    Make a filename safe to expose in a download header.

    Path separators and ".." sequences are replaced with "_", and the
    extension is appended unless the name already ends with it
    (case-insensitive).

    Args:
        filename: Requested filename.
        extension: Required extension including the dot, e.g. ".csv".

    Returns:
        The sanitized filename.
    """
    for sequence in _FILENAME_REPLACEMENTS:
        filename = filename.replace(sequence, "_")

    if not filename.lower().endswith(extension.lower()):
        filename += extension

    return filename


def sanitize_sheet_name(name: str | None) -> str:
    """
    Make a sheet name legal for a spreadsheet.

    Replaces / \\ [ ] * ? : with "_" and truncates to 31 characters.
    An empty name becomes the default sheet name.
    """
    if not name:
        return DEFAULT_SHEET_NAME

    for char in _SHEET_NAME_FORBIDDEN:
        name = name.replace(char, "_")

    return name[:MAX_SHEET_NAME_LENGTH]

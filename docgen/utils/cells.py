"""
Cell addressing and value coercion helpers.

Column letters use the bijective base-26 numbering of spreadsheet columns
(A..Z, AA..AZ, ..., ZZ, AAA, ...). Coercion classifies an untyped cell
value into a CellKind and renders it as text for delimited output.

Example:
    column_letter(27)          # "AB"
    cell_reference(1, 2)       # "B2"
    to_text(3.140000)          # "3.14"
"""

import math
import numbers
import struct
from decimal import Decimal
from typing import Any

from docgen.models.document_models import CellKind

_ALPHABET_SIZE = 26
_MAX_SINGLE_DIGITS = 9


def column_letter(index: int) -> str:
    """
    Convert a 0-based column index to spreadsheet column letters.

    Args:
        index: 0-based column index.

    Returns:
        Column letters, e.g. "A" for 0 and "AA" for 26.

    Raises:
        ValueError: If the index is negative.
    """
    if index < 0:
        raise ValueError(f"Column index must be >= 0, got {index}")

    letters = []
    while index >= 0:
        index, remainder = divmod(index, _ALPHABET_SIZE)
        letters.append(chr(ord("A") + remainder))
        index -= 1
    return "".join(reversed(letters))


def cell_reference(col: int, row: int) -> str:
    """Build an A1 reference from a 0-based column and a 1-based row."""
    return f"{column_letter(col)}{row}"


def classify(value: Any) -> CellKind:
    """
    Classify an untyped cell value.

    bool is checked before the integer family since it is an int subclass.
    """
    if value is None:
        return CellKind.ABSENT
    if isinstance(value, str):
        return CellKind.STRING
    if isinstance(value, bool):
        return CellKind.BOOLEAN
    if isinstance(value, numbers.Integral):
        return CellKind.INTEGER
    if isinstance(value, numbers.Real):
        return CellKind.FLOAT
    return CellKind.OTHER


def _is_single_precision(value: Any) -> bool:
    dtype = getattr(value, "dtype", None)
    return dtype is not None and getattr(dtype, "itemsize", None) == 4


def _as_single(number: float) -> bytes:
    return struct.pack("<f", number)


def _shortest_single(number: float) -> str:
    # Fewest significant digits that map back to the same 32-bit float.
    target = _as_single(number)
    for digits in range(1, _MAX_SINGLE_DIGITS + 1):
        text = f"{number:.{digits}g}"
        try:
            if _as_single(float(text)) == target:
                return text
        except OverflowError:
            continue
    return repr(number)


def _positional(text: str) -> str:
    formatted = format(Decimal(text), "f")
    if "." in formatted:
        formatted = formatted.rstrip("0").rstrip(".")
    return formatted


def format_float(value: Any) -> str:
    """
    Render a floating-point value as the shortest round-trip decimal text.

    The text never uses exponent notation and drops a zero fraction, so
    3.0 renders as "3" and 1e21 as "1000000000000000000000". Values with
    a 32-bit dtype are shortened at 32-bit precision.

    Args:
        value: A float or float-like numeric value.

    Returns:
        Decimal text that parses back to the same value.
    """
    number = float(value)
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "+Inf" if number > 0 else "-Inf"

    if _is_single_precision(value):
        return _positional(_shortest_single(number))
    return _positional(repr(number))


def to_text(value: Any) -> str:
    """
    Coerce an untyped cell value to its delimited-text form.

    Args:
        value: The cell value.

    Returns:
        "" for None, the string itself, base-10 integers, shortest
        round-trip floats, "true"/"false" for booleans, and str(value)
        for anything else.
    """
    kind = classify(value)
    if kind is CellKind.ABSENT:
        return ""
    if kind is CellKind.STRING:
        return value
    if kind is CellKind.INTEGER:
        return str(int(value))
    if kind is CellKind.FLOAT:
        return format_float(value)
    if kind is CellKind.BOOLEAN:
        return "true" if value else "false"
    return str(value)

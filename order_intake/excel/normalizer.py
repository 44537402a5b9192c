from __future__ import annotations

import math
import re
from typing import Any

"""Numeric and material code normalization for uploaded cells.

SAP exports reach us through Excel, LibreOffice and hand-edited CSV files, so
the same quantity can arrive as `1.234,56`, `1,234.56` or a float, and long
material codes are often rendered in scientific notation (`1.7805E+13`).
Nothing in this module raises for malformed input.
"""

__all__ = [
    "cell_to_text",
    "parse_ambiguous_number",
    "expand_scientific_code",
]

_NON_NUMERIC = re.compile(r"[^0-9.,\-]")
_LEADING_NUMBER = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)")
_SCIENTIFIC = re.compile(r"^(\d+)(?:\.(\d+))?e\+?(\d+)$", re.IGNORECASE)


def cell_to_text(value: Any) -> str:
    """Return the canonical text of a spreadsheet / JSON cell value.

    None and NaN become "", integral floats lose their ".0" so that numeric
    order numbers and material codes keep their exact digits.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if value.is_integer():
            return str(int(value))
        return repr(value)
    return str(value)


def parse_ambiguous_number(text: Any) -> float:
    """Parse a locale-ambiguous numeric string.

    Steps:
    1. Keep only digits, '.', ',' and '-'
    2. Both separators present: the rightmost one is the decimal point, the
       other is a thousands separator and is dropped
    3. Only ',' present: it is the decimal point
    4. Parse the leading number; anything unparseable is 0.0

    >>> parse_ambiguous_number("1.234,56")
    1234.56
    >>> parse_ambiguous_number("1,234.56")
    1234.56
    >>> parse_ambiguous_number("")
    0.0
    """
    if isinstance(text, (int, float)) and not isinstance(text, bool):
        try:
            value = float(text)
        except OverflowError:
            return 0.0
        return value if math.isfinite(value) else 0.0
    cleaned = _NON_NUMERIC.sub("", cell_to_text(text))
    if not cleaned:
        return 0.0

    last_dot = cleaned.rfind(".")
    last_comma = cleaned.rfind(",")
    if last_dot >= 0 and last_comma >= 0:
        if last_comma > last_dot:
            cleaned = cleaned.replace(".", "").replace(",", ".")
        else:
            cleaned = cleaned.replace(",", "")
    elif last_comma >= 0:
        cleaned = cleaned.replace(",", ".")

    match = _LEADING_NUMBER.match(cleaned)
    if match is None:
        return 0.0
    return float(match.group())


def expand_scientific_code(text: Any) -> str:
    """Recover the exact digits of a material code shown in scientific notation.

    `1.7805E+13` becomes `17805000000000`. Values whose mantissa still has a
    fraction after the shift (e.g. `1.23456E+2`) and anything not matching
    `<digits>[.<digits>]E[+]<exponent>` are returned unchanged.
    """
    raw = cell_to_text(text)
    match = _SCIENTIFIC.match(raw.strip())
    if match is None:
        return raw

    integer_part, fraction, exponent = match.group(1), match.group(2) or "", int(match.group(3))
    shift = exponent - len(fraction)
    if shift < 0:
        return raw
    digits = (integer_part + fraction + "0" * shift).lstrip("0")
    return digits or "0"

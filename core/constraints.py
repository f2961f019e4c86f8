"""
Shared helpers for reading raw spreadsheet cells.

Cells arrive as whatever the spreadsheet parser produced (str, int, float, bool or
nothing at all). These helpers give every validator the same notion of "empty",
"numeric" and "list of positive integers".
"""

import json
import math
import re
from typing import Any, List, Optional

from utils.constants import UNMAPPED_MARKERS

CellValue = Optional[str | int | float | bool]

_RANGE_PATTERN = re.compile(r"^\s*(\d+)\s*-\s*(\d+)\s*$")


def is_empty(value: Any) -> bool:
    """True for None, NaN and strings that are blank after stripping."""
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    if isinstance(value, str) and value.strip() == "":
        return True
    return False


def cell_text(value: Any) -> str:
    """Render a cell as trimmed text; integral floats lose their trailing '.0'."""
    if is_empty(value):
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def to_number(value: Any) -> Optional[float]:
    """Coerce a cell to a finite number, or None if it is not numeric."""
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def is_positive_int(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    number = to_number(value)
    return number is not None and number.is_integer() and number >= 1


def split_list(value: Any) -> List[str]:
    """Split a comma-separated cell into trimmed, non-empty entries."""
    return [part.strip() for part in cell_text(value).split(",") if part.strip()]


def is_unmapped(header: Any) -> bool:
    return header is None or str(header).strip().lower() in UNMAPPED_MARKERS


def parse_json_array(value: Any) -> Optional[list]:
    """Parse a cell as a JSON array; anything else (bad JSON, scalars, objects) is None."""
    if isinstance(value, list):
        return value
    try:
        parsed = json.loads(cell_text(value))
    except (TypeError, ValueError):
        return None
    return parsed if isinstance(parsed, list) else None


def parse_range(value: Any) -> Optional[List[int]]:
    """Expand an inclusive 'a-b' range (1 <= a <= b) into its integers."""
    match = _RANGE_PATTERN.match(cell_text(value))
    if not match:
        return None
    start, end = int(match.group(1)), int(match.group(2))
    if start < 1 or start > end:
        return None
    return list(range(start, end + 1))


def parse_csv_ints(value: Any) -> Optional[List[int]]:
    """Parse '1, 2, 3' into positive integers; any bad or blank entry fails the whole cell."""
    parts = [part.strip() for part in cell_text(value).split(",")]
    if not parts or any(not is_positive_int(part) for part in parts):
        return None
    return [int(float(part)) for part in parts]


def parse_positive_int_list(value: Any, allow_range: bool = False) -> Optional[List[int]]:
    """
    Parse a list cell written as a JSON array, a comma-separated list or (when
    allow_range is set) an inclusive 'a-b' range.

    The JSON syntax is tried first and wins whenever the cell is a JSON array, even if
    its elements turn out to be invalid. Returns None when nothing yields a list of
    positive integers.
    """
    items = parse_json_array(value)
    if items is not None:
        if any(not is_positive_int(item) for item in items):
            return None
        return [int(to_number(item)) for item in items]

    if allow_range:
        expanded = parse_range(value)
        if expanded is not None:
            return expanded

    return parse_csv_ints(value)

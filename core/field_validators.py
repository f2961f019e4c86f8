"""
Single-cell validators.

Each validator takes one raw cell and returns None when the value is acceptable or a
message naming the field and the violated rule. Empty cells always pass: whether a
field is required is decided by the row schema, not here.
"""

import json
from typing import Callable, Dict, Optional

from core.constraints import (
    CellValue,
    is_empty,
    cell_text,
    to_number,
    parse_json_array,
    parse_positive_int_list,
)
from utils.constants import PRIORITY_LEVEL_RANGE, QUALIFICATION_LEVEL_RANGE


def validate_numeric_field(value: CellValue, field_name: str) -> Optional[str]:
    if is_empty(value):
        return None
    if to_number(value) is None:
        return f"{field_name} must be a number"
    return None


def validate_range(
    value: CellValue, field_name: str, low: float, high: float
) -> Optional[str]:
    """Numeric check followed by an inclusive [low, high] bound check."""
    num_error = validate_numeric_field(value, field_name)
    if num_error or is_empty(value):
        return num_error

    num = to_number(value)
    if num < low or num > high:
        return f"{field_name} must be between {low} and {high}"
    return None


def validate_minimum(value: CellValue, field_name: str, low: float = 1) -> Optional[str]:
    """Numeric check followed by a lower-bound check."""
    num_error = validate_numeric_field(value, field_name)
    if num_error or is_empty(value):
        return num_error

    if to_number(value) < low:
        return f"{field_name} must be at least {low}"
    return None


def validate_priority_level(value: CellValue) -> Optional[str]:
    return validate_range(value, "PriorityLevel", *PRIORITY_LEVEL_RANGE)


def validate_qualification_level(value: CellValue) -> Optional[str]:
    return validate_range(value, "QualificationLevel", *QUALIFICATION_LEVEL_RANGE)


def validate_duration(value: CellValue) -> Optional[str]:
    return validate_minimum(value, "Duration")


def validate_max_load_per_phase(value: CellValue) -> Optional[str]:
    return validate_minimum(value, "MaxLoadPerPhase")


def validate_max_concurrent(value: CellValue) -> Optional[str]:
    return validate_minimum(value, "MaxConcurrent")


def _validate_int_list(
    value: CellValue, field_name: str, allow_range: bool, syntaxes: str
) -> Optional[str]:
    if is_empty(value):
        return None

    if parse_positive_int_list(value, allow_range=allow_range) is not None:
        return None

    # A JSON array was recognised, so the syntax is fine but an element is not
    if parse_json_array(value) is not None:
        return f"{field_name} must contain positive integers only"
    return f"{field_name} must be {syntaxes} of positive integers"


def validate_available_slots(value: CellValue) -> Optional[str]:
    """Accepts '[1,2,3]' or '1,2,3'. Dash ranges are not a slot syntax."""
    return _validate_int_list(
        value,
        "AvailableSlots",
        allow_range=False,
        syntaxes="a JSON array (e.g. '[1,2,3]') or a comma-separated list (e.g. '1,2,3')",
    )


def validate_preferred_phases(value: CellValue) -> Optional[str]:
    """Accepts '[1,2,3]', '1,2,3' or the inclusive range '1-3'."""
    return _validate_int_list(
        value,
        "PreferredPhases",
        allow_range=True,
        syntaxes=(
            "a JSON array (e.g. '[1,2,3]'), a comma-separated list (e.g. '1,2,3') "
            "or a range (e.g. '1-3')"
        ),
    )


def validate_attributes_json(value: CellValue) -> Optional[str]:
    if is_empty(value):
        return None
    try:
        parsed = json.loads(cell_text(value))
    except ValueError:
        return "AttributesJSON must be valid JSON"
    if not isinstance(parsed, dict):
        return "AttributesJSON must be a JSON object"
    return None


# canonical field name -> cell validator
FIELD_VALIDATORS: Dict[str, Callable[[CellValue], Optional[str]]] = {
    "PriorityLevel": validate_priority_level,
    "AttributesJSON": validate_attributes_json,
    "AvailableSlots": validate_available_slots,
    "MaxLoadPerPhase": validate_max_load_per_phase,
    "QualificationLevel": validate_qualification_level,
    "Duration": validate_duration,
    "PreferredPhases": validate_preferred_phases,
    "MaxConcurrent": validate_max_concurrent,
}


def validate_cell(field_name: str, value: CellValue) -> Optional[str]:
    """Run the validator registered for a canonical field; free-text fields always pass."""
    validator = FIELD_VALIDATORS.get(field_name)
    return validator(value) if validator else None

"""
Best-effort JSON recovery for free-text responses from external model services.

Only used at the collaborator boundary. Callers get None on total failure and must
fall back to their own safe default.
"""

import json
import re
from typing import Any, Optional

_FENCE_OPEN = re.compile(r"^```[a-zA-Z]*\n?")
_FENCE_CLOSE = re.compile(r"```$")
_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")
_ARRAY_PATTERN = re.compile(r"\[[\s\S]*\]")


def strip_code_fence(text: str) -> str:
    """Remove a surrounding ```json ... ``` block if present."""
    text = text.strip()
    if text.startswith("```"):
        text = _FENCE_CLOSE.sub("", _FENCE_OPEN.sub("", text)).strip()
    return text


def extract_json(text: Optional[str], expect: type = dict) -> Optional[Any]:
    """
    Parse ``text`` as JSON of type ``expect`` (dict or list).

    Tries the whole (fence-stripped) text first, then the largest ``{...}`` or
    ``[...]`` substring. Returns None if neither yields a value of the expected type.
    """
    if not text:
        return None
    text = strip_code_fence(text)

    try:
        parsed = json.loads(text)
    except ValueError:
        parsed = None
    if isinstance(parsed, expect):
        return parsed

    pattern = _ARRAY_PATTERN if expect is list else _OBJECT_PATTERN
    match = pattern.search(text)
    if not match:
        return None
    try:
        parsed = json.loads(match.group(0))
    except ValueError:
        return None
    return parsed if isinstance(parsed, expect) else None

import requests
from typing import Any, List, Sequence
from core.mapping import fallback_mapping, normalize_mapping_result
from exceptions.custom_errors import CollaboratorUnavailableError
from schemas.entities.tables import MappingResult
from utils.constants import MAPPING_SAMPLE_ROWS
from utils.json_extract import extract_json
from utils.logger import logger
from utils.helpers.collaborator import post_to_collaborator

HEADER_MAPPING_URL_ENV = "HEADER_MAPPING_URL"


def parse_mapping_response(text: str, raw_headers: Sequence[str]) -> MappingResult:
    """Recover a MappingResult from a raw service body, falling back to identity."""
    payload = extract_json(text, dict)
    if payload is None:
        logger.warning("Header mapping response contained no JSON object")
        return fallback_mapping(raw_headers, "Mapping service returned no usable JSON")
    return normalize_mapping_result(payload, raw_headers)


def map_headers(
    raw_headers: Sequence[str], sample_rows: Sequence[Sequence[Any]] = ()
) -> MappingResult:
    """
    Ask the header-mapping service which entity a section is and how its columns
    line up with the canonical fields.

    Never raises: any transport or format problem yields ``entity=None``, the raw
    headers and confidence 0.
    """
    headers: List[str] = [str(h) for h in raw_headers]
    payload = {
        "headers": headers,
        "sampleRows": [list(row) for row in sample_rows[:MAPPING_SAMPLE_ROWS]],
    }
    try:
        text = post_to_collaborator(HEADER_MAPPING_URL_ENV, payload)
    except (CollaboratorUnavailableError, requests.RequestException) as e:
        logger.warning("Header mapping unavailable, keeping raw headers: %s", e)
        return fallback_mapping(headers, f"API Error: {e}")

    return parse_mapping_response(text, headers)

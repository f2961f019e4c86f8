from utils.logger import get_logger
from typing import Any, List, Optional, Sequence, Tuple
from core.constraints import is_unmapped, to_number
from schemas.entities.tables import EntityTable, MappingResult
from schemas.rules.models import now_iso
from utils.constants import ENTITY_TYPES, EXPECTED_HEADERS, UNMAPPED_HEADER

logger = get_logger(__name__)


def fallback_mapping(raw_headers: Sequence[str], reasoning: str) -> MappingResult:
    """Identity result used whenever the mapping service cannot be trusted."""
    return MappingResult(
        entity=None,
        mappedHeaders=list(raw_headers),
        confidence=0.0,
        reasoning=reasoning,
        timestamp=now_iso(),
        inputHeaderCount=len(raw_headers),
        mappedHeaderCount=0,
    )


def clamp_confidence(value: Any) -> float:
    num = to_number(value)
    if num is None:
        return 0.0
    return max(0.0, min(1.0, num))


def normalize_mapping_result(payload: Any, raw_headers: Sequence[str]) -> MappingResult:
    """
    Turn whatever the header-mapping service returned into a safe MappingResult.

    - unknown or "null" entity labels become None
    - a header list of the wrong shape is replaced by the raw headers
    - unmapped entries are written as "null"
    - confidence is clamped into [0, 1]
    """
    if not isinstance(payload, dict):
        logger.warning("Mapping response is not an object; using raw headers")
        return fallback_mapping(raw_headers, "Mapping response was not a JSON object")

    entity = payload.get("entity")
    if entity not in ENTITY_TYPES:
        entity = None

    mapped = payload.get("mappedHeaders")
    if not isinstance(mapped, list) or len(mapped) != len(raw_headers):
        logger.warning(
            "Mapping response header list invalid (expected %d entries); using raw headers",
            len(raw_headers),
        )
        mapped = list(raw_headers)
        entity = None
    mapped = ["null" if is_unmapped(h) else str(h).strip() for h in mapped]

    timestamp = payload.get("timestamp")
    expected = EXPECTED_HEADERS.get(entity, [])
    return MappingResult(
        entity=entity,
        mappedHeaders=mapped,
        confidence=clamp_confidence(payload.get("confidence")),
        reasoning=str(payload.get("reasoning") or "No reasoning provided"),
        timestamp=timestamp if isinstance(timestamp, str) and timestamp else now_iso(),
        inputHeaderCount=len(raw_headers),
        mappedHeaderCount=sum(1 for h in mapped if h in expected),
    )


def align_to_schema(
    entity: str,
    rows: Sequence[Sequence[Any]],
    mapping: MappingResult,
) -> EntityTable:
    """
    Rebuild raw rows so column ``i`` holds canonical field ``i`` of ``entity``.

    ``mapping.mappedHeaders[j]`` names the canonical field raw column ``j`` feeds.
    Fields no raw column feeds get the unmapped placeholder header and empty cells.
    """
    sources: List[Optional[int]] = []
    for field in EXPECTED_HEADERS[entity]:
        try:
            sources.append(mapping.mappedHeaders.index(field))
        except ValueError:
            sources.append(None)

    headers = [
        field if src is not None else UNMAPPED_HEADER
        for field, src in zip(EXPECTED_HEADERS[entity], sources)
    ]
    data = [
        [row[src] if src is not None and src < len(row) else None for src in sources]
        for row in rows
    ]
    return EntityTable(headers=headers, data=data, mappingInfo=mapping)


def import_section(
    rows: Sequence[Sequence[Any]], mapping: MappingResult
) -> Optional[Tuple[str, EntityTable]]:
    """Aligned ``(entity, table)`` for a mapped section, or None when no entity was assigned."""
    if mapping.entity is None:
        logger.info("Section has no entity assigned; holding for manual handling")
        return None
    return mapping.entity, align_to_schema(mapping.entity, rows, mapping)

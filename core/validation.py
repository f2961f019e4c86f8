from utils.logger import get_logger
from typing import Dict
from core.relationships import validate_relationships
from core.row_validation import validate_table
from schemas.entities.tables import Entities, ValidationErrors
from utils.constants import ENTITY_TYPES

logger = get_logger(__name__)

RELATIONSHIP_MARKERS = ("not found", "not available")


def is_relationship_error(message: str) -> bool:
    """Cross-entity messages are worded "not found" / "not available"."""
    return any(marker in message for marker in RELATIONSHIP_MARKERS)


def count_relationship_errors(errors: ValidationErrors) -> int:
    return sum(
        is_relationship_error(message)
        for entity in ENTITY_TYPES
        for message in getattr(errors, entity).values()
    )


def merge_errors(
    schema_errors: Dict[str, Dict[str, str]], relationship_errors: Dict[str, str]
) -> ValidationErrors:
    """
    Fold the flat ``"entity-row-col"`` relationship map into per-entity schema maps.

    A relationship message replaces a schema message at the same cell; all other
    keys are kept.
    """
    merged = {entity: dict(schema_errors.get(entity, {})) for entity in ENTITY_TYPES}
    for key, message in relationship_errors.items():
        entity, cell = key.split("-", 1)
        merged[entity][cell] = message
    return ValidationErrors(**merged)


def validate_entities(entities: Entities) -> ValidationErrors:
    """Run one full validation cycle over a snapshot of the three entity tables."""
    schema_errors = {
        entity: validate_table(entity, entities.table(entity))
        for entity in ENTITY_TYPES
    }
    relationship_errors = validate_relationships(entities)
    errors = merge_errors(schema_errors, relationship_errors)

    logger.info(
        "Validated clients=%d workers=%d tasks=%d rows: %d errors (%d relationship)",
        len(entities.clients.data),
        len(entities.workers.data),
        len(entities.tasks.data),
        errors.total,
        count_relationship_errors(errors),
    )
    return errors

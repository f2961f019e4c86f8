from typing import Any, Dict, List, Type
from pydantic import BaseModel, ValidationError
from schemas.entities.rows import ENTITY_SCHEMAS
from schemas.entities.tables import EntityTable, cell_key
from exceptions.custom_errors import UnknownEntityError


def validate_row(
    schema: Type[BaseModel],
    row: Dict[str, Any],
    row_idx: int,
    headers: List[str],
) -> Dict[str, str]:
    """
    Validate one row, keyed by canonical field name, against an entity schema.

    Returns ``{"row-col": message}`` with at most one message per field. Failures on
    fields that are not in ``headers`` are dropped: an unmapped field has no column to
    report against.
    """
    try:
        schema.model_validate(row)
    except ValidationError as e:
        errs: Dict[str, str] = {}
        for issue in e.errors():
            if not issue["loc"]:
                continue
            field_name = issue["loc"][0]
            if field_name not in headers:
                continue
            key = cell_key(row_idx, headers.index(field_name))
            # first violation per field wins
            errs.setdefault(key, issue["msg"])
        return errs
    return {}


def validate_table(entity_type: str, table: EntityTable) -> Dict[str, str]:
    """Run the entity's row schema over every row of a table."""
    schema = ENTITY_SCHEMAS.get(entity_type)
    if schema is None:
        raise UnknownEntityError(f"Unknown entity type: {entity_type!r}")

    errors: Dict[str, str] = {}
    for row_idx in range(len(table.data)):
        errors.update(
            validate_row(schema, table.row_as_dict(row_idx), row_idx, table.headers)
        )
    return errors

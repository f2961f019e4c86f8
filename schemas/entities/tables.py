from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Literal, Optional
from utils.constants import ENTITY_TYPES, UNMAPPED_HEADER
from exceptions.custom_errors import UnknownEntityError

EntityType = Literal["clients", "workers", "tasks"]


class MappingResult(BaseModel):
    model_config = ConfigDict(extra="allow")

    entity: Optional[EntityType] = None
    mappedHeaders: List[Optional[str]] = Field(default_factory=list)
    confidence: float = 0.0
    reasoning: str = ""
    timestamp: Optional[str] = None
    inputHeaderCount: Optional[int] = None
    mappedHeaderCount: Optional[int] = None


class EntityTable(BaseModel):
    """
    One spreadsheet section after mapping.

    Column ``i`` holds canonical field ``i`` of the entity; a header equal to the
    unmapped placeholder means that field has no data source.
    """

    headers: List[str] = Field(default_factory=list)
    data: List[List[Any]] = Field(default_factory=list)
    mappingInfo: Optional[MappingResult] = None

    def column_index(self, field: str) -> int:
        """Position of a canonical field, or -1 when the header is missing."""
        try:
            return self.headers.index(field)
        except ValueError:
            return -1

    def column_values(self, field: str) -> List[Any]:
        idx = self.column_index(field)
        if idx == -1:
            return []
        return [row[idx] if idx < len(row) else None for row in self.data]

    def row_as_dict(self, row_idx: int) -> Dict[str, Any]:
        """Key a row by its headers, leaving out unmapped columns."""
        row = self.data[row_idx]
        return {
            header: (row[i] if i < len(row) else None)
            for i, header in enumerate(self.headers)
            if header != UNMAPPED_HEADER
        }


class Entities(BaseModel):
    clients: EntityTable = Field(default_factory=EntityTable)
    workers: EntityTable = Field(default_factory=EntityTable)
    tasks: EntityTable = Field(default_factory=EntityTable)

    def table(self, entity: str) -> EntityTable:
        if entity not in ENTITY_TYPES:
            raise UnknownEntityError(f"Unknown entity type: {entity!r}")
        return getattr(self, entity)


class ValidationErrors(BaseModel):
    """Per-entity error maps keyed ``"row-col"``."""

    clients: Dict[str, str] = Field(default_factory=dict)
    workers: Dict[str, str] = Field(default_factory=dict)
    tasks: Dict[str, str] = Field(default_factory=dict)

    @property
    def total(self) -> int:
        return len(self.clients) + len(self.workers) + len(self.tasks)


def cell_key(row_idx: int, col_idx: int) -> str:
    return f"{row_idx}-{col_idx}"

from pydantic import BaseModel, Field
from typing import Any, List, Optional
from schemas.entities.tables import EntityTable, EntityType, MappingResult


class MappingApplyRequest(BaseModel):
    headers: List[str]
    rows: List[List[Any]] = Field(default_factory=list)
    mapping: MappingResult


class MappingApplyResponse(BaseModel):
    imported: bool
    entity: Optional[EntityType] = None
    table: Optional[EntityTable] = None


class SectionPayload(BaseModel):
    name: str
    headers: List[str]
    rows: List[List[Any]] = Field(default_factory=list)

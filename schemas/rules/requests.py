from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional
from schemas.entities.tables import Entities
from schemas.rules.models import Rule, RuleType


class RuleValidationRequest(BaseModel):
    # raw payload so that shape problems come back as diagnostics
    rule: Dict[str, Any]
    entities: Entities = Field(default_factory=Entities)


class RulesValidationRequest(BaseModel):
    rules: List[Rule]
    entities: Entities = Field(default_factory=Entities)


class RuleDraftRequest(BaseModel):
    type: RuleType
    name: str = ""
    description: Optional[str] = None

from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional
from schemas.entities.tables import Entities, EntityType
from schemas.rules.models import Rule, RuleType


class HeaderMappingRequest(BaseModel):
    headers: List[str]
    sampleRows: List[List[Any]] = Field(default_factory=list)


class RuleRequestContext(BaseModel):
    model_config = ConfigDict(extra="allow")

    existingRules: List[Rule] = Field(default_factory=list)
    currentPhase: Optional[int] = None
    specificConstraints: Optional[List[str]] = None


class NaturalLanguageRuleRequest(BaseModel):
    request: str
    entities: Entities = Field(default_factory=Entities)
    context: Optional[RuleRequestContext] = None


class NaturalLanguageRuleResponse(BaseModel):
    success: bool
    rule: Optional[Rule] = None
    error: Optional[str] = None
    reasoning: str = ""
    confidence: float = 0.0
    validationIssues: Optional[List[str]] = None


class DataEvidence(BaseModel):
    model_config = ConfigDict(extra="allow")

    entity: Optional[EntityType] = None
    field: Optional[str] = None
    value: Any = None
    frequency: Optional[float] = None


class RuleSuggestion(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    type: RuleType
    title: str
    description: str = ""
    confidence: float
    reasoning: str = ""
    suggestedRule: Dict[str, Any]
    dataEvidence: List[DataEvidence] = Field(default_factory=list)


class RuleSuggestionsRequest(BaseModel):
    entities: Entities = Field(default_factory=Entities)
    existingRules: List[Rule] = Field(default_factory=list)


class RuleSuggestionsResponse(BaseModel):
    suggestions: List[RuleSuggestion] = Field(default_factory=list)
    totalFound: int = 0
    error: Optional[str] = None


class RuleGenerationResult(BaseModel):
    response: NaturalLanguageRuleResponse
    accepted: bool = False
    errors: List[str] = Field(default_factory=list)

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator
from typing import Annotated, Any, Dict, List, Literal, Optional, Union
from datetime import datetime, timezone
import random
import string
import time
from schemas.entities.tables import EntityType
from utils.constants import DEFAULT_RULE_PRIORITY

RuleType = Literal[
    "coRun",
    "slotRestriction",
    "loadLimit",
    "phaseWindow",
    "patternMatch",
    "precedenceOverride",
]

_ID_ALPHABET = string.ascii_lowercase + string.digits


def now_iso() -> str:
    """UTC timestamp in the ``2024-01-01T00:00:00.000Z`` form."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


def generate_rule_id(rule_type: str) -> str:
    """``<type>-<epoch ms>-<6 random base36 chars>``"""
    suffix = "".join(random.choices(_ID_ALPHABET, k=6))
    return f"{rule_type}-{int(time.time() * 1000)}-{suffix}"


# Define rule models
class BaseRule(BaseModel):
    """
    Envelope shared by every rule type.

    Parsing is lenient on purpose: a draft may have an empty name or an out-of-range
    priority and still be held in the rule set. ``core.rules.validate_rule`` reports
    those problems.
    """

    model_config = ConfigDict(extra="ignore")

    id: str
    type: RuleType
    name: str = ""
    description: Optional[str] = None
    priority: int = DEFAULT_RULE_PRIORITY
    enabled: bool = True
    createdAt: str = Field(default_factory=now_iso)
    updatedAt: str = Field(default_factory=now_iso)

    @model_validator(mode="before")
    @classmethod
    def assign_missing_id(cls, values: Any) -> Any:
        """Rules suggested by external services sometimes arrive without an id."""
        if isinstance(values, dict) and not values.get("id"):
            values = dict(values)
            values["id"] = generate_rule_id(values.get("type", "rule"))
        return values


class CoRunRule(BaseRule):
    type: Literal["coRun"] = "coRun"
    tasks: List[str] = Field(default_factory=list)
    minTasks: Optional[int] = None
    maxTasks: Optional[int] = None


class SlotRestrictionRule(BaseRule):
    type: Literal["slotRestriction"] = "slotRestriction"
    groupType: Optional[Literal["clientGroup", "workerGroup"]] = None
    groupName: str = ""
    minCommonSlots: Optional[int] = None
    phases: Optional[List[int]] = None


class LoadLimitRule(BaseRule):
    type: Literal["loadLimit"] = "loadLimit"
    workerGroup: str = ""
    maxSlotsPerPhase: Optional[int] = None
    phases: Optional[List[int]] = None


class PhaseRange(BaseModel):
    start: Optional[int] = None
    end: Optional[int] = None


class PhaseWindowRule(BaseRule):
    type: Literal["phaseWindow"] = "phaseWindow"
    taskId: str = ""
    allowedPhases: Union[List[int], PhaseRange] = Field(default_factory=list)
    strict: Optional[bool] = None


class PatternMatchRule(BaseRule):
    type: Literal["patternMatch"] = "patternMatch"
    regex: str = ""
    ruleTemplate: str = ""
    parameters: Dict[str, Any] = Field(default_factory=dict)
    targetEntity: Optional[EntityType] = None
    targetField: str = ""


class RuleCondition(BaseModel):
    field: str
    operator: Literal["equals", "notEquals", "greaterThan", "lessThan", "contains"]
    value: Any = None


class PrecedenceOverrideRule(BaseRule):
    type: Literal["precedenceOverride"] = "precedenceOverride"
    scope: Optional[Literal["global", "specific"]] = None
    specificEntity: Optional[EntityType] = None
    specificField: Optional[str] = None
    overrideValue: Any = None
    condition: Optional[RuleCondition] = None


Rule = Annotated[
    Union[
        CoRunRule,
        SlotRestrictionRule,
        LoadLimitRule,
        PhaseWindowRule,
        PatternMatchRule,
        PrecedenceOverrideRule,
    ],
    Field(discriminator="type"),
]

RULE_ADAPTER: TypeAdapter = TypeAdapter(Rule)

RULE_MODELS = {
    "coRun": CoRunRule,
    "slotRestriction": SlotRestrictionRule,
    "loadLimit": LoadLimitRule,
    "phaseWindow": PhaseWindowRule,
    "patternMatch": PatternMatchRule,
    "precedenceOverride": PrecedenceOverrideRule,
}


class RuleValidation(BaseModel):
    isValid: bool
    errors: List[str] = Field(default_factory=list)


class RulesConfigMetadata(BaseModel):
    createdAt: str
    updatedAt: str
    totalRules: int
    enabledRules: int


class RulesConfig(BaseModel):
    version: str
    rules: List[Rule]
    metadata: RulesConfigMetadata

"""
Business rule authoring: draft creation, lookups over entity data and the
structural validator that decides whether a rule is valid against the current tables.
"""

import re
from typing import Any, Callable, Dict, List, Optional
from pydantic import ValidationError
from core.constraints import cell_text
from core.relationships import collect_task_ids
from exceptions.custom_errors import InvalidRuleError
from schemas.entities.tables import Entities, EntityTable
from schemas.rules.models import (
    RULE_ADAPTER,
    RULE_MODELS,
    CoRunRule,
    LoadLimitRule,
    PatternMatchRule,
    PhaseRange,
    PhaseWindowRule,
    PrecedenceOverrideRule,
    Rule,
    RuleValidation,
    SlotRestrictionRule,
    generate_rule_id,
)
from utils.constants import EXPECTED_HEADERS, MAX_RULE_PRIORITY, MIN_RULE_PRIORITY

RULE_DISPLAY_NAMES = {
    "coRun": "Co-run",
    "slotRestriction": "Slot Restriction",
    "loadLimit": "Load Limit",
    "phaseWindow": "Phase Window",
    "patternMatch": "Pattern Match",
    "precedenceOverride": "Precedence Override",
}

RULE_DESCRIPTIONS = {
    "coRun": "Ensure specific tasks run together",
    "slotRestriction": "Limit availability for groups",
    "loadLimit": "Limit worker group capacity per phase",
    "phaseWindow": "Restrict when tasks can run",
    "patternMatch": "Apply rules based on data patterns",
    "precedenceOverride": "Override default values based on conditions",
}

# Defaults the authoring form starts a new rule of each type with
_DRAFT_DEFAULTS: Dict[str, Dict[str, Any]] = {
    "coRun": {"tasks": []},
    "slotRestriction": {"groupType": "workerGroup", "minCommonSlots": 1},
    "loadLimit": {"maxSlotsPerPhase": 1},
    "phaseWindow": {"allowedPhases": [], "strict": False},
    "patternMatch": {
        "regex": "",
        "ruleTemplate": "",
        "parameters": {},
        "targetEntity": "tasks",
        "targetField": "TaskName",
    },
    "precedenceOverride": {"scope": "global", "overrideValue": ""},
}


def get_rule_type_display_name(rule_type: str) -> str:
    return RULE_DISPLAY_NAMES[rule_type]


def get_rule_type_description(rule_type: str) -> str:
    return RULE_DESCRIPTIONS[rule_type]


def create_base_rule(
    rule_type: str, name: str = "", description: Optional[str] = None
) -> Rule:
    """Start a draft rule of the given type with a fresh id and timestamps."""
    model = RULE_MODELS.get(rule_type)
    if model is None:
        raise InvalidRuleError(f"Unknown rule type: {rule_type!r}")
    return model(
        id=generate_rule_id(rule_type),
        name=name,
        description=description,
        **_DRAFT_DEFAULTS[rule_type],
    )


def parse_rule(payload: Any) -> Rule:
    """Parse a raw mapping into one of the rule types, raising InvalidRuleError."""
    try:
        return RULE_ADAPTER.validate_python(payload)
    except ValidationError as e:
        issues = [
            f"{'.'.join(str(p) for p in err['loc']) or 'rule'}: {err['msg']}"
            for err in e.errors()
        ]
        raise InvalidRuleError("Rule payload does not match any rule type", issues)


# == Entity lookups ==
def _distinct_values(table: EntityTable, field: str) -> List[str]:
    seen: Dict[str, None] = {}
    for value in table.column_values(field):
        text = cell_text(value)
        if text:
            seen.setdefault(text, None)
    return list(seen)


def get_available_task_ids(entities: Entities) -> List[str]:
    return _distinct_values(entities.tasks, "TaskID")


def get_available_worker_groups(entities: Entities) -> List[str]:
    return _distinct_values(entities.workers, "WorkerGroup")


def get_available_client_groups(entities: Entities) -> List[str]:
    return _distinct_values(entities.clients, "GroupTag")


# == Type-specific checks ==
def _check_phases(phases: Optional[List[int]], errors: List[str]) -> None:
    if phases and any(p < 1 for p in phases):
        errors.append("Phases must be positive integers")


def _check_co_run(rule: CoRunRule, entities: Entities, errors: List[str]) -> None:
    if len(rule.tasks) < 2:
        errors.append("Co-run rule requires at least 2 tasks")
    if rule.tasks:
        valid_task_ids = collect_task_ids(entities.tasks)
        invalid_tasks = [t for t in rule.tasks if t.strip() not in valid_task_ids]
        if invalid_tasks:
            errors.append(f"Invalid task IDs: {', '.join(invalid_tasks)}")
    if (
        rule.minTasks is not None
        and rule.maxTasks is not None
        and rule.minTasks > rule.maxTasks
    ):
        errors.append("Minimum tasks cannot exceed maximum tasks")


def _check_slot_restriction(
    rule: SlotRestrictionRule, entities: Entities, errors: List[str]
) -> None:
    if rule.groupType is None:
        errors.append("Group type must be clientGroup or workerGroup")
    if not rule.groupName.strip():
        errors.append("Group name is required for slot restriction rule")
    if rule.minCommonSlots is None or rule.minCommonSlots < 1:
        errors.append("Minimum common slots must be at least 1")

    if rule.groupName.strip():
        if rule.groupType == "workerGroup":
            if rule.groupName.strip() not in get_available_worker_groups(entities):
                errors.append(f'Worker group "{rule.groupName}" not found in data')
        elif rule.groupType == "clientGroup":
            if rule.groupName.strip() not in get_available_client_groups(entities):
                errors.append(f'Client group "{rule.groupName}" not found in data')
    _check_phases(rule.phases, errors)


def _check_load_limit(
    rule: LoadLimitRule, entities: Entities, errors: List[str]
) -> None:
    if not rule.workerGroup.strip():
        errors.append("Worker group is required for load limit rule")
    elif rule.workerGroup.strip() not in get_available_worker_groups(entities):
        errors.append(f'Worker group "{rule.workerGroup}" not found in data')
    if rule.maxSlotsPerPhase is None or rule.maxSlotsPerPhase < 1:
        errors.append("Maximum slots per phase must be at least 1")
    _check_phases(rule.phases, errors)


def _check_phase_window(
    rule: PhaseWindowRule, entities: Entities, errors: List[str]
) -> None:
    if not rule.taskId.strip():
        errors.append("Task ID is required for phase window rule")
    elif rule.taskId.strip() not in collect_task_ids(entities.tasks):
        errors.append(f'Task ID "{rule.taskId}" not found in data')

    phases = rule.allowedPhases
    if isinstance(phases, PhaseRange):
        if phases.start is None and phases.end is None:
            errors.append("Allowed phases must be specified")
        elif phases.start is None or phases.end is None:
            errors.append("Allowed phase range needs both start and end")
        elif phases.start < 1:
            errors.append("Allowed phases must be positive integers")
        elif phases.start > phases.end:
            errors.append("Allowed phase range start must not exceed end")
    elif not phases:
        errors.append("Allowed phases must be specified")
    elif any(p < 1 for p in phases):
        errors.append("Allowed phases must be positive integers")


def _check_pattern_match(
    rule: PatternMatchRule, entities: Entities, errors: List[str]
) -> None:
    if not rule.regex.strip():
        errors.append("Regex pattern is required for pattern match rule")
    if not rule.ruleTemplate.strip():
        errors.append("Rule template is required for pattern match rule")
    if rule.targetEntity is None or not rule.targetField.strip():
        errors.append("Target entity and field are required for pattern match rule")
    elif rule.targetField not in EXPECTED_HEADERS[rule.targetEntity]:
        errors.append(
            f'Target field "{rule.targetField}" is not a field of {rule.targetEntity}'
        )

    try:
        re.compile(rule.regex)
    except re.error as e:
        errors.append(f"Invalid regex pattern: {e}")


def _check_precedence_override(
    rule: PrecedenceOverrideRule, entities: Entities, errors: List[str]
) -> None:
    if rule.scope is None:
        errors.append("Scope is required for precedence override rule")
    if rule.scope == "specific":
        if not rule.specificEntity or not rule.specificField:
            errors.append(
                "Specific entity and field are required for specific scope precedence override"
            )
        elif rule.specificField not in EXPECTED_HEADERS[rule.specificEntity]:
            errors.append(
                f'Field "{rule.specificField}" is not a field of {rule.specificEntity}'
            )
    if rule.overrideValue is None:
        errors.append("Override value is required for precedence override rule")
    if rule.condition is not None and not rule.condition.field.strip():
        errors.append("Condition field is required when a condition is given")


# rule type -> type-specific checks; must cover every rule model
RULE_CHECKS: Dict[str, Callable[[Any, Entities, List[str]], None]] = {
    "coRun": _check_co_run,
    "slotRestriction": _check_slot_restriction,
    "loadLimit": _check_load_limit,
    "phaseWindow": _check_phase_window,
    "patternMatch": _check_pattern_match,
    "precedenceOverride": _check_precedence_override,
}


def validate_rule(rule: Rule, entities: Entities) -> RuleValidation:
    """
    Check a rule against its structural invariants and the current entity tables.

    Common checks (non-empty name, priority range) run first, then the checks for
    the rule's type. Every violation is collected; nothing short-circuits. The
    ``enabled`` flag plays no part in validity.
    """
    errors: List[str] = []

    if not rule.name or not rule.name.strip():
        errors.append("Rule name is required")

    if rule.priority < MIN_RULE_PRIORITY or rule.priority > MAX_RULE_PRIORITY:
        errors.append(
            f"Priority must be between {MIN_RULE_PRIORITY} and {MAX_RULE_PRIORITY}"
        )

    check = RULE_CHECKS.get(rule.type)
    if check is None:
        raise InvalidRuleError(f"No checks registered for rule type {rule.type!r}")
    check(rule, entities, errors)

    return RuleValidation(isValid=not errors, errors=errors)

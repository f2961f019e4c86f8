import re
import pytest
from core.rules import (
    RULE_CHECKS,
    create_base_rule,
    get_available_client_groups,
    get_available_task_ids,
    get_available_worker_groups,
    get_rule_type_display_name,
    parse_rule,
    validate_rule,
)
from exceptions.custom_errors import InvalidRuleError
from schemas.rules.models import (
    RULE_MODELS,
    CoRunRule,
    LoadLimitRule,
    PatternMatchRule,
    PhaseRange,
    PhaseWindowRule,
    PrecedenceOverrideRule,
    SlotRestrictionRule,
    generate_rule_id,
)


def test_every_rule_type_has_checks():
    assert set(RULE_CHECKS) == set(RULE_MODELS)


def test_generated_id_shape():
    assert re.fullmatch(r"coRun-\d+-[a-z0-9]{6}", generate_rule_id("coRun"))


def test_lookups(entities):
    assert get_available_task_ids(entities) == ["T1", "T2", "T3"]
    assert get_available_worker_groups(entities) == ["GroupA", "GroupB"]
    assert get_available_client_groups(entities) == ["GroupA", "GroupB"]


def test_co_run_needs_two_tasks(entities):
    rule = CoRunRule(id="r1", name="Pair", tasks=["T1"])
    result = validate_rule(rule, entities)
    assert not result.isValid
    assert "Co-run rule requires at least 2 tasks" in result.errors


def test_co_run_unknown_tasks(entities):
    rule = CoRunRule(id="r1", name="Pair", tasks=["T1", "T9"])
    assert validate_rule(rule, entities).errors == ["Invalid task IDs: T9"]


def test_co_run_valid(entities):
    rule = CoRunRule(id="r1", name="Pair", tasks=["T1", "T2"], minTasks=2, maxTasks=2)
    assert validate_rule(rule, entities).isValid


def test_common_checks_collect_all_errors(entities):
    rule = CoRunRule(id="r1", name=" ", priority=11, tasks=[])
    assert validate_rule(rule, entities).errors == [
        "Rule name is required",
        "Priority must be between 1 and 10",
        "Co-run rule requires at least 2 tasks",
    ]


def test_enabled_flag_does_not_change_validity(entities):
    rule = CoRunRule(id="r1", name="Pair", tasks=["T1"], enabled=False)
    assert not validate_rule(rule, entities).isValid
    rule = CoRunRule(id="r2", name="Pair", tasks=["T1", "T2"], enabled=False)
    assert validate_rule(rule, entities).isValid


def test_slot_restriction(entities):
    rule = SlotRestrictionRule(
        id="r1", name="A", groupType="workerGroup", groupName="GroupA", minCommonSlots=2
    )
    assert validate_rule(rule, entities).isValid

    rule = SlotRestrictionRule(
        id="r2", name="A", groupType="workerGroup", groupName="GroupZ", minCommonSlots=0
    )
    assert validate_rule(rule, entities).errors == [
        "Minimum common slots must be at least 1",
        'Worker group "GroupZ" not found in data',
    ]


def test_load_limit(entities):
    rule = LoadLimitRule(id="r1", name="Cap", workerGroup="GroupB", maxSlotsPerPhase=3)
    assert validate_rule(rule, entities).isValid

    rule = LoadLimitRule(id="r2", name="Cap", workerGroup="", phases=[0])
    assert validate_rule(rule, entities).errors == [
        "Worker group is required for load limit rule",
        "Maximum slots per phase must be at least 1",
        "Phases must be positive integers",
    ]


def test_phase_window(entities):
    ok = PhaseWindowRule(id="r1", name="W", taskId="T1", allowedPhases=[1, 2])
    assert validate_rule(ok, entities).isValid
    ranged = PhaseWindowRule(
        id="r2", name="W", taskId="T2", allowedPhases=PhaseRange(start=2, end=4)
    )
    assert validate_rule(ranged, entities).isValid

    empty = PhaseWindowRule(id="r3", name="W", taskId="T9", allowedPhases=[])
    assert validate_rule(empty, entities).errors == [
        'Task ID "T9" not found in data',
        "Allowed phases must be specified",
    ]
    backwards = PhaseWindowRule(
        id="r4", name="W", taskId="T1", allowedPhases=PhaseRange(start=4, end=2)
    )
    assert not validate_rule(backwards, entities).isValid


def test_pattern_match_bad_regex(entities):
    rule = PatternMatchRule(
        id="r1",
        name="P",
        regex="(",
        ruleTemplate="tag",
        targetEntity="tasks",
        targetField="TaskName",
    )
    result = validate_rule(rule, entities)
    assert not result.isValid
    assert len(result.errors) == 1
    assert result.errors[0].startswith("Invalid regex pattern:")


def test_pattern_match_missing_fields(entities):
    rule = PatternMatchRule(id="r1", name="P", regex="^T")
    assert validate_rule(rule, entities).errors == [
        "Rule template is required for pattern match rule",
        "Target entity and field are required for pattern match rule",
    ]


def test_pattern_match_target_field_must_exist(entities):
    rule = PatternMatchRule(
        id="r1",
        name="P",
        regex="^T",
        ruleTemplate="tag",
        targetEntity="workers",
        targetField="TaskName",
    )
    assert validate_rule(rule, entities).errors == [
        'Target field "TaskName" is not a field of workers'
    ]


def test_precedence_override(entities):
    rule = PrecedenceOverrideRule(id="r1", name="O", scope="global", overrideValue=3)
    assert validate_rule(rule, entities).isValid

    rule = PrecedenceOverrideRule(id="r2", name="O", scope="specific")
    assert validate_rule(rule, entities).errors == [
        "Specific entity and field are required for specific scope precedence override",
        "Override value is required for precedence override rule",
    ]


def test_parse_rule_dispatches_on_type():
    rule = parse_rule({"id": "x", "type": "loadLimit", "name": "L", "workerGroup": "A"})
    assert isinstance(rule, LoadLimitRule)


def test_parse_rule_assigns_missing_id():
    rule = parse_rule({"type": "coRun", "name": "Pair", "tasks": ["T1", "T2"]})
    assert rule.id.startswith("coRun-")


def test_parse_rule_unknown_type():
    with pytest.raises(InvalidRuleError) as exc:
        parse_rule({"id": "x", "type": "teleport"})
    assert exc.value.issues


@pytest.mark.parametrize("rule_type", sorted(RULE_MODELS))
def test_create_base_rule(rule_type):
    rule = create_base_rule(rule_type, "New rule")
    assert isinstance(rule, RULE_MODELS[rule_type])
    assert rule.priority == 5
    assert rule.enabled
    assert rule.id.startswith(f"{rule_type}-")
    assert get_rule_type_display_name(rule_type)


def test_create_base_rule_unknown_type():
    with pytest.raises(InvalidRuleError):
        create_base_rule("teleport")

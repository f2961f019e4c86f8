import json
from core.rules_config import dump_rules_config, generate_rules_config, load_rules_config
from schemas.rules.models import CoRunRule, LoadLimitRule, PhaseWindowRule


def make_rules():
    return [
        CoRunRule(id="a", name="a", priority=3, tasks=["T1", "T2"]),
        LoadLimitRule(id="b", name="b", priority=8, workerGroup="GroupA", maxSlotsPerPhase=2),
        CoRunRule(id="c", name="c", priority=3, tasks=["T2", "T3"], enabled=False),
        PhaseWindowRule(id="d", name="d", priority=10, taskId="T1", allowedPhases=[1]),
    ]


def test_rules_sorted_by_descending_priority_stable():
    config = generate_rules_config(make_rules())
    assert [r.id for r in config.rules] == ["d", "b", "a", "c"]


def test_metadata_counts():
    config = generate_rules_config(make_rules())
    assert config.version == "1.0.0"
    assert config.metadata.totalRules == 4
    assert config.metadata.enabledRules == 3
    assert config.metadata.createdAt == config.metadata.updatedAt


def test_input_is_not_reordered_or_shared():
    rules = make_rules()
    config = generate_rules_config(rules)
    assert [r.id for r in rules] == ["a", "b", "c", "d"]
    config.rules[0].name = "changed"
    assert rules[3].name == "d"


def test_invalid_rules_are_exported():
    rules = [CoRunRule(id="bad", name="", tasks=[])]
    config = generate_rules_config(rules)
    assert config.metadata.totalRules == 1


def test_empty_rule_set():
    config = generate_rules_config([])
    assert config.rules == []
    assert config.metadata.totalRules == 0
    assert config.metadata.enabledRules == 0


def test_dumped_document_shape():
    doc = json.loads(dump_rules_config(generate_rules_config(make_rules())))
    assert set(doc) == {"version", "rules", "metadata"}
    assert [r["type"] for r in doc["rules"]] == ["phaseWindow", "loadLimit", "coRun", "coRun"]
    # unset optional fields are left out of the file
    assert "minTasks" not in doc["rules"][2]


def test_dumped_config_loads_back():
    config = generate_rules_config(make_rules())
    loaded = load_rules_config(dump_rules_config(config))
    assert isinstance(loaded.rules[0], PhaseWindowRule)
    assert loaded.metadata == config.metadata

from core.validation import (
    count_relationship_errors,
    is_relationship_error,
    merge_errors,
    validate_entities,
)


def test_relationship_message_wins_at_same_cell():
    merged = merge_errors(
        {"clients": {"1-3": "RequestedTaskIDs is required", "0-0": "ClientID is required"}},
        {"clients-1-3": "Requested tasks not found: T9", "tasks-0-4": "Required skills not available: x"},
    )
    assert merged.clients == {
        "1-3": "Requested tasks not found: T9",
        "0-0": "ClientID is required",
    }
    assert merged.tasks == {"0-4": "Required skills not available: x"}
    assert merged.workers == {}


def test_is_relationship_error():
    assert is_relationship_error("Requested tasks not found: T9")
    assert is_relationship_error("Required skills not available: welding")
    assert not is_relationship_error("PriorityLevel must be between 1 and 5")


def test_full_cycle_on_sample_data(entities):
    errors = validate_entities(entities)
    assert errors.clients == {"1-3": "Requested tasks not found: T9"}
    assert errors.tasks == {"2-4": "Required skills not available: welding"}
    assert errors.workers == {}
    assert errors.total == 2


def test_full_cycle_mixes_schema_and_relationship_errors(entities):
    entities.workers.data[0][6] = "12"
    entities.clients.data[0][0] = None
    errors = validate_entities(entities)
    assert errors.workers == {"0-6": "QualificationLevel must be between 1 and 10"}
    assert errors.clients["0-0"] == "ClientID is required"
    assert errors.total == 4


def test_cycle_log_counts_relationship_errors(entities, caplog):
    entities.workers.data[0][6] = "12"
    with caplog.at_level("INFO", logger="validation"):
        errors = validate_entities(entities)
    assert count_relationship_errors(errors) == 2
    assert "3 errors (2 relationship)" in caplog.text

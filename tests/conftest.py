import pytest
from schemas.entities.tables import Entities, EntityTable
from utils.constants import EXPECTED_HEADERS


def make_table(entity, rows):
    return EntityTable(headers=list(EXPECTED_HEADERS[entity]), data=[list(r) for r in rows])


CLIENT_ROWS = [
    ["C1", "Acme", "3", "T1,T2", "GroupA", '{"vip": true}'],
    ["C2", "Beta", "2", "T1,T9", "GroupB", ""],
]

WORKER_ROWS = [
    ["W1", "Ann", "coding, testing", "[1,2,3]", "2", "GroupA", "5"],
    ["W2", "Bob", "Design", "1,2", "1", "GroupB", ""],
]

TASK_ROWS = [
    ["T1", "Build", "dev", "2", "coding", "1-3", "2"],
    ["T2", "Review", "qa", "1", "Testing", "[2,3]", "1"],
    ["T3", "Weld", "ops", "1", "welding", "2", "1"],
]


@pytest.fixture
def entities():
    """
    Small but complete data set with exactly two cross-entity problems:
    client C2 requests the unknown task T9, and task T3 needs a skill no worker has.
    """
    return Entities(
        clients=make_table("clients", CLIENT_ROWS),
        workers=make_table("workers", WORKER_ROWS),
        tasks=make_table("tasks", TASK_ROWS),
    )


@pytest.fixture
def no_collaborators(monkeypatch):
    for name in ("HEADER_MAPPING_URL", "RULE_GENERATION_URL", "RULE_SUGGESTIONS_URL"):
        monkeypatch.delenv(name, raising=False)

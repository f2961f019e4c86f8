import json
import pytest
from fastapi.testclient import TestClient
from main import app, is_public_path


@pytest.fixture
def client(monkeypatch, no_collaborators):
    monkeypatch.delenv("API_KEY", raising=False)
    return TestClient(app)


@pytest.fixture
def payload(entities):
    return entities.model_dump(mode="json")


def test_health_check(client):
    resp = client.get("/api/health/check")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"
    assert resp.json()["collaborators"]["headerMapping"] is False


def test_api_key_required_when_configured(monkeypatch, payload):
    monkeypatch.setenv("API_KEY", "s3cret")
    client = TestClient(app)
    assert client.post("/api/validate/entities", json=payload).status_code == 401
    resp = client.post("/api/validate/entities", json=payload, headers={"x-api-key": "s3cret"})
    assert resp.status_code == 200
    assert client.get("/api/health/check").status_code == 200


def test_validate_entities(client, payload):
    resp = client.post("/api/validate/entities", json=payload)
    assert resp.status_code == 200
    assert resp.json() == {
        "clients": {"1-3": "Requested tasks not found: T9"},
        "workers": {},
        "tasks": {"2-4": "Required skills not available: welding"},
    }


def test_validate_rule(client, payload):
    rule = {"id": "r1", "type": "coRun", "name": "Pair", "tasks": ["T1"]}
    resp = client.post("/api/validate/rule", json={"rule": rule, "entities": payload})
    assert resp.status_code == 200
    assert resp.json() == {
        "isValid": False,
        "errors": ["Co-run rule requires at least 2 tasks"],
    }


def test_validate_rule_with_unknown_type(client):
    resp = client.post("/api/validate/rule", json={"rule": {"type": "teleport"}})
    assert resp.status_code == 200
    assert resp.json()["isValid"] is False
    assert resp.json()["errors"]


def test_validate_rule_set(client, payload):
    rules = [
        {"id": "a", "type": "loadLimit", "name": "Cap", "workerGroup": "GroupA", "maxSlotsPerPhase": 2},
        {"id": "b", "type": "phaseWindow", "name": "Win", "taskId": "T9", "allowedPhases": [1]},
    ]
    resp = client.post("/api/validate/rules", json={"rules": rules, "entities": payload})
    assert resp.json()["a"]["isValid"] is True
    assert resp.json()["b"]["errors"] == ['Task ID "T9" not found in data']


def test_rules_config(client):
    rules = [
        {"id": "low", "type": "coRun", "name": "Low", "priority": 2, "tasks": ["T1", "T2"]},
        {"id": "high", "type": "coRun", "name": "High", "priority": 9, "tasks": ["T1", "T3"], "enabled": False},
    ]
    resp = client.post("/api/rules/config", json=rules)
    body = resp.json()
    assert resp.status_code == 200
    assert [r["id"] for r in body["rules"]] == ["high", "low"]
    assert body["metadata"]["totalRules"] == 2
    assert body["metadata"]["enabledRules"] == 1


def test_rules_config_duplicate_ids(client):
    rule = {"id": "same", "type": "coRun", "name": "x"}
    assert client.post("/api/rules/config", json=[rule, rule]).status_code == 409


def test_draft_rule(client):
    resp = client.post("/api/rules/draft", json={"type": "phaseWindow", "name": "Window"})
    body = resp.json()
    assert resp.status_code == 200
    assert body["type"] == "phaseWindow"
    assert body["priority"] == 5
    assert body["allowedPhases"] == []


def test_generate_rule_without_service(client, payload):
    resp = client.post("/api/rules/generate", json={"request": "pair T1 and T2", "entities": payload})
    assert resp.status_code == 200
    assert resp.json()["accepted"] is False
    assert resp.json()["response"]["success"] is False


def test_suggestions_without_service(client, payload):
    resp = client.post("/api/rules/suggestions", json={"entities": payload})
    assert resp.status_code == 200
    assert resp.json()["suggestions"] == []
    assert resp.json()["error"]


def test_map_headers_without_service(client):
    resp = client.post("/api/mapping/headers", json={"headers": ["Name", "ID"]})
    assert resp.status_code == 200
    assert resp.json()["entity"] is None
    assert resp.json()["mappedHeaders"] == ["Name", "ID"]


def test_apply_mapping(client):
    body = {
        "headers": ["ID", "Name"],
        "rows": [["W1", "Ann"]],
        "mapping": {"entity": "workers", "mappedHeaders": ["WorkerID", "WorkerName"], "confidence": 0.9},
    }
    resp = client.post("/api/mapping/apply", json=body)
    result = resp.json()
    assert result["imported"] is True
    assert result["entity"] == "workers"
    assert result["table"]["headers"][:3] == ["WorkerID", "WorkerName", "unmapped"]
    assert result["table"]["data"] == [["W1", "Ann", None, None, None, None, None]]


def test_apply_mapping_length_mismatch(client):
    body = {"headers": ["ID", "Name"], "rows": [], "mapping": {"entity": "workers", "mappedHeaders": ["WorkerID"]}}
    assert client.post("/api/mapping/apply", json=body).status_code == 400


def test_load_sections(client):
    content = b"TaskID,TaskName\nT1,Build\n\nWorkerID\nW1\n"
    resp = client.post("/api/mapping/sections", params={"filename": "data.csv"}, content=content)
    assert resp.status_code == 200
    assert [s["headers"] for s in resp.json()] == [["TaskID", "TaskName"], ["WorkerID"]]


def test_load_sections_bad_file(client):
    resp = client.post("/api/mapping/sections", params={"filename": "data.pdf"}, content=b"x")
    assert resp.status_code == 400


def test_export_csv(client, payload):
    resp = client.post("/api/export/csv/tasks", json=payload)
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    assert resp.text.startswith("TaskID,TaskName")

    resp = client.post("/api/export/csv/all", json=payload)
    assert "# WORKERS DATA" in resp.text

    assert client.post("/api/export/csv/vendors", json=payload).status_code == 400


def test_export_xlsx(client, payload):
    resp = client.post("/api/export/xlsx", json=payload)
    assert resp.status_code == 200
    assert resp.content[:2] == b"PK"


def test_export_rules(client):
    rules = [{"id": "a", "type": "coRun", "name": "Pair", "tasks": ["T1", "T2"]}]
    resp = client.post("/api/export/rules", json=rules)
    assert "rules-config.json" in resp.headers["content-disposition"]
    doc = json.loads(resp.text)
    assert doc["version"] == "1.0.0"
    assert doc["rules"][0]["type"] == "coRun"


def test_export_single_entity_xlsx(client, payload):
    resp = client.post("/api/export/xlsx", params={"entity": "tasks"}, json=payload)
    assert resp.status_code == 200
    assert 'filename="tasks.xlsx"' in resp.headers["content-disposition"]
    assert client.post("/api/export/xlsx", params={"entity": "vendors"}, json=payload).status_code == 400


def test_rule_types_catalog(client):
    resp = client.get("/api/rules/types")
    types = {item["type"]: item for item in resp.json()}
    assert len(types) == 6
    assert types["coRun"]["displayName"] == "Co-run"
    assert types["phaseWindow"]["description"] == "Restrict when tasks can run"


def test_public_paths():
    assert is_public_path("/api/health/check")
    assert is_public_path("/docs")
    assert is_public_path("/docs/oauth2-redirect")
    assert not is_public_path("/api/validate/entities")


def test_openapi_marks_only_health_check_public(client):
    schema = client.get("/openapi.json").json()
    assert schema["components"]["securitySchemes"]["ApiKeyAuth"]["name"] == "x-api-key"
    assert schema["paths"]["/api/health/check"]["get"]["security"] == []
    assert schema["paths"]["/api/validate/entities"]["post"]["security"] == [{"ApiKeyAuth": []}]

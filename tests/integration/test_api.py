from __future__ import annotations

import json
import uuid

import httpx
import pytest
from fastapi.testclient import TestClient

from udyam_intake.core.config import Settings
from udyam_intake.main import create_app
from udyam_intake.services.postal_lookup import PostalLookupClient


def _settings(tmp_path, schema_path, **overrides) -> Settings:
    values = {
        "SCHEMA_PATH": str(schema_path),
        "SQLALCHEMY_DATABASE_URI": f"sqlite+aiosqlite:///{tmp_path / 'intake.db'}",
        "APP_ENV": "test",
        "LOG_LEVEL": "WARNING",
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def client(tmp_path, schema_file):
    with TestClient(create_app(_settings(tmp_path, schema_file))) as test_client:
        yield test_client


def test_health(client) -> None:
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json() == {"ok": True}


def test_schema_is_served_as_authored(client, schema_payload) -> None:
    response = client.get("/api/schema")

    assert response.status_code == 200
    assert response.json() == schema_payload


def test_schema_keeps_keys_the_models_do_not_declare(tmp_path, schema_payload) -> None:
    schema_payload["steps"][0]["description"] = "Aadhaar verification with OTP"
    schema_payload["steps"][0]["fields"][0]["maxLengthHint"] = 12
    path = tmp_path / "scraped.json"
    path.write_text(json.dumps(schema_payload), encoding="utf-8")

    with TestClient(create_app(_settings(tmp_path, path))) as test_client:
        response = test_client.get("/api/schema")

    assert response.status_code == 200
    body = response.json()
    assert body["steps"][0]["description"] == "Aadhaar verification with OTP"
    assert body["steps"][0]["fields"][0]["maxLengthHint"] == 12
    assert body == schema_payload


def test_schema_failure_is_500_but_app_stays_up(tmp_path) -> None:
    app = create_app(_settings(tmp_path, tmp_path / "missing.json"))

    with TestClient(app) as test_client:
        response = test_client.get("/api/schema")
        health = test_client.get("/api/health")

    assert response.status_code == 500
    assert response.json()["error"] == "configuration_error"
    assert health.status_code == 200


def test_schema_with_malformed_json_is_500(tmp_path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{", encoding="utf-8")

    with TestClient(create_app(_settings(tmp_path, path))) as test_client:
        assert test_client.get("/api/schema").status_code == 500


# ─── /validate ────────────────────────────────────────────

def test_validate_accepts_valid_pan(client) -> None:
    response = client.post("/api/validate", json={"stepId": "pan_validation", "data": {"pan": "ABCDE1234F"}})

    assert response.status_code == 200
    assert response.json() == {"ok": True}


def test_validate_rejects_invalid_pan(client) -> None:
    response = client.post("/api/validate", json={"stepId": "pan_validation", "data": {"pan": "BADPAN"}})

    assert response.status_code == 400
    assert response.json() == {"errors": [{"field": "pan", "kind": "pattern", "message": "Invalid format"}]}


def test_validate_aadhaar_step(client) -> None:
    data = {"aadhaarNumber": "123456789012", "entrepreneurName": "A", "consent": True, "pinCode": "400001"}

    ok = client.post("/api/validate", json={"stepId": "aadhaar_otp", "data": data})
    bad = client.post("/api/validate", json={"stepId": "aadhaar_otp", "data": {**data, "consent": False}})

    assert ok.status_code == 200
    assert bad.status_code == 400
    assert [e["field"] for e in bad.json()["errors"]] == ["consent"]


def test_validate_unknown_step_is_400(client) -> None:
    response = client.post("/api/validate", json={"stepId": "unknown_step", "data": {}})

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "unknown_step"
    assert body["errors"][0]["field"] == "stepId"


def test_validate_without_step_id_is_400(client) -> None:
    response = client.post("/api/validate", json={"data": {"pan": "ABCDE1234F"}})

    assert response.status_code == 400
    assert response.json()["errors"][0] == {"field": "stepId", "kind": "required", "message": "Field required"}


def test_validate_with_non_json_body_is_400(client) -> None:
    response = client.post("/api/validate", content=b"not json", headers={"content-type": "application/json"})

    assert response.status_code == 400


# ─── /submit ──────────────────────────────────────────────

def test_submit_persists_and_returns_id(client) -> None:
    response = client.post("/api/submit", json={"stepId": "pan_validation", "pan": "ABCDE1234F"})

    assert response.status_code == 200
    body = response.json()
    assert body["ok"] is True
    assert uuid.UUID(body["id"])


def test_each_submit_creates_a_new_record(client) -> None:
    payload = {"stepId": "aadhaar_otp", "aadhaarNumber": "123456789012", "consent": True}

    first = client.post("/api/submit", json=payload).json()["id"]
    second = client.post("/api/submit", json=payload).json()["id"]

    assert first != second


def test_submit_shape_mismatch_is_400(client) -> None:
    response = client.post("/api/submit", json={"stepId": "pan_validation", "consent": "yes"})

    assert response.status_code == 400
    assert response.json() == {"errors": [{"field": "consent", "kind": "type", "message": "Expected a boolean"}]}


def test_submit_unknown_step_is_400(client) -> None:
    response = client.post("/api/submit", json={"stepId": "final", "pan": "ABCDE1234F"})

    assert response.status_code == 400
    assert response.json()["errors"][0]["kind"] == "unknown_step"


def test_submit_body_must_be_object(client) -> None:
    response = client.post("/api/submit", content=json.dumps(["pan"]), headers={"content-type": "application/json"})

    assert response.status_code == 400


def test_submit_persistence_failure_is_500(client, failing_store) -> None:
    client.app.state.validation_service.store = failing_store

    response = client.post("/api/submit", json={"stepId": "pan_validation", "pan": "ABCDE1234F"})

    assert response.status_code == 500
    assert response.json()["error"] == "database_error"


def test_submit_with_enforced_step_rules(tmp_path, schema_file) -> None:
    app = create_app(_settings(tmp_path, schema_file, SUBMIT_ENFORCE_STEP_RULES=True))

    with TestClient(app) as test_client:
        response = test_client.post("/api/submit", json={"stepId": "pan_validation", "pan": "BADPAN"})

    assert response.status_code == 400
    assert response.json()["errors"][0]["kind"] == "pattern"


# ─── /pincode ─────────────────────────────────────────────

def test_pincode_lookup(client) -> None:
    payload = [{"PostOffice": [{"District": "Mumbai", "State": "Maharashtra"}]}]
    client.app.state.postal_lookup = PostalLookupClient(
        "https://pins.example",
        transport=httpx.MockTransport(lambda request: httpx.Response(200, json=payload)),
    )

    found = client.get("/api/pincode/400001")
    malformed = client.get("/api/pincode/12ab")

    assert found.status_code == 200
    assert found.json() == {"city": "Mumbai", "state": "Maharashtra"}
    assert malformed.status_code == 404
    assert malformed.json()["error"] == "not_found"

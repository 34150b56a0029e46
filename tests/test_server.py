"""
Tests for the submission gateway endpoints.
"""

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from dynform.config import Settings
from dynform.examples import build_personal_info_form
from dynform.serialization import fields_to_list
from dynform.server import create_app
from dynform.storage import InMemorySubmissionStore


SCHEMA = fields_to_list(build_personal_info_form().fields)

VALID_DATA = {
    "name": "Ada Lovelace",
    "email": "ada@example.com",
    "age": 36,
    "gender": "Female",
    "subscribe": True,
}


@pytest.fixture
def store():
    return InMemorySubmissionStore()


@pytest.fixture
def client(store):
    return TestClient(create_app(store=store, settings=Settings()))


class TestSubmitForm:

    def test_accepts_valid_submission(self, client, store):
        response = client.post("/submit-form", json={"schema": SCHEMA, "data": VALID_DATA})

        assert response.status_code == 200
        body = response.json()
        assert body == {
            "success": True,
            "message": "Form submitted successfully",
            "submissionId": 1,
        }
        stored = store.list()[0]
        assert stored.data == VALID_DATA
        datetime.fromisoformat(stored.timestamp.replace("Z", "+00:00"))

    def test_submission_id_is_previous_count_plus_one(self, client, store):
        for _ in range(3):
            client.post("/submit-form", json={"schema": SCHEMA, "data": VALID_DATA})
        response = client.post("/submit-form", json={"schema": SCHEMA, "data": VALID_DATA})
        assert response.json()["submissionId"] == 4
        assert len(store) == 4

    def test_one_invalid_field_rejected(self, client, store):
        data = dict(VALID_DATA, email="not-an-email")
        response = client.post("/submit-form", json={"schema": SCHEMA, "data": data})

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Validation failed"
        assert body["errors"] == {"email": ["Email must be a valid email address"]}
        assert len(store) == 0

    def test_server_rules_apply(self, client):
        data = dict(VALID_DATA, subscribe="on", gender="male")
        response = client.post("/submit-form", json={"schema": SCHEMA, "data": data})
        assert response.json()["errors"] == {
            "gender": ["Gender must be one of: Male, Female, Other"],
            "subscribe": ["Subscribe to newsletter must be a boolean value"],
        }

    def test_unknown_type_is_a_field_error(self, client):
        schema = [{"name": "dob", "label": "Birthday", "type": "date"}]
        response = client.post("/submit-form", json={"schema": schema, "data": {"dob": "2000-01-01"}})
        assert response.status_code == 400
        assert response.json()["errors"] == {"dob": ["Unknown field type: date"]}

    def test_number_beyond_float_range_is_a_field_error(self, client, store):
        data = dict(VALID_DATA, age=10 ** 400)
        response = client.post("/submit-form", json={"schema": SCHEMA, "data": data})
        assert response.status_code == 400
        assert response.json()["errors"] == {"age": ["Age must be no more than 100"]}
        assert len(store) == 0

    def test_email_with_trailing_newline_rejected(self, client):
        data = dict(VALID_DATA, email="ada@example.com\n")
        response = client.post("/submit-form", json={"schema": SCHEMA, "data": data})
        assert response.status_code == 400
        assert response.json()["errors"] == {"email": ["Email must be a valid email address"]}

    @pytest.mark.parametrize(
        "body",
        [{}, {"schema": "text", "data": {}}, {"schema": None, "data": {}}, [], "schema"],
    )
    def test_schema_must_be_an_array(self, client, body):
        response = client.post("/submit-form", json=body)
        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "message": "Schema is required and must be an array",
        }

    @pytest.mark.parametrize("data", [None, [], "x", 5])
    def test_data_must_be_an_object(self, client, data):
        response = client.post("/submit-form", json={"schema": SCHEMA, "data": data})
        assert response.status_code == 400
        assert response.json()["message"] == "Data is required and must be an object"

    def test_missing_data(self, client):
        response = client.post("/submit-form", json={"schema": SCHEMA})
        assert response.status_code == 400

    def test_invalid_json(self, client):
        response = client.post(
            "/submit-form",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Request body must be valid JSON"

    def test_malformed_descriptor(self, client, store):
        schema = [{"name": "a", "type": "text"}, {"name": "a", "type": "email"}]
        response = client.post("/submit-form", json={"schema": schema, "data": {}})
        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "Duplicate field names: a"}
        assert len(store) == 0

    def test_unexpected_failure_is_generic_500(self):
        class BrokenStore(InMemorySubmissionStore):
            def append(self, schema, data):
                raise RuntimeError("disk on fire")

        client = TestClient(create_app(store=BrokenStore(), settings=Settings()))
        response = client.post("/submit-form", json={"schema": SCHEMA, "data": VALID_DATA})
        assert response.status_code == 500
        assert response.json() == {"success": False, "message": "Internal server error"}


def test_submissions_listing_omits_schema(client):
    client.post("/submit-form", json={"schema": SCHEMA, "data": VALID_DATA})
    client.post("/submit-form", json={"schema": SCHEMA, "data": dict(VALID_DATA, age="abc")})

    response = client.get("/submissions")
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert len(body["submissions"]) == 1
    entry = body["submissions"][0]
    assert set(entry) == {"id", "timestamp", "data"}
    assert entry["id"] == 1
    assert entry["data"] == VALID_DATA


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "OK", "message": "Form API is running"}

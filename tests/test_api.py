"""
Tests for the HTTP endpoints.
"""
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from chatbot.main import create_application
from chatbot.utils.exceptions import DocumentStoreError

GENERIC_ERROR = {"error": "Internal Error, Sorry"}


@pytest.fixture
def broken_client(settings):
    """Client whose document store fails every call."""
    store = MagicMock()
    collection = store.collection.return_value
    for method in ("stream", "get", "add", "set", "delete"):
        getattr(collection, method).side_effect = DocumentStoreError("connection refused")
    store.health_check.return_value = {"status": "error", "error": "connection refused"}
    with TestClient(create_application(document_store=store, settings=settings)) as c:
        yield c


class TestTrainingDataEndpoints:
    """Test training data endpoints."""

    def test_list_empty(self, client):
        response = client.get("/training-data")
        assert response.status_code == 200
        assert response.json() == []

    def test_create_and_get(self, client, greeting_record):
        response = client.post("/training-data", json=greeting_record)
        assert response.status_code == 201
        record_id = response.json()["id"]

        response = client.get(f"/training-data/{record_id}")
        assert response.status_code == 200
        assert response.json() == {**greeting_record, "id": record_id}

    def test_list_includes_ids(self, client, greeting_record, farewell_record):
        first = client.post("/training-data", json=greeting_record).json()["id"]
        second = client.post("/training-data", json=farewell_record).json()["id"]

        data = client.get("/training-data").json()

        assert [item["id"] for item in data] == [first, second]
        assert data[1]["answers"] == ["Goodbye!"]

    def test_create_validation_error(self, client):
        response = client.post("/training-data", json={"intent": "greeting", "utterances": ["hi"]})
        assert response.status_code == 422
        assert response.json() == {"error": "Missing 'answers' prop"}

    def test_create_with_empty_body(self, client):
        response = client.post("/training-data")
        assert response.status_code == 422
        assert response.json() == {"error": "Missing 'intent' prop"}

    def test_create_ignores_client_id(self, client, greeting_record):
        response = client.post("/training-data", json={**greeting_record, "id": "mine"})
        assert response.status_code == 201
        assert response.json()["id"] != "mine"

    @pytest.mark.parametrize("method", ["post", "put"])
    def test_malformed_json_uses_error_body(self, client, method):
        url = "/training-data" if method == "post" else "/training-data/rec-1"
        response = getattr(client, method)(
            url, content=b"{not json", headers={"Content-Type": "application/json"}
        )
        assert response.status_code == 422
        assert response.json() == {"error": "Malformed request body"}

    def test_get_missing_returns_404_without_body(self, client):
        response = client.get("/training-data/does-not-exist")
        assert response.status_code == 404
        assert response.content == b""

    def test_update_merges(self, client, store, settings):
        store.collection(settings.TRAINING_DATA_COLLECTION).set(
            "rec-1", {"intent": "greeting", "utterances": ["hi"], "answers": ["Hello!"], "owner": "ops"}
        )

        response = client.put(
            "/training-data/rec-1",
            json={"intent": "greeting", "utterances": ["hi"], "answers": ["Hey!"]},
        )
        assert response.status_code == 204
        assert response.content == b""

        stored = store.collection(settings.TRAINING_DATA_COLLECTION).get("rec-1").to_dict()
        assert stored == {"intent": "greeting", "utterances": ["hi"], "answers": ["Hey!"], "owner": "ops"}

    def test_update_unknown_id_creates_record(self, client, farewell_record):
        assert client.put("/training-data/fresh", json=farewell_record).status_code == 204
        assert client.get("/training-data/fresh").json()["intent"] == "farewell"

    def test_update_validation_error(self, client):
        response = client.put(
            "/training-data/rec-1",
            json={"intent": "x", "utterances": "hi", "answers": ["a"]},
        )
        assert response.status_code == 422
        assert response.json() == {"error": "Property 'utterances' should be an array"}

    def test_delete_existing_and_missing_look_the_same(self, client, greeting_record):
        record_id = client.post("/training-data", json=greeting_record).json()["id"]

        first = client.delete(f"/training-data/{record_id}")
        second = client.delete(f"/training-data/{record_id}")

        assert first.status_code == second.status_code == 204
        assert client.get(f"/training-data/{record_id}").status_code == 404

    def test_store_errors_are_generic_500(self, broken_client, greeting_record):
        responses = [
            broken_client.get("/training-data"),
            broken_client.get("/training-data/x"),
            broken_client.delete("/training-data/x"),
            broken_client.post("/training-data", json=greeting_record),
            broken_client.put("/training-data/x", json=greeting_record),
        ]
        for response in responses:
            assert response.status_code == 500
            assert response.json() == GENERIC_ERROR

    def test_validation_precedes_store_errors(self, broken_client):
        response = broken_client.post("/training-data", json={})
        assert response.status_code == 422


class TestMessageEndpoint:
    """Test message classification endpoint."""

    def test_end_to_end_classification(self, client, greeting_record, farewell_record):
        client.post("/training-data", json=greeting_record)
        client.post("/training-data", json=farewell_record)

        hello = client.post("/message", json={"message": "hello"})
        bye = client.post("/message", json={"message": "bye"})

        assert hello.status_code == 200
        assert hello.json()["response"]["intent"] == "greeting"
        assert hello.json()["response"]["answer"] == "Hello!"
        assert bye.json()["response"]["intent"] == "farewell"
        assert bye.json()["response"]["answers"] == ["Goodbye!"]

    def test_empty_training_data_returns_none_intent(self, client):
        response = client.post("/message", json={"message": "hello"})
        assert response.status_code == 200
        assert response.json()["response"]["intent"] == "None"

    def test_missing_message_is_not_rejected(self, client, greeting_record):
        client.post("/training-data", json=greeting_record)
        response = client.post("/message", json={})
        assert response.status_code == 200
        assert response.json()["response"]["utterance"] == ""

    def test_response_carries_entities(self, client, greeting_record):
        client.post("/training-data", json=greeting_record)
        response = client.post("/message", json={"message": "hello, mail me at a@b.io"})
        entities = response.json()["response"]["entities"]
        assert [e["entity"] for e in entities] == ["email"]

    def test_numeric_intent_record_keeps_service_answering(self, client, greeting_record):
        assert client.post(
            "/training-data", json={"intent": 5, "utterances": ["five"], "answers": ["Five!"]}
        ).status_code == 201
        client.post("/training-data", json=greeting_record)

        response = client.post("/message", json={"message": "hello"})

        assert response.status_code == 200
        assert response.json()["response"]["intent"] == "greeting"

    def test_store_failure_is_generic_500(self, broken_client):
        response = broken_client.post("/message", json={"message": "hello"})
        assert response.status_code == 500
        assert response.json() == GENERIC_ERROR


class TestHealthEndpoints:
    """Test health endpoints and middleware."""

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_detailed_health_reports_store(self, client, broken_client):
        assert client.get("/health/detailed").json()["dependencies"]["document_store"]["status"] == "ok"
        assert broken_client.get("/health/detailed").json()["status"] == "degraded"

    def test_correlation_id_is_echoed(self, client):
        response = client.get("/health", headers={"X-Correlation-ID": "abc-123"})
        assert response.headers["X-Correlation-ID"] == "abc-123"
        assert "X-Process-Time" in response.headers

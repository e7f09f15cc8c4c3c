"""
Pruebas del endpoint HTTP con TestClient y un store falso inyectado.
"""
import pytest
from fastapi.testclient import TestClient

from health_api.app import create_app
from health_api.config import INGEST_PATH, Settings
from health_api.store import GraphStoreClient, StoreError

AUTH = {"x-key": "shortcut-secret"}


@pytest.fixture
def client(settings, fake_store):
    return TestClient(create_app(settings, store=fake_store))


def test_get_is_bad_request(client, fake_store):
    response = client.get(INGEST_PATH, headers=AUTH)

    assert response.status_code == 400
    assert response.json() == {"error": "Bad request"}
    assert fake_store.entries == []


def test_wrong_key_is_forbidden(client, fake_store, payload):
    response = client.post(INGEST_PATH, json=payload, headers={"x-key": "wrong"})

    assert response.status_code == 403
    assert response.json() == {"error": "Unauthorized"}
    assert fake_store.entries == []


def test_post_persists_daily_entry(client, fake_store, payload):
    response = client.post(INGEST_PATH, json=payload, headers=AUTH)

    assert response.status_code == 200
    assert response.json() == {
        "response": {
            "date": "2021-06-01T00:00:00.000Z",
            "heart": "3 items",
            "steps": "2",
        }
    }
    assert len(fake_store.entries) == 1


def test_invalid_json_is_bad_request(client, fake_store):
    response = client.post(
        INGEST_PATH,
        content=b"{not json",
        headers={**AUTH, "content-type": "application/json"},
    )

    assert response.status_code == 400
    assert fake_store.entries == []


def test_store_failure_is_service_unavailable(settings, payload, make_store):
    store = make_store(error=StoreError([{"message": "Transaction aborted."}]))
    client = TestClient(create_app(settings, store=store))

    response = client.post(INGEST_PATH, json=payload, headers=AUTH)

    assert response.status_code == 503
    assert response.json() == {"response": "Transaction aborted."}


def test_health_check_healthy(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_health_check_reports_missing_secrets(fake_store):
    client = TestClient(create_app(Settings(), store=fake_store))

    response = client.get("/health")

    assert response.status_code == 503
    body = response.json()
    assert body["status"] == "unhealthy"
    assert "FAUNA_KEY" in body["checks"]["configuration"]
    assert "API_KEY" in body["checks"]["configuration"]


def test_startup_creates_and_shutdown_closes_graphql_client(settings):
    app = create_app(settings)

    with TestClient(app) as client:
        assert isinstance(app.state.store, GraphStoreClient)
        assert client.get("/health").status_code == 200

    assert app.state.store is None

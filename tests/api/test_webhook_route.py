from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from voting_backend.config import APIConfig, Config, get_config
from voting_backend.main import app

TOKEN = "Bearer test-secret"
AUTH = {"Authorization": TOKEN}


def contract_call(tx_hash: str):
    return {
        "type": "contract_call",
        "transaction_identifier": {"hash": tx_hash},
        "block_identifier": {"index": 10},
        "contract_call": {
            "contract_identifier": "ST33Y8RCP74098JCSPW5QHHCD6QN4H3XS9E4PVW1G.vote",
            "function_name": "vote",
            "args": [],
        },
    }


@pytest.fixture
def client():
    app.dependency_overrides[get_config] = lambda: Config(
        api=APIConfig(webhook_auth=TOKEN)
    )
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_webhook_requires_auth(client: TestClient) -> None:
    with patch(
        "voting_backend.api.webhooks.ChainhookService.process", new=AsyncMock()
    ) as mock_process:
        response = client.post(
            "/api/chainhooks/webhook",
            json={"apply": [contract_call("0x1")]},
            headers={"Authorization": "Bearer wrong"},
        )

    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized"}
    mock_process.assert_not_awaited()


def test_webhook_missing_header(client: TestClient) -> None:
    response = client.post("/api/chainhooks/webhook", json={"apply": []})

    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized"}


def test_webhook_processes_apply_events(client: TestClient) -> None:
    payload = {
        "chainhook": {"uuid": "hook-1"},
        "apply": [
            contract_call("0x1"),
            {"type": "stx_transfer_event"},
            {
                "type": "print_event",
                "transaction_identifier": {"hash": "0x2"},
                "block_identifier": {"index": 10},
                "contract_identifier": "ST33Y8RCP74098JCSPW5QHHCD6QN4H3XS9E4PVW1G.vote",
                "value": '(tuple (event "vote-cast"))',
            },
        ],
    }

    response = client.post("/api/chainhooks/webhook", json=payload, headers=AUTH)

    assert response.status_code == 200
    assert response.json() == {"success": True, "processed": 3}


def test_webhook_malformed_json(client: TestClient) -> None:
    response = client.post(
        "/api/chainhooks/webhook",
        content=b"{not json",
        headers={**AUTH, "Content-Type": "application/json"},
    )

    assert response.status_code == 500
    assert response.json() == {
        "error": "Internal server error",
        "errorKind": "MalformedPayload",
    }


@pytest.mark.parametrize("body", [[1, 2, 3], "text", 42, {"apply": "x"}])
def test_webhook_non_object_body(client: TestClient, body) -> None:
    response = client.post("/api/chainhooks/webhook", json=body, headers=AUTH)

    assert response.status_code == 200
    assert response.json() == {"success": True, "processed": 0}


def test_webhook_processing_error(client: TestClient) -> None:
    with patch(
        "voting_backend.api.webhooks.ChainhookService.process",
        new=AsyncMock(side_effect=RuntimeError("boom")),
    ):
        response = client.post(
            "/api/chainhooks/webhook", json={"apply": []}, headers=AUTH
        )

    assert response.status_code == 500
    assert response.json()["errorKind"] == "ProcessingError"


def test_webhook_status(client: TestClient) -> None:
    response = client.get("/api/chainhooks/webhook")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "active"
    assert body["endpoint"] == "/api/chainhooks/webhook"
    assert body["message"]


def test_health_check(client: TestClient) -> None:
    response = client.get("/")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}

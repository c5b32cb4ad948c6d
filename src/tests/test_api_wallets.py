from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from api.api_v1.deps import get_wallet_adapter
from core.config import settings
from main import app
from services.wallet_adapter import NIL_ADDRESS
from conftest import ALICE_WALLET


@pytest.fixture
def adapter():
    adapter = MagicMock()
    adapter.create_wallet.return_value = ALICE_WALLET
    adapter.get_wallet_address_for.return_value = ALICE_WALLET
    app.dependency_overrides[get_wallet_adapter] = lambda: adapter
    yield adapter
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    return TestClient(app, raise_server_exceptions=False)


def test_create_wallet(client, adapter):
    response = client.post(f"{settings.API_V1_STR}/wallets/alice")

    assert response.status_code == 200
    assert response.json() == {"user_id": "alice", "address": ALICE_WALLET}
    adapter.create_wallet.assert_called_once_with("alice")


def test_get_wallet(client, adapter):
    response = client.get(f"{settings.API_V1_STR}/wallets/alice")

    assert response.status_code == 200
    assert response.json()["address"] == ALICE_WALLET
    adapter.get_wallet_address_for.assert_called_once_with("alice")


def test_get_wallet_not_registered(client, adapter):
    adapter.get_wallet_address_for.return_value = NIL_ADDRESS

    response = client.get(f"{settings.API_V1_STR}/wallets/nobody")

    assert response.status_code == 404


def test_create_wallet_rpc_error_returns_500(client, adapter):
    adapter.create_wallet.side_effect = ValueError("insufficient funds for gas")

    response = client.post(f"{settings.API_V1_STR}/wallets/alice")

    assert response.status_code == 500
    assert response.json() == {"error": "insufficient funds for gas"}


def test_response_carries_flow_id(client, adapter):
    response = client.get(
        f"{settings.API_V1_STR}/wallets/alice", headers={"X-Flow-Id": "flow-1"}
    )

    assert response.headers["X-Flow-Id"] == "flow-1"

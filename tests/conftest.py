"""Test fixtures: sandbox config, mocked TropiPay client, tool context.

The remote API is never contacted; handlers receive a MagicMock client.
"""

from unittest.mock import MagicMock

import pytest

from tropipay_mcp.client import reset_client
from tropipay_mcp.config import TropiPayConfig
from tropipay_mcp.context import ToolContext


@pytest.fixture(autouse=True)
def fresh_client_slot():
    """Every test starts without a shared client."""
    reset_client()
    yield
    reset_client()


@pytest.fixture
def config():
    return TropiPayConfig(
        environment="sandbox",
        client_id="client-id-123456",
        client_secret="client-secret",
    )


@pytest.fixture
def unconfigured():
    return TropiPayConfig(environment="sandbox")


@pytest.fixture
def fake_client():
    client = MagicMock(name="TropiPayClient")
    client.get_balance.return_value = {"balance": 12345, "pendingIn": 500, "pendingOut": 0}
    client.get_profile.return_value = {
        "name": "Ana", "surname": "Perez", "email": "ana@example.com", "country": "ES", "phone": "+34600000000",
    }
    client.list_movements.return_value = {"count": 0, "rows": []}
    client.list_accounts.return_value = []
    client.list_deposit_accounts.return_value = {"count": 0, "rows": []}
    client.list_payment_cards.return_value = {"count": 0, "rows": []}
    return client


@pytest.fixture
def context(config, fake_client):
    """Context whose client accessor returns the mocked client."""
    return ToolContext(config=config, get_client=lambda: fake_client, client_initialized=lambda: True)


@pytest.fixture
def failing_context(config):
    """Context whose client accessor raises like an unconfigured server."""
    from tropipay_mcp.client import MISSING_CREDENTIALS_MESSAGE
    from tropipay_mcp.exceptions import ConfigurationError

    def get_client():
        raise ConfigurationError(MISSING_CREDENTIALS_MESSAGE)

    return ToolContext(config=config, get_client=get_client, client_initialized=lambda: False)

"""HTTP behaviour of the TropiPay client and the shared client accessor."""

import threading
from unittest.mock import MagicMock

import pytest
import requests

from tropipay_mcp.client import (
    ClientProvider, TropiPayClient, check_payload, client_initialized, get_client,
)
from tropipay_mcp.exceptions import ConfigurationError, TropiPayAPIError


def make_response(payload=None, status=200, text=None):
    response = MagicMock()
    response.status_code = status
    response.ok = status < 400
    if payload is None and text is None:
        response.content = b""
    else:
        response.content = b"x"
    if text is not None:
        response.text = text
        response.json.side_effect = ValueError("not json")
    else:
        response.json.return_value = payload
    return response


TOKEN = make_response({"access_token": "tok-1", "expires_in": 3600})


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session, headers={})


@pytest.fixture
def client(session):
    return TropiPayClient("id", "secret", "https://tropipay.test/", timeout=5, session=session)


class TestCheckPayload:

    def test_passes_through_success(self):
        assert check_payload({"balance": 1}) == {"balance": 1}
        assert check_payload([1, 2]) == [1, 2]

    def test_error_field(self):
        with pytest.raises(TropiPayAPIError, match="Invalid scope"):
            check_payload({"error": {"message": "Invalid scope"}})

    def test_error_code(self):
        with pytest.raises(TropiPayAPIError) as exc:
            check_payload({"code": 403, "message": "Forbidden"})
        assert exc.value.status_code == 403
        assert "Forbidden" in str(exc.value)

    def test_low_code_is_not_an_error(self):
        assert check_payload({"code": 200, "error": None}) == {"code": 200, "error": None}


class TestTropiPayClient:

    def test_authenticates_then_sends_bearer(self, client, session):
        session.request.side_effect = [TOKEN, make_response({"balance": 100})]

        assert client.get_balance() == {"balance": 100}

        token_call, balance_call = session.request.call_args_list
        assert token_call.args == ("POST", "https://tropipay.test/api/v2/access/token")
        assert token_call.kwargs["json"]["grant_type"] == "client_credentials"
        assert balance_call.args == ("GET", "https://tropipay.test/api/v2/users/balance")
        assert balance_call.kwargs["headers"] == {"Authorization": "Bearer tok-1"}
        assert balance_call.kwargs["timeout"] == 5

    def test_token_is_reused(self, client, session):
        session.request.side_effect = [TOKEN, make_response({}), make_response([])]
        client.get_profile()
        client.list_accounts()
        assert session.request.call_count == 3

    def test_movement_pagination_params(self, client, session):
        session.request.side_effect = [TOKEN, make_response({"count": 0, "rows": []})]
        client.list_movements(limit=5, offset=20)
        call = session.request.call_args_list[1]
        assert call.args[1].endswith("/api/v2/movements")
        assert call.kwargs["params"] == {"limit": 5, "offset": 20}

    def test_create_payment_card_posts_payload(self, client, session):
        session.request.side_effect = [TOKEN, make_response({"id": "card-1"})]
        assert client.create_payment_card({"amount": 5000}) == {"id": "card-1"}
        call = session.request.call_args_list[1]
        assert call.args == ("POST", "https://tropipay.test/api/v2/paymentcards")
        assert call.kwargs["json"] == {"amount": 5000}

    def test_http_error_status(self, client, session):
        session.request.side_effect = [TOKEN, make_response({"error": "Unauthorized"}, status=401)]
        with pytest.raises(TropiPayAPIError) as exc:
            client.list_deposit_accounts()
        assert exc.value.status_code == 401
        assert str(exc.value) == "Unauthorized"

    def test_non_json_error_body(self, client, session):
        session.request.side_effect = [TOKEN, make_response(status=502, text="Bad Gateway")]
        with pytest.raises(TropiPayAPIError, match="Bad Gateway"):
            client.list_payment_cards()

    def test_error_payload_with_ok_status(self, client, session):
        session.request.side_effect = [TOKEN, make_response({"code": 400, "message": "Invalid amount"})]
        with pytest.raises(TropiPayAPIError, match="Invalid amount"):
            client.create_deposit_account({})

    def test_transport_failure(self, client, session):
        session.request.side_effect = requests.exceptions.ConnectionError("refused")
        with pytest.raises(TropiPayAPIError, match="refused"):
            client.get_balance()

    def test_missing_access_token(self, client, session):
        session.request.side_effect = [make_response({"token_type": "bearer"})]
        with pytest.raises(TropiPayAPIError, match="access token"):
            client.get_balance()


class TestClientAccessor:

    def test_requires_credentials(self, unconfigured):
        with pytest.raises(ConfigurationError, match="TROPIPAY_CLIENT_ID"):
            get_client(unconfigured)
        assert not client_initialized()

    def test_returns_same_instance(self, config):
        first = get_client(config)
        assert get_client(config) is first
        assert client_initialized()
        assert first.base_url == config.server_url

    def test_concurrent_first_use_builds_once(self, config):
        factory = MagicMock(side_effect=lambda cfg: object())
        provider = ClientProvider(factory=factory)
        results = []
        threads = [threading.Thread(target=lambda: results.append(provider.get(config))) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert factory.call_count == 1
        assert len({id(result) for result in results}) == 1

    def test_failed_construction_is_retried(self, config):
        factory = MagicMock(side_effect=[ConfigurationError("nope"), "client"])
        provider = ClientProvider(factory=factory)
        with pytest.raises(ConfigurationError):
            provider.get(config)
        assert not provider.initialized
        assert provider.get(config) == "client"

"""Tool handlers and the dispatcher, with the TropiPay client mocked."""

from unittest.mock import MagicMock

import pytest

from tropipay_mcp import __version__
from tropipay_mcp.exceptions import TropiPayAPIError
from tropipay_mcp.tools import TOOL_HANDLERS, ToolDispatcher
from tropipay_mcp.tools.definitions import TOOL_ALIASES, TOOL_DEFINITIONS, get_mcp_tools


def call(context, name, arguments=None):
    content = ToolDispatcher(context).call(name, arguments)
    assert len(content) == 1
    assert content[0].type == "text"
    return content[0].text


class TestCatalog:

    def test_every_tool_has_a_handler(self):
        assert [tool["name"] for tool in TOOL_DEFINITIONS] == list(TOOL_HANDLERS)

    def test_aliases_point_at_real_tools_and_are_not_advertised(self):
        advertised = {tool.name for tool in get_mcp_tools()}
        for alias, target in TOOL_ALIASES.items():
            assert target in TOOL_HANDLERS
            assert alias not in advertised

    def test_schemas_are_objects(self):
        for tool in get_mcp_tools():
            assert tool.inputSchema["type"] == "object"

    def test_create_paymentcard_schema_requires_three_fields(self):
        schema = next(t for t in TOOL_DEFINITIONS if t["name"] == "create_paymentcard")["inputSchema"]
        assert set(schema["required"]) == {"concept", "amount", "currency"}


class TestDispatcher:

    def test_unknown_tool(self, context):
        assert call(context, "transfer_everything") == "❌ Unknown tool: transfer_everything"

    def test_alias_resolves(self, context, fake_client):
        text = call(context, "get_account_balance")
        assert "Current Default Account Balance" in text
        fake_client.get_balance.assert_called_once_with()

    def test_unexpected_handler_error_becomes_text(self, context):
        handlers = {"boom": MagicMock(side_effect=RuntimeError("kaput"))}
        content = ToolDispatcher(context, handlers=handlers, aliases={}).call("boom", None)
        assert content[0].text == "❌ kaput"

    def test_none_arguments_become_empty_mapping(self, context):
        handler = MagicMock(return_value="ok")
        ToolDispatcher(context, handlers={"t": handler}, aliases={}).call("t", None)
        handler.assert_called_once_with({}, context)


class TestAccountTools:

    def test_balance(self, context):
        text = call(context, "get_default_account_balance")
        assert "Balance: 12345 (123.45)" in text
        assert "Pending in: 500 (5.00)" in text
        assert "```json" in text
        assert "Environment: sandbox" in text

    def test_balance_failure_names_method(self, context, fake_client):
        fake_client.get_balance.side_effect = TropiPayAPIError("Unauthorized", status_code=401)
        text = call(context, "get_default_account_balance")
        assert text.startswith("❌")
        assert "Unauthorized" in text
        assert "Method attempted: client.get_balance()" in text

    def test_missing_credentials_reported_as_text(self, failing_context):
        text = call(failing_context, "get_profile_data")
        assert text.startswith("❌")
        assert "TROPIPAY_CLIENT_ID" in text

    def test_profile(self, context):
        text = call(context, "get_profile_data")
        assert "Name: Ana Perez" in text
        assert "Email: ana@example.com" in text

    def test_movements_default_pagination(self, context, fake_client):
        call(context, "get_movement_list", {})
        fake_client.list_movements.assert_called_once_with(limit=10, offset=0)

    def test_movements_clamped(self, context, fake_client):
        call(context, "get_movement_list", {"limit": 0, "offset": 5})
        fake_client.list_movements.assert_called_once_with(limit=1, offset=5)

    def test_no_movements(self, context):
        assert call(context, "get_movement_list").startswith("📋 No movements found")

    def test_movements_are_projected(self, context, fake_client):
        fake_client.list_movements.return_value = {
            "count": 42,
            "rows": [{"id": 1, "amount": -500, "currency": "EUR", "internalNote": "hidden"}],
        }
        text = call(context, "get_movement_list", {"limit": 1})
        assert "42 total items, showing 1" in text
        assert '"amount": -500' in text
        assert "internalNote" not in text

    def test_movements_invalid_limit(self, context, fake_client):
        text = call(context, "get_movement_list", {"limit": "lots"})
        assert text.startswith("❌ Invalid Argument")
        fake_client.list_movements.assert_not_called()

    def test_empty_accounts_has_no_json_block(self, context):
        text = call(context, "get_accounts_list")
        assert text.startswith("🏦 No TropiPay accounts found")
        assert "```json" not in text

    def test_accounts(self, context, fake_client):
        fake_client.list_accounts.return_value = [
            {"id": 7, "alias": "Main", "balance": 1000, "currency": "EUR", "isDefault": True, "secret": "x"},
        ]
        text = call(context, "get_accounts", None)
        assert "1 accounts found" in text
        assert '"alias": "Main"' in text
        assert "secret" not in text

    def test_accounts_failure_lists_causes(self, context, fake_client):
        fake_client.list_accounts.side_effect = TropiPayAPIError("Forbidden", status_code=403)
        text = call(context, "get_accounts_list")
        assert text.startswith("❌ Failed to retrieve TropiPay accounts")
        assert "Possible causes" in text
        assert "Method attempted: client.list_accounts()" in text

    def test_connection_ok(self, context, config):
        text = call(context, "test_connection")
        assert text.startswith("✅ TropiPay Connection Test Successful")
        assert config.api_url in text
        assert f"v{__version__}" in text

    def test_connection_failed(self, failing_context):
        assert call(failing_context, "test_connection").startswith("❌ Connection test failed")


class TestPaymentTools:

    def test_missing_fields_listed_together(self, context, fake_client):
        text = call(context, "create_paymentcard", {"description": "only this"})
        assert text.startswith("❌ Missing Required Fields for Payment Card Creation")
        for name in ("concept", "amount", "currency"):
            assert f"**{name}**" in text
        fake_client.create_payment_card.assert_not_called()

    def test_create_sends_defaults_and_formats_amount(self, context, fake_client):
        fake_client.create_payment_card.return_value = {
            "id": "card-1", "shortUrl": "https://tppay.me/abc", "amount": 5000, "currency": "USD",
        }
        text = call(context, "create_paymentcard", {"concept": "Test", "amount": 5000, "currency": "USD"})

        payload = fake_client.create_payment_card.call_args.args[0]
        assert payload["reasonId"] == 21
        assert payload["lang"] == "es"
        assert payload["reference"].startswith("MCP-")

        assert text.startswith("✅ Payment Card Created Successfully")
        assert "- Amount: 50.00 USD" in text
        assert "- Short url: https://tppay.me/abc" in text
        assert "📋 **API Response:**" in text

    def test_create_failure(self, context, fake_client):
        fake_client.create_payment_card.side_effect = TropiPayAPIError("Invalid currency")
        text = call(context, "create_paymentcard", {"concept": "Test", "amount": 1, "currency": "XXX"})
        assert text.startswith("❌ Failed to create payment card")
        assert "Error: Invalid currency" in text

    def test_list_cards(self, context, fake_client):
        fake_client.list_payment_cards.return_value = {
            "count": 3, "rows": [{"id": "c1", "concept": "Order", "amount": 100, "owner": {"id": 1}}],
        }
        text = call(context, "list_paymentcards")
        assert "3 total, showing 1" in text
        assert '"concept": "Order"' in text
        assert "owner" not in text

    def test_no_cards(self, context):
        assert call(context, "list_paymentcards").startswith("💳 No payment cards found")


class TestBeneficiaryTools:

    def test_list_deposit_accounts_empty(self, context):
        assert call(context, "list_deposit_accounts").startswith("🏦 No deposit accounts found")

    def test_list_deposit_accounts(self, context, fake_client):
        fake_client.list_deposit_accounts.return_value = {
            "count": 1, "rows": [{"id": 9, "alias": "Mom", "accountNumber": "123", "hash": "zzz"}],
        }
        text = call(context, "list_deposit_accounts")
        assert '"alias": "Mom"' in text
        assert "hash" not in text

    def test_external_missing_country(self, context, fake_client):
        text = call(context, "create_external_beneficiary", {
            "firstName": "Ana", "lastName": "Perez", "accountNumber": "123", "currency": "EUR",
        })
        assert "❌ Missing Required Fields for External Beneficiary Creation" in text
        assert "countryDestinationId/countryISO" in text
        fake_client.create_deposit_account.assert_not_called()

    def test_external_created(self, context, fake_client):
        fake_client.create_deposit_account.return_value = {"id": 55, "alias": "Ana Perez"}
        text = call(context, "create_external_beneficiary", {
            "firstName": "Ana", "lastName": "Perez", "accountNumber": "123",
            "currency": "EUR", "countryDestinationId": 1,
        })
        payload = fake_client.create_deposit_account.call_args.args[0]
        assert (payload["beneficiaryType"], payload["type"], payload["paymentType"]) == (2, 7, 2)
        assert text.startswith("✅ External Beneficiary Created Successfully")
        assert "- Id: 55" in text

    def test_internal_created(self, context, fake_client):
        fake_client.create_deposit_account.return_value = {"id": 56}
        call(context, "create_internal_beneficiary", {"alias": "Friend", "searchValue": "f@example.com"})
        payload = fake_client.create_deposit_account.call_args.args[0]
        assert (payload["beneficiaryType"], payload["type"], payload["paymentType"]) == (1, 9, 1)

    def test_crypto_failure(self, context, fake_client):
        fake_client.create_deposit_account.side_effect = TropiPayAPIError("Unsupported network")
        text = call(context, "create_crypto_beneficiary", {
            "firstName": "Bo", "lastName": "Li", "accountNumber": "w", "currency": "USDC", "network": "XYZ",
        })
        assert text.startswith("❌ Failed to create crypto beneficiary")
        assert "Method attempted: client.create_deposit_account()" in text


@pytest.mark.parametrize("name", sorted(TOOL_HANDLERS))
def test_every_tool_returns_text_when_client_unavailable(failing_context, name):
    text = call(failing_context, name, {})
    assert text.startswith("❌")

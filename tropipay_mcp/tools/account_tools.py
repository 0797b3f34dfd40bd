import logging
from typing import Any, Mapping, Optional

from tropipay_mcp.context import ToolContext
from tropipay_mcp.exceptions import InvalidFieldError
from tropipay_mcp.formatting import (
    FAILURE_MARKER, cents_to_units, environment_footer, error_reason, extract_rows,
    format_failure, format_invalid_field, json_block, project_rows,
)
from tropipay_mcp.models import MovementQuery

logger = logging.getLogger(__name__)

ACCOUNT_FIELDS = (
    "id", "alias", "balance", "pendingIn", "pendingOut", "accountNumber", "currency",
    "type", "state", "isDefault", "createdAt", "updatedAt",
)

MOVEMENT_FIELDS = (
    "id", "bankOrderCode", "reference", "amount", "currency", "originalCurrencyAmount",
    "destinationAmount", "destinationCurrency", "conversionRate", "fee", "accountId",
    "balanceBefore", "balanceAfter", "movementTypeId", "state", "conceptTransfer",
    "paymentcard", "completedAt", "createdAt",
)

ACCOUNT_ERROR_CAUSES = (
    "Invalid or expired authentication credentials",
    "Insufficient permissions to access account information",
    "API endpoint not available in current environment",
    "Network connectivity issues",
)

BALANCE_LABELS = (
    ("balance", "Balance"),
    ("pendingIn", "Pending in"),
    ("pendingOut", "Pending out"),
)


def get_default_account_balance(arguments: Optional[Mapping[str, Any]], context: ToolContext) -> str:
    """Balance of the account selected as default"""
    try:
        balance = context.get_client().get_balance()
    except Exception as e:
        logger.error(f"Error getting balance: {str(e)}")
        return f"{FAILURE_MARKER} Failed to get balance: {error_reason(e)}\n\nMethod attempted: client.get_balance()"

    text = "💰 Current Default Account Balance (all amounts are in cents)\n\n"
    if isinstance(balance, Mapping):
        for key, label in BALANCE_LABELS:
            if key in balance:
                text += f"{label}: {balance[key]} ({cents_to_units(balance[key])})\n"
    else:
        text += f"Balance: {balance} ({cents_to_units(balance)})\n"

    text += f"\n**Raw Data (JSON):**\n{json_block(balance)}\n\n"
    return text + environment_footer(context.config)


def get_profile_data(arguments: Optional[Mapping[str, Any]], context: ToolContext) -> str:
    try:
        profile = context.get_client().get_profile()
    except Exception as e:
        logger.error(f"Error getting profile: {str(e)}")
        return f"{FAILURE_MARKER} Failed to get profile: {error_reason(e)}\n\nMethod attempted: client.get_profile()"

    if not isinstance(profile, Mapping):
        profile = {}

    name = " ".join(str(part) for part in (profile.get("name"), profile.get("surname")) if part)
    return (
        f"👤 Profile Information\n\n"
        f"Name: {name or 'N/A'}\n"
        f"Email: {profile.get('email') or 'N/A'}\n"
        f"Country: {profile.get('country') or 'N/A'}\n"
        f"Phone: {profile.get('phone') or 'N/A'}\n"
        + environment_footer(context.config)
    )


def get_movement_list(arguments: Optional[Mapping[str, Any]], context: ToolContext) -> str:
    """Paginated movements; limit defaults to 10 and is clamped to 1..50"""
    try:
        query = MovementQuery.from_arguments(arguments)
    except InvalidFieldError as e:
        return format_invalid_field("Movement List", e.field, e)

    try:
        movements = context.get_client().list_movements(limit=query.limit, offset=query.offset)
    except Exception as e:
        logger.error(f"Error getting movements: {str(e)}")
        return format_failure("Failed to get movements", e, context.config,
                              f"client.list_movements(limit={query.limit}, offset={query.offset})")

    rows, count = extract_rows(movements)
    if not rows:
        return f"📋 No movements found\n\nEnvironment: {context.config.environment}"

    return (
        f"📋 Account Movements Data ({count} total items, showing {len(rows)})\n\n"
        + environment_footer(context.config)
        + "\n\n💡 **Tip**: Use the 'tropipay_movements_schema' prompt for detailed field explanations.\n\n"
        + f"**Raw Data (JSON):**\n{json_block(project_rows(rows, MOVEMENT_FIELDS))}"
    )


def get_accounts_list(arguments: Optional[Mapping[str, Any]], context: ToolContext) -> str:
    try:
        accounts_data = context.get_client().list_accounts()
    except Exception as e:
        logger.error(f"Error listing accounts: {str(e)}")
        return format_failure("Failed to retrieve TropiPay accounts", e, context.config,
                              "client.list_accounts()", ACCOUNT_ERROR_CAUSES)

    accounts, _ = extract_rows(accounts_data)
    if not accounts:
        return (
            "🏦 No TropiPay accounts found\n\n"
            "This could mean:\n"
            "- No accounts are configured for this user\n"
            "- The user doesn't have permission to view accounts\n"
            "- The API endpoint is not available\n\n"
            f"Environment: {context.config.environment}"
        )

    return (
        f"🏦 TropiPay Accounts Data ({len(accounts)} accounts found)\n\n"
        + environment_footer(context.config)
        + "\n\n💡 **Tip**: Use the 'tropipay_accounts_schema' prompt for detailed field explanations.\n\n"
        + f"**Raw Data (JSON):**\n{json_block(project_rows(accounts, ACCOUNT_FIELDS))}"
    )


def test_connection(arguments: Optional[Mapping[str, Any]], context: ToolContext) -> str:
    """Authenticate and fetch the balance to prove the credentials work"""
    from tropipay_mcp import __version__

    try:
        context.get_client().get_balance()
    except Exception as e:
        logger.error(f"Connection test failed: {str(e)}")
        return f"{FAILURE_MARKER} Connection test failed: {error_reason(e)}\n\nMethod attempted: client.get_balance()"

    return (
        f"✅ TropiPay Connection Test Successful\n\n"
        f"Base URL: {context.config.api_url}\n"
        f"Server: tropipay-mcp v{__version__}\n"
        f"Authentication: Valid\n"
        + environment_footer(context.config, label="Timestamp")
    )

import logging
from typing import Any, Callable, Mapping, Optional

from tropipay_mcp.context import ToolContext
from tropipay_mcp.exceptions import InvalidFieldError, MissingFieldsError
from tropipay_mcp.formatting import (
    environment_footer, extract_rows, format_failure, format_invalid_field,
    format_missing_fields, json_block, project_rows,
)
from tropipay_mcp.models import (
    CryptoBeneficiaryRequest, ExternalBeneficiaryRequest, InternalBeneficiaryRequest,
)

logger = logging.getLogger(__name__)

DEPOSIT_ACCOUNT_FIELDS = (
    "id", "alias", "firstName", "lastName", "accountNumber", "currency", "type", "state",
    "countryDestination", "userRelationTypeId", "createdAt", "updatedAt",
)

DEPOSIT_ACCOUNT_ERROR_CAUSES = (
    "Invalid or expired authentication credentials",
    "Insufficient permissions to access deposit account information",
    "API endpoint not available in current environment",
    "Network connectivity issues",
)


def list_deposit_accounts(arguments: Optional[Mapping[str, Any]], context: ToolContext) -> str:
    try:
        data = context.get_client().list_deposit_accounts()
    except Exception as e:
        logger.error(f"Error listing deposit accounts: {str(e)}")
        return format_failure("Failed to retrieve TropiPay deposit accounts", e, context.config,
                              "client.list_deposit_accounts()", DEPOSIT_ACCOUNT_ERROR_CAUSES)

    rows, count = extract_rows(data)
    if not rows:
        return (
            "🏦 No deposit accounts found\n\n"
            "This could mean:\n"
            "- No deposit accounts are configured for this user\n"
            "- The user doesn't have permission to view deposit accounts\n"
            "- The API endpoint is not available\n\n"
            f"Environment: {context.config.environment}"
        )

    return (
        f"🏦 TropiPay Deposit Accounts Data ({count} accounts found, showing {len(rows)})\n\n"
        + environment_footer(context.config)
        + "\n\n💡 **Tip**: Use the 'tropipay_accounts_schema' prompt for detailed field explanations.\n\n"
        + f"**Raw Data (JSON):**\n{json_block(project_rows(rows, DEPOSIT_ACCOUNT_FIELDS))}"
    )


def _create_beneficiary(kind: str, build: Callable[[Any], Any], arguments: Optional[Mapping[str, Any]],
                        context: ToolContext) -> str:
    title = f"{kind} Beneficiary Creation"
    try:
        request = build(arguments)
    except MissingFieldsError as e:
        return format_missing_fields(title, e.missing)
    except InvalidFieldError as e:
        return format_invalid_field(title, e.field, e)

    try:
        result = context.get_client().create_deposit_account(request.to_payload())
    except Exception as e:
        logger.error(f"Error creating {kind.lower()} beneficiary: {str(e)}")
        return format_failure(f"Failed to create {kind.lower()} beneficiary", e, context.config,
                              "client.create_deposit_account()")

    account = result if isinstance(result, Mapping) else {}
    logger.info(f"Created {kind.lower()} beneficiary {account.get('id')}")
    return (
        f"✅ {kind} Beneficiary Created Successfully\n\n"
        f"- Id: {account.get('id', 'N/A')}\n"
        f"- Alias: {account.get('alias', request.alias)}\n"
        f"- Account number: {account.get('accountNumber', request.account_number)}\n"
        f"- Currency: {account.get('currency', getattr(request, 'currency', None) or 'N/A')}\n"
        f"\n📋 **API Response:**\n{json_block(result)}\n\n"
        + environment_footer(context.config, label="Created")
    )


def create_external_beneficiary(arguments: Optional[Mapping[str, Any]], context: ToolContext) -> str:
    """Bank account beneficiary; classification fields are fixed here"""
    return _create_beneficiary("External", ExternalBeneficiaryRequest.from_arguments, arguments, context)


def create_internal_beneficiary(arguments: Optional[Mapping[str, Any]], context: ToolContext) -> str:
    return _create_beneficiary("Internal", InternalBeneficiaryRequest.from_arguments, arguments, context)


def create_crypto_beneficiary(arguments: Optional[Mapping[str, Any]], context: ToolContext) -> str:
    return _create_beneficiary("Crypto", CryptoBeneficiaryRequest.from_arguments, arguments, context)

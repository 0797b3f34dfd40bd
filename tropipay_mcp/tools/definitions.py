"""
Static catalog of the tools advertised to the MCP host.

The input schemas describe the arguments for the host's benefit. The server
does not enforce them; each handler validates its own arguments so it can
report every missing field at once.
"""

from typing import Any, Dict, List

from mcp import types


def _no_arguments() -> Dict[str, Any]:
    return {"type": "object", "properties": {}, "required": []}


MOVEMENT_LIST_DESCRIPTION = (
    "Get list of account movements/transactions (requires ALLOW_GET_MOVEMENT_LIST scope).\n\n"
    "📋 **Response Structure:**\n"
    "- `count`: Total number of movements available\n"
    "- `rows`: Movements, each with:\n"
    "  - `id`, `bankOrderCode` (TX prefix for regular, DEV for refunds), `reference`\n"
    "  - `amount` (+ credit, - debit, in cents), `currency`, `fee`\n"
    "  - `movementTypeId` (1=Transfer, 2=Card Credit, 3=Refund, 4=Card Refund, 5=Top Up, "
    "6=Exchange, 7=ATM, 8=Fee, 9=Adjustment)\n"
    "  - `state` (2=Charged, 3=Paid, 4=Error, 5=Pending In, 6=Cancelled)\n"
    "  - `balanceBefore`/`balanceAfter`, `accountId`\n"
    "  - `originalCurrencyAmount`, `destinationAmount`, `destinationCurrency`, `conversionRate`\n"
    "  - `conceptTransfer`, `paymentcard` (uuid of the related payment card or null)\n"
    "  - `completedAt`/`createdAt`\n\n"
    "💡 **Tip**: Use the 'tropipay_movements_schema' prompt for detailed field explanations."
)

DEPOSIT_ACCOUNTS_DESCRIPTION = (
    "Get list of deposit accounts (a.k.a. beneficiaries).\n\n"
    "💡 **Tip**: beneficiaries can be internal (other TropiPay accounts) or external "
    "(bank accounts, crypto wallets).\n\n"
    "📋 **Response Structure:** each deposit account has\n"
    "- `id`: Unique deposit account identifier\n"
    "- `accountNumber`: IBAN for bank accounts, wallet address for crypto, user email for internal beneficiaries\n"
    "- `alias`: User-friendly name, if set\n"
    "- `currency`: Account currency\n"
    "- `type`: 9=TropiPay account, 12=Crypto wallet, 7=Other, 8=BANDEC card, 4=BPA card, 3=BANMET card\n"
    "- `state`: 0=Active, 1=Inactive, 2=Deleted\n"
    "- `countryDestination`: Country the account is registered in\n"
    "- `userRelationTypeId`: 0=myself, 3=commercial\n"
    "- `firstName`/`lastName`: Account holder\n"
    "- `createdAt`/`updatedAt`: Timestamps"
)

PAYMENT_CARD_DESCRIPTION = (
    "Create a new payment card (payment link) using TropiPay API.\n\n"
    "**IMPORTANT:**\n"
    "- NEVER create payment cards without first asking the user for the required information\n"
    "- ALWAYS collect amount, currency and concept before proceeding\n"
    "- DO NOT invent values for required fields\n\n"
    "📋 **Optional Fields:** `description`, `reference` (generated when omitted), `favorite`, "
    "`singleUse`, `expirationDays`, `reasonId`, `lang`, `urlSuccess`, `urlFailed`, "
    "`urlNotification`, `serviceDate`, `accountId`\n\n"
    "🔍 **Process Flow:**\n"
    "1. Ask the user for amount, currency and concept (and a description if they want one)\n"
    "2. Optionally ask about expiration days, single use, reference and redirect URLs\n"
    "3. Create the payment card\n"
    "4. Return the payment link details to the user"
)

TOOL_DEFINITIONS: List[Dict[str, Any]] = [
    {
        "name": "get_default_account_balance",
        "description": "Get the balance of the account selected as default in TropiPay (amounts in cents)",
        "inputSchema": _no_arguments(),
    },
    {
        "name": "get_profile_data",
        "description": "Get user profile information from the TropiPay account",
        "inputSchema": _no_arguments(),
    },
    {
        "name": "get_movement_list",
        "description": MOVEMENT_LIST_DESCRIPTION,
        "inputSchema": {
            "type": "object",
            "properties": {
                "limit": {
                    "type": "number",
                    "description": "Maximum number of movements to retrieve (default: 10)",
                    "minimum": 1,
                    "maximum": 50,
                },
                "offset": {
                    "type": "number",
                    "description": "Number of movements to skip (default: 0)",
                    "minimum": 0,
                },
            },
            "required": [],
        },
    },
    {
        "name": "get_accounts_list",
        "description": "Get list of TropiPay accounts associated with the user",
        "inputSchema": _no_arguments(),
    },
    {
        "name": "list_deposit_accounts",
        "description": DEPOSIT_ACCOUNTS_DESCRIPTION,
        "inputSchema": _no_arguments(),
    },
    {
        "name": "list_paymentcards",
        "description": "Get list of payment cards (payment links) created by the user",
        "inputSchema": _no_arguments(),
    },
    {
        "name": "create_paymentcard",
        "description": PAYMENT_CARD_DESCRIPTION,
        "inputSchema": {
            "type": "object",
            "properties": {
                "concept": {"type": "string", "description": "Payment concept/title. REQUIRED, must come from the user"},
                "amount": {"type": "number", "description": "Payment amount in cents (e.g., 3000 = $30.00). REQUIRED"},
                "currency": {"type": "string", "description": "Payment currency (allowed: USD, EUR, USDC). REQUIRED"},
                "description": {"type": "string", "description": "Additional description for the payment (default: empty)"},
                "reference": {"type": "string", "description": "Unique reference for the payment. Generated when omitted"},
                "favorite": {"type": "boolean", "description": "Mark as favorite (default: false)"},
                "singleUse": {"type": "boolean", "description": "Whether the link can be paid only once (default: false)"},
                "expirationDays": {"type": "number", "description": "Days until the link expires, 0 = never (default: 0)"},
                "reasonId": {"type": "number", "description": "Payment reason id (default: 21)"},
                "lang": {"type": "string", "description": "Language of the payment page, e.g. es, en (default: es)"},
                "urlSuccess": {"type": "string", "description": "Redirect URL after a successful payment"},
                "urlFailed": {"type": "string", "description": "Redirect URL after a failed payment"},
                "urlNotification": {"type": "string", "description": "Webhook URL notified on payment"},
                "serviceDate": {"type": "string", "description": "Service date YYYY-MM-DD (default: today)"},
                "accountId": {
                    "type": "number",
                    "description": "Account that receives the payments. Defaults to the user's default account",
                },
            },
            "required": ["concept", "amount", "currency"],
        },
    },
    {
        "name": "create_external_beneficiary",
        "description": (
            "Create a new external bank account beneficiary.\n\n"
            "**Required:** firstName, lastName, accountNumber, currency and countryDestinationId or countryISO\n\n"
            "**Example:**\n"
            "```json\n"
            "{\n"
            "  \"firstName\": \"Panfilo\",\n"
            "  \"lastName\": \"Epifanio\",\n"
            "  \"accountNumber\": \"ES91 2100 0418 4502 0005 1332\",\n"
            "  \"currency\": \"EUR\",\n"
            "  \"countryDestinationId\": 1,\n"
            "  \"swift\": \"CAIXESBBXXX\"\n"
            "}\n"
            "```"
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "firstName": {"type": "string", "description": "First name. REQUIRED"},
                "lastName": {"type": "string", "description": "Last name. REQUIRED"},
                "accountNumber": {"type": "string", "description": "IBAN or account number. REQUIRED"},
                "currency": {"type": "string", "description": "Currency code. REQUIRED"},
                "countryDestinationId": {"type": "number", "description": "Country id. REQUIRED if countryISO is not given"},
                "countryISO": {"type": "string", "description": "Country ISO code. REQUIRED if countryDestinationId is not given"},
                "alias": {"type": "string", "description": "Friendly name (default: first and last name)"},
                "beneficiaryPersonType": {"type": "number", "description": "Person type (1=individual)"},
                "secondLastName": {"type": "string", "description": "Second last name"},
                "email": {"type": "string", "description": "Email"},
                "swift": {"type": "string", "description": "SWIFT/BIC code, recommended for international transfers"},
                "documentExpirationDate": {"type": "string", "description": "Document expiration date"},
                "phone": {"type": "string", "description": "Phone number, e.g. '+343487879879'"},
                "address": {"type": "string", "description": "Address, needed when userRelationTypeId is not 0"},
                "city": {"type": "string", "description": "City"},
                "province": {"type": "string", "description": "Province/State"},
                "postalCode": {"type": "string", "description": "Postal code, needed when userRelationTypeId is not 0"},
                "routingNumber": {"type": "string", "description": "Bank routing number, needed for US accounts"},
                "searchBy": {"type": "number", "description": "Search criteria type"},
                "searchValue": {"type": "string", "description": "Search value"},
                "correspondent": {"type": "string", "description": "Correspondent bank info"},
                "userRelationTypeId": {"type": "number", "description": "Relation type (0=myself, 3=commercial). Default: 3"},
                "state": {"type": "number", "description": "Status (0=Active, 1=Inactive, 2=Deleted). Default: 0"},
            },
            "required": ["firstName", "lastName", "accountNumber", "currency"],
        },
    },
    {
        "name": "create_internal_beneficiary",
        "description": (
            "Create a new internal TropiPay beneficiary (another TropiPay user).\n\n"
            "**Required:** alias, searchValue (the user's email)\n\n"
            "**Example:**\n"
            "```json\n"
            "{\n"
            "  \"alias\": \"MR Buchman\",\n"
            "  \"searchValue\": \"wick@gmail.com\"\n"
            "}\n"
            "```"
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "alias": {"type": "string", "description": "Friendly name. REQUIRED"},
                "searchValue": {"type": "string", "description": "Email of the TropiPay user. REQUIRED"},
                "searchBy": {"type": "number", "description": "Search criteria (1=email). Default: 1"},
                "accountNumber": {"type": "string", "description": "User email (default: searchValue)"},
                "beneficiaryPersonType": {"type": "number", "description": "Person type (1=individual)"},
                "firstName": {"type": "string", "description": "First name"},
                "lastName": {"type": "string", "description": "Last name"},
                "secondLastName": {"type": "string", "description": "Second last name"},
                "email": {"type": "string", "description": "Email"},
                "currency": {"type": "string", "description": "Currency code"},
                "userRelationTypeId": {"type": "number", "description": "Relation type (0=myself, 3=commercial). Default: 3"},
                "state": {"type": "number", "description": "Status (0=Active, 1=Inactive, 2=Deleted). Default: 0"},
            },
            "required": ["alias", "searchValue"],
        },
    },
    {
        "name": "create_crypto_beneficiary",
        "description": (
            "Create a new crypto wallet beneficiary.\n\n"
            "**Required:** firstName, lastName, accountNumber (wallet address), currency, network\n\n"
            "**Example:**\n"
            "```json\n"
            "{\n"
            "  \"firstName\": \"John\",\n"
            "  \"lastName\": \"Doe\",\n"
            "  \"accountNumber\": \"5Hw3k2c4Z5oLWxfTMT8nBnhqWF4SWcAFQLnJTJPzNe2y\",\n"
            "  \"currency\": \"USDC\",\n"
            "  \"network\": \"SOLANA\"\n"
            "}\n"
            "```"
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "firstName": {"type": "string", "description": "First name. REQUIRED"},
                "lastName": {"type": "string", "description": "Last name. REQUIRED"},
                "accountNumber": {"type": "string", "description": "Crypto wallet address. REQUIRED"},
                "currency": {"type": "string", "description": "Currency code (USDC, BTC). REQUIRED"},
                "network": {"type": "string", "description": "Blockchain network (SOLANA, ETH). REQUIRED"},
                "alias": {"type": "string", "description": "Friendly name (default: first and last name)"},
                "userRelationTypeId": {"type": "number", "description": "Relation type (0=myself, 3=commercial). Default: 3"},
                "state": {"type": "number", "description": "Status (0=Active, 1=Inactive, 2=Deleted). Default: 0"},
            },
            "required": ["firstName", "lastName", "accountNumber", "currency", "network"],
        },
    },
    {
        "name": "test_connection",
        "description": (
            "Test the connection to TropiPay API and verify authentication by retrieving "
            "the balance of the default account"
        ),
        "inputSchema": _no_arguments(),
    },
]

# Older tool names still accepted by the dispatcher
TOOL_ALIASES: Dict[str, str] = {
    "get_account_balance": "get_default_account_balance",
    "get_accounts": "get_accounts_list",
}


def get_mcp_tools() -> List[types.Tool]:
    return [
        types.Tool(name=tool["name"], description=tool["description"], inputSchema=tool["inputSchema"])
        for tool in TOOL_DEFINITIONS
    ]

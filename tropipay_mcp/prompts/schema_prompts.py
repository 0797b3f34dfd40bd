"""
Prompt templates describing TropiPay data structures and server usage.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from mcp import types
from mcp.server.lowlevel import Server

from tropipay_mcp.context import ToolContext
from tropipay_mcp.formatting import FAILURE_MARKER
from tropipay_mcp.resources.tropipay_resources import (
    ACCOUNT_STATES, ACCOUNT_TYPES, MOVEMENT_STATES, MOVEMENT_TYPES, RESOURCES, resource_uri,
)
from tropipay_mcp.tools.definitions import TOOL_DEFINITIONS

logger = logging.getLogger(__name__)

PROMPTS: List[Dict[str, str]] = [
    {
        "name": "tropipay_movements_schema",
        "description": "Get comprehensive schema documentation for TropiPay movements/transactions data structure",
    },
    {
        "name": "tropipay_accounts_schema",
        "description": "Get comprehensive schema documentation for TropiPay accounts data structure",
    },
    {
        "name": "tropipay_setup_guide",
        "description": "Step by step guide for configuring TropiPay credentials, including the current server status",
    },
    {
        "name": "tropipay_api_overview",
        "description": "Overview of the tools and resources exposed by this TropiPay server",
    },
]


def _code_list(catalog: Dict[str, Dict[str, Any]]) -> str:
    return "\n".join(
        f"  - `{entry['id']}`: {entry['name']} ({entry['description'][0].lower()}{entry['description'][1:]})"
        for entry in catalog.values()
    )


def movements_schema(context: ToolContext) -> str:
    return f"""# TropiPay Movements Schema Documentation

## 🔄 Complete Field Reference

### **Core Identifiers**
- `id`: Integer - Unique movement identifier in TropiPay system
- `bankOrderCode`: String - Transaction identifier (TX prefix for regular, DEV for refunds)
- `reference`: String - User-defined reference for the transaction (can be null)

### **Financial Data**
All amounts are expressed in cents (5000 = 50.00).
- `amount`: Number - Transaction amount (+ for credits, - for debits)
- `currency`: String - Transaction currency code (USD, EUR, etc.)
- `originalCurrencyAmount`: Number - Amount in original currency (before conversion)
- `destinationAmount`: Number - Amount in destination currency (after conversion)
- `destinationCurrency`: String - Destination currency code
- `conversionRate`: Number - Applied exchange rate for this movement
- `fee`: Number - Transaction fee (if applicable)

### **Account & Balance Information**
- `accountId`: Integer - ID of the account that this movement belongs to
- `balanceBefore`: Number - Account balance before this transaction
- `balanceAfter`: Number - Account balance after this transaction

### **Transaction Classification**
- `movementTypeId`: Integer - Type classification:
{_code_list(MOVEMENT_TYPES)}

### **Transaction Status**
- `state`: Integer - Transaction status:
{_code_list(MOVEMENT_STATES)}

### **Descriptive Information**
- `conceptTransfer`: String - Transaction description/concept
- `paymentcard`: String/UUID - Associated payment card UUID (null if not card-related)

### **Temporal Data**
- `completedAt` or `createdAt`: String/DateTime - Transaction timestamp

## 🎯 Usage Tips

1. **Direction**: positive `amount` is incoming money, negative is outgoing; `balanceBefore`/`balanceAfter` confirm it
2. **Categorization**: use `movementTypeId` first, then `conceptTransfer` for detail
3. **Status filtering**: `state = 3` is completed, `state = 5` awaits confirmation, `state = 4` needs attention
4. **Multi-currency**: compare `currency` with `destinationCurrency` and check `conversionRate`
5. **Reconciliation**: sum `fee` values for cost analysis and validate balance transitions
6. **Timeline**: sort by `completedAt`/`createdAt` for chronological views

The same codes are available as JSON from the `{resource_uri("movement-types")}` and `{resource_uri("movement-states")}` resources."""


def accounts_schema(context: ToolContext) -> str:
    return f"""# TropiPay Accounts Schema Documentation

## 🏦 Complete Field Reference

### **Core Identifiers**
- `id`: Integer - Unique account identifier in TropiPay system
- `accountNumber`: String - Unique human-friendly identifier for the account
- `alias`: String - Account alias/name set by the user for easy identification

### **Account Classification**
- `type`: Integer - Account type classification:
{_code_list(ACCOUNT_TYPES)}

### **Financial Information**
All amounts are expressed in cents (5000 = 50.00).
- `balance`: Number - Current available balance in the account currency
- `pendingIn`: Number - Pending incoming balance (charged but not yet ready to use)
- `pendingOut`: Number - Pending outgoing balance
- `currency`: String - Base currency for this account (USD, EUR, etc.)

### **Account Status**
- `state`: Integer - Account status:
{_code_list(ACCOUNT_STATES)}

### **Temporal Data**
- `createdAt`: String/DateTime - Date when the account was created
- `updatedAt`: String/DateTime - Last modification date of account information

### **Account Features**
- `isDefault`: Boolean - Whether this account is selected as the default account

## 🎯 Usage Tips

1. **Account selection**: `isDefault` identifies the primary account
2. **Balance analysis**: combine `balance` and `pendingIn` for the complete picture
3. **Operational limits**: check `state` before suggesting operations
4. **Multi-currency**: group accounts by `currency`
5. **User experience**: refer to accounts by `alias`

The same codes are available as JSON from the `{resource_uri("account-types")}` and `{resource_uri("account-states")}` resources."""


def setup_guide(context: ToolContext) -> str:
    config = context.config
    credentials = "✅ Configured" if config.has_credentials else "❌ Not configured"
    return f"""# TropiPay MCP Server Setup Guide

## Current Status
- Environment: {config.environment} ({config.server_mode})
- API URL: {config.api_url}
- Client ID: {config.masked_client_id}
- Credentials: {credentials}

## 1. Create API credentials
Log in to TropiPay, open the security section of your account and create
client credentials for API access. Sandbox credentials are created on the
sandbox site, production credentials on www.tropipay.com.

## 2. Configure the environment
Set these variables in the MCP host configuration or in a `.env` file next
to the server:

```
TROPIPAY_CLIENT_ID=your_client_id
TROPIPAY_CLIENT_SECRET=your_client_secret
TROPIPAY_ENVIRONMENT=sandbox
```

Optional:
- `TROPIPAY_BASE_URL`: override the API host
- `TROPIPAY_TIMEOUT`: HTTP timeout in seconds (default 30)
- `TROPIPAY_LOG_LEVEL`: logging level (default INFO)

## 3. Verify
Run `tropipay-mcp --check` from a terminal, or call the `test_connection`
tool from your assistant. Switch `TROPIPAY_ENVIRONMENT` to `production`
only after the sandbox flow works."""


def api_overview(context: ToolContext) -> str:
    tools = "\n".join(f"- `{tool['name']}`: {tool['description']}" for tool in TOOL_DEFINITIONS)
    resources = "\n".join(
        f"- `{resource_uri(resource['name'])}`: {resource['description']}" for resource in RESOURCES
    )
    prompts = "\n".join(f"- `{prompt['name']}`: {prompt['description']}" for prompt in PROMPTS)
    return f"""# TropiPay MCP Server Overview

Environment: {context.config.environment} ({context.config.api_url})

## 🛠️ Tools
{tools}

## 📚 Resources
{resources}

## 💬 Prompts
{prompts}

Amounts are always expressed in cents: 5000 means 50.00 in the given currency."""


PROMPT_BUILDERS: Dict[str, Callable[[ToolContext], str]] = {
    "tropipay_movements_schema": movements_schema,
    "tropipay_accounts_schema": accounts_schema,
    "tropipay_setup_guide": setup_guide,
    "tropipay_api_overview": api_overview,
}


def get_prompt_text(name: str, context: ToolContext) -> str:
    builder = PROMPT_BUILDERS.get(name)
    if builder is None:
        logger.warning(f"Unknown prompt requested: {name}")
        return f"{FAILURE_MARKER} Unknown prompt: {name}"
    return builder(context)


def register_prompts(server: Server, context: ToolContext) -> Server:
    """Register TropiPay prompts with the MCP server"""

    @server.list_prompts()
    async def list_prompts() -> List[types.Prompt]:
        return [types.Prompt(name=prompt["name"], description=prompt["description"]) for prompt in PROMPTS]

    @server.get_prompt()
    async def handle_get_prompt(name: str, arguments: Optional[Dict[str, str]] = None) -> types.GetPromptResult:
        logger.info(f"Prompt requested: {name}")
        description = next((p["description"] for p in PROMPTS if p["name"] == name), None)
        return types.GetPromptResult(
            description=description,
            messages=[
                types.PromptMessage(
                    role="user",
                    content=types.TextContent(type="text", text=get_prompt_text(name, context)),
                )
            ],
        )

    return server

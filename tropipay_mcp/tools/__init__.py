"""
TropiPay tools: name lookup, dispatch and MCP registration.
"""

import logging
from functools import partial
from typing import Any, Callable, Dict, List, Mapping, Optional

from anyio import to_thread
from mcp import types
from mcp.server.lowlevel import Server

from tropipay_mcp.context import ToolContext
from tropipay_mcp.formatting import FAILURE_MARKER, error_reason
from tropipay_mcp.tools.account_tools import (
    get_accounts_list, get_default_account_balance, get_movement_list,
    get_profile_data, test_connection,
)
from tropipay_mcp.tools.beneficiary_tools import (
    create_crypto_beneficiary, create_external_beneficiary,
    create_internal_beneficiary, list_deposit_accounts,
)
from tropipay_mcp.tools.definitions import TOOL_ALIASES, get_mcp_tools
from tropipay_mcp.tools.payment_tools import create_paymentcard, list_paymentcards

logger = logging.getLogger(__name__)

ToolHandler = Callable[[Optional[Mapping[str, Any]], ToolContext], str]

TOOL_HANDLERS: Dict[str, ToolHandler] = {
    "get_default_account_balance": get_default_account_balance,
    "get_profile_data": get_profile_data,
    "get_movement_list": get_movement_list,
    "get_accounts_list": get_accounts_list,
    "list_deposit_accounts": list_deposit_accounts,
    "list_paymentcards": list_paymentcards,
    "create_paymentcard": create_paymentcard,
    "create_external_beneficiary": create_external_beneficiary,
    "create_internal_beneficiary": create_internal_beneficiary,
    "create_crypto_beneficiary": create_crypto_beneficiary,
    "test_connection": test_connection,
}


class ToolDispatcher:
    """Routes a tool call to its handler and wraps the text in MCP content"""

    def __init__(self, context: ToolContext, handlers: Optional[Dict[str, ToolHandler]] = None,
                 aliases: Optional[Dict[str, str]] = None):
        self.context = context
        self.handlers = TOOL_HANDLERS if handlers is None else handlers
        self.aliases = TOOL_ALIASES if aliases is None else aliases

    def resolve(self, name: str) -> Optional[str]:
        name = self.aliases.get(name, name)
        return name if name in self.handlers else None

    def call(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> List[types.TextContent]:
        canonical = self.resolve(name)
        if canonical is None:
            logger.warning(f"Unknown tool requested: {name}")
            text = f"{FAILURE_MARKER} Unknown tool: {name}"
        else:
            try:
                text = self.handlers[canonical](arguments or {}, self.context)
            except Exception as e:
                logger.exception(f"Unhandled error in tool {canonical}")
                text = f"{FAILURE_MARKER} {error_reason(e)}"
        return [types.TextContent(type="text", text=text)]


def register_tools(server: Server, context: ToolContext) -> Server:
    """Register the TropiPay tools with the MCP server"""
    dispatcher = ToolDispatcher(context)

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        return get_mcp_tools()

    # Handlers check their own arguments so every missing field is reported together
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: Dict[str, Any]) -> List[types.TextContent]:
        logger.info(f"Tool call: {name}")
        return await to_thread.run_sync(partial(dispatcher.call, name, arguments))

    return server

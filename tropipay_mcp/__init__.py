"""
TropiPay MCP Server Implementation

This module provides a Model Context Protocol (MCP) server for the TropiPay
payments API: account balance, profile, movements, accounts, payment cards
and beneficiaries, plus reference resources and schema prompts.
"""

__version__ = "0.1.0"

from typing import Optional

from mcp.server.lowlevel import Server

from tropipay_mcp.config import load_config
from tropipay_mcp.context import ToolContext
from tropipay_mcp.prompts import register_prompts
from tropipay_mcp.resources import register_resources
from tropipay_mcp.tools import register_tools

SERVER_NAME = "TropiPay MCP Server"


def create_server(context: Optional[ToolContext] = None) -> Server:
    """Create and configure the MCP server for TropiPay"""
    if context is None:
        context = ToolContext.from_config(load_config())

    mcp_server = Server(
        SERVER_NAME,
        version=__version__,
        instructions="Tools for the TropiPay payments API. Amounts are always expressed in cents.",
    )

    # Register components
    mcp_server = register_tools(mcp_server, context)
    mcp_server = register_resources(mcp_server, context)
    mcp_server = register_prompts(mcp_server, context)

    return mcp_server

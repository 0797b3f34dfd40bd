import json
import logging
from typing import Any, Callable, Dict, List
from urllib.parse import urlparse

from anyio import to_thread
from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents

from tropipay_mcp.context import ToolContext
from tropipay_mcp.formatting import error_reason, utc_timestamp

logger = logging.getLogger(__name__)

MIME_TYPE = "application/json"
URI_SCHEME = "tropipay"

RESOURCES: List[Dict[str, str]] = [
    {
        "name": "config",
        "title": "TropiPay Configuration",
        "description": "Current TropiPay API configuration and environment settings",
    },
    {
        "name": "status",
        "title": "API Status",
        "description": "TropiPay API client status and health check",
    },
    {
        "name": "movement-types",
        "title": "Movement Types Reference",
        "description": "Reference of TropiPay movementTypeId values and their meanings",
    },
    {
        "name": "movement-states",
        "title": "Movement States Reference",
        "description": "Reference of TropiPay movement state codes and their meanings",
    },
    {
        "name": "account-types",
        "title": "Account Types Reference",
        "description": "Reference of TropiPay account type codes and their meanings",
    },
    {
        "name": "account-states",
        "title": "Account States Reference",
        "description": "Reference of TropiPay account state codes and their meanings",
    },
]


def _catalog(entries: List[tuple]) -> Dict[str, Dict[str, Any]]:
    return {
        str(code): {"id": code, "name": name, "description": description}
        for code, name, description in entries
    }


MOVEMENT_TYPES = _catalog([
    (1, "Transfer", "Standard money transfer between accounts or to external recipients"),
    (2, "Card Credit", "Credit received from payment card transactions"),
    (3, "Refund", "Money returned for cancelled or disputed transactions"),
    (4, "Card Refund", "Refund processed back to the original payment card"),
    (5, "Top Up", "Account balance increase from an external funding source"),
    (6, "Exchange", "Currency exchange between different account currencies"),
    (7, "ATM", "ATM withdrawal or cash-related transactions"),
    (8, "Fee", "Service fees charged for various operations"),
    (9, "Adjustment", "Account balance adjustments or corrections"),
])

MOVEMENT_STATES = _catalog([
    (2, "Charged", "Transaction has been charged but not yet completed"),
    (3, "Paid", "Transaction has been successfully completed and paid"),
    (4, "Error", "Transaction failed due to an error"),
    (5, "Pending In", "Incoming transaction pending confirmation"),
    (6, "Cancelled", "Transaction was cancelled before completion"),
])

ACCOUNT_TYPES = _catalog([
    (1, "Regular Account", "Standard wallet account"),
    (2, "Tropicard Account", "Account linked to a Tropicard"),
    (3, "Other", "Special purpose account"),
    (4, "Pre-funded Account", "Account with pre-loaded funds"),
])

ACCOUNT_STATES = _catalog([
    (1, "Active", "Account is active and operational"),
    (2, "Paused", "Account is temporarily suspended"),
    (3, "Blocked", "Account access is restricted"),
    (4, "Deleted", "Account has been logically deleted"),
])


def resource_uri(name: str) -> str:
    return f"{URI_SCHEME}://{name}"


def resource_name(uri: str) -> str:
    """'tropipay://config' -> 'config'"""
    parsed = urlparse(str(uri))
    return f"{parsed.netloc}{parsed.path}".strip("/")


def _reference(title: str, description: str, key: str, entries: Dict[str, Any]) -> Dict[str, Any]:
    return {"title": title, "description": description, key: entries}


def _config_document(context: ToolContext) -> Dict[str, Any]:
    from tropipay_mcp import __version__

    config = context.config
    return {
        "environment": config.environment,
        "baseUrl": config.base_url or config.api_url,
        "clientId": config.masked_client_id,
        "hasCredentials": config.has_credentials,
        "clientInitialized": context.client_initialized(),
        "serverVersion": f"tropipay-mcp v{__version__}",
    }


def _status_document(context: ToolContext) -> Dict[str, Any]:
    config = context.config
    try:
        context.get_client()
    except Exception as e:
        logger.error(f"Status check failed: {str(e)}")
        return {
            "status": "error",
            "environment": config.environment,
            "baseUrl": config.api_url,
            "error": error_reason(e),
            "timestamp": utc_timestamp(),
        }
    return {
        "status": "ready",
        "environment": config.environment,
        "baseUrl": config.api_url,
        "clientReady": True,
        "timestamp": utc_timestamp(),
    }


RESOURCE_READERS: Dict[str, Callable[[ToolContext], Dict[str, Any]]] = {
    "config": _config_document,
    "status": _status_document,
    "movement-types": lambda context: _reference(
        "TropiPay Movement Types Reference",
        "Movement type IDs (movementTypeId) and their meanings",
        "movementTypes", MOVEMENT_TYPES),
    "movement-states": lambda context: _reference(
        "TropiPay Movement States Reference",
        "Movement state codes and their meanings",
        "movementStates", MOVEMENT_STATES),
    "account-types": lambda context: _reference(
        "TropiPay Account Types Reference",
        "Account type codes and their meanings",
        "accountTypes", ACCOUNT_TYPES),
    "account-states": lambda context: _reference(
        "TropiPay Account States Reference",
        "Account state codes and their meanings",
        "accountStates", ACCOUNT_STATES),
}


def read_resource(name: str, context: ToolContext) -> str:
    """JSON text for a resource; unknown names produce an error document"""
    reader = RESOURCE_READERS.get(name)
    if reader is None:
        logger.warning(f"Unknown resource requested: {name}")
        return json.dumps({"error": f"Unknown resource: {name}"}, indent=2)
    return json.dumps(reader(context), indent=2)


def register_resources(server: Server, context: ToolContext) -> Server:
    """Register TropiPay resources with the MCP server"""

    @server.list_resources()
    async def list_resources() -> List[types.Resource]:
        return [
            types.Resource(
                uri=resource_uri(resource["name"]),
                name=resource["title"],
                description=resource["description"],
                mimeType=MIME_TYPE,
            )
            for resource in RESOURCES
        ]

    @server.read_resource()
    async def handle_read_resource(uri: Any) -> List[ReadResourceContents]:
        name = resource_name(str(uri))
        logger.info(f"Resource read: {name}")
        text = await to_thread.run_sync(read_resource, name, context)
        return [ReadResourceContents(content=text, mime_type=MIME_TYPE)]

    return server

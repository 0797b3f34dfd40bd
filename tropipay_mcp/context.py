from dataclasses import dataclass, field
from functools import partial
from typing import Any, Callable

from tropipay_mcp.client import client_initialized, get_client
from tropipay_mcp.config import TropiPayConfig


@dataclass
class ToolContext:
    """Shared state handed to every tool, resource and prompt handler"""
    config: TropiPayConfig
    get_client: Callable[[], Any]
    client_initialized: Callable[[], bool] = field(default=client_initialized)

    @classmethod
    def from_config(cls, config: TropiPayConfig) -> "ToolContext":
        """Context backed by the process-wide client accessor"""
        return cls(config=config, get_client=partial(get_client, config))

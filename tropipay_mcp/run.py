#!/usr/bin/env python3
"""
Run script for the TropiPay MCP server.

Serves over stdio by default. Stdout carries the MCP protocol, so every log
line and the --check report go to stderr (and logs/mcp_server.log).
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

import anyio
from mcp.server.stdio import stdio_server
from rich.console import Console
from rich.table import Table

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Log to logs/mcp_server.log and stderr; stderr only when the log file cannot be opened"""
    level_name = "DEBUG" if verbose else os.getenv("TROPIPAY_LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    file_error = None
    try:
        log_dir = Path("logs")
        log_dir.mkdir(exist_ok=True)
        handlers.insert(0, logging.FileHandler(log_dir / "mcp_server.log"))
    except OSError as e:
        file_error = e

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True,
    )
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("requests").setLevel(logging.WARNING)

    if file_error is not None:
        logger.warning(f"Could not open log file, logging to stderr only: {str(file_error)}")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="tropipay-mcp", description="TropiPay MCP server")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument("--check", action="store_true",
                        help="Print configuration and connection status, then exit")
    return parser.parse_args(argv)


def check_connection(console: Optional[Console] = None) -> bool:
    """Print the configuration and the result of authenticating against TropiPay"""
    from tropipay_mcp import __version__
    from tropipay_mcp.config import load_config
    from tropipay_mcp.context import ToolContext

    console = console or Console(stderr=True)
    config = load_config()
    context = ToolContext.from_config(config)

    connected = True
    try:
        context.get_client().get_balance()
        status = "[green]Connected[/green]"
    except Exception as e:
        logger.error(f"Connection check failed: {str(e)}")
        connected = False
        status = f"[red]Failed: {e}[/red]"

    table = Table(title=f"TropiPay MCP Server v{__version__}")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    table.add_row("Environment", f"{config.environment} ({config.server_mode})")
    table.add_row("API URL", config.api_url)
    table.add_row("Client ID", config.masked_client_id)
    table.add_row("Credentials", "yes" if config.has_credentials else "[red]missing[/red]")
    table.add_row("Timeout", f"{config.timeout:g}s")
    table.add_row("Connection", status)
    console.print(table)
    return connected


async def serve() -> None:
    from tropipay_mcp import create_server

    server = create_server()
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


def main(argv: Optional[List[str]] = None) -> int:
    """Run the MCP server"""
    args = parse_args(argv)
    setup_logging(args.verbose)

    if args.check:
        return 0 if check_connection() else 1

    try:
        logger.info("Starting TropiPay MCP server...")
        anyio.run(serve)
    except KeyboardInterrupt:
        logger.info("TropiPay MCP server stopped")
    except Exception as e:
        logger.error(f"Error starting server: {str(e)}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())

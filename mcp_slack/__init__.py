# Copyright 2025 CNOE
# SPDX-License-Identifier: Apache-2.0

import asyncio
import logging
import sys
from typing import Literal, Optional

import click

from mcp_slack import config

# Type aliases for clarity
InputTransport = Literal["stdio", "http", "streamable-http"]  # Accepted via CLI ('http' is an alias)
RuntimeTransport = Literal["stdio", "streamable-http"]


@click.command()
@click.option(
    "--bot-token",
    envvar="SLACK_BOT_TOKEN",
    default=config.SLACK_BOT_TOKEN,
    help="Slack bot token (xoxb-...). Without it, each tool call must pass SLACK_BOT_TOKEN.",
)
@click.option(
    "--port", default=config.MCP_PORT, type=int, help="Port to listen on for HTTP", envvar="MCP_PORT"
)
@click.option(
    "--transport",
    type=click.Choice(["stdio", "http", "streamable-http"], case_sensitive=False),
    default=config.MCP_MODE,
    envvar="MCP_MODE",
    help="Transport type",
)
@click.option("-v", "--verbose", count=True)
@click.option("--host", default=config.MCP_HOST, help="Host to listen on", envvar="MCP_HOST")
def main(bot_token: Optional[str], verbose: int, transport: InputTransport, port: int, host: str) -> None:
    """Entry point for the Slack MCP server.

    Parameters:
      bot_token: Slack bot token (from env/CLI); optional.
      verbose: Verbosity flag count (-v / -vv) mapping to log level.
      transport: CLI selected transport ('http' maps to 'streamable-http').
      port: Port to bind for the HTTP transport.
      host: Host interface to bind.
    """
    logging_level = logging.WARN
    if verbose == 1:
        logging_level = logging.INFO
    elif verbose >= 2:
        logging_level = logging.DEBUG
    logging.basicConfig(level=logging_level, stream=sys.stderr)

    transport = transport.lower()
    selected_transport: RuntimeTransport = "streamable-http" if transport == "http" else transport

    from mcp_slack.server import create_server, run_stdio, run_streamable_http

    server = create_server(bot_token or None)
    if not bot_token:
        logging.getLogger(__name__).warning(
            "SLACK_BOT_TOKEN is not set; tool calls must provide it as an argument"
        )

    if selected_transport == "stdio":
        asyncio.run(run_stdio(server))
    else:
        asyncio.run(run_streamable_http(server, host, port))


if __name__ == "__main__":
    main()

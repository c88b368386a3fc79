# Copyright 2025 CNOE
# SPDX-License-Identifier: Apache-2.0

import contextlib
import json
import logging
from collections.abc import AsyncIterator
from typing import Any, Optional

from mcp.server import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.types import CallToolResult, GetPromptResult, Prompt, Resource, TextContent, Tool
from pydantic import AnyUrl, ValidationError

from mcp_slack.__about__ import __version__
from mcp_slack.config import SERVER_NAME
from mcp_slack.prompts import SERVER_INFO_RESOURCE, get_prompt, list_prompts, read_server_info
from mcp_slack.session import ClientSessions
from mcp_slack.tools.arguments import validate_arguments
from mcp_slack.tools.catalog import TOOLS
from mcp_slack.tools.dispatcher import Dispatcher

logger = logging.getLogger(__name__)


def _error_result(message: str) -> CallToolResult:
    return CallToolResult(
        isError=True,
        content=[TextContent(type="text", text=f"Error: {message}")],
    )


def _format_validation_error(name: str, error: ValidationError) -> str:
    problems = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail["loc"]) or "arguments"
        problems.append(f"{location}: {detail['msg']}")
    return f"Invalid arguments for {name}: " + "; ".join(problems)


async def invoke_tool(
    name: str,
    arguments: Optional[dict[str, Any]],
    *,
    bot_token: Optional[str],
    sessions: ClientSessions,
) -> CallToolResult:
    """Run one tool call and wrap the outcome for the host.

    Never raises: every failure is returned as an ``isError`` result whose
    text starts with ``Error:``.
    """
    arguments = arguments or {}
    try:
        token = sessions.resolve_token(bot_token, arguments)
        params = validate_arguments(name, arguments)
        client = sessions.client_for(token)
        result = await Dispatcher(client).dispatch(name, params)
    except ValidationError as e:
        message = _format_validation_error(name, e)
        logger.error(message)
        return _error_result(message)
    except Exception as e:
        logger.error(f"Tool {name} failed: {e}")
        return _error_result(str(e))

    logger.debug(f"Tool {name} completed")
    return CallToolResult(
        isError=False,
        content=[TextContent(type="text", text=json.dumps(result, indent=2))],
    )


def create_server(bot_token: Optional[str] = None, *, sessions: Optional[ClientSessions] = None) -> Server:
    """Build the Slack MCP server.

    Args:
        bot_token: Static bot token; when unset each call must carry a
            ``SLACK_BOT_TOKEN`` argument
        sessions: Client sessions to use (a single-slot one by default)
    """
    server = Server(SERVER_NAME, version=__version__)
    sessions = sessions if sessions is not None else ClientSessions()

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        return TOOLS

    # Arguments are validated against the generated models in invoke_tool
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict) -> CallToolResult:
        logger.debug(f"Calling tool {name}")
        return await invoke_tool(name, arguments, bot_token=bot_token, sessions=sessions)

    @server.list_prompts()
    async def handle_list_prompts() -> list[Prompt]:
        return list_prompts()

    @server.get_prompt()
    async def handle_get_prompt(name: str, arguments: dict[str, str] | None) -> GetPromptResult:
        return get_prompt(name)

    @server.list_resources()
    async def list_resources() -> list[Resource]:
        return [SERVER_INFO_RESOURCE]

    @server.read_resource()
    async def read_resource(uri: AnyUrl) -> list[ReadResourceContents]:
        content = read_server_info(str(uri), connected=bool(bot_token))
        return [ReadResourceContents(content=content, mime_type="application/json")]

    return server


async def run_stdio(server: Server) -> None:
    from mcp.server.stdio import stdio_server

    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


def create_http_app(server: Server):
    """Starlette app serving the MCP streamable HTTP transport at ``/mcp``."""
    from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
    from starlette.applications import Starlette
    from starlette.routing import Mount

    session_manager = StreamableHTTPSessionManager(app=server)

    async def handle_streamable_http(scope, receive, send) -> None:
        await session_manager.handle_request(scope, receive, send)

    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncIterator[None]:
        async with session_manager.run():
            logger.info("Streamable HTTP session manager started")
            yield

    return Starlette(routes=[Mount("/mcp", app=handle_streamable_http)], lifespan=lifespan)


async def run_streamable_http(server: Server, host: str, port: int) -> None:
    import uvicorn

    app = create_http_app(server)
    config = uvicorn.Config(app, host=host, port=port, log_level="info")
    await uvicorn.Server(config).serve()

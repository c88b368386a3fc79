"""Tests for the MCP adapter."""

import json

import httpx
import pytest
from mcp.types import (
    GetPromptRequest,
    GetPromptRequestParams,
    ListPromptsRequest,
    ListResourcesRequest,
    ListToolsRequest,
    ReadResourceRequest,
    ReadResourceRequestParams,
)

from mcp_slack.server import create_http_app, create_server, invoke_tool
from mcp_slack.session import ClientSessions


@pytest.fixture
def sessions(make_client):
    return ClientSessions(client_factory=make_client)


class TestInvokeTool:
    """Tests for invoke_tool."""

    @pytest.mark.asyncio
    async def test_success_returns_pretty_json(self, sessions, recorder):
        recorder.responses["chat.postMessage"] = {"ok": True, "channel": "C1", "ts": "1.2"}

        result = await invoke_tool(
            "slack_send_message", {"channel": "C1", "text": "hi"}, bot_token="xoxb-static", sessions=sessions
        )

        assert result.isError is False
        assert result.content[0].text == json.dumps({"ok": True, "channel": "C1", "ts": "1.2"}, indent=2)

    @pytest.mark.asyncio
    async def test_missing_token_is_reported_without_network(self, sessions, recorder):
        result = await invoke_tool(
            "slack_send_message", {"channel": "C1", "text": "hi"}, bot_token=None, sessions=sessions
        )

        assert result.isError is True
        assert result.content[0].text == (
            "Error: SLACK_BOT_TOKEN is required. Set it as an environment variable or pass via config."
        )
        assert recorder.requests == []

    @pytest.mark.asyncio
    async def test_static_token_wins_over_argument(self, sessions, recorder):
        await invoke_tool(
            "slack_join_channel",
            {"channel": "C1", "SLACK_BOT_TOKEN": "xoxb-argument"},
            bot_token="xoxb-static",
            sessions=sessions,
        )

        assert recorder.requests[0].headers["Authorization"] == "Bearer xoxb-static"
        assert recorder.body() == {"channel": "C1"}

    @pytest.mark.asyncio
    async def test_argument_token_is_used_without_static_token(self, sessions, recorder):
        await invoke_tool(
            "slack_join_channel",
            {"channel": "C1", "SLACK_BOT_TOKEN": "xoxb-argument"},
            bot_token=None,
            sessions=sessions,
        )

        assert recorder.requests[0].headers["Authorization"] == "Bearer xoxb-argument"

    @pytest.mark.asyncio
    async def test_unknown_tool(self, sessions, recorder):
        result = await invoke_tool("slack_not_a_tool", {}, bot_token="xoxb-static", sessions=sessions)

        assert result.isError is True
        assert result.content[0].text == "Error: Unknown tool: slack_not_a_tool"
        assert recorder.requests == []

    @pytest.mark.asyncio
    async def test_api_error(self, sessions, recorder):
        recorder.responses["conversations.info"] = {"ok": False, "error": "channel_not_found"}

        result = await invoke_tool(
            "slack_get_channel_info", {"channel": "C404"}, bot_token="xoxb-static", sessions=sessions
        )

        assert result.isError is True
        assert result.content[0].text == "Error: Slack API error: channel_not_found"

    @pytest.mark.asyncio
    async def test_invalid_arguments_make_no_call(self, sessions, recorder):
        result = await invoke_tool(
            "slack_send_message", {"channel": "C1"}, bot_token="xoxb-static", sessions=sessions
        )

        assert result.isError is True
        assert result.content[0].text.startswith("Error: Invalid arguments for slack_send_message: text")
        assert recorder.requests == []

    @pytest.mark.asyncio
    async def test_boolean_post_at_is_rejected_before_sending(self, sessions, recorder):
        result = await invoke_tool(
            "slack_schedule_message",
            {"channel": "C1", "post_at": True, "text": "x"},
            bot_token="xoxb-static",
            sessions=sessions,
        )

        assert result.isError is True
        assert "post_at" in result.content[0].text
        assert recorder.requests == []

    @pytest.mark.asyncio
    async def test_network_failure_never_raises(self, sessions, recorder):
        recorder.responses["users.list"] = httpx.ConnectTimeout("timed out")

        result = await invoke_tool("slack_list_users", None, bot_token="xoxb-static", sessions=sessions)

        assert result.isError is True
        assert result.content[0].text.startswith("Error: Request error calling users.list")


class TestServerHandlers:
    """Tests for the registered MCP request handlers."""

    @pytest.mark.asyncio
    async def test_list_tools_returns_raw_schemas(self):
        server = create_server("xoxb-static")

        result = await server.request_handlers[ListToolsRequest](ListToolsRequest(method="tools/list"))

        tools = result.root.tools
        assert len(tools) == 38
        send = next(tool for tool in tools if tool.name == "slack_send_message")
        assert send.inputSchema["properties"]["channel"]["description"]
        assert send.annotations.title == "Send Message"

    @pytest.mark.asyncio
    async def test_prompts(self):
        server = create_server()

        listed = await server.request_handlers[ListPromptsRequest](ListPromptsRequest(method="prompts/list"))
        assert [prompt.name for prompt in listed.root.prompts] == [
            "send-and-manage-messages",
            "search-and-navigate",
        ]

        fetched = await server.request_handlers[GetPromptRequest](
            GetPromptRequest(method="prompts/get", params=GetPromptRequestParams(name="search-and-navigate"))
        )
        assert "slack_search_messages" in fetched.root.messages[0].content.text

    @pytest.mark.asyncio
    async def test_server_info_resource(self):
        server = create_server("xoxb-static")

        listed = await server.request_handlers[ListResourcesRequest](
            ListResourcesRequest(method="resources/list")
        )
        assert [str(resource.uri) for resource in listed.root.resources] == ["slack://server-info"]

        read = await server.request_handlers[ReadResourceRequest](
            ReadResourceRequest(method="resources/read", params=ReadResourceRequestParams(uri="slack://server-info"))
        )
        info = json.loads(read.root.contents[0].text)
        assert info["connected"] is True
        assert info["tools_available"] == 38
        assert info["tool_categories"]["conversations"] == 12

    @pytest.mark.asyncio
    async def test_server_info_reports_disconnected_without_static_token(self):
        server = create_server()

        read = await server.request_handlers[ReadResourceRequest](
            ReadResourceRequest(method="resources/read", params=ReadResourceRequestParams(uri="slack://server-info"))
        )

        assert json.loads(read.root.contents[0].text)["connected"] is False


class TestHttpApp:
    """Tests for create_http_app."""

    def test_mounts_streamable_http_at_mcp(self):
        from starlette.routing import Mount

        app = create_http_app(create_server("xoxb-static"))

        mounts = [route for route in app.routes if isinstance(route, Mount)]
        assert [mount.path for mount in mounts] == ["/mcp"]

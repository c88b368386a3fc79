"""Unit tests for the Slack Web API client."""

import httpx
import pytest

from mcp_slack.api.client import SlackClient
from mcp_slack.errors import ApiError, ConfigurationError, TransportError

from .conftest import TEST_API_URL, TEST_TOKEN


class TestConstruction:
    """Tests for SlackClient construction."""

    def test_empty_token_is_rejected(self):
        with pytest.raises(ConfigurationError, match="SLACK_BOT_TOKEN is required"):
            SlackClient("")

    def test_repr_hides_token(self, slack_client):
        assert TEST_TOKEN not in repr(slack_client)
        assert "[REDACTED]" in repr(slack_client)

    def test_base_url_trailing_slash_is_dropped(self):
        client = SlackClient(TEST_TOKEN, base_url="https://example.test/api/")
        assert client.base_url == "https://example.test/api"


class TestCall:
    """Tests for SlackClient.call."""

    @pytest.mark.asyncio
    async def test_posts_json_with_bearer_token(self, slack_client, recorder):
        await slack_client.call("chat.postMessage", {"channel": "C1", "text": "hi"})

        request = recorder.requests[0]
        assert request.method == "POST"
        assert str(request.url) == f"{TEST_API_URL}/chat.postMessage"
        assert request.headers["Authorization"] == f"Bearer {TEST_TOKEN}"
        assert request.headers["Content-Type"] == "application/json; charset=utf-8"
        assert recorder.body() == {"channel": "C1", "text": "hi"}

    @pytest.mark.asyncio
    async def test_no_params_sends_no_body(self, slack_client, recorder):
        await slack_client.call("team.info")
        assert recorder.requests[0].content == b""

    @pytest.mark.asyncio
    async def test_success_returns_body_unchanged(self, slack_client, recorder):
        recorder.responses["conversations.members"] = {"ok": True, "members": ["U1", "U2"]}

        result = await slack_client.call("conversations.members", {"channel": "C1"})

        assert result == {"ok": True, "members": ["U1", "U2"]}

    @pytest.mark.asyncio
    async def test_ok_false_raises_api_error(self, slack_client, recorder):
        recorder.responses["chat.postMessage"] = {"ok": False, "error": "channel_not_found"}

        with pytest.raises(ApiError) as exc_info:
            await slack_client.call("chat.postMessage", {"channel": "C404", "text": "hi"})

        assert exc_info.value.error == "channel_not_found"
        assert str(exc_info.value) == "Slack API error: channel_not_found"
        assert exc_info.value.response == {"ok": False, "error": "channel_not_found"}

    @pytest.mark.asyncio
    async def test_ok_false_without_error_code(self, slack_client, recorder):
        recorder.responses["users.list"] = {"ok": False}

        with pytest.raises(ApiError, match="unknown_error"):
            await slack_client.call("users.list")

    @pytest.mark.asyncio
    async def test_ok_false_is_checked_regardless_of_status(self, slack_client, recorder):
        recorder.responses["chat.postMessage"] = httpx.Response(
            429, json={"ok": False, "error": "ratelimited"}
        )

        with pytest.raises(ApiError, match="ratelimited"):
            await slack_client.call("chat.postMessage", {"channel": "C1", "text": "hi"})

    @pytest.mark.asyncio
    async def test_non_json_body_raises_transport_error(self, slack_client, recorder):
        recorder.responses["chat.postMessage"] = httpx.Response(502, text="<html>Bad Gateway</html>")

        with pytest.raises(TransportError) as exc_info:
            await slack_client.call("chat.postMessage", {"channel": "C1", "text": "hi"})

        assert exc_info.value.status_code == 502

    @pytest.mark.asyncio
    async def test_non_object_json_raises_transport_error(self, slack_client, recorder):
        recorder.responses["emoji.list"] = httpx.Response(200, json=["not", "an", "object"])

        with pytest.raises(TransportError):
            await slack_client.call("emoji.list")

    @pytest.mark.asyncio
    async def test_network_failure_is_redacted(self, slack_client, recorder):
        recorder.responses["users.list"] = httpx.ConnectError(f"connection refused for {TEST_TOKEN}")

        with pytest.raises(TransportError) as exc_info:
            await slack_client.call("users.list")

        assert TEST_TOKEN not in str(exc_info.value)
        assert "[REDACTED]" in str(exc_info.value)


class TestNamedOperations:
    """Tests for the per-method wrappers."""

    @pytest.mark.asyncio
    async def test_options_are_merged_after_positional_fields(self, slack_client, recorder):
        await slack_client.get_channel_history("C1", limit=10, cursor="abc")

        assert recorder.methods == ["conversations.history"]
        assert recorder.body() == {"channel": "C1", "limit": 10, "cursor": "abc"}

    @pytest.mark.asyncio
    async def test_add_bookmark_defaults_to_link_type(self, slack_client, recorder):
        await slack_client.add_bookmark("C1", "Docs", "https://example.com")

        assert recorder.body() == {
            "channel_id": "C1",
            "title": "Docs",
            "type": "link",
            "link": "https://example.com",
        }

    @pytest.mark.asyncio
    async def test_add_bookmark_options_override_defaults(self, slack_client, recorder):
        await slack_client.add_bookmark("C1", "Docs", "https://example.com", type="folder", emoji=":book:")

        body = recorder.body()
        assert body["type"] == "folder"
        assert body["emoji"] == ":book:"

    @pytest.mark.asyncio
    async def test_list_without_options_sends_no_body(self, slack_client, recorder):
        await slack_client.list_channels()

        assert recorder.methods == ["conversations.list"]
        assert recorder.requests[0].content == b""

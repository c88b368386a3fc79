"""Unit tests for prompts and the server-info resource."""

import json

import pytest

from mcp_slack.__about__ import __version__
from mcp_slack.prompts import get_prompt, list_prompts, read_server_info, server_info


class TestPrompts:
    """Tests for the usage-guide prompts."""

    def test_two_prompts_are_listed(self):
        prompts = {prompt.name: prompt.description for prompt in list_prompts()}
        assert prompts == {
            "send-and-manage-messages": "Guide for sending and managing Slack messages",
            "search-and-navigate": "Guide for searching messages/files and navigating channels",
        }

    def test_message_guide_mentions_message_tools(self):
        text = get_prompt("send-and-manage-messages").messages[0].content.text
        for tool_name in ("slack_send_message", "slack_schedule_message", "slack_get_permalink"):
            assert tool_name in text

    def test_prompt_is_a_user_message(self):
        result = get_prompt("search-and-navigate")
        assert result.messages[0].role == "user"
        assert "90 days" in result.messages[0].content.text

    def test_unknown_prompt(self):
        with pytest.raises(ValueError, match="Unknown prompt"):
            get_prompt("not-a-prompt")


class TestServerInfo:
    """Tests for the slack://server-info document."""

    def test_document(self):
        info = server_info(connected=True)

        assert info["name"] == "slack-mcp"
        assert info["version"] == __version__
        assert info["connected"] is True
        assert info["tools_available"] == 38
        assert sum(info["tool_categories"].values()) == 38

    def test_read_returns_json(self):
        info = json.loads(read_server_info("slack://server-info", connected=False))
        assert info["connected"] is False

    def test_unknown_resource(self):
        with pytest.raises(ValueError, match="Unknown resource"):
            read_server_info("slack://nope", connected=False)

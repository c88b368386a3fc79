# Copyright 2025 CNOE
# SPDX-License-Identifier: Apache-2.0

"""Usage-guide prompts and the server-info resource."""

import json
from typing import Any

from mcp.types import GetPromptResult, Prompt, PromptMessage, Resource, TextContent

from mcp_slack.__about__ import __version__
from mcp_slack.config import SERVER_NAME
from mcp_slack.tools.catalog import TOOLS, category_counts

SERVER_INFO_URI = "slack://server-info"

_SEND_AND_MANAGE_MESSAGES = "\n".join(
    [
        "You are a Slack workspace assistant. Help me send and manage messages.",
        "",
        "Available message tools:",
        "1. **Send**: slack_send_message with channel + text (supports Block Kit via blocks param)",
        "2. **Reply in thread**: slack_send_message with thread_ts parameter",
        "3. **Update**: slack_update_message with channel + ts + new text/blocks",
        "4. **Delete**: slack_delete_message with channel + ts",
        "5. **Schedule**: slack_schedule_message with channel + post_at (Unix) + text",
        "6. **Get permalink**: slack_get_permalink with channel + message_ts",
        "",
        "Tips:",
        '- Always include "text" even when using "blocks" (used as notification fallback)',
        "- Use mrkdwn formatting: *bold*, _italic_, ~strikethrough~, `code`, ```code block```",
        "- Channel IDs start with C (public), G (private), D (DM)",
        "",
        "Start by listing channels with slack_list_channels.",
    ]
)

_SEARCH_AND_NAVIGATE = "\n".join(
    [
        "You are a Slack search and navigation assistant.",
        "",
        "Available tools:",
        "1. **Search messages**: slack_search_messages with query (supports in:#channel, from:@user, has:reaction)",
        "2. **Search files**: slack_search_files with query",
        "3. **List channels**: slack_list_channels (filter by types: public_channel, private_channel, im, mpim)",
        "4. **Channel history**: slack_get_channel_history with channel ID",
        "5. **Thread replies**: slack_get_thread_replies with channel + ts",
        "6. **Channel members**: slack_get_channel_members",
        "7. **User info**: slack_get_user_info with user ID",
        "8. **Team info**: slack_get_team_info for workspace details",
        "",
        "Search modifiers: in:#channel, from:@user, has:reaction, before:YYYY-MM-DD, after:YYYY-MM-DD",
        "",
        "Note: Free plan limits message history to 90 days.",
    ]
)

PROMPTS: dict[str, tuple[Prompt, str]] = {
    "send-and-manage-messages": (
        Prompt(
            name="send-and-manage-messages",
            description="Guide for sending and managing Slack messages",
            arguments=[],
        ),
        _SEND_AND_MANAGE_MESSAGES,
    ),
    "search-and-navigate": (
        Prompt(
            name="search-and-navigate",
            description="Guide for searching messages/files and navigating channels",
            arguments=[],
        ),
        _SEARCH_AND_NAVIGATE,
    ),
}

SERVER_INFO_RESOURCE = Resource(
    uri=SERVER_INFO_URI,
    name="server-info",
    description="Connection status and available tools for this Slack MCP server",
    mimeType="application/json",
)


def list_prompts() -> list[Prompt]:
    return [prompt for prompt, _ in PROMPTS.values()]


def get_prompt(name: str) -> GetPromptResult:
    """Render a prompt by name.

    Raises:
        ValueError: ``name`` is not a known prompt
    """
    if name not in PROMPTS:
        raise ValueError(f"Unknown prompt: {name}")

    prompt, text = PROMPTS[name]
    return GetPromptResult(
        description=prompt.description,
        messages=[PromptMessage(role="user", content=TextContent(type="text", text=text))],
    )


def server_info(connected: bool) -> dict[str, Any]:
    """Static status document; makes no Slack calls."""
    return {
        "name": SERVER_NAME,
        "version": __version__,
        "connected": connected,
        "tools_available": len(TOOLS),
        "tool_categories": category_counts(),
    }


def read_server_info(uri: str, connected: bool) -> str:
    """
    Raises:
        ValueError: ``uri`` is not the server-info resource
    """
    if str(uri).rstrip("/") != SERVER_INFO_URI:
        raise ValueError(f"Unknown resource: {uri}")
    return json.dumps(server_info(connected), indent=2)

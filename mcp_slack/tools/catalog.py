# Copyright 2025 CNOE
# SPDX-License-Identifier: Apache-2.0

"""Slack tool definitions.

Every tool is published with a raw JSON Schema (``inputSchema``) and
behavioral annotations. The annotations are advisory: the server does not
enforce them.
"""

from typing import Any, Optional

from mcp.types import Tool, ToolAnnotations


def _string(description: str) -> dict[str, str]:
    return {"type": "string", "description": description}


def _number(description: str) -> dict[str, str]:
    return {"type": "number", "description": description}


def _boolean(description: str) -> dict[str, str]:
    return {"type": "boolean", "description": description}


def _array(description: str) -> dict[str, str]:
    return {"type": "array", "description": description}


# Result-selection hint for the calling host; never sent to Slack
FIELDS = _string("Comma-separated list of fields to include in the response")


def _schema(properties: dict[str, Any], required: Optional[list[str]] = None) -> dict[str, Any]:
    schema: dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        schema["required"] = required
    return schema


def _annotations(
    title: str,
    *,
    read_only: bool = False,
    destructive: bool = False,
    idempotent: Optional[bool] = None,
    open_world: bool = False,
) -> ToolAnnotations:
    return ToolAnnotations(
        title=title,
        readOnlyHint=read_only,
        destructiveHint=destructive,
        idempotentHint=idempotent,
        openWorldHint=open_world,
    )


MESSAGE_TOOLS = [
    Tool(
        name="slack_send_message",
        description=(
            'Send a message to a Slack channel, DM, or thread. Supports Block Kit for rich formatting. '
            'Always provide "text" as notification fallback even when using "blocks". '
            "Rate limit: 1 message/sec/channel."
        ),
        annotations=_annotations("Send Message"),
        inputSchema=_schema(
            {
                "channel": _string("Channel ID (C...), DM ID (D...), or user ID to send to"),
                "text": _string(
                    "Message text (required as fallback even when using blocks). Supports mrkdwn formatting."
                ),
                "blocks": _array("Block Kit blocks for rich message layout (JSON array of block objects)"),
                "thread_ts": _string('Thread timestamp to reply in a thread (e.g. "1234567890.123456")'),
                "reply_broadcast": _boolean("Also post threaded reply to channel (only with thread_ts)"),
                "unfurl_links": _boolean("Enable link unfurling (default: true)"),
                "unfurl_media": _boolean("Enable media unfurling (default: true)"),
                "mrkdwn": _boolean("Enable markdown parsing (default: true)"),
            },
            required=["channel", "text"],
        ),
    ),
    Tool(
        name="slack_update_message",
        description=(
            "Update an existing message. Bot can only update messages it posted. "
            "Provide new text and/or blocks."
        ),
        annotations=_annotations("Update Message", idempotent=True),
        inputSchema=_schema(
            {
                "channel": _string("Channel containing the message"),
                "ts": _string('Timestamp of the message to update (e.g. "1234567890.123456")'),
                "text": _string("New message text"),
                "blocks": _array("New Block Kit blocks"),
                "attachments": _array("New attachments array"),
            },
            required=["channel", "ts"],
        ),
    ),
    Tool(
        name="slack_delete_message",
        description="Delete a message. Bot can only delete messages it posted.",
        annotations=_annotations("Delete Message", destructive=True),
        inputSchema=_schema(
            {
                "channel": _string("Channel containing the message"),
                "ts": _string("Timestamp of the message to delete"),
            },
            required=["channel", "ts"],
        ),
    ),
    Tool(
        name="slack_schedule_message",
        description=(
            "Schedule a message for future delivery. Max 120 days in the future. "
            "Max 30 scheduled messages per channel per 5 minutes."
        ),
        annotations=_annotations("Schedule Message"),
        inputSchema=_schema(
            {
                "channel": _string("Channel ID to post to"),
                "post_at": _number("Unix timestamp for when to deliver the message"),
                "text": _string("Message text"),
                "blocks": _array("Block Kit blocks for rich layout"),
                "thread_ts": _string("Thread timestamp to reply in"),
            },
            required=["channel", "post_at", "text"],
        ),
    ),
    Tool(
        name="slack_delete_scheduled_message",
        description=(
            "Delete a pending scheduled message before it is sent. "
            "Cannot delete messages posting within 60 seconds."
        ),
        annotations=_annotations("Delete Scheduled Message", destructive=True),
        inputSchema=_schema(
            {
                "channel": _string("Channel of the scheduled message"),
                "scheduled_message_id": _string("Scheduled message ID (from schedule_message response)"),
            },
            required=["channel", "scheduled_message_id"],
        ),
    ),
    Tool(
        name="slack_list_scheduled_messages",
        description="List pending scheduled messages. Optionally filter by channel or time range.",
        annotations=_annotations("List Scheduled Messages", read_only=True, open_world=True),
        inputSchema=_schema(
            {
                "channel": _string("Filter by channel ID"),
                "oldest": _string("Start of time range (Unix timestamp)"),
                "latest": _string("End of time range (Unix timestamp)"),
                "cursor": _string("Pagination cursor from previous response"),
                "limit": _number("Max results per page (default: 100)"),
                "_fields": FIELDS,
            }
        ),
    ),
    Tool(
        name="slack_get_permalink",
        description="Get a permanent URL for a specific message.",
        annotations=_annotations("Get Message Permalink", read_only=True, open_world=True),
        inputSchema=_schema(
            {
                "channel": _string("Channel containing the message"),
                "message_ts": _string("Timestamp of the message"),
                "_fields": FIELDS,
            },
            required=["channel", "message_ts"],
        ),
    ),
]

CONVERSATION_TOOLS = [
    Tool(
        name="slack_list_channels",
        description="List channels in the workspace. Filter by type: public_channel, private_channel, im, mpim.",
        annotations=_annotations("List Channels", read_only=True, open_world=True),
        inputSchema=_schema(
            {
                "types": _string(
                    "Comma-separated types: public_channel, private_channel, im, mpim (default: public_channel)"
                ),
                "exclude_archived": _boolean("Exclude archived channels (default: false)"),
                "limit": _number("Max results per page (recommended: 200, max: 1000)"),
                "cursor": _string("Pagination cursor from previous response"),
                "_fields": FIELDS,
            }
        ),
    ),
    Tool(
        name="slack_get_channel_info",
        description="Get detailed information about a channel including topic, purpose, member count.",
        annotations=_annotations("Get Channel Info", read_only=True, open_world=True),
        inputSchema=_schema(
            {
                "channel": _string('Channel ID (e.g. "C1234567890")'),
                "include_locale": _boolean("Include locale info"),
                "include_num_members": _boolean("Include member count"),
                "_fields": FIELDS,
            },
            required=["channel"],
        ),
    ),
    Tool(
        name="slack_get_channel_history",
        description=(
            "Get message history from a channel. Returns messages in reverse chronological order. "
            "Free plan: 90-day history limit."
        ),
        annotations=_annotations("Get Channel History", read_only=True, open_world=True),
        inputSchema=_schema(
            {
                "channel": _string("Channel ID"),
                "oldest": _string("Start of time range (Unix timestamp, inclusive)"),
                "latest": _string("End of time range (Unix timestamp)"),
                "inclusive": _boolean("Include messages at boundary timestamps"),
                "limit": _number("Max messages to return (default: 100, max: 1000)"),
                "cursor": _string("Pagination cursor from previous response"),
                "_fields": FIELDS,
            },
            required=["channel"],
        ),
    ),
    Tool(
        name="slack_get_thread_replies",
        description="Get replies in a message thread. Returns the parent message and all replies.",
        annotations=_annotations("Get Thread Replies", read_only=True, open_world=True),
        inputSchema=_schema(
            {
                "channel": _string("Channel containing the thread"),
                "ts": _string("Timestamp of the parent message"),
                "oldest": _string("Start of time range"),
                "latest": _string("End of time range"),
                "inclusive": _boolean("Include messages at boundary timestamps"),
                "limit": _number("Max results (recommended: 200)"),
                "cursor": _string("Pagination cursor"),
                "_fields": FIELDS,
            },
            required=["channel", "ts"],
        ),
    ),
    Tool(
        name="slack_get_channel_members",
        description="List all members of a channel. Returns user IDs with cursor-based pagination.",
        annotations=_annotations("Get Channel Members", read_only=True, open_world=True),
        inputSchema=_schema(
            {
                "channel": _string("Channel ID"),
                "limit": _number("Max results per page (recommended: 200, max: 1000)"),
                "cursor": _string("Pagination cursor"),
                "_fields": FIELDS,
            },
            required=["channel"],
        ),
    ),
    Tool(
        name="slack_create_channel",
        description=(
            "Create a new public or private channel. "
            "Name must be lowercase, numbers, hyphens, underscores (max 80 chars)."
        ),
        annotations=_annotations("Create Channel"),
        inputSchema=_schema(
            {
                "name": _string("Channel name (lowercase, numbers, hyphens, underscores, max 80 chars)"),
                "is_private": _boolean("Create a private channel (default: false)"),
            },
            required=["name"],
        ),
    ),
    Tool(
        name="slack_archive_channel",
        description="Archive a channel. Archived channels can be unarchived later.",
        annotations=_annotations("Archive Channel", destructive=True),
        inputSchema=_schema({"channel": _string("Channel ID to archive")}, required=["channel"]),
    ),
    Tool(
        name="slack_invite_to_channel",
        description="Invite one or more users to a channel. Supports up to 1000 user IDs.",
        annotations=_annotations("Invite to Channel"),
        inputSchema=_schema(
            {
                "channel": _string("Channel ID"),
                "users": _string("Comma-separated user IDs to invite (1-1000)"),
            },
            required=["channel", "users"],
        ),
    ),
    Tool(
        name="slack_kick_from_channel",
        description="Remove a user from a channel.",
        annotations=_annotations("Kick from Channel", destructive=True),
        inputSchema=_schema(
            {
                "channel": _string("Channel ID"),
                "user": _string("User ID to remove"),
            },
            required=["channel", "user"],
        ),
    ),
    Tool(
        name="slack_join_channel",
        description="Join a public channel. Bot must have channels:join scope.",
        annotations=_annotations("Join Channel"),
        inputSchema=_schema({"channel": _string("Public channel ID to join")}, required=["channel"]),
    ),
    Tool(
        name="slack_set_channel_topic",
        description="Set or update the topic of a channel.",
        annotations=_annotations("Set Channel Topic", idempotent=True),
        inputSchema=_schema(
            {
                "channel": _string("Channel ID"),
                "topic": _string("New topic text"),
            },
            required=["channel", "topic"],
        ),
    ),
    Tool(
        name="slack_open_conversation",
        description="Open a DM or multi-person DM. Pass 1 user ID for DM, 2-8 for group DM.",
        annotations=_annotations("Open Conversation"),
        inputSchema=_schema(
            {
                "users": _string("Comma-separated user IDs (1 = DM, 2-8 = group DM)"),
                "return_im": _boolean("Return full conversation object"),
            },
            required=["users"],
        ),
    ),
]

USER_TOOLS = [
    Tool(
        name="slack_list_users",
        description=(
            "List all users in the workspace including deactivated users. Supports cursor-based pagination."
        ),
        annotations=_annotations("List Users", read_only=True, open_world=True),
        inputSchema=_schema(
            {
                "limit": _number("Max results per page (recommended: 200, max: 1000)"),
                "cursor": _string("Pagination cursor"),
                "include_locale": _boolean("Include locale info for each user"),
                "_fields": FIELDS,
            }
        ),
    ),
    Tool(
        name="slack_get_user_info",
        description="Get detailed information about a user including profile, status, admin flags.",
        annotations=_annotations("Get User Info", read_only=True, open_world=True),
        inputSchema=_schema(
            {
                "user": _string('User ID (e.g. "U1234567890")'),
                "include_locale": _boolean("Include locale info"),
                "_fields": FIELDS,
            },
            required=["user"],
        ),
    ),
]

REACTION_TOOLS = [
    Tool(
        name="slack_add_reaction",
        description=(
            'Add an emoji reaction to a message. Use emoji name without colons (e.g. "thumbsup" not ":thumbsup:").'
        ),
        annotations=_annotations("Add Reaction"),
        inputSchema=_schema(
            {
                "channel": _string("Channel containing the message"),
                "timestamp": _string("Timestamp of the message to react to"),
                "name": _string('Emoji name without colons (e.g. "thumbsup", "heart", "eyes")'),
            },
            required=["channel", "timestamp", "name"],
        ),
    ),
    Tool(
        name="slack_remove_reaction",
        description="Remove an emoji reaction from a message.",
        annotations=_annotations("Remove Reaction", destructive=True),
        inputSchema=_schema(
            {
                "channel": _string("Channel containing the message"),
                "timestamp": _string("Timestamp of the message"),
                "name": _string("Emoji name to remove (without colons)"),
            },
            required=["channel", "timestamp", "name"],
        ),
    ),
    Tool(
        name="slack_get_reactions",
        description="Get all reactions for a specific message, including emoji names, counts, and user IDs.",
        annotations=_annotations("Get Reactions", read_only=True, open_world=True),
        inputSchema=_schema(
            {
                "channel": _string("Channel containing the message"),
                "timestamp": _string("Timestamp of the message"),
                "_fields": FIELDS,
            },
            required=["channel", "timestamp"],
        ),
    ),
]

SEARCH_TOOLS = [
    Tool(
        name="slack_search_messages",
        description=(
            "Search for messages matching a query. Supports modifiers: in:#channel, from:@user, "
            "has:reaction, before:date, after:date. Free plan: 90-day history limit."
        ),
        annotations=_annotations("Search Messages", read_only=True, open_world=True),
        inputSchema=_schema(
            {
                "query": _string(
                    "Search query (supports in:#channel, from:@user, has:reaction, "
                    "before:YYYY-MM-DD, after:YYYY-MM-DD)"
                ),
                "sort": _string('"score" (relevance) or "timestamp" (default: score)'),
                "sort_dir": _string('"asc" or "desc" (default: desc)'),
                "count": _number("Results per page (max: 100)"),
                "page": _number("Page number (max: 100)"),
                "highlight": _boolean("Mark matching query terms in results"),
                "_fields": FIELDS,
            },
            required=["query"],
        ),
    ),
    Tool(
        name="slack_search_files",
        description="Search for files matching a query. Supports same modifiers as message search.",
        annotations=_annotations("Search Files", read_only=True, open_world=True),
        inputSchema=_schema(
            {
                "query": _string("Search query"),
                "sort": _string('"score" or "timestamp"'),
                "sort_dir": _string('"asc" or "desc"'),
                "count": _number("Results per page (max: 100)"),
                "page": _number("Page number (max: 100)"),
                "highlight": _boolean("Highlight matching terms"),
                "_fields": FIELDS,
            },
            required=["query"],
        ),
    ),
]

FILE_TOOLS = [
    Tool(
        name="slack_upload_file",
        description=(
            "Upload a text file to Slack. Uses the external upload process "
            "(getUploadURLExternal, content upload, completeUploadExternal). For text/code content only."
        ),
        annotations=_annotations("Upload File"),
        inputSchema=_schema(
            {
                "content": _string("File content as text string"),
                "filename": _string('Filename with extension (e.g. "report.txt", "data.csv", "code.py")'),
                "channel_id": _string("Channel ID to share the file in"),
                "initial_comment": _string("Comment to post with the file"),
                "thread_ts": _string("Thread timestamp to post file in"),
            },
            required=["content", "filename"],
        ),
    ),
    Tool(
        name="slack_list_files",
        description=(
            "List files in the workspace. Filter by channel, user, or type. "
            "Free plan: files older than 90 days are deleted."
        ),
        annotations=_annotations("List Files", read_only=True, open_world=True),
        inputSchema=_schema(
            {
                "channel": _string("Filter by channel ID"),
                "user": _string("Filter by user ID"),
                "types": _string("Filter by type: all, spaces, snippets, images, gdocs, zips, pdfs"),
                "count": _number("Items per page"),
                "page": _number("Page number"),
                "ts_from": _string("Filter from timestamp (Unix)"),
                "ts_to": _string("Filter to timestamp (Unix)"),
                "_fields": FIELDS,
            }
        ),
    ),
    Tool(
        name="slack_delete_file",
        description="Delete a file from the workspace.",
        annotations=_annotations("Delete File", destructive=True),
        inputSchema=_schema({"file": _string("File ID to delete")}, required=["file"]),
    ),
]

PIN_TOOLS = [
    Tool(
        name="slack_pin_message",
        description="Pin a message to a channel. Cannot pin channel join messages or files.",
        annotations=_annotations("Pin Message"),
        inputSchema=_schema(
            {
                "channel": _string("Channel ID"),
                "timestamp": _string("Timestamp of the message to pin"),
            },
            required=["channel", "timestamp"],
        ),
    ),
    Tool(
        name="slack_unpin_message",
        description="Unpin a message from a channel.",
        annotations=_annotations("Unpin Message", destructive=True),
        inputSchema=_schema(
            {
                "channel": _string("Channel ID"),
                "timestamp": _string("Timestamp of the message to unpin"),
            },
            required=["channel", "timestamp"],
        ),
    ),
    Tool(
        name="slack_list_pins",
        description="List all pinned items in a channel.",
        annotations=_annotations("List Pins", read_only=True, open_world=True),
        inputSchema=_schema(
            {
                "channel": _string("Channel ID"),
                "_fields": FIELDS,
            },
            required=["channel"],
        ),
    ),
]

BOOKMARK_TOOLS = [
    Tool(
        name="slack_add_bookmark",
        description="Add a bookmark (link) to a channel. Max 100 bookmarks per channel.",
        annotations=_annotations("Add Bookmark"),
        inputSchema=_schema(
            {
                "channel_id": _string("Channel ID"),
                "title": _string("Bookmark title"),
                "link": _string("URL for the bookmark"),
                "type": _string('Bookmark type (currently only "link")'),
                "emoji": _string('Emoji for the bookmark icon (e.g. ":link:")'),
            },
            required=["channel_id", "title", "link"],
        ),
    ),
    Tool(
        name="slack_edit_bookmark",
        description="Update an existing bookmark in a channel.",
        annotations=_annotations("Edit Bookmark", idempotent=True),
        inputSchema=_schema(
            {
                "bookmark_id": _string("Bookmark ID"),
                "channel_id": _string("Channel ID"),
                "title": _string("New title"),
                "link": _string("New URL"),
                "emoji": _string("New emoji"),
            },
            required=["bookmark_id", "channel_id"],
        ),
    ),
    Tool(
        name="slack_remove_bookmark",
        description="Remove a bookmark from a channel.",
        annotations=_annotations("Remove Bookmark", destructive=True),
        inputSchema=_schema(
            {
                "bookmark_id": _string("Bookmark ID"),
                "channel_id": _string("Channel ID"),
            },
            required=["bookmark_id", "channel_id"],
        ),
    ),
    Tool(
        name="slack_list_bookmarks",
        description="List all bookmarks in a channel.",
        annotations=_annotations("List Bookmarks", read_only=True, open_world=True),
        inputSchema=_schema(
            {
                "channel_id": _string("Channel ID"),
                "_fields": FIELDS,
            },
            required=["channel_id"],
        ),
    ),
]

TEAM_TOOLS = [
    Tool(
        name="slack_get_team_info",
        description="Get information about the workspace/team: name, domain, icon, etc.",
        annotations=_annotations("Get Team Info", read_only=True, open_world=True),
        inputSchema=_schema(
            {
                "team": _string("Team ID (for org-level tokens; optional for single-workspace tokens)"),
                "_fields": FIELDS,
            }
        ),
    ),
]

EMOJI_TOOLS = [
    Tool(
        name="slack_list_emoji",
        description=(
            "List all custom emoji in the workspace. Returns emoji name-to-URL mapping. "
            'Aliases use "alias:emoji_name" format.'
        ),
        annotations=_annotations("List Emoji", read_only=True, open_world=True),
        inputSchema=_schema(
            {
                "include_categories": _boolean("Include emoji category info"),
                "_fields": FIELDS,
            }
        ),
    ),
]

# Category -> tools, in publication order
CATALOG: dict[str, list[Tool]] = {
    "messages": MESSAGE_TOOLS,
    "conversations": CONVERSATION_TOOLS,
    "users": USER_TOOLS,
    "reactions": REACTION_TOOLS,
    "search": SEARCH_TOOLS,
    "files": FILE_TOOLS,
    "pins": PIN_TOOLS,
    "bookmarks": BOOKMARK_TOOLS,
    "team": TEAM_TOOLS,
    "emoji": EMOJI_TOOLS,
}

TOOLS: list[Tool] = [tool for tools in CATALOG.values() for tool in tools]

_TOOLS_BY_NAME: dict[str, Tool] = {tool.name: tool for tool in TOOLS}


def get_tool(name: str) -> Optional[Tool]:
    """Return the tool descriptor for ``name``, or None if it is not in the catalog."""
    return _TOOLS_BY_NAME.get(name)


def tool_names() -> list[str]:
    return [tool.name for tool in TOOLS]


def category_counts() -> dict[str, int]:
    """Number of tools per category, computed from the live catalog."""
    return {category: len(tools) for category, tools in CATALOG.items()}

# Copyright 2025 CNOE
# SPDX-License-Identifier: Apache-2.0

"""Tool name to Slack client operation dispatch."""

import logging
from typing import Any, Optional

from mcp_slack.api.client import SlackClient
from mcp_slack.errors import UnknownTool

logger = logging.getLogger(__name__)

# Consumed by the host or the server itself; never sent to Slack
HOST_FIELDS = ("_fields", "SLACK_BOT_TOKEN")


def strip_host_fields(arguments: Optional[dict[str, Any]]) -> dict[str, Any]:
    return {key: value for key, value in (arguments or {}).items() if key not in HOST_FIELDS}


def _take(params: dict[str, Any], *fields: str) -> list[Any]:
    """Pop positional fields out of ``params``; what remains are the options."""
    return [params.pop(field, None) for field in fields]


class Dispatcher:
    """Routes a tool invocation to exactly one ``SlackClient`` operation.

    Tools that accept options forward every remaining argument at the top
    level of the request body. Fixed-arity tools forward only their
    positional fields.
    """

    def __init__(self, client: SlackClient):
        self.client = client

    async def dispatch(self, name: str, arguments: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """
        Execute a tool against Slack.

        Args:
            name: Tool name from the catalog
            arguments: Tool arguments

        Returns:
            The Slack response body, unmodified

        Raises:
            UnknownTool: ``name`` is not in the catalog
        """
        params = strip_host_fields(arguments)
        logger.debug(f"Dispatching {name} with arguments: {sorted(params)}")
        client = self.client

        match name:
            # Messages
            case "slack_send_message":
                channel, text = _take(params, "channel", "text")
                return await client.post_message(channel, text, **params)
            case "slack_update_message":
                channel, ts = _take(params, "channel", "ts")
                return await client.update_message(channel, ts, **params)
            case "slack_delete_message":
                channel, ts = _take(params, "channel", "ts")
                return await client.delete_message(channel, ts)
            case "slack_schedule_message":
                channel, post_at, text = _take(params, "channel", "post_at", "text")
                return await client.schedule_message(channel, post_at, text, **params)
            case "slack_delete_scheduled_message":
                channel, scheduled_message_id = _take(params, "channel", "scheduled_message_id")
                return await client.delete_scheduled_message(channel, scheduled_message_id)
            case "slack_list_scheduled_messages":
                return await client.list_scheduled_messages(**params)
            case "slack_get_permalink":
                channel, message_ts = _take(params, "channel", "message_ts")
                return await client.get_permalink(channel, message_ts)

            # Conversations
            case "slack_list_channels":
                return await client.list_channels(**params)
            case "slack_get_channel_info":
                (channel,) = _take(params, "channel")
                return await client.get_channel_info(channel, **params)
            case "slack_get_channel_history":
                (channel,) = _take(params, "channel")
                return await client.get_channel_history(channel, **params)
            case "slack_get_thread_replies":
                channel, ts = _take(params, "channel", "ts")
                return await client.get_thread_replies(channel, ts, **params)
            case "slack_get_channel_members":
                (channel,) = _take(params, "channel")
                return await client.get_channel_members(channel, **params)
            case "slack_create_channel":
                (channel_name,) = _take(params, "name")
                return await client.create_channel(channel_name, **params)
            case "slack_archive_channel":
                (channel,) = _take(params, "channel")
                return await client.archive_channel(channel)
            case "slack_invite_to_channel":
                channel, users = _take(params, "channel", "users")
                return await client.invite_to_channel(channel, users)
            case "slack_kick_from_channel":
                channel, user = _take(params, "channel", "user")
                return await client.kick_from_channel(channel, user)
            case "slack_join_channel":
                (channel,) = _take(params, "channel")
                return await client.join_channel(channel)
            case "slack_set_channel_topic":
                channel, topic = _take(params, "channel", "topic")
                return await client.set_channel_topic(channel, topic)
            case "slack_open_conversation":
                (users,) = _take(params, "users")
                return await client.open_conversation(users, **params)

            # Users
            case "slack_list_users":
                return await client.list_users(**params)
            case "slack_get_user_info":
                (user,) = _take(params, "user")
                return await client.get_user_info(user, **params)

            # Reactions
            case "slack_add_reaction":
                channel, timestamp, emoji = _take(params, "channel", "timestamp", "name")
                return await client.add_reaction(channel, timestamp, emoji)
            case "slack_remove_reaction":
                channel, timestamp, emoji = _take(params, "channel", "timestamp", "name")
                return await client.remove_reaction(channel, timestamp, emoji)
            case "slack_get_reactions":
                channel, timestamp = _take(params, "channel", "timestamp")
                return await client.get_reactions(channel, timestamp)

            # Search
            case "slack_search_messages":
                (query,) = _take(params, "query")
                return await client.search_messages(query, **params)
            case "slack_search_files":
                (query,) = _take(params, "query")
                return await client.search_files(query, **params)

            # Files
            case "slack_upload_file":
                content, filename, channel_id, initial_comment, thread_ts = _take(
                    params, "content", "filename", "channel_id", "initial_comment", "thread_ts"
                )
                return await client.upload_file(
                    content,
                    filename,
                    channel_id=channel_id,
                    initial_comment=initial_comment,
                    thread_ts=thread_ts,
                )
            case "slack_list_files":
                return await client.list_files(**params)
            case "slack_delete_file":
                (file_id,) = _take(params, "file")
                return await client.delete_file(file_id)

            # Pins
            case "slack_pin_message":
                channel, timestamp = _take(params, "channel", "timestamp")
                return await client.pin_message(channel, timestamp)
            case "slack_unpin_message":
                channel, timestamp = _take(params, "channel", "timestamp")
                return await client.unpin_message(channel, timestamp)
            case "slack_list_pins":
                (channel,) = _take(params, "channel")
                return await client.list_pins(channel)

            # Bookmarks
            case "slack_add_bookmark":
                channel_id, title, link = _take(params, "channel_id", "title", "link")
                return await client.add_bookmark(channel_id, title, link, **params)
            case "slack_edit_bookmark":
                bookmark_id, channel_id = _take(params, "bookmark_id", "channel_id")
                return await client.edit_bookmark(bookmark_id, channel_id, **params)
            case "slack_remove_bookmark":
                bookmark_id, channel_id = _take(params, "bookmark_id", "channel_id")
                return await client.remove_bookmark(bookmark_id, channel_id)
            case "slack_list_bookmarks":
                (channel_id,) = _take(params, "channel_id")
                return await client.list_bookmarks(channel_id)

            # Team
            case "slack_get_team_info":
                return await client.get_team_info(**params)

            # Emoji
            case "slack_list_emoji":
                return await client.list_emoji(**params)

            case _:
                raise UnknownTool(name)

# Copyright 2025 CNOE
# SPDX-License-Identifier: Apache-2.0

"""Slack API client

This module provides a client for interacting with the Slack Web API.
It handles authentication, request formatting, and response parsing.

Every method is a POST to ``https://slack.com/api/{method}`` with a Bearer
token. Slack returns HTTP 200 for most API errors, so the ``ok`` field of
the body is checked on every call.
"""

import logging
from typing import Any, Optional

import httpx

from mcp_slack import config
from mcp_slack.errors import ApiError, ConfigurationError, TransportError

logger = logging.getLogger(__name__)

REDACTED = "[REDACTED]"


class SlackClient:
    """Stateless-per-call wrapper around the Slack Web API.

    The client holds a single bot token. Each call opens its own
    ``httpx.AsyncClient``, so one instance can serve concurrent calls.

    Args:
        token: Slack bot token (``xoxb-...``)
        base_url: API base URL (defaults to ``SLACK_API_URL``)
        timeout: Request timeout in seconds; ``None`` keeps the httpx default
        transport: Optional httpx transport, mainly for tests
    """

    def __init__(
        self,
        token: str,
        *,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not token:
            raise ConfigurationError(
                "SLACK_BOT_TOKEN is required. Set it as an environment variable or pass via config."
            )
        self._token = token
        self.base_url = (base_url or config.SLACK_API_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else config.SLACK_API_TIMEOUT
        self._transport = transport

    def __repr__(self) -> str:
        return f"SlackClient(base_url={self.base_url!r}, token={REDACTED})"

    def _http_client(self) -> httpx.AsyncClient:
        options: dict[str, Any] = {}
        if self.timeout is not None:
            options["timeout"] = self.timeout
        if self._transport is not None:
            options["transport"] = self._transport
        return httpx.AsyncClient(**options)

    def _redact(self, text: str) -> str:
        # Ensure no sensitive data is included in error messages
        return text.replace(self._token, REDACTED)

    async def call(self, method: str, params: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """
        Call a Slack Web API method.

        Args:
            method: Slack API method name (e.g., "chat.postMessage")
            params: Method parameters, sent as the JSON body

        Returns:
            The full decoded response body

        Raises:
            ApiError: Slack answered with ``ok: false``
            TransportError: Network failure or a body that is not a JSON object
        """
        url = f"{self.base_url}/{method}"
        headers = {
            "Authorization": f"Bearer {self._token}",
            "Content-Type": "application/json; charset=utf-8",
        }

        logger.debug(f"Calling Slack method {method} with params: {sorted((params or {}).keys())}")

        try:
            async with self._http_client() as client:
                response = await client.post(url, headers=headers, json=params or None)
        except httpx.RequestError as e:
            logger.error(f"Request error calling {method}: {self._redact(str(e))}")
            raise TransportError(self._redact(f"Request error calling {method}: {e}")) from e

        logger.debug(f"{method} response status code: {response.status_code}")

        try:
            data = response.json()
        except ValueError:
            snippet = self._redact(response.text[:200]) if response.text else ""
            raise TransportError(
                f"Slack API returned a non-JSON response for {method} (HTTP {response.status_code}): {snippet}",
                status_code=response.status_code,
            )

        if not isinstance(data, dict):
            raise TransportError(
                f"Slack API returned an unexpected payload for {method} (HTTP {response.status_code})",
                status_code=response.status_code,
            )

        if not data.get("ok"):
            error = data.get("error") or "unknown_error"
            logger.debug(f"{method} failed with Slack error: {error}")
            raise ApiError(error, data)

        return data

    async def _upload_content(self, upload_url: str, content: bytes) -> None:
        # Raw body, no bearer header: the URL itself carries the authorization
        try:
            async with self._http_client() as client:
                response = await client.post(upload_url, content=content)
        except httpx.RequestError as e:
            raise TransportError(self._redact(f"Request error uploading file content: {e}")) from e

        logger.debug(f"File content upload status code: {response.status_code}")
        if not response.is_success:
            raise TransportError(
                f"File content upload failed: HTTP {response.status_code}",
                status_code=response.status_code,
            )

    # ========== Messages ==========

    async def post_message(self, channel: str, text: str, **options: Any) -> dict[str, Any]:
        return await self.call("chat.postMessage", {"channel": channel, "text": text, **options})

    async def update_message(self, channel: str, ts: str, **options: Any) -> dict[str, Any]:
        return await self.call("chat.update", {"channel": channel, "ts": ts, **options})

    async def delete_message(self, channel: str, ts: str) -> dict[str, Any]:
        return await self.call("chat.delete", {"channel": channel, "ts": ts})

    async def schedule_message(self, channel: str, post_at: int | float, text: str, **options: Any) -> dict[str, Any]:
        return await self.call(
            "chat.scheduleMessage",
            {"channel": channel, "post_at": post_at, "text": text, **options},
        )

    async def delete_scheduled_message(self, channel: str, scheduled_message_id: str) -> dict[str, Any]:
        return await self.call(
            "chat.deleteScheduledMessage",
            {"channel": channel, "scheduled_message_id": scheduled_message_id},
        )

    async def list_scheduled_messages(self, **options: Any) -> dict[str, Any]:
        return await self.call("chat.scheduledMessages.list", options)

    async def get_permalink(self, channel: str, message_ts: str) -> dict[str, Any]:
        return await self.call("chat.getPermalink", {"channel": channel, "message_ts": message_ts})

    # ========== Conversations ==========

    async def list_channels(self, **options: Any) -> dict[str, Any]:
        return await self.call("conversations.list", options)

    async def get_channel_info(self, channel: str, **options: Any) -> dict[str, Any]:
        return await self.call("conversations.info", {"channel": channel, **options})

    async def get_channel_history(self, channel: str, **options: Any) -> dict[str, Any]:
        return await self.call("conversations.history", {"channel": channel, **options})

    async def get_thread_replies(self, channel: str, ts: str, **options: Any) -> dict[str, Any]:
        return await self.call("conversations.replies", {"channel": channel, "ts": ts, **options})

    async def get_channel_members(self, channel: str, **options: Any) -> dict[str, Any]:
        return await self.call("conversations.members", {"channel": channel, **options})

    async def create_channel(self, name: str, **options: Any) -> dict[str, Any]:
        return await self.call("conversations.create", {"name": name, **options})

    async def archive_channel(self, channel: str) -> dict[str, Any]:
        return await self.call("conversations.archive", {"channel": channel})

    async def invite_to_channel(self, channel: str, users: str) -> dict[str, Any]:
        return await self.call("conversations.invite", {"channel": channel, "users": users})

    async def kick_from_channel(self, channel: str, user: str) -> dict[str, Any]:
        return await self.call("conversations.kick", {"channel": channel, "user": user})

    async def join_channel(self, channel: str) -> dict[str, Any]:
        return await self.call("conversations.join", {"channel": channel})

    async def set_channel_topic(self, channel: str, topic: str) -> dict[str, Any]:
        return await self.call("conversations.setTopic", {"channel": channel, "topic": topic})

    async def open_conversation(self, users: str, **options: Any) -> dict[str, Any]:
        return await self.call("conversations.open", {"users": users, **options})

    # ========== Users ==========

    async def list_users(self, **options: Any) -> dict[str, Any]:
        return await self.call("users.list", options)

    async def get_user_info(self, user: str, **options: Any) -> dict[str, Any]:
        return await self.call("users.info", {"user": user, **options})

    # ========== Reactions ==========

    async def add_reaction(self, channel: str, timestamp: str, name: str) -> dict[str, Any]:
        return await self.call("reactions.add", {"channel": channel, "timestamp": timestamp, "name": name})

    async def remove_reaction(self, channel: str, timestamp: str, name: str) -> dict[str, Any]:
        return await self.call("reactions.remove", {"channel": channel, "timestamp": timestamp, "name": name})

    async def get_reactions(self, channel: str, timestamp: str) -> dict[str, Any]:
        return await self.call("reactions.get", {"channel": channel, "timestamp": timestamp})

    # ========== Search ==========

    async def search_messages(self, query: str, **options: Any) -> dict[str, Any]:
        return await self.call("search.messages", {"query": query, **options})

    async def search_files(self, query: str, **options: Any) -> dict[str, Any]:
        return await self.call("search.files", {"query": query, **options})

    # ========== Files ==========

    async def upload_file(
        self,
        content: str,
        filename: str,
        *,
        channel_id: Optional[str] = None,
        initial_comment: Optional[str] = None,
        thread_ts: Optional[str] = None,
    ) -> dict[str, Any]:
        """Upload text content as a file and share it.

        Slack's external upload flow:
        1. files.getUploadURLExternal reserves an upload URL and a file ID
        2. the raw bytes are POSTed to that URL
        3. files.completeUploadExternal publishes the file

        A failure at any step stops the sequence. If step 3 fails the file
        remains uploaded but unshared; no cleanup is attempted.

        Returns:
            The files.completeUploadExternal response
        """
        payload = content.encode("utf-8")

        reservation = await self.call(
            "files.getUploadURLExternal",
            {"filename": filename, "length": len(payload)},
        )
        upload_url = reservation.get("upload_url")
        file_id = reservation.get("file_id")
        if not upload_url or not file_id:
            raise TransportError("files.getUploadURLExternal response is missing upload_url or file_id")

        await self._upload_content(upload_url, payload)

        complete_params: dict[str, Any] = {"files": [{"id": file_id, "title": filename}]}
        if channel_id:
            complete_params["channel_id"] = channel_id
        if initial_comment:
            complete_params["initial_comment"] = initial_comment
        if thread_ts:
            complete_params["thread_ts"] = thread_ts

        return await self.call("files.completeUploadExternal", complete_params)

    async def list_files(self, **options: Any) -> dict[str, Any]:
        return await self.call("files.list", options)

    async def delete_file(self, file: str) -> dict[str, Any]:
        return await self.call("files.delete", {"file": file})

    # ========== Pins ==========

    async def pin_message(self, channel: str, timestamp: str) -> dict[str, Any]:
        return await self.call("pins.add", {"channel": channel, "timestamp": timestamp})

    async def unpin_message(self, channel: str, timestamp: str) -> dict[str, Any]:
        return await self.call("pins.remove", {"channel": channel, "timestamp": timestamp})

    async def list_pins(self, channel: str) -> dict[str, Any]:
        return await self.call("pins.list", {"channel": channel})

    # ========== Bookmarks ==========

    async def add_bookmark(self, channel_id: str, title: str, link: str, **options: Any) -> dict[str, Any]:
        return await self.call(
            "bookmarks.add",
            {"channel_id": channel_id, "title": title, "type": "link", "link": link, **options},
        )

    async def edit_bookmark(self, bookmark_id: str, channel_id: str, **options: Any) -> dict[str, Any]:
        return await self.call(
            "bookmarks.edit",
            {"bookmark_id": bookmark_id, "channel_id": channel_id, **options},
        )

    async def remove_bookmark(self, bookmark_id: str, channel_id: str) -> dict[str, Any]:
        return await self.call("bookmarks.remove", {"bookmark_id": bookmark_id, "channel_id": channel_id})

    async def list_bookmarks(self, channel_id: str) -> dict[str, Any]:
        return await self.call("bookmarks.list", {"channel_id": channel_id})

    # ========== Team ==========

    async def get_team_info(self, **options: Any) -> dict[str, Any]:
        return await self.call("team.info", options)

    # ========== Emoji ==========

    async def list_emoji(self, **options: Any) -> dict[str, Any]:
        return await self.call("emoji.list", options)

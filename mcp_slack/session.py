# Copyright 2025 CNOE
# SPDX-License-Identifier: Apache-2.0

"""Credentialed Slack clients shared across tool calls."""

import logging
from collections import OrderedDict
from typing import Any, Callable, Optional

from mcp_slack.api.client import SlackClient
from mcp_slack.errors import ConfigurationError

logger = logging.getLogger(__name__)

TOKEN_ARGUMENT = "SLACK_BOT_TOKEN"


class ClientSessions:
    """Holds Slack clients keyed by bot token.

    With the default capacity of one, a call made with a different token
    replaces the previous client.

    Args:
        capacity: Number of tokens to keep a client for
        client_factory: Callable building a client from a token
    """

    def __init__(self, capacity: int = 1, client_factory: Callable[[str], SlackClient] = SlackClient):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._client_factory = client_factory
        self._clients: OrderedDict[str, SlackClient] = OrderedDict()

    def __len__(self) -> int:
        return len(self._clients)

    def client_for(self, token: str) -> SlackClient:
        client = self._clients.get(token)
        if client is not None:
            self._clients.move_to_end(token)
            return client

        client = self._client_factory(token)
        self._clients[token] = client
        while len(self._clients) > self.capacity:
            self._clients.popitem(last=False)
            logger.debug("Dropped least recently used Slack client")
        return client

    @staticmethod
    def resolve_token(static_token: Optional[str], arguments: Optional[dict[str, Any]]) -> str:
        """Pick the bot token for a call.

        Static configuration wins over a ``SLACK_BOT_TOKEN`` argument.

        Raises:
            ConfigurationError: Neither source provides a token
        """
        if static_token:
            return static_token
        token = (arguments or {}).get(TOKEN_ARGUMENT)
        if token and isinstance(token, str):
            return token
        raise ConfigurationError(
            "SLACK_BOT_TOKEN is required. Set it as an environment variable or pass via config."
        )

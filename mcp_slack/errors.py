# Copyright 2025 CNOE
# SPDX-License-Identifier: Apache-2.0

"""Exceptions raised by the Slack MCP server."""

from typing import Any, Optional


class SlackMcpError(Exception):
    """Base class for every failure surfaced by a Slack tool call."""

    pass


class ConfigurationError(SlackMcpError):
    """Raised when no bot token can be resolved for a call.

    Nothing is sent over the network when this is raised.
    """

    pass


class UnknownTool(SlackMcpError):
    """Raised when a tool name is not part of the catalog.

    Attributes:
        name: The tool name that was requested
    """

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class ApiError(SlackMcpError):
    """Raised when Slack answers with ``ok: false``.

    Slack reports logical failures inside an HTTP 200 body, so this is
    independent of the HTTP status code.

    Attributes:
        error: Slack error code (e.g. ``channel_not_found``)
        response: The decoded response body, when one was received
    """

    def __init__(self, error: str, response: Optional[dict[str, Any]] = None):
        self.error = error
        self.response = response
        super().__init__(f"Slack API error: {error}")


class TransportError(SlackMcpError):
    """Raised on network failures or HTTP responses without a usable JSON body.

    Attributes:
        status_code: HTTP status code, if a response was received
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)

# Copyright 2025 CNOE
# SPDX-License-Identifier: Apache-2.0

"""Configuration for Slack MCP

This module contains configuration constants that are used across the MCP server.
It's kept separate to avoid circular imports.
"""

import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

DEFAULT_SLACK_API_URL = "https://slack.com/api"

# Static bot token (optional; can also arrive per call as a SLACK_BOT_TOKEN argument)
SLACK_BOT_TOKEN = os.getenv("SLACK_BOT_TOKEN") or None

SLACK_API_URL = os.getenv("SLACK_API_URL", DEFAULT_SLACK_API_URL).rstrip("/")


def _parse_timeout(value: Optional[str]) -> Optional[float]:
    """Parse SLACK_API_TIMEOUT; unset or empty means "use the httpx default"."""
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"SLACK_API_TIMEOUT must be a number of seconds, got {value!r}")


SLACK_API_TIMEOUT = _parse_timeout(os.getenv("SLACK_API_TIMEOUT"))

# Transport settings
MCP_MODE = os.getenv("MCP_MODE", "stdio").lower()
MCP_HOST = os.getenv("MCP_HOST", "127.0.0.1")
MCP_PORT = int(os.getenv("MCP_PORT", "8000"))

SERVER_NAME = "slack-mcp"

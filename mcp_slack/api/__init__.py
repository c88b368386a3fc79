"""Slack Web API client for MCP"""

from .client import SlackClient

__all__ = ["SlackClient"]

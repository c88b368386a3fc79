"""Slack tool catalog, argument validation and dispatch"""

from .arguments import validate_arguments
from .catalog import CATALOG, TOOLS, category_counts, get_tool, tool_names
from .dispatcher import Dispatcher

__all__ = [
    "CATALOG",
    "TOOLS",
    "Dispatcher",
    "category_counts",
    "get_tool",
    "tool_names",
    "validate_arguments",
]

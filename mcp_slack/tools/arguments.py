# Copyright 2025 CNOE
# SPDX-License-Identifier: Apache-2.0

"""Pydantic argument models built from the published tool schemas.

The models are generated from ``inputSchema`` so that what a host is told
and what the server accepts cannot drift apart. Properties that are not
declared are kept (``extra="allow"``); whether they reach Slack is decided
by the dispatcher.
"""

from typing import Any, Optional

from mcp.types import Tool
from pydantic import BaseModel, ConfigDict, Field, create_model

from mcp_slack.tools.catalog import TOOLS

JSON_SCHEMA_TYPES: dict[str, Any] = {
    "string": str,
    "number": int | float,
    "boolean": bool,
    "array": list,
    "object": dict,
}


class ToolArguments(BaseModel):
    """Base for every generated argument model."""

    model_config = ConfigDict(extra="allow", strict=True)


def _model_name(tool_name: str) -> str:
    # slack_send_message -> SlackSendMessageArguments
    return "".join(part.capitalize() for part in tool_name.split("_")) + "Arguments"


def _field_name(property_name: str) -> str:
    # pydantic reserves leading underscores for private attributes
    return property_name.lstrip("_") + "_" if property_name.startswith("_") else property_name


def build_arguments_model(tool: Tool) -> type[ToolArguments]:
    schema = tool.inputSchema
    required = set(schema.get("required", []))
    fields: dict[str, Any] = {}

    for property_name, prop in schema.get("properties", {}).items():
        annotation = JSON_SCHEMA_TYPES.get(prop.get("type"), Any)
        options: dict[str, Any] = {"description": prop.get("description")}
        if _field_name(property_name) != property_name:
            options["alias"] = property_name

        if property_name in required:
            fields[_field_name(property_name)] = (annotation, Field(..., **options))
        else:
            # None only marks the property as unset; an explicit null is rejected
            fields[_field_name(property_name)] = (annotation, Field(None, **options))

    return create_model(_model_name(tool.name), __base__=ToolArguments, **fields)


ARGUMENT_MODELS: dict[str, type[ToolArguments]] = {tool.name: build_arguments_model(tool) for tool in TOOLS}


def arguments_model(name: str) -> Optional[type[ToolArguments]]:
    return ARGUMENT_MODELS.get(name)


def validate_arguments(name: str, arguments: Optional[dict[str, Any]]) -> dict[str, Any]:
    """Validate tool arguments against the tool's schema.

    Args:
        name: Tool name
        arguments: Raw arguments as received from the host

    Returns:
        The validated arguments, containing only the keys the caller sent
        (declared properties under their published names, plus any extras)

    Raises:
        pydantic.ValidationError: A required property is missing or a value
            does not match its declared type
    """
    arguments = arguments or {}
    model = arguments_model(name)
    if model is None:
        # Unknown tools are rejected by the dispatcher
        return dict(arguments)

    validated = model.model_validate(arguments).model_dump(by_alias=True)
    return {key: value for key, value in validated.items() if key in arguments}

"""Message assembly for a single chat completion request."""

import json
from typing import Any

from jinja2 import Template

from promptclient.exceptions import InvalidRequestError
from promptclient.models.messages import Message, SystemMessage, UserMessage
from promptclient.schema import Schema

JSON_INSTRUCTION_TEMPLATE = Template(
    "Only provide responses in valid JSON in terms of {{ schema_json }}.",
    autoescape=False,
)


def render_json_instruction(schema: Schema[Any]) -> str:
    """Render the system instruction restricting output to JSON matching ``schema``."""
    schema_json = json.dumps(schema.describe(), separators=(",", ":"), ensure_ascii=False)
    return JSON_INSTRUCTION_TEMPLATE.render(schema_json=schema_json)


def build_messages(
    user_prompt: str,
    system_prompt: str | None = None,
    schema: Schema[Any] | None = None,
) -> list[Message]:
    """Build the ordered message list for one request.

    Order: JSON instruction (if a schema is given), custom system prompt
    (if given), then the user prompt.

    Raises:
        InvalidRequestError: If the user prompt is empty
    """
    if not user_prompt or not user_prompt.strip():
        raise InvalidRequestError("user_prompt must be a non-empty string")

    messages: list[Message] = []

    if schema is not None:
        messages.append(SystemMessage(content=render_json_instruction(schema)))

    if system_prompt:
        messages.append(SystemMessage(content=system_prompt))

    messages.append(UserMessage(content=user_prompt))
    return messages

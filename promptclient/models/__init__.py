"""Data models for promptclient.

Pydantic models describing what goes over the wire for one chat completion
call and what the caller gets back.

Available Models:
    - Role, Message and its variants: role-tagged chat messages
    - RequestConfig, ResponseFormat: per-request model parameters
    - ResponseEnvelope, Choice, Usage, FinishReason: validated API reply
    - QueryResult: success / parse-failure outcome of a query
"""

from promptclient.models.config import (
    JSON_OBJECT_FORMAT,
    RequestConfig,
    ResponseFormat,
    merge_request_config,
)
from promptclient.models.envelope import Choice, FinishReason, ResponseEnvelope, Usage
from promptclient.models.messages import (
    AssistantMessage,
    Message,
    Role,
    SystemMessage,
    ToolMessage,
    UserMessage,
    make_message,
)
from promptclient.models.result import QueryResult

__all__ = [
    "AssistantMessage",
    "Choice",
    "FinishReason",
    "JSON_OBJECT_FORMAT",
    "Message",
    "QueryResult",
    "RequestConfig",
    "ResponseEnvelope",
    "ResponseFormat",
    "Role",
    "SystemMessage",
    "ToolMessage",
    "Usage",
    "UserMessage",
    "make_message",
    "merge_request_config",
]

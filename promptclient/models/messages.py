from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class Role(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


class _BaseMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    content: Annotated[str, Field(description="The text content of the message")]

    def to_wire(self) -> dict[str, Any]:
        """Dict form used in the request body; unset optional fields are dropped."""
        return self.model_dump(mode="json", exclude_none=True)


class SystemMessage(_BaseMessage):
    role: Literal["system"] = "system"


class UserMessage(_BaseMessage):
    role: Literal["user"] = "user"


class AssistantMessage(_BaseMessage):
    role: Literal["assistant"] = "assistant"
    tool_calls: Annotated[Any | None, Field(default=None, description="Opaque tool call reference")]


class ToolMessage(_BaseMessage):
    role: Literal["tool"] = "tool"


Message = Annotated[
    SystemMessage | UserMessage | AssistantMessage | ToolMessage,
    Field(discriminator="role"),
]

message_adapter = TypeAdapter(Message)


def make_message(role: Role | str, content: str) -> Message:
    """Build the message variant matching ``role``."""
    return message_adapter.validate_python({"role": Role(role).value, "content": content})

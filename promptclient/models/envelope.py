from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictInt

from promptclient.models.messages import Message


class FinishReason(str, Enum):
    STOP = "stop"
    LENGTH = "length"
    CONTENT_FILTER = "content_filter"
    TOOL_CALLS = "tool_calls"


class Choice(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    message: Message
    finish_reason: FinishReason


class Usage(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    completion_tokens: Annotated[StrictInt, Field(ge=0)]
    prompt_tokens: Annotated[StrictInt, Field(ge=0)]
    total_tokens: Annotated[StrictInt, Field(ge=0)]


class ResponseEnvelope(BaseModel):
    """Validated body of a chat completion response."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str
    model: str
    object: Literal["chat.completion"]
    choices: Annotated[list[Choice], Field(min_length=1)]
    usage: Usage

    @property
    def first_choice(self) -> Choice:
        return self.choices[0]

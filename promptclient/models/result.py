from typing import Annotated, Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from promptclient.exceptions import ContentParseError
from promptclient.models.envelope import FinishReason, Usage

T = TypeVar("T")


class QueryResult(BaseModel, Generic[T]):
    """Outcome of a query: either a value or a diagnostic explaining the parse failure."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    ok: Annotated[bool, Field(description="Whether the output matched the requested shape")]
    value: Annotated[Any, Field(default=None, description="Raw text, or the schema-validated value")]
    content: Annotated[str, Field(description="The raw text returned by the model")]
    diagnostic: Annotated[str | None, Field(default=None, description="Parse failure report when ok is False")]
    error: Annotated[
        Exception | None,
        Field(default=None, exclude=True, description="The decode or validation error behind a failed parse"),
    ]
    finish_reason: Annotated[FinishReason, Field(description="Why generation stopped")]
    usage: Annotated[Usage | None, Field(default=None, description="Token usage of the call")]

    def unwrap(self) -> T:
        """Return the value, raising ContentParseError (chained to the parse error) if the output did not parse."""
        if not self.ok:
            raise ContentParseError(
                self.diagnostic or "Could not parse model output", content=self.content
            ) from self.error
        return self.value

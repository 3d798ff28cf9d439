"""Schema capability used for structured output.

A schema has to do two things: describe the expected shape as JSON Schema
(this description is embedded in the instruction sent to the model) and
validate an already-decoded JSON value against that shape.

Any object exposing ``describe()`` and ``parse()`` can be passed to
PromptClient.query. Plain pydantic models and other pydantic-supported types
are wrapped in PydanticSchema automatically.

Example:
    >>> from pydantic import BaseModel
    >>> from promptclient.schema import as_schema
    >>>
    >>> class Joke(BaseModel):
    ...     body: str
    ...     punchline: str
    >>>
    >>> schema = as_schema(Joke)
    >>> schema.describe()["required"]
    ['body', 'punchline']
    >>> schema.parse({"body": "b", "punchline": "p"})
    Joke(body='b', punchline='p')
"""

from typing import Any, Generic, Protocol, TypeVar, runtime_checkable

from pydantic import TypeAdapter

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


@runtime_checkable
class Schema(Protocol[T_co]):
    def describe(self) -> dict[str, Any]:
        """Return a JSON Schema document for the expected value."""
        ...

    def parse(self, value: Any) -> T_co:
        """Validate a decoded JSON value; raise on mismatch."""
        ...


class PydanticSchema(Generic[T]):
    """Schema backed by a pydantic TypeAdapter.

    Works for BaseModel subclasses as well as any annotation pydantic can
    validate (``list[int]``, ``TypedDict`` classes, unions, ...).
    """

    def __init__(self, target: type[T] | Any):
        self.target = target
        self._adapter: TypeAdapter[T] = TypeAdapter(target)

    def describe(self) -> dict[str, Any]:
        return self._adapter.json_schema()

    def parse(self, value: Any) -> T:
        return self._adapter.validate_python(value)

    @property
    def name(self) -> str:
        return getattr(self.target, "__name__", repr(self.target))

    def __repr__(self) -> str:
        return f"PydanticSchema({self.name})"


def as_schema(schema: Schema[T] | type[T] | Any) -> Schema[T]:
    """Return ``schema`` unchanged if it implements Schema, else wrap it in PydanticSchema."""
    # Classes are wrapped even if they happen to define describe/parse as methods.
    if not isinstance(schema, type) and isinstance(schema, Schema):
        return schema
    return PydanticSchema(schema)


def schema_name(schema: Schema[Any]) -> str:
    return getattr(schema, "name", type(schema).__name__)

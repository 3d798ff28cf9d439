"""promptclient API - single-shot chat completions with optional typed output.

Core Components:
    - PromptClient: client bound to one settings object and one transport
    - query: one-off convenience function

A query builds the message list, merges the request config, sends one
request and returns either the raw text of the first choice or, when a
schema is supplied, the schema-validated value decoded from that text.

Failure modes:
    - Transport, provider and envelope errors raise PromptClientError
      subclasses (see promptclient.exceptions)
    - Output that does not match the schema raises ContentParseError from
      query(), or is reported as QueryResult(ok=False) by try_query(); with
      exit_on_parse_error enabled the process exits with status 1 instead

Example:
    >>> import asyncio
    >>> from pydantic import BaseModel
    >>> from promptclient import query
    >>>
    >>> class Joke(BaseModel):
    ...     body: str
    ...     punchline: str
    >>>
    >>> async def main():
    ...     text = await query("Tell me a joke")
    ...     joke = await query("Tell me a joke", schema=Joke)
    ...     print(text, joke.punchline)
    >>>
    >>> asyncio.run(main())
"""

import json
import sys
from collections.abc import Mapping, Sequence
from typing import Any, Protocol, TypeVar, overload

from pydantic import ValidationError

from promptclient.config import PromptClientSettings, get_settings
from promptclient.exceptions import InvalidRequestError
from promptclient.logging_config import get_logger
from promptclient.models.config import (
    JSON_OBJECT_FORMAT,
    ConfigLayer,
    RequestConfig,
    merge_request_config,
)
from promptclient.models.envelope import FinishReason, ResponseEnvelope
from promptclient.models.messages import Message
from promptclient.models.result import QueryResult
from promptclient.prompting import build_messages
from promptclient.schema import Schema, as_schema, schema_name
from promptclient.transport import HttpTransport

logger = get_logger(__name__)

T = TypeVar("T")


class Transport(Protocol):
    async def send(self, config: RequestConfig, messages: Sequence[Message]) -> ResponseEnvelope: ...


def format_unparseable(content: str) -> str:
    """Diagnostic for output that failed to parse: pretty JSON if possible, verbatim otherwise."""
    try:
        shown = json.dumps(json.loads(content), indent=2, ensure_ascii=False)
    except ValueError:
        shown = content
    return f"Could not parse: {shown}"


class PromptClient:
    """Issues chat completion requests using one settings object.

    Args:
        settings: Settings to use (defaults to the process-wide get_settings())
        transport: Object with an async ``send(config, messages)``; defaults to HttpTransport
        exit_on_parse_error: Exit the process on schema mismatch instead of raising
            (defaults to settings.exit_on_parse_error)
    """

    def __init__(
        self,
        settings: PromptClientSettings | None = None,
        transport: Transport | None = None,
        exit_on_parse_error: bool | None = None,
    ):
        self.settings = settings or get_settings()
        self.transport = transport or HttpTransport(self.settings)
        self.exit_on_parse_error = (
            self.settings.exit_on_parse_error if exit_on_parse_error is None else exit_on_parse_error
        )

    @property
    def default_config(self) -> RequestConfig:
        return RequestConfig(model=self.settings.default_model, temperature=self.settings.default_temperature)

    def build_config(self, openai_config: ConfigLayer = None, structured: bool = False) -> RequestConfig:
        """Merge defaults, caller overrides and, for structured output, the JSON response format.

        Raises:
            InvalidRequestError: If the merged config is invalid (unknown option, value out of range)
        """
        forced = {"response_format": JSON_OBJECT_FORMAT} if structured else None
        try:
            return merge_request_config(self.default_config, openai_config, forced)
        except ValidationError as e:
            logger.error(f"Invalid request config: {e.error_count()} error(s)")
            raise InvalidRequestError(f"Invalid request config: {e}") from e

    @overload
    async def query(
        self,
        user_prompt: str,
        *,
        system_prompt: str | None = None,
        openai_config: ConfigLayer = None,
        schema: None = None,
    ) -> str: ...

    @overload
    async def query(
        self,
        user_prompt: str,
        *,
        system_prompt: str | None = None,
        openai_config: ConfigLayer = None,
        schema: Schema[T] | type[T],
    ) -> T: ...

    async def query(
        self,
        user_prompt: str,
        *,
        system_prompt: str | None = None,
        openai_config: ConfigLayer = None,
        schema: Schema[Any] | type | None = None,
    ) -> Any:
        """Send one prompt and return the raw answer or the schema-validated value.

        Args:
            user_prompt: The user's message (must be non-empty)
            system_prompt: Optional system message placed before the user message
            openai_config: Partial RequestConfig overrides (mapping or RequestConfig)
            schema: Expected shape of the answer; a Schema or any pydantic-supported type

        Returns:
            The first choice's text when no schema is given, otherwise the parsed value

        Raises:
            InvalidRequestError: If the prompt or openai_config is invalid, or the provider rejects the request
            ProviderError: If the provider answers with an error payload
            TransportError: If the request fails or times out
            EnvelopeValidationError: If the response body has an unexpected shape
            ContentParseError: If the output does not match the schema
            SystemExit: Instead of ContentParseError when exit_on_parse_error is set
        """
        result = await self._execute(user_prompt, system_prompt, openai_config, schema)
        if result.ok:
            return result.value

        # The diagnostic goes to stderr once: printed before exiting, logged otherwise.
        if self.exit_on_parse_error:
            print(result.diagnostic, file=sys.stderr)
            sys.exit(1)

        _log_parse_failure(result)
        return result.unwrap()

    async def try_query(
        self,
        user_prompt: str,
        *,
        system_prompt: str | None = None,
        openai_config: ConfigLayer = None,
        schema: Schema[Any] | type | None = None,
    ) -> QueryResult[Any]:
        """Like query(), but report a schema mismatch as QueryResult(ok=False).

        Transport, provider and envelope errors are still raised. The error
        behind a failed parse is kept on ``QueryResult.error``.
        """
        result = await self._execute(user_prompt, system_prompt, openai_config, schema)
        if not result.ok:
            _log_parse_failure(result)
        return result

    async def _execute(
        self,
        user_prompt: str,
        system_prompt: str | None,
        openai_config: ConfigLayer,
        schema: Schema[Any] | type | None,
    ) -> QueryResult[Any]:
        resolved = as_schema(schema) if schema is not None else None
        messages = build_messages(user_prompt, system_prompt=system_prompt, schema=resolved)
        config = self.build_config(openai_config, structured=resolved is not None)

        logger.info(
            f"Starting query: model={config.model}, message_count={len(messages)}, "
            f"schema={schema_name(resolved) if resolved is not None else None}, prompt_length={len(user_prompt)}"
        )

        envelope = await self.transport.send(config, messages)
        choice = envelope.first_choice

        if choice.finish_reason is not FinishReason.STOP:
            logger.warning(f"Unexpected finish reason: {choice.finish_reason.value}")

        content = choice.message.content
        if resolved is None:
            return QueryResult(
                ok=True, value=content, content=content, finish_reason=choice.finish_reason, usage=envelope.usage
            )

        # Caller-supplied schemas may raise anything from parse().
        try:
            value = resolved.parse(json.loads(content))
        except Exception as e:
            return QueryResult(
                ok=False,
                content=content,
                diagnostic=format_unparseable(content),
                error=e,
                finish_reason=choice.finish_reason,
                usage=envelope.usage,
            )

        logger.debug(f"Parsed structured response as {schema_name(resolved)}")
        return QueryResult(
            ok=True, value=value, content=content, finish_reason=choice.finish_reason, usage=envelope.usage
        )


def _log_parse_failure(result: QueryResult[Any]) -> None:
    error = result.error
    logger.error(f"{result.diagnostic}\n({type(error).__name__}: {error})")


# Convenience function for one-off requests


async def query(
    user_prompt: str,
    *,
    system_prompt: str | None = None,
    openai_config: RequestConfig | Mapping[str, Any] | None = None,
    schema: Schema[Any] | type | None = None,
    settings: PromptClientSettings | None = None,
) -> Any:
    """Quick query using the process-wide settings (or the ones given).

    Args:
        user_prompt: The user's message
        system_prompt: Optional system message
        openai_config: Partial RequestConfig overrides
        schema: Expected shape of the answer
        settings: Settings to use instead of get_settings()

    Returns:
        The raw text, or the schema-validated value when a schema is given
    """
    client = PromptClient(settings=settings)
    return await client.query(
        user_prompt,
        system_prompt=system_prompt,
        openai_config=openai_config,
        schema=schema,
    )

"""promptclient - minimal async client for chat completions with typed output.

promptclient sends one chat completion request per call and returns either
the model's raw text or a value validated against a caller-supplied schema:
- Schema-guided prompting (JSON instruction derived from the schema)
- Strict validation of the response envelope
- Typed errors for transport, provider, envelope and content failures
- One frozen settings object per process (API key, timeout, defaults)

Quick Start:
    >>> import asyncio
    >>> from pydantic import BaseModel
    >>> from promptclient import PromptClient
    >>>
    >>> class Joke(BaseModel):
    ...     body: str
    ...     punchline: str
    >>>
    >>> async def main():
    ...     client = PromptClient()
    ...     print(await client.query("Tell me a joke"))
    ...
    ...     joke = await client.query("Tell me a joke", schema=Joke)
    ...     print(joke.punchline)
    ...
    ...     result = await client.try_query("Tell me a joke", schema=Joke)
    ...     if not result.ok:
    ...         print(result.diagnostic)
    >>>
    >>> asyncio.run(main())
"""

from promptclient._version import __version__
from promptclient.api import PromptClient, format_unparseable, query
from promptclient.config import PromptClientSettings, get_settings, load_settings, reload_settings
from promptclient.exceptions import (
    APIConnectionError,
    AuthenticationError,
    ConfigurationError,
    ContentParseError,
    EnvelopeValidationError,
    InvalidRequestError,
    PromptClientError,
    ProviderError,
    RateLimitError,
    RequestTimeoutError,
    TokenLimitError,
    TransportError,
)
from promptclient.logging_config import setup_logging
from promptclient.models import (
    AssistantMessage,
    FinishReason,
    Message,
    QueryResult,
    RequestConfig,
    ResponseEnvelope,
    Role,
    SystemMessage,
    ToolMessage,
    UserMessage,
)
from promptclient.schema import PydanticSchema, Schema, as_schema
from promptclient.transport import HttpTransport

# Initialize logging on package import
setup_logging()

__all__ = [
    "__version__",
    # High-level API
    "PromptClient",
    "query",
    "format_unparseable",
    "HttpTransport",
    # Schema
    "Schema",
    "PydanticSchema",
    "as_schema",
    # Exceptions
    "PromptClientError",
    "ConfigurationError",
    "TransportError",
    "APIConnectionError",
    "RequestTimeoutError",
    "ProviderError",
    "AuthenticationError",
    "RateLimitError",
    "TokenLimitError",
    "InvalidRequestError",
    "EnvelopeValidationError",
    "ContentParseError",
    # Models
    "Role",
    "Message",
    "SystemMessage",
    "UserMessage",
    "AssistantMessage",
    "ToolMessage",
    "RequestConfig",
    "ResponseEnvelope",
    "FinishReason",
    "QueryResult",
    # Configuration
    "PromptClientSettings",
    "get_settings",
    "load_settings",
    "reload_settings",
    "setup_logging",
]

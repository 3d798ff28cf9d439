"""Exception hierarchy for promptclient.

Exception Hierarchy:
    - PromptClientError (base)
        - ConfigurationError: Settings missing or invalid (e.g. no API key)
        - TransportError: The HTTP exchange itself failed
            - APIConnectionError: Network failure or undecodable body
            - RequestTimeoutError: No response within the request timeout
        - ProviderError: The API answered with an ``error`` payload
            - AuthenticationError
            - RateLimitError
            - TokenLimitError
            - InvalidRequestError
        - EnvelopeValidationError: Response body has an unexpected shape
        - ContentParseError: Model output does not match the requested schema
"""

from typing import Any


class PromptClientError(Exception):
    """Base exception for promptclient errors."""

    pass


class ConfigurationError(PromptClientError):
    """Raised when required settings are missing or invalid."""

    pass


class TransportError(PromptClientError):
    """Raised when the HTTP request could not be completed."""

    pass


class APIConnectionError(TransportError):
    """Raised when there's a connection issue with the API."""

    pass


class RequestTimeoutError(TransportError):
    """Raised when the API does not answer within the request timeout."""

    pass


class ProviderError(PromptClientError):
    """Raised when the API responds with an ``error`` field.

    The message is the raw JSON payload returned by the provider.

    Attributes:
        payload: The decoded response body
        status_code: HTTP status of the response, if known
    """

    def __init__(self, message: str, payload: dict[str, Any] | None = None, status_code: int | None = None):
        self.payload = payload or {}
        self.status_code = status_code
        super().__init__(message)


class AuthenticationError(ProviderError):
    """Raised when authentication fails."""

    pass


class RateLimitError(ProviderError):
    """Raised when rate limit or quota is hit."""

    pass


class TokenLimitError(ProviderError):
    """Raised when token limit is exceeded."""

    pass


class InvalidRequestError(ProviderError):
    """Raised when the request is invalid (bad params, empty prompt, etc)."""

    pass


class EnvelopeValidationError(PromptClientError):
    """Raised when the response body does not match the chat completion envelope."""

    pass


class ContentParseError(PromptClientError):
    """Raised when a schema was supplied but the model output does not satisfy it.

    Attributes:
        content: The raw text returned by the model
        diagnostic: Human-readable report including the offending content
    """

    def __init__(self, diagnostic: str, content: str):
        self.content = content
        self.diagnostic = diagnostic
        super().__init__(diagnostic)

"""HTTP transport for the chat completions endpoint.

One call to HttpTransport.send is one POST: no retries, no streaming. The
outcome is either a validated ResponseEnvelope or a typed exception:

    - RequestTimeoutError: no response within settings.request_timeout_ms
    - APIConnectionError: network failure or a body that is not a JSON object
    - ProviderError (or a subclass picked by classify_provider_error): the
      body carries an ``error`` field; the message is the raw JSON payload
    - EnvelopeValidationError: the body does not match ResponseEnvelope
"""

import json
import time
from collections.abc import Sequence
from typing import Any

import httpx
from pydantic import ValidationError

from promptclient.config import PromptClientSettings
from promptclient.exceptions import (
    APIConnectionError,
    AuthenticationError,
    EnvelopeValidationError,
    InvalidRequestError,
    ProviderError,
    RateLimitError,
    RequestTimeoutError,
    TokenLimitError,
)
from promptclient.logging_config import get_logger
from promptclient.models.config import RequestConfig
from promptclient.models.envelope import ResponseEnvelope
from promptclient.models.messages import Message

logger = get_logger(__name__)


def classify_provider_error(payload: dict[str, Any], status_code: int | None = None) -> ProviderError:
    """Map a provider ``{"error": ...}`` body onto our exception types.

    The exception message is always the raw JSON payload; the subclass is
    picked from the error code/type/message and the HTTP status.
    """
    raw = json.dumps(payload, ensure_ascii=False)
    error = payload.get("error")
    if isinstance(error, dict):
        hint = " ".join(str(error.get(key) or "") for key in ("code", "type", "message")).lower()
    else:
        hint = str(error).lower()

    if "context_length_exceeded" in hint or "maximum context" in hint or "too many tokens" in hint:
        return TokenLimitError(raw, payload=payload, status_code=status_code)

    if status_code == 429 or any(
        keyword in hint for keyword in ["rate_limit", "rate limit", "insufficient_quota", "quota"]
    ):
        return RateLimitError(raw, payload=payload, status_code=status_code)

    if status_code in (401, 403) or any(
        keyword in hint for keyword in ["invalid_api_key", "invalid api key", "authentication", "unauthorized"]
    ):
        return AuthenticationError(raw, payload=payload, status_code=status_code)

    if status_code == 400 or any(keyword in hint for keyword in ["invalid_request_error", "invalid request"]):
        return InvalidRequestError(raw, payload=payload, status_code=status_code)

    return ProviderError(raw, payload=payload, status_code=status_code)


def build_request_body(config: RequestConfig, messages: Sequence[Message]) -> dict[str, Any]:
    return {**config.to_body(), "messages": [message.to_wire() for message in messages]}


class HttpTransport:
    """Sends chat completion requests with httpx.

    Args:
        settings: Supplies the endpoint URL, API key and timeout
        client: Optional externally managed AsyncClient (left open after use);
            when omitted a client is created and closed for every request
    """

    def __init__(self, settings: PromptClientSettings, client: httpx.AsyncClient | None = None):
        self.settings = settings
        self._client = client

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.settings.openai_api_key}",
            "Content-Type": "application/json",
        }

    async def send(self, config: RequestConfig, messages: Sequence[Message]) -> ResponseEnvelope:
        body = build_request_body(config, messages)
        timeout = httpx.Timeout(self.settings.request_timeout_s)

        logger.debug(
            f"POST {self.settings.api_url}: model={config.model}, message_count={len(messages)}, "
            f"response_format={config.response_format.type if config.response_format else None}, "
            f"timeout={self.settings.request_timeout_ms}ms"
        )

        start_time = time.time()
        try:
            if self._client is not None:
                response = await self._client.post(
                    self.settings.api_url, json=body, headers=self._headers(), timeout=timeout
                )
            else:
                async with httpx.AsyncClient(timeout=timeout) as client:
                    response = await client.post(self.settings.api_url, json=body, headers=self._headers())
        except httpx.TimeoutException as e:
            elapsed_time = time.time() - start_time
            logger.error(
                f"Request timed out after {elapsed_time:.3f}s (timeout={self.settings.request_timeout_ms}ms): "
                f"model={config.model}"
            )
            raise RequestTimeoutError(f"Request timed out after {self.settings.request_timeout_ms}ms") from e
        except httpx.HTTPError as e:
            logger.error(f"Request failed: model={config.model}, error={e!r}")
            raise APIConnectionError(f"API connection error: {e}") from e

        elapsed_time = time.time() - start_time

        try:
            payload = response.json()
        except ValueError as e:
            logger.error(f"Undecodable response body: status={response.status_code}, body={response.text[:600]!r}")
            raise APIConnectionError(f"HTTP {response.status_code}: response body is not JSON") from e

        if not isinstance(payload, dict):
            raise APIConnectionError(f"HTTP {response.status_code}: expected a JSON object, got {type(payload).__name__}")

        if payload.get("error") is not None:
            error = classify_provider_error(payload, status_code=response.status_code)
            logger.error(f"Provider returned an error: status={response.status_code}, error_type={type(error).__name__}")
            raise error

        try:
            envelope = ResponseEnvelope.model_validate(payload)
        except ValidationError as e:
            logger.error(f"Response does not match the chat completion envelope: {e.error_count()} error(s)")
            raise EnvelopeValidationError(f"Invalid chat completion response: {e}") from e

        logger.info(
            f"Chat completion finished: model={envelope.model}, latency={elapsed_time:.3f}s, "
            f"tokens={envelope.usage.total_tokens} (prompt={envelope.usage.prompt_tokens}, "
            f"completion={envelope.usage.completion_tokens})"
        )
        return envelope

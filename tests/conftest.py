"""Pytest configuration for promptclient tests."""

import json
from typing import Any

import httpx
import pytest

TEST_API_KEY = "sk-test-key"


@pytest.fixture(autouse=True)
def api_key_env(monkeypatch):
    """Provide an API key and isolate the cached settings for every test."""
    from promptclient.config import reset_settings

    monkeypatch.setenv("OPENAI_API_KEY", TEST_API_KEY)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def settings():
    from promptclient.config import load_settings

    return load_settings(openai_api_key=TEST_API_KEY, default_model="m1")


def make_completion(content: str, finish_reason: str = "stop", **overrides: Any) -> dict[str, Any]:
    """Build a chat completion body as the API returns it."""
    body = {
        "id": "chatcmpl-123",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "gpt-4-1106-preview",
        "system_fingerprint": "fp_test",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "logprobs": None,
                "finish_reason": finish_reason,
            }
        ],
        "usage": {"completion_tokens": 7, "prompt_tokens": 11, "total_tokens": 18},
    }
    body.update(overrides)
    return body


class RecordingHandler:
    """httpx.MockTransport handler that records requests and replays canned responses."""

    def __init__(self, *responses: httpx.Response | dict[str, Any]):
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.responses[min(len(self.requests), len(self.responses)) - 1]
        if isinstance(response, httpx.Response):
            return response
        return httpx.Response(200, json=response)

    @property
    def bodies(self) -> list[dict[str, Any]]:
        return [json.loads(request.content) for request in self.requests]


@pytest.fixture
def completion():
    """Factory for chat completion response bodies."""
    return make_completion


@pytest.fixture
def http_client_factory():
    """Build an AsyncClient backed by a RecordingHandler."""

    def factory(*responses: httpx.Response | dict[str, Any]) -> tuple[httpx.AsyncClient, RecordingHandler]:
        handler = RecordingHandler(*responses)
        return httpx.AsyncClient(transport=httpx.MockTransport(handler)), handler

    return factory

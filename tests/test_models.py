"""Tests for message, request config and response envelope models."""

import pytest
from pydantic import ValidationError

from promptclient.exceptions import ContentParseError
from promptclient.models import (
    AssistantMessage,
    FinishReason,
    QueryResult,
    RequestConfig,
    ResponseEnvelope,
    ResponseFormat,
    Role,
    SystemMessage,
    ToolMessage,
    UserMessage,
    make_message,
    merge_request_config,
)
from promptclient.models.messages import message_adapter


class TestMessages:
    """Test the role-tagged message union."""

    def test_variant_selected_by_role(self):
        assert isinstance(message_adapter.validate_python({"role": "system", "content": "s"}), SystemMessage)
        assert isinstance(message_adapter.validate_python({"role": "user", "content": "u"}), UserMessage)
        assert isinstance(message_adapter.validate_python({"role": "tool", "content": "t"}), ToolMessage)

        assistant = message_adapter.validate_python(
            {"role": "assistant", "content": "a", "tool_calls": [{"id": "call_1"}]}
        )
        assert isinstance(assistant, AssistantMessage)
        assert assistant.tool_calls == [{"id": "call_1"}]

    def test_unknown_role_rejected(self):
        with pytest.raises(ValidationError):
            message_adapter.validate_python({"role": "developer", "content": "x"})

    def test_content_required(self):
        with pytest.raises(ValidationError):
            message_adapter.validate_python({"role": "user"})

    def test_messages_are_immutable(self):
        message = UserMessage(content="hi")

        with pytest.raises(ValidationError):
            message.content = "changed"

    def test_wire_format_drops_absent_tool_calls(self):
        assert AssistantMessage(content="a").to_wire() == {"role": "assistant", "content": "a"}
        assert AssistantMessage(content="a", tool_calls="ref").to_wire() == {
            "role": "assistant",
            "content": "a",
            "tool_calls": "ref",
        }
        assert SystemMessage(content="s").to_wire() == {"role": "system", "content": "s"}

    def test_make_message(self):
        assert make_message(Role.USER, "q") == UserMessage(content="q")
        assert make_message("system", "s") == SystemMessage(content="s")


class TestRequestConfig:
    """Test request config validation and merging."""

    def test_override_replaces_same_field_only(self):
        merged = merge_request_config({"model": "m1", "temperature": 0}, {"temperature": 0.7})

        assert merged.to_body() == {"model": "m1", "temperature": 0.7}

    def test_later_layers_win(self):
        merged = merge_request_config(
            RequestConfig(model="m1", temperature=0.0),
            {"model": "m2", "top_p": 0.1},
            {"top_p": 0.5},
        )

        assert merged.model == "m2"
        assert merged.temperature == 0.0
        assert merged.top_p == 0.5

    def test_config_layer_only_contributes_set_fields(self):
        merged = merge_request_config(
            RequestConfig(model="m1", temperature=0.0),
            RequestConfig(model="m2"),
        )

        assert merged.model == "m2"
        assert merged.temperature == 0.0

    def test_none_layers_skipped(self):
        merged = merge_request_config({"model": "m1"}, None)

        assert merged.to_body() == {"model": "m1"}

    def test_response_format_serialisation(self):
        config = RequestConfig(model="m1", response_format=ResponseFormat())

        assert config.to_body() == {"model": "m1", "response_format": {"type": "json_object"}}

    @pytest.mark.parametrize(
        "overrides",
        [
            {"temperature": 2.5},
            {"top_p": 1.5},
            {"frequency_penalty": -3},
            {"unknown_option": 1},
        ],
    )
    def test_invalid_values_rejected(self, overrides):
        with pytest.raises(ValidationError):
            merge_request_config({"model": "m1"}, overrides)

    def test_model_required(self):
        with pytest.raises(ValidationError):
            merge_request_config({"temperature": 0.2})


class TestResponseEnvelope:
    """Test validation of the chat completion envelope."""

    def test_valid_body(self, completion):
        envelope = ResponseEnvelope.model_validate(completion("hello", finish_reason="length"))

        assert envelope.object == "chat.completion"
        assert envelope.first_choice.message.content == "hello"
        assert envelope.first_choice.finish_reason is FinishReason.LENGTH
        assert envelope.usage.total_tokens == 18

    def test_wrong_object_tag(self, completion):
        with pytest.raises(ValidationError):
            ResponseEnvelope.model_validate(completion("x", object="chat.completion.chunk"))

    def test_empty_choices(self, completion):
        with pytest.raises(ValidationError):
            ResponseEnvelope.model_validate(completion("x", choices=[]))

    def test_unknown_finish_reason(self, completion):
        with pytest.raises(ValidationError):
            ResponseEnvelope.model_validate(completion("x", finish_reason="function_call"))

    def test_negative_token_count(self, completion):
        body = completion("x", usage={"completion_tokens": -1, "prompt_tokens": 1, "total_tokens": 0})

        with pytest.raises(ValidationError):
            ResponseEnvelope.model_validate(body)

    @pytest.mark.parametrize(
        "usage",
        [
            {"completion_tokens": "7", "prompt_tokens": 11, "total_tokens": 18},
            {"completion_tokens": 7, "prompt_tokens": 11.0, "total_tokens": 18},
            {"completion_tokens": 7, "prompt_tokens": 11, "total_tokens": True},
        ],
    )
    def test_token_counts_must_be_integers(self, completion, usage):
        with pytest.raises(ValidationError):
            ResponseEnvelope.model_validate(completion("x", usage=usage))

    def test_missing_usage(self, completion):
        body = completion("x")
        del body["usage"]

        with pytest.raises(ValidationError):
            ResponseEnvelope.model_validate(body)


class TestQueryResult:
    """Test the success / failure result type."""

    def test_unwrap_success(self):
        result = QueryResult(ok=True, value={"a": 1}, content='{"a": 1}', finish_reason=FinishReason.STOP)

        assert result.unwrap() == {"a": 1}

    def test_unwrap_failure_raises(self):
        result = QueryResult(
            ok=False, content="not json", diagnostic="Could not parse: not json", finish_reason="stop"
        )

        with pytest.raises(ContentParseError) as exc_info:
            result.unwrap()

        assert exc_info.value.content == "not json"
        assert "not json" in exc_info.value.diagnostic
        assert exc_info.value.__cause__ is None

    def test_unwrap_failure_chains_parse_error(self):
        error = ValueError("Expecting value")
        result = QueryResult(
            ok=False, content="not json", diagnostic="Could not parse: not json", error=error, finish_reason="stop"
        )

        with pytest.raises(ContentParseError) as exc_info:
            result.unwrap()

        assert exc_info.value.__cause__ is error

from collections.abc import Mapping
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class ResponseFormat(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["json_object"] = "json_object"


JSON_OBJECT_FORMAT = ResponseFormat()


class RequestConfig(BaseModel):
    """Per-request model parameters sent alongside the messages.

    Only one of ``temperature`` / ``top_p`` is normally set; both are passed
    through untouched when present.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    model: Annotated[str, Field(min_length=1, description="Model identifier, e.g. gpt-4-1106-preview")]
    response_format: Annotated[
        ResponseFormat | None, Field(default=None, description="Set to json_object for structured output")
    ]
    frequency_penalty: Annotated[
        float | None,
        Field(default=None, ge=-2.0, le=2.0, description="Positive values discourage verbatim repetition"),
    ]
    temperature: Annotated[
        float | None, Field(default=None, ge=0.0, le=2.0, description="Sampling temperature")
    ]
    top_p: Annotated[
        float | None, Field(default=None, ge=0.0, le=1.0, description="Nucleus sampling probability mass")
    ]

    def to_body(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


ConfigLayer = RequestConfig | Mapping[str, Any] | None


def _layer_fields(layer: RequestConfig | Mapping[str, Any]) -> dict[str, Any]:
    if isinstance(layer, RequestConfig):
        return {name: getattr(layer, name) for name in layer.model_fields_set}
    return dict(layer)


def merge_request_config(*layers: ConfigLayer) -> RequestConfig:
    """Shallow-merge config layers; fields from later layers replace earlier ones.

    Args:
        *layers: RequestConfig instances (only explicitly set fields count),
            partial mappings, or None (skipped)

    Returns:
        RequestConfig: The validated, merged configuration
    """
    merged: dict[str, Any] = {}
    for layer in layers:
        if layer is None:
            continue
        merged.update(_layer_fields(layer))
    return RequestConfig.model_validate(merged)

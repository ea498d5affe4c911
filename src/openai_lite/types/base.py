"""
Base model and shared wire types.

Every request/response structure derives from ApiModel so that unset
optional fields are left out of the JSON body instead of being sent as
null. Request payloads also leave out empty strings and empty lists;
zero numbers and ``False`` are values and are kept.
"""

from __future__ import annotations

from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializationInfo,
    SerializerFunctionWrapHandler,
    model_serializer,
)

_OMIT_EMPTY = "omit_empty"


class ApiModel(BaseModel):
    """Base class for provider API payloads."""

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    @model_serializer(mode="wrap")
    def _serialize(
        self, handler: SerializerFunctionWrapHandler, info: SerializationInfo
    ) -> dict[str, Any]:
        data = handler(self)
        if isinstance(info.context, dict) and info.context.get(_OMIT_EMPTY):
            return {k: v for k, v in data.items() if not _is_empty(v)}
        return data

    def to_payload(self) -> dict[str, Any]:
        """Serialize to a JSON-ready dict, omitting unset and empty fields."""
        return self.model_dump(
            mode="json",
            by_alias=True,
            exclude_none=True,
            context={_OMIT_EMPTY: True},
        )


def _is_empty(value: Any) -> bool:
    return (isinstance(value, str) and value == "") or (isinstance(value, list) and not value)


class Usage(ApiModel):
    """Token usage accounting returned with a completion."""

    prompt_tokens: int = Field(default=0, description="Tokens in the prompt")
    completion_tokens: int = Field(default=0, description="Tokens in the completion")
    total_tokens: int = Field(default=0, description="Prompt plus completion tokens")

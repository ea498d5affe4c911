"""
Chat completion request and response types.

Field names match the provider's wire format exactly. Optional fields
default to None and are left out of the request body when unset.

Provides:
- Message / MMMessage for text and multi-modal conversations
- TextContent / ImageContent, a closed union discriminated on ``type``
- CompletionParams / MMCompletionParams for requests
- CompletionResponse / Choice for results
"""

from __future__ import annotations

import base64
import json
from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import AliasChoices, Field

from openai_lite.errors import ValidationError
from openai_lite.types import ApiModel, Usage


class MessageRole(str, Enum):
    """Message role enumeration."""

    SYSTEM = "system"
    DEVELOPER = "developer"
    USER = "user"
    ASSISTANT = "assistant"
    FUNCTION = "function"
    TOOL = "tool"


class FunctionCall(ApiModel):
    """A function invocation requested by the model."""

    name: str = Field(description="Function name")
    arguments: str = Field(default="", description="JSON-encoded arguments")

    def parsed_arguments(self) -> dict[str, Any]:
        """Decode the arguments, returning {} when they are empty or not valid JSON."""
        if not self.arguments:
            return {}
        try:
            parsed = json.loads(self.arguments)
        except json.JSONDecodeError:
            return {}
        return parsed if isinstance(parsed, dict) else {}


class Function(ApiModel):
    """A function the model may call.

    Example:
        >>> Function(
        ...     name="get_weather",
        ...     description="Get weather for a city",
        ...     parameters={
        ...         "type": "object",
        ...         "properties": {"city": {"type": "string"}},
        ...         "required": ["city"],
        ...     },
        ... )
    """

    name: str = Field(description="Function name")
    description: str | None = Field(default=None, description="What the function does")
    parameters: dict[str, Any] = Field(
        default_factory=lambda: {"type": "object", "properties": {}},
        description="JSON Schema for parameters",
    )


class Message(ApiModel):
    """A text chat message.

    Carries either plain text ``content`` or a ``function_call``.

    Examples:
        >>> Message.system("You are a helpful assistant.")
        >>> Message.user("Hello!")
    """

    role: MessageRole = Field(description="Message role")
    content: str | None = Field(default=None, description="Plain text content")
    function_call: FunctionCall | None = Field(default=None, description="Requested function call")
    name: str | None = Field(default=None, description="Author or function name")

    @classmethod
    def system(cls, text: str) -> Message:
        """Create a system message."""
        return cls(role=MessageRole.SYSTEM, content=text)

    @classmethod
    def user(cls, text: str) -> Message:
        """Create a user message."""
        return cls(role=MessageRole.USER, content=text)

    @classmethod
    def assistant(cls, text: str) -> Message:
        """Create an assistant message."""
        return cls(role=MessageRole.ASSISTANT, content=text)


class ImageURL(ApiModel):
    """Image reference: an http(s) URL or a base64 data URL."""

    url: str = Field(description="Image URL or data URL")
    detail: str | None = Field(default=None, description="Detail hint: 'low', 'high' or 'auto'")


class TextContent(ApiModel):
    """Text content block."""

    type: Literal["text"] = "text"
    text: str = Field(description="Text content")


class ImageContent(ApiModel):
    """Image content block."""

    type: Literal["image_url"] = "image_url"
    image_url: ImageURL = Field(description="Image reference")

    @classmethod
    def from_image(cls, media_type: str, data: bytes) -> ImageContent:
        """Embed raw image bytes as a base64 data URL.

        Uses the standard base64 alphabet, not the URL-safe one; that is
        what the provider's vision guide produces with b64encode.

        Args:
            media_type: MIME type, must start with "image/"
            data: Raw image bytes

        Returns:
            ImageContent whose URL is ``data:<media_type>;base64,<encoded>``

        Raises:
            ValidationError: If media_type is not an image type
        """
        if not media_type.startswith("image/"):
            raise ValidationError(
                "media_type must be image/*",
                field="media_type",
                expected="image/*",
                actual=media_type,
            )
        encoded = base64.standard_b64encode(data).decode("ascii")
        return cls(image_url=ImageURL(url=f"data:{media_type};base64,{encoded}"))

    @classmethod
    def from_url(cls, url: str, detail: str | None = None) -> ImageContent:
        """Reference an image by URL."""
        return cls(image_url=ImageURL(url=url, detail=detail))


Content = Annotated[TextContent | ImageContent, Field(discriminator="type")]


def new_content_from_image(media_type: str, data: bytes) -> ImageContent:
    """Create image content from raw bytes (see ImageContent.from_image)."""
    return ImageContent.from_image(media_type, data)


def new_content_from_image_url(url: str, detail: str | None = None) -> ImageContent:
    """Create image content from an existing URL."""
    return ImageContent.from_url(url, detail)


def new_content_from_text(text: str) -> TextContent:
    """Create text content."""
    return TextContent(text=text)


class MMMessage(ApiModel):
    """A multi-modal chat message made of ordered content blocks.

    Example:
        >>> MMMessage(
        ...     role=MessageRole.USER,
        ...     content=[
        ...         new_content_from_image("image/png", png_bytes),
        ...         new_content_from_text("please describe the image"),
        ...     ],
        ... )
    """

    role: MessageRole = Field(description="Message role")
    content: list[Content] = Field(default_factory=list, description="Content blocks")
    name: str | None = Field(default=None, description="Author name")


class _BaseCompletionParams(ApiModel):
    """Sampling controls shared by text and multi-modal completions."""

    model: str | None = Field(default=None, description="Model id; client default when unset")
    stop: list[str] | None = Field(default=None, description="Stop sequences")
    stream: bool = Field(default=False, description="Streaming flag (rejected by ChatClient)")

    n: int | None = Field(default=None, description="Number of choices")
    top_p: float | None = Field(default=None, description="Nucleus sampling mass")
    temperature: float | None = Field(default=None, description="Sampling temperature")
    max_tokens: int | None = Field(default=None, description="Completion token limit")

    presence_penalty: float | None = Field(default=None)
    frequency_penalty: float | None = Field(default=None)

    user: str | None = Field(default=None, description="End-user identifier")

    def to_payload(self) -> dict[str, Any]:
        data = super().to_payload()
        if not self.stream:
            data.pop("stream", None)
        return data


class CompletionParams(_BaseCompletionParams):
    """Parameters for a text chat completion."""

    messages: list[Message] = Field(default_factory=list, description="Conversation so far")
    functions: list[Function] | None = Field(default=None, description="Callable functions")
    function_call: str | dict[str, str] | None = Field(
        default=None,
        description="'auto', 'none', or {'name': ...} to force a function",
    )


class MMCompletionParams(_BaseCompletionParams):
    """Parameters for a multi-modal chat completion."""

    messages: list[MMMessage] = Field(default_factory=list, description="Conversation so far")


class Choice(ApiModel):
    """One generated alternative."""

    message: Message | None = None
    index: int = 0
    logprobs: Any | None = None
    finish_reason: str | None = None


class CompletionResponse(ApiModel):
    """Response from a chat completion request.

    Attributes:
        id: Completion identifier
        object: Object tag, e.g. "chat.completion"
        created: Unix creation timestamp
        model: Model that generated the response
        choices: Generated alternatives, in index order
        usage: Token usage accounting
    """

    id: str | None = None
    object: str | None = None
    created: int | None = Field(
        default=None,
        validation_alias=AliasChoices("created", "created_at"),
    )
    model: str | None = None
    choices: list[Choice] = Field(default_factory=list)
    usage: Usage | None = None

    @property
    def first_content(self) -> str | None:
        """Text of the first choice, if any."""
        if not self.choices or self.choices[0].message is None:
            return None
        return self.choices[0].message.content

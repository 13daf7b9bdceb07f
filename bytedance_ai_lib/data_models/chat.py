"""
Data‑model definitions for the Ark chat completion endpoint.

The classes mirror the JSON schema of ``/api/v3/chat/completions`` – the
request body, the complete (non-streaming) response and the incremental
chunks emitted when ``stream`` is enabled.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import field_validator

from bytedance_ai_lib.data_models.base_model import WireModel


class Role(str, Enum):
    """Role of the author of a message."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class ChatCompletionFinishReason(str, Enum):
    """
    Reason why the model stopped generating tokens.

    * ``STOP`` – generation finished normally.
    * ``LENGTH`` – the maximum number of tokens was reached.
    * ``CONTENT_FILTER`` – generation was stopped by content moderation.
    """

    STOP = "stop"
    LENGTH = "length"
    CONTENT_FILTER = "content_filter"

    @classmethod
    def parse(cls, value: Any) -> Optional["ChatCompletionFinishReason"]:
        """
        Case-insensitive decoding; empty values decode to ``None``.

        Raises
        ------
        ValueError
            For any value that is not a known finish reason.
        """
        if value is None or isinstance(value, cls):
            return value
        if not isinstance(value, str) or not value:
            return None
        for reason in cls:
            if reason.value == value.lower():
                return reason
        raise ValueError(f"Unknown enum value: {value}")


class ImageUrl(WireModel):
    """
    Image part of a multi-modal message.

    ``url`` is either a public URL or a base64 data URL of the form
    ``data:{mimetype};base64,{data}``.
    """

    url: str
    detail: Optional[str] = None


class MediaContent(WireModel):
    """A single ``text`` or ``image_url`` part of a message content list."""

    type: str
    text: Optional[str] = None
    image_url: Optional[ImageUrl] = None

    @classmethod
    def of_text(cls, text: str) -> "MediaContent":
        return cls(type="text", text=text)

    @classmethod
    def of_image(cls, image_url: ImageUrl) -> "MediaContent":
        return cls(type="image_url", image_url=image_url)


def get_text_content(contents: List[MediaContent]) -> str:
    """Concatenate the text parts of a content list."""
    return "".join(c.text or "" for c in contents if c.type == "text")


class ChatCompletionMessage(WireModel):
    """
    A message of the conversation or of the model output.

    ``content`` is a plain string or a list of :class:`MediaContent`; response
    messages always carry a string.
    """

    content: Union[str, List[MediaContent], None] = None
    role: Optional[Role] = None

    def text(self) -> Optional[str]:
        """
        Return the content as a string.

        Raises
        ------
        ValueError
            When the content is a media list.
        """
        if self.content is None:
            return None
        if isinstance(self.content, str):
            return self.content
        raise ValueError("The content is not a string!")


class ChatCompletionStreamOption(WireModel):
    """
    When ``include_usage`` is set an extra chunk with the token usage of the
    whole request is sent right before ``data: [DONE]``.
    """

    include_usage: Optional[bool] = None


class ChatCompletionRequest(WireModel):
    """
    Request body of the chat completion endpoint.

    Attributes
    ----------
    messages : List[ChatCompletionMessage]
        Conversation so far, including the latest user message.
    model : Optional[str]
        Endpoint id of the model to call.
    frequency_penalty : Optional[float]
        Number between -2.0 and 2.0 penalising frequent tokens.
    logit_bias : Optional[Dict[str, int]]
        Token id → bias (-100..100) mapping.
    logprobs : Optional[bool]
        Whether to return log probabilities of the output tokens.
    top_logprobs : Optional[int]
        0..20, number of most likely tokens per position; requires ``logprobs``.
    max_tokens : Optional[int]
        Maximum number of generated tokens.
    stop : Optional[List[str]]
        Sequences that stop generation.
    stream : Optional[bool]
        Return the answer as server-sent events.
    stream_options : Optional[ChatCompletionStreamOption]
        Options for streamed responses.
    temperature : Optional[float]
        Sampling temperature, 0..2.
    top_p : Optional[float]
        Nucleus sampling probability mass.
    """

    messages: List[ChatCompletionMessage]
    model: Optional[str] = None
    frequency_penalty: Optional[float] = None
    logit_bias: Optional[Dict[str, int]] = None
    logprobs: Optional[bool] = None
    top_logprobs: Optional[int] = None
    max_tokens: Optional[int] = None
    stop: Optional[List[str]] = None
    stream: Optional[bool] = None
    stream_options: Optional[ChatCompletionStreamOption] = None
    temperature: Optional[float] = None
    top_p: Optional[float] = None


class TopLogProbs(WireModel):
    token: Optional[str] = None
    logprob: Optional[float] = None
    bytes: Optional[List[int]] = None


class LogProbsContent(WireModel):
    token: Optional[str] = None
    logprob: Optional[float] = None
    bytes: Optional[List[int]] = None
    top_logprobs: Optional[List[TopLogProbs]] = None


class LogProbs(WireModel):
    """Log probability information of one choice."""

    content: Optional[List[LogProbsContent]] = None


class Usage(WireModel):
    """Token usage of a completion request."""

    completion_tokens: Optional[int] = None
    prompt_tokens: Optional[int] = None
    total_tokens: Optional[int] = None


class _ChoiceBase(WireModel):
    finish_reason: Optional[ChatCompletionFinishReason] = None
    index: Optional[int] = None
    logprobs: Optional[LogProbs] = None

    @field_validator("finish_reason", mode="before")
    @classmethod
    def _parse_finish_reason(cls, value):
        return ChatCompletionFinishReason.parse(value)


class Choice(_ChoiceBase):
    """A choice of a complete chat completion."""

    message: Optional[ChatCompletionMessage] = None


class ChatCompletion(WireModel):
    """
    Response of a non-streaming chat completion call.

    ``object`` is ``chat.completion`` for complete responses and
    ``chat.completion.chunk`` for completions rebuilt from stream chunks.
    """

    id: Optional[str] = None
    choices: List[Choice] = []
    created: Optional[int] = None
    model: Optional[str] = None
    object: Optional[str] = None
    usage: Optional[Usage] = None


class ChunkChoice(_ChoiceBase):
    """A choice of a streamed chunk; ``delta`` holds the increment."""

    delta: Optional[ChatCompletionMessage] = None


class ChatCompletionChunk(WireModel):
    """
    One server-sent event of a streamed chat completion.

    All chunks of one call share the same ``id``; only the first one carries
    the role in its delta.  With ``include_usage`` the last chunk has an
    empty ``choices`` list and the usage of the whole request.
    """

    id: Optional[str] = None
    choices: List[ChunkChoice] = []
    created: Optional[int] = None
    model: Optional[str] = None
    usage: Optional[Usage] = None
    object: Optional[str] = None

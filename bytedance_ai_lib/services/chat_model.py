"""
Chat model facade over :class:`~bytedance_ai_lib.api.chat.ByteDanceChatApi`.

Converts prompts into chat completion requests (merging the per-call options
over the model defaults), runs them under the retry template and maps the
vendor answer back into :class:`~bytedance_ai_lib.core.response.ChatResponse`
objects.  Streaming answers are assembled chunk by chunk, see
:mod:`bytedance_ai_lib.core.stream_assembler`.
"""

import base64
import logging
from typing import Any, Dict, Iterator, List, Optional, Union

from bytedance_ai_lib.api.chat import ByteDanceChatApi
from bytedance_ai_lib.core.messages import Message, MessageType
from bytedance_ai_lib.core.options import ChatOptions
from bytedance_ai_lib.core.prompt import Prompt
from bytedance_ai_lib.core.response import (
    ChatGenerationMetadata,
    ChatResponse,
    Generation,
)
from bytedance_ai_lib.core.retry import RetryTemplate
from bytedance_ai_lib.core.stream_assembler import (
    StreamAssembler,
    chunk_to_chat_completion,
)
from bytedance_ai_lib.data_models.chat import (
    ChatCompletion,
    ChatCompletionMessage,
    ChatCompletionRequest,
    Choice,
    ImageUrl,
    MediaContent,
    Role,
)
from bytedance_ai_lib.data_models.options import ByteDanceChatOptions
from bytedance_ai_lib.exceptions import (
    InvalidArgumentError,
    UnsupportedOperationError,
)
from bytedance_ai_lib.metadata.chat import ByteDanceChatResponseMetadata
from bytedance_ai_lib.metadata.rate_limit import extract_rate_limit
from bytedance_ai_lib.services.service_interface import BaseModelServiceInterface

DEFAULT_CHAT_TEMPERATURE = 0.7


def from_media_data(mime_type: str, data: Union[bytes, str, Any]) -> str:
    """
    Return the URL sent for one media attachment.

    Bytes are assumed to be an image and become a base64 data URL; strings
    (public URLs or data URLs built by the caller) are sent unchanged.

    Raises
    ------
    InvalidArgumentError
        For any other type of ``data``.
    """
    if isinstance(data, (bytes, bytearray)):
        encoded = base64.b64encode(bytes(data)).decode("ascii")
        return f"data:{mime_type};base64,{encoded}"
    if isinstance(data, str):
        return data
    raise InvalidArgumentError(
        f"Unsupported media data type: {type(data).__name__}"
    )


class ByteDanceChatModel(BaseModelServiceInterface):
    """
    Synchronous and streaming chat model.

    Parameters
    ----------
    chat_api : ByteDanceChatApi
        Transport client.
    options : Optional[ChatOptions]
        Default options; temperature ``0.7`` when omitted.
    retry_template : Optional[RetryTemplate]
        Retry policy of the remote calls.
    logger : Optional[logging.Logger]
        Logger instance; if omitted, a module‑level logger is created.
    """

    options_cls = ByteDanceChatOptions
    runtime_options_cls = ChatOptions

    def __init__(
        self,
        chat_api: ByteDanceChatApi,
        options: Optional[ChatOptions] = None,
        retry_template: Optional[RetryTemplate] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        super().__init__(chat_api, options, retry_template, logger)

    @classmethod
    def initial_options(cls) -> ByteDanceChatOptions:
        return ByteDanceChatOptions(temperature=DEFAULT_CHAT_TEMPERATURE)

    def call(self, prompt: Prompt) -> ChatResponse:
        """
        Send ``prompt`` and wait for the complete answer.

        An empty response body is logged and returned as a response without
        generations.
        """
        request = self.create_request(prompt, stream=False)

        def _call() -> ChatResponse:
            entity = self.api.chat_completion_entity(request)
            completion = entity.body
            if completion is None:
                self.logger.warning(
                    "No chat completion returned for prompt: %s", prompt.contents
                )
                return ChatResponse(results=[])

            generations = [
                self._to_generation(completion.id, choice)
                for choice in completion.choices
            ]
            metadata = ByteDanceChatResponseMetadata.from_completion(
                completion
            ).with_rate_limit(extract_rate_limit(entity.headers))
            return ChatResponse(results=generations, metadata=metadata)

        return self.execute(_call)

    def stream(self, prompt: Prompt) -> Iterator[ChatResponse]:
        """
        Send ``prompt`` and return the answer as it is generated.

        Opening the stream is retried; once chunks flow, failures surface
        from the iterator.  Every chunk becomes one :class:`ChatResponse`
        whose generations carry the role announced by the first chunk of the
        same completion.
        """
        request = self.create_request(prompt, stream=True)
        chunks = self.execute(lambda: self.api.chat_completion_stream(request))

        assembler = StreamAssembler(
            is_function_call=self._is_tool_function_call,
            function_call_handler=lambda completions: self._handle_tool_call(
                request, completions
            ),
            logger=self.logger,
        )
        return assembler.assemble(chunk_to_chat_completion(c) for c in chunks)

    def create_request(self, prompt: Prompt, stream: bool) -> ChatCompletionRequest:
        """
        Build the vendor request of ``prompt``.

        Runtime options of the prompt win over the model defaults field by
        field.

        Raises
        ------
        InvalidArgumentError
            When the prompt options are not :class:`ChatOptions` or a media
            attachment has an unsupported data type.
        """
        messages = [self._to_completion_message(m) for m in prompt.instructions]
        options = self.merged_options(prompt.options)
        return ChatCompletionRequest(
            messages=messages,
            stream=stream,
            **options.model_dump(exclude_none=True),
        )

    @staticmethod
    def _to_completion_message(message: Message) -> ChatCompletionMessage:
        role = Role(message.message_type.value)
        if message.message_type == MessageType.USER and message.media:
            contents: List[MediaContent] = [MediaContent.of_text(message.content)]
            contents.extend(
                MediaContent.of_image(
                    ImageUrl(url=from_media_data(media.mime_type, media.data))
                )
                for media in message.media
            )
            return ChatCompletionMessage(content=contents, role=role)
        return ChatCompletionMessage(content=message.content, role=role)

    @staticmethod
    def _to_generation(completion_id: Optional[str], choice: Choice) -> Generation:
        properties: Dict[str, Any] = {"id": completion_id}
        message = choice.message
        if message is not None and message.role is not None:
            properties["role"] = message.role.value
        finish_reason = None
        if choice.finish_reason is not None:
            finish_reason = choice.finish_reason.value
            properties["finishReason"] = finish_reason

        content = message.text() if message is not None else None
        return Generation(
            output=Message.assistant(content, properties),
            metadata=ChatGenerationMetadata(finish_reason=finish_reason),
        )

    @staticmethod
    def _is_tool_function_call(completion: ChatCompletion) -> bool:
        # the Ark chat endpoint has no tool calling
        return False

    def _handle_tool_call(
        self, request: ChatCompletionRequest, completions: List[ChatCompletion]
    ) -> List[ChatCompletion]:
        history = list(request.messages)
        last = completions[-1].choices[0].message if completions[-1].choices else None
        self.create_tool_response_request(request, last, history)
        return completions

    def create_tool_response_request(
        self,
        previous_request: ChatCompletionRequest,
        response_message: Optional[ChatCompletionMessage],
        conversation_history: List[ChatCompletionMessage],
    ) -> ChatCompletionRequest:
        raise UnsupportedOperationError(
            "ByteDance does not support tool response requests"
        )

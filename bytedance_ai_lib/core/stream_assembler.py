"""
Folding streamed chat chunks into chat responses.

Only the first chunk of a streamed completion carries the speaker role; the
following chunks with the same id inherit it.  :class:`StreamAssembler`
keeps that id → role mapping for the lifetime of one stream and converts
every chunk into a :class:`~bytedance_ai_lib.core.response.ChatResponse` of
the same shape a non-streaming call produces.

Chunks that belong to a function-call sequence are held back and handed to a
handler once the sequence completes; whatever the handler returns re-enters
normal assembly.
"""

import logging
from typing import Callable, Dict, Iterable, Iterator, List, Optional

from bytedance_ai_lib.core.messages import Message
from bytedance_ai_lib.core.response import (
    ChatGenerationMetadata,
    ChatResponse,
    Generation,
)
from bytedance_ai_lib.data_models.chat import (
    ChatCompletion,
    ChatCompletionChunk,
    Choice,
)

FunctionCallPredicate = Callable[[ChatCompletion], bool]
FunctionCallHandler = Callable[[List[ChatCompletion]], Iterable[ChatCompletion]]


def chunk_to_chat_completion(chunk: ChatCompletionChunk) -> ChatCompletion:
    """Convert a chunk into a completion with one choice per chunk choice."""
    choices = [
        Choice(
            finish_reason=cc.finish_reason,
            index=cc.index,
            message=cc.delta,
            logprobs=cc.logprobs,
        )
        for cc in chunk.choices
    ]
    return ChatCompletion(
        id=chunk.id,
        choices=choices,
        created=chunk.created,
        model=chunk.model,
        object=chunk.object,
        usage=chunk.usage,
    )


class StreamAssembler:
    """
    Per-stream accumulator of speaker roles.

    Parameters
    ----------
    is_function_call : Optional[FunctionCallPredicate]
        Returns ``True`` for completions belonging to a function-call
        sequence.  ``None`` disables the detection.
    function_call_handler : Optional[FunctionCallHandler]
        Receives the buffered function-call completions and returns the
        completions to continue with.
    logger : Optional[logging.Logger]
        Logger instance; if omitted, a module‑level logger is created.
    """

    def __init__(
        self,
        is_function_call: Optional[FunctionCallPredicate] = None,
        function_call_handler: Optional[FunctionCallHandler] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.roles: Dict[str, str] = {}
        self._is_function_call = is_function_call
        self._function_call_handler = function_call_handler
        self.logger = logger or logging.getLogger(__name__)

    def role_of(self, completion_id: Optional[str]) -> Optional[str]:
        return self.roles.get(completion_id)

    def to_chat_response(self, completion: ChatCompletion) -> ChatResponse:
        """
        Convert one (chunk) completion, recording the first role per id.

        A failure while converting is logged and yields an empty response so
        a single malformed chunk does not end the stream.
        """
        try:
            completion_id = completion.id
            generations = []
            for choice in completion.choices:
                message = choice.message
                if message is not None and message.role is not None:
                    self.roles.setdefault(completion_id, message.role.value)

                finish = choice.finish_reason.value if choice.finish_reason else ""
                properties = {
                    "id": completion_id,
                    "role": self.roles.get(completion_id),
                    "finishReason": finish,
                }
                content = message.text() if message is not None else None
                generation = Generation(output=Message.assistant(content, properties))
                if choice.finish_reason is not None:
                    generation = Generation(
                        output=generation.output,
                        metadata=ChatGenerationMetadata(finish_reason=finish),
                    )
                generations.append(generation)
            return ChatResponse(results=generations)
        except Exception as exc:
            self.logger.error("Error processing chat completion: %s", exc)
            return ChatResponse(results=[])

    def assemble(
        self, completions: Iterable[ChatCompletion]
    ) -> Iterator[ChatResponse]:
        """
        Lazily convert a sequence of completions into chat responses.

        Termination is driven by ``completions``; the assembler never ends the
        stream on its own.
        """
        pending: List[ChatCompletion] = []
        for completion in completions:
            if self._in_function_call(completion):
                pending.append(completion)
                if self._closes_sequence(completion):
                    buffered, pending = pending, []
                    yield from self._flush(buffered)
                continue
            if pending:
                buffered, pending = pending, []
                yield from self._flush(buffered)
            yield self.to_chat_response(completion)

        if pending:
            yield from self._flush(pending)

    def _in_function_call(self, completion: ChatCompletion) -> bool:
        return self._is_function_call is not None and self._is_function_call(
            completion
        )

    @staticmethod
    def _closes_sequence(completion: ChatCompletion) -> bool:
        return any(c.finish_reason is not None for c in completion.choices)

    def _flush(self, buffered: List[ChatCompletion]) -> Iterator[ChatResponse]:
        if self._function_call_handler is None:
            for completion in buffered:
                yield self.to_chat_response(completion)
            return
        for completion in self._function_call_handler(buffered):
            yield self.to_chat_response(completion)

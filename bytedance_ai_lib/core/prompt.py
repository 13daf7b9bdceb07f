"""
Model requests: chat prompts, speech prompts and transcription prompts.

A prompt couples the model input (``instructions``) with optional runtime
options that override the model defaults for this call only.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, List, Optional, Sequence, Union

from bytedance_ai_lib.core.messages import Message
from bytedance_ai_lib.core.options import ModelOptions

AudioResource = Union[bytes, bytearray, str, Path, BinaryIO]


@dataclass(frozen=True, init=False)
class Prompt:
    """
    Chat prompt.

    ``instructions`` may be given as a single string (one user message), a
    single :class:`Message` or a sequence of messages.
    """

    instructions: List[Message]
    options: Optional[ModelOptions] = None

    def __init__(
        self,
        instructions: Union[str, Message, Sequence[Message]],
        options: Optional[ModelOptions] = None,
    ) -> None:
        if isinstance(instructions, str):
            messages = [Message.user(instructions)]
        elif isinstance(instructions, Message):
            messages = [instructions]
        else:
            messages = list(instructions)
        object.__setattr__(self, "instructions", messages)
        object.__setattr__(self, "options", options)

    @property
    def contents(self) -> str:
        return "".join(m.content or "" for m in self.instructions)


@dataclass(frozen=True)
class SpeechMessage:
    text: str


@dataclass(frozen=True)
class SpeechPrompt:
    instructions: SpeechMessage
    options: Optional[ModelOptions] = None

    @classmethod
    def of(cls, text: str, options: Optional[ModelOptions] = None) -> "SpeechPrompt":
        return cls(instructions=SpeechMessage(text), options=options)


@dataclass(frozen=True)
class AudioTranscriptionPrompt:
    """
    Transcription prompt; ``instructions`` is the audio to transcribe given
    as raw bytes, a file path or a binary file object.
    """

    instructions: AudioResource
    options: Optional[ModelOptions] = None

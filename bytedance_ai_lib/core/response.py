"""
Model responses returned by the chat, speech and transcription models.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional

from bytedance_ai_lib.core.messages import Message


@dataclass(frozen=True)
class ChatGenerationMetadata:
    finish_reason: Optional[str] = None
    content_filter_metadata: Any = None


NULL_GENERATION_METADATA = ChatGenerationMetadata()


@dataclass(frozen=True)
class Generation:
    """One generated message; ``output.properties`` carries id/role/finishReason."""

    output: Message
    metadata: ChatGenerationMetadata = NULL_GENERATION_METADATA


@dataclass(frozen=True)
class ChatResponse:
    results: List[Generation] = field(default_factory=list)
    metadata: Any = None

    @property
    def result(self) -> Optional[Generation]:
        return self.results[0] if self.results else None


@dataclass(frozen=True)
class Speech:
    output: bytes
    metadata: Any = None


@dataclass(frozen=True)
class SpeechResponse:
    result: Speech
    metadata: Any = None

    @property
    def results(self) -> List[Speech]:
        return [self.result]


@dataclass(frozen=True)
class AudioTranscription:
    output: Optional[str]
    metadata: Any = None


@dataclass(frozen=True)
class AudioTranscriptionResponse:
    result: AudioTranscription
    metadata: Any = None

    @property
    def results(self) -> List[AudioTranscription]:
        return [self.result]

from dataclasses import dataclass, replace
from typing import Optional

from bytedance_ai_lib.metadata.rate_limit import EMPTY_RATE_LIMIT, RateLimit


@dataclass(frozen=True)
class _AudioResponseMetadata:
    rate_limit: RateLimit = EMPTY_RATE_LIMIT

    def with_rate_limit(self, rate_limit: Optional[RateLimit]):
        return replace(self, rate_limit=rate_limit or EMPTY_RATE_LIMIT)

    def __str__(self) -> str:
        return f"{{ @type: {type(self).__name__}, rateLimit: {self.rate_limit} }}"


@dataclass(frozen=True)
class ByteDanceAudioSpeechResponseMetadata(_AudioResponseMetadata):
    """Rate limits of one speech synthesis call."""


@dataclass(frozen=True)
class ByteDanceAudioTranscriptionResponseMetadata(_AudioResponseMetadata):
    """Rate limits of one transcription call."""


NULL_SPEECH_METADATA = ByteDanceAudioSpeechResponseMetadata()
NULL_TRANSCRIPTION_METADATA = ByteDanceAudioTranscriptionResponseMetadata()

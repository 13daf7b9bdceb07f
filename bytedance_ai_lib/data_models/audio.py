"""
Data‑model definitions for the speech endpoints.

* Text-to-speech: :class:`SpeechRequest` and the JSON envelope
  :class:`SpeechApiResponse`.
* Speech-to-text: :class:`TranscriptionRequest`, :class:`TranslationRequest`
  and the structured result :class:`StructuredResponse`.  The shape of a
  transcription result depends on :class:`TranscriptResponseFormat`; each
  format knows how to decode its own body.
"""

import base64
import json
from enum import Enum
from typing import List, Optional, Union

from pydantic import field_validator, model_validator

from bytedance_ai_lib.constants import SPEECH_OPERATION_QUERY
from bytedance_ai_lib.data_models.base_model import WireModel


class AudioResponseFormat(str, Enum):
    """Encoding of synthesised audio."""

    WAV = "wav"
    PCM = "pcm"
    OGG_OPUS = "ogg_opus"
    MP3 = "mp3"


def _require_text(value: Optional[str], name: str) -> str:
    if value is None or not value.strip():
        raise ValueError(f"{name} must not be empty")
    return value


class SpeechApp(WireModel):
    """
    Application credentials of a speech request.

    ``token`` is not verified by the service but must be present; ``cluster``
    selects the TTS business cluster.
    """

    appid: str
    token: str = "access_token"
    cluster: str = "volcano_tts"


class SpeechUser(WireModel):
    uid: str


class SpeechAudio(WireModel):
    """
    Voice parameters.

    ``emotion`` defaults to an empty string; the service rejects ``null``.
    """

    voice_type: str
    encoding: Optional[str] = AudioResponseFormat.MP3.value
    compression_rate: Optional[int] = 1
    speed_ratio: Optional[float] = 1.0
    volume_ratio: Optional[float] = 1.0
    pitch_ratio: Optional[float] = 1.0
    emotion: Optional[str] = ""
    language: Optional[str] = None

    @field_validator("voice_type")
    @classmethod
    def _voice_type_not_blank(cls, value: str) -> str:
        return _require_text(value, "voice_type")


class SpeechRequestPayload(WireModel):
    """
    Text part of a speech request.

    ``reqid`` must be unique per request; ``operation`` is ``query`` for the
    one-shot HTTP call.
    """

    reqid: str
    text: str
    text_type: Optional[str] = "plain"
    silence_duration: Optional[int] = 125
    operation: Optional[str] = SPEECH_OPERATION_QUERY
    with_timestamp: Optional[str] = ""
    split_sentence: Optional[str] = ""
    pure_english_opt: Optional[str] = ""

    @field_validator("reqid", "text")
    @classmethod
    def _not_blank(cls, value: str, info) -> str:
        return _require_text(value, info.field_name)


class SpeechRequest(WireModel):
    """Request body of the TTS endpoint; every part is mandatory."""

    app: SpeechApp
    user: SpeechUser
    audio: SpeechAudio
    request: SpeechRequestPayload


class SpeechAddition(WireModel):
    duration: Optional[str] = None
    frontend: Optional[str] = None


class SpeechApiResponse(WireModel):
    """
    JSON envelope returned by the TTS endpoint.

    ``code`` is ``3000`` on success and ``data`` holds the base64 encoded
    audio.
    """

    reqid: Optional[str] = None
    code: Optional[int] = None
    message: Optional[str] = None
    sequence: Optional[int] = None
    data: Optional[str] = None
    addition: Optional[SpeechAddition] = None

    def audio_bytes(self) -> bytes:
        if not self.data:
            return b""
        return base64.b64decode(self.data)


class WhisperModel(str, Enum):
    WHISPER_1 = "whisper-1"


class GranularityType(str, Enum):
    """Timestamp granularity of a verbose transcription."""

    WORD = "word"
    SEGMENT = "segment"


class StructuredWord(WireModel):
    word: Optional[str] = None
    start: Optional[float] = None
    end: Optional[float] = None


class StructuredSegment(WireModel):
    id: Optional[int] = None
    seek: Optional[int] = None
    start: Optional[float] = None
    end: Optional[float] = None
    text: Optional[str] = None
    tokens: Optional[List[int]] = None
    temperature: Optional[float] = None
    avg_logprob: Optional[float] = None
    compression_ratio: Optional[float] = None
    no_speech_prob: Optional[float] = None


class StructuredResponse(WireModel):
    """Result of a transcription requested in ``json``/``verbose_json``."""

    language: Optional[str] = None
    duration: Optional[float] = None
    text: Optional[str] = None
    words: Optional[List[StructuredWord]] = None
    segments: Optional[List[StructuredSegment]] = None


class TranscriptResponseFormat(str, Enum):
    """
    Output format of a transcription or translation.

    ``json`` and ``verbose_json`` decode to :class:`StructuredResponse`, the
    other formats are returned as plain text.
    """

    JSON = "json"
    TEXT = "text"
    SRT = "srt"
    VERBOSE_JSON = "verbose_json"
    VTT = "vtt"

    def is_json_type(self) -> bool:
        return self in (
            TranscriptResponseFormat.JSON,
            TranscriptResponseFormat.VERBOSE_JSON,
        )

    @property
    def response_type(self) -> type:
        return StructuredResponse if self.is_json_type() else str

    def decode(self, body: Optional[str]) -> Union[StructuredResponse, str, None]:
        """Decode a raw response body into the type matching this format."""
        if body is None or body == "":
            return None
        if self.response_type is str:
            return body
        return StructuredResponse.model_validate(json.loads(body))


class TranscriptionRequest(WireModel):
    """
    Multipart request of the transcription endpoint.

    Raises
    ------
    ValueError
        When the model is blank, or a granularity is
        requested together with a non verbose-JSON response format.
    """

    file: bytes
    model: str = WhisperModel.WHISPER_1.value
    language: Optional[str] = None
    prompt: Optional[str] = None
    response_format: TranscriptResponseFormat = TranscriptResponseFormat.JSON
    temperature: Optional[float] = None
    granularity_type: Optional[GranularityType] = None

    @field_validator("model")
    @classmethod
    def _model_not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("model must not be empty")
        return value

    @model_validator(mode="after")
    def _granularity_needs_verbose_json(self) -> "TranscriptionRequest":
        if (
            self.granularity_type is not None
            and self.response_format != TranscriptResponseFormat.VERBOSE_JSON
        ):
            raise ValueError(
                "response_format must be set to verbose_json "
                "to use timestamp granularities."
            )
        return self


class TranslationRequest(WireModel):
    """Multipart request of the translation (speech → English text) endpoint."""

    file: bytes
    model: str = WhisperModel.WHISPER_1.value
    prompt: Optional[str] = None
    response_format: TranscriptResponseFormat = TranscriptResponseFormat.JSON
    temperature: Optional[float] = None

    @field_validator("model")
    @classmethod
    def _model_not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("model must not be empty")
        return value

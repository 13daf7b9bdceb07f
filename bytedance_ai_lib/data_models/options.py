"""
ByteDance specific option objects.

Each options class mirrors the request DTO of its endpoint with every field
optional, so that model defaults and per-call overrides can be combined with
:func:`bytedance_ai_lib.core.options_utils.merge` before the request is built.
"""

from typing import Dict, Optional

from bytedance_ai_lib.core.options import ChatOptions, ModelOptions
from bytedance_ai_lib.data_models.audio import (
    GranularityType,
    TranscriptResponseFormat,
)
from bytedance_ai_lib.data_models.chat import ChatCompletionStreamOption


class ByteDanceChatOptions(ChatOptions):
    """
    Chat request fields other than ``messages`` and ``stream``.

    ``model`` holds the Ark endpoint id (``ep-...``) of the deployed model.
    """

    logit_bias: Optional[Dict[str, int]] = None
    logprobs: Optional[bool] = None
    top_logprobs: Optional[int] = None
    stream_options: Optional[ChatCompletionStreamOption] = None


class SpeechAppOptions(ModelOptions):
    appid: Optional[str] = None
    token: Optional[str] = None
    cluster: Optional[str] = None


class SpeechUserOptions(ModelOptions):
    uid: Optional[str] = None


class SpeechAudioOptions(ModelOptions):
    voice_type: Optional[str] = None
    encoding: Optional[str] = None
    compression_rate: Optional[int] = None
    speed_ratio: Optional[float] = None
    volume_ratio: Optional[float] = None
    pitch_ratio: Optional[float] = None
    emotion: Optional[str] = None
    language: Optional[str] = None


class SpeechRequestOptions(ModelOptions):
    """
    Text options of a speech request.

    ``reqid`` and ``text`` are normally left unset: the speech model then
    generates a fresh id and takes the text from the prompt.
    """

    reqid: Optional[str] = None
    text: Optional[str] = None
    text_type: Optional[str] = None
    silence_duration: Optional[int] = None
    operation: Optional[str] = None
    with_timestamp: Optional[str] = None
    split_sentence: Optional[str] = None
    pure_english_opt: Optional[str] = None


class ByteDanceAudioSpeechOptions(ModelOptions):
    """
    Options of the speech model.

    Attributes
    ----------
    app : Optional[SpeechAppOptions]
        Application id, token and cluster.
    user : Optional[SpeechUserOptions]
        End user id.
    audio : Optional[SpeechAudioOptions]
        Voice, encoding and prosody.
    request : Optional[SpeechRequestOptions]
        Text handling.
    """

    app: Optional[SpeechAppOptions] = None
    user: Optional[SpeechUserOptions] = None
    audio: Optional[SpeechAudioOptions] = None
    request: Optional[SpeechRequestOptions] = None


class ByteDanceAudioTranscriptionOptions(ModelOptions):
    model: Optional[str] = None
    response_format: Optional[TranscriptResponseFormat] = None
    prompt: Optional[str] = None
    language: Optional[str] = None
    temperature: Optional[float] = None
    granularity_type: Optional[GranularityType] = None

"""
Speech-to-text facade over :class:`~bytedance_ai_lib.api.audio.ByteDanceAudioApi`.
"""

import logging
from pathlib import Path
from typing import Optional

from bytedance_ai_lib.api.audio import ByteDanceAudioApi
from bytedance_ai_lib.core.prompt import AudioResource, AudioTranscriptionPrompt
from bytedance_ai_lib.core.response import (
    AudioTranscription,
    AudioTranscriptionResponse,
)
from bytedance_ai_lib.core.retry import RetryTemplate
from bytedance_ai_lib.data_models.audio import (
    StructuredResponse,
    TranscriptionRequest,
    TranscriptResponseFormat,
    WhisperModel,
)
from bytedance_ai_lib.data_models.options import ByteDanceAudioTranscriptionOptions
from bytedance_ai_lib.exceptions import InvalidArgumentError
from bytedance_ai_lib.metadata.audio import NULL_TRANSCRIPTION_METADATA
from bytedance_ai_lib.metadata.rate_limit import extract_rate_limit
from bytedance_ai_lib.services.service_interface import BaseModelServiceInterface

DEFAULT_TRANSCRIPTION_TEMPERATURE = 0.7


def read_audio(resource: AudioResource) -> bytes:
    """
    Return the bytes of an audio resource.

    Parameters
    ----------
    resource : AudioResource
        Raw bytes, a path (``str`` or :class:`pathlib.Path`) or a binary file
        object.

    Raises
    ------
    InvalidArgumentError
        When the resource cannot be read.
    """
    if isinstance(resource, (bytes, bytearray)):
        return bytes(resource)
    try:
        if isinstance(resource, (str, Path)):
            return Path(resource).read_bytes()
        if hasattr(resource, "read"):
            data = resource.read()
            if isinstance(data, (bytes, bytearray)):
                return bytes(data)
    except OSError as exc:
        raise InvalidArgumentError(f"Failed to read audio resource: {exc}") from exc
    raise InvalidArgumentError(
        f"Unsupported audio resource: {type(resource).__name__}"
    )


class ByteDanceAudioTranscriptionModel(BaseModelServiceInterface):
    """
    Transcription model.

    Parameters
    ----------
    audio_api : ByteDanceAudioApi
        Transport client.
    options : Optional[ByteDanceAudioTranscriptionOptions]
        Default options; ``whisper-1``, ``json`` and temperature ``0.7`` when
        omitted.
    retry_template : Optional[RetryTemplate]
        Retry policy of the remote calls.
    logger : Optional[logging.Logger]
        Logger instance; if omitted, a module‑level logger is created.
    """

    options_cls = ByteDanceAudioTranscriptionOptions
    runtime_options_cls = ByteDanceAudioTranscriptionOptions

    def __init__(
        self,
        audio_api: ByteDanceAudioApi,
        options: Optional[ByteDanceAudioTranscriptionOptions] = None,
        retry_template: Optional[RetryTemplate] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        super().__init__(audio_api, options, retry_template, logger)

    @classmethod
    def initial_options(cls) -> ByteDanceAudioTranscriptionOptions:
        return ByteDanceAudioTranscriptionOptions(
            model=WhisperModel.WHISPER_1.value,
            response_format=TranscriptResponseFormat.JSON,
            temperature=DEFAULT_TRANSCRIPTION_TEMPERATURE,
        )

    def call_bytes(self, audio: AudioResource) -> Optional[str]:
        """Transcribe ``audio`` with the default options and return the text."""
        return self.call(AudioTranscriptionPrompt(audio)).result.output

    def call(self, prompt: AudioTranscriptionPrompt) -> AudioTranscriptionResponse:
        """
        Transcribe the prompt audio.

        JSON formats return the ``text`` of the structured answer, text
        formats (``text``, ``srt``, ``vtt``) the raw body.
        """
        request = self.create_request_body(prompt)

        def _call() -> AudioTranscriptionResponse:
            entity = self.api.create_transcription(request)
            metadata = NULL_TRANSCRIPTION_METADATA.with_rate_limit(
                extract_rate_limit(entity.headers)
            )
            body = entity.body
            if body is None:
                self.logger.warning(
                    "No transcription returned for request with format %s",
                    request.response_format.value,
                )
                return AudioTranscriptionResponse(AudioTranscription(None), metadata)

            text = body.text if isinstance(body, StructuredResponse) else body
            return AudioTranscriptionResponse(
                AudioTranscription(text, metadata), metadata
            )

        return self.execute(_call)

    def create_request_body(
        self, prompt: AudioTranscriptionPrompt
    ) -> TranscriptionRequest:
        """
        Build the multipart request of ``prompt``.

        Raises
        ------
        InvalidArgumentError
            For options of the wrong type or unreadable audio.
        ValueError
            When a granularity is combined with a non verbose-JSON format.
        """
        options = self.merged_options(prompt.options)
        return TranscriptionRequest(
            file=read_audio(prompt.instructions),
            **options.model_dump(exclude_none=True),
        )

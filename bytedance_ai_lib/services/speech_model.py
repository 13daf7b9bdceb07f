"""
Text-to-speech facade over :class:`~bytedance_ai_lib.api.audio.ByteDanceAudioApi`.
"""

import logging
import uuid
from typing import Iterator, Optional

from bytedance_ai_lib.api.audio import ByteDanceAudioApi
from bytedance_ai_lib.constants import (
    SPEECH_OPERATION_QUERY,
    SPEECH_OPERATION_SUBMIT,
    SPEECH_SUCCESS_CODE,
    SPEECH_TRANSIENT_CODES,
)
from bytedance_ai_lib.core.prompt import SpeechPrompt
from bytedance_ai_lib.core.response import Speech, SpeechResponse
from bytedance_ai_lib.core.retry import RetryTemplate
from bytedance_ai_lib.data_models.audio import (
    SpeechApiResponse,
    SpeechApp,
    SpeechAudio,
    SpeechRequest,
    SpeechRequestPayload,
    SpeechUser,
)
from bytedance_ai_lib.data_models.options import (
    ByteDanceAudioSpeechOptions,
    SpeechRequestOptions,
)
from bytedance_ai_lib.exceptions import (
    InvalidArgumentError,
    NonTransientApiError,
    TransientApiError,
)
from bytedance_ai_lib.metadata.audio import NULL_SPEECH_METADATA
from bytedance_ai_lib.metadata.rate_limit import extract_rate_limit
from bytedance_ai_lib.services.service_interface import BaseModelServiceInterface


def new_request_id() -> str:
    return uuid.uuid4().hex


class ByteDanceAudioSpeechModel(BaseModelServiceInterface):
    """
    Speech synthesis model.

    Parameters
    ----------
    audio_api : ByteDanceAudioApi
        Transport client.
    options : Optional[ByteDanceAudioSpeechOptions]
        Default options; must provide at least ``app.appid``, ``user.uid``
        and ``audio.voice_type`` unless every prompt does.
    retry_template : Optional[RetryTemplate]
        Retry policy of the remote calls.
    logger : Optional[logging.Logger]
        Logger instance; if omitted, a module‑level logger is created.
    """

    options_cls = ByteDanceAudioSpeechOptions
    runtime_options_cls = ByteDanceAudioSpeechOptions

    def __init__(
        self,
        audio_api: ByteDanceAudioApi,
        options: Optional[ByteDanceAudioSpeechOptions] = None,
        retry_template: Optional[RetryTemplate] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        super().__init__(audio_api, options, retry_template, logger)

    def call_text(self, text: str) -> bytes:
        """Synthesise ``text`` with the default options and return the audio."""
        return self.call(SpeechPrompt.of(text)).result.output

    def call(self, speech_prompt: SpeechPrompt) -> SpeechResponse:
        """
        Synthesise the prompt text.

        Raises
        ------
        TransientApiError
            When the service reports it is busy or timed out; retried.
        NonTransientApiError
            For any other non-success service code.
        """
        request = self.create_request(speech_prompt)

        def _call() -> SpeechResponse:
            entity = self.api.create_speech(request)
            body = entity.body
            if body is None:
                self.logger.warning(
                    "No speech response returned for request: %s",
                    request.request.reqid,
                )
                return SpeechResponse(Speech(b""))

            self._check_code(body)
            audio = body.audio_bytes()
            if not audio:
                self.logger.warning(
                    "Empty audio returned for request: %s", request.request.reqid
                )
            metadata = NULL_SPEECH_METADATA.with_rate_limit(
                extract_rate_limit(entity.headers)
            )
            return SpeechResponse(Speech(audio, metadata), metadata)

        return self.execute(_call)

    def stream(self, speech_prompt: SpeechPrompt) -> Iterator[SpeechResponse]:
        """
        Synthesise the prompt text and yield the audio chunk by chunk.

        The request operation defaults to ``submit``.  Opening the connection
        is retried; the iterator is lazy.
        """
        request = self.create_request(speech_prompt, SPEECH_OPERATION_SUBMIT)
        entities = self.execute(lambda: self.api.stream(request))
        return (
            SpeechResponse(
                Speech(entity.body),
                NULL_SPEECH_METADATA.with_rate_limit(
                    extract_rate_limit(entity.headers)
                ),
            )
            for entity in entities
        )

    def create_request(
        self,
        speech_prompt: SpeechPrompt,
        operation: str = SPEECH_OPERATION_QUERY,
    ) -> SpeechRequest:
        """
        Build the vendor request of ``speech_prompt``.

        A request id or text not supplied by the options is generated (a
        random hex id) or taken from the prompt text.  ``operation`` is used
        unless the options set one.

        Raises
        ------
        InvalidArgumentError
            When the prompt options have the wrong type or the merged options
            lack the application id, user id or voice.
        """
        options = self.merged_options(speech_prompt.options)
        if options.app is None or not options.app.appid:
            raise InvalidArgumentError("Speech options must provide app.appid")
        if options.user is None or not options.user.uid:
            raise InvalidArgumentError("Speech options must provide user.uid")
        if options.audio is None or not options.audio.voice_type:
            raise InvalidArgumentError("Speech options must provide audio.voice_type")

        text_options = options.request or SpeechRequestOptions()
        payload = text_options.model_dump(exclude_none=True)
        if not (text_options.reqid or "").strip():
            payload["reqid"] = new_request_id()
        if not (text_options.text or "").strip():
            payload["text"] = speech_prompt.instructions.text
        if not (text_options.operation or "").strip():
            payload["operation"] = operation

        return SpeechRequest(
            app=SpeechApp(**options.app.model_dump(exclude_none=True)),
            user=SpeechUser(**options.user.model_dump(exclude_none=True)),
            audio=SpeechAudio(**options.audio.model_dump(exclude_none=True)),
            request=SpeechRequestPayload(**payload),
        )

    def _check_code(self, body: SpeechApiResponse) -> None:
        if body.code is None or body.code == SPEECH_SUCCESS_CODE:
            return
        message = f"Speech synthesis failed with code {body.code}: {body.message}"
        if body.code in SPEECH_TRANSIENT_CODES:
            raise TransientApiError(message)
        raise NonTransientApiError(message)

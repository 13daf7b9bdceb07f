"""
Client of the speech endpoints: text-to-speech, streamed text-to-speech,
transcription and translation.

See https://www.volcengine.com/docs/6561/79820 for the service description.
"""

import logging
from typing import Any, Dict, Iterator, Optional, Union

import requests

from bytedance_ai_lib.api.entity import ResponseEntity
from bytedance_ai_lib.constants import (
    DEFAULT_AUDIO_FILE_NAME,
    DEFAULT_SPEECH_BASE_URL,
    DEFAULT_TIMEOUT,
    SPEECH_PATH,
    SPEECH_STREAM_PATH,
    TRANSCRIPTIONS_PATH,
    TRANSLATIONS_PATH,
)
from bytedance_ai_lib.data_models.audio import (
    SpeechApiResponse,
    SpeechRequest,
    StructuredResponse,
    TranscriptionRequest,
    TranscriptResponseFormat,
    TranslationRequest,
)
from bytedance_ai_lib.exceptions import InvalidArgumentError
from bytedance_ai_lib.utils.http import HttpRequester

TranscriptBody = Union[StructuredResponse, str]

_STREAM_CHUNK_SIZE = 8192


class ByteDanceAudioApi:
    """
    Speech client.

    Parameters
    ----------
    api_key : str
        Speech service access token sent as bearer token.
    base_url : str, default ``DEFAULT_SPEECH_BASE_URL``
        Base URL of the speech service.
    timeout : int, default ``DEFAULT_TIMEOUT``
        Per-request timeout in seconds.
    http : Optional[HttpRequester]
        Pre-built requester; built from the other arguments when omitted.
    logger : Optional[logging.Logger]
        Logger instance; if omitted, a module‑level logger is created.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_SPEECH_BASE_URL,
        timeout: int = DEFAULT_TIMEOUT,
        http: Optional[HttpRequester] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.logger = logger or logging.getLogger(__name__)
        self.http = http or HttpRequester(
            base_url=base_url,
            token=api_key,
            timeout=timeout,
            logger=self.logger,
        )

    def refresh_api_key(self, new_api_key: str) -> None:
        self.http.refresh_token(new_api_key)

    def create_speech(
        self, request: SpeechRequest
    ) -> ResponseEntity[SpeechApiResponse]:
        """
        Synthesise ``request`` in one call.

        The returned envelope carries the service status ``code`` and the
        base64 encoded audio; checking the code is up to the caller.
        """
        if request is None:
            raise InvalidArgumentError("The request body can not be null.")
        resp = self.http.post(SPEECH_PATH, json=request.to_payload())
        body = None
        if resp.content:
            body = SpeechApiResponse.model_validate_json(resp.content)
        return ResponseEntity.of(resp, body)

    def stream(self, request: SpeechRequest) -> Iterator[ResponseEntity[bytes]]:
        """
        Synthesise ``request`` and yield the audio as it arrives.

        Every element carries one binary chunk together with the headers of
        the response.  The connection is opened by this call.
        """
        if request is None:
            raise InvalidArgumentError("The request body can not be null.")
        resp = self.http.post_stream(
            SPEECH_STREAM_PATH,
            json=request.to_payload(),
            headers={"Accept": "application/octet-stream"},
        )
        return self._iter_audio(resp)

    @staticmethod
    def _iter_audio(resp: requests.Response) -> Iterator[ResponseEntity[bytes]]:
        with resp as r:
            headers = r.headers
            for chunk in r.iter_content(chunk_size=_STREAM_CHUNK_SIZE):
                if chunk:
                    yield ResponseEntity.ok(chunk, headers)

    def create_transcription(
        self,
        request: TranscriptionRequest,
        response_type: Optional[type] = None,
    ) -> ResponseEntity[TranscriptBody]:
        """
        Transcribe audio into the language it is spoken in.

        Parameters
        ----------
        request : TranscriptionRequest
            The multipart request.
        response_type : Optional[type]
            ``StructuredResponse`` or ``str``; derived from
            ``request.response_format`` when omitted.

        Raises
        ------
        InvalidArgumentError
            When a timestamp granularity is combined with a format other than
            ``verbose_json``.
        """
        if request is None:
            raise InvalidArgumentError("The request body can not be null.")

        fields: Dict[str, Any] = {
            "model": request.model,
            "language": request.language,
            "prompt": request.prompt,
            "response_format": request.response_format.value,
            "temperature": request.temperature,
        }
        if request.granularity_type is not None:
            if request.response_format != TranscriptResponseFormat.VERBOSE_JSON:
                raise InvalidArgumentError(
                    "response_format must be set to verbose_json "
                    "to use timestamp granularities."
                )
            fields["timestamp_granularities[]"] = request.granularity_type.value

        resp = self._post_multipart(TRANSCRIPTIONS_PATH, request.file, fields)
        return ResponseEntity.of(
            resp, self._decode(resp, request.response_format, response_type)
        )

    def create_translation(
        self,
        request: TranslationRequest,
        response_type: Optional[type] = None,
    ) -> ResponseEntity[TranscriptBody]:
        """Translate audio into English text."""
        if request is None:
            raise InvalidArgumentError("The request body can not be null.")

        fields: Dict[str, Any] = {
            "model": request.model,
            "prompt": request.prompt,
            "response_format": request.response_format.value,
            "temperature": request.temperature,
        }
        resp = self._post_multipart(TRANSLATIONS_PATH, request.file, fields)
        return ResponseEntity.of(
            resp, self._decode(resp, request.response_format, response_type)
        )

    def _post_multipart(
        self, path: str, audio: bytes, fields: Dict[str, Any]
    ) -> requests.Response:
        data = {k: str(v) for k, v in fields.items() if v is not None}
        files = {"file": (DEFAULT_AUDIO_FILE_NAME, audio)}
        return self.http.post(path, data=data, files=files)

    @staticmethod
    def _decode(
        resp: requests.Response,
        response_format: TranscriptResponseFormat,
        response_type: Optional[type],
    ) -> Optional[TranscriptBody]:
        if not resp.content:
            return None
        # The service omits the charset of text formats; bodies are UTF-8.
        body = resp.content.decode("utf-8")
        if response_type is None:
            return response_format.decode(body)
        if response_type is str:
            return body
        return StructuredResponse.model_validate_json(body)

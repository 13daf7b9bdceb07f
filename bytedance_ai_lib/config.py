"""
Environment based wiring of the API clients and models.

Example
-------
>>> settings = ByteDanceSettings.from_env()
>>> model = settings.chat_model()
>>> model.call(Prompt("Tell me a joke")).result.output.content
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from bytedance_ai_lib.api.audio import ByteDanceAudioApi
from bytedance_ai_lib.api.chat import ByteDanceChatApi
from bytedance_ai_lib.constants import (
    DEFAULT_CHAT_BASE_URL,
    DEFAULT_LOG_LEVEL,
    DEFAULT_SPEECH_BASE_URL,
    DEFAULT_TIMEOUT,
    ENV_API_KEY,
    ENV_LOG_LEVEL,
    ENV_MODEL_END_POINT,
    ENV_SPEECH_API_KEY,
    ENV_SPEECH_APP_ID,
    _DontChangeMe,
)
from bytedance_ai_lib.core.options_utils import merge
from bytedance_ai_lib.core.retry import RetryTemplate
from bytedance_ai_lib.data_models.options import (
    ByteDanceAudioSpeechOptions,
    ByteDanceAudioTranscriptionOptions,
    ByteDanceChatOptions,
    SpeechAppOptions,
)
from bytedance_ai_lib.exceptions import InvalidArgumentError
from bytedance_ai_lib.services.chat_model import (
    DEFAULT_CHAT_TEMPERATURE,
    ByteDanceChatModel,
)
from bytedance_ai_lib.services.speech_model import ByteDanceAudioSpeechModel
from bytedance_ai_lib.services.transcription_model import (
    ByteDanceAudioTranscriptionModel,
)
from bytedance_ai_lib.utils.logger import prepare_logger


@dataclass(frozen=True)
class ByteDanceSettings:
    """
    Credentials and endpoints of one deployment.

    Any value may be ``None``; the factory method needing it raises
    :class:`InvalidArgumentError` naming the missing environment variable.
    """

    api_key: Optional[str] = None
    speech_api_key: Optional[str] = None
    speech_app_id: Optional[str] = None
    model_end_point: Optional[str] = None
    chat_base_url: str = DEFAULT_CHAT_BASE_URL
    speech_base_url: str = DEFAULT_SPEECH_BASE_URL
    timeout: int = DEFAULT_TIMEOUT
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(
        cls, environ: Optional[Mapping[str, str]] = None
    ) -> "ByteDanceSettings":
        """Read the settings from ``environ`` (``os.environ`` by default)."""
        env = os.environ if environ is None else environ
        prefix = _DontChangeMe.MAIN_ENV_PREFIX

        def _get(name: str) -> Optional[str]:
            value = env.get(name)
            if value is None or not value.strip():
                return None
            return value.strip()

        timeout = _get(f"{prefix}TIMEOUT")
        return cls(
            api_key=_get(ENV_API_KEY),
            speech_api_key=_get(ENV_SPEECH_API_KEY),
            speech_app_id=_get(ENV_SPEECH_APP_ID),
            model_end_point=_get(ENV_MODEL_END_POINT),
            chat_base_url=_get(f"{prefix}CHAT_BASE_URL") or DEFAULT_CHAT_BASE_URL,
            speech_base_url=_get(f"{prefix}SPEECH_BASE_URL")
            or DEFAULT_SPEECH_BASE_URL,
            timeout=int(timeout) if timeout else DEFAULT_TIMEOUT,
            log_level=_get(ENV_LOG_LEVEL) or DEFAULT_LOG_LEVEL,
        )

    @staticmethod
    def _require(value: Optional[str], env_name: str) -> str:
        if not value:
            raise InvalidArgumentError(f"Environment variable {env_name} is not set")
        return value

    def logger(self, name: str = "bytedance_ai_lib") -> logging.Logger:
        return prepare_logger(name, self.log_level)

    def chat_api(self) -> ByteDanceChatApi:
        return ByteDanceChatApi(
            api_key=self._require(self.api_key, ENV_API_KEY),
            base_url=self.chat_base_url,
            timeout=self.timeout,
            logger=self.logger(),
        )

    def audio_api(self) -> ByteDanceAudioApi:
        return ByteDanceAudioApi(
            api_key=self._require(self.speech_api_key, ENV_SPEECH_API_KEY),
            base_url=self.speech_base_url,
            timeout=self.timeout,
            logger=self.logger(),
        )

    def chat_model(
        self, retry_template: Optional[RetryTemplate] = None
    ) -> ByteDanceChatModel:
        """Chat model calling the endpoint named by ``MODEL_END_POINT``."""
        options = ByteDanceChatOptions(
            model=self._require(self.model_end_point, ENV_MODEL_END_POINT),
            temperature=DEFAULT_CHAT_TEMPERATURE,
        )
        return ByteDanceChatModel(
            self.chat_api(), options, retry_template, logger=self.logger()
        )

    def speech_model(
        self,
        options: Optional[ByteDanceAudioSpeechOptions] = None,
        retry_template: Optional[RetryTemplate] = None,
    ) -> ByteDanceAudioSpeechModel:
        """
        Speech model bound to ``BYTE_DANCE_SPEECH_APP_ID``.

        ``options`` typically carry the user id and voice; the application id
        is added from the environment when they do not set one.
        """
        app_defaults = ByteDanceAudioSpeechOptions(
            app=SpeechAppOptions(
                appid=self._require(self.speech_app_id, ENV_SPEECH_APP_ID)
            )
        )
        options = merge(options, app_defaults, ByteDanceAudioSpeechOptions)
        return ByteDanceAudioSpeechModel(
            self.audio_api(), options, retry_template, logger=self.logger()
        )

    def transcription_model(
        self,
        options: Optional[ByteDanceAudioTranscriptionOptions] = None,
        retry_template: Optional[RetryTemplate] = None,
    ) -> ByteDanceAudioTranscriptionModel:
        return ByteDanceAudioTranscriptionModel(
            self.audio_api(), options, retry_template, logger=self.logger()
        )

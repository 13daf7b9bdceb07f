"""
Unit tests for the environment based settings.
"""

import pytest

from bytedance_ai_lib.api.audio import ByteDanceAudioApi
from bytedance_ai_lib.api.chat import ByteDanceChatApi
from bytedance_ai_lib.config import ByteDanceSettings
from bytedance_ai_lib.constants import DEFAULT_CHAT_BASE_URL, DEFAULT_TIMEOUT
from bytedance_ai_lib.data_models.options import (
    ByteDanceAudioSpeechOptions,
    SpeechAppOptions,
    SpeechUserOptions,
)
from bytedance_ai_lib.exceptions import InvalidArgumentError
from bytedance_ai_lib.services.chat_model import ByteDanceChatModel

FULL_ENV = {
    "BYTE_DANCE_API_KEY": "ark-key",
    "BYTE_DANCE_SPEECH_API_KEY": "speech-token",
    "BYTE_DANCE_SPEECH_APP_ID": "app-1",
    "MODEL_END_POINT": "ep-20240601",
    "BYTE_DANCE_SPEECH_BASE_URL": "https://speech.example.test/",
    "BYTE_DANCE_TIMEOUT": "15",
    "BYTE_DANCE_LOG_LEVEL": "debug",
}


class TestFromEnv:
    """Reading the environment."""

    def test_all_values(self):
        settings = ByteDanceSettings.from_env(FULL_ENV)
        assert settings.api_key == "ark-key"
        assert settings.speech_api_key == "speech-token"
        assert settings.speech_app_id == "app-1"
        assert settings.model_end_point == "ep-20240601"
        assert settings.chat_base_url == DEFAULT_CHAT_BASE_URL
        assert settings.speech_base_url == "https://speech.example.test/"
        assert settings.timeout == 15
        assert settings.log_level == "debug"

    def test_blank_values_are_missing(self):
        settings = ByteDanceSettings.from_env({"BYTE_DANCE_API_KEY": "  "})
        assert settings.api_key is None
        assert settings.timeout == DEFAULT_TIMEOUT

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("BYTE_DANCE_API_KEY", "from-os")
        assert ByteDanceSettings.from_env().api_key == "from-os"


class TestFactories:
    """Clients and models built from the settings."""

    def test_chat_api(self):
        api = ByteDanceSettings.from_env(FULL_ENV).chat_api()
        assert isinstance(api, ByteDanceChatApi)
        assert api.http.session.headers["Authorization"] == "Bearer ark-key"
        assert api.http.timeout == 15

    def test_audio_api(self):
        api = ByteDanceSettings.from_env(FULL_ENV).audio_api()
        assert isinstance(api, ByteDanceAudioApi)
        assert api.http.base_url == "https://speech.example.test"
        assert api.http.session.headers["Authorization"] == "Bearer speech-token"

    def test_chat_model_uses_endpoint(self):
        model = ByteDanceSettings.from_env(FULL_ENV).chat_model()
        assert isinstance(model, ByteDanceChatModel)
        assert model.default_options.model == "ep-20240601"
        assert model.default_options.temperature == 0.7

    def test_speech_model_adds_app_id(self):
        model = ByteDanceSettings.from_env(FULL_ENV).speech_model(
            ByteDanceAudioSpeechOptions(
                app=SpeechAppOptions(cluster="volcano_mega"),
                user=SpeechUserOptions(uid="u1"),
            )
        )
        options = model.default_options
        assert options.app.appid == "app-1"
        assert options.app.cluster == "volcano_mega"
        assert options.user.uid == "u1"

    def test_transcription_model_defaults(self):
        model = ByteDanceSettings.from_env(FULL_ENV).transcription_model()
        assert model.default_options.model == "whisper-1"

    @pytest.mark.parametrize(
        "missing, factory",
        [
            ("BYTE_DANCE_API_KEY", "chat_api"),
            ("MODEL_END_POINT", "chat_model"),
            ("BYTE_DANCE_SPEECH_API_KEY", "audio_api"),
            ("BYTE_DANCE_SPEECH_APP_ID", "speech_model"),
        ],
    )
    def test_missing_variable_is_named(self, missing, factory):
        env = {k: v for k, v in FULL_ENV.items() if k != missing}
        settings = ByteDanceSettings.from_env(env)
        with pytest.raises(InvalidArgumentError, match=missing):
            getattr(settings, factory)()

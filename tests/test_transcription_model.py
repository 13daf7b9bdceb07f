"""
Unit tests for the transcription model.
"""

import io
from unittest.mock import Mock

import pytest
from requests.structures import CaseInsensitiveDict

from bytedance_ai_lib.api.audio import ByteDanceAudioApi
from bytedance_ai_lib.api.entity import ResponseEntity
from bytedance_ai_lib.core.prompt import AudioTranscriptionPrompt
from bytedance_ai_lib.data_models.audio import (
    GranularityType,
    StructuredResponse,
    TranscriptResponseFormat,
)
from bytedance_ai_lib.data_models.options import (
    ByteDanceAudioSpeechOptions,
    ByteDanceAudioTranscriptionOptions,
)
from bytedance_ai_lib.exceptions import InvalidArgumentError
from bytedance_ai_lib.metadata.audio import (
    ByteDanceAudioTranscriptionResponseMetadata,
)
from bytedance_ai_lib.services.transcription_model import (
    ByteDanceAudioTranscriptionModel,
    read_audio,
)


@pytest.fixture
def api():
    return Mock(spec=ByteDanceAudioApi)


@pytest.fixture
def model(api, retry_template):
    return ByteDanceAudioTranscriptionModel(api, retry_template=retry_template)


class TestReadAudio:
    """Audio resources accepted by the prompt."""

    def test_bytes(self):
        assert read_audio(b"abc") == b"abc"
        assert read_audio(bytearray(b"abc")) == b"abc"

    def test_path(self, tmp_path):
        audio = tmp_path / "speech.flac"
        audio.write_bytes(b"fLaC")
        assert read_audio(audio) == b"fLaC"
        assert read_audio(str(audio)) == b"fLaC"

    def test_file_object(self):
        assert read_audio(io.BytesIO(b"RIFF")) == b"RIFF"

    def test_missing_file(self, tmp_path):
        with pytest.raises(InvalidArgumentError):
            read_audio(tmp_path / "missing.flac")

    @pytest.mark.parametrize("resource", [42, io.StringIO("text")])
    def test_unsupported_resource(self, resource):
        with pytest.raises(InvalidArgumentError):
            read_audio(resource)


class TestCreateRequestBody:
    """Defaults, option merge and validation."""

    def test_defaults(self, model):
        request = model.create_request_body(AudioTranscriptionPrompt(b"fLaC"))
        assert request.file == b"fLaC"
        assert request.model == "whisper-1"
        assert request.response_format == TranscriptResponseFormat.JSON
        assert request.temperature == 0.7
        assert request.granularity_type is None

    def test_runtime_options(self, model):
        options = ByteDanceAudioTranscriptionOptions(
            response_format=TranscriptResponseFormat.VERBOSE_JSON,
            granularity_type=GranularityType.SEGMENT,
            language="zh",
        )
        request = model.create_request_body(AudioTranscriptionPrompt(b"x", options))
        assert request.response_format == TranscriptResponseFormat.VERBOSE_JSON
        assert request.granularity_type == GranularityType.SEGMENT
        assert request.language == "zh"
        assert request.model == "whisper-1"

    def test_granularity_requires_verbose_json(self, model):
        options = ByteDanceAudioTranscriptionOptions(granularity_type=GranularityType.WORD)
        with pytest.raises(ValueError):
            model.create_request_body(AudioTranscriptionPrompt(b"x", options))

    def test_wrong_options_type(self, model):
        with pytest.raises(InvalidArgumentError):
            model.create_request_body(
                AudioTranscriptionPrompt(b"x", ByteDanceAudioSpeechOptions())
            )


class TestCall:
    """Format dependent results."""

    def test_json_format_returns_text(self, model, api):
        headers = CaseInsensitiveDict({"x-ratelimit-limit-requests": "50"})
        api.create_transcription.return_value = ResponseEntity(
            200, headers, StructuredResponse(text="Ask not what your country can do")
        )

        response = model.call(AudioTranscriptionPrompt(b"fLaC"))

        assert response.result.output == "Ask not what your country can do"
        assert response.metadata.rate_limit.requests_limit == 50
        assert isinstance(
            response.metadata, ByteDanceAudioTranscriptionResponseMetadata
        )
        assert response.result.metadata is response.metadata

    def test_text_format_returns_raw_body(self, api, retry_template):
        model = ByteDanceAudioTranscriptionModel(
            api,
            ByteDanceAudioTranscriptionOptions(response_format=TranscriptResponseFormat.SRT),
            retry_template,
        )
        api.create_transcription.return_value = ResponseEntity.ok(
            "1\n00:00:00,000 --> 00:00:01,000\nHello\n"
        )

        response = model.call(AudioTranscriptionPrompt(b"fLaC"))

        assert response.result.output == "1\n00:00:00,000 --> 00:00:01,000\nHello\n"
        request = api.create_transcription.call_args.args[0]
        assert request.response_format == TranscriptResponseFormat.SRT

    def test_empty_body(self, model, api):
        api.create_transcription.return_value = ResponseEntity.ok(None)
        response = model.call(AudioTranscriptionPrompt(b"fLaC"))
        assert response.result.output is None

    def test_call_bytes(self, model, api):
        api.create_transcription.return_value = ResponseEntity.ok(
            StructuredResponse(text="hi")
        )
        assert model.call_bytes(b"fLaC") == "hi"
        assert api.create_transcription.call_args.args[0].file == b"fLaC"

"""
Shared fixtures: hand-built ``requests`` responses, mocked transports and a
retry template that does not sleep.
"""

import io
import json
from typing import Any, Dict, Optional
from unittest.mock import Mock

import pytest
import requests

from bytedance_ai_lib.api.audio import ByteDanceAudioApi
from bytedance_ai_lib.api.chat import ByteDanceChatApi
from bytedance_ai_lib.core.retry import RetryListener, RetryTemplate
from bytedance_ai_lib.utils.http import HttpRequester


def build_response(
    status: int = 200,
    json_body: Any = None,
    content: Optional[bytes] = None,
    stream_body: Optional[bytes] = None,
    headers: Optional[Dict[str, str]] = None,
    encoding: Optional[str] = "utf-8",
) -> requests.Response:
    resp = requests.Response()
    resp.status_code = status
    resp.encoding = encoding
    resp.url = "https://example.test"
    resp.headers.update(headers or {})
    if stream_body is not None:
        resp.raw = io.BytesIO(stream_body)
    elif json_body is not None:
        resp._content = json.dumps(json_body).encode("utf-8")
    else:
        resp._content = content if content is not None else b""
    return resp


class CountingRetryListener(RetryListener):
    """Records the retry count seen by the last error and the success."""

    def __init__(self) -> None:
        self.on_error_retry_count = 0
        self.on_success_retry_count = 0
        self.closed_with = []

    def on_error(self, context, exc) -> None:
        self.on_error_retry_count = context.retry_count

    def on_success(self, context, result) -> None:
        self.on_success_retry_count = context.retry_count

    def close(self, context, exc) -> None:
        self.closed_with.append(exc)


@pytest.fixture
def make_response():
    return build_response


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def retry_template(sleeps):
    return RetryTemplate(
        max_attempts=5,
        initial_interval=0.01,
        multiplier=2.0,
        max_interval=0.05,
        sleep=sleeps.append,
    )


@pytest.fixture
def retry_listener(retry_template):
    listener = CountingRetryListener()
    retry_template.register_listener(listener)
    return listener


@pytest.fixture
def mock_http():
    return Mock(spec=HttpRequester)


@pytest.fixture
def chat_api(mock_http):
    return ByteDanceChatApi(api_key="test-key", http=mock_http)


@pytest.fixture
def audio_api(mock_http):
    return ByteDanceAudioApi(api_key="test-token", http=mock_http)


@pytest.fixture
def completion_json():
    return {
        "id": "chatcmpl-1",
        "object": "chat.completion",
        "created": 1718000000,
        "model": "ep-test",
        "choices": [
            {
                "index": 0,
                "finish_reason": "stop",
                "message": {"role": "assistant", "content": "Hello there"},
            }
        ],
        "usage": {"prompt_tokens": 5, "completion_tokens": 2, "total_tokens": 7},
    }

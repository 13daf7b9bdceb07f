"""
Unit tests for the HTTP transport: error translation, bearer token handling
and multipart/stream requests.
"""

from unittest.mock import Mock, patch

import pytest
import requests

from bytedance_ai_lib.exceptions import (
    AuthenticationError,
    NonTransientApiError,
    RateLimitError,
    TransientApiError,
)
from bytedance_ai_lib.utils.http import HttpRequester


@pytest.fixture
def requester():
    return HttpRequester(base_url="https://api.example.test/", token="secret")


class TestHttpRequesterSetup:
    """Construction, URLs and tokens."""

    def test_base_url_trailing_slash_is_stripped(self, requester):
        assert requester.base_url == "https://api.example.test"
        assert requester._full_url("/v1/x") == "https://api.example.test/v1/x"
        assert requester._full_url("v1/x") == "https://api.example.test/v1/x"

    def test_bearer_token_is_set(self, requester):
        assert requester.session.headers["Authorization"] == "Bearer secret"
        assert requester.session.headers["Content-Type"] == "application/json"

    def test_refresh_token_replaces_header(self, requester):
        requester.refresh_token("rotated")
        assert requester.session.headers["Authorization"] == "Bearer rotated"

    def test_empty_token_removes_header(self, requester):
        requester.refresh_token("")
        assert "Authorization" not in requester.session.headers


class TestErrorTranslation:
    """HTTP status codes and connection failures map to library exceptions."""

    @pytest.mark.parametrize(
        "status, exc_type",
        [
            (401, AuthenticationError),
            (403, AuthenticationError),
            (429, RateLimitError),
            (500, TransientApiError),
            (503, TransientApiError),
            (400, NonTransientApiError),
            (404, NonTransientApiError),
        ],
    )
    def test_status_codes(self, requester, make_response, status, exc_type):
        resp = make_response(status=status, content=b"boom")
        with patch.object(requester.session, "post", return_value=resp):
            with pytest.raises(exc_type) as info:
                requester.post("/v1/x", json={"a": 1})
        assert info.value.status_code == status
        assert info.value.body == "boom"

    def test_retryable_flags(self):
        assert RateLimitError("x").is_retryable()
        assert TransientApiError("x").is_retryable()
        assert not AuthenticationError("x").is_retryable()
        assert not NonTransientApiError("x").is_retryable()

    def test_success_is_returned(self, requester, make_response):
        resp = make_response(json_body={"ok": True})
        with patch.object(requester.session, "post", return_value=resp) as post:
            assert requester.post("/v1/x", json={"a": 1}) is resp
        assert post.call_args.args[0] == "https://api.example.test/v1/x"
        assert post.call_args.kwargs["json"] == {"a": 1}
        assert post.call_args.kwargs["timeout"] == requester.timeout

    @pytest.mark.parametrize(
        "error", [requests.ConnectionError("down"), requests.Timeout("slow")]
    )
    def test_connection_failures_are_transient(self, requester, error):
        with patch.object(requester.session, "post", side_effect=error):
            with pytest.raises(TransientApiError) as info:
                requester.post("/v1/x", json={})
        assert info.value.status_code is None


class TestRequestVariants:
    """Multipart uploads and streamed responses."""

    def test_multipart_drops_json_content_type(self, requester, make_response):
        with patch.object(
            requester.session, "post", return_value=make_response()
        ) as post:
            requester.post("/upload", data={"model": "m"}, files={"file": ("a", b"1")})
        assert post.call_args.kwargs["headers"] == {"Content-Type": None}
        assert post.call_args.kwargs["files"] == {"file": ("a", b"1")}

    def test_plain_post_sends_no_extra_headers(self, requester, make_response):
        with patch.object(
            requester.session, "post", return_value=make_response()
        ) as post:
            requester.post("/x", json={})
        assert post.call_args.kwargs["headers"] is None

    def test_post_stream_requests_streaming(self, requester, make_response):
        resp = make_response(stream_body=b"data: 1\n")
        with patch.object(requester.session, "post", return_value=resp) as post:
            result = requester.post_stream(
                "/stream", json={"stream": True}, headers={"Accept": "text/event-stream"}
            )
        assert result is resp
        assert post.call_args.kwargs["stream"] is True
        assert post.call_args.kwargs["headers"] == {"Accept": "text/event-stream"}

    def test_post_stream_closes_response_on_error(self, requester):
        resp = Mock(status_code=502, text="bad gateway")
        with patch.object(requester.session, "post", return_value=resp):
            with pytest.raises(TransientApiError):
                requester.post_stream("/stream", json={})
        resp.close.assert_called_once()

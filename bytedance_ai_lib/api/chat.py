"""
Client of the Ark chat completion API.

See https://www.volcengine.com/docs/82379/1263482 for the wire format.  The
streaming variant answers with server-sent events; the content type is not
always ``text/event-stream`` so the ``data:`` framing is parsed here by hand.
"""

import logging
from typing import Iterator, Optional

import requests

from bytedance_ai_lib.api.entity import ResponseEntity
from bytedance_ai_lib.constants import (
    CHAT_COMPLETIONS_PATH,
    DEFAULT_CHAT_BASE_URL,
    DEFAULT_TIMEOUT,
    SSE_DATA_PREFIX,
    SSE_DONE_SENTINEL,
)
from bytedance_ai_lib.data_models.chat import (
    ChatCompletion,
    ChatCompletionChunk,
    ChatCompletionRequest,
)
from bytedance_ai_lib.exceptions import InvalidArgumentError
from bytedance_ai_lib.utils.http import HttpRequester


def strip_sse_data_prefix(line: str) -> str:
    """
    Remove the ``data:`` framing (followed by at most one space) of a line.

    Lines without the prefix are returned unchanged.
    """
    if line.startswith(SSE_DATA_PREFIX):
        content = line[len(SSE_DATA_PREFIX):]
        return content[1:] if content.startswith(" ") else content
    return line


def iter_sse_data(lines) -> Iterator[str]:
    """
    Yield the payloads of an event stream until the ``[DONE]`` sentinel.

    Lines may be bytes, which are decoded as UTF-8 regardless of the
    response charset.  Blank lines are skipped; the sentinel itself is never
    yielded.
    """
    for raw in lines:
        if raw is None:
            continue
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        content = strip_sse_data_prefix(raw.strip())
        if not content.strip():
            continue
        if content.strip() == SSE_DONE_SENTINEL:
            return
        yield content


class ByteDanceChatApi:
    """
    Chat completion client.

    Parameters
    ----------
    api_key : str
        Ark API key sent as bearer token.
    base_url : str, default ``DEFAULT_CHAT_BASE_URL``
        Base URL of the service.
    timeout : int, default ``DEFAULT_TIMEOUT``
        Per-request timeout in seconds.
    http : Optional[HttpRequester]
        Pre-built requester (mainly for tests); built from the other
        arguments when omitted.
    logger : Optional[logging.Logger]
        Logger instance; if omitted, a module‑level logger is created.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_CHAT_BASE_URL,
        timeout: int = DEFAULT_TIMEOUT,
        http: Optional[HttpRequester] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.logger = logger or logging.getLogger(__name__)
        self.http = http or HttpRequester(
            base_url=base_url, token=api_key, timeout=timeout, logger=self.logger
        )

    def refresh_api_key(self, new_api_key: str) -> None:
        """Use ``new_api_key`` for every request sent from now on."""
        self.http.refresh_token(new_api_key)

    def chat_completion_entity(
        self, chat_request: ChatCompletionRequest
    ) -> ResponseEntity[ChatCompletion]:
        """
        Create a complete (non-streaming) model response.

        Raises
        ------
        InvalidArgumentError
            When ``chat_request`` is missing or has ``stream`` set.
        """
        if chat_request is None:
            raise InvalidArgumentError("The request body can not be null.")
        if chat_request.stream:
            raise InvalidArgumentError("Request must set the stream property to false.")

        resp = self.http.post(CHAT_COMPLETIONS_PATH, json=chat_request.to_payload())
        body = None
        if resp.content:
            body = ChatCompletion.model_validate_json(resp.content)
        return ResponseEntity.of(resp, body)

    def chat_completion_stream(
        self, chat_request: ChatCompletionRequest
    ) -> Iterator[ChatCompletionChunk]:
        """
        Create a streamed model response.

        The connection is opened (and HTTP errors raised) by this call; the
        returned iterator lazily decodes chunks and stops at ``[DONE]``.
        Closing or dropping the iterator closes the connection.

        Raises
        ------
        InvalidArgumentError
            When ``chat_request`` is missing or has ``stream`` unset.
        """
        if chat_request is None:
            raise InvalidArgumentError("The request body can not be null.")
        if not chat_request.stream:
            raise InvalidArgumentError("Request must set the stream property to true.")

        resp = self.http.post_stream(
            CHAT_COMPLETIONS_PATH,
            json=chat_request.to_payload(),
            headers={"Accept": "text/event-stream"},
        )
        return self._iter_chunks(resp)

    @staticmethod
    def _iter_chunks(resp: requests.Response) -> Iterator[ChatCompletionChunk]:
        with resp as r:
            for data in iter_sse_data(r.iter_lines()):
                yield ChatCompletionChunk.model_validate_json(data)

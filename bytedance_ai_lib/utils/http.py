"""
Thin wrapper around ``requests`` that adds logging, bearer authentication
and unified error handling.

The :class:`HttpRequester` class is used by every API client of the library
to talk to the vendor endpoints.  It centralises:

* construction of absolute URLs from a base URL,
* automatic inclusion of a bearer token (replaceable at runtime),
* a connection-level retry policy via ``urllib3.Retry``,
* conversion of HTTP error codes and connection failures into the
  library-specific exception hierarchy (:class:`TransientApiError`,
  :class:`NonTransientApiError` and their subclasses).

Retrying on HTTP status codes is intentionally **not** done here; the
:class:`~bytedance_ai_lib.core.retry.RetryTemplate` owns that decision so that
listeners see every attempt.
"""

import logging
from typing import Any, Dict, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from bytedance_ai_lib.constants import DEFAULT_CONNECT_RETRIES, DEFAULT_TIMEOUT
from bytedance_ai_lib.exceptions import (
    AuthenticationError,
    NonTransientApiError,
    RateLimitError,
    TransientApiError,
)


class HttpRequester:
    """
    Helper for making HTTP calls with bearer auth and error translation.

    Parameters
    ----------
    base_url : str
        Base URL of the remote service (e.g. ``"https://api.example.com"``).
        A trailing slash is stripped automatically.
    token : str
        Bearer token used for ``Authorization`` header; if empty, no header is added.
    timeout : int, default ``DEFAULT_TIMEOUT``
        Per‑request timeout in seconds.
    connect_retries : int, default ``0``
        Number of attempts the adapter makes to re-establish a failed
        connection before the error is surfaced.
    logger : Optional[logging.Logger]
        Logger instance; if omitted, a module‑level logger is created.
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        timeout: int = DEFAULT_TIMEOUT,
        connect_retries: int = DEFAULT_CONNECT_RETRIES,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})
        self.refresh_token(token)

        self.logger = logger or logging.getLogger(__name__)

        # retry‑policy: connection failures only
        retry_strategy = Retry(
            total=connect_retries,
            connect=connect_retries,
            read=0,
            status=0,
            backoff_factor=0.5,
            allowed_methods=["GET", "POST"],
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        self.session.mount("https://", adapter)
        self.session.mount("http://", adapter)

    def refresh_token(self, token: Optional[str]) -> None:
        """
        Replace the bearer token used by subsequent requests.

        Requests already sent keep the headers they were prepared with.
        """
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"
        else:
            self.session.headers.pop("Authorization", None)

    def _full_url(self, path: str) -> str:
        """
        Build the absolute URL for a request.

        Parameters
        ----------
        path : str
            URL path to be appended to ``self.base_url``.  The method ensures
            exactly one ``/`` separates the base and the path.

        Returns
        -------
        str
            Fully qualified URL.
        """
        return f"{self.base_url}{path if path.startswith('/') else '/' + path}"

    @staticmethod
    def _handle_response(resp: requests.Response) -> requests.Response:
        """
        Translate HTTP error codes into library‑specific exceptions.

        The method examines ``resp.status_code`` and raises:

        * :class:`AuthenticationError` for ``401`` and ``403``.
        * :class:`RateLimitError` for ``429 Too Many Requests``.
        * :class:`TransientApiError` for any 5xx status.
        * :class:`NonTransientApiError` for any other 4xx status.

        If the response is successful, it is returned unchanged.

        Raises
        ------
        AuthenticationError, RateLimitError, TransientApiError, NonTransientApiError
        """
        status = resp.status_code
        if status < 400:
            return resp

        body = resp.text
        if status in (401, 403):
            raise AuthenticationError("Invalid or missing token", status, body)
        if status == 429:
            raise RateLimitError("Rate limit exceeded", status, body)
        if 500 <= status < 600:
            raise TransientApiError(f"HTTP {status}: {body}", status, body)
        raise NonTransientApiError(f"HTTP {status}: {body}", status, body)

    def _send(self, url: str, **kwargs) -> requests.Response:
        try:
            return self.session.post(url, timeout=self.timeout, **kwargs)
        except (requests.ConnectionError, requests.Timeout) as exc:
            raise TransientApiError(f"Request to {url} failed: {exc}") from exc

    def post(
        self,
        path: str,
        json: Optional[Dict[str, Any]] = None,
        data: Optional[Dict[str, Any]] = None,
        files: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> requests.Response:
        """
        Perform a ``POST`` request and wait for the complete body.

        Parameters
        ----------
        path : str
            Relative URL path to post to.
        json : Optional[Dict[str, Any]]
            JSON‑serialisable payload sent as the request body.
        data, files : Optional[Dict[str, Any]]
            Multipart form fields and files; when ``files`` is given the
            JSON content type of the session is dropped so that ``requests``
            can set the multipart boundary.
        headers : Optional[Dict[str, str]]
            Extra headers for this request only.

        Returns
        -------
        requests.Response
            The validated response object.
        """
        url = self._full_url(path)
        self.logger.debug("POST %s | payload=%s", url, json if json else data)
        resp = self._send(
            url,
            json=json,
            data=data,
            files=files,
            headers=self._request_headers(headers, multipart=files is not None),
        )
        return self._handle_response(resp)

    def post_stream(
        self,
        path: str,
        json: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> requests.Response:
        """
        Perform a streamed ``POST`` request.

        The status line and headers are awaited and validated immediately, so
        connection and HTTP errors surface from this call; the body is left
        unread for the caller to consume lazily.  The caller owns the returned
        response and must close it.
        """
        url = self._full_url(path)
        self.logger.debug("POST (stream) %s | payload=%s", url, json)
        resp = self._send(
            url, json=json, headers=self._request_headers(headers), stream=True
        )
        try:
            return self._handle_response(resp)
        except Exception:
            resp.close()
            raise

    def _request_headers(
        self, headers: Optional[Dict[str, str]], multipart: bool = False
    ) -> Optional[Dict[str, Any]]:
        if not headers and not multipart:
            return None
        merged: Dict[str, Any] = dict(headers or {})
        if multipart:
            # ``None`` removes the session level value for this request
            merged["Content-Type"] = None
        return merged

from dataclasses import dataclass, field
from typing import Generic, Mapping, Optional, TypeVar

import requests

T = TypeVar("T")


@dataclass(frozen=True)
class ResponseEntity(Generic[T]):
    """HTTP status, headers and the decoded body of one vendor response."""

    status_code: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Optional[T] = None

    @classmethod
    def of(cls, resp: requests.Response, body: Optional[T]) -> "ResponseEntity[T]":
        return cls(status_code=resp.status_code, headers=resp.headers, body=body)

    @classmethod
    def ok(cls, body: Optional[T], headers: Optional[Mapping[str, str]] = None):
        return cls(status_code=200, headers=headers or {}, body=body)

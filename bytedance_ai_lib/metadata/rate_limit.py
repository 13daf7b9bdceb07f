"""
Rate-limit information reported by the vendor in response headers.

Reset values use the compact duration notation of the API (``"1m30s"``,
``"6s"``, ``"20ms"``) and are exposed as :class:`datetime.timedelta`.
"""

import logging
import re
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

_DURATION_PART = re.compile(r"(\d+(?:\.\d+)?)(ms|h|m|s)")

_UNIT_TO_SECONDS = {"h": 3600.0, "m": 60.0, "s": 1.0, "ms": 0.001}


class ByteDanceApiResponseHeaders(Enum):
    REQUESTS_LIMIT_HEADER = (
        "x-ratelimit-limit-requests",
        "Total number of requests allowed within timeframe.",
    )
    REQUESTS_REMAINING_HEADER = (
        "x-ratelimit-remaining-requests",
        "Remaining number of requests available in timeframe.",
    )
    REQUESTS_RESET_HEADER = (
        "x-ratelimit-reset-requests",
        "Duration of time until the number of requests reset.",
    )
    TOKENS_LIMIT_HEADER = (
        "x-ratelimit-limit-tokens",
        "Total number of tokens allowed within timeframe.",
    )
    TOKENS_REMAINING_HEADER = (
        "x-ratelimit-remaining-tokens",
        "Remaining number of tokens available in timeframe.",
    )
    TOKENS_RESET_HEADER = (
        "x-ratelimit-reset-tokens",
        "Duration of time until the number of tokens reset.",
    )

    @property
    def header_name(self) -> str:
        return self.value[0]

    @property
    def description(self) -> str:
        return self.value[1]


@dataclass(frozen=True)
class RateLimit:
    requests_limit: Optional[int] = None
    requests_remaining: Optional[int] = None
    requests_reset: Optional[timedelta] = None
    tokens_limit: Optional[int] = None
    tokens_remaining: Optional[int] = None
    tokens_reset: Optional[timedelta] = None


EMPTY_RATE_LIMIT = RateLimit()


def parse_duration(value: Optional[str]) -> Optional[timedelta]:
    """
    Parse ``"1h2m3.5s"``/``"20ms"`` style durations; ``None`` when unparsable.
    """
    if not value:
        return None
    value = value.strip()
    parts = _DURATION_PART.findall(value)
    if not parts or "".join(n + u for n, u in parts) != value:
        logger.debug("Unparsable rate-limit duration: %s", value)
        return None
    seconds = sum(float(number) * _UNIT_TO_SECONDS[unit] for number, unit in parts)
    return timedelta(seconds=seconds)


def _int_header(headers: Mapping[str, str], header: ByteDanceApiResponseHeaders):
    raw = headers.get(header.header_name)
    if raw is None:
        return None
    try:
        return int(raw.strip())
    except ValueError:
        logger.debug("Non numeric %s header: %s", header.header_name, raw)
        return None


def extract_rate_limit(headers: Optional[Mapping[str, str]]) -> RateLimit:
    """
    Build a :class:`RateLimit` from response headers.

    ``headers`` should be case-insensitive (as ``requests`` provides them);
    missing headers leave the matching field unset.
    """
    if not headers:
        return EMPTY_RATE_LIMIT
    h = ByteDanceApiResponseHeaders
    return RateLimit(
        requests_limit=_int_header(headers, h.REQUESTS_LIMIT_HEADER),
        requests_remaining=_int_header(headers, h.REQUESTS_REMAINING_HEADER),
        requests_reset=parse_duration(
            headers.get(h.REQUESTS_RESET_HEADER.header_name)
        ),
        tokens_limit=_int_header(headers, h.TOKENS_LIMIT_HEADER),
        tokens_remaining=_int_header(headers, h.TOKENS_REMAINING_HEADER),
        tokens_reset=parse_duration(
            headers.get(h.TOKENS_RESET_HEADER.header_name)
        ),
    )

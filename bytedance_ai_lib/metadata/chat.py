from dataclasses import dataclass, replace
from typing import Optional

from bytedance_ai_lib.data_models.chat import ChatCompletion, Usage
from bytedance_ai_lib.metadata.rate_limit import EMPTY_RATE_LIMIT, RateLimit

EMPTY_USAGE = Usage()


@dataclass(frozen=True)
class ByteDanceChatResponseMetadata:
    """Id, token usage and rate limits of one chat completion."""

    id: Optional[str] = None
    usage: Usage = EMPTY_USAGE
    rate_limit: RateLimit = EMPTY_RATE_LIMIT

    @classmethod
    def from_completion(
        cls, completion: ChatCompletion
    ) -> "ByteDanceChatResponseMetadata":
        if completion is None:
            raise ValueError("ByteDance ChatCompletion must not be None")
        return cls(id=completion.id, usage=completion.usage or EMPTY_USAGE)

    def with_rate_limit(
        self, rate_limit: Optional[RateLimit]
    ) -> "ByteDanceChatResponseMetadata":
        return replace(self, rate_limit=rate_limit or EMPTY_RATE_LIMIT)

    def __str__(self) -> str:
        return (
            f"{{ @type: {type(self).__name__}, id: {self.id}, "
            f"usage: {self.usage}, rateLimit: {self.rate_limit} }}"
        )

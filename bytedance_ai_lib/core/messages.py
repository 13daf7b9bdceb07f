"""
Messages exchanged with chat models.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union


class MessageType(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class Media:
    """
    Media attached to a user message.

    ``data`` is either raw bytes or a string (a URL or an already encoded
    data URL).
    """

    mime_type: str
    data: Union[bytes, str]


@dataclass(frozen=True)
class Message:
    content: Optional[str]
    message_type: MessageType = MessageType.USER
    media: List[Media] = field(default_factory=list)
    properties: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def system(cls, content: str) -> "Message":
        return cls(content=content, message_type=MessageType.SYSTEM)

    @classmethod
    def user(cls, content: str, media: Optional[List[Media]] = None) -> "Message":
        return cls(content=content, message_type=MessageType.USER, media=media or [])

    @classmethod
    def assistant(
        cls, content: Optional[str], properties: Optional[Dict[str, Any]] = None
    ) -> "Message":
        return cls(
            content=content,
            message_type=MessageType.ASSISTANT,
            properties=properties or {},
        )

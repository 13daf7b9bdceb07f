"""
Base model definitions for the ByteDance AI library.

Every request/response DTO of the library is an immutable pydantic model.
Wire payloads are produced with ``None`` fields omitted, mirroring what the
vendor endpoints expect.
"""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict


class WireModel(BaseModel):
    """
    Immutable DTO exchanged with the vendor API.

    Unknown keys in responses are ignored, so the client keeps working when
    the vendor adds fields.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    def to_payload(self) -> Dict[str, Any]:
        """Return the JSON-ready representation, skipping unset (``None``) fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

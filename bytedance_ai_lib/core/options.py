"""
Portable option objects shared by all models.

Options use ``None`` as "not set": a ``None`` field never overrides a value
coming from another options object (see
:func:`bytedance_ai_lib.core.options_utils.merge`).
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class ModelOptions(BaseModel):
    """Base class of every options object; immutable, all fields optional."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


class ChatOptions(ModelOptions):
    """
    Provider independent chat options.

    Attributes
    ----------
    model : Optional[str]
        Model (endpoint) identifier.
    frequency_penalty : Optional[float]
        Penalty applied to frequently generated tokens.
    max_tokens : Optional[int]
        Maximum number of generated tokens.
    stop : Optional[List[str]]
        Stop sequences.
    temperature : Optional[float]
        Sampling temperature.
    top_p : Optional[float]
        Nucleus sampling probability mass.
    """

    model: Optional[str] = None
    frequency_penalty: Optional[float] = None
    max_tokens: Optional[int] = None
    stop: Optional[List[str]] = None
    temperature: Optional[float] = None
    top_p: Optional[float] = None

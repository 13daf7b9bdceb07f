"""
Helpers combining option objects.

A per-call override is laid over process-wide defaults field by field: the
first non-``None`` value wins.  Nested option objects are combined the same
way, so an override may change a single nested field (e.g. only the voice)
while the rest of the nested object comes from the defaults.
"""

from typing import Optional, Type, TypeVar

from pydantic import BaseModel

T = TypeVar("T", bound=BaseModel)


def merge(
    override: Optional[BaseModel],
    default: Optional[BaseModel],
    target_cls: Optional[Type[T]] = None,
) -> Optional[T]:
    """
    Merge ``override`` onto ``default``.

    Parameters
    ----------
    override : Optional[BaseModel]
        Runtime options; its set fields win.
    default : Optional[BaseModel]
        Fallback options.
    target_cls : Optional[Type[BaseModel]]
        Class of the result; defaults to the class of ``default`` (or of
        ``override`` when ``default`` is ``None``).  Fields unknown to one of
        the sources are treated as unset.

    Returns
    -------
    Optional[BaseModel]
        A new instance of ``target_cls``; ``None`` if both sources are ``None``.
    """
    if override is None and default is None:
        return None
    if target_cls is None:
        target_cls = type(default) if default is not None else type(override)

    values = {}
    for name in target_cls.model_fields:
        o_value = getattr(override, name, None)
        d_value = getattr(default, name, None)
        if isinstance(o_value, BaseModel) and isinstance(d_value, BaseModel):
            values[name] = merge(o_value, d_value, type(o_value))
        elif o_value is not None:
            values[name] = o_value
        elif d_value is not None:
            values[name] = d_value
    return target_cls(**values)


def copy_to_target(source: Optional[BaseModel], target_cls: Type[T]) -> Optional[T]:
    """Copy the fields ``target_cls`` knows about from ``source``."""
    if source is None:
        return None
    if isinstance(source, target_cls):
        return source
    values = {
        name: getattr(source, name)
        for name in type(source).model_fields
        if name in target_cls.model_fields and getattr(source, name) is not None
    }
    return target_cls(**values)

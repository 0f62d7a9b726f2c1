"""Name-based property access used to copy values between Employee shapes.

Works on pydantic models, SQLAlchemy-mapped classes and dataclasses. The set of
properties of a type is its declared fields in declaration order.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Any, Iterable

from pydantic import BaseModel
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.exc import NoInspectionAvailable

logger = logging.getLogger(__name__)


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


def _mapper(cls: type):
    try:
        return sa_inspect(cls)
    except NoInspectionAvailable:
        return None


def declared_properties(cls: type) -> tuple[str, ...]:
    if isinstance(cls, type) and issubclass(cls, BaseModel):
        return tuple(cls.model_fields)
    mapper = _mapper(cls)
    if mapper is not None:
        return tuple(attr.key for attr in mapper.column_attrs)
    if dataclasses.is_dataclass(cls):
        return tuple(f.name for f in dataclasses.fields(cls))
    return ()


def property_exists(cls: type, name: str) -> bool:
    return name in declared_properties(cls)


def _is_writable(cls: type, name: str) -> bool:
    if isinstance(cls, type) and issubclass(cls, BaseModel):
        return not cls.model_config.get("frozen", False)
    mapper = _mapper(cls)
    if mapper is not None:
        # Primary keys belong to the store
        primary = {col.key for col in mapper.primary_key}
        return name not in primary
    if dataclasses.is_dataclass(cls):
        params = getattr(cls, "__dataclass_params__", None)
        return not (params and params.frozen)
    return False


def get_property(obj: Any, name: str) -> Any:
    """Return ``obj.<name>``, or ``MISSING`` if the type declares no such property."""
    if not property_exists(type(obj), name):
        return MISSING
    return getattr(obj, name)


def set_property(obj: Any, name: str, value: Any) -> None:
    """Write ``value`` into ``obj.<name>``; unknown or read-only properties are ignored."""
    cls = type(obj)
    if not property_exists(cls, name) or not _is_writable(cls, name):
        return
    setattr(obj, name, value)


def copy_properties(source: Any, destination: Any, exclude: Iterable[str] = ()) -> list[str]:
    """Copy every property declared on ``source`` that ``destination`` also declares.

    Returns the names that were written.
    """
    skipped = set(exclude)
    dest_cls = type(destination)
    copied: list[str] = []
    for name in declared_properties(type(source)):
        if name in skipped:
            continue
        value = get_property(source, name)
        if value is MISSING:
            continue
        if not property_exists(dest_cls, name) or not _is_writable(dest_cls, name):
            continue
        set_property(destination, name, value)
        copied.append(name)
    logger.debug("Copied %s from %s to %s", copied, type(source).__name__, dest_cls.__name__)
    return copied

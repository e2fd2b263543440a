"""
Marker-type handles and their logical names.

A handle is whatever a loading context gave back for a marker type: usually
the bare class, or a :class:`MarkerHandle` when the caller wants the loading
context recorded next to it. Identity of a handle is context-local; its
*name* is the only thing that is stable across contexts.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from typing import Any, Union


@dataclass(frozen=True)
class MarkerHandle:
    """
    Tagged marker-type reference.

    Equality and hashing use ``name`` and the identity of ``marker`` (classes
    compare by identity), so two handles for the same name resolved through
    different loading contexts are not equal. ``context`` is only a label.

    Example:
        >>> from annomap.faces import FacesComponent
        >>> h = MarkerHandle.of(FacesComponent, context="host")
        >>> h.name
        'annomap.faces.FacesComponent'
    """

    name: str
    marker: type
    context: str = field(default="", compare=False)

    @classmethod
    def of(cls, marker: type, *, context: str = "") -> MarkerHandle:
        return cls(qualified_name(marker), marker, context)


MarkerTypeHandle = Union[type, MarkerHandle]


def qualified_name(cls: type) -> str:
    """``module.QualName`` of a class."""
    return f"{cls.__module__}.{cls.__qualname__}"


def marker_name(handle: Any) -> str:
    """Logical name of a handle, the basis for cross-context identity."""
    if isinstance(handle, MarkerHandle):
        return handle.name
    if isinstance(handle, type):
        return qualified_name(handle)
    raise TypeError(f"not a marker type handle: {handle!r}")


def is_marker_type(obj: Any) -> bool:
    """True for classes flagged with a truthy ``__marker__`` attribute."""
    return inspect.isclass(obj) and bool(getattr(obj, "__marker__", False))


__all__ = [
    "MarkerHandle",
    "MarkerTypeHandle",
    "qualified_name",
    "marker_name",
    "is_marker_type",
]

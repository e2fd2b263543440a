"""
Rewrite a preliminary marker mapping onto canonical marker types.

The scanner's mapping is keyed by whatever class objects *its* loading
context produced. ``remap`` replaces every key whose name is in the canonical
registry with the registry's class and passes unknown keys through, so
marker types the registry has never heard of keep working.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import AbstractSet, Any

from annomap.errors import PreliminaryMappingMissingError
from annomap.handles import MarkerTypeHandle, marker_name
from annomap.registry import CanonicalRegistry

PreliminaryMapping = Mapping[MarkerTypeHandle, AbstractSet[Any]]
CanonicalMapping = dict[MarkerTypeHandle, AbstractSet[Any]]


def canonical_handle(handle: Any, registry: CanonicalRegistry) -> Any:
    """The registry's class for ``handle``'s name, else ``handle`` itself."""
    try:
        name = marker_name(handle)
    except TypeError:
        return handle
    known = registry.get(name)
    return handle if known is None else known


def remap(preliminary: PreliminaryMapping | None, registry: CanonicalRegistry) -> CanonicalMapping:
    """
    Return a new mapping with keys replaced by their canonical counterparts.

    Target sets are carried over as the same objects. Each input key yields
    exactly one output key; if two keys canonicalize to the same class the
    later one wins.

    Raises:
        PreliminaryMappingMissingError: ``preliminary`` is ``None``.
    """
    if preliminary is None:
        raise PreliminaryMappingMissingError("no preliminary marker mapping to remap")

    converted: CanonicalMapping = {}
    for handle, annotated in preliminary.items():
        converted[canonical_handle(handle, registry)] = annotated
    return converted


__all__ = ["PreliminaryMapping", "CanonicalMapping", "canonical_handle", "remap"]

"""
Scope stores that hold the annotation map.

A scope is the host's key-value store for one deployment: the
application-wide map, or the servlet-like context object. annomap only needs
``get``/``set`` over string attribute names, so both host shapes are adapted
to the same :class:`Scope` protocol.

Architecture:
    ::

        Scope (Protocol)                get(name) → value | None
        │                               set(name, value)
        ├── ApplicationMapScope  : over a MutableMapping (application map)
        ├── AttributeScope       : over get_attribute/set_attribute
        └── InMemoryScope        : lock-protected dict, host/test stand-in

    Attributes used:
        FACES_ANNOTATIONS_SC_ATTR   marker → annotated classes (scanner writes)
        ANNOTATION_MAP_CONVERTED    "already canonicalised" flag

Examples:
    >>> scope = InMemoryScope()
    >>> publish(scope, {})
    >>> scope.get(FACES_ANNOTATIONS_SC_ATTR)
    {}
    >>> scope.get(ANNOTATION_MAP_CONVERTED) is None
    True

Tags:
    scope, attributes, protocol, annomap

Doc-Types:
    - API Reference
"""

from __future__ import annotations

import threading
from collections.abc import Mapping, MutableMapping
from typing import Any, Protocol, runtime_checkable

FACES_ANNOTATIONS_SC_ATTR = "org.jboss.as.jsf.FACES_ANNOTATIONS"
ANNOTATION_MAP_CONVERTED = "org.jboss.as.jsf.ANNOTATION_MAP_CONVERTED"


@runtime_checkable
class Scope(Protocol):
    """Protocol for scope attribute stores."""

    kind: str

    def get(self, name: str) -> Any | None:
        """Return the attribute value, or ``None`` if absent."""
        ...

    def set(self, name: str, value: Any) -> None:
        """Store an attribute value."""
        ...


class ApplicationContext(Protocol):
    """Host object exposing an application-scoped attribute map."""

    application_map: MutableMapping[str, Any]


class AttributeContext(Protocol):
    """Host object exposing servlet-context style attributes."""

    def get_attribute(self, name: str) -> Any | None: ...

    def set_attribute(self, name: str, value: Any) -> None: ...


class ApplicationMapScope:
    """Scope over an application map (any ``MutableMapping``)."""

    kind = "application"

    def __init__(self, application_map: MutableMapping[str, Any]):
        self._map = application_map

    def get(self, name: str) -> Any | None:
        return self._map.get(name)

    def set(self, name: str, value: Any) -> None:
        self._map[name] = value


class AttributeScope:
    """Scope over a servlet-like context's attributes."""

    kind = "servlet_context"

    def __init__(self, context: AttributeContext):
        self._context = context

    def get(self, name: str) -> Any | None:
        return self._context.get_attribute(name)

    def set(self, name: str, value: Any) -> None:
        self._context.set_attribute(name, value)


class InMemoryScope:
    """
    Thread-safe in-memory scope.

    Also answers the servlet-context attribute calls, so the same object can
    be handed to :meth:`~annomap.resolver.MarkerMapResolver.resolve_servlet_context`.
    """

    kind = "memory"

    def __init__(self, attributes: Mapping[str, Any] | None = None):
        self._attributes: dict[str, Any] = dict(attributes or {})
        self._lock = threading.Lock()

    def get(self, name: str) -> Any | None:
        with self._lock:
            return self._attributes.get(name)

    def set(self, name: str, value: Any) -> None:
        with self._lock:
            self._attributes[name] = value

    def remove(self, name: str) -> None:
        """Remove an attribute. No-op if absent."""
        with self._lock:
            self._attributes.pop(name, None)

    def names(self) -> list[str]:
        with self._lock:
            return sorted(self._attributes)

    get_attribute = get
    set_attribute = set
    remove_attribute = remove
    attribute_names = names


def publish(scope: Scope, mapping: Mapping[Any, Any]) -> None:
    """
    Install a scanner's preliminary mapping and clear the converted flag.

    This is the scanner-side half of the contract; it runs once per
    deployment before the first resolve.
    """
    scope.set(ANNOTATION_MAP_CONVERTED, None)
    scope.set(FACES_ANNOTATIONS_SC_ATTR, mapping)


__all__ = [
    "FACES_ANNOTATIONS_SC_ATTR",
    "ANNOTATION_MAP_CONVERTED",
    "Scope",
    "ApplicationContext",
    "AttributeContext",
    "ApplicationMapScope",
    "AttributeScope",
    "InMemoryScope",
    "publish",
]

"""
Per-scope cache of the canonicalised annotation map.

The scanner publishes a marker → annotated-classes mapping keyed by its own
marker classes. The first lookup in a scope rewrites it onto the canonical
registry; later lookups return the stored result untouched.

Manifesto:
    The conversion is pure and the registry is read-only, so the only thing
    worth coordinating is *once per scope*. Each step (flag check, flag set,
    remap, write-back) is a separate method so hosts can verify their side
    of the contract.

Architecture:
    ::

        resolve(scope)
          is_converted? ──yes──► load(scope)                    (cache hit)
                │ no
                ▼
          remap(load(scope), registry) ─► store ─► mark_converted ─► result

        atomic=True   misses re-check and convert under one lock (no
                      duplicated remaps); hits stay lock-free
        atomic=False  unguarded; concurrent first calls may both remap,
                      results are equal and the last write wins

Examples:
    >>> from annomap.scope import InMemoryScope, publish
    >>> resolver = MarkerMapResolver(registry)
    >>> scope = InMemoryScope()
    >>> publish(scope, {ForeignFacesComponent: {Calendar}})
    >>> resolver.resolve(scope)
    {<class 'annomap.faces.FacesComponent'>: {<class 'Calendar'>}}
    >>> resolver.is_converted(scope)
    True

Performance:
    - Cache hit: two attribute reads, no lock
    - Cache miss: O(n) in the number of marker types in the mapping

Tags:
    resolver, memoization, scope, annomap

Doc-Types:
    - API Reference
"""

from __future__ import annotations

import threading
from typing import Any

from annomap.errors import PreliminaryMappingMissingError
from annomap.logging import get_logger
from annomap.registry import CanonicalRegistry
from annomap.remap import CanonicalMapping, remap
from annomap.scope import (
    ANNOTATION_MAP_CONVERTED,
    FACES_ANNOTATIONS_SC_ATTR,
    ApplicationContext,
    ApplicationMapScope,
    AttributeContext,
    AttributeScope,
    Scope,
)

logger = get_logger(__name__)


class MarkerMapResolver:
    """
    Resolve the canonical annotation map for a scope, converting at most once.

    Args:
        registry: Canonical registry built at startup.
        write_back: Store the converted mapping in the scope on a miss. When
            off, the scope keeps the preliminary mapping and later hits return
            it as is.
        atomic: Guard first resolution with a lock.
        strict: Raise :class:`PreliminaryMappingMissingError` when the scope
            has no mapping; otherwise treat it as empty.
    """

    def __init__(
        self,
        registry: CanonicalRegistry,
        *,
        write_back: bool = True,
        atomic: bool = True,
        strict: bool = True,
    ):
        self._registry = registry
        self.write_back = write_back
        self.atomic = atomic
        self.strict = strict
        self._lock = threading.RLock()

    @property
    def registry(self) -> CanonicalRegistry:
        return self._registry

    # ── Steps ────────────────────────────────────────────────────

    def is_converted(self, scope: Scope) -> bool:
        return scope.get(ANNOTATION_MAP_CONVERTED) is not None

    def mark_converted(self, scope: Scope) -> None:
        scope.set(ANNOTATION_MAP_CONVERTED, True)

    def load(self, scope: Scope) -> Any | None:
        """The mapping attribute as currently stored."""
        return scope.get(FACES_ANNOTATIONS_SC_ATTR)

    def store(self, scope: Scope, mapping: CanonicalMapping) -> None:
        scope.set(FACES_ANNOTATIONS_SC_ATTR, mapping)

    def convert(self, scope: Scope) -> CanonicalMapping:
        """Remap the scope's current mapping without touching the flag."""
        preliminary = self.load(scope)
        if preliminary is None:
            kind = getattr(scope, "kind", type(scope).__name__)
            logger.warning(
                "preliminary_mapping_missing",
                scope=kind,
                attribute=FACES_ANNOTATIONS_SC_ATTR,
                strict=self.strict,
            )
            if self.strict:
                raise PreliminaryMappingMissingError(
                    "scope has no annotation map; the scanner must publish it before first use"
                ).with_context(scope=kind, attribute=FACES_ANNOTATIONS_SC_ATTR)
            preliminary = {}
        return remap(preliminary, self._registry)

    # ── Entry points ─────────────────────────────────────────────

    def resolve(self, scope: Scope) -> CanonicalMapping:
        """Canonical annotation map for ``scope``."""
        # Hits never take the lock: the flag is only set after write-back.
        if self.is_converted(scope):
            return self._cache_hit(scope)
        if self.atomic:
            with self._lock:
                return self._resolve(scope)
        return self._resolve(scope)

    def _cache_hit(self, scope: Scope) -> CanonicalMapping:
        logger.debug("annotation_map_cache_hit", scope=getattr(scope, "kind", None))
        return self.load(scope)

    def _resolve(self, scope: Scope) -> CanonicalMapping:
        if self.is_converted(scope):
            return self._cache_hit(scope)

        # Flag is set on every path, absent or malformed mapping included,
        # and never before write-back.
        try:
            converted = self.convert(scope)
            if self.write_back:
                self.store(scope, converted)
        finally:
            self.mark_converted(scope)
        logger.debug(
            "annotation_map_converted",
            scope=getattr(scope, "kind", None),
            markers=len(converted),
            write_back=self.write_back,
        )
        return converted

    def resolve_application(self, context: ApplicationContext) -> CanonicalMapping:
        """Resolve through a host application context's ``application_map``."""
        return self.resolve(ApplicationMapScope(context.application_map))

    def resolve_servlet_context(self, context: AttributeContext) -> CanonicalMapping:
        """Resolve through a servlet-like context's attributes."""
        return self.resolve(AttributeScope(context))


__all__ = ["MarkerMapResolver"]

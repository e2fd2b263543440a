"""
Canonical marker registry.

Maps fully-qualified marker-type names to the class objects resolved through
the host's own loading context. It is built once at startup, never mutated
afterwards, and shared read-only by every resolver.

Manifesto:
    Name is the only identity that survives a change of loading context.
    The registry pins each name to the host's class so a foreign mapping can
    be rewritten onto it.

    - **Baseline first:** every baseline name resolves before any optional one
    - **Best effort:** a missing optional marker is skipped, not fatal
    - **Partial but usable:** an unexpected failure keeps what was added so far
    - **Observable:** the failure is kept on the registry and logged

Architecture:
    ::

        build_registry(seed, loader)
          baseline:  loader.load(name)      ──► table[name]   (any error stops)
          optional:  loader.try_load(name)
                       Ok(marker type)      ──► table[name]
                       Ok(other object)     ──► ignored
                       Err(MarkerNotFound)  ──► skipped, continue
                       Err(other)           ──► stop
          ──► CanonicalRegistry(table, skipped, failure)

Examples:
    >>> from annomap.loading import ImportLoader
    >>> from annomap.seed import faces_seed
    >>> registry = build_registry(faces_seed(), ImportLoader())
    >>> registry.ok, len(registry)
    (True, 8)
    >>> registry.get("annomap.faces.FacesComponent")
    <class 'annomap.faces.FacesComponent'>

Guardrails:
    ❌ DON'T: Keep a module-level registry
    ✅ DO: Build one at startup and pass it to resolvers (see AnnomapContainer)

Tags:
    registry, canonical-types, plugin-isolation, annomap

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

from annomap.errors import MarkerNotFoundError, RegistryBuildError
from annomap.handles import is_marker_type
from annomap.loading import LoadingContext
from annomap.logging import get_logger
from annomap.result import Err, Ok
from annomap.seed import SeedList

logger = get_logger(__name__)


class CanonicalRegistry:
    """Immutable name → canonical marker-type table."""

    __slots__ = ("_table", "_skipped", "_failure", "_loader")

    def __init__(
        self,
        table: Mapping[str, type],
        *,
        skipped: tuple[str, ...] = (),
        failure: RegistryBuildError | None = None,
        loader: str = "",
    ):
        self._table = MappingProxyType(dict(table))
        self._skipped = tuple(skipped)
        self._failure = failure
        self._loader = loader

    def get(self, name: str) -> type | None:
        return self._table.get(name)

    def names(self) -> tuple[str, ...]:
        return tuple(self._table)

    def as_mapping(self) -> Mapping[str, type]:
        """Read-only view of the table."""
        return self._table

    @property
    def skipped(self) -> tuple[str, ...]:
        """Optional names the loading context did not have."""
        return self._skipped

    @property
    def failure(self) -> RegistryBuildError | None:
        return self._failure

    @property
    def ok(self) -> bool:
        return self._failure is None

    @property
    def loader(self) -> str:
        return self._loader

    def __contains__(self, name: object) -> bool:
        return name in self._table

    def __len__(self) -> int:
        return len(self._table)

    def __iter__(self) -> Iterator[str]:
        return iter(self._table)

    def __repr__(self) -> str:
        state = "ok" if self.ok else "partial"
        return f"CanonicalRegistry({len(self)} entries, {state}, loader={self._loader!r})"


def _build_failure(name: str, loader: LoadingContext, exc: BaseException, added: int) -> RegistryBuildError:
    failure = RegistryBuildError(
        f"registry build stopped at {name}: {exc}", cause=exc
    ).with_context(marker=name, loader=loader.label, entries=added)
    logger.warning("registry_build_failed", **failure.to_dict())
    return failure


def build_registry(seed: SeedList, loader: LoadingContext) -> CanonicalRegistry:
    """
    Resolve ``seed`` through ``loader`` into a :class:`CanonicalRegistry`.

    Never raises for resolution problems. Missing optional markers are
    listed in ``registry.skipped``; any other failure stops the build, and
    the registry then holds only the entries added before it, with the
    error in ``registry.failure``.
    """
    table: dict[str, type] = {}
    skipped: list[str] = []

    def done(failure: RegistryBuildError | None = None) -> CanonicalRegistry:
        registry = CanonicalRegistry(
            table, skipped=tuple(skipped), failure=failure, loader=loader.label
        )
        logger.info(
            "registry_built",
            loader=loader.label,
            entries=len(registry),
            skipped=list(registry.skipped),
            ok=registry.ok,
        )
        return registry

    for name in seed.baseline:
        try:
            table[name] = loader.load(name)
        except Exception as e:
            return done(_build_failure(name, loader, e, len(table)))
        logger.debug("registry_entry_added", marker=name, loader=loader.label)

    for name in seed.optional:
        match loader.try_load(name):
            case Ok(obj) if is_marker_type(obj):
                table[name] = obj
                logger.debug("registry_entry_added", marker=name, loader=loader.label)
            case Ok(_):
                pass
            case Err(MarkerNotFoundError()):
                skipped.append(name)
                logger.debug("optional_marker_skipped", marker=name, loader=loader.label)
            case Err(error):
                return done(_build_failure(name, loader, error, len(table)))

    return done()


__all__ = ["CanonicalRegistry", "build_registry"]

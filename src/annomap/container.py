"""
Lazy-initialised dependency container.

:class:`AnnomapContainer` owns the one canonical registry a host process
needs and hands out resolvers wired to it. Components are created on first
property access.

Usage::

    from annomap.container import AnnomapContainer

    container = AnnomapContainer()
    resolver = container.resolver          # registry built here, once
    annotations = resolver.resolve_servlet_context(servlet_context)

    # Explicit settings / loader:
    container = AnnomapContainer(AnnomapSettings(strict=False), loader=my_loader)
"""

from __future__ import annotations

import threading

from annomap.loading import ImportLoader, LoadingContext
from annomap.logging import configure_logging
from annomap.registry import CanonicalRegistry, build_registry
from annomap.resolver import MarkerMapResolver
from annomap.seed import SeedList, faces_seed
from annomap.settings import AnnomapSettings, get_settings


class AnnomapContainer:
    """Lazy-initialised dependency container."""

    def __init__(
        self,
        settings: AnnomapSettings | None = None,
        *,
        loader: LoadingContext | None = None,
        seed: SeedList | None = None,
    ) -> None:
        self._settings = settings
        self._loader = loader
        self._seed = seed
        self._registry: CanonicalRegistry | None = None
        self._resolver: MarkerMapResolver | None = None
        self._lock = threading.RLock()

    # ── Properties (lazy) ────────────────────────────────────────

    @property
    def settings(self) -> AnnomapSettings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def loader(self) -> LoadingContext:
        """The host's authoritative loading context."""
        if self._loader is None:
            self._loader = ImportLoader()
        return self._loader

    @property
    def seed(self) -> SeedList:
        if self._seed is None:
            self._seed = faces_seed(self.settings.marker_package)
        return self._seed

    @property
    def registry(self) -> CanonicalRegistry:
        """Canonical registry; built on first access, never rebuilt."""
        with self._lock:
            if self._registry is None:
                self._registry = build_registry(self.seed, self.loader)
            return self._registry

    @property
    def resolver(self) -> MarkerMapResolver:
        """Resolver wired to :attr:`registry`; created once per container."""
        with self._lock:
            if self._resolver is None:
                settings = self.settings
                self._resolver = MarkerMapResolver(
                    self.registry,
                    write_back=settings.write_back,
                    atomic=settings.atomic,
                    strict=settings.strict,
                )
            return self._resolver

    def configure_logging(self) -> None:
        """Apply the logging section of the settings."""
        settings = self.settings
        configure_logging(
            level=settings.log_level,
            json_format=settings.json_logs,
            service=settings.service_name,
            cache_loggers=settings.cache_loggers,
        )


__all__ = ["AnnomapContainer"]

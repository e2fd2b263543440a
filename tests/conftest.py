"""
Shared pytest fixtures for annomap tests.

This module provides:
- Settings cache isolation
- A table-driven fake loading context
- The host registry and a foreign (isolated) copy of the faces markers
"""

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import pytest

from annomap.errors import MarkerNotFoundError
from annomap.loading import BaseLoader, ImportLoader, IsolatedLoader
from annomap.registry import CanonicalRegistry, build_registry
from annomap.seed import SeedList, faces_seed
from annomap.settings import clear_settings_cache


# =============================================================================
# Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def _clean_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """Fresh settings per test, unaffected by ANNOMAP_* vars or a local .env."""
    for key in list(os.environ):
        if key.startswith("ANNOMAP_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    clear_settings_cache()
    yield
    clear_settings_cache()


# =============================================================================
# Loaders
# =============================================================================


class FakeLoader(BaseLoader):
    """Loading context backed by a dict; ``errors`` entries raise on load."""

    def __init__(
        self,
        table: Mapping[str, Any],
        *,
        errors: Mapping[str, Exception] | None = None,
        label: str = "fake",
    ):
        self.label = label
        self.table = dict(table)
        self.errors = dict(errors or {})
        self.calls: list[str] = []

    def load(self, name: str) -> Any:
        self.calls.append(name)
        if name in self.errors:
            raise self.errors[name]
        if name not in self.table:
            raise MarkerNotFoundError(f"{name} not found").with_context(marker=name, loader=self.label)
        return self.table[name]


def make_marker(name: str) -> type:
    """A fresh marker class whose qualified name is ``name``."""
    module, _, qualname = name.rpartition(".")
    return type(qualname, (), {"__marker__": True, "__module__": module, "__qualname__": qualname})


@pytest.fixture
def fake_loader_cls():
    return FakeLoader


@pytest.fixture
def marker_factory():
    return make_marker


# =============================================================================
# Registries and markers
# =============================================================================


@pytest.fixture
def seed() -> SeedList:
    return faces_seed()


@pytest.fixture
def host_registry(seed: SeedList) -> CanonicalRegistry:
    """Canonical registry resolved through the regular import system."""
    return build_registry(seed, ImportLoader())


@pytest.fixture
def foreign_loader() -> IsolatedLoader:
    return IsolatedLoader("plugin")


@pytest.fixture
def foreign_faces(foreign_loader: IsolatedLoader):
    """A private copy of ``annomap.faces``: same names, different classes."""
    return foreign_loader.load_module("annomap.faces")


@pytest.fixture
def small_registry(marker_factory) -> CanonicalRegistry:
    """{"MarkerA": HA, "MarkerB": HB} style registry."""
    loader = FakeLoader(
        {
            "pkg.MarkerA": marker_factory("pkg.MarkerA"),
            "pkg.MarkerB": marker_factory("pkg.MarkerB"),
        }
    )
    return build_registry(SeedList(baseline=("pkg.MarkerA", "pkg.MarkerB")), loader)

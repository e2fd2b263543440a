"""
Tests for annomap.loading.

Covers:
- ImportLoader resolution and "not found" classification
- IsolatedLoader yields distinct class objects with identical names
- IsolatedLoader over a vendored source tree
- try_load result values
"""

import textwrap

import pytest

from annomap.errors import MarkerNotFoundError
from annomap.faces import FacesComponent
from annomap.handles import is_marker_type, qualified_name
from annomap.loading import ImportLoader, IsolatedLoader, LoadingContext
from annomap.result import Err, Ok


class TestImportLoader:
    """The host loading context."""

    def test_load_host_marker(self):
        assert ImportLoader().load("annomap.faces.FacesComponent") is FacesComponent

    def test_missing_attribute(self):
        with pytest.raises(MarkerNotFoundError) as exc_info:
            ImportLoader().load("annomap.faces.DoesNotExist")
        assert exc_info.value.context.marker == "annomap.faces.DoesNotExist"
        assert exc_info.value.context.loader == "host"

    def test_missing_module(self):
        with pytest.raises(MarkerNotFoundError):
            ImportLoader().load("no_such_package_xyz.markers.Thing")

    def test_nested_qualname(self):
        """Names may point at nested classes."""
        loader = ImportLoader()
        assert loader.load("annomap.faces.Marker.__call__") is not None

    def test_broken_dependency_is_not_not_found(self):
        """A module failing on its own imports is an unexpected error."""

        def import_module(name):
            raise ModuleNotFoundError("No module named 'dep'", name="dep")

        loader = ImportLoader(import_module=import_module)
        with pytest.raises(ModuleNotFoundError):
            loader.load("pkg.markers.Thing")

    def test_try_load_ok(self):
        result = ImportLoader().try_load("annomap.faces.FacesComponent")
        assert result == Ok(FacesComponent)

    def test_try_load_not_found(self):
        result = ImportLoader().try_load("annomap.faces.Nope")
        assert isinstance(result, Err)
        assert isinstance(result.error, MarkerNotFoundError)

    def test_try_load_unexpected(self):
        def import_module(name):
            raise ImportError("initialisation failed")

        result = ImportLoader(import_module=import_module).try_load("pkg.M")
        assert result.is_err()
        assert not isinstance(result.error, MarkerNotFoundError)

    def test_satisfies_protocol(self):
        assert isinstance(ImportLoader(), LoadingContext)
        assert isinstance(IsolatedLoader(), LoadingContext)


class TestIsolatedLoader:
    """Private loading contexts."""

    def test_same_name_different_identity(self, foreign_loader):
        foreign = foreign_loader.load("annomap.faces.FacesComponent")
        assert foreign is not FacesComponent
        assert qualified_name(foreign) == qualified_name(FacesComponent)
        assert is_marker_type(foreign)

    def test_module_cached_per_loader(self, foreign_loader):
        first = foreign_loader.load("annomap.faces.FacesComponent")
        second = foreign_loader.load("annomap.faces.FacesComponent")
        assert first is second

    def test_separate_loaders_are_separate(self):
        a = IsolatedLoader("a").load("annomap.faces.FacesComponent")
        b = IsolatedLoader("b").load("annomap.faces.FacesComponent")
        assert a is not b

    def test_does_not_touch_sys_modules(self, foreign_loader):
        import sys

        before = sys.modules["annomap.faces"]
        foreign_loader.load("annomap.faces.FacesComponent")
        assert sys.modules["annomap.faces"] is before

    def test_vendored_tree(self, tmp_path):
        """Modules are located under the given path only."""
        pkg = tmp_path / "vendor" / "legacyfaces"
        pkg.mkdir(parents=True)
        (pkg / "__init__.py").write_text("")
        (pkg / "api.py").write_text(
            textwrap.dedent(
                """
                class FacesComponent:
                    __marker__ = True
                """
            )
        )
        loader = IsolatedLoader("vendor", path=[str(tmp_path / "vendor")])

        marker = loader.load("legacyfaces.api.FacesComponent")
        assert qualified_name(marker) == "legacyfaces.api.FacesComponent"
        with pytest.raises(MarkerNotFoundError):
            loader.load("legacyfaces.api.FaceletsResourceResolver")
        with pytest.raises(MarkerNotFoundError):
            loader.load("legacyfaces.missing.Thing")

    def test_load_module_missing(self, tmp_path):
        loader = IsolatedLoader("empty", path=[str(tmp_path)])
        with pytest.raises(MarkerNotFoundError):
            loader.load_module("nothing.here")

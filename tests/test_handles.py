"""Tests for annomap.handles and the host marker API."""

import pytest

from annomap.faces import FacesComponent, Marker
from annomap.handles import MarkerHandle, is_marker_type, marker_name, qualified_name
from annomap.seed import SeedList, faces_seed


class TestMarkerName:
    def test_class(self):
        assert marker_name(FacesComponent) == "annomap.faces.FacesComponent"

    def test_handle(self):
        handle = MarkerHandle("x.Y", FacesComponent)
        assert marker_name(handle) == "x.Y"

    def test_rejects_non_handles(self):
        with pytest.raises(TypeError):
            marker_name("annomap.faces.FacesComponent")


class TestMarkerHandle:
    def test_of(self):
        handle = MarkerHandle.of(FacesComponent, context="host")
        assert handle.name == qualified_name(FacesComponent)
        assert handle.marker is FacesComponent
        assert handle.context == "host"

    def test_context_label_not_compared(self):
        assert MarkerHandle.of(FacesComponent, context="a") == MarkerHandle.of(FacesComponent, context="b")

    def test_distinct_class_objects_differ(self, foreign_faces):
        """Same name, different loading context: not equal."""
        host = MarkerHandle.of(FacesComponent)
        foreign = MarkerHandle.of(foreign_faces.FacesComponent)
        assert host.name == foreign.name
        assert host != foreign
        assert len({host, foreign}) == 2


class TestIsMarkerType:
    def test_faces_markers(self, foreign_faces):
        assert is_marker_type(FacesComponent)
        assert is_marker_type(foreign_faces.FacesComponent)

    def test_non_markers(self):
        assert not is_marker_type(int)
        assert not is_marker_type(FacesComponent())
        assert not is_marker_type("annomap.faces.FacesComponent")


class TestMarkerDecorator:
    def test_records_markers_on_class(self):
        @FacesComponent("ui.calendar")
        class Calendar:
            pass

        assert [m.value for m in Calendar.__markers__] == ["ui.calendar"]
        assert isinstance(Calendar.__markers__[0], Marker)

    def test_subclass_does_not_inherit_list(self):
        @FacesComponent("base")
        class Base:
            pass

        @FacesComponent("child")
        class Child(Base):
            pass

        assert [m.value for m in Base.__markers__] == ["base"]
        assert [m.value for m in Child.__markers__] == ["child"]


class TestSeed:
    def test_baseline_before_optional(self):
        seed = faces_seed()
        assert seed.baseline == (
            "annomap.faces.FacesComponent",
            "annomap.faces.FacesConverter",
            "annomap.faces.FacesValidator",
            "annomap.faces.FacesRenderer",
            "annomap.faces.NamedEvent",
            "annomap.faces.FacesBehavior",
            "annomap.faces.FacesBehaviorRenderer",
        )
        assert seed.optional == ("annomap.faces.FaceletsResourceResolver",)
        assert seed.names() == seed.baseline + seed.optional
        assert len(seed) == 8

    def test_package_prefix(self):
        seed = faces_seed("vendor.faces")
        assert all(name.startswith("vendor.faces.") for name in seed.names())

    def test_seed_is_frozen(self):
        with pytest.raises(AttributeError):
            SeedList(("a.B",)).baseline = ()

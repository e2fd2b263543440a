"""
Host marker API.

Marker types tag extension-point classes (components, converters,
validators, renderers, ...). They carry no behaviour of their own; the
external scanner groups tagged classes by marker type and publishes the
grouping into a scope.

A plugin that vendors its own copy of this module gets marker classes with
the same names but a different identity, which is why
:mod:`annomap.registry` keys everything by name.

Usage::

    from annomap.faces import FacesComponent

    @FacesComponent("ui.calendar")
    class Calendar:
        ...

    Calendar.__markers__   # [FacesComponent(value='ui.calendar')]
"""

from __future__ import annotations

from typing import Any


class Marker:
    """Base class for marker types.

    Instances are used as class decorators and record themselves on the
    decorated class under ``__markers__``.
    """

    __marker__ = True

    def __init__(self, value: str | None = None, **attributes: Any):
        self.value = value
        self.attributes = attributes

    def __call__(self, cls: type) -> type:
        markers = list(cls.__dict__.get("__markers__", ()))
        markers.append(self)
        cls.__markers__ = markers
        return cls

    def __repr__(self) -> str:
        return f"{type(self).__name__}(value={self.value!r})"


# Baseline marker types, present since the first API version.


class FacesComponent(Marker):
    """Marks a UI component class."""


class FacesConverter(Marker):
    """Marks a value converter."""


class FacesValidator(Marker):
    """Marks a value validator."""


class FacesRenderer(Marker):
    """Marks a component renderer."""


class NamedEvent(Marker):
    """Marks a component system event with a short name."""


class FacesBehavior(Marker):
    """Marks a client behavior."""


class FacesBehaviorRenderer(Marker):
    """Marks a client behavior renderer."""


# Added in a later API version; older vendored copies do not define it.


class FaceletsResourceResolver(Marker):
    """Marks a view resource resolver."""


BASELINE_MARKERS = (
    "FacesComponent",
    "FacesConverter",
    "FacesValidator",
    "FacesRenderer",
    "NamedEvent",
    "FacesBehavior",
    "FacesBehaviorRenderer",
)

OPTIONAL_MARKERS = ("FaceletsResourceResolver",)

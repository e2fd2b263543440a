"""annomap -- cross-loader marker-type identity for plugin hosts.

Manifesto:
    A plugin host can see the same marker type (same fully-qualified name)
    as several different class objects, one per loading context. Lookups
    keyed by class then silently miss. annomap pins every known marker name
    to the host's own class and rewrites the scanner's annotation map onto
    those classes, once per scope.

Architecture::

    errors.py      AnnomapError hierarchy
    result.py      Ok / Err envelope for fallible loads
    logging.py     structlog configuration
    settings.py    AnnomapSettings (ANNOMAP_* env vars)
    faces.py       Host marker API (baseline + optional marker types)
    handles.py     MarkerHandle, marker_name, is_marker_type
    loading.py     ImportLoader (host), IsolatedLoader (plugin copies)
    seed.py        Ordered marker seed list
    registry.py    CanonicalRegistry + build_registry
    remap.py       remap(preliminary, registry)
    scope.py       Scope protocol + adapters, attribute names, publish
    resolver.py    MarkerMapResolver (once-per-scope conversion)
    container.py   AnnomapContainer (lazy wiring)

Tags:
    annomap, plugin-hosting, class-loading, registry, caching
"""

from annomap.container import AnnomapContainer
from annomap.errors import (
    AnnomapError,
    MarkerNotFoundError,
    PreliminaryMappingMissingError,
    RegistryBuildError,
)
from annomap.handles import MarkerHandle, is_marker_type, marker_name
from annomap.loading import ImportLoader, IsolatedLoader, LoadingContext
from annomap.registry import CanonicalRegistry, build_registry
from annomap.remap import remap
from annomap.resolver import MarkerMapResolver
from annomap.scope import (
    ANNOTATION_MAP_CONVERTED,
    FACES_ANNOTATIONS_SC_ATTR,
    ApplicationMapScope,
    AttributeScope,
    InMemoryScope,
    Scope,
    publish,
)
from annomap.seed import SeedList, faces_seed
from annomap.settings import AnnomapSettings, get_settings

__version__ = "0.1.0"

__all__ = [
    "AnnomapContainer",
    "AnnomapError",
    "MarkerNotFoundError",
    "PreliminaryMappingMissingError",
    "RegistryBuildError",
    "MarkerHandle",
    "is_marker_type",
    "marker_name",
    "ImportLoader",
    "IsolatedLoader",
    "LoadingContext",
    "CanonicalRegistry",
    "build_registry",
    "remap",
    "MarkerMapResolver",
    "ANNOTATION_MAP_CONVERTED",
    "FACES_ANNOTATIONS_SC_ATTR",
    "ApplicationMapScope",
    "AttributeScope",
    "InMemoryScope",
    "Scope",
    "publish",
    "SeedList",
    "faces_seed",
    "AnnomapSettings",
    "get_settings",
]

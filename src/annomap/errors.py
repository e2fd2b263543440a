"""
Structured error types for annomap.

Every failure the library can observe is typed, categorised and carries a
small context record so that it can be logged as structured fields instead of
a bare message.

Manifesto:
    - **Typed hierarchy:** loading, registry and scope failures are distinct
    - **Rich context:** errors know which marker, loader or scope attribute
      was involved
    - **Error chaining:** the underlying exception is kept as ``cause``

Architecture:
    ::

        AnnomapError (category, context, cause)
        ├── LoadingError            (LOADING)
        │   └── MarkerNotFoundError
        ├── RegistryBuildError      (REGISTRY)
        ├── ScopeError              (SCOPE)
        │   └── PreliminaryMappingMissingError
        └── ConfigError             (CONFIG)

Examples:
    >>> err = MarkerNotFoundError("no such marker").with_context(marker="a.B")
    >>> err.context.marker
    'a.B'
    >>> err.to_dict()["category"]
    'LOADING'

Tags:
    error-handling, exception-hierarchy, error-context, annomap

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Error categories used for classification in logs."""

    LOADING = "LOADING"        # Marker type resolution
    REGISTRY = "REGISTRY"      # Canonical registry construction
    SCOPE = "SCOPE"            # Scope attributes, preconditions
    CONFIG = "CONFIG"          # Invalid settings
    INTERNAL = "INTERNAL"      # Bugs, unexpected state


@dataclass
class ErrorContext:
    """
    Structured metadata attached to an :class:`AnnomapError`.

    Attributes:
        marker: Fully-qualified marker-type name involved, if any
        loader: Label of the loading context involved, if any
        scope: Kind of scope (``application``, ``servlet_context``, ...)
        attribute: Scope attribute name involved
        metadata: Additional key-value pairs
    """

    marker: str | None = None
    loader: str | None = None
    scope: str | None = None
    attribute: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["marker", "loader", "scope", "attribute"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class AnnomapError(Exception):
    """
    Base exception for all annomap errors.

    Subclasses set ``default_category``; callers may override it per
    instance. When ``cause`` is given it is also chained as ``__cause__`` so
    tracebacks show the original failure.
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> AnnomapError:
        """
        Add context to this error (fluent API).

        Usage:
            raise MarkerNotFoundError("missing").with_context(
                marker="annomap.faces.FacesComponent",
                loader="host",
            )
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = repr(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# LOADING ERRORS
# =============================================================================


class LoadingError(AnnomapError):
    """A loading context failed to resolve a marker type."""

    default_category = ErrorCategory.LOADING


class MarkerNotFoundError(LoadingError):
    """
    The named marker type does not exist in the loading context.

    For optional marker types this is expected on older API versions and is
    recovered by leaving the entry out of the canonical registry.
    """


# =============================================================================
# REGISTRY ERRORS
# =============================================================================


class RegistryBuildError(AnnomapError):
    """
    Canonical registry construction stopped early.

    Never raised by :func:`annomap.registry.build_registry`; it is stored on
    the partially built registry as ``failure``.
    """

    default_category = ErrorCategory.REGISTRY


# =============================================================================
# SCOPE ERRORS
# =============================================================================


class ScopeError(AnnomapError):
    """Scope attribute problems."""

    default_category = ErrorCategory.SCOPE


class PreliminaryMappingMissingError(ScopeError):
    """
    The scope has no preliminary marker mapping to convert.

    The scanner must publish the mapping before the first resolve; hitting
    this error means the host violated that ordering.
    """


# =============================================================================
# CONFIG ERRORS
# =============================================================================


class ConfigError(AnnomapError):
    """Invalid configuration."""

    default_category = ErrorCategory.CONFIG


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "AnnomapError",
    "LoadingError",
    "MarkerNotFoundError",
    "RegistryBuildError",
    "ScopeError",
    "PreliminaryMappingMissingError",
    "ConfigError",
]

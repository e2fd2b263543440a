"""Ordered marker-type seed lists for the canonical registry."""

from __future__ import annotations

from dataclasses import dataclass

from annomap.faces import BASELINE_MARKERS, OPTIONAL_MARKERS


@dataclass(frozen=True)
class SeedList:
    """
    Marker-type names to resolve, baseline first.

    ``baseline`` names exist in every supported API version and must all
    resolve; ``optional`` names were introduced later and are skipped when
    the active loading context does not have them.
    """

    baseline: tuple[str, ...]
    optional: tuple[str, ...] = ()

    def names(self) -> tuple[str, ...]:
        return self.baseline + self.optional

    def __len__(self) -> int:
        return len(self.baseline) + len(self.optional)


def faces_seed(package: str = "annomap.faces") -> SeedList:
    """The faces marker contract, resolved under ``package``."""
    return SeedList(
        baseline=tuple(f"{package}.{name}" for name in BASELINE_MARKERS),
        optional=tuple(f"{package}.{name}" for name in OPTIONAL_MARKERS),
    )


__all__ = ["SeedList", "faces_seed"]

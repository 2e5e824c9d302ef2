"""Rule and result types for category scoring."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True)
class TraitWeight:
    trait: str
    weight: float
    min: int
    max: int


@dataclass(frozen=True)
class CategoryRule:
    """Static scoring rule for one category."""

    category: str
    primary_traits: tuple[TraitWeight, ...]
    secondary_traits: tuple[TraitWeight, ...] = ()
    keywords: tuple[str, ...] = ()
    processing_multipliers: Mapping[str, float] = field(default_factory=lambda: MappingProxyType({}))
    roast_multipliers: Mapping[str, float] = field(default_factory=lambda: MappingProxyType({}))
    minimum_threshold: float = 0.5


@dataclass(frozen=True)
class CategorySelection:
    """Outcome of category selection for one record."""

    primary: str
    secondary: str | None
    scores: Mapping[str, float]

    @property
    def primary_score(self) -> float:
        return self.scores.get(self.primary, 0.0)

    @property
    def categories(self) -> tuple[str, ...]:
        if self.secondary:
            return (self.primary, self.secondary)
        return (self.primary,)

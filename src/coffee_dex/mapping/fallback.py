"""Deterministic selection used when no refiner answer is available."""

from __future__ import annotations

from coffee_dex.providers.base import Selection
from coffee_dex.schema import Candidate, TastingRecord, TraitAnnotation
from coffee_dex.scoring.types import CategorySelection

FALLBACK_CONFIDENCE_FACTOR = 0.9
ANNOTATION_MIN_INTENSITY = 7

# trait field -> (annotation trait, target attribute, reasoning)
TRAIT_TARGETS = {
    "sweetness": ("sweetness", "HP", "High sweetness provides sustained energy like HP"),
    "bitterness": ("bitterness", "Attack", "Bold bitterness represents attacking flavors"),
    "body": ("body", "Defense", "Full body provides defensive structure"),
    "citrus_fruits_intensity": ("citrus", "Speed", "Bright citrus notes provide quick, energetic speed"),
    "aromatic_intensity": ("aroma", "Special", "Complex aroma represents special characteristics"),
}


class RuleBasedFallbackSelector:
    """Picks the first shortlist entry and derives confidence from the score."""

    def select(
        self,
        record: TastingRecord,
        shortlist: list[Candidate],
        categories: CategorySelection,
    ) -> Selection:
        if not shortlist:
            raise ValueError("fallback selection needs at least one candidate")

        candidate = shortlist[0]
        confidence = min(1.0, max(0.0, categories.primary_score * FALLBACK_CONFIDENCE_FACTOR))
        description = (
            f"Type-based mapping: {candidate.name} ({candidate.type_label}-type) matches coffee's "
            f"{categories.primary} characteristics with {confidence * 100:.0f}% confidence"
        )
        return Selection(
            candidate=candidate,
            confidence=confidence,
            description=description,
            trait_mapping=build_trait_annotations(record),
            source="fallback",
        )


def build_trait_annotations(record: TastingRecord) -> list[TraitAnnotation]:
    annotations = []
    for field_name, (trait, target, reasoning) in TRAIT_TARGETS.items():
        if record.tasting_traits.value(field_name) > ANNOTATION_MIN_INTENSITY:
            annotations.append(TraitAnnotation(trait=trait, target_attribute=target, reasoning=reasoning))
    return annotations

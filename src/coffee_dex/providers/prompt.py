"""Prompt construction and strict response parsing for refiners."""

from __future__ import annotations

import re

from pydantic import ValidationError as PydanticValidationError

from coffee_dex.exceptions import ExternalServiceError
from coffee_dex.schema import Candidate, RefinerResponse, TastingRecord

# (trait, label) pairs summarised in the prompt when intensity >= 7.
_DOMINANT_TRAITS = (
    ("sweetness", "high sweetness"),
    ("bitterness", "high bitterness"),
    ("citrus_fruits_intensity", "high citrus"),
    ("florality", "high florality"),
    ("body", "full body"),
    ("aromatic_intensity", "high aroma"),
)
DOMINANT_TRAIT_MIN = 7

_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)

REFINER_PROMPT = """You are a Pokemon expert specializing in coffee-Pokemon mappings.
Given a coffee's characteristics, select the best match from the available Pokemon and write a Pokedex-style description.

Coffee: {name} from {origin}
Roast Level: {roast_level}
Processing: {processing}
Tasting Notes: {notes}
Dominant Traits: {traits}

Available Pokemon: {candidates}

Respond with ONLY valid JSON:
{{
  "selected_identity": "exact name from Available Pokemon",
  "confidence": 0.95,
  "description": "Pokedex-style description connecting coffee traits to Pokemon characteristics",
  "trait_mapping": [
    {{"trait": "sweetness", "target_attribute": "HP", "reasoning": "sweet coffee provides sustained energy"}},
    {{"trait": "bitterness", "target_attribute": "Attack", "reasoning": "bitterness represents bold, attacking flavors"}}
  ]
}}"""


def summarize_traits(record: TastingRecord) -> str:
    traits = record.tasting_traits
    dominant = [
        f"{label} ({traits.value(trait)})"
        for trait, label in _DOMINANT_TRAITS
        if traits.value(trait) >= DOMINANT_TRAIT_MIN
    ]
    return ", ".join(dominant) if dominant else "balanced traits"


def build_prompt(record: TastingRecord, shortlist: list[Candidate]) -> str:
    return REFINER_PROMPT.format(
        name=record.name or "Unnamed coffee",
        origin=record.origin or "unknown origin",
        roast_level=record.roast_level,
        processing=record.processing_method or "unknown",
        notes=", ".join(record.tasting_notes) or "none",
        traits=summarize_traits(record),
        candidates=", ".join(candidate.name for candidate in shortlist),
    )


def parse_response(raw: str) -> RefinerResponse:
    """Validate a refiner's JSON body against the expected shape.

    Raises:
        ExternalServiceError: If the body is empty, not JSON, or the wrong shape.
    """
    text = _FENCE.sub("", (raw or "").strip()).strip()
    if not text:
        raise ExternalServiceError("empty refiner response")
    try:
        return RefinerResponse.model_validate_json(text)
    except PydanticValidationError as e:
        raise ExternalServiceError(f"invalid refiner response: {e.error_count()} error(s)") from e


def match_candidate(selected: str, shortlist: list[Candidate]) -> Candidate | None:
    wanted = selected.strip().lower()
    for candidate in shortlist:
        if candidate.name.lower() == wanted:
            return candidate
    return None

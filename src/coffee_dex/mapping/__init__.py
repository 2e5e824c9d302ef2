"""Candidate selection, reservation and assembly."""

from coffee_dex.mapping.assembler import MappingAssembler, level_for_rating
from coffee_dex.mapping.fallback import RuleBasedFallbackSelector, build_trait_annotations
from coffee_dex.mapping.shortlist import CandidateSelector
from coffee_dex.mapping.uniqueness import UniquenessEnforcer, shortlisted_category

__all__ = [
    "CandidateSelector",
    "MappingAssembler",
    "RuleBasedFallbackSelector",
    "UniquenessEnforcer",
    "build_trait_annotations",
    "level_for_rating",
    "shortlisted_category",
]

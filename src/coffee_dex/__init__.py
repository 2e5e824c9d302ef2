"""coffee-dex: Assign every brewed coffee its own collectible identity."""

from coffee_dex.core import MappingService, map_coffee
from coffee_dex.schema import Candidate, MappingRecord, TastingRecord, TastingTraits, TraitAnnotation

__version__ = "0.1.0"

__all__ = [
    "map_coffee",
    "Candidate",
    "MappingRecord",
    "MappingService",
    "TastingRecord",
    "TastingTraits",
    "TraitAnnotation",
    "__version__",
]

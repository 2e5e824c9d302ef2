"""Data models for coffee-dex."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from coffee_dex.exceptions import ValidationError

RoastLevel = Literal["light", "medium", "dark", "light-medium", "medium-dark", "unclear"]
ProcessingMethod = Literal["washed", "natural", "honey", "coferment", "experimental"]

TRAIT_NAMES = (
    "berry_intensity",
    "stonefruit_intensity",
    "roast_intensity",
    "citrus_fruits_intensity",
    "bitterness",
    "florality",
    "spice",
    "sweetness",
    "aromatic_intensity",
    "savory",
    "body",
    "cleanliness",
)
MAX_TASTING_NOTES = 5

_Intensity = Field(default=0, ge=0, le=10)


class TastingTraits(BaseModel):
    """Twelve sensory intensities, each on a 0-10 scale."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    berry_intensity: int = _Intensity
    stonefruit_intensity: int = _Intensity
    roast_intensity: int = _Intensity
    citrus_fruits_intensity: int = _Intensity
    bitterness: int = _Intensity
    florality: int = _Intensity
    spice: int = _Intensity
    sweetness: int = _Intensity
    aromatic_intensity: int = _Intensity
    savory: int = _Intensity
    body: int = _Intensity
    cleanliness: int = _Intensity

    def value(self, trait: str) -> int:
        """Return the intensity of a trait by name, 0 for unknown names."""
        if trait not in TRAIT_NAMES:
            return 0
        return getattr(self, trait)


class TastingRecord(BaseModel):
    """One brewed coffee's sensory profile."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str = ""
    origin: str | None = None
    roaster: str | None = None
    roast_level: RoastLevel = "unclear"
    processing_method: ProcessingMethod | None = None
    tasting_notes: tuple[str, ...] = ()
    tasting_traits: TastingTraits = Field(default_factory=TastingTraits)
    rating: int = Field(default=0, ge=0, le=10)

    @field_validator("roast_level", mode="before")
    @classmethod
    def _normalize_roast_level(cls, value: Any) -> Any:
        if value is None or value == "":
            return "unclear"
        if isinstance(value, str):
            return "-".join(value.strip().lower().replace("_", " ").split())
        return value

    @field_validator("processing_method", mode="before")
    @classmethod
    def _normalize_processing_method(cls, value: Any) -> Any:
        if value == "":
            return None
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("tasting_notes", mode="before")
    @classmethod
    def _drop_blank_notes(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, (list, tuple)):
            notes = tuple(str(note).strip() for note in value if note and str(note).strip())
            if len(notes) > MAX_TASTING_NOTES:
                raise ValueError(f"at most {MAX_TASTING_NOTES} tasting notes are allowed")
            return notes
        return value

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "TastingRecord":
        """Validate raw input, raising the package's ValidationError on bad data."""
        try:
            return cls.model_validate(payload)
        except PydanticValidationError as e:
            raise ValidationError(_format_errors(e)) from e


class Candidate(BaseModel):
    """A collectible identity that can be assigned to exactly one coffee."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    categories: tuple[str, ...]
    description: str | None = None
    sprite_path: str | None = None

    @property
    def primary_category(self) -> str:
        return self.categories[0] if self.categories else ""

    @property
    def type_label(self) -> str:
        return "/".join(category.capitalize() for category in self.categories)

    def has_category(self, category: str) -> bool:
        return category.lower() in self.categories


class TraitAnnotation(BaseModel):
    """How one coffee trait maps onto a candidate attribute."""

    trait: str
    target_attribute: str
    reasoning: str


class MappingRecord(BaseModel):
    """Persisted, unique association between a coffee and a candidate."""

    id: str
    coffee_id: str
    candidate_id: int
    candidate_name: str
    nickname: str = ""
    level: int
    confidence: float = Field(ge=0.0, le=1.0)
    description: str
    trait_mapping: list[TraitAnnotation] = Field(default_factory=list)
    created_at: datetime


class RefinerResponse(BaseModel):
    """Structured answer expected back from a refiner."""

    selected_identity: str = Field(min_length=1)
    confidence: float = Field(ge=0.0, le=1.0)
    description: str
    trait_mapping: list[TraitAnnotation] = Field(default_factory=list)


def _format_errors(error: PydanticValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(loc) for loc in item["loc"]) or "record"
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)

"""Builds the persisted mapping record."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Callable

from coffee_dex.providers.base import Selection
from coffee_dex.schema import Candidate, MappingRecord, TastingRecord
from coffee_dex.scoring.engine import CategoryEngine
from coffee_dex.scoring.types import CategorySelection

LEVEL_PER_RATING_POINT = 5


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


def level_for_rating(rating: int) -> int:
    return rating * LEVEL_PER_RATING_POINT


class MappingAssembler:
    def __init__(
        self,
        engine: CategoryEngine,
        *,
        clock: Callable[[], datetime] = _utc_now,
        id_factory: Callable[[], str] = _new_id,
    ):
        self.engine = engine
        self.clock = clock
        self.id_factory = id_factory

    def rationale(self, record: TastingRecord, categories: CategorySelection) -> str:
        text = self.engine.describe(categories.primary, record)
        if categories.secondary:
            secondary = self.engine.describe(categories.secondary, record)
            text += f" and {secondary[:1].lower()}{secondary[1:]}"
        return text + "."

    def assemble(
        self,
        record: TastingRecord,
        candidate: Candidate,
        selection: Selection,
        categories: CategorySelection,
    ) -> MappingRecord:
        return MappingRecord(
            id=self.id_factory(),
            coffee_id=record.id,
            candidate_id=candidate.id,
            candidate_name=candidate.name,
            nickname="",
            level=level_for_rating(record.rating),
            confidence=selection.confidence,
            description=f"{selection.description}\n\nCategory analysis: {self.rationale(record, categories)}",
            trait_mapping=[item.model_copy() for item in selection.trait_mapping],
            created_at=self.clock(),
        )

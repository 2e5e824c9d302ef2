"""Storage interfaces consumed by the mapping pipeline."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum

from coffee_dex.schema import Candidate, MappingRecord, TastingRecord


class Reservation(Enum):
    """Outcome of an atomic reserve-and-create call."""

    RESERVED = "reserved"
    CANDIDATE_USED = "candidate_used"
    COFFEE_MAPPED = "coffee_mapped"


class TastingRecordRepository(ABC):
    """Source of tasting records."""

    @abstractmethod
    def get_by_id(self, record_id: str) -> TastingRecord:
        """Return the record or raise NotFoundError."""
        pass

    @abstractmethod
    def add(self, record: TastingRecord) -> TastingRecord:
        pass


class CandidateRepository(ABC):
    """Candidate reference data plus the persisted registry of used candidates.

    ``reserve_and_create`` is the only write path for mappings and must be
    atomic: two callers racing for one candidate can never both get
    ``Reservation.RESERVED``.
    """

    def __init__(self, candidates: tuple[Candidate, ...]):
        self.candidates = candidates
        self._by_id = {candidate.id: candidate for candidate in candidates}

    def all_candidates(self) -> list[Candidate]:
        return list(self.candidates)

    def get_candidate(self, candidate_id: int) -> Candidate | None:
        return self._by_id.get(candidate_id)

    def get_by_category(self, category: str) -> list[Candidate]:
        tag = category.strip().lower()
        return [candidate for candidate in self.candidates if candidate.has_category(tag)]

    @abstractmethod
    def is_used(self, candidate_id: int) -> bool:
        pass

    @abstractmethod
    def used_candidate_ids(self) -> set[int]:
        pass

    @abstractmethod
    def reserve_and_create(self, mapping: MappingRecord) -> Reservation:
        """Persist ``mapping`` unless its candidate or coffee is already taken.

        Raises:
            PersistenceError: If storage fails for any other reason.
        """
        pass

    @abstractmethod
    def get_mapping(self, coffee_id: str) -> MappingRecord:
        """Return the mapping for a coffee or raise NotFoundError."""
        pass

    @abstractmethod
    def list_mappings(self) -> list[MappingRecord]:
        """Return every mapping, newest first."""
        pass

    @abstractmethod
    def update_nickname(self, coffee_id: str, nickname: str) -> MappingRecord:
        pass

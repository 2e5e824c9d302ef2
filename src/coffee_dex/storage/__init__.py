"""Storage backends for coffee-dex."""

from coffee_dex.storage.base import CandidateRepository, Reservation, TastingRecordRepository
from coffee_dex.storage.memory import InMemoryCandidateRepository, InMemoryTastingRecordRepository

__all__ = [
    "CandidateRepository",
    "InMemoryCandidateRepository",
    "InMemoryTastingRecordRepository",
    "Reservation",
    "TastingRecordRepository",
]

"""Atomic candidate reservation with same-category alternatives."""

from __future__ import annotations

import logging
from typing import Callable

from coffee_dex.exceptions import ExhaustionError
from coffee_dex.schema import Candidate, MappingRecord
from coffee_dex.scoring.types import CategorySelection
from coffee_dex.storage.base import CandidateRepository, Reservation

logger = logging.getLogger(__name__)

MappingBuilder = Callable[[Candidate], MappingRecord]


def shortlisted_category(candidate: Candidate, categories: CategorySelection) -> str:
    """Return the selected category a candidate was shortlisted under.

    Candidates that carry neither selected tag came from the baseline list;
    their own primary tag is used.
    """
    for category in categories.categories:
        if candidate.has_category(category):
            return category
    return candidate.primary_category


class UniquenessEnforcer:
    """Reserves a candidate so that no two coffees ever share one.

    The check-and-claim happens inside ``CandidateRepository.reserve_and_create``;
    ``is_used`` is only used to skip alternatives that are known to be taken.
    """

    def __init__(self, repository: CandidateRepository):
        self.repository = repository

    def reserve(
        self,
        chosen: Candidate,
        categories: CategorySelection,
        build: MappingBuilder,
    ) -> MappingRecord:
        """Persist a mapping for ``chosen`` or for the first free alternative.

        Alternatives are searched in the category ``chosen`` was shortlisted
        under, not in its first tag.

        Raises:
            ExhaustionError: If every candidate in that category is taken.
            PersistenceError: If storage fails.
        """
        mapping = build(chosen)
        outcome = self.repository.reserve_and_create(mapping)
        if outcome is Reservation.RESERVED:
            return mapping
        if outcome is Reservation.COFFEE_MAPPED:
            return self.repository.get_mapping(mapping.coffee_id)

        category = shortlisted_category(chosen, categories)
        logger.info("candidate %s (%s) already reserved, searching %s", chosen.name, chosen.id, category)

        for alternative in self.repository.get_by_category(category):
            if alternative.id == chosen.id or self.repository.is_used(alternative.id):
                continue
            mapping = build(alternative)
            outcome = self.repository.reserve_and_create(mapping)
            if outcome is Reservation.RESERVED:
                logger.info(
                    "reserved alternative %s (%s) for coffee %s",
                    alternative.name,
                    alternative.id,
                    mapping.coffee_id,
                )
                return mapping
            if outcome is Reservation.COFFEE_MAPPED:
                return self.repository.get_mapping(mapping.coffee_id)

        logger.warning("no unused candidates left in category %s", category)
        raise ExhaustionError(category)

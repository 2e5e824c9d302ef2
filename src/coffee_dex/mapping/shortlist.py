"""Candidate shortlist construction."""

from __future__ import annotations

import logging

from coffee_dex.config import DEFAULT_SHORTLIST_LIMIT
from coffee_dex.exceptions import NotFoundError
from coffee_dex.schema import Candidate
from coffee_dex.scoring.types import CategorySelection
from coffee_dex.storage.base import CandidateRepository

logger = logging.getLogger(__name__)


class CandidateSelector:
    """Builds a bounded shortlist for the selected categories."""

    def __init__(
        self,
        repository: CandidateRepository,
        baseline_category: str,
        limit: int = DEFAULT_SHORTLIST_LIMIT,
    ):
        self.repository = repository
        self.baseline_category = baseline_category
        self.limit = limit

    def shortlist(self, selection: CategorySelection) -> list[Candidate]:
        """Return primary-category candidates first, then secondary ones.

        Raises:
            NotFoundError: If even the baseline category has no candidates,
                which means the candidate pool is misconfigured.
        """
        candidates = list(self.repository.get_by_category(selection.primary))
        if selection.secondary:
            seen = {candidate.id for candidate in candidates}
            candidates.extend(
                candidate
                for candidate in self.repository.get_by_category(selection.secondary)
                if candidate.id not in seen
            )

        if not candidates:
            logger.info(
                "no candidates for %s, using baseline category %s",
                "/".join(selection.categories),
                self.baseline_category,
            )
            candidates = list(self.repository.get_by_category(self.baseline_category))

        if not candidates:
            raise NotFoundError(
                f"no candidates found for categories {'/'.join(selection.categories)} "
                f"or baseline '{self.baseline_category}'"
            )
        return candidates[: self.limit]

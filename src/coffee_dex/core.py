"""Coffee-to-candidate mapping pipeline."""

from __future__ import annotations

import logging
from typing import Any

from coffee_dex.catalog import load_candidates
from coffee_dex.config import DEFAULT_SHORTLIST_LIMIT, CoffeeDexConfig
from coffee_dex.exceptions import AuthenticationError, NotFoundError
from coffee_dex.mapping import (
    CandidateSelector,
    MappingAssembler,
    RuleBasedFallbackSelector,
    UniquenessEnforcer,
)
from coffee_dex.providers.base import BaseRefiner, Selection
from coffee_dex.schema import MappingRecord, TastingRecord
from coffee_dex.scoring import CategoryEngine, CategorySelection, RuleTable, load_rule_table
from coffee_dex.storage import (
    CandidateRepository,
    InMemoryCandidateRepository,
    InMemoryTastingRecordRepository,
    TastingRecordRepository,
)

logger = logging.getLogger(__name__)


def _build_ollama_refiner(config: CoffeeDexConfig) -> BaseRefiner:
    from coffee_dex.providers.ollama import OllamaRefiner

    return OllamaRefiner(
        base_url=config.ollama_url,
        model=config.ollama_model,
        timeout_sec=config.refiner_timeout_sec,
    )


def _build_gemini_refiner(config: CoffeeDexConfig) -> BaseRefiner:
    from coffee_dex.providers.gemini import GeminiRefiner

    return GeminiRefiner(
        api_key=config.gemini_api_key,
        model=config.gemini_model,
        timeout_sec=config.refiner_timeout_sec,
    )


def build_refiner(config: CoffeeDexConfig, *, check_connection: bool = True) -> BaseRefiner | None:
    """Create the configured refiner, or None when refinement is off.

    An Ollama refiner that fails its health check is dropped so requests go
    straight to the rule-based path.
    """
    if not config.refiner_enabled or config.refiner == "none":
        return None
    if config.refiner == "ollama":
        refiner = _build_ollama_refiner(config)
        if check_connection and not refiner.check_connection():
            logger.warning("Ollama at %s unreachable, refiner disabled", config.ollama_url)
            return None
        return refiner
    if config.refiner == "gemini":
        try:
            return _build_gemini_refiner(config)
        except AuthenticationError as e:
            logger.warning("Gemini refiner disabled: %s", e)
            return None
    raise ValueError(f"Unsupported refiner: {config.refiner}")


def _build_storage(
    config: CoffeeDexConfig, candidates
) -> tuple[CandidateRepository, TastingRecordRepository]:
    if config.database_url:
        from coffee_dex.storage.postgres import (
            PostgresCandidateRepository,
            PostgresTastingRecordRepository,
        )

        return (
            PostgresCandidateRepository(config.database_url, candidates),
            PostgresTastingRecordRepository(config.database_url),
        )
    return InMemoryCandidateRepository(candidates), InMemoryTastingRecordRepository()


class MappingService:
    """Maps tasting records to unique candidates.

    Stages run sequentially per request. The rule table and candidate data
    are read-only, so one service instance can serve concurrent requests;
    the only shared mutable state lives behind the repository's atomic
    reservation.
    """

    def __init__(
        self,
        candidates: CandidateRepository,
        records: TastingRecordRepository | None = None,
        *,
        refiner: BaseRefiner | None = None,
        rules: RuleTable | None = None,
        shortlist_limit: int = DEFAULT_SHORTLIST_LIMIT,
        assembler: MappingAssembler | None = None,
    ):
        self.candidates = candidates
        self.records = records or InMemoryTastingRecordRepository()
        self.refiner = refiner
        self.engine = CategoryEngine(rules or load_rule_table())
        self.selector = CandidateSelector(candidates, self.engine.rules.baseline, limit=shortlist_limit)
        self.fallback = RuleBasedFallbackSelector()
        self.enforcer = UniquenessEnforcer(candidates)
        self.assembler = assembler or MappingAssembler(self.engine)

    @classmethod
    def from_config(
        cls,
        config: CoffeeDexConfig | None = None,
        *,
        check_refiner: bool = True,
    ) -> "MappingService":
        config = config or CoffeeDexConfig.from_env()
        candidates, records = _build_storage(config, load_candidates())
        return cls(
            candidates,
            records,
            refiner=build_refiner(config, check_connection=check_refiner),
            rules=load_rule_table(config.rules_version),
            shortlist_limit=config.shortlist_limit,
        )

    def classify(self, record: TastingRecord) -> CategorySelection:
        return self.engine.classify(record)

    def map_record(self, record: TastingRecord) -> MappingRecord:
        """Assign a unique candidate to a tasting record.

        A record that is already mapped gets its stored mapping back.

        Raises:
            ExhaustionError: If the chosen category has no unused candidate.
            PersistenceError: If storage fails; nothing is persisted.
            NotFoundError: If the candidate pool has no baseline candidates.
        """
        try:
            return self.candidates.get_mapping(record.id)
        except NotFoundError:
            pass

        categories = self.engine.classify(record)
        logger.info(
            "coffee %s categories: primary=%s secondary=%s score=%.3f",
            record.id,
            categories.primary,
            categories.secondary,
            categories.primary_score,
        )

        shortlist = self.selector.shortlist(categories)
        selection = self._select(record, shortlist, categories)

        mapping = self.enforcer.reserve(
            selection.candidate,
            categories,
            lambda candidate: self.assembler.assemble(record, candidate, selection, categories),
        )
        logger.info(
            "coffee %s mapped to %s (%s) via %s selection",
            record.id,
            mapping.candidate_name,
            mapping.candidate_id,
            selection.source,
        )
        return mapping

    def map_coffee(self, coffee_id: str) -> MappingRecord:
        """Look up a stored tasting record by id and map it."""
        return self.map_record(self.records.get_by_id(coffee_id))

    def map_payload(self, payload: dict[str, Any]) -> MappingRecord:
        """Validate raw record data, store it and map it."""
        record = self.records.add(TastingRecord.from_payload(payload))
        return self.map_record(record)

    def get_mapping(self, coffee_id: str) -> MappingRecord:
        return self.candidates.get_mapping(coffee_id)

    def list_mappings(self) -> list[MappingRecord]:
        return self.candidates.list_mappings()

    def update_nickname(self, coffee_id: str, nickname: str) -> MappingRecord:
        return self.candidates.update_nickname(coffee_id, nickname.strip())

    def collection_progress(self) -> dict[str, tuple[int, int]]:
        """Return ``{category: (used, total)}`` for every scored category."""
        used = self.candidates.used_candidate_ids()
        progress = {}
        for category in self.engine.rules.categories:
            pool = self.candidates.get_by_category(category)
            progress[category] = (sum(1 for candidate in pool if candidate.id in used), len(pool))
        return progress

    def _select(self, record: TastingRecord, shortlist, categories: CategorySelection) -> Selection:
        if self.refiner is not None:
            refined = self.refiner.refine(record, shortlist)
            if refined is not None:
                return refined
            logger.info("coffee %s using rule-based selection", record.id)
        return self.fallback.select(record, shortlist, categories)


def map_coffee(
    payload: dict[str, Any] | TastingRecord,
    *,
    service: MappingService | None = None,
) -> MappingRecord:
    """Map one tasting record using a service built from the environment.

    Args:
        payload: Raw record data or a validated TastingRecord.
        service: Service to use. Defaults to ``MappingService.from_config()``.

    Returns:
        The persisted MappingRecord.
    """
    service = service or MappingService.from_config()
    if isinstance(payload, TastingRecord):
        return service.map_record(service.records.add(payload))
    return service.map_payload(payload)

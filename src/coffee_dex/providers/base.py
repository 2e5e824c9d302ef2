"""Base refiner interface."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass, field

from coffee_dex.config import DEFAULT_REFINER_TIMEOUT_SEC
from coffee_dex.exceptions import ExternalServiceError
from coffee_dex.providers.prompt import build_prompt, match_candidate, parse_response
from coffee_dex.schema import Candidate, TastingRecord, TraitAnnotation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Selection:
    """A chosen candidate with the confidence and text that justify it."""

    candidate: Candidate
    confidence: float
    description: str
    trait_mapping: list[TraitAnnotation] = field(default_factory=list)
    source: str = "fallback"


class BaseRefiner(ABC):
    """Abstract base class for generative-text refiners.

    Subclasses only implement ``generate``; ``refine`` owns the timeout,
    validation and the conversion of every failure into ``None``.
    """

    name = "base"

    def __init__(self, timeout_sec: float = DEFAULT_REFINER_TIMEOUT_SEC):
        self.timeout_sec = timeout_sec

    @abstractmethod
    def generate(self, prompt: str) -> str:
        """Send a prompt and return the raw JSON text of the answer.

        Raises:
            ExternalServiceError: On transport or service failure.
        """
        pass

    def refine(self, record: TastingRecord, shortlist: list[Candidate]) -> Selection | None:
        """Ask the service to pick from ``shortlist``.

        Returns:
            The refined Selection, or None when the refiner is unavailable
            or picked something outside the shortlist.
        """
        if not shortlist:
            return None

        prompt = build_prompt(record, shortlist)
        try:
            raw = self._generate_with_timeout(prompt)
            response = parse_response(raw)
        except ExternalServiceError as e:
            logger.warning("%s refiner unavailable for coffee %s: %s", self.name, record.id, e)
            return None

        candidate = match_candidate(response.selected_identity, shortlist)
        if candidate is None:
            logger.warning(
                "%s refiner selected unknown candidate %r for coffee %s",
                self.name,
                response.selected_identity,
                record.id,
            )
            return None

        return Selection(
            candidate=candidate,
            confidence=response.confidence,
            description=response.description,
            trait_mapping=list(response.trait_mapping),
            source=self.name,
        )

    def _generate_with_timeout(self, prompt: str) -> str:
        executor = ThreadPoolExecutor(max_workers=1)
        future = executor.submit(self.generate, prompt)
        try:
            return future.result(timeout=self.timeout_sec)
        except FutureTimeoutError as e:
            future.cancel()
            raise ExternalServiceError(f"refiner timed out after {self.timeout_sec:.0f}s") from e
        except ExternalServiceError:
            raise
        except Exception as e:
            raise ExternalServiceError(f"refiner call failed: {e}") from e
        finally:
            executor.shutdown(wait=False)

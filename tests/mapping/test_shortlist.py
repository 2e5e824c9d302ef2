"""Tests for shortlist construction."""

from types import MappingProxyType

import pytest

from coffee_dex.exceptions import NotFoundError
from coffee_dex.mapping import CandidateSelector
from coffee_dex.schema import Candidate
from coffee_dex.scoring import CategorySelection
from coffee_dex.storage import InMemoryCandidateRepository


def _selection(primary, secondary=None):
    return CategorySelection(primary=primary, secondary=secondary, scores=MappingProxyType({}))


def test_primary_candidates_come_first(small_repo):
    """Primary-category candidates precede secondary ones."""
    selector = CandidateSelector(small_repo, "normal")

    shortlist = selector.shortlist(_selection("fire", "normal"))

    assert [candidate.name for candidate in shortlist] == ["Charmander", "Charmeleon", "Charizard", "Rattata", "Pidgey"]


def test_candidate_in_both_categories_appears_once(small_repo):
    """A candidate tagged with both categories is listed once."""
    selector = CandidateSelector(small_repo, "normal")

    shortlist = selector.shortlist(_selection("fire", "flying"))

    assert [candidate.id for candidate in shortlist] == [4, 5, 6, 16]


def test_empty_categories_fall_back_to_baseline(small_repo):
    """Empty categories fall back to the baseline category."""
    selector = CandidateSelector(small_repo, "normal")

    shortlist = selector.shortlist(_selection("dark", "ice"))

    assert [candidate.name for candidate in shortlist] == ["Rattata", "Pidgey"]


def test_shortlist_is_capped():
    """The shortlist is capped at its limit."""
    pool = tuple(Candidate(id=i, name=f"Bug {i}", categories=("bug",)) for i in range(1, 25))
    selector = CandidateSelector(InMemoryCandidateRepository(pool), "bug", limit=10)

    shortlist = selector.shortlist(_selection("bug"))

    assert len(shortlist) == 10
    assert shortlist[0].id == 1


def test_missing_baseline_is_a_configuration_error():
    """An empty baseline category raises NotFoundError."""
    repo = InMemoryCandidateRepository((Candidate(id=1, name="Only", categories=("fire",)),))
    selector = CandidateSelector(repo, "normal")

    with pytest.raises(NotFoundError):
        selector.shortlist(_selection("dark"))

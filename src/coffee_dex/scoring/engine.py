"""Weighted trait scoring and category selection."""

from __future__ import annotations

from types import MappingProxyType

from coffee_dex.schema import MAX_TASTING_NOTES, TastingRecord
from coffee_dex.scoring.repository import RuleTable, load_rule_table
from coffee_dex.scoring.types import CategoryRule, CategorySelection, TraitWeight

KEYWORD_WEIGHT = 20.0
SECONDARY_THRESHOLD_FACTOR = 0.8


class TraitScorer:
    """Scores a tasting record against every category rule.

    Scoring is pure: the record is never modified and identical inputs give
    identical scores.
    """

    def __init__(self, rules: RuleTable):
        self.rules = rules

    def score(self, record: TastingRecord) -> dict[str, float]:
        return {rule.category: self.score_category(record, rule) for rule in self.rules}

    def score_category(self, record: TastingRecord, rule: CategoryRule) -> float:
        raw_score = 0.0
        max_possible = 0.0

        for weight in (*rule.primary_traits, *rule.secondary_traits):
            max_possible += weight.weight * 10.0
            raw_score += _trait_contribution(record, weight)

        if rule.keywords:
            keyword_score = _keyword_score(record.tasting_notes, rule.keywords)
            raw_score += keyword_score * KEYWORD_WEIGHT
            max_possible += KEYWORD_WEIGHT

        if record.processing_method:
            raw_score *= rule.processing_multipliers.get(record.processing_method, 1.0)
        raw_score *= rule.roast_multipliers.get(record.roast_level, 1.0)

        if max_possible > 0:
            # Negative weights can push the raw score below zero.
            return max(0.0, min(raw_score / max_possible, 1.0))
        return 0.0


class CategorySelector:
    """Picks primary and secondary categories from scores."""

    def __init__(self, rules: RuleTable):
        self.rules = rules

    def select(self, scores: dict[str, float]) -> CategorySelection:
        # Stable sort keeps table order for ties.
        ranked = sorted(
            (category for category in self.rules.categories if category in scores),
            key=lambda category: scores[category],
            reverse=True,
        )

        primary = self.rules.baseline
        if ranked and scores[ranked[0]] >= self.rules[ranked[0]].minimum_threshold:
            primary = ranked[0]

        secondary = None
        if len(ranked) > 1:
            runner_up = ranked[1]
            threshold = self.rules[runner_up].minimum_threshold * SECONDARY_THRESHOLD_FACTOR
            if scores[runner_up] >= threshold and runner_up != primary:
                secondary = runner_up

        return CategorySelection(
            primary=primary,
            secondary=secondary,
            scores=MappingProxyType(dict(scores)),
        )


class CategoryEngine:
    """Scorer and selector sharing one rule table."""

    def __init__(self, rules: RuleTable | None = None):
        self.rules = rules or load_rule_table()
        self.scorer = TraitScorer(self.rules)
        self.selector = CategorySelector(self.rules)

    def classify(self, record: TastingRecord) -> CategorySelection:
        return self.selector.select(self.scorer.score(record))

    def describe(self, category: str, record: TastingRecord) -> str:
        """One sentence explaining why a record fits a category."""
        if category not in self.rules:
            return f"Unknown category: {category}"

        description = f"This coffee exhibits {category}-type characteristics"
        strong = [
            weight.trait
            for weight in self.rules[category].primary_traits
            if record.tasting_traits.value(weight.trait) >= weight.min
        ]
        if strong:
            description += " with strong " + ", ".join(strong)
        return description


def _trait_contribution(record: TastingRecord, weight: TraitWeight) -> float:
    value = record.tasting_traits.value(weight.trait)
    if value < weight.min:
        return 0.0
    clamped = min(value, weight.max)
    return (clamped / 10.0) * weight.weight * 10.0


def _keyword_score(notes: tuple[str, ...], keywords: tuple[str, ...]) -> float:
    matches = 0
    for note in notes:
        lowered = note.lower()
        if any(keyword in lowered for keyword in keywords):
            matches += 1
    return matches / float(MAX_TASTING_NOTES)

"""Rule table loading for category scoring."""

from __future__ import annotations

import json
from importlib import import_module
from importlib.resources import files
from types import MappingProxyType
from typing import Iterator

from coffee_dex.scoring.types import CategoryRule, TraitWeight


class RuleTable:
    """Immutable category rules indexed by category name, in table order."""

    def __init__(self, rules: list[CategoryRule], baseline: str, version: str = "custom"):
        if not rules:
            raise ValueError("rule table must contain at least one category")
        index = {rule.category: rule for rule in rules}
        if len(index) != len(rules):
            raise ValueError("duplicate category in rule table")
        if baseline not in index:
            raise ValueError(f"baseline category '{baseline}' has no rule")
        self._rules = MappingProxyType(index)
        self.baseline = baseline
        self.version = version

    def __getitem__(self, category: str) -> CategoryRule:
        return self._rules[category]

    def __contains__(self, category: object) -> bool:
        return category in self._rules

    def __iter__(self) -> Iterator[CategoryRule]:
        return iter(self._rules.values())

    def __len__(self) -> int:
        return len(self._rules)

    @property
    def categories(self) -> tuple[str, ...]:
        return tuple(self._rules)


def load_rule_table(version: str = "v1") -> RuleTable:
    """Load the packaged rule table for a version.

    Python data modules are preferred; a ``rules.json`` file in the version
    directory is used when no module exists.
    """
    try:
        module = import_module(f"coffee_dex.scoring.data.{version}.rules")
        data = module.RULES
        baseline = module.BASELINE_CATEGORY
    except ModuleNotFoundError:
        path = files("coffee_dex.scoring.data").joinpath(version).joinpath("rules.json")
        payload = json.loads(path.read_text(encoding="utf-8"))
        data = payload["rules"]
        baseline = payload["baseline_category"]
    return RuleTable([_build_rule(item) for item in data], baseline=baseline, version=version)


def _build_rule(item: dict) -> CategoryRule:
    return CategoryRule(
        category=item["category"].lower(),
        primary_traits=tuple(_build_weight(weight) for weight in item.get("primary_traits", [])),
        secondary_traits=tuple(_build_weight(weight) for weight in item.get("secondary_traits", [])),
        keywords=tuple(keyword.lower() for keyword in item.get("keywords", [])),
        processing_multipliers=MappingProxyType(dict(item.get("processing_multipliers", {}))),
        roast_multipliers=MappingProxyType(dict(item.get("roast_multipliers", {}))),
        minimum_threshold=float(item.get("minimum_threshold", 0.5)),
    )


def _build_weight(value) -> TraitWeight:
    if isinstance(value, dict):
        return TraitWeight(**value)
    trait, weight, minimum, maximum = value
    return TraitWeight(trait=trait, weight=float(weight), min=int(minimum), max=int(maximum))

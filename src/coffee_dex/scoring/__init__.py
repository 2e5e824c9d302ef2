"""Category scoring for coffee-dex."""

from coffee_dex.scoring.engine import CategoryEngine, CategorySelector, TraitScorer
from coffee_dex.scoring.repository import RuleTable, load_rule_table
from coffee_dex.scoring.types import CategoryRule, CategorySelection, TraitWeight

__all__ = [
    "CategoryEngine",
    "CategoryRule",
    "CategorySelection",
    "CategorySelector",
    "RuleTable",
    "TraitScorer",
    "TraitWeight",
    "load_rule_table",
]

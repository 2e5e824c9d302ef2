"""Category rule table v1."""

from coffee_dex.scoring.data.v1.rules import BASELINE_CATEGORY, RULES

__all__ = ["BASELINE_CATEGORY", "RULES"]

"""Candidate reference data for coffee-dex."""

from coffee_dex.catalog.loader import load_candidates

__all__ = ["load_candidates"]

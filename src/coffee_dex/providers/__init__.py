"""Refiners for coffee-dex."""

from coffee_dex.providers.base import BaseRefiner, Selection
from coffee_dex.providers.ollama import OllamaRefiner

__all__ = ["BaseRefiner", "OllamaRefiner", "Selection"]

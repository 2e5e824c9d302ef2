"""Loads packaged candidate pools."""

from __future__ import annotations

import json
from importlib import import_module
from importlib.resources import files

from coffee_dex.schema import Candidate


def load_candidates(pool: str = "gen1") -> tuple[Candidate, ...]:
    """Return the candidate pool ordered by id.

    Python data modules are preferred; ``<pool>.json`` next to them is used
    when no module exists.
    """
    try:
        module = import_module(f"coffee_dex.catalog.data.{pool}")
        data = module.CANDIDATES
    except ModuleNotFoundError:
        path = files("coffee_dex.catalog.data").joinpath(f"{pool}.json")
        data = json.loads(path.read_text(encoding="utf-8"))

    candidates = [_build_candidate(item) for item in data]
    ids = [candidate.id for candidate in candidates]
    if len(set(ids)) != len(ids):
        raise ValueError(f"duplicate candidate id in pool '{pool}'")
    return tuple(sorted(candidates, key=lambda candidate: candidate.id))


def _build_candidate(item) -> Candidate:
    if isinstance(item, dict):
        categories = item["categories"]
        if isinstance(categories, str):
            categories = categories.split("/")
        return Candidate(
            id=int(item["id"]),
            name=item["name"],
            categories=tuple(tag.strip().lower() for tag in categories if tag.strip()),
            description=item.get("description"),
            sprite_path=item.get("sprite_path") or _sprite_path(int(item["id"])),
        )

    candidate_id, name, types = item
    return Candidate(
        id=candidate_id,
        name=name,
        categories=tuple(tag.strip().lower() for tag in types.split("/") if tag.strip()),
        sprite_path=_sprite_path(candidate_id),
    )


def _sprite_path(candidate_id: int) -> str:
    return f"sprites/{candidate_id:03d}.png"

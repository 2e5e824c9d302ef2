"""HTTP surface for the mapping pipeline.

Run locally:
  uvicorn coffee_dex.api:app --reload
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any

from fastapi import Body, Depends, FastAPI, HTTPException
from pydantic import BaseModel, Field

from coffee_dex.core import MappingService
from coffee_dex.exceptions import ExhaustionError, NotFoundError, PersistenceError, ValidationError
from coffee_dex.schema import MappingRecord, TastingRecord

app = FastAPI(title="coffee-dex API", version="1.0.0")
logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_service() -> MappingService:
    return MappingService.from_config()


class NicknameRequest(BaseModel):
    nickname: str = Field(max_length=100)


class CategoryScoresResponse(BaseModel):
    primary: str
    secondary: str | None = None
    scores: dict[str, float]


class CategoryProgress(BaseModel):
    category: str
    used: int
    total: int
    complete: bool


def _to_http(exc: Exception) -> HTTPException:
    if isinstance(exc, ValidationError):
        return HTTPException(status_code=422, detail=str(exc))
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, ExhaustionError):
        return HTTPException(
            status_code=409,
            detail={"error": "collection_complete", "category": exc.category, "retryable": False},
        )
    if isinstance(exc, PersistenceError):
        return HTTPException(
            status_code=503,
            detail={"error": "storage_unavailable", "retryable": True},
        )
    logger.exception("request failed")
    return HTTPException(status_code=500, detail="internal_error")


@app.get("/health")
def health() -> dict[str, bool]:
    return {"ok": True}


@app.post("/coffees", response_model=TastingRecord, status_code=201)
def create_coffee(
    payload: dict[str, Any] = Body(...),
    service: MappingService = Depends(get_service),
) -> TastingRecord:
    try:
        return service.records.add(TastingRecord.from_payload(payload))
    except Exception as exc:
        raise _to_http(exc) from exc


@app.post("/score", response_model=CategoryScoresResponse)
def score_coffee(
    payload: dict[str, Any] = Body(...),
    service: MappingService = Depends(get_service),
) -> CategoryScoresResponse:
    try:
        selection = service.classify(TastingRecord.from_payload(payload))
    except Exception as exc:
        raise _to_http(exc) from exc
    return CategoryScoresResponse(
        primary=selection.primary,
        secondary=selection.secondary,
        scores=dict(selection.scores),
    )


@app.post("/coffees/{coffee_id}/mapping", response_model=MappingRecord, status_code=201)
def generate_mapping(coffee_id: str, service: MappingService = Depends(get_service)) -> MappingRecord:
    try:
        return service.map_coffee(coffee_id)
    except Exception as exc:
        raise _to_http(exc) from exc


@app.get("/coffees/{coffee_id}/mapping", response_model=MappingRecord)
def get_mapping(coffee_id: str, service: MappingService = Depends(get_service)) -> MappingRecord:
    try:
        return service.get_mapping(coffee_id)
    except Exception as exc:
        raise _to_http(exc) from exc


@app.put("/coffees/{coffee_id}/mapping/nickname", response_model=MappingRecord)
def update_nickname(
    coffee_id: str,
    body: NicknameRequest,
    service: MappingService = Depends(get_service),
) -> MappingRecord:
    try:
        return service.update_nickname(coffee_id, body.nickname)
    except Exception as exc:
        raise _to_http(exc) from exc


@app.get("/dex", response_model=list[MappingRecord])
def list_dex(service: MappingService = Depends(get_service)) -> list[MappingRecord]:
    try:
        return service.list_mappings()
    except Exception as exc:
        raise _to_http(exc) from exc


@app.get("/dex/progress", response_model=list[CategoryProgress])
def dex_progress(service: MappingService = Depends(get_service)) -> list[CategoryProgress]:
    try:
        progress = service.collection_progress()
    except Exception as exc:
        raise _to_http(exc) from exc
    return [
        CategoryProgress(category=category, used=used, total=total, complete=total > 0 and used >= total)
        for category, (used, total) in progress.items()
    ]

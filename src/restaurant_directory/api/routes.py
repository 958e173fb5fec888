import logging
from typing import List

from fastapi import APIRouter, HTTPException, Request

from restaurant_directory.api.schemas import AreaResponse, StatsResponse
from restaurant_directory.data.store import RecordStore

logger = logging.getLogger(__name__)

router = APIRouter()


def _store(request: Request) -> RecordStore:
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise HTTPException(status_code=503, detail="Restaurant data could not be loaded on startup.")
    return store


@router.get("/data/restaurants.json")
def restaurant_document(request: Request):
    """The static document the directory client fetches, as loaded from disk."""
    _store(request)
    return request.app.state.document


@router.get("/api/stats", response_model=StatsResponse)
def directory_stats(request: Request):
    stats = _store(request).stats()
    return StatsResponse(**stats.model_dump())


@router.get("/api/areas", response_model=List[AreaResponse])
def list_areas(request: Request):
    """Every area in priority order, including empty ones and the fallback."""
    return [
        AreaResponse(
            id=summary.area.id,
            name=summary.area.name,
            member_count=summary.member_count,
            prefixes=list(summary.area.prefixes),
            is_fallback=summary.area.is_fallback,
        )
        for summary in _store(request).areas()
    ]

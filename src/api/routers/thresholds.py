"""API routes for alarm threshold settings."""

from fastapi import APIRouter, Depends

from src.monitor.domain.models import ThresholdSet
from src.monitor.domain.protocols import ThresholdRepository
from src.monitor.infrastructure.container import get_container

router = APIRouter(prefix="/api/thresholds", tags=["thresholds"])


def get_threshold_store() -> ThresholdRepository:
    """Get threshold store dependency."""
    return get_container().threshold_store()


@router.get("", response_model=ThresholdSet)
async def get_thresholds(store: ThresholdRepository = Depends(get_threshold_store)):
    """Current installation-wide thresholds (defaults if none were saved)."""
    return store.load()


@router.put("", response_model=ThresholdSet)
async def save_thresholds(data: ThresholdSet, store: ThresholdRepository = Depends(get_threshold_store)):
    """
    Save thresholds.

    Parameters left out are not evaluated at all. Each entry may set `min`,
    `max` or both; `min` must not exceed `max`.
    """
    store.save(data)
    return data


@router.post("/reset", response_model=ThresholdSet)
async def reset_thresholds(store: ThresholdRepository = Depends(get_threshold_store)):
    """Restore the built-in default thresholds."""
    return store.reset()

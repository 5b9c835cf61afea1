import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from folio import dependencies as deps
from folio.schemas.series import SeriesDefinition, SeriesWithPosts
from folio.services.series_service import SeriesService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/series")


@router.get("", response_model=List[SeriesWithPosts])
def list_series(service: SeriesService = Depends(deps.get_series_service)):
    """Every series that has at least one published post."""
    try:
        return service.list_series()
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error listing series: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve series")


@router.get("/catalog", response_model=List[SeriesDefinition])
def list_catalog(service: SeriesService = Depends(deps.get_series_service)):
    return service.list_available_series()


@router.get("/{slug}", response_model=SeriesWithPosts)
def get_series(slug: str, service: SeriesService = Depends(deps.get_series_service)):
    try:
        series = service.get_series(slug)
        if series is None:
            raise HTTPException(status_code=404, detail="Series not found")
        return series
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error retrieving series {slug}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve series")

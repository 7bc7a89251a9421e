"""Scheduler control API endpoints."""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from ..container import AppContainer, container
from ..exceptions import SchedulerNotInitializedError
from ..models import (
    ManualUpdateRequest,
    ManualUpdateResponse,
    MessageResponse,
    ScheduleConfigUpdate,
    SchedulerStatus,
    StartSchedulerRequest,
)
from ..utils.logger import logger

router = APIRouter(prefix="/api/scheduler", tags=["scheduler"])


def get_container() -> AppContainer:
    """Dependency returning the application container."""
    return container


def _require_status(app_container: AppContainer) -> SchedulerStatus:
    status = app_container.status()
    if status is None:
        raise HTTPException(status_code=503, detail="Scheduler not initialized")
    return status


@router.get("/status", response_model=SchedulerStatus)
async def get_status(app_container: AppContainer = Depends(get_container)) -> SchedulerStatus:
    """Get the current scheduler status.

    Returns:
        Scheduler status
    """
    return _require_status(app_container)


@router.post("/start", response_model=SchedulerStatus)
async def start_scheduler(
    request: Optional[StartSchedulerRequest] = None,
    app_container: AppContainer = Depends(get_container),
) -> SchedulerStatus:
    """(Re)initialize the scheduler with optional configuration overrides.

    Args:
        request: Optional configuration overrides

    Returns:
        Status of the new scheduler
    """
    try:
        logger.info("Starting scheduler via API")
        app_container.start(request)
        return _require_status(app_container)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error starting scheduler: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/stop", response_model=MessageResponse)
async def stop_scheduler(
    app_container: AppContainer = Depends(get_container),
) -> MessageResponse:
    """Stop the scheduler."""
    app_container.stop()
    logger.info("Scheduler stopped via API")
    return MessageResponse(message="Scheduler stopped")


@router.post("/manual-update", response_model=ManualUpdateResponse)
async def manual_update(
    request: Optional[ManualUpdateRequest] = None,
    app_container: AppContainer = Depends(get_container),
) -> ManualUpdateResponse:
    """Run one update cycle now and wait for it to finish.

    Args:
        request: Optional strategy override

    Returns:
        Message and the cycle statistics, if the cycle ran
    """
    strategy = request.strategy if request else None
    try:
        stats = await app_container.manual_update(strategy)

    except SchedulerNotInitializedError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except Exception as e:
        logger.error(f"Error running manual update: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))

    if stats is None:
        return ManualUpdateResponse(message="Update skipped or failed; see logs")
    return ManualUpdateResponse(message="Manual update finished", stats=stats)


@router.patch("/config", response_model=SchedulerStatus)
async def update_config(
    request: ScheduleConfigUpdate,
    app_container: AppContainer = Depends(get_container),
) -> SchedulerStatus:
    """Change the schedule; invalid fields are ignored.

    Args:
        request: Fields to change

    Returns:
        Updated scheduler status
    """
    _require_status(app_container)
    app_container.update_config(request)
    return _require_status(app_container)

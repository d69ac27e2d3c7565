# report_builder/logging/router.py
"""API router for the logging module."""

from fastapi import APIRouter, Depends, Query, HTTPException
from typing import List, Optional, Dict
from datetime import datetime

from report_builder.core.dependencies import SessionDep
from report_builder.logging.schemas import LogRead
from report_builder.logging.service import LogService
from report_builder.logging.dao import LogDAO


router = APIRouter(
    prefix="/logs",
    tags=["logs"],
)


# ===== DEPENDENCY INJECTION =====

def get_log_service(session: SessionDep) -> LogService:
    return LogService(LogDAO(session))


@router.get("/", response_model=List[LogRead])
def get_logs(
    limit: int = Query(50, ge=1, le=1000, description="Maximum number of logs to return"),
    offset: int = Query(0, ge=0, description="Number of logs to skip"),
    hours: int = Query(24, ge=1, le=168, description="Time window in hours"),
    status_min: Optional[int] = Query(None, ge=100, le=599, description="Minimum status code"),
    status_max: Optional[int] = Query(None, ge=100, le=599, description="Maximum status code"),
    search: Optional[str] = Query(None, description="Search term for filtering logs"),
    log_service: LogService = Depends(get_log_service),
) -> List[LogRead]:
    """Get logs with pagination and filtering."""
    if status_min is not None and status_max is not None and status_min > status_max:
        raise HTTPException(status_code=400, detail="status_min cannot be greater than status_max")

    return log_service.get_logs_with_filters(
        limit=limit,
        offset=offset,
        hours=hours,
        status_min=status_min,
        status_max=status_max,
        search=search,
    )


@router.get("/health", response_model=Dict[str, str])
def health_check(log_service: LogService = Depends(get_log_service)) -> Dict[str, str]:
    """Health check endpoint for the logging service."""
    try:
        log_service.count()
    except Exception as e:
        raise HTTPException(status_code=503, detail=f"Logging service unhealthy: {str(e)}")
    return {
        "status": "healthy",
        "service": "logging",
        "timestamp": datetime.now().isoformat(),
    }


@router.get("/{log_id}", response_model=LogRead)
def get_log_by_id(log_id: int, log_service: LogService = Depends(get_log_service)) -> LogRead:
    """Get a specific log by ID."""
    log = log_service.get_by_id(log_id)
    if not log:
        raise HTTPException(status_code=404, detail="Log not found")
    return log

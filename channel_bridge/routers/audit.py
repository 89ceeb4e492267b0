"""
Audit API Router

Read-only view of recent external calls for a property.
"""

from typing import List
from fastapi import APIRouter, Depends, Query

from ..dependencies import get_request_log_repository
from ..schemas.sync import RequestLogResponse
from ..services.repositories import RequestLogRepository

router = APIRouter(prefix="/api/audit", tags=["Audit"])


@router.get("/{property_id}", response_model=List[RequestLogResponse])
async def list_request_logs(
    property_id: str,
    limit: int = Query(default=100, ge=1, le=500),
    logs: RequestLogRepository = Depends(get_request_log_repository),
):
    return logs.list_for_property(property_id, limit=limit)

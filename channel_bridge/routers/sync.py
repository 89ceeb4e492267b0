"""
Sync API Router

Trigger PMS -> channel-manager passes for one property and date range.
"""

import logging
import uuid
from fastapi import APIRouter, Depends, Request

from ..dependencies import get_sync_engine
from ..schemas.sync import DateRangeRequest, SyncResult
from ..services.sync_engine import SyncEngine

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/properties/{property_id}/sync", tags=["Sync"])


def get_request_id(request: Request) -> str:
    """Get request_id from request state or generate one"""
    return getattr(request.state, 'request_id', str(uuid.uuid4())[:8])


@router.post("/inventory", response_model=SyncResult)
async def sync_inventory(
    property_id: str,
    body: DateRangeRequest,
    request: Request,
    engine: SyncEngine = Depends(get_sync_engine),
):
    logger.info(f"[{get_request_id(request)}] Inventory sync requested for {property_id}")
    return await engine.sync_inventory(property_id, body.start_date, body.end_date)


@router.post("/rates", response_model=SyncResult)
async def sync_rates(
    property_id: str,
    body: DateRangeRequest,
    request: Request,
    engine: SyncEngine = Depends(get_sync_engine),
):
    logger.info(f"[{get_request_id(request)}] Rate sync requested for {property_id}")
    return await engine.sync_rates(property_id, body.start_date, body.end_date)

"""
Availability API Router

Stay lookup against the PMS: free rooms and nightly rates per room type.
"""

import datetime as dt
from fastapi import APIRouter, Depends, Query

from ..dependencies import get_sync_engine
from ..schemas.sync import SyncResult
from ..services.sync_engine import SyncEngine

router = APIRouter(prefix="/api/availability", tags=["Availability"])


@router.get("", response_model=SyncResult)
async def check_availability(
    property_id: str = Query(..., alias="propertyId"),
    check_in: dt.date = Query(..., alias="checkIn"),
    check_out: dt.date = Query(..., alias="checkOut"),
    adults: int = Query(..., ge=1),
    children: int = Query(0, ge=0),
    engine: SyncEngine = Depends(get_sync_engine),
):
    return await engine.check_availability(property_id, check_in, check_out, adults, children)

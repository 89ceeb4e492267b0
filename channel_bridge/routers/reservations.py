"""
Reservations API Router

Push PMS bookings out, import channel reservations in, and keep both sides
in step on update and cancel.
"""

from typing import List
from fastapi import APIRouter, Depends

from ..dependencies import get_reservation_repository, get_sync_engine
from ..exceptions import ReservationNotFound
from ..schemas.channel import ChannelReservation
from ..schemas.pms import PmsBooking
from ..schemas.sync import ReservationResponse, ReservationUpdate, SyncResult
from ..services.repositories import ReservationRepository
from ..services.sync_engine import SyncEngine

router = APIRouter(prefix="/api/reservations", tags=["Reservations"])


@router.get("/property/{property_id}", response_model=List[ReservationResponse])
async def list_reservations(
    property_id: str,
    limit: int = 100,
    reservations: ReservationRepository = Depends(get_reservation_repository),
):
    return reservations.list_for_property(property_id, limit=min(limit, 500))


@router.get("/{reservation_id}", response_model=ReservationResponse)
async def get_reservation(
    reservation_id: str,
    reservations: ReservationRepository = Depends(get_reservation_repository),
):
    reservation = reservations.get(reservation_id)
    if reservation is None:
        raise ReservationNotFound(reservation_id)
    return reservation


@router.post("/property/{property_id}", response_model=SyncResult, status_code=201)
async def push_booking(
    property_id: str,
    booking: PmsBooking,
    engine: SyncEngine = Depends(get_sync_engine),
):
    """Send a PMS booking to the channel manager"""
    return await engine.push_booking_to_channel(property_id, booking)


@router.post("/channel/{channel_property_id}", response_model=SyncResult, status_code=201)
async def import_reservation(
    channel_property_id: str,
    reservation: ChannelReservation,
    engine: SyncEngine = Depends(get_sync_engine),
):
    """Create a PMS booking for a channel-manager reservation"""
    return await engine.import_channel_reservation(channel_property_id, reservation)


@router.put("/{reservation_id}", response_model=SyncResult)
async def update_reservation(
    reservation_id: str,
    changes: ReservationUpdate,
    engine: SyncEngine = Depends(get_sync_engine),
):
    return await engine.update_reservation(reservation_id, changes)


@router.delete("/{reservation_id}", response_model=SyncResult)
async def cancel_reservation(
    reservation_id: str,
    engine: SyncEngine = Depends(get_sync_engine),
):
    return await engine.cancel_reservation(reservation_id)

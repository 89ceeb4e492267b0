"""
Sync Schemas

Result envelope returned by every sync operation plus the request and
response bodies of the HTTP API.
"""

import datetime as dt
from decimal import Decimal
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, model_validator

from .common import Money


# ==================
# Result envelope
# ==================

class SyncResult(BaseModel):
    """Structured outcome of a sync operation"""
    status: str = Field(..., description="success or error")
    message: str
    code: Optional[str] = None
    data: Optional[Dict[str, Any]] = None

    @classmethod
    def ok(cls, message: str, data: Optional[Dict[str, Any]] = None) -> "SyncResult":
        return cls(status="success", message=message, data=data)

    @classmethod
    def from_error(cls, exc) -> "SyncResult":
        return cls(status="error", message=exc.message, code=exc.code, data=exc.details or None)


class SyncBatch(BaseModel):
    """One pushed group of ARI records"""
    room_id: str
    rate_plan_id: Optional[str] = None
    records: int


# ==================
# Requests
# ==================

class DateRangeRequest(BaseModel):
    start_date: dt.date
    end_date: dt.date

    @model_validator(mode="after")
    def check_order(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class InitialSyncRequest(BaseModel):
    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None


class ReservationUpdate(BaseModel):
    """Partial change to a local reservation"""
    check_in_date: Optional[dt.date] = None
    check_out_date: Optional[dt.date] = None
    adults: Optional[int] = Field(default=None, ge=1)
    children: Optional[int] = Field(default=None, ge=0)
    total_price: Optional[Decimal] = None
    currency: Optional[str] = None
    guest_email: Optional[str] = None
    special_requests: Optional[str] = None


# ==================
# Setup
# ==================

class PropertyRoomType(BaseModel):
    id: str
    name: Optional[str] = None
    max_occupancy: Optional[int] = None
    base_price: Optional[Decimal] = None


class PropertyCreate(BaseModel):
    name: str
    description: Optional[str] = None
    pms_property_id: str
    channel_property_id: str
    room_types: List[PropertyRoomType] = Field(default_factory=list)


class PropertyUpdate(BaseModel):
    """Fields left out (or null) keep their current value"""
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    pms_property_id: Optional[str] = Field(default=None, min_length=1)
    channel_property_id: Optional[str] = Field(default=None, min_length=1)
    room_types: Optional[List[PropertyRoomType]] = None
    is_active: Optional[bool] = None


class PropertyResponse(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    pms_property_id: str
    channel_property_id: str
    room_types: List[Dict[str, Any]] = Field(default_factory=list)
    initial_sync_completed: bool = False
    is_active: bool = True
    # Note: credentials are NOT exposed in responses

    class Config:
        from_attributes = True


class CredentialsRequest(BaseModel):
    username: str = Field(..., min_length=1)
    api_key: str = Field(..., min_length=1)


class MappingRequest(BaseModel):
    """Complete mapping set {pms_id: channel_id}; replaces the stored one"""
    mappings: Dict[str, str]


class SetupStep(BaseModel):
    id: str
    name: str
    completed: bool


class SetupStatus(BaseModel):
    property_id: str
    is_configured: bool
    initial_sync_completed: bool
    steps: List[SetupStep]


# ==================
# Reservations / audit
# ==================

class ReservationResponse(BaseModel):
    id: str
    property_id: str
    room_type_id: Optional[str] = None
    rate_plan_id: Optional[str] = None
    guest_name: str
    guest_email: Optional[str] = None
    check_in_date: dt.date
    check_out_date: dt.date
    adults: int
    children: int
    total_price: Decimal
    currency: Optional[str] = None
    status: str
    source: Optional[str] = None
    pms_booking_id: Optional[str] = None
    channel_reservation_id: Optional[str] = None
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None

    class Config:
        from_attributes = True


class RequestLogResponse(BaseModel):
    id: str
    property_id: Optional[str] = None
    request_id: Optional[str] = None
    system: str
    method: str
    endpoint: str
    status_code: Optional[int] = None
    success: bool
    error_message: Optional[str] = None
    duration_ms: Optional[int] = None
    created_at: dt.datetime

    class Config:
        from_attributes = True


# ==================
# Availability query
# ==================

class NightAvailability(BaseModel):
    date: dt.date
    availability: int
    status: str


class NightRate(BaseModel):
    date: dt.date
    rate_plan_id: Optional[str] = None
    rate: Optional[Money] = None
    currency: Optional[str] = None


class RoomAvailability(BaseModel):
    """One PMS room type across the requested stay"""
    room_type_id: str
    channel_room_id: str
    # Rooms free on every night of the stay
    available_rooms: int
    fits_party: bool
    nights: List[NightAvailability]
    rates: List[NightRate]

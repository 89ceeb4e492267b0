"""
PMS Schemas

Typed payloads of the PMS REST API (snake_case JSON). Responses are
validated into these models at the client boundary; optional fields stay
optional so a sparse record never fails parsing.
"""

import datetime as dt
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field
import enum

from .common import Money


class PmsRoomStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class PmsChargeType(str, enum.Enum):
    PER_ROOM = "per_room"
    PER_PERSON = "per_person"


class PmsRateType(str, enum.Enum):
    STANDARD = "standard"
    NON_REFUNDABLE = "non_refundable"
    PACKAGE = "package"


class PmsBookingStatus(str, enum.Enum):
    CONFIRMED = "confirmed"
    CANCELED = "canceled"
    NO_SHOW = "no_show"


class AvailabilityStatus(str, enum.Enum):
    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"


# ==================
# Catalog
# ==================

class PmsProperty(BaseModel):
    id: str
    name: Optional[str] = None
    description: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None


class PmsRoomType(BaseModel):
    id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    max_occupancy: Optional[int] = None
    max_adults: Optional[int] = None
    max_children: Optional[int] = None
    default_rate: Optional[Money] = None
    # Kept as a plain string: only "active" counts as active
    status: Optional[str] = None


class PmsRatePlan(BaseModel):
    id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    room_type_id: Optional[str] = None
    is_shown_in_online_booking: bool = False
    # Unrecognized charge types are treated as per-person
    charge_type: Optional[str] = None
    rate_type: Optional[str] = None
    base_rate: Optional[Money] = None
    currency: Optional[str] = None


# ==================
# ARI
# ==================

class PmsAvailability(BaseModel):
    date: Optional[dt.date] = None
    room_type_id: Optional[str] = None
    availability: int = 0
    status: AvailabilityStatus = AvailabilityStatus.AVAILABLE


class PmsRate(BaseModel):
    date: Optional[dt.date] = None
    room_type_id: Optional[str] = None
    rate_plan_id: Optional[str] = None
    rate: Optional[Money] = None
    currency: Optional[str] = None
    min_length_of_stay: Optional[int] = None
    max_length_of_stay: Optional[int] = None
    closed_to_arrival: Optional[bool] = None
    closed_to_departure: Optional[bool] = None


# ==================
# Bookings
# ==================

class PmsGuest(BaseModel):
    first_name: str = ""
    last_name: str = ""
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    postal_code: Optional[str] = None


class PmsPayment(BaseModel):
    total_amount: Money = Decimal("0")
    currency: Optional[str] = None
    payment_method: Optional[str] = None


class PmsBooking(BaseModel):
    """A PMS booking; ``id`` is absent on drafts not yet created in the PMS."""
    id: Optional[str] = None
    booking_number: Optional[str] = None
    property_id: Optional[str] = None
    room_type_id: Optional[str] = None
    rate_plan_id: Optional[str] = None
    check_in_date: Optional[dt.date] = None
    check_out_date: Optional[dt.date] = None
    guest: PmsGuest = Field(default_factory=PmsGuest)
    adults: int = 1
    children: int = 0
    status: Optional[PmsBookingStatus] = None
    payment: PmsPayment = Field(default_factory=PmsPayment)
    special_requests: Optional[str] = None
    source: Optional[str] = None

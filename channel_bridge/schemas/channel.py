"""
Channel-Manager Schemas

Typed payloads of the channel-manager REST API. The wire format is
camelCase; Python attributes stay snake_case through the alias generator.
Serialize with ``to_wire()`` so aliases are used and empty fields dropped.
"""

import datetime as dt
from decimal import Decimal
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
import enum

from .common import Money
from .pms import AvailabilityStatus


class ChannelPriceModel(str, enum.Enum):
    PER_ROOM = "per_room"
    PER_PERSON = "per_person"


class ChannelReservationStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class ChannelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# ==================
# Catalog
# ==================

class ChannelProperty(ChannelModel):
    id: str
    name: Optional[str] = None
    description: Optional[str] = None


class ChannelPrice(ChannelModel):
    occupancy: int
    price: Money


class ChannelRoom(ChannelModel):
    id: str
    name: Optional[str] = None
    description: Optional[str] = None
    base_occupancy: int = 2
    max_occupancy: Optional[int] = None
    min_num_adults: int = 1
    max_num_adults: Optional[int] = None
    default_allotment: int = 1
    default_prices: List[ChannelPrice] = Field(default_factory=list)
    active: bool = True


class ChannelRestrictions(ChannelModel):
    min_stay: Optional[int] = None
    max_stay: Optional[int] = None
    closed_to_arrival: Optional[bool] = None
    closed_to_departure: Optional[bool] = None


class ChannelRatePlan(ChannelModel):
    id: str
    name: Optional[str] = None
    description: Optional[str] = None
    room_id: Optional[str] = None
    active: bool = True
    is_package: bool = False
    is_non_refundable: bool = False
    price_model: ChannelPriceModel = ChannelPriceModel.PER_PERSON
    restrictions: Optional[ChannelRestrictions] = None


# ==================
# ARI
# ==================

class ChannelAvailability(ChannelModel):
    date: dt.date
    room_id: str
    allotment: int
    status: AvailabilityStatus = AvailabilityStatus.AVAILABLE


class ChannelRate(ChannelModel):
    date: dt.date
    room_id: str
    rate_plan_id: str
    price: Money
    currency: Optional[str] = None
    occupancy: Optional[int] = None
    restrictions: Optional[ChannelRestrictions] = None


# ==================
# Reservations
# ==================

class ChannelGuestDetails(ChannelModel):
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    postal_code: Optional[str] = None


class ChannelReservation(ChannelModel):
    id: Optional[str] = None
    property_id: Optional[str] = None
    room_id: Optional[str] = None
    rate_plan_id: Optional[str] = None
    check_in: Optional[dt.date] = None
    check_out: Optional[dt.date] = None
    guest_name: str = ""
    guest_email: Optional[str] = None
    adults: int = 1
    children: int = 0
    total_price: Money = Decimal("0")
    currency: Optional[str] = None
    status: Optional[ChannelReservationStatus] = None
    # PMS booking id as seen from the channel manager
    external_reservation_id: Optional[str] = None
    special_requests: Optional[str] = None
    guest_details: Optional[ChannelGuestDetails] = None
    source: Optional[str] = None

# Schemas package
from .pms import (
    PmsProperty, PmsRoomType, PmsRatePlan, PmsAvailability, PmsRate,
    PmsGuest, PmsPayment, PmsBooking, PmsBookingStatus, AvailabilityStatus,
)
from .channel import (
    ChannelProperty, ChannelRoom, ChannelPrice, ChannelRatePlan, ChannelRestrictions,
    ChannelAvailability, ChannelRate, ChannelReservation, ChannelGuestDetails,
    ChannelReservationStatus, ChannelPriceModel,
)
from .sync import SyncResult, SyncBatch, ReservationUpdate

__all__ = [
    "PmsProperty", "PmsRoomType", "PmsRatePlan", "PmsAvailability", "PmsRate",
    "PmsGuest", "PmsPayment", "PmsBooking", "PmsBookingStatus", "AvailabilityStatus",
    "ChannelProperty", "ChannelRoom", "ChannelPrice", "ChannelRatePlan", "ChannelRestrictions",
    "ChannelAvailability", "ChannelRate", "ChannelReservation", "ChannelGuestDetails",
    "ChannelReservationStatus", "ChannelPriceModel",
    "SyncResult", "SyncBatch", "ReservationUpdate",
]

"""
Translation Layer

Pure functions converting records between the PMS model (snake_case) and
the channel-manager model (camelCase). Nothing here touches I/O: id
resolution is passed in as plain callables so callers decide which mapping
snapshot applies.

Missing optional fields are treated as absent. A record without a field the
destination cannot do without (room id, dates) raises ValidationError.
"""

from decimal import Decimal
from typing import Optional

from ..exceptions import ValidationError
from ..schemas.channel import (
    ChannelAvailability,
    ChannelGuestDetails,
    ChannelPrice,
    ChannelPriceModel,
    ChannelRate,
    ChannelRatePlan,
    ChannelReservation,
    ChannelReservationStatus,
    ChannelRestrictions,
    ChannelRoom,
)
from ..schemas.pms import (
    PmsAvailability,
    PmsBooking,
    PmsBookingStatus,
    PmsGuest,
    PmsPayment,
    PmsRate,
    PmsRatePlan,
    PmsRoomType,
)
from .mapping_store import Resolver, identity

# Channel-side defaults for rooms built from a PMS room type
DEFAULT_BASE_OCCUPANCY = 2
DEFAULT_MIN_ADULTS = 1
DEFAULT_ALLOTMENT = 1
DEFAULT_PRICE_OCCUPANCIES = (1, 2)

# PMS booking status -> channel reservation status
PMS_TO_CHANNEL_STATUS = {
    PmsBookingStatus.CONFIRMED: ChannelReservationStatus.CONFIRMED,
    PmsBookingStatus.CANCELED: ChannelReservationStatus.CANCELLED,
    # A no-show is not a cancellation on the channel side
    PmsBookingStatus.NO_SHOW: ChannelReservationStatus.PENDING,
}


def _require(value, field: str, record: str):
    if value is None or value == "":
        raise ValidationError(f"{record} is missing required field '{field}'", field=field)
    return value


# ==================
# Catalog
# ==================

def room_to_channel_room(room: PmsRoomType) -> ChannelRoom:
    room_id = _require(room.id, "id", "Room type")

    prices = []
    if room.default_rate is not None:
        prices = [
            ChannelPrice(occupancy=occupancy, price=room.default_rate)
            for occupancy in DEFAULT_PRICE_OCCUPANCIES
        ]

    return ChannelRoom(
        id=room_id,
        name=room.name,
        description=room.description,
        base_occupancy=DEFAULT_BASE_OCCUPANCY,
        max_occupancy=room.max_occupancy,
        min_num_adults=DEFAULT_MIN_ADULTS,
        max_num_adults=room.max_adults,
        default_allotment=DEFAULT_ALLOTMENT,
        default_prices=prices,
        active=room.status == "active",
    )


def rate_plan_to_channel_rate_plan(rate_plan: PmsRatePlan) -> ChannelRatePlan:
    rate_plan_id = _require(rate_plan.id, "id", "Rate plan")

    if rate_plan.charge_type == "per_room":
        price_model = ChannelPriceModel.PER_ROOM
    else:
        price_model = ChannelPriceModel.PER_PERSON

    return ChannelRatePlan(
        id=rate_plan_id,
        name=rate_plan.name,
        description=rate_plan.description,
        room_id=rate_plan.room_type_id,
        active=rate_plan.is_shown_in_online_booking,
        is_package=rate_plan.rate_type == "package",
        is_non_refundable=rate_plan.rate_type == "non_refundable",
        price_model=price_model,
    )


# ==================
# ARI
# ==================

def availability_to_channel(record: PmsAvailability, resolve_room: Resolver = identity) -> ChannelAvailability:
    _require(record.date, "date", "Availability record")
    room_type_id = _require(record.room_type_id, "room_type_id", "Availability record")

    return ChannelAvailability(
        date=record.date,
        room_id=resolve_room(room_type_id),
        allotment=record.availability or 0,
        status=record.status,
    )


def rate_to_channel(
    record: PmsRate,
    resolve_room: Resolver = identity,
    resolve_rate_plan: Resolver = identity,
) -> ChannelRate:
    _require(record.date, "date", "Rate record")
    room_type_id = _require(record.room_type_id, "room_type_id", "Rate record")
    rate_plan_id = _require(record.rate_plan_id, "rate_plan_id", "Rate record")
    _require(record.rate, "rate", "Rate record")

    restrictions = None
    if any(v is not None for v in (
        record.min_length_of_stay,
        record.max_length_of_stay,
        record.closed_to_arrival,
        record.closed_to_departure,
    )):
        restrictions = ChannelRestrictions(
            min_stay=record.min_length_of_stay,
            max_stay=record.max_length_of_stay,
            closed_to_arrival=record.closed_to_arrival,
            closed_to_departure=record.closed_to_departure,
        )

    return ChannelRate(
        date=record.date,
        room_id=resolve_room(room_type_id),
        rate_plan_id=resolve_rate_plan(rate_plan_id),
        price=record.rate,
        currency=record.currency,
        restrictions=restrictions,
    )


# ==================
# Reservations
# ==================

def split_guest_name(full_name: str):
    """'John van Smith' -> ('John', 'van Smith'). Lossy for multi-space names."""
    parts = (full_name or "").split(" ", 1)
    first_name = parts[0]
    last_name = parts[1] if len(parts) > 1 else ""
    return first_name, last_name


def join_guest_name(first_name: str, last_name: str) -> str:
    return " ".join(part for part in (first_name, last_name) if part)


def channel_reservation_to_pms_booking(
    reservation: ChannelReservation,
    resolve_room: Resolver = identity,
    resolve_rate_plan: Resolver = identity,
    pms_property_id: Optional[str] = None,
) -> PmsBooking:
    """
    Build a PMS booking draft (no PMS id yet) from a channel reservation.

    Guest phone and address come from ``guest_details``.
    """
    room_id = _require(reservation.room_id, "room_id", "Reservation")
    _require(reservation.check_in, "check_in", "Reservation")
    _require(reservation.check_out, "check_out", "Reservation")

    first_name, last_name = split_guest_name(reservation.guest_name)
    details = reservation.guest_details or ChannelGuestDetails()

    if reservation.status == ChannelReservationStatus.CANCELLED:
        status = PmsBookingStatus.CANCELED
    else:
        status = PmsBookingStatus.CONFIRMED

    return PmsBooking(
        property_id=pms_property_id,
        room_type_id=resolve_room(room_id),
        rate_plan_id=resolve_rate_plan(reservation.rate_plan_id) if reservation.rate_plan_id else None,
        check_in_date=reservation.check_in,
        check_out_date=reservation.check_out,
        guest=PmsGuest(
            first_name=first_name,
            last_name=last_name,
            email=reservation.guest_email,
            phone=details.phone,
            address=details.address,
            city=details.city,
            country=details.country,
            postal_code=details.postal_code,
        ),
        adults=reservation.adults,
        children=reservation.children,
        status=status,
        payment=PmsPayment(
            total_amount=reservation.total_price,
            currency=reservation.currency,
        ),
        special_requests=reservation.special_requests,
        source=reservation.source,
    )


def pms_booking_to_channel_reservation(
    booking: PmsBooking,
    resolve_room: Resolver = identity,
    resolve_rate_plan: Resolver = identity,
    channel_property_id: Optional[str] = None,
) -> ChannelReservation:
    room_type_id = _require(booking.room_type_id, "room_type_id", "Booking")
    _require(booking.check_in_date, "check_in_date", "Booking")
    _require(booking.check_out_date, "check_out_date", "Booking")

    guest = booking.guest
    has_details = any((guest.phone, guest.address, guest.city, guest.country, guest.postal_code))

    return ChannelReservation(
        property_id=channel_property_id,
        room_id=resolve_room(room_type_id),
        rate_plan_id=resolve_rate_plan(booking.rate_plan_id) if booking.rate_plan_id else None,
        check_in=booking.check_in_date,
        check_out=booking.check_out_date,
        guest_name=join_guest_name(guest.first_name, guest.last_name),
        guest_email=guest.email,
        adults=booking.adults,
        children=booking.children or 0,
        total_price=booking.payment.total_amount if booking.payment.total_amount is not None else Decimal("0"),
        currency=booking.payment.currency,
        status=PMS_TO_CHANNEL_STATUS.get(booking.status, ChannelReservationStatus.CONFIRMED),
        external_reservation_id=booking.id,
        special_requests=booking.special_requests,
        guest_details=ChannelGuestDetails(
            phone=guest.phone,
            address=guest.address,
            city=guest.city,
            country=guest.country,
            postal_code=guest.postal_code,
        ) if has_details else None,
        source=booking.source,
    )

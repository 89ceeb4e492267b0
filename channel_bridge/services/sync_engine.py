"""
Synchronization Engine

Orchestrates every directional pass between the PMS and the channel
manager:

    resolve property -> fetch source -> translate -> group & push
    -> persist reservation linkage -> audit

Collaborators are injected; nothing is looked up from module state. Every
external call goes through ``_call`` so it lands in the audit log exactly
once, whether it succeeds or fails. Operations on the same property are
serialized by a property-scoped lock.
"""

import datetime as dt
import time
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Tuple

from tenacity import RetryError

from ..exceptions import (
    ConsistencyRisk,
    PropertyNotFound,
    ReservationNotFound,
    UpstreamError,
    ValidationError,
)
from ..models import ExternalSystem, Property, Reservation, ReservationStatus
from ..schemas.channel import ChannelReservation, ChannelReservationStatus
from ..schemas.pms import AvailabilityStatus, PmsAvailability, PmsBooking, PmsBookingStatus, PmsGuest, PmsPayment, PmsRate
from ..schemas.sync import (
    NightAvailability,
    NightRate,
    ReservationUpdate,
    RoomAvailability,
    SyncBatch,
    SyncResult,
)
from ..utils.locks import PropertyLockRegistry
from ..utils.logging_config import get_logger, property_id_var
from .audit_service import AuditEntry
from .batching import group_availability, group_rates
from .channel_client import ChannelClient
from .http_client import ApiResponse
from .mapping_store import IdentifierMappingStore, MappingDirection, MappingKind
from .pms_client import PmsClient
from .repositories import AuditSink, PropertyStore, ReservationStore
from .retry_policy import BoundedRetryPolicy
from .translation import (
    availability_to_channel,
    channel_reservation_to_pms_booking,
    join_guest_name,
    pms_booking_to_channel_reservation,
    rate_plan_to_channel_rate_plan,
    rate_to_channel,
    room_to_channel_room,
    split_guest_name,
)

logger = get_logger(__name__)

# Source recorded when a booking does not say where it came from
DEFAULT_PMS_SOURCE = "pms"
DEFAULT_CHANNEL_SOURCE = "channel"

# Local status recorded for the channel status a reservation was sent with
LOCAL_STATUS_FOR_CHANNEL = {
    ChannelReservationStatus.CANCELLED: ReservationStatus.CANCELLED,
    ChannelReservationStatus.PENDING: ReservationStatus.PENDING,
}

# Channel status pushed when a local reservation changes
CHANNEL_STATUS_FOR_LOCAL = {
    ReservationStatus.PENDING.value: ChannelReservationStatus.PENDING,
    ReservationStatus.CONFIRMED.value: ChannelReservationStatus.CONFIRMED,
}


class SyncEngine:

    def __init__(
        self,
        properties: PropertyStore,
        reservations: ReservationStore,
        audit: AuditSink,
        mappings: IdentifierMappingStore,
        pms_client: PmsClient,
        channel_client: ChannelClient,
        persist_policy: Optional[BoundedRetryPolicy] = None,
        locks: Optional[PropertyLockRegistry] = None,
        pms_id_optional_sources: Iterable[str] = ("ai_agent",),
        channel_id_optional_sources: Iterable[str] = (),
    ):
        self.properties = properties
        self.reservations = reservations
        self.audit = audit
        self.mappings = mappings
        self.pms = pms_client
        self.channel = channel_client
        self.persist_policy = persist_policy or BoundedRetryPolicy(extra_attempts=1)
        self.locks = locks if locks is not None else PropertyLockRegistry()
        self.pms_id_optional_sources: FrozenSet[str] = frozenset(pms_id_optional_sources)
        self.channel_id_optional_sources: FrozenSet[str] = frozenset(channel_id_optional_sources)

    # ==================
    # Plumbing
    # ==================

    def _get_property(self, property_id: str) -> Property:
        prop = self.properties.get_by_id(property_id)
        if prop is None:
            raise PropertyNotFound(property_id)
        property_id_var.set(prop.id)
        return prop

    def _get_reservation(self, reservation_id: str) -> Reservation:
        reservation = self.reservations.get(reservation_id)
        if reservation is None:
            raise ReservationNotFound(reservation_id)
        return reservation

    @staticmethod
    def _elapsed_ms(started: float) -> int:
        return int((time.perf_counter() - started) * 1000)

    def _record(self, entry: AuditEntry) -> None:
        try:
            self.audit.append(entry)
        except Exception as e:
            logger.warning(f"Audit sink rejected entry for {entry.method} {entry.endpoint}: {e}")

    async def _call(self, property_id: str, call) -> ApiResponse:
        """Await one external call and record it in the audit log."""
        started = time.perf_counter()
        try:
            response = await call
        except UpstreamError as e:
            duration_ms = self._elapsed_ms(started)
            self._record(AuditEntry(
                system=e.system,
                method=e.method,
                endpoint=e.endpoint,
                success=False,
                status_code=e.status_code,
                request_payload=e.request_payload,
                response_payload=e.body,
                error=e.message,
                duration_ms=duration_ms,
                property_id=property_id,
            ))
            logger.upstream_call(e.system, e.method, e.endpoint, e.status_code, duration_ms)
            raise

        duration_ms = self._elapsed_ms(started)
        self._record(AuditEntry(
            system=response.system,
            method=response.method,
            endpoint=response.endpoint,
            success=True,
            status_code=response.status_code,
            request_payload=response.request_payload,
            response_payload=response.raw,
            duration_ms=duration_ms,
            property_id=property_id,
        ))
        logger.upstream_call(response.system, response.method, response.endpoint, response.status_code, duration_ms)
        return response

    @staticmethod
    def _check_range(start_date: dt.date, end_date: dt.date) -> None:
        if end_date < start_date:
            raise ValidationError("end_date must not be before start_date", field="end_date")

    @staticmethod
    def _in_catalog(prop: Property, records: List[Any]) -> Tuple[List[Any], int]:
        """Drop records for room types outside a non-empty property catalog."""
        catalog = set(prop.room_type_ids)
        if not catalog:
            return list(records), 0
        kept = [r for r in records if r.room_type_id is None or r.room_type_id in catalog]
        return kept, len(records) - len(kept)

    # ==================
    # Inventory & Rates (PMS -> channel)
    # ==================

    async def sync_inventory(self, property_id: str, start_date: dt.date, end_date: dt.date) -> SyncResult:
        self._check_range(start_date, end_date)
        async with self.locks.hold(property_id):
            prop = self._get_property(property_id)
            data = await self._sync_inventory(prop, start_date, end_date)
        return SyncResult.ok("Availability synchronized successfully", data)

    async def sync_rates(self, property_id: str, start_date: dt.date, end_date: dt.date) -> SyncResult:
        self._check_range(start_date, end_date)
        async with self.locks.hold(property_id):
            prop = self._get_property(property_id)
            data = await self._sync_rates(prop, start_date, end_date)
        return SyncResult.ok("Rates synchronized successfully", data)

    async def run_initial_sync(self, property_id: str, start_date: dt.date, end_date: dt.date) -> SyncResult:
        """Inventory then rates under one lock, then flag the property as synced."""
        self._check_range(start_date, end_date)
        async with self.locks.hold(property_id):
            prop = self._get_property(property_id)
            inventory = await self._sync_inventory(prop, start_date, end_date)
            rates = await self._sync_rates(prop, start_date, end_date)
            self.properties.mark_initial_sync_completed(prop.id)
        logger.info(f"Initial sync completed for property {prop.id}")
        return SyncResult.ok("Initial synchronization completed successfully", {
            "property_id": prop.id,
            "inventory": inventory,
            "rates": rates,
        })

    async def _sync_inventory(self, prop: Property, start_date: dt.date, end_date: dt.date) -> Dict[str, Any]:
        started = time.perf_counter()
        response = await self._call(prop.id, self.pms.get_availability(prop.pms_property_id, start_date, end_date))
        records: List[PmsAvailability]
        records, skipped = self._in_catalog(prop, response.data)

        resolve_room = self.mappings.resolver(MappingDirection.PMS_TO_CHANNEL, prop.id, MappingKind.ROOM_TYPE)
        batches = group_availability([availability_to_channel(r, resolve_room) for r in records])

        for batch in batches:
            await self._call(
                prop.id,
                self.channel.update_availability(prop.channel_property_id, batch.room_id, batch.values),
            )

        total = sum(len(b.values) for b in batches)
        logger.sync_completed("inventory", prop.id, len(batches), total, self._elapsed_ms(started))
        return {
            "property_id": prop.id,
            "start_date": start_date.isoformat(),
            "end_date": end_date.isoformat(),
            "records": total,
            "skipped": skipped,
            "batches": [SyncBatch(room_id=b.room_id, records=len(b.values)).model_dump() for b in batches],
        }

    async def _sync_rates(self, prop: Property, start_date: dt.date, end_date: dt.date) -> Dict[str, Any]:
        started = time.perf_counter()
        response = await self._call(prop.id, self.pms.get_rates(prop.pms_property_id, start_date, end_date))
        records: List[PmsRate]
        records, skipped = self._in_catalog(prop, response.data)

        resolve_room = self.mappings.resolver(MappingDirection.PMS_TO_CHANNEL, prop.id, MappingKind.ROOM_TYPE)
        resolve_rate_plan = self.mappings.resolver(MappingDirection.PMS_TO_CHANNEL, prop.id, MappingKind.RATE_PLAN)
        batches = group_rates([rate_to_channel(r, resolve_room, resolve_rate_plan) for r in records])

        for batch in batches:
            await self._call(
                prop.id,
                self.channel.update_rates(prop.channel_property_id, batch.room_id, batch.rate_plan_id, batch.values),
            )

        total = sum(len(b.values) for b in batches)
        logger.sync_completed("rates", prop.id, len(batches), total, self._elapsed_ms(started))
        return {
            "property_id": prop.id,
            "start_date": start_date.isoformat(),
            "end_date": end_date.isoformat(),
            "records": total,
            "skipped": skipped,
            "batches": [
                SyncBatch(room_id=b.room_id, rate_plan_id=b.rate_plan_id, records=len(b.values)).model_dump()
                for b in batches
            ],
        }

    # ==================
    # Catalog (setup views)
    # ==================

    async def fetch_room_types(self, property_id: str) -> SyncResult:
        prop = self._get_property(property_id)
        pms_response = await self._call(prop.id, self.pms.get_room_types(prop.pms_property_id))
        channel_response = await self._call(prop.id, self.channel.get_rooms(prop.channel_property_id))
        return SyncResult.ok("Room types retrieved successfully", {
            "pms_room_types": [room_to_channel_room(r).to_wire() for r in pms_response.data],
            "channel_rooms": [r.to_wire() for r in channel_response.data],
            "mappings": self.mappings.get_mapping(prop.id, MappingKind.ROOM_TYPE),
        })

    async def fetch_rate_plans(self, property_id: str) -> SyncResult:
        prop = self._get_property(property_id)
        pms_response = await self._call(prop.id, self.pms.get_rate_plans(prop.pms_property_id))
        channel_response = await self._call(prop.id, self.channel.get_rate_plans(prop.channel_property_id))
        return SyncResult.ok("Rate plans retrieved successfully", {
            "pms_rate_plans": [rate_plan_to_channel_rate_plan(r).to_wire() for r in pms_response.data],
            "channel_rate_plans": [r.to_wire() for r in channel_response.data],
            "mappings": self.mappings.get_mapping(prop.id, MappingKind.RATE_PLAN),
        })

    # ==================
    # Availability query
    # ==================

    async def check_availability(
        self,
        property_id: str,
        check_in: dt.date,
        check_out: dt.date,
        adults: int,
        children: int = 0,
    ) -> SyncResult:
        """PMS availability and rates for a stay, combined per room type.

        Read only, so no property lock is taken. Nights run from check_in up
        to the day before check_out.
        """
        if check_out <= check_in:
            raise ValidationError("checkOut must be after checkIn", field="checkOut")
        if adults < 1 or children < 0:
            raise ValidationError("At least one adult is required and children cannot be negative", field="adults")
        prop = self._get_property(property_id)

        availability = await self._call(prop.id, self.pms.get_availability(prop.pms_property_id, check_in, check_out))
        rates = await self._call(prop.id, self.pms.get_rates(prop.pms_property_id, check_in, check_out))

        def in_stay(record) -> bool:
            return record.room_type_id is not None and record.date is not None and check_in <= record.date < check_out

        nights_by_room: Dict[str, List[PmsAvailability]] = {}
        for record in self._in_catalog(prop, availability.data)[0]:
            if in_stay(record):
                nights_by_room.setdefault(record.room_type_id, []).append(record)
        rates_by_room: Dict[str, List[PmsRate]] = {}
        for record in self._in_catalog(prop, rates.data)[0]:
            if in_stay(record):
                rates_by_room.setdefault(record.room_type_id, []).append(record)

        stay_nights = (check_out - check_in).days
        guests = adults + children
        occupancy = {rt.get("id"): rt.get("max_occupancy") for rt in (prop.room_types or [])}
        resolve_room = self.mappings.resolver(MappingDirection.PMS_TO_CHANNEL, prop.id, MappingKind.ROOM_TYPE)

        rooms = []
        for room_type_id, nights in nights_by_room.items():
            nights.sort(key=lambda r: r.date)
            covered = {r.date for r in nights}
            free = [
                r.availability if r.status == AvailabilityStatus.AVAILABLE else 0
                for r in nights
            ]
            max_occupancy = occupancy.get(room_type_id)
            rooms.append(RoomAvailability(
                room_type_id=room_type_id,
                channel_room_id=resolve_room(room_type_id),
                available_rooms=max(min(free), 0) if len(covered) == stay_nights else 0,
                fits_party=max_occupancy is None or max_occupancy >= guests,
                nights=[
                    NightAvailability(date=r.date, availability=r.availability, status=r.status.value)
                    for r in nights
                ],
                rates=[
                    NightRate(date=r.date, rate_plan_id=r.rate_plan_id, rate=r.rate, currency=r.currency)
                    for r in sorted(rates_by_room.get(room_type_id, []), key=lambda r: (r.date, r.rate_plan_id or ""))
                ],
            ).model_dump(mode="json"))

        logger.info(f"Availability checked for property {prop.id}: {len(rooms)} room types, {stay_nights} nights")
        return SyncResult.ok("Availability retrieved successfully", {
            "property_id": prop.id,
            "check_in": check_in.isoformat(),
            "check_out": check_out.isoformat(),
            "adults": adults,
            "children": children,
            "rooms": rooms,
        })

    # ==================
    # Reservations
    # ==================

    async def push_booking_to_channel(self, property_id: str, booking: PmsBooking) -> SyncResult:
        """PMS (or agent-created) booking -> channel-manager reservation."""
        source = booking.source or DEFAULT_PMS_SOURCE
        if not booking.id and source not in self.pms_id_optional_sources:
            raise ValidationError(f"PMS booking id is required for source '{source}'", field="id")

        async with self.locks.hold(property_id):
            prop = self._get_property(property_id)

            if booking.id:
                existing = self.reservations.find_by_external_id(ExternalSystem.PMS.value, booking.id, prop.id)
                if existing is not None and existing.channel_reservation_id:
                    logger.info(f"Booking {booking.id} already linked to {existing.channel_reservation_id}")
                    return SyncResult.ok("Booking already synchronized", self._linkage_data(existing))

            draft = pms_booking_to_channel_reservation(
                booking,
                self.mappings.resolver(MappingDirection.PMS_TO_CHANNEL, prop.id, MappingKind.ROOM_TYPE),
                self.mappings.resolver(MappingDirection.PMS_TO_CHANNEL, prop.id, MappingKind.RATE_PLAN),
                channel_property_id=prop.channel_property_id,
            )
            draft.source = source

            response = await self._call(prop.id, self.channel.create_reservation(prop.channel_property_id, draft))
            created: ChannelReservation = response.data
            if not created.id:
                raise self._missing_destination_id(response)

            values = self._values_from_booking(booking, source)
            values["channel_data"] = created.to_wire()
            reservation = self._persist_linkage(
                prop.id, values,
                pms_booking_id=booking.id,
                channel_reservation_id=created.id,
                status=LOCAL_STATUS_FOR_CHANNEL.get(draft.status, ReservationStatus.CONFIRMED),
            )

        return SyncResult.ok("Reservation created in channel manager", self._linkage_data(reservation))

    async def import_channel_reservation(self, channel_property_id: str, reservation: ChannelReservation) -> SyncResult:
        """Channel-manager reservation -> PMS booking."""
        source = reservation.source or DEFAULT_CHANNEL_SOURCE
        if not reservation.id and source not in self.channel_id_optional_sources:
            raise ValidationError(f"Channel reservation id is required for source '{source}'", field="id")

        prop = self.properties.get_by_external_id(channel_property_id)
        if prop is None:
            raise PropertyNotFound(channel_property_id)

        async with self.locks.hold(prop.id):
            property_id_var.set(prop.id)

            if reservation.id:
                existing = self.reservations.find_by_external_id(ExternalSystem.CHANNEL.value, reservation.id, prop.id)
                if existing is not None and existing.pms_booking_id:
                    logger.info(f"Channel reservation {reservation.id} already imported as {existing.pms_booking_id}")
                    return SyncResult.ok("Reservation already synchronized", self._linkage_data(existing))

            draft = channel_reservation_to_pms_booking(
                reservation,
                self.mappings.resolver(MappingDirection.CHANNEL_TO_PMS, prop.id, MappingKind.ROOM_TYPE),
                self.mappings.resolver(MappingDirection.CHANNEL_TO_PMS, prop.id, MappingKind.RATE_PLAN),
                pms_property_id=prop.pms_property_id,
            )
            draft.source = source

            response = await self._call(prop.id, self.pms.create_booking(prop.pms_property_id, draft))
            created: PmsBooking = response.data
            if not created.id:
                raise self._missing_destination_id(response)

            if reservation.status == ChannelReservationStatus.CANCELLED:
                status = ReservationStatus.CANCELLED
            else:
                status = ReservationStatus.CONFIRMED

            values = self._values_from_booking(draft, source)
            values["channel_data"] = reservation.to_wire()
            saved = self._persist_linkage(
                prop.id, values,
                pms_booking_id=created.id,
                channel_reservation_id=reservation.id,
                status=status,
            )

        return SyncResult.ok("Reservation created in PMS", self._linkage_data(saved))

    async def cancel_reservation(self, reservation_id: str) -> SyncResult:
        """Cancel on both sides, then locally. Already-cancelled rows are a no-op."""
        property_id = self._get_reservation(reservation_id).property_id

        async with self.locks.hold(property_id):
            reservation = self._get_reservation(reservation_id)
            if reservation.status == ReservationStatus.CANCELLED.value:
                return SyncResult.ok("Reservation already cancelled", self._linkage_data(reservation))

            prop = self._get_property(property_id)
            if reservation.channel_reservation_id:
                await self._call(prop.id, self.channel.cancel_reservation(reservation.channel_reservation_id))
            if reservation.pms_booking_id:
                await self._call(prop.id, self.pms.cancel_booking(prop.pms_property_id, reservation.pms_booking_id))

            updated = self.reservations.update_status(reservation.id, ReservationStatus.CANCELLED.value)

        logger.info(f"Reservation {updated.id} cancelled")
        return SyncResult.ok("Reservation cancelled successfully", self._linkage_data(updated))

    async def update_reservation(self, reservation_id: str, changes: ReservationUpdate) -> SyncResult:
        property_id = self._get_reservation(reservation_id).property_id

        async with self.locks.hold(property_id):
            reservation = self._get_reservation(reservation_id)
            values = changes.model_dump(exclude_none=True)
            if not values:
                raise ValidationError("No changes supplied")
            if reservation.status == ReservationStatus.CANCELLED.value:
                raise ValidationError("Cancelled reservations cannot be modified", field="status")

            for field in ("check_in_date", "check_out_date"):
                if field in values and values[field] != getattr(reservation, field):
                    if reservation.status == ReservationStatus.CONFIRMED.value:
                        raise ValidationError(
                            "Check-in and check-out dates cannot change once a reservation is confirmed",
                            field=field,
                        )

            check_in = values.get("check_in_date", reservation.check_in_date)
            check_out = values.get("check_out_date", reservation.check_out_date)
            if check_out <= check_in:
                raise ValidationError("check_out_date must be after check_in_date", field="check_out_date")

            prop = self._get_property(property_id)
            booking = self._booking_from_reservation(reservation, values)

            if reservation.channel_reservation_id:
                channel_reservation = pms_booking_to_channel_reservation(
                    booking,
                    self.mappings.resolver(MappingDirection.PMS_TO_CHANNEL, prop.id, MappingKind.ROOM_TYPE),
                    self.mappings.resolver(MappingDirection.PMS_TO_CHANNEL, prop.id, MappingKind.RATE_PLAN),
                    channel_property_id=prop.channel_property_id,
                )
                channel_reservation.status = CHANNEL_STATUS_FOR_LOCAL[reservation.status]
                await self._call(
                    prop.id,
                    self.channel.update_reservation(reservation.channel_reservation_id, channel_reservation),
                )
            if reservation.pms_booking_id:
                await self._call(
                    prop.id,
                    self.pms.update_booking(prop.pms_property_id, reservation.pms_booking_id, booking),
                )

            updated = self.reservations.update(reservation.id, values)

        return SyncResult.ok("Reservation updated successfully", self._linkage_data(updated))

    # ==================
    # Reservation helpers
    # ==================

    def _persist_linkage(
        self,
        property_id: str,
        values: Dict[str, Any],
        pms_booking_id: Optional[str],
        channel_reservation_id: Optional[str],
        status: ReservationStatus,
    ) -> Reservation:
        """
        Create or update the local row carrying both external ids.

        Keyed by external id, so a retried write after a partial failure
        updates the row the first attempt left behind instead of adding one.
        """
        row = dict(
            values,
            property_id=property_id,
            pms_booking_id=pms_booking_id,
            channel_reservation_id=channel_reservation_id,
            status=status.value,
        )

        def write() -> Reservation:
            existing = None
            if channel_reservation_id:
                existing = self.reservations.find_by_external_id(
                    ExternalSystem.CHANNEL.value, channel_reservation_id, property_id
                )
            if existing is None and pms_booking_id:
                existing = self.reservations.find_by_external_id(
                    ExternalSystem.PMS.value, pms_booking_id, property_id
                )
            if existing is not None:
                return self.reservations.update(existing.id, row)
            return self.reservations.create(Reservation(**row))

        try:
            reservation = self.persist_policy.run(write)
        except RetryError as e:
            cause = e.last_attempt.exception()
            logger.error(
                f"Reservation linkage not stored after {self.persist_policy.max_attempts} attempts "
                f"(pms={pms_booking_id}, channel={channel_reservation_id}): {cause}"
            )
            raise ConsistencyRisk(
                "Destination write succeeded but the reservation could not be stored locally",
                property_id=property_id,
                pms_booking_id=pms_booking_id,
                channel_reservation_id=channel_reservation_id,
            ) from cause

        logger.reservation_linked(reservation.id, pms_booking_id, channel_reservation_id)
        return reservation

    @staticmethod
    def _values_from_booking(booking: PmsBooking, source: str) -> Dict[str, Any]:
        guest = booking.guest
        return {
            "room_type_id": booking.room_type_id,
            "rate_plan_id": booking.rate_plan_id,
            "guest_name": join_guest_name(guest.first_name, guest.last_name),
            "guest_email": guest.email,
            "guest_phone": guest.phone,
            "check_in_date": booking.check_in_date,
            "check_out_date": booking.check_out_date,
            "adults": booking.adults,
            "children": booking.children or 0,
            "total_price": booking.payment.total_amount,
            "currency": booking.payment.currency,
            "special_requests": booking.special_requests,
            "source": source,
        }

    @staticmethod
    def _booking_from_reservation(reservation: Reservation, changes: Dict[str, Any]) -> PmsBooking:
        def value(name: str):
            return changes.get(name, getattr(reservation, name))

        first_name, last_name = split_guest_name(reservation.guest_name)
        confirmed = reservation.status == ReservationStatus.CONFIRMED.value
        return PmsBooking(
            id=reservation.pms_booking_id,
            room_type_id=reservation.room_type_id,
            rate_plan_id=reservation.rate_plan_id,
            check_in_date=value("check_in_date"),
            check_out_date=value("check_out_date"),
            guest=PmsGuest(
                first_name=first_name,
                last_name=last_name,
                email=value("guest_email"),
                phone=reservation.guest_phone,
            ),
            adults=value("adults"),
            children=value("children") or 0,
            status=PmsBookingStatus.CONFIRMED if confirmed else None,
            payment=PmsPayment(total_amount=value("total_price"), currency=value("currency")),
            special_requests=value("special_requests"),
            source=reservation.source,
        )

    @staticmethod
    def _missing_destination_id(response: ApiResponse) -> UpstreamError:
        return UpstreamError(
            f"{response.system} accepted {response.method} {response.endpoint} but returned no id",
            system=response.system,
            method=response.method,
            endpoint=response.endpoint,
            status_code=response.status_code,
            body=response.raw,
            request_payload=response.request_payload,
            error_code="missing_id",
        )

    @staticmethod
    def _linkage_data(reservation: Reservation) -> Dict[str, Any]:
        return {
            "reservation_id": reservation.id,
            "property_id": reservation.property_id,
            "status": reservation.status,
            "pms_booking_id": reservation.pms_booking_id,
            "channel_reservation_id": reservation.channel_reservation_id,
        }

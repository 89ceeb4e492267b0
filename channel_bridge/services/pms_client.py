"""
PMS API Client

Typed async wrapper for the PMS REST API (snake_case JSON). Every method
returns an ApiResponse whose ``data`` is already validated into the
schemas in ``schemas.pms``.
"""

import datetime as dt
from typing import Optional

from ..config import Settings
from ..schemas.pms import (
    PmsAvailability,
    PmsBooking,
    PmsProperty,
    PmsRate,
    PmsRatePlan,
    PmsRoomType,
)
from .http_client import ApiClient, ApiResponse, build_auth


class PmsClient(ApiClient):
    """Client for the hotel-side property-management system"""

    system = "pms"

    # ==================
    # Property Operations
    # ==================

    async def get_property(self, property_id: str) -> ApiResponse:
        response = await self._request("GET", f"/properties/{property_id}")
        return self._parse_one(PmsProperty, response)

    async def get_room_types(self, property_id: str) -> ApiResponse:
        response = await self._request("GET", f"/properties/{property_id}/room_types")
        return self._parse_list(PmsRoomType, response)

    async def get_rate_plans(self, property_id: str) -> ApiResponse:
        response = await self._request("GET", f"/properties/{property_id}/rate_plans")
        return self._parse_list(PmsRatePlan, response)

    # ==================
    # ARI Operations
    # ==================

    async def get_availability(self, property_id: str, start_date: dt.date, end_date: dt.date) -> ApiResponse:
        response = await self._request(
            "GET",
            f"/properties/{property_id}/availability",
            params={"start_date": start_date.isoformat(), "end_date": end_date.isoformat()},
        )
        return self._parse_list(PmsAvailability, response)

    async def get_rates(self, property_id: str, start_date: dt.date, end_date: dt.date) -> ApiResponse:
        response = await self._request(
            "GET",
            f"/properties/{property_id}/rates",
            params={"start_date": start_date.isoformat(), "end_date": end_date.isoformat()},
        )
        return self._parse_list(PmsRate, response)

    # ==================
    # Booking Operations
    # ==================

    async def create_booking(self, property_id: str, booking: PmsBooking) -> ApiResponse:
        response = await self._request(
            "POST",
            f"/properties/{property_id}/bookings",
            payload=booking.model_dump(mode="json", exclude_none=True),
        )
        return self._parse_one(PmsBooking, response)

    async def update_booking(self, property_id: str, booking_id: str, booking: PmsBooking) -> ApiResponse:
        response = await self._request(
            "PUT",
            f"/properties/{property_id}/bookings/{booking_id}",
            payload=booking.model_dump(mode="json", exclude_none=True, exclude={"id"}),
        )
        return self._parse_one(PmsBooking, response)

    async def cancel_booking(self, property_id: str, booking_id: str) -> ApiResponse:
        return await self._request("DELETE", f"/properties/{property_id}/bookings/{booking_id}")


def get_pms_client(settings: Settings, user_agent: Optional[str] = None) -> PmsClient:
    """Create a PMS client from settings"""
    return PmsClient(
        base_url=settings.pms_base_url,
        auth=build_auth(settings.pms_api_key, settings.pms_username, settings.pms_password),
        timeout=settings.pms_timeout_seconds,
        user_agent=user_agent or "channel-bridge/1.0",
    )

"""
Channel-Manager API Client

Typed async wrapper for the channel-manager REST API. Payloads are built
from ``schemas.channel`` models and sent camelCase via ``to_wire()``.
"""

from typing import List, Optional

from ..config import Settings
from ..schemas.channel import (
    ChannelAvailability,
    ChannelProperty,
    ChannelRate,
    ChannelRatePlan,
    ChannelReservation,
    ChannelRoom,
)
from .http_client import ApiClient, ApiResponse, build_auth


class ChannelClient(ApiClient):
    """Client for the distribution-side channel manager"""

    system = "channel"

    # ==================
    # Property Operations
    # ==================

    async def get_properties(self) -> ApiResponse:
        response = await self._request("GET", "/properties")
        return self._parse_list(ChannelProperty, response)

    async def get_property(self, property_id: str) -> ApiResponse:
        response = await self._request("GET", f"/properties/{property_id}")
        return self._parse_one(ChannelProperty, response)

    async def get_rooms(self, property_id: str) -> ApiResponse:
        response = await self._request("GET", f"/properties/{property_id}/rooms")
        return self._parse_list(ChannelRoom, response)

    async def get_rate_plans(self, property_id: str) -> ApiResponse:
        response = await self._request("GET", f"/properties/{property_id}/rateplans")
        return self._parse_list(ChannelRatePlan, response)

    # ==================
    # ARI Operations
    # ==================

    async def update_availability(
        self,
        property_id: str,
        room_id: str,
        values: List[ChannelAvailability],
    ) -> ApiResponse:
        """Push one room's availability; body is the list of daily records"""
        return await self._request(
            "PUT",
            f"/properties/{property_id}/rooms/{room_id}/availability",
            payload=[v.to_wire() for v in values],
        )

    async def update_rates(
        self,
        property_id: str,
        room_id: str,
        rate_plan_id: str,
        values: List[ChannelRate],
    ) -> ApiResponse:
        """Push one (room, rate plan) pair's daily rates"""
        return await self._request(
            "PUT",
            f"/properties/{property_id}/rooms/{room_id}/rateplans/{rate_plan_id}/rates",
            payload=[v.to_wire() for v in values],
        )

    # ==================
    # Reservation Operations
    # ==================

    async def create_reservation(self, property_id: str, reservation: ChannelReservation) -> ApiResponse:
        payload = reservation.to_wire()
        payload.pop("id", None)
        response = await self._request("POST", f"/properties/{property_id}/reservations", payload=payload)
        return self._parse_one(ChannelReservation, response)

    async def update_reservation(self, reservation_id: str, reservation: ChannelReservation) -> ApiResponse:
        payload = reservation.to_wire()
        payload.pop("id", None)
        response = await self._request("PUT", f"/reservations/{reservation_id}", payload=payload)
        return self._parse_one(ChannelReservation, response)

    async def cancel_reservation(self, reservation_id: str) -> ApiResponse:
        return await self._request("DELETE", f"/reservations/{reservation_id}")


def get_channel_client(settings: Settings, user_agent: Optional[str] = None) -> ChannelClient:
    """Create a channel-manager client from settings"""
    return ChannelClient(
        base_url=settings.channel_base_url,
        auth=build_auth(settings.channel_api_key, settings.channel_username, settings.channel_password),
        timeout=settings.channel_timeout_seconds,
        user_agent=user_agent or "channel-bridge/1.0",
    )

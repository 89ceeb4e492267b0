"""
Tests for the PMS and channel-manager clients

Tests cover:
- Auth attached once per client (API key header, basic auth)
- Query params on GET, JSON bodies on PUT/POST
- Typed parsing of responses, including wrapped {"data": ...} bodies
- Non-2xx, malformed and timed-out calls raising UpstreamError
"""

import base64
import json
import pytest
from datetime import date
from decimal import Decimal

import httpx
from pytest_httpx import HTTPXMock

from channel_bridge.exceptions import UpstreamError
from channel_bridge.schemas.channel import ChannelAvailability, ChannelReservation
from channel_bridge.schemas.pms import PmsBooking, PmsGuest
from channel_bridge.services.channel_client import ChannelClient
from channel_bridge.services.http_client import ApiKeyAuth, build_auth
from channel_bridge.services.pms_client import PmsClient

PMS_URL = "https://pms.test/api"
CHANNEL_URL = "https://channel.test/v1"


@pytest.fixture
def pms():
    return PmsClient(base_url=PMS_URL, auth=build_auth(api_key="pms-key"), timeout=10)


@pytest.fixture
def channel():
    return ChannelClient(base_url=CHANNEL_URL, auth=build_auth(username="user", password="pass"), timeout=30)


class TestBuildAuth:

    def test_api_key_wins(self):
        assert isinstance(build_auth(api_key="k", username="u", password="p"), ApiKeyAuth)

    def test_basic_when_no_key(self):
        assert isinstance(build_auth(username="u", password="p"), httpx.BasicAuth)

    def test_anonymous(self):
        assert build_auth() is None


class TestPmsClient:

    @pytest.mark.asyncio
    async def test_get_availability(self, pms, httpx_mock: HTTPXMock):
        httpx_mock.add_response(
            method="GET",
            url=f"{PMS_URL}/properties/pms-1/availability?start_date=2024-01-01&end_date=2024-01-03",
            json=[
                {"date": "2024-01-01", "room_type_id": "rt1", "availability": 3, "status": "available"},
                {"date": "2024-01-02", "room_type_id": "rt1", "availability": 0, "status": "unavailable"},
            ],
        )

        response = await pms.get_availability("pms-1", date(2024, 1, 1), date(2024, 1, 3))

        assert response.status_code == 200
        assert [r.availability for r in response.data] == [3, 0]
        assert response.data[0].date == date(2024, 1, 1)

        request = httpx_mock.get_request()
        assert request.headers["X-API-KEY"] == "pms-key"
        assert "Authorization" not in request.headers

    @pytest.mark.asyncio
    async def test_wrapped_list_is_unwrapped(self, pms, httpx_mock: HTTPXMock):
        httpx_mock.add_response(
            url=f"{PMS_URL}/properties/pms-1/room_types",
            json={"data": [{"id": "rt1", "name": "Double", "default_rate": "100.00"}]},
        )

        response = await pms.get_room_types("pms-1")

        assert response.data[0].default_rate == Decimal("100.00")

    @pytest.mark.asyncio
    async def test_create_booking_sends_json_body(self, pms, httpx_mock: HTTPXMock):
        httpx_mock.add_response(
            method="POST",
            url=f"{PMS_URL}/properties/pms-1/bookings",
            json={"id": "B-77", "room_type_id": "rt1"},
            status_code=201,
        )
        booking = PmsBooking(
            room_type_id="rt1",
            check_in_date=date(2024, 2, 1),
            check_out_date=date(2024, 2, 3),
            guest=PmsGuest(first_name="Ada", last_name="Lovelace"),
        )

        response = await pms.create_booking("pms-1", booking)

        assert response.data.id == "B-77"
        body = json.loads(httpx_mock.get_request().content)
        assert body["check_in_date"] == "2024-02-01"
        assert body["guest"]["first_name"] == "Ada"
        assert "id" not in body

    @pytest.mark.asyncio
    async def test_error_status_raises_upstream_error(self, pms, httpx_mock: HTTPXMock):
        httpx_mock.add_response(
            url=f"{PMS_URL}/properties/pms-1/rate_plans",
            status_code=404,
            json={"message": "Property not found"},
        )

        with pytest.raises(UpstreamError) as exc:
            await pms.get_rate_plans("pms-1")

        error = exc.value
        assert error.status_code == 404
        assert error.system == "pms"
        assert error.method == "GET"
        assert error.endpoint == "/properties/pms-1/rate_plans"
        assert "Property not found" in error.message
        assert error.retryable is False

    @pytest.mark.asyncio
    async def test_malformed_body_raises_upstream_error(self, pms, httpx_mock: HTTPXMock):
        httpx_mock.add_response(
            url=f"{PMS_URL}/properties/pms-1/room_types",
            json={"unexpected": "shape"},
        )

        with pytest.raises(UpstreamError) as exc:
            await pms.get_room_types("pms-1")

        assert exc.value.error_code == "malformed_response"
        assert exc.value.status_code == 200

    @pytest.mark.asyncio
    async def test_timeout_raises_upstream_error(self, pms, httpx_mock: HTTPXMock):
        httpx_mock.add_exception(httpx.ReadTimeout("timed out"))

        with pytest.raises(UpstreamError) as exc:
            await pms.get_property("pms-1")

        assert exc.value.status_code is None
        assert exc.value.error_code == "timeout"
        assert exc.value.retryable is True


class TestChannelClient:

    @pytest.mark.asyncio
    async def test_update_availability_sends_camel_case_list(self, channel, httpx_mock: HTTPXMock):
        httpx_mock.add_response(
            method="PUT",
            url=f"{CHANNEL_URL}/properties/ch-1/rooms/CH-R1/availability",
            json={"success": True},
        )
        values = [
            ChannelAvailability(date=date(2024, 1, 1), room_id="CH-R1", allotment=3),
            ChannelAvailability(date=date(2024, 1, 2), room_id="CH-R1", allotment=1),
        ]

        response = await channel.update_availability("ch-1", "CH-R1", values)

        assert response.request_payload[0] == {
            "date": "2024-01-01", "roomId": "CH-R1", "allotment": 3, "status": "available",
        }
        request = httpx_mock.get_request()
        expected = "Basic " + base64.b64encode(b"user:pass").decode()
        assert request.headers["Authorization"] == expected
        assert json.loads(request.content)[1]["allotment"] == 1

    @pytest.mark.asyncio
    async def test_create_reservation_parses_response(self, channel, httpx_mock: HTTPXMock):
        httpx_mock.add_response(
            method="POST",
            url=f"{CHANNEL_URL}/properties/ch-1/reservations",
            json={"id": "YP-9", "roomId": "CH-R1", "checkIn": "2024-03-10", "checkOut": "2024-03-12",
                  "guestName": "John Smith", "totalPrice": 245.5, "status": "confirmed"},
        )
        draft = ChannelReservation(
            room_id="CH-R1", check_in=date(2024, 3, 10), check_out=date(2024, 3, 12),
            guest_name="John Smith", total_price=Decimal("245.50"), external_reservation_id="B-1",
        )

        response = await channel.create_reservation("ch-1", draft)

        assert response.data.id == "YP-9"
        body = json.loads(httpx_mock.get_request().content)
        assert body["externalReservationId"] == "B-1"
        assert body["totalPrice"] == 245.5
        assert "id" not in body

    @pytest.mark.asyncio
    async def test_cancel_reservation_has_no_body(self, channel, httpx_mock: HTTPXMock):
        httpx_mock.add_response(method="DELETE", url=f"{CHANNEL_URL}/reservations/YP-9", status_code=204)

        response = await channel.cancel_reservation("YP-9")

        assert response.status_code == 204
        assert response.data is None
        assert httpx_mock.get_request().content == b""

    @pytest.mark.asyncio
    async def test_server_error_is_retryable(self, channel, httpx_mock: HTTPXMock):
        httpx_mock.add_response(
            method="PUT",
            url=f"{CHANNEL_URL}/properties/ch-1/rooms/CH-R1/rateplans/CH-BAR/rates",
            status_code=503,
        )

        with pytest.raises(UpstreamError) as exc:
            await channel.update_rates("ch-1", "CH-R1", "CH-BAR", [])

        assert exc.value.status_code == 503
        assert exc.value.retryable is True
        assert exc.value.error_code == "service_unavailable"

"""
Shared fixtures: an in-memory database per test, SQLAlchemy repositories
bound to it, and a registered property with a small room-type catalog.
"""

import pytest
from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from channel_bridge.database import Base
from channel_bridge import models  # noqa: F401
from channel_bridge.services.audit_service import SqlAuditSink
from channel_bridge.services.channel_client import ChannelClient
from channel_bridge.services.http_client import ApiResponse
from channel_bridge.services.mapping_store import IdentifierMappingStore
from channel_bridge.services.pms_client import PmsClient
from channel_bridge.services.repositories import (
    PropertyRepository,
    RequestLogRepository,
    ReservationRepository,
)
from channel_bridge.services.retry_policy import BoundedRetryPolicy
from channel_bridge.services.sync_engine import SyncEngine


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)
    yield factory
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def property_repo(session_factory):
    return PropertyRepository(session_factory)


@pytest.fixture
def reservation_repo(session_factory):
    return ReservationRepository(session_factory)


@pytest.fixture
def log_repo(session_factory):
    return RequestLogRepository(session_factory)


@pytest.fixture
def mapping_store(property_repo):
    return IdentifierMappingStore(property_repo)


@pytest.fixture
def prop(property_repo):
    """Property P1 with room types rt1 (100.00) and rt2"""
    return property_repo.create(
        name="P1",
        pms_property_id="pms-1",
        channel_property_id="ch-1",
        room_types=[
            {"id": "rt1", "name": "Double", "max_occupancy": 2, "base_price": "100.00"},
            {"id": "rt2", "name": "Suite", "max_occupancy": 4, "base_price": "180.00"},
        ],
    )


@pytest.fixture
def pms_client():
    client = AsyncMock(spec=PmsClient)
    client.cancel_booking.return_value = api_response("pms", "DELETE", "/bookings", status_code=204)
    client.update_booking.return_value = api_response("pms", "PUT", "/bookings")
    return client


@pytest.fixture
def channel_client():
    client = AsyncMock(spec=ChannelClient)
    client.update_availability.return_value = api_response("channel", "PUT", "/availability")
    client.update_rates.return_value = api_response("channel", "PUT", "/rates")
    client.update_reservation.return_value = api_response("channel", "PUT", "/reservations")
    client.cancel_reservation.return_value = api_response("channel", "DELETE", "/reservations", status_code=204)
    return client


@pytest.fixture
def engine(property_repo, reservation_repo, session_factory, mapping_store, pms_client, channel_client):
    return SyncEngine(
        properties=property_repo,
        reservations=reservation_repo,
        audit=SqlAuditSink(session_factory),
        mappings=mapping_store,
        pms_client=pms_client,
        channel_client=channel_client,
        persist_policy=BoundedRetryPolicy(extra_attempts=1),
    )


def api_response(system, method, endpoint, data=None, raw=None, payload=None, status_code=200):
    """Build the ApiResponse a client would return"""
    return ApiResponse(
        system=system,
        method=method,
        endpoint=endpoint,
        status_code=status_code,
        data=data,
        raw=raw if raw is not None else {},
        request_payload=payload,
    )


JAN_1 = date(2024, 1, 1)
JAN_2 = date(2024, 1, 2)
JAN_3 = date(2024, 1, 3)
HUNDRED = Decimal("100.00")

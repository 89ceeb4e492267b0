"""
Composition root.

Builds the engine and its collaborators once from settings and the session
factory. Routers receive them through FastAPI dependencies, which tests
override.
"""

from functools import lru_cache

from fastapi import Depends

from .config import Settings, get_settings
from .database import SessionLocal
from .services.audit_service import SqlAuditSink
from .services.channel_client import get_channel_client
from .services.mapping_store import IdentifierMappingStore
from .services.pms_client import get_pms_client
from .services.repositories import (
    PropertyRepository,
    RequestLogRepository,
    ReservationRepository,
    SessionFactory,
)
from .services.retry_policy import BoundedRetryPolicy
from .services.setup_service import SetupService
from .services.sync_engine import SyncEngine
from .utils.locks import PropertyLockRegistry


def build_sync_engine(settings: Settings, session_factory: SessionFactory) -> SyncEngine:
    properties = PropertyRepository(session_factory)
    return SyncEngine(
        properties=properties,
        reservations=ReservationRepository(session_factory),
        audit=SqlAuditSink(session_factory),
        mappings=IdentifierMappingStore(properties),
        pms_client=get_pms_client(settings),
        channel_client=get_channel_client(settings),
        persist_policy=BoundedRetryPolicy(extra_attempts=settings.reservation_persist_extra_attempts),
        locks=PropertyLockRegistry(),
        pms_id_optional_sources=settings.pms_id_optional_source_set,
        channel_id_optional_sources=settings.channel_id_optional_source_set,
    )


def build_setup_service(settings: Settings, engine: SyncEngine) -> SetupService:
    return SetupService(
        properties=engine.properties,
        mappings=engine.mappings,
        engine=engine,
        default_sync_days=settings.default_sync_days,
    )


@lru_cache()
def get_sync_engine() -> SyncEngine:
    return build_sync_engine(get_settings(), SessionLocal)


def get_setup_service(engine: SyncEngine = Depends(get_sync_engine)) -> SetupService:
    return build_setup_service(get_settings(), engine)


def get_reservation_repository(engine: SyncEngine = Depends(get_sync_engine)) -> ReservationRepository:
    return engine.reservations


def get_request_log_repository() -> RequestLogRepository:
    return RequestLogRepository(SessionLocal)

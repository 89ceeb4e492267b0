"""
Setup API Router

Onboarding endpoints: register properties, store credentials, review both
catalogs side by side, save mappings and run the initial sync.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends

from ..dependencies import get_setup_service, get_sync_engine
from ..schemas.sync import (
    CredentialsRequest,
    InitialSyncRequest,
    MappingRequest,
    PropertyCreate,
    PropertyResponse,
    PropertyUpdate,
    SetupStatus,
    SyncResult,
)
from ..services.mapping_store import MappingKind
from ..services.setup_service import SetupService
from ..services.sync_engine import SyncEngine

router = APIRouter(prefix="/api/setup", tags=["Setup"])


# ==================
# Properties
# ==================

@router.post("/properties", response_model=PropertyResponse, status_code=201)
async def create_property(
    body: PropertyCreate,
    service: SetupService = Depends(get_setup_service),
):
    return service.create_property(body)


@router.get("/properties", response_model=List[PropertyResponse])
async def list_properties(service: SetupService = Depends(get_setup_service)):
    return service.list_properties()


@router.put("/properties/{property_id}", response_model=PropertyResponse)
async def update_property(
    property_id: str,
    body: PropertyUpdate,
    service: SetupService = Depends(get_setup_service),
):
    """Change names, catalog or external ids; linked reservations are kept"""
    return await service.update_property(property_id, body)


@router.get("/status/{property_id}", response_model=SetupStatus)
async def get_setup_status(
    property_id: str,
    service: SetupService = Depends(get_setup_service),
):
    return service.get_status(property_id)


@router.post("/credentials/{property_id}", response_model=SyncResult)
async def save_credentials(
    property_id: str,
    body: CredentialsRequest,
    service: SetupService = Depends(get_setup_service),
):
    return service.save_credentials(property_id, body.username, body.api_key)


# ==================
# Catalogs & mappings
# ==================

@router.get("/room-types/{property_id}", response_model=SyncResult)
async def get_room_types(
    property_id: str,
    engine: SyncEngine = Depends(get_sync_engine),
):
    return await engine.fetch_room_types(property_id)


@router.post("/room-type-mappings/{property_id}", response_model=SyncResult)
async def save_room_type_mappings(
    property_id: str,
    body: MappingRequest,
    service: SetupService = Depends(get_setup_service),
):
    return service.save_mappings(property_id, MappingKind.ROOM_TYPE, body.mappings)


@router.get("/rate-plans/{property_id}", response_model=SyncResult)
async def get_rate_plans(
    property_id: str,
    engine: SyncEngine = Depends(get_sync_engine),
):
    return await engine.fetch_rate_plans(property_id)


@router.post("/rate-plan-mappings/{property_id}", response_model=SyncResult)
async def save_rate_plan_mappings(
    property_id: str,
    body: MappingRequest,
    service: SetupService = Depends(get_setup_service),
):
    return service.save_mappings(property_id, MappingKind.RATE_PLAN, body.mappings)


@router.post("/initial-sync/{property_id}", response_model=SyncResult)
async def initial_sync(
    property_id: str,
    body: Optional[InitialSyncRequest] = None,
    service: SetupService = Depends(get_setup_service),
):
    body = body or InitialSyncRequest()
    return await service.run_initial_sync(property_id, body.start_date, body.end_date)

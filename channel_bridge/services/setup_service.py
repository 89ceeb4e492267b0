"""
Setup Service

Onboarding flow for a property: register it, store channel-manager
credentials, save room-type and rate-plan mappings, then run the initial
sync once everything is in place.
"""

import datetime as dt
import logging
from typing import List, Optional

from ..exceptions import PropertyNotFound, ValidationError
from ..models import Property
from ..schemas.sync import PropertyCreate, PropertyUpdate, SetupStatus, SetupStep, SyncResult
from .mapping_store import IdentifierMappingStore, MappingKind
from .repositories import PropertyRepository
from .sync_engine import SyncEngine

logger = logging.getLogger(__name__)


class SetupService:

    def __init__(
        self,
        properties: PropertyRepository,
        mappings: IdentifierMappingStore,
        engine: SyncEngine,
        default_sync_days: int = 30,
    ):
        self.properties = properties
        self.mappings = mappings
        self.engine = engine
        self.default_sync_days = default_sync_days

    def _get_property(self, property_id: str) -> Property:
        prop = self.properties.get_by_id(property_id)
        if prop is None:
            raise PropertyNotFound(property_id)
        return prop

    def create_property(self, data: PropertyCreate) -> Property:
        prop = self.properties.create(
            name=data.name,
            description=data.description,
            pms_property_id=data.pms_property_id,
            channel_property_id=data.channel_property_id,
            room_types=[rt.model_dump(mode="json") for rt in data.room_types],
        )
        logger.info(f"Property registered: {prop.id} (pms={prop.pms_property_id}, channel={prop.channel_property_id})")
        return prop

    async def update_property(self, property_id: str, data: PropertyUpdate) -> Property:
        """Change registration details. Reservations and mappings are left alone."""
        values = data.model_dump(exclude_none=True)
        if not values:
            raise ValidationError("No changes supplied")
        if data.room_types is not None:
            values["room_types"] = [rt.model_dump(mode="json") for rt in data.room_types]

        # Wait for running syncs so they finish against the ids they started with
        async with self.engine.locks.hold(property_id):
            prop = self.properties.update(property_id, values)
        logger.info(f"Property updated: {prop.id} ({', '.join(sorted(values))})")
        return prop

    def list_properties(self) -> List[Property]:
        return self.properties.list_all()

    def get_status(self, property_id: str) -> SetupStatus:
        prop = self._get_property(property_id)
        credentials = bool(prop.credentials and prop.credentials.get("username") and prop.credentials.get("api_key"))
        # An empty saved set is a valid identity mapping
        room_types = prop.room_type_mappings is not None
        rate_plans = prop.rate_plan_mappings is not None

        steps = [
            SetupStep(id="credentials", name="Channel manager credentials", completed=credentials),
            SetupStep(id="room_types", name="Room type mapping", completed=room_types),
            SetupStep(id="rate_plans", name="Rate plan mapping", completed=rate_plans),
            SetupStep(id="initial_sync", name="Initial synchronization", completed=bool(prop.initial_sync_completed)),
        ]
        return SetupStatus(
            property_id=prop.id,
            is_configured=credentials and room_types and rate_plans,
            initial_sync_completed=bool(prop.initial_sync_completed),
            steps=steps,
        )

    def save_credentials(self, property_id: str, username: str, api_key: str) -> SyncResult:
        self.properties.save_credentials(property_id, {"username": username, "api_key": api_key})
        logger.info(f"Credentials saved for property {property_id}")
        return SyncResult.ok("Credentials saved successfully", {"property_id": property_id})

    def save_mappings(self, property_id: str, kind: MappingKind, mapping: dict) -> SyncResult:
        self.mappings.set_mapping(property_id, kind, mapping)
        return SyncResult.ok("Mappings saved successfully", {
            "property_id": property_id,
            "kind": MappingKind(kind).value,
            "mappings": self.mappings.get_mapping(property_id, kind),
        })

    async def run_initial_sync(
        self,
        property_id: str,
        start_date: Optional[dt.date] = None,
        end_date: Optional[dt.date] = None,
    ) -> SyncResult:
        status = self.get_status(property_id)
        if not status.is_configured:
            missing = [s.id for s in status.steps if s.id != "initial_sync" and not s.completed]
            raise ValidationError(
                "Property setup is incomplete; configure credentials and mappings first",
                details={"missing_steps": missing},
            )

        start_date = start_date or dt.date.today()
        end_date = end_date or start_date + dt.timedelta(days=self.default_sync_days)
        return await self.engine.run_initial_sync(property_id, start_date, end_date)

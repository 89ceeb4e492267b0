"""
Identifier Mapping Store

Per-property correspondence between PMS-side and channel-side ids for room
types and rate plans. A PMS id maps to at most one channel id. Resolution
with no configured mapping falls back to the id itself, so a property whose
systems share ids needs no configuration at all.
"""

import enum
import logging
from typing import Callable, Dict

from ..exceptions import ValidationError
from .repositories import PropertyStore

logger = logging.getLogger(__name__)

Resolver = Callable[[str], str]


class MappingKind(str, enum.Enum):
    ROOM_TYPE = "roomType"
    RATE_PLAN = "ratePlan"


class MappingDirection(str, enum.Enum):
    PMS_TO_CHANNEL = "pmsToChannel"
    CHANNEL_TO_PMS = "channelToPms"


def identity(source_id: str) -> str:
    return source_id


def invert_mapping(mapping: Dict[str, str]) -> Dict[str, str]:
    """
    Channel id -> PMS id. When several PMS ids share a channel id the
    lexicographically smallest PMS id wins.
    """
    inverse: Dict[str, str] = {}
    for pms_id in sorted(mapping):
        channel_id = mapping[pms_id]
        if channel_id in inverse:
            logger.warning(
                f"Channel id {channel_id} is mapped from several PMS ids; "
                f"resolving to {inverse[channel_id]}, ignoring {pms_id}"
            )
            continue
        inverse[channel_id] = pms_id
    return inverse


class IdentifierMappingStore:

    def __init__(self, properties: PropertyStore):
        self.properties = properties

    def get_mapping(self, property_id: str, kind: MappingKind) -> Dict[str, str]:
        return dict(self.properties.get_mappings(property_id, MappingKind(kind).value))

    def resolver(self, direction: MappingDirection, property_id: str, kind: MappingKind) -> Resolver:
        """Snapshot the current set once; the returned callable never sees a later write."""
        mapping = self.get_mapping(property_id, kind)
        if MappingDirection(direction) == MappingDirection.CHANNEL_TO_PMS:
            mapping = invert_mapping(mapping)
        if not mapping:
            return identity
        return lambda source_id: mapping.get(source_id, source_id)

    def resolve(
        self,
        direction: MappingDirection,
        property_id: str,
        kind: MappingKind,
        source_id: str,
    ) -> str:
        return self.resolver(direction, property_id, kind)(source_id)

    def set_mapping(self, property_id: str, kind: MappingKind, mapping: Dict[str, str]) -> None:
        """Replace the whole mapping set for a property and kind."""
        kind = MappingKind(kind)
        cleaned: Dict[str, str] = {}
        for pms_id, channel_id in (mapping or {}).items():
            if not isinstance(pms_id, str) or not pms_id.strip():
                raise ValidationError("Mapping keys must be non-empty ids", field="mappings")
            if not isinstance(channel_id, str) or not channel_id.strip():
                raise ValidationError(
                    f"Mapping for {pms_id} must be a non-empty id", field="mappings"
                )
            cleaned[pms_id.strip()] = channel_id.strip()

        self.properties.replace_mappings(property_id, kind.value, cleaned)
        logger.info(f"Replaced {kind.value} mappings for property {property_id} ({len(cleaned)} entries)")

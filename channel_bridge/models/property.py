"""
Property Model

A property known to both systems. Holds the external identifiers on each
side, the room-type catalog, the channel-manager credentials reference and
the per-kind identifier mapping sets.
"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, Text, DateTime, Boolean, JSON, Index
from ..database import Base


class Property(Base):
    __tablename__ = "properties"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)

    # External identifiers
    pms_property_id = Column(String(100), nullable=False)
    channel_property_id = Column(String(100), nullable=False)

    # [{"id": "rt1", "name": "Double", "max_occupancy": 2, "base_price": "100.00"}]
    room_types = Column(JSON, default=list)

    # {"username": "...", "api_key": "..."} - never returned by the API
    credentials = Column(JSON, nullable=True)

    # {pms_id: channel_id}; replaced as a whole, never patched. NULL until first
    # saved; a saved empty set means ids are shared and resolve to themselves
    room_type_mappings = Column(JSON, nullable=True)
    rate_plan_mappings = Column(JSON, nullable=True)

    initial_sync_completed = Column(Boolean, default=False)
    is_active = Column(Boolean, default=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        Index("ix_property_channel_id", "channel_property_id"),
        Index("ix_property_pms_id", "pms_property_id"),
    )

    @property
    def room_type_ids(self):
        return [rt.get("id") for rt in (self.room_types or []) if rt.get("id")]

    def __repr__(self):
        return f"<Property {self.name} pms={self.pms_property_id} channel={self.channel_property_id}>"

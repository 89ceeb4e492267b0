"""
Reservation Model

Canonical booking record linking a PMS booking with its channel-manager
reservation. A row reaches CONFIRMED only once both external ids are known
(or the missing side is allowed for the booking source).
"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, Text, Numeric, ForeignKey, DateTime, Date, Integer, JSON, Index, UniqueConstraint
from ..database import Base
import enum


class ReservationStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class ExternalSystem(str, enum.Enum):
    PMS = "pms"
    CHANNEL = "channel"


class Reservation(Base):
    __tablename__ = "reservations"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    property_id = Column(String(36), ForeignKey("properties.id", ondelete="CASCADE"), nullable=False)

    room_type_id = Column(String(100), nullable=True)
    rate_plan_id = Column(String(100), nullable=True)

    # Guest
    guest_name = Column(String(200), nullable=False, default="")
    guest_email = Column(String(200), nullable=True)
    guest_phone = Column(String(50), nullable=True)

    # Stay
    check_in_date = Column(Date, nullable=False)
    check_out_date = Column(Date, nullable=False)
    adults = Column(Integer, default=1)
    children = Column(Integer, default=0)

    total_price = Column(Numeric(10, 2), default=0)
    currency = Column(String(3), nullable=True)

    status = Column(String(20), default=ReservationStatus.PENDING.value, nullable=False)
    source = Column(String(50), default="web")
    special_requests = Column(Text, nullable=True)

    # External identifiers
    pms_booking_id = Column(String(100), nullable=True)
    channel_reservation_id = Column(String(100), nullable=True)

    # Last payload exchanged with the counterpart system
    channel_data = Column(JSON, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        Index("ix_reservation_property", "property_id"),
        UniqueConstraint("property_id", "channel_reservation_id", name="uq_reservation_channel_id"),
        UniqueConstraint("property_id", "pms_booking_id", name="uq_reservation_pms_id"),
    )

    def __repr__(self):
        return f"<Reservation {self.id} {self.status} pms={self.pms_booking_id} channel={self.channel_reservation_id}>"

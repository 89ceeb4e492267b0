"""
Request Log Model

Append-only audit trail of every call made to an external system.
Payloads are stored sanitized (no secrets).
"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, Text, DateTime, Integer, Boolean, JSON, Index
from ..database import Base


class RequestLog(Base):
    __tablename__ = "request_logs"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # Context - plain reference so entries outlive their property
    property_id = Column(String(36), nullable=True)
    request_id = Column(String(64), nullable=True)

    system = Column(String(20), nullable=False)  # "pms", "channel"

    # Request/Response
    method = Column(String(10), nullable=False)
    endpoint = Column(String(500), nullable=False)
    request_body = Column(JSON, nullable=True)
    response_body = Column(JSON, nullable=True)
    status_code = Column(Integer, nullable=True)

    # Outcome
    success = Column(Boolean, default=True)
    error_message = Column(Text, nullable=True)
    duration_ms = Column(Integer, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)

    __table_args__ = (
        Index("ix_request_log_property", "property_id"),
        Index("ix_request_log_created", "created_at"),
    )

    def __repr__(self):
        return f"<RequestLog {self.system} {self.method} {self.endpoint} {self.status_code}>"

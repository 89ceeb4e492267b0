"""
Audit Log

Append-only record of every external call the engine makes, success or
failure. Appends never fail the caller: a storage error is logged and the
entry dropped.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy.exc import SQLAlchemyError

from ..models import RequestLog
from ..utils.logging_config import request_id_var
from .repositories import SessionFactory

logger = logging.getLogger("channel_bridge.audit")

SENSITIVE_KEYS = ["api_key", "apikey", "password", "secret", "token", "authorization", "card_number", "cvv"]


@dataclass
class AuditEntry:
    system: str
    method: str
    endpoint: str
    success: bool
    status_code: Optional[int] = None
    request_payload: Any = None
    response_payload: Any = None
    error: Optional[str] = None
    duration_ms: int = 0
    property_id: Optional[str] = None
    request_id: Optional[str] = None
    timestamp: datetime = field(default_factory=datetime.utcnow)


def sanitize_payload(payload: Any) -> Any:
    """Remove sensitive data from payload before storing"""
    if payload is None:
        return None

    def sanitize(value: Any) -> Any:
        if isinstance(value, dict):
            result = {}
            for k, v in value.items():
                if any(sk in str(k).lower() for sk in SENSITIVE_KEYS):
                    result[k] = "[REDACTED]"
                else:
                    result[k] = sanitize(v)
            return result
        if isinstance(value, list):
            return [sanitize(i) for i in value]
        return value

    return sanitize(payload)


def _as_json_column(payload: Any) -> Optional[Dict]:
    if payload is None:
        return None
    if isinstance(payload, (dict, list)):
        return sanitize_payload(payload)
    return {"raw": str(payload)[:1000]}


class SqlAuditSink:

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def append(self, entry: AuditEntry) -> None:
        try:
            with self.session_factory() as db:
                db.add(RequestLog(
                    property_id=entry.property_id,
                    request_id=entry.request_id or request_id_var.get() or None,
                    system=entry.system,
                    method=entry.method,
                    endpoint=entry.endpoint[:500],
                    request_body=_as_json_column(entry.request_payload),
                    response_body=_as_json_column(entry.response_payload),
                    status_code=entry.status_code,
                    success=entry.success,
                    error_message=entry.error[:1000] if entry.error else None,
                    duration_ms=entry.duration_ms,
                    created_at=entry.timestamp,
                ))
                db.commit()
        except SQLAlchemyError as e:
            logger.warning(f"Failed to write audit entry for {entry.method} {entry.endpoint}: {e}")

"""
Logging setup for channel-bridge.

Every line carries the API request id and the property being synced when
they are known, so one sync can be followed across the engine, the
clients and the audit sink. Production emits one JSON object per line.
"""

import logging
import json
import sys
from datetime import datetime, timezone
from typing import Optional, Any, Dict
from contextvars import ContextVar

# Set by the request middleware and by the engine once a property resolves
request_id_var: ContextVar[str] = ContextVar('request_id', default='')
property_id_var: ContextVar[str] = ContextVar('property_id', default='')

# Record attributes copied into the JSON line when present
SYNC_FIELDS = ("operation", "system", "method", "endpoint", "status_code", "duration_ms",
               "batches", "records", "reservation_id", "pms_booking_id", "channel_reservation_id")


class JSONFormatter(logging.Formatter):

    def format(self, record: logging.LogRecord) -> str:
        line: Dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }

        for key, var in (("request_id", request_id_var), ("property_id", property_id_var)):
            value = var.get()
            if value:
                line[key] = value

        for field in SYNC_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                line[field] = value

        if record.exc_info:
            line["exc"] = self.formatException(record.exc_info)

        return json.dumps(line, ensure_ascii=False, default=str)


class SyncLogger(logging.LoggerAdapter):
    """Adapter with one helper per event the engine reports."""

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple:
        kwargs['extra'] = {**self.extra, **kwargs.get('extra', {})}
        return msg, kwargs

    def sync_completed(self, operation: str, property_id: str, batches: int, records: int,
                       duration_ms: Optional[int] = None):
        self.info(
            f"{operation} sync for {property_id}: {records} records in {batches} batches",
            extra={"operation": operation, "batches": batches, "records": records, "duration_ms": duration_ms},
        )

    def upstream_call(self, system: str, method: str, endpoint: str, status_code: Optional[int], duration_ms: int):
        # Failed calls are logged at WARNING; the audit log has the payloads
        level = logging.DEBUG if status_code and status_code < 400 else logging.WARNING
        self.log(
            level,
            f"{system} {method} {endpoint} -> {status_code or 'no response'}",
            extra={"system": system, "method": method, "endpoint": endpoint,
                   "status_code": status_code, "duration_ms": duration_ms},
        )

    def reservation_linked(self, reservation_id: str, pms_booking_id: Optional[str],
                           channel_reservation_id: Optional[str]):
        self.info(
            f"Reservation {reservation_id} linked (pms={pms_booking_id}, channel={channel_reservation_id})",
            extra={"reservation_id": reservation_id, "pms_booking_id": pms_booking_id,
                   "channel_reservation_id": channel_reservation_id},
        )


def setup_logging(level: str = "INFO", json_format: bool = True) -> None:
    """Install a single stdout handler on the root and uvicorn loggers."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    if json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter('%(asctime)s %(levelname)-7s %(name)s: %(message)s'))

    root = logging.getLogger()
    root.setLevel(log_level)
    root.handlers = [handler]

    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).handlers = [handler]

    # Request lines come from the engine's upstream_call
    for name in ("httpx", "httpcore", "sqlalchemy.engine"):
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> SyncLogger:
    return SyncLogger(logging.getLogger(name), {})


def set_request_context(request_id: str, property_id: Optional[str] = None):
    request_id_var.set(request_id)
    if property_id:
        property_id_var.set(property_id)


def clear_request_context():
    request_id_var.set('')
    property_id_var.set('')

"""
Error taxonomy for sync operations.

Every failure surfaced by the engine is one of these. The API layer turns
them into the structured result envelope using ``code`` and ``http_status``.
"""

from typing import Any, Dict, Optional


class BridgeError(Exception):
    """Base exception for sync operations"""

    code = "INTERNAL_ERROR"
    http_status = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class NotFound(BridgeError):
    """Referenced local entity does not exist"""

    code = "NOT_FOUND"
    http_status = 404


class PropertyNotFound(NotFound):
    def __init__(self, property_id: str):
        super().__init__(f"Property not found: {property_id}", {"property_id": property_id})
        self.property_id = property_id


class ReservationNotFound(NotFound):
    def __init__(self, reservation_id: str):
        super().__init__(f"Reservation not found: {reservation_id}", {"reservation_id": reservation_id})
        self.reservation_id = reservation_id


class ValidationError(BridgeError):
    """Input or translated record is structurally invalid"""

    code = "VALIDATION_ERROR"
    http_status = 400

    def __init__(self, message: str, field: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
        self.field = field
        if field:
            self.details.setdefault("field", field)


class UpstreamError(BridgeError):
    """External system returned an error, timed out, or sent a malformed body"""

    code = "UPSTREAM_ERROR"
    http_status = 502

    def __init__(
        self,
        message: str,
        system: str,
        method: str,
        endpoint: str,
        status_code: Optional[int] = None,
        body: Any = None,
        request_payload: Any = None,
        error_code: Optional[str] = None,
        retryable: bool = False,
    ):
        super().__init__(message, {
            "system": system,
            "method": method,
            "endpoint": endpoint,
            "status_code": status_code,
            "error_code": error_code,
        })
        self.system = system
        self.method = method
        self.endpoint = endpoint
        self.status_code = status_code
        self.body = body
        self.request_payload = request_payload
        self.error_code = error_code
        self.retryable = retryable


class ConsistencyRisk(BridgeError):
    """
    Destination write succeeded but the local linkage could not be stored.

    Carries both external ids so an operator can reconcile by hand.
    """

    code = "CONSISTENCY_RISK"
    http_status = 500

    def __init__(self, message: str, property_id: str, pms_booking_id: Optional[str], channel_reservation_id: Optional[str]):
        super().__init__(message, {
            "property_id": property_id,
            "pms_booking_id": pms_booking_id,
            "channel_reservation_id": channel_reservation_id,
        })
        self.property_id = property_id
        self.pms_booking_id = pms_booking_id
        self.channel_reservation_id = channel_reservation_id

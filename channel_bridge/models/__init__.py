# Models package
from .property import Property
from .reservation import Reservation, ReservationStatus, ExternalSystem
from .request_log import RequestLog

__all__ = [
    "Property",
    "Reservation", "ReservationStatus", "ExternalSystem",
    "RequestLog",
]

"""
Persistence boundary for the sync engine.

The engine depends only on the Protocols below. The SQLAlchemy
implementations open one short session per call from the injected
session factory and hand back detached rows.
"""

from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Protocol

from sqlalchemy.orm import Session

from ..exceptions import PropertyNotFound, ReservationNotFound
from ..models import ExternalSystem, Property, Reservation, RequestLog

SessionFactory = Callable[[], Session]

# Property column holding each mapping kind
MAPPING_COLUMNS = {
    "roomType": "room_type_mappings",
    "ratePlan": "rate_plan_mappings",
}


# ==================
# Interfaces
# ==================

class PropertyStore(Protocol):
    def get_by_id(self, property_id: str) -> Optional[Property]: ...
    def get_by_external_id(self, channel_property_id: str) -> Optional[Property]: ...
    def get_mappings(self, property_id: str, kind: str) -> Dict[str, str]: ...
    def replace_mappings(self, property_id: str, kind: str, mapping: Dict[str, str]) -> None: ...
    def mark_initial_sync_completed(self, property_id: str) -> None: ...


class ReservationStore(Protocol):
    def get(self, reservation_id: str) -> Optional[Reservation]: ...
    def create(self, reservation: Reservation) -> Reservation: ...
    def find_by_external_id(self, system: str, external_id: str, property_id: Optional[str] = None) -> Optional[Reservation]: ...
    def update(self, reservation_id: str, values: Dict[str, Any]) -> Reservation: ...
    def update_status(self, reservation_id: str, status: str) -> Reservation: ...


class AuditSink(Protocol):
    def append(self, entry: Any) -> None: ...


# ==================
# SQLAlchemy implementations
# ==================

class PropertyRepository:

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def get_by_id(self, property_id: str) -> Optional[Property]:
        with self.session_factory() as db:
            return db.query(Property).filter(Property.id == property_id).first()

    def get_by_external_id(self, channel_property_id: str) -> Optional[Property]:
        with self.session_factory() as db:
            return db.query(Property).filter(
                Property.channel_property_id == channel_property_id,
                Property.is_active == True,  # noqa: E712
            ).first()

    def list_all(self) -> List[Property]:
        with self.session_factory() as db:
            return db.query(Property).order_by(Property.created_at).all()

    def create(self, **values) -> Property:
        with self.session_factory() as db:
            prop = Property(**values)
            db.add(prop)
            db.commit()
            db.refresh(prop)
            return prop

    def update(self, property_id: str, values: Dict[str, Any]) -> Property:
        with self.session_factory() as db:
            prop = self._require(db, property_id)
            for key, value in values.items():
                setattr(prop, key, value)
            prop.updated_at = datetime.utcnow()
            db.commit()
            db.refresh(prop)
            return prop

    def save_credentials(self, property_id: str, credentials: Dict[str, str]) -> Property:
        with self.session_factory() as db:
            prop = self._require(db, property_id)
            prop.credentials = dict(credentials)
            db.commit()
            db.refresh(prop)
            return prop

    def get_mappings(self, property_id: str, kind: str) -> Dict[str, str]:
        column = MAPPING_COLUMNS[kind]
        with self.session_factory() as db:
            prop = db.query(Property).filter(Property.id == property_id).first()
            if prop is None:
                return {}
            return dict(getattr(prop, column) or {})

    def replace_mappings(self, property_id: str, kind: str, mapping: Dict[str, str]) -> None:
        """Swap the whole set in one transaction; readers see old or new, never a mix."""
        column = MAPPING_COLUMNS[kind]
        with self.session_factory() as db:
            prop = self._require(db, property_id)
            setattr(prop, column, dict(mapping))
            db.commit()

    def mark_initial_sync_completed(self, property_id: str) -> None:
        with self.session_factory() as db:
            prop = self._require(db, property_id)
            prop.initial_sync_completed = True
            db.commit()

    @staticmethod
    def _require(db: Session, property_id: str) -> Property:
        prop = db.query(Property).filter(Property.id == property_id).first()
        if prop is None:
            raise PropertyNotFound(property_id)
        return prop


class ReservationRepository:

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def get(self, reservation_id: str) -> Optional[Reservation]:
        with self.session_factory() as db:
            return db.query(Reservation).filter(Reservation.id == reservation_id).first()

    def list_for_property(self, property_id: str, limit: int = 100) -> List[Reservation]:
        with self.session_factory() as db:
            return db.query(Reservation).filter(
                Reservation.property_id == property_id
            ).order_by(Reservation.created_at.desc()).limit(limit).all()

    def create(self, reservation: Reservation) -> Reservation:
        with self.session_factory() as db:
            db.add(reservation)
            db.commit()
            db.refresh(reservation)
            return reservation

    def find_by_external_id(
        self,
        system: str,
        external_id: str,
        property_id: Optional[str] = None,
    ) -> Optional[Reservation]:
        if system == ExternalSystem.PMS.value:
            column = Reservation.pms_booking_id
        elif system == ExternalSystem.CHANNEL.value:
            column = Reservation.channel_reservation_id
        else:
            raise ValueError(f"Unknown external system: {system}")

        with self.session_factory() as db:
            query = db.query(Reservation).filter(column == external_id)
            if property_id:
                query = query.filter(Reservation.property_id == property_id)
            return query.first()

    def update(self, reservation_id: str, values: Dict[str, Any]) -> Reservation:
        with self.session_factory() as db:
            reservation = self._require(db, reservation_id)
            for key, value in values.items():
                setattr(reservation, key, value)
            reservation.updated_at = datetime.utcnow()
            db.commit()
            db.refresh(reservation)
            return reservation

    def update_status(self, reservation_id: str, status: str) -> Reservation:
        return self.update(reservation_id, {"status": status})

    @staticmethod
    def _require(db: Session, reservation_id: str) -> Reservation:
        reservation = db.query(Reservation).filter(Reservation.id == reservation_id).first()
        if reservation is None:
            raise ReservationNotFound(reservation_id)
        return reservation


class RequestLogRepository:
    """Read side of the audit trail"""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def list_for_property(self, property_id: str, limit: int = 100) -> List[RequestLog]:
        with self.session_factory() as db:
            return db.query(RequestLog).filter(
                RequestLog.property_id == property_id
            ).order_by(RequestLog.created_at.desc()).limit(limit).all()

    def count(self, property_id: Optional[str] = None, success: Optional[bool] = None) -> int:
        with self.session_factory() as db:
            query = db.query(RequestLog)
            if property_id is not None:
                query = query.filter(RequestLog.property_id == property_id)
            if success is not None:
                query = query.filter(RequestLog.success == success)
            return query.count()

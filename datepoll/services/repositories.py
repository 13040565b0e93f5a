"""
Repository layer abstracting row-level storage access.

Repositories only add/flush; callers own commit and rollback so that
multi-row writes can share one transaction.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from datepoll.core.config import settings
from datepoll.models import Event, EventDate, Participant, Response

logger = logging.getLogger(__name__)
compensation_logger = logging.getLogger("datepoll.compensation")


def use_transactions() -> bool:
    """False when the engine autocommits each statement"""
    return settings.DATABASE_AUTOCOMMIT is not True


def compensate(db: Session, model, pk: Any, label: str) -> bool:
    """Delete a row left behind by a failed two-step write.

    Returns False when the delete itself fails; the orphan is then logged
    on the ``datepoll.compensation`` logger at CRITICAL.
    """
    try:
        db.query(model).filter(model.id == pk).delete(synchronize_session=False)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        compensation_logger.critical(
            "Compensating delete failed, orphan %s %s left in storage", label, pk, exc_info=True
        )
        return False
    compensation_logger.warning("Compensating delete removed %s %s", label, pk)
    return True


# -------- Event repository --------

class EventRepo:
    @staticmethod
    def get_live(db: Session, event_id: str) -> Optional[Event]:
        return db.query(Event).filter(Event.id == event_id, Event.deleted_at.is_(None)).first()

    @staticmethod
    def get_any(db: Session, event_id: str) -> Optional[Event]:
        """Includes soft-deleted events"""
        return db.query(Event).filter(Event.id == event_id).first()

    @staticmethod
    def create(db: Session, **fields) -> Event:
        event = Event(**fields)
        db.add(event)
        db.flush()
        return event

    @staticmethod
    def update_fields(db: Session, event: Event, **fields) -> Event:
        for key, value in fields.items():
            setattr(event, key, value)
        event.updated_at = datetime.utcnow()
        db.flush()
        return event

    @staticmethod
    def soft_delete(db: Session, event: Event) -> None:
        event.deleted_at = datetime.utcnow()
        db.commit()

    @staticmethod
    def increment_counter(db: Session, event_id: str, column: str) -> None:
        """Single-statement increment so concurrent requests don't lose counts"""
        counter = getattr(Event, column)
        db.execute(
            update(Event)
            .where(Event.id == event_id)
            .values({column: counter + 1})
            .execution_options(synchronize_session=False)
        )
        db.commit()


# -------- Event date repository --------

class EventDateRepo:
    @staticmethod
    def list_for_event(db: Session, event_id: str) -> List[EventDate]:
        return db.query(EventDate).filter(
            EventDate.event_id == event_id
        ).order_by(EventDate.display_order, EventDate.id).all()

    @staticmethod
    def bulk_create(db: Session, event_id: str, rows: Iterable[Dict[str, Any]]) -> List[EventDate]:
        created = [EventDate(event_id=event_id, **row) for row in rows]
        db.add_all(created)
        db.flush()
        return created

    @staticmethod
    def update_row(db: Session, event_date: EventDate, **fields) -> EventDate:
        for key, value in fields.items():
            setattr(event_date, key, value)
        db.flush()
        return event_date

    @staticmethod
    def delete_many(db: Session, date_ids: List[int]) -> int:
        """Removes the dates and any responses pointing at them"""
        if not date_ids:
            return 0
        db.query(Response).filter(Response.event_date_id.in_(date_ids)).delete(synchronize_session=False)
        deleted = db.query(EventDate).filter(EventDate.id.in_(date_ids)).delete(synchronize_session=False)
        db.flush()
        return deleted


# -------- Participant repository --------

class ParticipantRepo:
    @staticmethod
    def find_by_name(db: Session, event_id: str, name: str) -> Optional[Participant]:
        # Exact, case-sensitive match
        return db.query(Participant).filter(
            Participant.event_id == event_id,
            Participant.name == name
        ).first()

    @staticmethod
    def create(db: Session, event_id: str, name: str, comment: Optional[str], response_token: str) -> Participant:
        participant = Participant(
            event_id=event_id,
            name=name,
            comment=comment,
            response_token=response_token
        )
        db.add(participant)
        db.flush()
        return participant

    @staticmethod
    def list_for_event(db: Session, event_id: str) -> List[Participant]:
        return db.query(Participant).filter(
            Participant.event_id == event_id
        ).order_by(Participant.created_at, Participant.id).all()


# -------- Response repository --------

class ResponseRepo:
    @staticmethod
    def bulk_create(db: Session, participant_id: int, entries: Iterable[Dict[str, Any]]) -> List[Response]:
        created = [
            Response(participant_id=participant_id, event_date_id=entry["event_date_id"], status=entry["status"])
            for entry in entries
        ]
        db.add_all(created)
        db.flush()
        return created

    @staticmethod
    def list_for_participants(db: Session, participant_ids: List[int]) -> List[Response]:
        if not participant_ids:
            return []
        return db.query(Response).filter(Response.participant_id.in_(participant_ids)).all()

"""
Participant response collection
"""

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from datepoll.core.errors import ConflictError, DependencyFailure, ErrorKind, NotFoundError, ValidationError
from datepoll.models import Participant, RESPONSE_STATUSES
from datepoll.schemas.participant import ResponseEntry
from datepoll.services.repositories import (
    EventDateRepo,
    EventRepo,
    ParticipantRepo,
    ResponseRepo,
    compensate,
    use_transactions,
)
from datepoll.utils.security import is_valid_public_id, new_secret_token

logger = logging.getLogger(__name__)

NAME_MAX = 100


def validate_name(name: Optional[str]) -> str:
    cleaned = (name or "").strip()
    if len(cleaned) < 1 or len(cleaned) > NAME_MAX:
        raise ValidationError(ErrorKind.NAME_LENGTH)
    return cleaned


def normalize_entries(entries: Sequence[ResponseEntry]) -> List[Dict]:
    """Drop unanswered dates and reject unknown statuses or repeated dates"""
    rows = []
    seen = set()
    for entry in entries or []:
        status = (entry.status or "").strip().lower()
        if not status:
            continue
        if status not in RESPONSE_STATUSES:
            raise ValidationError(ErrorKind.INVALID_STATUS)
        if entry.event_date_id in seen:
            raise ValidationError(ErrorKind.DUPLICATE_RESPONSE_DATE)
        seen.add(entry.event_date_id)
        rows.append({"event_date_id": entry.event_date_id, "status": status})
    return rows


def _is_name_conflict(exc: IntegrityError) -> bool:
    text = str(exc.orig).lower()
    return "uq_participants_event_name" in text or ("unique" in text and "name" in text)


class ResponseService:
    """Service for recording participant availability"""

    @staticmethod
    def submit_response(
        event_id: str,
        participant_name: Optional[str],
        comment: Optional[str],
        responses: Sequence[ResponseEntry],
        db: Session
    ) -> Tuple[Participant, str]:
        """Register a participant and their per-date statuses.

        A name already used in the event is a conflict, never a merge.
        """
        name = validate_name(participant_name)
        rows = normalize_entries(responses)

        if not is_valid_public_id(event_id):
            raise NotFoundError()
        event = EventRepo.get_live(db, event_id)
        if not event:
            raise NotFoundError()

        date_ids = {d.id for d in EventDateRepo.list_for_event(db, event_id)}
        if any(row["event_date_id"] not in date_ids for row in rows):
            raise ValidationError(ErrorKind.UNKNOWN_DATE)

        # Early exit only; the unique constraint is authoritative
        if ParticipantRepo.find_by_name(db, event_id, name):
            raise ConflictError()

        response_token = new_secret_token()
        try:
            participant = ParticipantRepo.create(
                db, event_id, name, comment.strip() if comment and comment.strip() else None, response_token
            )
        except IntegrityError as exc:
            db.rollback()
            if _is_name_conflict(exc):
                raise ConflictError() from exc
            logger.error("Participant creation failed for event %s", event_id, exc_info=True)
            raise DependencyFailure(detail="participant insert failed") from exc
        except SQLAlchemyError as exc:
            db.rollback()
            logger.error("Participant creation failed for event %s", event_id, exc_info=True)
            raise DependencyFailure(detail="participant insert failed") from exc

        participant_id = participant.id
        try:
            if rows:
                ResponseRepo.bulk_create(db, participant_id, rows)
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            logger.error("Responses creation failed for event %s", event_id, exc_info=True)
            if not use_transactions():
                compensate(db, Participant, participant_id, "participant")
            raise DependencyFailure(detail="responses insert failed") from exc

        try:
            EventRepo.increment_counter(db, event_id, "response_count")
        except SQLAlchemyError:
            db.rollback()
            logger.warning("Could not bump response count for event %s", event_id, exc_info=True)

        logger.info("Recorded %d responses for event %s", len(rows), event_id)
        db.refresh(participant)
        return participant, response_token

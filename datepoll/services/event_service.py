"""
Event lifecycle service: create, read, update and soft delete
"""

import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from datepoll.core.config import settings
from datepoll.core.errors import (
    AlreadyDeletedError,
    AuthorizationError,
    DependencyFailure,
    ErrorKind,
    NotFoundError,
    ValidationError,
)
from datepoll.models import Event, EventDate
from datepoll.schemas.event import DateSlot
from datepoll.services.repositories import EventDateRepo, EventRepo, compensate, use_transactions
from datepoll.utils.security import is_valid_public_id, new_public_id, new_secret_token, tokens_match

logger = logging.getLogger(__name__)

TITLE_MIN = 3
TITLE_MAX = 255
DESCRIPTION_MAX = 500
FIELD_MAX = 255


def parse_timestamp(value) -> Optional[datetime]:
    """Parse an ISO-8601 string into a naive UTC datetime, or None"""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def validate_title(title: Optional[str]) -> str:
    cleaned = (title or "").strip()
    if len(cleaned) < TITLE_MIN or len(cleaned) > TITLE_MAX:
        raise ValidationError(ErrorKind.TITLE_LENGTH)
    return cleaned


def validate_description(description: Optional[str]) -> Optional[str]:
    if not description:
        return None
    if len(description) > DESCRIPTION_MAX:
        raise ValidationError(ErrorKind.DESCRIPTION_LENGTH)
    return description


def validate_optional_field(value: Optional[str]) -> Optional[str]:
    if not value or not value.strip():
        return None
    if len(value.strip()) > FIELD_MAX:
        raise ValidationError(ErrorKind.FIELD_LENGTH)
    return value.strip()


def validate_dates(dates: Optional[Sequence[DateSlot]]) -> List[Dict]:
    """Normalize a submitted date list into storage rows.

    Raises ValidationError for an empty list, an unparseable start, an end
    that is not strictly after its start, or a repeated (start, end) pair.
    """
    if not dates:
        raise ValidationError(ErrorKind.DATES_REQUIRED)

    rows: List[Dict] = []
    seen = set()
    for index, slot in enumerate(dates):
        start = parse_timestamp(slot.start_datetime)
        if start is None:
            raise ValidationError(ErrorKind.INVALID_DATE)

        end = None
        if slot.end_datetime:
            end = parse_timestamp(slot.end_datetime)
            if end is None:
                raise ValidationError(ErrorKind.INVALID_DATE)
            if end <= start:
                raise ValidationError(ErrorKind.END_BEFORE_START)

        key = (start, end)
        if key in seen:
            raise ValidationError(ErrorKind.DUPLICATE_DATE)
        seen.add(key)

        rows.append({
            "id": slot.id,
            "start_datetime": start,
            "end_datetime": end,
            "is_all_day": bool(slot.is_all_day),
            "display_order": index,
        })
    return rows


def _storage_rows(rows: List[Dict]) -> List[Dict]:
    return [{k: v for k, v in row.items() if k != "id"} for row in rows]


class EventService:
    """Service for scheduling-poll events"""

    @staticmethod
    def authorize(event: Event, edit_token: Optional[str], fingerprint: Optional[str] = None) -> None:
        """Raise AuthorizationError unless the token (and, when enforced, the device) matches"""
        if not tokens_match(edit_token, event.edit_token):
            raise AuthorizationError(ErrorKind.INVALID_TOKEN)
        if settings.ENFORCE_CREATOR_FINGERPRINT and not tokens_match(fingerprint, event.creator_fingerprint):
            raise AuthorizationError(ErrorKind.DEVICE_MISMATCH)

    @staticmethod
    def create_event(
        title: str,
        description: Optional[str],
        dates: Sequence[DateSlot],
        fingerprint: Optional[str],
        db: Session,
        location: Optional[str] = None,
        owner_name: Optional[str] = None
    ) -> Tuple[Event, str]:
        """Create an event with its dates and return it with its edit token"""
        clean_title = validate_title(title)
        clean_description = validate_description(description)
        clean_location = validate_optional_field(location)
        clean_owner = validate_optional_field(owner_name)
        rows = validate_dates(dates)

        event_id = new_public_id()
        edit_token = new_secret_token()

        try:
            event = EventRepo.create(
                db,
                id=event_id,
                title=clean_title,
                description=clean_description,
                location=clean_location,
                owner_name=clean_owner,
                edit_token=edit_token,
                creator_fingerprint=fingerprint or None,
                timezone=settings.DEFAULT_TIMEZONE,
                view_count=0,
                response_count=0,
            )
        except SQLAlchemyError as exc:
            db.rollback()
            logger.error("Event creation failed: %s", exc.__class__.__name__, exc_info=True)
            raise DependencyFailure(detail="event insert failed") from exc

        try:
            EventDateRepo.bulk_create(db, event_id, _storage_rows(rows))
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            logger.error("Event dates creation failed for %s", event_id, exc_info=True)
            if not use_transactions():
                compensate(db, Event, event_id, "event")
            raise DependencyFailure(detail="event dates insert failed") from exc

        logger.info("Created event %s with %d dates", event_id, len(rows))
        db.refresh(event)
        return event, edit_token

    @staticmethod
    def get_event(event_id: str, db: Session) -> Tuple[Event, List[EventDate]]:
        """Load a live event with its ordered dates and count the view"""
        if not is_valid_public_id(event_id):
            raise NotFoundError()

        event = EventRepo.get_live(db, event_id)
        if not event:
            raise NotFoundError()

        dates = EventDateRepo.list_for_event(db, event_id)

        try:
            EventRepo.increment_counter(db, event_id, "view_count")
        except SQLAlchemyError:
            db.rollback()
            logger.warning("Could not record view for event %s", event_id, exc_info=True)

        return event, dates

    @staticmethod
    def update_event(
        event_id: str,
        edit_token: Optional[str],
        title: str,
        description: Optional[str],
        db: Session,
        dates: Optional[Sequence[DateSlot]] = None,
        location: Optional[str] = None,
        owner_name: Optional[str] = None,
        fingerprint: Optional[str] = None
    ) -> Tuple[Event, Optional[List[EventDate]]]:
        """Update metadata and, when ``dates`` is given, reconcile the date set.

        Payload dates with an id update that row, stored dates missing from
        the payload are deleted, and dates without an id are inserted.
        ``display_order`` always follows the payload order.
        """
        if not edit_token:
            raise AuthorizationError(ErrorKind.TOKEN_REQUIRED)

        event = EventRepo.get_live(db, event_id) if is_valid_public_id(event_id) else None
        if not event:
            # Unknown ids look the same as a wrong token here
            raise AuthorizationError(ErrorKind.INVALID_TOKEN)
        EventService.authorize(event, edit_token, fingerprint)

        fields = {
            "title": validate_title(title),
            "description": validate_description(description),
        }
        if location is not None:
            fields["location"] = validate_optional_field(location)
        if owner_name is not None:
            fields["owner_name"] = validate_optional_field(owner_name)

        rows = validate_dates(dates) if dates is not None else None
        existing: Dict[int, EventDate] = {}
        if rows is not None:
            existing = {d.id: d for d in EventDateRepo.list_for_event(db, event_id)}
            payload_ids = [row["id"] for row in rows if row["id"] is not None]
            if len(payload_ids) != len(set(payload_ids)):
                raise ValidationError(ErrorKind.DUPLICATE_DATE)
            if any(date_id not in existing for date_id in payload_ids):
                raise ValidationError(ErrorKind.UNKNOWN_DATE)

        try:
            EventRepo.update_fields(db, event, **fields)
            if rows is not None:
                EventService._reconcile_dates(db, event_id, rows, existing)
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            logger.error("Event update failed for %s", event_id, exc_info=True)
            raise DependencyFailure(detail="event update failed") from exc

        logger.info("Updated event %s%s", event_id, " with dates" if rows is not None else "")
        db.refresh(event)
        updated_dates = EventDateRepo.list_for_event(db, event_id) if rows is not None else None
        return event, updated_dates

    @staticmethod
    def _reconcile_dates(db: Session, event_id: str, rows: List[Dict], existing: Dict[int, EventDate]) -> None:
        kept_ids = {row["id"] for row in rows if row["id"] is not None}
        EventDateRepo.delete_many(db, [date_id for date_id in existing if date_id not in kept_ids])

        new_rows = []
        for row in rows:
            if row["id"] is None:
                new_rows.append(row)
                continue
            EventDateRepo.update_row(
                db,
                existing[row["id"]],
                start_datetime=row["start_datetime"],
                end_datetime=row["end_datetime"],
                is_all_day=row["is_all_day"],
                display_order=row["display_order"],
            )
        if new_rows:
            EventDateRepo.bulk_create(db, event_id, _storage_rows(new_rows))

    @staticmethod
    def delete_event(
        event_id: str,
        edit_token: Optional[str],
        db: Session,
        fingerprint: Optional[str] = None
    ) -> None:
        """Soft delete; dates, participants and responses are retained but unreachable"""
        if not edit_token:
            raise AuthorizationError(ErrorKind.TOKEN_REQUIRED)

        event = EventRepo.get_any(db, event_id) if is_valid_public_id(event_id) else None
        if not event:
            raise NotFoundError()
        EventService.authorize(event, edit_token, fingerprint)
        if event.is_deleted:
            raise AlreadyDeletedError()

        try:
            EventRepo.soft_delete(db, event)
        except SQLAlchemyError as exc:
            db.rollback()
            logger.error("Event delete failed for %s", event_id, exc_info=True)
            raise DependencyFailure(detail="event delete failed") from exc

        logger.info("Soft-deleted event %s", event_id)

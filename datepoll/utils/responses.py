"""
Standardized response utilities
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi.responses import JSONResponse

from datepoll.core.errors import ErrorKind, ServiceError
from datepoll.core.i18n import translate
from datepoll.schemas.common import ErrorResponse


def isoformat_utc(value: Optional[datetime]) -> Optional[str]:
    """Stored timestamps are naive UTC"""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


def serialize_event(event) -> Dict[str, Any]:
    return {
        "id": event.id,
        "title": event.title,
        "description": event.description,
        "location": event.location,
        "owner_name": event.owner_name,
        "timezone": event.timezone,
        "view_count": event.view_count,
        "response_count": event.response_count,
        "created_at": isoformat_utc(event.created_at),
        "updated_at": isoformat_utc(event.updated_at),
    }


def serialize_date(event_date) -> Dict[str, Any]:
    return {
        "id": event_date.id,
        "event_id": event_date.event_id,
        "start_datetime": isoformat_utc(event_date.start_datetime),
        "end_datetime": isoformat_utc(event_date.end_datetime),
        "is_all_day": event_date.is_all_day,
        "display_order": event_date.display_order,
    }


def success_response(data: Any, status_code: int = 200) -> JSONResponse:
    return JSONResponse(content=data, status_code=status_code)


def error_response(
    kind: ErrorKind,
    locale: Optional[str] = None,
    status_code: int = 400,
    extra: Optional[Dict[str, Any]] = None
) -> JSONResponse:
    """Create the uniform ``{"error": ...}`` body with a localized message"""
    content = ErrorResponse(error=translate(kind, locale)).model_dump()
    if extra:
        content.update(extra)
    return JSONResponse(content=content, status_code=status_code)


def service_error_response(exc: ServiceError, locale: Optional[str] = None) -> JSONResponse:
    return error_response(exc.kind, locale=locale, status_code=exc.status_code)

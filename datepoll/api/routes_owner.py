"""
Creator API routes - guarded by the edit token
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from datepoll.core.db import get_db
from datepoll.core.errors import ErrorKind
from datepoll.core.i18n import translate
from datepoll.schemas.event import AccessCheck, EventUpdate
from datepoll.services.access_service import AccessService, GRANTED, INVALID_TOKEN
from datepoll.services.event_service import EventService
from datepoll.utils.responses import error_response, serialize_date, serialize_event, success_response
from datepoll.utils.security import get_edit_token, get_fingerprint

router = APIRouter()

@router.patch("/events/{event_id}")
async def update_event(
    event_id: str,
    event_update: EventUpdate,
    edit_token: Optional[str] = Depends(get_edit_token),
    fingerprint: Optional[str] = Depends(get_fingerprint),
    db: Session = Depends(get_db)
):
    """Update title/description and optionally replace the date set"""
    event, dates = EventService.update_event(
        event_id=event_id,
        edit_token=edit_token,
        title=event_update.title,
        description=event_update.description,
        db=db,
        dates=event_update.dates,
        location=event_update.location,
        owner_name=event_update.owner_name,
        fingerprint=fingerprint
    )

    data = {"success": True, "event": serialize_event(event)}
    if dates is not None:
        data["dates"] = [serialize_date(d) for d in dates]
    return success_response(data)

@router.delete("/events/{event_id}")
async def delete_event(
    event_id: str,
    edit_token: Optional[str] = Depends(get_edit_token),
    fingerprint: Optional[str] = Depends(get_fingerprint),
    db: Session = Depends(get_db)
):
    """Soft delete an event"""
    EventService.delete_event(
        event_id=event_id,
        edit_token=edit_token,
        db=db,
        fingerprint=fingerprint
    )
    return success_response({"success": True})

@router.post("/events/{event_id}/verify-access")
async def verify_access(
    event_id: str,
    access: AccessCheck,
    locale: Optional[str] = Query(None),
    db: Session = Depends(get_db)
):
    """Tell the client whether this device may show edit controls"""
    if not access.editToken or not access.fingerprint:
        return error_response(
            ErrorKind.MISSING_ACCESS_FIELDS,
            locale=locale,
            status_code=400,
            extra={"canEdit": False}
        )

    decision = AccessService.verify_edit_access(
        event_id=event_id,
        edit_token=access.editToken,
        fingerprint=access.fingerprint,
        db=db
    )

    if decision.reason == INVALID_TOKEN:
        return error_response(
            ErrorKind.INVALID_TOKEN,
            locale=locale,
            status_code=403,
            extra={"canEdit": False}
        )

    return success_response({
        "canEdit": decision.can_edit,
        "message": translate(
            "access_granted" if decision.reason == GRANTED else "access_device_mismatch",
            locale
        )
    })

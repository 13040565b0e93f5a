"""
Participant-facing API routes
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from datepoll.core.db import get_db
from datepoll.core.i18n import translate
from datepoll.schemas.participant import ResponseSubmission
from datepoll.services.response_service import ResponseService
from datepoll.utils.responses import success_response

router = APIRouter()

@router.post("/events/{event_id}/responses", status_code=201)
async def submit_response(
    event_id: str,
    submission: ResponseSubmission,
    locale: Optional[str] = Query(None),
    db: Session = Depends(get_db)
):
    """Record a participant's availability; each name can answer once"""
    participant, response_token = ResponseService.submit_response(
        event_id=event_id,
        participant_name=submission.participant_name,
        comment=submission.comment,
        responses=submission.responses,
        db=db
    )

    return success_response(
        {
            "participantId": participant.id,
            "responseToken": response_token,
            "message": translate("response_submitted", locale)
        },
        status_code=201
    )

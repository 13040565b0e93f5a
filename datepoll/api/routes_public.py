"""
Public API routes - no edit token required
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from datepoll.core.db import get_db
from datepoll.schemas.event import EventCreate
from datepoll.services.event_service import EventService
from datepoll.services.results_service import ResultsService
from datepoll.utils.responses import serialize_date, success_response
from datepoll.utils.security import build_share_urls

router = APIRouter()

@router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok"}

@router.post("/events", status_code=201)
async def create_event(
    event_data: EventCreate,
    db: Session = Depends(get_db)
):
    """Create a new event with its candidate dates"""
    event, edit_token = EventService.create_event(
        title=event_data.title,
        description=event_data.description,
        dates=event_data.dates,
        fingerprint=event_data.fingerprint,
        db=db,
        location=event_data.location,
        owner_name=event_data.owner_name
    )

    return success_response(
        {
            "eventId": event.id,
            "editToken": edit_token,
            **build_share_urls(event.id, edit_token)
        },
        status_code=201
    )

@router.get("/events/{event_id}")
async def get_event(
    event_id: str,
    db: Session = Depends(get_db)
):
    """Get a live event and its dates in display order"""
    event, dates = EventService.get_event(event_id=event_id, db=db)

    return success_response({
        "id": event.id,
        "title": event.title,
        "description": event.description,
        "location": event.location,
        "ownerName": event.owner_name,
        "timezone": event.timezone,
        "dates": [serialize_date(d) for d in dates]
    })

@router.get("/events/{event_id}/results")
async def get_results(
    event_id: str,
    db: Session = Depends(get_db)
):
    """Aggregated availability for every date"""
    return success_response(ResultsService.get_results(event_id=event_id, db=db))

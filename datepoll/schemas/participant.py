"""
Participant response schemas
"""

from typing import Optional, List
from pydantic import BaseModel, Field

class ResponseEntry(BaseModel):
    """Availability for one date; an empty status means no answer"""
    event_date_id: int = Field(..., alias="eventDateId")
    status: Optional[str] = None

    class Config:
        populate_by_name = True

class ResponseSubmission(BaseModel):
    """Participant availability submission"""
    participant_name: Optional[str] = Field(None, alias="participantName")
    comment: Optional[str] = None
    responses: List[ResponseEntry] = []

    class Config:
        populate_by_name = True

class ResponseCreated(BaseModel):
    participantId: int
    responseToken: str
    message: str

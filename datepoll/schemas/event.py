"""
Event-related Pydantic schemas
"""

from typing import Optional, List
from pydantic import BaseModel, Field

class DateSlot(BaseModel):
    """One candidate date as submitted by the creator"""
    id: Optional[int] = None
    start_datetime: Optional[str] = Field(None, alias="startDatetime")
    end_datetime: Optional[str] = Field(None, alias="endDatetime")
    is_all_day: bool = Field(False, alias="isAllDay")

    class Config:
        populate_by_name = True

class EventCreate(BaseModel):
    """Schema for creating an event"""
    title: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    owner_name: Optional[str] = Field(None, alias="ownerName")
    dates: Optional[List[DateSlot]] = None
    fingerprint: Optional[str] = None

    class Config:
        populate_by_name = True

class EventUpdate(BaseModel):
    """Schema for updating an event; omitting ``dates`` leaves them untouched"""
    title: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    owner_name: Optional[str] = Field(None, alias="ownerName")
    dates: Optional[List[DateSlot]] = None

    class Config:
        populate_by_name = True

class EventCreated(BaseModel):
    """Returned once, at creation time"""
    eventId: str
    editToken: str
    shareUrl: str
    editUrl: str

class AccessCheck(BaseModel):
    """Edit access verification request"""
    editToken: Optional[str] = None
    fingerprint: Optional[str] = None

"""
Database models package
"""

from .event import Event
from .event_date import EventDate
from .participant import Participant
from .response import Response, RESPONSE_STATUSES

__all__ = ["Event", "EventDate", "Participant", "Response", "RESPONSE_STATUSES"]

"""
Pydantic schemas package
"""

from .common import *
from .event import *
from .participant import *

__all__ = [
    "ErrorResponse",
    "StatusResponse",
    "DateSlot",
    "EventCreate",
    "EventUpdate",
    "EventCreated",
    "AccessCheck",
    "ResponseEntry",
    "ResponseSubmission",
    "ResponseCreated"
]

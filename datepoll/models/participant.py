"""
Participant model
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from datepoll.core.db import Base

class Participant(Base):
    __tablename__ = "participants"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(String(10), ForeignKey("events.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    comment = Column(Text, nullable=True)
    response_token = Column(String(64), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    event = relationship("Event", back_populates="participants")
    responses = relationship("Response", back_populates="participant")

    # Names are one-time identities within an event
    __table_args__ = (
        UniqueConstraint("event_id", "name", name="uq_participants_event_name"),
    )

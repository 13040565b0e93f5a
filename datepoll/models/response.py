"""
Response model - one participant's availability for one date
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship

from datepoll.core.db import Base

RESPONSE_STATUSES = ("yes", "no", "maybe")

class Response(Base):
    __tablename__ = "responses"

    id = Column(Integer, primary_key=True, index=True)
    participant_id = Column(Integer, ForeignKey("participants.id", ondelete="CASCADE"), nullable=False, index=True)
    event_date_id = Column(Integer, ForeignKey("event_dates.id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(String(10), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    participant = relationship("Participant", back_populates="responses")
    event_date = relationship("EventDate", back_populates="responses")

    __table_args__ = (
        CheckConstraint("status IN ('yes', 'no', 'maybe')", name="ck_responses_status"),
    )

"""
Event model
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.orm import relationship

from datepoll.core.db import Base

class Event(Base):
    __tablename__ = "events"

    id = Column(String(10), primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    location = Column(String(255), nullable=True)
    owner_name = Column(String(255), nullable=True)
    edit_token = Column(String(64), nullable=False)
    creator_fingerprint = Column(String(255), nullable=True)
    timezone = Column(String(64), nullable=False, default="Asia/Ulaanbaatar")
    view_count = Column(Integer, nullable=False, default=0)
    response_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    deleted_at = Column(DateTime, nullable=True)

    # Soft delete leaves these rows in place
    dates = relationship("EventDate", back_populates="event", order_by="EventDate.display_order")
    participants = relationship("Participant", back_populates="event")

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

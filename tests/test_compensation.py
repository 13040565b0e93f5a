"""
Tests for compensating deletes when the database autocommits each statement
"""

import logging

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker

from datepoll.core.config import settings
from datepoll.core.db import Base, build_engine
from datepoll.core.errors import DependencyFailure
from datepoll.models import Event, EventDate, Participant
from datepoll.schemas.event import DateSlot
from datepoll.schemas.participant import ResponseEntry
from datepoll.services import event_service, response_service
from datepoll.services.event_service import EventService
from datepoll.services.response_service import ResponseService

# Every flush is committed immediately, so rollback cannot undo the first write
SQLALCHEMY_DATABASE_URL = "sqlite:///./test_compensation.db"
engine = build_engine(SQLALCHEMY_DATABASE_URL, autocommit=True)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

@pytest.fixture
def db_session(monkeypatch):
    """Autocommit session with the service layer told so"""
    monkeypatch.setattr(settings, "DATABASE_AUTOCOMMIT", True)
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)

def test_event_is_removed_when_dates_fail(db_session, monkeypatch, caplog):
    monkeypatch.setattr(event_service, "new_public_id", lambda: "ORPHAN01")

    def broken_bulk_create(db, event_id, rows):
        raise OperationalError("INSERT INTO event_dates", {}, Exception("connection lost"))

    monkeypatch.setattr(event_service.EventDateRepo, "bulk_create", broken_bulk_create)

    with caplog.at_level(logging.WARNING, logger="datepoll.compensation"):
        with pytest.raises(DependencyFailure):
            EventService.create_event(
                title="Team Sync",
                description=None,
                dates=[DateSlot(startDatetime="2025-12-01T19:00:00Z")],
                fingerprint=None,
                db=db_session
            )

    assert db_session.query(Event).filter(Event.id == "ORPHAN01").first() is None
    assert any(r.name == "datepoll.compensation" and "ORPHAN01" in r.getMessage() for r in caplog.records)

def test_participant_is_removed_when_responses_fail(db_session, monkeypatch):
    event, _ = EventService.create_event(
        title="Team Sync",
        description=None,
        dates=[DateSlot(startDatetime="2025-12-01T19:00:00Z")],
        fingerprint=None,
        db=db_session
    )
    date_id = db_session.query(EventDate).filter(EventDate.event_id == event.id).first().id

    def broken_bulk_create(db, participant_id, entries):
        raise OperationalError("INSERT INTO responses", {}, Exception("connection lost"))

    monkeypatch.setattr(response_service.ResponseRepo, "bulk_create", broken_bulk_create)

    with pytest.raises(DependencyFailure):
        ResponseService.submit_response(
            event_id=event.id,
            participant_name="Alice",
            comment=None,
            responses=[ResponseEntry(eventDateId=date_id, status="yes")],
            db=db_session
        )

    assert db_session.query(Participant).filter(Participant.event_id == event.id).count() == 0

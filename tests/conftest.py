"""Pytest configuration and fixtures for tests."""
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from app.database import Base
import app.models  # noqa: F401
from app.models.volunteer import Volunteer
from typing import Callable, Generator
from contextlib import contextmanager
from datetime import datetime
from dateutil import tz


ROME = tz.gettz("Europe/Rome")


def fixed_clock(year: int, month: int, day: int, hour: int = 10) -> Callable[[], datetime]:
    """Clock frozen at the given Rome local time."""
    return lambda: datetime(year, month, day, hour, 0, tzinfo=ROME)


@pytest.fixture(scope="function")
def test_db() -> Generator[Session, None, None]:
    """
    Create a test database session for each test.
    Uses an in-memory SQLite database for fast testing.
    """
    # Create in-memory SQLite database for testing
    engine = create_engine("sqlite:///:memory:", echo=False)

    # Create all tables
    Base.metadata.create_all(bind=engine)

    # Create session
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@contextmanager
def get_test_db_session():
    """
    Context manager for creating test database sessions.
    Used for property-based tests where fixtures don't work well.
    """
    engine = create_engine("sqlite:///:memory:", echo=False)
    Base.metadata.create_all(bind=engine)
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def volunteer(test_db: Session) -> Volunteer:
    """An enabled volunteer with card number 7."""
    volunteer = Volunteer(card_id=7, surname="Rossi", name="Mario", fiscal_code="RSSMRA80A01H501U")
    test_db.add(volunteer)
    test_db.commit()
    test_db.refresh(volunteer)
    return volunteer

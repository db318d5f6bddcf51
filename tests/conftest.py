from __future__ import annotations

import os
from datetime import date

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

import app.models  # noqa: E402,F401
from app.core.deps import get_db  # noqa: E402
from app.db.base import Base  # noqa: E402
from app.main import app  # noqa: E402
from app.models.employee import Employee  # noqa: E402
from app.models.venue import Venue  # noqa: E402
from app.repositories.schedule_repository import ScheduleRepository  # noqa: E402
from app.repositories.venue_booking_repository import VenueBookingRepository  # noqa: E402


@pytest.fixture()
def engine():
    """Fresh in-memory database per test, shared across connections."""
    eng = create_engine(
        "sqlite://",
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def schedule_repo(db):
    return ScheduleRepository(db)


@pytest.fixture()
def booking_repo(db):
    return VenueBookingRepository(db)


@pytest.fixture()
def make_employee(db):
    counter = {"n": 0}

    def _make(name: str = "Rina Susanti", **kwargs) -> Employee:
        counter["n"] += 1
        n = counter["n"]
        e = Employee(
            employee_code=kwargs.pop("employee_code", f"EMP-{n:03d}"),
            name=name,
            email=kwargs.pop("email", f"emp{n}@decorops.com"),
            join_date=kwargs.pop("join_date", date(2024, 1, 15)),
            **kwargs,
        )
        db.add(e)
        db.commit()
        return e

    return _make


@pytest.fixture()
def make_venue(db):
    counter = {"n": 0}

    def _make(name: str = "Grand Ballroom", **kwargs) -> Venue:
        counter["n"] += 1
        v = Venue(code=kwargs.pop("code", f"VEN-{counter['n']:02d}"), name=name, capacity=kwargs.pop("capacity", 300), **kwargs)
        db.add(v)
        db.commit()
        return v

    return _make

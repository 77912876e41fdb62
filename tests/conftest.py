import os

# Must be set before vhsa.core.config is imported
os.environ["SQLALCHEMY_DATABASE_URI"] = "sqlite://"
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from datetime import date

import pytest
from fastapi.testclient import TestClient

from vhsa.api import deps
from vhsa.db.base import Base
from vhsa.db.session import SessionLocal, engine
from vhsa.main import app
from vhsa.models.school import School, Screener
from vhsa.models.student import Student


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[deps.get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_student(db):
    def _make(**overrides):
        values = dict(
            unique_id="ro0001",
            first_name="Maria",
            last_name="Lopez",
            grade="5th",
            gender="Female",
            school="Roosevelt Elementary",
            teacher="Ms. Carter",
            dob=date(2014, 3, 2),
            status="Returning",
        )
        values.update(overrides)
        student = Student(**values)
        db.add(student)
        db.commit()
        db.refresh(student)
        return student

    return _make


@pytest.fixture
def seeded_lists(db):
    db.add_all([
        School(name="Roosevelt Elementary", active=True),
        School(name="Lamar Middle", active=True),
        School(name="Closed Academy", active=False),
        Screener(name="K. Lee", active=True),
        Screener(name="J. Ortiz", active=True),
        Screener(name="Retired Screener", active=False),
    ])
    db.commit()

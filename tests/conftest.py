import os

# Keep main.py's import-time create_all away from the real database file
os.environ["DATABASE_URL"] = "sqlite://"

import datetime
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import Base, get_db
from main import app
from utils.timezone_helpers import academy_today

TODAY = datetime.date(2024, 3, 20)


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[academy_today] = lambda: TODAY
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def make_student(client):
    def _make(**overrides):
        data = {
            "name": "Kim Minjun",
            "grade": "초5",
            "enrollment_date": "2024-01-10",
            "tuition_fee": 300000,
            "payment_day": 15,
        }
        data.update(overrides)
        r = client.post("/api/v1/students", json=data)
        assert r.status_code == 201, r.text
        return r.json()
    return _make

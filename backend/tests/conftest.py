"""
Pytest configuration and fixtures
"""
import os
from datetime import datetime, timedelta

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENVIRONMENT", "testing")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from proctor_app import models  # noqa: F401
from proctor_app.core.database import Base, build_engine, get_db
from proctor_app.main import app
from proctor_app.services.proctoring_service import ProctoringService
from proctor_app.services.session_repository import ProctoringSessionRepository


class FakeClock:
    """Deterministic clock; every call returns the current value unchanged."""

    def __init__(self, start=datetime(2024, 3, 1, 9, 0, 0)):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)
        return self.now


@pytest.fixture(scope='function')
def engine():
    engine = build_engine("sqlite://")
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture(scope='function')
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


@pytest.fixture(scope='function')
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def repository(db_session):
    return ProctoringSessionRepository(db_session)


@pytest.fixture
def service(repository, clock):
    return ProctoringService(repository, clock=clock, max_retries=3)


@pytest.fixture
def client(session_factory):
    """Test client bound to the per-test database; startup hooks are not run."""

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()

import os

# Point the engine at a private in-memory database before the app is imported
os.environ.setdefault("PYTEST_RUNNING", "1")
os.environ.setdefault("LOCATION_TEST_DB", "sqlite+pysqlite:///:memory:")

import pytest
from fastapi.testclient import TestClient

from location_admin.api.main import app
from location_admin.db import models
from location_admin.db.database import SessionLocal, engine, get_db
from location_admin.db.repositories import states as state_repo


@pytest.fixture
def db_session():
    models.Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        models.Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_db, None)


@pytest.fixture
def state_factory(db_session):
    def _create(name: str, order: int = 0, status: str = "published"):
        return state_repo.create_state(db_session, name=name, order=order, status=status)
    return _create


@pytest.fixture
def city_factory(db_session):
    def _create(name: str, state=None, order: int = 0, status: str = "published"):
        city = models.City(
            name=name,
            state_id=state.id if state is not None else None,
            order=order,
            status=status,
        )
        db_session.add(city)
        db_session.commit()
        db_session.refresh(city)
        return city
    return _create

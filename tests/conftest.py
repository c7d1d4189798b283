import itertools
import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

# Force the in-memory database for anything importing woodys.db.database
os.environ.setdefault("PYTEST_RUNNING", "1")

from woodys.api.main import app
from woodys.db import models, schemas
from woodys.db.database import build_engine, get_db
from woodys.db.repositories import build_repositories
from woodys.services import build_services


@pytest.fixture
def engine():
    eng = build_engine("sqlite+pysqlite:///:memory:")
    models.Base.metadata.create_all(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def SessionLocal(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture
def db_session(SessionLocal):
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def repos(db_session):
    return build_repositories(db_session)


@pytest.fixture
def services(db_session):
    return build_services(db_session)


@pytest.fixture
def make_user(services):
    counter = itertools.count(1)

    def _make(username=None, email=None, firebase_uid=None):
        n = next(counter)
        return services.users.create_user(
            schemas.UserCreate(
                username=username or f"maker{n}",
                email=email or f"maker{n}@example.com",
                firebase_uid=firebase_uid or f"uid-maker-{n}",
            )
        )

    return _make


@pytest.fixture
def make_project(services):
    def _make(owner, title="Walnut side table", **fields):
        return services.projects.create_project(schemas.ProjectCreate(title=title, **fields), owner.id)

    return _make


@pytest.fixture
def client(SessionLocal):
    def _override_get_db():
        db = SessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _override_get_db
    limiter = app.state.rate_limiter
    app.state.rate_limiter = None
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.pop(get_db, None)
        app.state.rate_limiter = limiter


@pytest.fixture
def signup(client):
    """Register a user over HTTP; returns (user_json, auth_headers)."""
    counter = itertools.count(1)

    def _signup(username=None):
        n = next(counter)
        username = username or f"woodworker{n}"
        uid = f"uid-{username}"
        r = client.post(
            "/users",
            json={"username": username, "email": f"{username}@example.com", "firebase_uid": uid},
        )
        assert r.status_code == 201, r.text
        return r.json(), {"X-Firebase-UID": uid}

    return _signup

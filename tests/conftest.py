"""Pytest fixtures — a throwaway SQLite database per test, fake answer services."""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

from qplan.database import Base
from qplan.dependencies import get_answer_service, get_store
from qplan.exceptions import AssistantUnavailable
from qplan.main import app
from qplan.models.resource import Resource
from qplan.schemas.identity import Identity
from qplan.services.request_workflow import RequestWorkflow
from qplan.store.entity_store import EntityStore

ADMIN_HEADERS = {
    "X-User-Id": "admin-uid",
    "X-User-Name": "Admin",
    "X-User-Email": "admin@example.com",
}


class FakeAnswerService:
    """Records calls and returns a canned answer (or raises)."""

    def __init__(self, reply="Quantum Rig A-1 is available in Lab 3.", error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    def __call__(self, question, event_details, resource_status):
        self.calls.append({
            "question": question,
            "eventDetails": event_details,
            "resourceStatus": resource_status,
        })
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture(scope="function")
def db_engine(tmp_path):
    """Create a fresh SQLite engine for each test."""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'test.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    return sessionmaker(bind=db_engine, autocommit=False, autoflush=False, expire_on_commit=False)


@pytest.fixture(scope="function")
def db(session_factory):
    """A raw session for arranging rows the API cannot write."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def store(session_factory):
    return EntityStore(session_factory)


@pytest.fixture(scope="function")
def workflow(store):
    return RequestWorkflow(store)


@pytest.fixture(scope="function")
def answer_service():
    return FakeAnswerService()


@pytest.fixture(scope="function")
def client(session_factory, answer_service):
    """FastAPI TestClient with the store and answer service overridden."""
    app.dependency_overrides[get_store] = lambda: EntityStore(session_factory)
    app.dependency_overrides[get_answer_service] = lambda: answer_service
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def fail_statements(db_engine):
    """Make any statement starting with one of the given prefixes fail like a lost connection."""
    prefixes = []

    def _before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        if any(statement.startswith(p) for p in prefixes):
            raise OperationalError(statement, parameters, Exception("injected failure"))

    event.listen(db_engine, "before_cursor_execute", _before_cursor_execute)
    yield prefixes
    event.remove(db_engine, "before_cursor_execute", _before_cursor_execute)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def user_headers(user_id: str = "alex", name: str = "Alex", email: str = "alex@example.com") -> dict:
    return {"X-User-Id": user_id, "X-User-Name": name, "X-User-Email": email}


def make_identity(user_id: str = "alex", name: str = "Alex") -> Identity:
    return Identity(user_id=user_id, display_name=name, email=f"{user_id}@example.com")


def insert_resource(db, resource_id: str = "r1", name: str = "Quantum Rig A-1",
                    location: str = "Lab 3", status: str = "Available") -> Resource:
    """Insert a resource with a fixed id, bypassing the adapter."""
    row = Resource(id=resource_id, name=name, location=location, status=status)
    db.add(row)
    db.commit()
    return row


def unavailable_service() -> FakeAnswerService:
    return FakeAnswerService(error=AssistantUnavailable("quota exceeded"))

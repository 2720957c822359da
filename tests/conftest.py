from __future__ import annotations

import os

# Hermetic database for the whole suite; must be set before branchhub is imported.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("PUBLIC_BASE_URL", "https://feedback.example.test")

from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from branchhub import models  # noqa: F401
from branchhub.db.base import Base
from branchhub.db.session import get_db
from branchhub.main import app
from branchhub.models.branch import Branch
from branchhub.models.feedback import Feedback
from branchhub.schemas.feed import FeedResponse
from branchhub.services.feed_client import get_feed_client


def feed_location(
    id: str,
    title: str,
    location: str = "40.40, 49.86",
    language: str = "en",
    address: str = "X",
    services: str = "Cash withdrawal",
) -> dict:
    return {
        "id": id,
        "title": title,
        "address": address,
        "serviceNames": services,
        "location": location,
        "slug": title.lower().replace(" ", "-"),
        "language": language,
    }


class FakeFeedClient:
    """Stands in for BankFeedClient; serves canned contents or raises."""

    def __init__(self, contents: list[dict] | None = None, error: Exception | None = None) -> None:
        self.contents = contents or []
        self.error = error
        self.calls = 0

    async def fetch(self) -> FeedResponse:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return FeedResponse.model_validate(
            {"statusCode": 200, "messages": None, "payload": {"contents": self.contents}}
        )


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, _record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory) -> Session:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def feed_client() -> FakeFeedClient:
    return FakeFeedClient()


@pytest.fixture
def client(session_factory, feed_client):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_feed_client] = lambda: feed_client
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_branch(db):
    def _make(
        name: str,
        type: str = "Branch",
        latitude: float = 40.4093,
        longitude: float = 49.8671,
        address: str = "Baku",
        external_id: str | None = None,
    ) -> Branch:
        now = datetime(2024, 1, 1, 12, 0, 0)
        branch = Branch(
            name=name,
            address=address,
            type=type,
            latitude=latitude,
            longitude=longitude,
            external_id=external_id,
            created_at=now,
            updated_at=now,
        )
        db.add(branch)
        db.commit()
        db.refresh(branch)
        return branch

    return _make


@pytest.fixture
def add_feedback(db):
    def _add(branch: Branch, *ratings: int) -> None:
        for rating in ratings:
            db.add(Feedback(branch_id=branch.id, rating=rating, category="Service"))
        db.commit()

    return _add

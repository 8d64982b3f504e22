"""
Pytest configuration and shared fixtures.

Tests run against an in-memory SQLite database. The engine uses a StaticPool,
so the app and the fixtures below see the same data, triggers included.
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SESSION_UUID"] = "test-session-uuid"
os.environ["ACTIVE_USER_ID"] = "1"
os.environ["ENVIRONMENT"] = "test"

import time
from datetime import datetime
from typing import Optional

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel

from flashdeck.core.database import engine
from flashdeck.main import app
from flashdeck.models import Card, Deck, User
from flashdeck.services.review_service import active_decks

SESSION_UUID = "test-session-uuid"


@pytest.fixture(autouse=True)
def database():
    SQLModel.metadata.create_all(engine)
    active_decks.clear()
    yield engine
    active_decks.clear()
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def session(database):
    with Session(database) as session:
        yield session


@pytest.fixture
def client(database):
    with TestClient(app) as client:
        yield client


def add_row(row):
    """Insert one row in its own session and return its id."""
    with Session(engine) as session:
        session.add(row)
        session.commit()
        session.refresh(row)
        return row.id


def add_user(name: str = "glencoden", email: str = "glen@coden.io") -> int:
    return add_row(User(name=name, email=email))


def add_deck(user_id: int, from_language: str = "German", to_language_primary: str = "Spanish") -> int:
    return add_row(
        Deck(user_id=user_id, from_language=from_language, to_language_primary=to_language_primary)
    )


def add_card(
    deck_id: int,
    from_text: str = "Hund",
    to_text_primary: str = "perro",
    rating: int = 0,
    updated_at: Optional[datetime] = None
) -> int:
    card = Card(deck_id=deck_id, from_text=from_text, to_text_primary=to_text_primary, rating=rating)
    if updated_at is not None:
        card.updated_at = updated_at
    return add_row(card)


def tick():
    """Let the clock move past the millisecond resolution of the SQLite triggers."""
    time.sleep(0.01)


@pytest.fixture
def user_id():
    return add_user()


@pytest.fixture
def deck_id(user_id):
    return add_deck(user_id)

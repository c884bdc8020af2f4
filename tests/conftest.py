"""Shared fixtures: in-memory database, a logged-in user and an API client."""

import os
import tempfile

# Configure before any journal module reads settings
os.environ.setdefault("TJ_DATABASE_URL", "sqlite://")
os.environ.setdefault("TJ_UPLOAD_DIR", tempfile.mkdtemp(prefix="journal-uploads-"))
os.environ.setdefault("TJ_JWT_SECRET", "test-secret")

from datetime import datetime
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlmodel import SQLModel, Session

from journal.database import init_engine, dispose_engine, create_db_and_tables
from journal.models.user import User
from journal.services.auth import create_access_token, hash_password, generate_totp_secret


def make_trade(
    date="2024-01-01",
    pair="EURUSD",
    side="Buy",
    outcome="Win",
    pips=0.0,
    risk_reward=0.0,
    entry=1.1,
    stop_loss=1.095,
    take_profit=1.11,
    notes=None,
):
    """Lightweight trade-like record for engine tests."""
    return SimpleNamespace(
        date=datetime.fromisoformat(date),
        pair=pair,
        side=side,
        outcome=outcome,
        pips=pips,
        risk_reward=risk_reward,
        entry=entry,
        stop_loss=stop_loss,
        take_profit=take_profit,
        notes=notes,
    )


@pytest.fixture
def engine():
    engine = init_engine("sqlite://")
    create_db_and_tables()
    yield engine
    SQLModel.metadata.drop_all(engine)
    dispose_engine()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


def _create_user(session: Session, username: str) -> User:
    user = User(
        username=username,
        hashed_password=hash_password("hunter2"),
        totp_secret=generate_totp_secret(),
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture
def user(session):
    return _create_user(session, "alice")


@pytest.fixture
def other_user(session):
    return _create_user(session, "bob")


@pytest.fixture
def client(engine):
    from journal.main import app

    # Not used as a context manager: the lifespan would rebuild the engine
    return TestClient(app)


@pytest.fixture
def auth_headers(user):
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture
def other_headers(other_user):
    return {"Authorization": f"Bearer {create_access_token(other_user.id)}"}

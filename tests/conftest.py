# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from itertools import count
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from sponsormatch.api.v1 import dependencies as api_dependencies
from sponsormatch.core.context import UserContext
from sponsormatch.core.security import create_access_token, hash_password
from sponsormatch.db.session import Base
from sponsormatch.db.session import get_db as app_get_session
from sponsormatch.main import app as fastapi_app
from sponsormatch.models import MATCH_STATUS_ACTIVE, Athlete, Match, Sponsor, UserAccount, pair_key
from sponsormatch.services.message_log import MessageHub
from sponsormatch.services.storage import LocalObjectStorage

TEST_DB_URL = "sqlite://"
TEST_PASSWORD = "correct-horse-battery"
MEDIA_BASE_URL = "http://test/media"

# Hashed once for every account the factories create.
_PASSWORD_HASH = hash_password(TEST_PASSWORD)
_ACCOUNT_COUNTER = count(1)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    session = Session(bind=engine, autoflush=False)
    try:
        yield session
    finally:
        session.close()

        # Services commit, so every test starts from empty tables.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def storage(tmp_path: Path) -> LocalObjectStorage:
    """Filesystem storage rooted in the test's temporary directory."""
    return LocalObjectStorage(tmp_path / "media", MEDIA_BASE_URL)


@pytest.fixture()
def message_hub() -> MessageHub:
    """Hub isolated from the process-wide one."""
    return MessageHub()


@pytest.fixture(autouse=True)
def override_collaborators(
    app: FastAPI,
    storage: LocalObjectStorage,
    message_hub: MessageHub,
) -> Iterator[None]:
    app.dependency_overrides[api_dependencies.get_storage_dep] = lambda: storage
    app.dependency_overrides[api_dependencies.get_message_hub_dep] = lambda: message_hub
    try:
        yield
    finally:
        app.dependency_overrides.pop(api_dependencies.get_storage_dep, None)
        app.dependency_overrides.pop(api_dependencies.get_message_hub_dep, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def make_account(db_session: Session) -> Callable[..., UserAccount]:
    """Return a factory persisting accounts with the shared test password."""

    def _make(user_type: str, email: str | None = None) -> UserAccount:
        account = UserAccount(
            email=email or f"user{next(_ACCOUNT_COUNTER)}@example.com",
            password_hash=_PASSWORD_HASH,
            user_type=user_type,
        )
        db_session.add(account)
        db_session.commit()
        db_session.refresh(account)
        return account

    return _make


@pytest.fixture()
def make_athlete(
    db_session: Session,
    make_account: Callable[..., UserAccount],
) -> Callable[..., Athlete]:
    """Return a factory creating an athlete account and profile."""

    def _make(display_name: str = "Jordan Miles", **fields: object) -> Athlete:
        account = make_account("athlete")
        values: dict[str, object] = {
            "category": "Basketball",
            "description": "Point guard with a quick first step",
            "image_url": f"{MEDIA_BASE_URL}/athletes/{account.user_id}",
            "college": "State University",
            "amount_requested": 5000,
        }
        values.update(fields)
        athlete = Athlete(user_id=account.user_id, display_name=display_name, **values)
        db_session.add(athlete)
        db_session.commit()
        db_session.refresh(athlete)
        return athlete

    return _make


@pytest.fixture()
def make_sponsor(
    db_session: Session,
    make_account: Callable[..., UserAccount],
) -> Callable[..., Sponsor]:
    """Return a factory creating a sponsor account and profile."""

    def _make(display_name: str = "Acme Sports", **fields: object) -> Sponsor:
        account = make_account("sponsor")
        values: dict[str, object] = {
            "category": "Apparel",
            "description": "Performance apparel for student athletes",
            "image_url": f"{MEDIA_BASE_URL}/sponsors/{account.user_id}",
            "min_budget": 1000,
            "max_budget": 20000,
        }
        values.update(fields)
        sponsor = Sponsor(user_id=account.user_id, display_name=display_name, **values)
        db_session.add(sponsor)
        db_session.commit()
        db_session.refresh(sponsor)
        return sponsor

    return _make


@pytest.fixture()
def athlete(make_athlete: Callable[..., Athlete]) -> Athlete:
    return make_athlete()


@pytest.fixture()
def sponsor(make_sponsor: Callable[..., Sponsor]) -> Sponsor:
    return make_sponsor()


@pytest.fixture()
def make_match(db_session: Session) -> Callable[..., Match]:
    """Return a factory inserting an active match directly."""

    def _make(sponsor: Sponsor, athlete: Athlete, **fields: object) -> Match:
        values: dict[str, object] = {
            "sponsor_name": sponsor.display_name,
            "athlete_name": athlete.display_name,
            "status": MATCH_STATUS_ACTIVE,
        }
        values.update(fields)
        match = Match(
            sponsor_id=sponsor.user_id,
            athlete_id=athlete.user_id,
            pair_key=pair_key(sponsor.user_id, athlete.user_id),
            **values,
        )
        db_session.add(match)
        db_session.commit()
        db_session.refresh(match)
        return match

    return _make


@pytest.fixture()
def match(make_match: Callable[..., Match], sponsor: Sponsor, athlete: Athlete) -> Match:
    return make_match(sponsor, athlete)


def auth_headers_for(user_id: str) -> dict[str, str]:
    token = create_access_token(user_id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def athlete_headers(athlete: Athlete) -> dict[str, str]:
    """Return authorization headers for the default athlete."""
    return auth_headers_for(athlete.user_id)


@pytest.fixture()
def sponsor_headers(sponsor: Sponsor) -> dict[str, str]:
    """Return authorization headers for the default sponsor."""
    return auth_headers_for(sponsor.user_id)


@pytest.fixture()
def sponsor_context(sponsor: Sponsor) -> UserContext:
    return UserContext(user_id=sponsor.user_id, user_type="sponsor")


@pytest.fixture()
def athlete_context(athlete: Athlete) -> UserContext:
    return UserContext(user_id=athlete.user_id, user_type="athlete")


@pytest.fixture()
def auth_headers() -> Callable[[str], dict[str, str]]:
    """Return a helper building authorization headers for any user id."""
    return auth_headers_for


@pytest.fixture()
def test_password() -> str:
    """Plain-text password shared by every factory-made account."""
    return TEST_PASSWORD

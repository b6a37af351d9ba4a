# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Generator, Iterator
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key")

from microblog.api.dependencies import get_identity_provider
from microblog.core import security
from microblog.core.errors import ExternalIdentityError
from microblog.core.settings import Settings
from microblog.db.session import Base
from microblog.db.session import get_db as app_get_session
from microblog.main import create_app
from microblog.models import Post, User
from microblog.schemas.user import ExternalProfile
from microblog.services.oauth import OAuthConfig

TEST_DB_URL = "sqlite://"
TEST_PASSWORD = "correct horse battery staple"

_TEST_SETTINGS_INSTANCE = Settings(
    SECRET_KEY="test-secret-key",
    DATABASE_URL=TEST_DB_URL,
    AUTO_CREATE_TABLES=False,
    _env_file=None,
)


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
    connection = engine.connect()
    transaction = connection.begin()
    SessionLocal = sessionmaker(
        bind=connection,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    session.begin_nested()

    @event.listens_for(session, "after_transaction_end")
    def restart_savepoint(sess: Session, trans) -> None:  # pragma: no cover - SQLAlchemy internals
        if trans.nested and not getattr(trans._parent, "nested", False):
            session.begin_nested()

    try:
        yield session
    finally:
        event.remove(session, "after_transaction_end", restart_savepoint)
        session.close()

        if transaction.is_active:
            transaction.rollback()
        connection.close()

        # Ensure each test sees a clean database even if commits occurred.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Provide the Settings instance the test application is built with."""
    return _TEST_SETTINGS_INSTANCE


@pytest.fixture(scope="session")
def app(test_settings: Settings) -> FastAPI:
    return create_app(test_settings)


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
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def test_user(db_session: Session) -> Iterator[User]:
    """Create and return a persisted local user."""
    user = User(username="alice", password_hash=security.hash_password(TEST_PASSWORD))
    db_session.add(user)
    db_session.flush()
    db_session.refresh(user)
    yield user


@pytest.fixture()
def signed_in_client(client: TestClient, test_user: User, test_settings: Settings) -> TestClient:
    """Return a client carrying a session cookie for ``test_user``."""
    client.cookies.set(
        test_settings.session_cookie_name,
        security.create_session_token(test_user.id, test_settings),
    )
    return client


@pytest.fixture()
def test_post(db_session: Session) -> Iterator[Post]:
    """Create a baseline post for tests."""
    post = Post(title="Walk Dog", description="Take Fluffy for a walk")
    db_session.add(post)
    db_session.flush()
    db_session.refresh(post)
    yield post


class StubIdentityProvider:
    """Stand-in for the external provider that skips the HTTP exchange."""

    def __init__(self, profile: ExternalProfile | None = None, *, fail: bool = False) -> None:
        self.config = OAuthConfig(
            name="Stub",
            client_id="stub-client",
            client_secret="stub-secret",
            callback_url="http://testserver/auth/external/callback",
            authorize_url="https://provider.test/authorize",
            token_url="https://provider.test/token",
            profile_url="https://provider.test/user",
            scope="read:user",
            timeout_seconds=1.0,
        )
        self.profile = profile or ExternalProfile(subject_id="4242", username="octocat")
        self.fail = fail
        self.codes: list[str] = []

    @property
    def enabled(self) -> bool:
        return True

    def authorization_url(self, state: str) -> str:
        return f"{self.config.authorize_url}?state={state}"

    async def authenticate(self, code: str) -> ExternalProfile:
        self.codes.append(code)
        if self.fail:
            raise ExternalIdentityError("Stub rejected the code")
        return self.profile


@pytest.fixture()
def identity_provider(app: FastAPI) -> Iterator[StubIdentityProvider]:
    """Override the external provider dependency with a stub."""
    provider = StubIdentityProvider()
    app.dependency_overrides[get_identity_provider] = lambda: provider
    try:
        yield provider
    finally:
        app.dependency_overrides.pop(get_identity_provider, None)


def create_post_via_api(client: TestClient, **fields: Any) -> dict[str, Any]:
    response = client.post("/api/posts", json=fields)
    assert response.status_code == 200, response.text
    return response.json()

"""Shared fixtures: a throwaway SQLite database per test, services and an HTTP client."""
from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from messagely.core.config import Settings
from messagely.core.security import PasswordHasher, TokenSigner
from messagely.db.session import create_engine, create_session_factory, init_models
from messagely.main import create_app
from messagely.schemas.auth import RegisterRequest

PASSWORD = "super-secret-password"


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'messagely.sqlite3'}",
        secret_key="tests-secret-key",
        password_time_cost=1,
    )


@pytest.fixture
async def engine(settings):
    engine = create_engine(settings)
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(time_cost=1)


@pytest.fixture
def signer(settings) -> TokenSigner:
    return TokenSigner(settings)


@pytest.fixture
async def app(settings):
    app = create_app(settings)
    # ASGITransport does not run the lifespan, so create the tables here.
    await init_models(app.state.engine)
    yield app
    await app.state.engine.dispose()


@pytest.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


def registration(username: str, first_name: str = "First", last_name: str = "Last") -> RegisterRequest:
    return RegisterRequest(
        username=username,
        password=PASSWORD,
        first_name=first_name,
        last_name=last_name,
        phone="555-0100",
    )

"""Shared test fixtures for RiskBoard tests."""

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from riskboard.api.dashboard import router as dashboard_router
from riskboard.api.risks import router as risks_router
from riskboard.database import Database, get_session
from riskboard.errors import register_exception_handlers
from riskboard.store import RiskStore


@pytest_asyncio.fixture
async def database():
    """A fresh in-memory database per test."""
    db = Database("sqlite+aiosqlite://")
    await db.create_schema()
    yield db
    await db.drop_schema()
    await db.dispose()


@pytest_asyncio.fixture
async def db_session(database: Database):
    async with database.sessionmaker() as session:
        yield session


@pytest_asyncio.fixture
async def store(db_session):
    return RiskStore(db_session)


@pytest.fixture
def api_app(db_session):
    app = FastAPI()

    async def _override_session():
        yield db_session

    app.dependency_overrides[get_session] = _override_session
    register_exception_handlers(app)
    app.include_router(risks_router)
    app.include_router(dashboard_router)
    return app


@pytest_asyncio.fixture
async def client(api_app):
    transport = ASGITransport(app=api_app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

"""Pytest configuration and shared fixtures for prompt library tests."""

import os

# Must be set before promptlib reads its settings.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["PROMPTS_LIST_RATE_LIMIT"] = "10000/minute"

from collections.abc import AsyncIterator, Iterator
from pathlib import Path

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from promptlib.client import PromptLibraryClient
from promptlib.db.session import Base
from promptlib.dependencies import get_db
from promptlib.main import app as fastapi_app


@pytest.fixture
def session_factory(tmp_path: Path) -> Iterator[async_sessionmaker]:
    """Fresh SQLite file per test; schema created with a sync engine."""
    db_path = tmp_path / "test.db"
    sync_engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(sync_engine)
    sync_engine.dispose()

    # NullPool: TestClient may run each request on its own event loop.
    engine = create_async_engine(f"sqlite+aiosqlite:///{db_path}", poolclass=NullPool)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
def app(session_factory: async_sessionmaker) -> Iterator[FastAPI]:
    async def _get_test_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    fastapi_app.dependency_overrides[get_db] = _get_test_db
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest.fixture
async def api_client(app: FastAPI) -> AsyncIterator[PromptLibraryClient]:
    """PromptLibraryClient talking to the app in-process."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as http:
        yield PromptLibraryClient("http://testserver/api", http_client=http)

from __future__ import annotations

from pathlib import Path

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

import main
from core import db


@pytest.fixture
def database_path(tmp_path: Path) -> str:
    return str(tmp_path / "blog.db")


@pytest_asyncio.fixture
async def database(database_path: str) -> db.Database:
    database = db.Database(database_path)
    await database.init()
    return database


@pytest_asyncio.fixture
async def conn(database: db.Database):
    async with database.connect() as conn:
        yield conn


@pytest.fixture
def client(database_path: str, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("DATABASE_PATH", database_path)
    with TestClient(main.app) as test_client:
        yield test_client

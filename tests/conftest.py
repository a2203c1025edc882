"""Shared fixtures: a throwaway SQLite database for every test session."""
import os
import tempfile

# Must be set before anything imports db.connection.
_TMP_DIR = tempfile.mkdtemp(prefix="crm-exercises-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TMP_DIR}/test.db"

import pytest_asyncio

from db import create_schema


@pytest_asyncio.fixture
async def db_schema():
    """Recreate all tables so each test starts from an empty store."""
    await create_schema(drop_existing=True)
    yield

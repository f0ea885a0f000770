"""
Pytest configuration and shared fixtures.
This file ensures the project root is in sys.path for imports.

Store-backed tests run against an in-memory SQLite database; every test gets
a fresh schema.
"""

import sys
from pathlib import Path

# Add project root to sys.path so we can import domain, services, etc.
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

import pytest
from fastapi.testclient import TestClient

from app.config import settings
from domain.models import Database
from main import create_app

TEST_DATABASE_URL = "sqlite+pysqlite:///:memory:"


@pytest.fixture
def database():
    """Connected in-memory database with all tables created"""
    db = Database(TEST_DATABASE_URL)
    db.connect()
    db.init_schema()
    yield db
    db.close()


@pytest.fixture
def db_session(database):
    """
    Session on the test database.

    Services commit, so the whole database is thrown away after the test
    instead of rolling back.
    """
    session = database.create_session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(database):
    """TestClient for an app wired to the test database (lifespan not run)"""
    app = create_app(settings, database=database)
    return TestClient(app)

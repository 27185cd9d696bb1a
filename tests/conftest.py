"""
Pytest fixtures for the news API tests.

Provides the seed data, a freshly seeded temporary SQLite database per test,
a query executor over that database, and a FastAPI TestClient wired to it.

Seed data (tests/fixtures/seed_data.json):
    3 topics: mitch, cats, paper (paper has no articles)
    4 users: butter_bridge, icellusedkars, rogersop, lurker
    12 articles: 11 mitch, 1 cats (article 5); article 1 starts at 100 votes
    18 comments: 11 on article 1; article 2 has none
"""

import json
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from news_api.database import _make_conn  # noqa: E402
from news_data.seed import create_database  # noqa: E402
from news_data.store import SqliteExecutor  # noqa: E402

FIXTURES_DIR = Path(__file__).parent / "fixtures"
SEED_DATA_PATH = FIXTURES_DIR / "seed_data.json"


@pytest.fixture(scope="session")
def seed_data() -> dict:
    """The seed data set, as loaded from JSON."""
    return json.loads(SEED_DATA_PATH.read_text(encoding="utf-8"))


@pytest.fixture()
def test_db(tmp_path, seed_data) -> Path:
    """A freshly seeded database file, rebuilt for every test."""
    db_path = tmp_path / "test_news.sqlite"
    create_database(db_path, seed_data)
    return db_path


@pytest.fixture()
def store(test_db):
    """A SqliteExecutor over a connection to the seeded test database."""
    conn = _make_conn(test_db)
    try:
        yield SqliteExecutor(conn)
    finally:
        conn.close()


@pytest.fixture()
def client(test_db):
    """A FastAPI TestClient wired to the seeded test database."""
    pytest.importorskip("httpx")
    from fastapi.testclient import TestClient
    from news_api.app import create_app

    app = create_app(db_path=test_db)
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c

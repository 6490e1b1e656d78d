import sqlite3
from contextlib import closing
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from items_api.core.config import Settings
from items_api.main import create_app

ITEMS_DDL = """
CREATE TABLE items (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    description TEXT
)
"""


def make_settings(url: str, **overrides) -> Settings:
    values = {
        "DATABASE_URL": url,
        "DB_POOL_SIZE": 5,
        "DB_CONNECT_ATTEMPTS": 3,
        "DB_CONNECT_DELAY": 0.0,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


async def no_sleep(delay: float) -> None:
    return None


@pytest.fixture()
def db_path(tmp_path: Path) -> Path:
    path = tmp_path / "items.db"
    with closing(sqlite3.connect(path)) as conn:
        conn.execute(ITEMS_DDL)
        conn.commit()
    return path


@pytest.fixture()
def db_url(db_path: Path) -> str:
    return f"sqlite+aiosqlite:///{db_path}"


@pytest.fixture()
def settings(db_url: str) -> Settings:
    return make_settings(db_url)


@pytest.fixture()
def client(settings: Settings):
    app = create_app(settings, sleep=no_sleep)
    with TestClient(app) as c:
        yield c


def count_rows(db_path: Path) -> int:
    with closing(sqlite3.connect(db_path)) as conn:
        return conn.execute("SELECT COUNT(*) FROM items").fetchone()[0]

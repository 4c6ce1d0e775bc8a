import sqlite3
from datetime import date

import pytest
from fastapi.testclient import TestClient

from src.api.main import app
from src.api.utils import get_today

TODAY = date(2026, 10, 18)

# The service never creates its table; tests provision it the way the host would.
SCHEMA = """
CREATE TABLE todos (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    description TEXT NOT NULL,
    due_date DATE,
    starred BOOLEAN DEFAULT 0,
    is_completed BOOLEAN DEFAULT 0
)
"""


@pytest.fixture
def db_path(tmp_path, monkeypatch):
    path = tmp_path / "todos.db"
    conn = sqlite3.connect(path)
    conn.execute(SCHEMA)
    conn.commit()
    conn.close()
    monkeypatch.setenv("SQLITE_DB_PATH", str(path))
    return path


@pytest.fixture
def insert_row(db_path):
    def _insert(description, due_date=None, starred=0, is_completed=0):
        conn = sqlite3.connect(db_path)
        cur = conn.execute(
            "INSERT INTO todos (description, due_date, starred, is_completed) VALUES (?, ?, ?, ?)",
            (description, due_date, starred, is_completed),
        )
        conn.commit()
        row_id = cur.lastrowid
        conn.close()
        return row_id

    return _insert


@pytest.fixture
def client(db_path):
    app.dependency_overrides[get_today] = lambda: TODAY
    yield TestClient(app)
    app.dependency_overrides.clear()

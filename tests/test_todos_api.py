import sqlite3
from datetime import date, timedelta

from conftest import TODAY

YESTERDAY = (TODAY - timedelta(days=1)).isoformat()
TOMORROW = (TODAY + timedelta(days=1)).isoformat()


def assert_todo_shape(todo: dict):
    assert set(todo) == {"id", "description", "due_date", "starred", "is_completed"}
    assert isinstance(todo["id"], int)
    assert isinstance(todo["description"], str)
    assert isinstance(todo["starred"], bool)
    assert isinstance(todo["is_completed"], bool)
    if todo["due_date"] is not None:
        date.fromisoformat(todo["due_date"])


def listed_descriptions(res):
    assert res.status_code == 200
    return sorted(t["description"] for t in res.json())


class TestCreate:
    def test_create_todo_minimal(self, client):
        res = client.post("/api/todos/create", json={"description": "Buy milk"})
        assert res.status_code == 200
        todo = res.json()
        assert_todo_shape(todo)
        assert todo == {
            "id": todo["id"],
            "description": "Buy milk",
            "due_date": None,
            "starred": False,
            "is_completed": False,
        }

    def test_create_assigns_increasing_ids(self, client):
        first = client.post("/api/todos/create", json={"description": "One"}).json()
        second = client.post("/api/todos/create", json={"description": "Two"}).json()
        assert second["id"] > first["id"]

    def test_create_with_due_date(self, client):
        res = client.post("/api/todos/create", json={"description": "Pay bills", "due_date": "2099-12-25"})
        assert res.status_code == 200
        assert res.json()["due_date"] == "2099-12-25"

        listed = client.get("/api/todos").json()
        assert [t["due_date"] for t in listed] == ["2099-12-25"]

    def test_create_stores_sql_null_for_missing_due_date(self, client, db_path):
        todo = client.post("/api/todos/create", json={"description": "No date", "due_date": None}).json()

        conn = sqlite3.connect(db_path)
        (kind,) = conn.execute("SELECT typeof(due_date) FROM todos WHERE id = ?", (todo["id"],)).fetchone()
        conn.close()
        assert kind == "null"

    def test_create_keeps_description_verbatim(self, client):
        res = client.post("/api/todos/create", json={"description": "  Walk dog  "})
        assert res.status_code == 200
        assert res.json()["description"] == "  Walk dog  "
        assert client.get("/api/todos").json()[0]["description"] == "  Walk dog  "


class TestList:
    def test_list_empty_returns_array(self, client):
        res = client.get("/api/todos")
        assert res.status_code == 200
        assert res.json() == []

    def test_list_returns_all_rows_without_filters(self, client, insert_row):
        insert_row("a", YESTERDAY)
        insert_row("b", None, starred=1, is_completed=1)
        res = client.get("/api/todos")
        assert listed_descriptions(res) == ["a", "b"]
        by_desc = {t["description"]: t for t in res.json()}
        assert by_desc["a"]["due_date"] == YESTERDAY
        assert by_desc["b"]["starred"] is True
        assert by_desc["b"]["is_completed"] is True

    def test_due_true_returns_only_rows_due_by_today(self, client, insert_row):
        insert_row("yesterday", YESTERDAY)
        insert_row("undated", None)
        insert_row("today", TODAY.isoformat())
        insert_row("tomorrow", TOMORROW)
        res = client.get("/api/todos?due=true")
        assert listed_descriptions(res) == ["today", "yesterday"]

    def test_due_false_includes_future_and_undated(self, client, insert_row):
        insert_row("yesterday", YESTERDAY)
        insert_row("undated", None)
        insert_row("today", TODAY.isoformat())
        insert_row("tomorrow", TOMORROW)
        res = client.get("/api/todos?due=false")
        assert listed_descriptions(res) == ["tomorrow", "undated"]

    def test_complete_false_excludes_completed(self, client, insert_row):
        insert_row("open")
        insert_row("done", is_completed=1)
        res = client.get("/api/todos?complete=false")
        assert listed_descriptions(res) == ["open"]

    def test_complete_true_returns_completed(self, client, insert_row):
        insert_row("open")
        insert_row("done", is_completed=1)
        res = client.get("/api/todos?complete=true")
        assert listed_descriptions(res) == ["done"]

    def test_due_and_complete_combined(self, client, insert_row):
        insert_row("overdue open", YESTERDAY)
        insert_row("overdue done", YESTERDAY, is_completed=1)
        insert_row("later open", TOMORROW)
        res = client.get("/api/todos?due=true&complete=false")
        assert listed_descriptions(res) == ["overdue open"]

    def test_created_todos_are_listed(self, client):
        created = client.post("/api/todos/create", json={"description": "Buy milk"}).json()
        listed = client.get("/api/todos").json()
        assert listed == [created]


class TestNotFound:
    def test_unknown_path(self, client):
        res = client.get("/api/unknown")
        assert res.status_code == 404
        assert res.json() == {"error": "not_found"}

    def test_wrong_method_on_known_path(self, client):
        res = client.post("/api/todos", json={"description": "x"})
        assert res.status_code == 404
        assert res.json() == {"error": "not_found"}

        res = client.get("/api/todos/create")
        assert res.status_code == 404
        assert res.json() == {"error": "not_found"}

    def test_trailing_slash_is_not_redirected(self, client):
        res = client.get("/api/todos/", follow_redirects=False)
        assert res.status_code == 404
        assert res.json() == {"error": "not_found"}

    def test_docs_routes_are_not_served(self, client):
        for path in ("/", "/docs", "/openapi.json"):
            res = client.get(path)
            assert res.status_code == 404
            assert res.json() == {"error": "not_found"}


class TestBadRequests:
    def test_create_missing_description(self, client):
        res = client.post("/api/todos/create", json={})
        assert res.status_code == 400
        body = res.json()
        assert "description" in body["error"]
        assert isinstance(body["detail"], list)

    def test_create_blank_description(self, client):
        res = client.post("/api/todos/create", json={"description": "   "})
        assert res.status_code == 400

    def test_create_malformed_json(self, client):
        res = client.post(
            "/api/todos/create",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert res.status_code == 400
        assert "error" in res.json()

    def test_create_bad_due_date(self, client):
        for bad in ("not-a-date", "2026-02-30", "2026-1-5", "2026-10-18T10:00:00"):
            res = client.post("/api/todos/create", json={"description": "x", "due_date": bad})
            assert res.status_code == 400, bad

    def test_list_bad_boolean(self, client):
        res = client.get("/api/todos?due=maybe")
        assert res.status_code == 400
        assert "due" in res.json()["error"]

    def test_list_only_accepts_true_or_false(self, client):
        for query in ("due=1", "due=yes", "due=on", "due=t", "complete=0", "complete=TRUE"):
            res = client.get(f"/api/todos?{query}")
            assert res.status_code == 400, query


class TestServerErrors:
    def test_unparseable_due_date_row_fails_listing(self, client, insert_row):
        insert_row("good", YESTERDAY)
        insert_row("bad", "not-a-date")
        res = client.get("/api/todos")
        assert res.status_code == 500
        assert "not-a-date" in res.json()["error"]

    def test_null_flag_row_fails_listing(self, client, insert_row):
        insert_row("bad", None, starred=None)
        res = client.get("/api/todos")
        assert res.status_code == 500
        assert "starred" in res.json()["error"]

    def test_missing_table_is_database_error(self, client, tmp_path, monkeypatch):
        monkeypatch.setenv("SQLITE_DB_PATH", str(tmp_path / "empty.db"))
        res = client.get("/api/todos")
        assert res.status_code == 500
        assert "no such table" in res.json()["error"]

        res = client.post("/api/todos/create", json={"description": "x"})
        assert res.status_code == 500
        assert "no such table" in res.json()["error"]

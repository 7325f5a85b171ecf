import pytest
from sqlalchemy.exc import OperationalError

from sqlstudio.models.attempt import Attempt
from sqlstudio.services.query_gate import (
    FORBIDDEN_KEYWORDS,
    FORBIDDEN_MESSAGE,
    QueryRejected,
    execute_query,
    find_forbidden_keyword,
)


@pytest.mark.parametrize("sql,expected", [
    ("SELECT * FROM products", None),
    ("drop table products", "DROP"),
    ("SELECT 'update_count' AS x", "UPDATE"),
    ("select * from t where note = 'please Insert coin'", "INSERT"),
    ("SELECT deleted_at FROM logs", "DELETE"),
    ("GRANT ALL ON x TO y", "GRANT"),
])
def test_find_forbidden_keyword_is_substring_and_case_insensitive(sql, expected):
    assert find_forbidden_keyword(sql) == expected


def test_every_forbidden_keyword_rejected_by_gate(seeded):
    for word in FORBIDDEN_KEYWORDS:
        with pytest.raises(QueryRejected) as exc:
            execute_query(seeded.sandbox_engine, f"SELECT 1 AS {word.lower()}_x")
        assert exc.value.keyword == word
        assert exc.value.message == FORBIDDEN_MESSAGE


def test_execute_returns_rows_and_count(seeded):
    result = execute_query(
        seeded.sandbox_engine,
        "SELECT product_name, stock FROM products WHERE category = 'Electronics' AND stock < 20 ORDER BY id",
    )
    assert result["rowCount"] == 2
    assert result["rows"] == [
        {"product_name": "MacBook Pro", "stock": 15},
        {"product_name": "USB-C Cable", "stock": 12},
    ]


def test_execute_passes_text_without_parameter_parsing(seeded):
    result = execute_query(seeded.sandbox_engine, "SELECT ':name' AS label, '100%' AS pct")
    assert result["rows"] == [{"label": ":name", "pct": "100%"}]


def test_store_error_message_is_verbatim(seeded):
    with pytest.raises(QueryRejected) as exc:
        execute_query(seeded.sandbox_engine, "SELECT * FROM no_such_table")
    assert exc.value.message == "no such table: no_such_table"
    assert isinstance(exc.value.__cause__, OperationalError)


def test_api_execute_success(client, seeded):
    res = client.post("/api/execute", json={"sql": "SELECT dept_name FROM departments ORDER BY id"})
    assert res.status_code == 200
    body = res.json()
    assert body["rowCount"] == 3
    assert [r["dept_name"] for r in body["rows"]] == ["Engineering", "Marketing", "Internship"]


def test_api_execute_rejects_false_positive(client, seeded, db):
    res = client.post(
        "/api/execute",
        json={"sql": "SELECT 'update_count' AS x", "user_email": "a@b.c", "assignment_id": "1"},
    )
    assert res.status_code == 400
    assert res.json()["error"] == FORBIDDEN_MESSAGE
    assert db.query(Attempt).count() == 0


def test_api_execute_store_error_is_400(client, seeded):
    res = client.post("/api/execute", json={"sql": "SELEC 1"})
    assert res.status_code == 400
    assert "syntax error" in res.json()["error"]


@pytest.mark.parametrize("body", [{}, {"sql": "   "}])
def test_api_execute_requires_sql(client, body):
    res = client.post("/api/execute", json=body)
    assert res.status_code == 400
    assert "sql" in res.json()["error"]

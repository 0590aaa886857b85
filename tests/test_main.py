"""
======================================
Comprehensive pytest suite for main.py
======================================

Sections:
---------
1. Unit tests - Argument parsing helpers
2. Integration tests - CLI against a SQLite database file
3. Edge case tests - Invalid input and exit codes

Available markers:
------------------
unit, integration, edge_case

How to Execute:
---------------
All tests:          python -m pytest tests/test_main.py -v
By category:        python -m pytest tests/test_main.py -m integration
"""

import json
import logging
from unittest.mock import patch

import pytest
from sqlalchemy import create_engine

from main import CommandError, main, parse_columns, parse_limit, parse_where
from sql.predicates import equal
from sql.query_builder import Limit
from utils.database_utils import DatabaseConnectionError

# ====================
# Fixtures
# ====================


@pytest.fixture
def mock_logging_setup():
    """Keep main() from replacing the root logger handlers."""
    with patch('main.setup_logging_from_config') as mock_setup:
        yield mock_setup


@pytest.fixture
def book_db(tmp_path):
    """SQLite file holding a populated t_book table; yields its URL."""
    url = f"sqlite:///{tmp_path / 'books.db'}"
    engine = create_engine(url)
    with engine.begin() as conn:
        conn.exec_driver_sql("CREATE TABLE t_book (id INTEGER PRIMARY KEY, name TEXT, tag INTEGER)")
        conn.exec_driver_sql(
            "INSERT INTO t_book (name, tag) VALUES (?,?),(?,?),(?,?)",
            ("Python", 1, "Golang", 2, "Ruby", 2)
        )
    engine.dispose()
    return url


def _json_lines(text):
    return [json.loads(line) for line in text.splitlines() if line.startswith('{')]


# ===============
# 1. UNIT TESTS
# ===============


@pytest.mark.unit
def test_parse_where_builds_equality_predicates():
    where = parse_where(["name=Python", " tag = 2"])

    assert where == {"name": equal("Python"), "tag": equal(" 2")}


@pytest.mark.unit
def test_parse_where_keeps_equals_in_value():
    assert parse_where(["expr=a=b"]) == {"expr": equal("a=b")}


@pytest.mark.unit
def test_parse_where_none():
    assert parse_where(None).is_empty()


@pytest.mark.unit
def test_parse_limit():
    assert parse_limit(None) is None
    assert parse_limit("5") == Limit(5)
    assert parse_limit("2,5") == Limit(2, 5)


@pytest.mark.unit
def test_parse_columns():
    assert parse_columns(None) == []
    assert parse_columns("id, name,") == ["id", "name"]


# ======================
# 2. INTEGRATION TESTS
# ======================


@pytest.mark.integration
def test_select_prints_matching_rows(book_db, capsys, mock_logging_setup):
    exit_code = main([
        "--url", book_db, "--select", "t_book",
        "--columns", "name", "--where", "tag=2",
    ])

    assert exit_code == 0
    assert _json_lines(capsys.readouterr().out) == [{"name": "Golang"}, {"name": "Ruby"}]
    mock_logging_setup.assert_called_once_with(log_level=None)


@pytest.mark.integration
def test_select_with_limit(book_db, capsys, mock_logging_setup):
    exit_code = main(["--url", book_db, "--select", "t_book", "--columns", "id", "--limit", "1,1"])

    assert exit_code == 0
    assert _json_lines(capsys.readouterr().out) == [{"id": 2}]


@pytest.mark.integration
def test_verbose_logs_executed_sql(book_db, caplog, mock_logging_setup):
    with caplog.at_level(logging.DEBUG, logger="events.sql_events"):
        main(["--url", book_db, "--select", "t_book", "--where", "name=Ruby", "--verbose"])

    mock_logging_setup.assert_called_once_with(log_level="DEBUG")
    assert "SELECT * FROM t_book WHERE name = ?" in caplog.text


@pytest.mark.integration
def test_check_succeeds_on_reachable_database(book_db, mock_logging_setup):
    assert main(["--url", book_db, "--check", "--retries", "1"]) == 0


# =================
# 3. EDGE CASES
# =================


@pytest.mark.edge_case
@pytest.mark.parametrize("item", ["name", "=Python"])
def test_parse_where_rejects_malformed_items(item):
    with pytest.raises(CommandError, match="FIELD=VALUE"):
        parse_where([item])


@pytest.mark.edge_case
@pytest.mark.parametrize("value", ["x", "1,2,3", "-1"])
def test_parse_limit_rejects_invalid_values(value):
    with pytest.raises(CommandError):
        parse_limit(value)


@pytest.mark.edge_case
def test_no_operation_returns_error(mock_logging_setup, capsys):
    assert main(["--url", "sqlite://"]) == 1


@pytest.mark.edge_case
def test_invalid_input_returns_error(book_db, mock_logging_setup):
    assert main(["--url", book_db, "--select", "t_book", "--where", "oops"]) == 1


@pytest.mark.edge_case
def test_missing_table_returns_error(book_db, mock_logging_setup, caplog):
    with caplog.at_level(logging.ERROR):
        exit_code = main(["--url", book_db, "--select", "t_missing"])

    assert exit_code == 1
    assert "Query failed" in caplog.text


@pytest.mark.edge_case
def test_check_failure_returns_error(mock_logging_setup):
    with patch('main.wait_for_database',
               side_effect=DatabaseConnectionError("did not become available")):
        assert main(["--url", "sqlite://", "--check"]) == 1


@pytest.mark.edge_case
def test_interrupt_returns_130(mock_logging_setup):
    with patch('main.wait_for_database', side_effect=KeyboardInterrupt):
        assert main(["--url", "sqlite://", "--check"]) == 130

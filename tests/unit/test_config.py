"""
Unit tests for configuration loading and schema file parsing.
"""

import pytest

from config import CONFIG_ENV_VAR, TableNames, get_config, merge_config, resolve_config_path
from DatabaseCreator import split_sql_statements
from utils import load_config, merge_dicts


def test_merge_dicts_is_recursive_and_copies():
    base = {"auth": {"failures_before_penalty": 1, "time_format": "%Y"}, "api": {"title": "x"}}
    merged = merge_dicts(base, {"auth": {"failures_before_penalty": 3}})

    assert merged == {"auth": {"failures_before_penalty": 3, "time_format": "%Y"}, "api": {"title": "x"}}
    assert base["auth"]["failures_before_penalty"] == 1


def test_merge_config_keeps_defaults():
    config = merge_config({"api": {"request_timeout_seconds": 2}})
    assert config["api"]["request_timeout_seconds"] == 2
    assert config["api"]["title"] == "Scriptorium API"
    assert config["auth"]["max_session_period"] == "24h"


def test_load_config_section(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("auth:\n  failures_before_penalty: 2\n", encoding="utf-8")

    assert load_config(str(path), "auth") == {"failures_before_penalty": 2}
    with pytest.raises(RuntimeError):
        load_config(str(path), "database")


def test_load_config_missing_file(tmp_path):
    with pytest.raises(RuntimeError, match="not found"):
        load_config(str(tmp_path / "absent.yaml"))


def test_config_path_from_environment(tmp_path, monkeypatch):
    path = tmp_path / "config.yaml"
    path.write_text("database:\n  name: blogdb\ntables:\n  content: bodies\n", encoding="utf-8")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))

    assert resolve_config_path() == str(path)
    config = get_config()
    assert config["database"]["name"] == "blogdb"
    assert config["database"]["port"] == 3306

    tables = TableNames.from_config(config)
    assert tables.content == "bodies"
    assert tables.blog_index == "blog_pages"


def test_split_sql_statements():
    sql = (
        "-- comment\n"
        "CREATE TABLE a (\n"
        "  id INT\n"
        ");\n"
        "\n"
        "CREATE TABLE b (id INT);\n"
    )
    statements = split_sql_statements(sql)
    assert len(statements) == 2
    assert statements[0].startswith("CREATE TABLE a")
    assert statements[1] == "CREATE TABLE b (id INT);"

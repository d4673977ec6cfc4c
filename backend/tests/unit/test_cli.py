"""
Unit Tests: CLI

Commands run against a temporary SQLite database.
"""

import json

import pytest
from sqlalchemy import create_engine, inspect

from dossier.__main__ import build_parser, main
from dossier.config import get_settings
from dossier.database import close_db


@pytest.fixture
def db_url(tmp_path, monkeypatch) -> str:
    url = f"sqlite:///{tmp_path / 'cli.db'}"
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("DATABASE_DSN", url)
    close_db()
    get_settings.cache_clear()
    yield url
    get_settings.cache_clear()
    close_db()


def test_parser_requires_command() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_init_db_creates_tables(db_url) -> None:
    assert main(["init-db"]) == 0

    engine = create_engine(db_url)
    try:
        assert set(inspect(engine).get_table_names()) == {"persons", "documents"}
    finally:
        engine.dispose()


def test_init_db_applies_yaml_schema_options(db_url, tmp_path) -> None:
    (tmp_path / "dossier.yaml").write_text("schema:\n  unique_document_code: true\n")

    assert main(["init-db"]) == 0

    engine = create_engine(db_url)
    try:
        indexes = {index["name"] for index in inspect(engine).get_indexes("documents")}
        assert "uq_documents_code" in indexes
    finally:
        engine.dispose()


def test_drop_db_requires_confirmation(db_url) -> None:
    assert main(["drop-db"]) == 2


def test_drop_db(db_url) -> None:
    main(["init-db"])

    assert main(["drop-db", "--yes"]) == 0

    engine = create_engine(db_url)
    try:
        assert inspect(engine).get_table_names() == []
    finally:
        engine.dispose()


def test_status_reports_health(db_url, capsys) -> None:
    assert main(["status"]) == 0

    info = json.loads(capsys.readouterr().out)
    assert info["healthy"] is True
    assert info["status"] == "connected"

import sqlite3

import pytest

from contact_desk.adapters.sqlite.migrator import SQLiteMigrator


@pytest.fixture
def temp_db_path(tmp_path):
    return str(tmp_path / "nested" / "test_db.sqlite")


def _tables(db_path):
    conn = sqlite3.connect(db_path)
    try:
        rows = conn.execute("SELECT name FROM sqlite_master WHERE type='table'").fetchall()
    finally:
        conn.close()
    return {row[0] for row in rows}


def test_migrator_applies_initial(temp_db_path):
    applied = SQLiteMigrator(temp_db_path).run_migrations()

    assert applied == ["001_initial.sql"]
    assert {"_migrations", "users", "kv_store"} <= _tables(temp_db_path)


def test_migrator_is_idempotent(temp_db_path):
    migrator = SQLiteMigrator(temp_db_path)
    migrator.run_migrations()

    assert migrator.run_migrations() == []

    conn = sqlite3.connect(temp_db_path)
    count = conn.execute("SELECT count(*) FROM _migrations").fetchone()[0]
    conn.close()
    assert count == 1


def test_migrator_skips_down_section(tmp_path):
    migrations = tmp_path / "migrations"
    migrations.mkdir()
    (migrations / "001_t.sql").write_text(
        "CREATE TABLE t (id INTEGER);\n-- Down\nDROP TABLE t;\n"
    )
    db_path = str(tmp_path / "db.sqlite")

    SQLiteMigrator(db_path, str(migrations)).run_migrations()

    assert "t" in _tables(db_path)


def test_broken_migration_raises(tmp_path):
    migrations = tmp_path / "migrations"
    migrations.mkdir()
    (migrations / "001_bad.sql").write_text("CREATE TABLE broken (;")

    with pytest.raises(RuntimeError, match="001_bad.sql"):
        SQLiteMigrator(str(tmp_path / "db.sqlite"), str(migrations)).run_migrations()

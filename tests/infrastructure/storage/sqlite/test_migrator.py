"""Unit tests for database migrator."""

from pathlib import Path

import aiosqlite
import pytest

from stockledger.infrastructure.storage.sqlite.migrations import (
    MigrationInfo,
    discover_migrations,
    get_migration_status,
    run_migrations,
)


class TestMigrationInfo:
    def test_from_file_parses_filename(self, tmp_path: Path):
        migration_file = tmp_path / "v001_initial_schema.sql"
        migration_file.write_text("SELECT 1;")

        info = MigrationInfo.from_file(migration_file)

        assert info.version == "001"
        assert info.name == "initial_schema"
        assert len(info.checksum) == 16

    def test_invalid_filename(self, tmp_path: Path):
        bad = tmp_path / "initial.sql"
        bad.write_text("SELECT 1;")
        with pytest.raises(ValueError):
            MigrationInfo.from_file(bad)


class TestDiscoverMigrations:
    def test_bundled_migrations(self):
        versions = [m.version for m in discover_migrations()]
        assert versions[0] == "001"
        assert versions == sorted(versions)

    def test_skips_invalid_names(self, tmp_path: Path):
        (tmp_path / "v002_second.sql").write_text("SELECT 2;")
        (tmp_path / "v001_first.sql").write_text("SELECT 1;")
        (tmp_path / "vx_broken.sql").write_text("SELECT 0;")

        assert [m.name for m in discover_migrations(tmp_path)] == ["first", "second"]


class TestRunMigrations:
    async def test_creates_snapshot_table(self, temp_db_path: Path):
        results = await run_migrations(temp_db_path)

        assert [r.version for r in results] == ["001"]
        async with aiosqlite.connect(temp_db_path) as conn:
            cursor = await conn.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name='snapshots'"
            )
            assert await cursor.fetchone() is not None

    async def test_second_run_applies_nothing(self, temp_db_path: Path):
        await run_migrations(temp_db_path)
        assert await run_migrations(temp_db_path) == []

    async def test_status(self, temp_db_path: Path):
        before = await get_migration_status(temp_db_path)
        assert before["exists"] is False
        assert "001" in before["pending_migrations"]

        await run_migrations(temp_db_path)
        after = await get_migration_status(temp_db_path)

        assert after["applied_migrations"] == ["001"]
        assert after["pending_migrations"] == []

"""Checks that the Alembic migrations build the schema the ORM models describe."""
import asyncio
from pathlib import Path

from alembic import command
from alembic.autogenerate import compare_metadata
from alembic.config import Config
from alembic.migration import MigrationContext
from sqlalchemy import inspect

from crm_db.connection import build_engine
from crm_db.models import Base

MIGRATIONS_DIR = Path(__file__).resolve().parent.parent / "crm_db" / "migrations"

# Column types reflect loosely on SQLite, so only structural drift is checked.
_STRUCTURAL_OPS = {"add_table", "remove_table", "add_column", "remove_column", "add_index", "remove_index"}


def _alembic_config() -> Config:
    config = Config()
    config.set_main_option("script_location", str(MIGRATIONS_DIR))
    return config


async def _inspect_schema(database_url: str) -> tuple[set[str], list]:
    engine = build_engine(database_url)

    def _collect(connection):
        tables = set(inspect(connection).get_table_names())
        diff = compare_metadata(MigrationContext.configure(connection), Base.metadata)
        return tables, diff

    try:
        async with engine.connect() as connection:
            return await connection.run_sync(_collect)
    finally:
        await engine.dispose()


def test_upgrade_head_matches_models(tmp_path, monkeypatch):
    database_url = f"sqlite+aiosqlite:///{tmp_path / 'migrated.db'}"
    monkeypatch.setenv("DATABASE_URL", database_url)

    command.upgrade(_alembic_config(), "head")

    tables, diff = asyncio.run(_inspect_schema(database_url))
    assert set(Base.metadata.tables) <= tables
    structural = [d for d in diff if isinstance(d, tuple) and d[0] in _STRUCTURAL_OPS]
    assert structural == []


def test_downgrade_base_drops_tables(tmp_path, monkeypatch):
    database_url = f"sqlite+aiosqlite:///{tmp_path / 'downgraded.db'}"
    monkeypatch.setenv("DATABASE_URL", database_url)
    config = _alembic_config()

    command.upgrade(config, "head")
    command.downgrade(config, "base")

    tables, _ = asyncio.run(_inspect_schema(database_url))
    assert tables.isdisjoint(Base.metadata.tables)

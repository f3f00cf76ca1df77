"""Tests for the command-line runner and the get_db session scope."""
from contextlib import asynccontextmanager
from unittest.mock import patch

import pytest
from sqlalchemy import func, select

from crm_db.models import Account, Lead


CLI_MODULE = "crm_examples"


def _patched_get_db(session_factory):
    @asynccontextmanager
    async def _get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
    return _get_db


class TestArgParser:
    def test_parses_uuid_arguments(self):
        from crm_examples import _build_arg_parser
        args = _build_arg_parser().parse_args([
            "update-account",
            "--id", "6f1c1a52-8d0b-4c43-9f3a-0d4f0e6c2b11",
            "--name", "Globex",
            "--industry", "Energy",
        ])
        assert args.command == "update-account"
        assert str(args.id) == "6f1c1a52-8d0b-4c43-9f3a-0d4f0e6c2b11"

    def test_rejects_malformed_uuid(self):
        from crm_examples import _build_arg_parser
        with pytest.raises(SystemExit):
            _build_arg_parser().parse_args(["create-contact", "--account-id", "not-a-uuid"])

    def test_case_count_defaults_to_three(self):
        from crm_examples import _build_arg_parser
        args = _build_arg_parser().parse_args([
            "insert-delete-cases", "--account-id", "6f1c1a52-8d0b-4c43-9f3a-0d4f0e6c2b11",
        ])
        assert args.count == 3


class TestImport:
    def test_import_leaves_logging_config_alone(self):
        import importlib
        import crm_examples
        with patch("logging.basicConfig") as mock_basic_config:
            importlib.reload(crm_examples)
        mock_basic_config.assert_not_called()


class TestRunOperation:
    @pytest.mark.asyncio
    async def test_create_named_account_reports_record(self, session_factory):
        from crm_examples import _build_arg_parser, run_operation
        args = _build_arg_parser().parse_args(
            ["create-named-account", "--name", "Acme", "--industry", "Tech"]
        )
        with patch(f"{CLI_MODULE}.get_db", _patched_get_db(session_factory)):
            result = await run_operation(args)

        assert result.operation == "create-named-account"
        assert [(a.name, a.industry) for a in result.accounts] == [("Acme", "Tech")]

    @pytest.mark.asyncio
    async def test_upsert_opportunities_lists_children(self, session_factory):
        from crm_examples import _build_arg_parser, run_operation
        args = _build_arg_parser().parse_args(
            ["upsert-opportunities", "--account-name", "Hooli", "--names", "A", "B", "A"]
        )
        with patch(f"{CLI_MODULE}.get_db", _patched_get_db(session_factory)):
            result = await run_operation(args)

        assert [a.name for a in result.accounts] == ["Hooli"]
        assert sorted(o.name for o in result.opportunities) == ["A", "B"]
        assert "Hooli" in result.model_dump_json()

    @pytest.mark.asyncio
    async def test_insert_delete_leads_commits_empty_table(self, session_factory):
        from crm_examples import _build_arg_parser, run_operation
        args = _build_arg_parser().parse_args(["insert-delete-leads", "--names", "Ada", "Grace"])
        with patch(f"{CLI_MODULE}.get_db", _patched_get_db(session_factory)):
            await run_operation(args)

        async with session_factory() as session:
            count = (await session.execute(select(func.count()).select_from(Lead))).scalar_one()
        assert count == 0


class TestGetDb:
    @pytest.mark.asyncio
    async def test_commits_on_success(self, session_factory):
        import crm_db.connection as connection
        with patch.object(connection, "AsyncSessionLocal", session_factory):
            async with connection.get_db() as session:
                session.add(Account(name="Committed"))

        async with session_factory() as session:
            result = await session.execute(select(Account.name))
            assert [row[0] for row in result.all()] == ["Committed"]

    @pytest.mark.asyncio
    async def test_rolls_back_and_reraises(self, session_factory):
        import crm_db.connection as connection
        with patch.object(connection, "AsyncSessionLocal", session_factory):
            with pytest.raises(RuntimeError, match="boom"):
                async with connection.get_db() as session:
                    session.add(Account(name="Discarded"))
                    await session.flush()
                    raise RuntimeError("boom")

        async with session_factory() as session:
            count = (await session.execute(select(func.count()).select_from(Account))).scalar_one()
        assert count == 0


class TestBuildEngine:
    def test_rejects_unsupported_driver(self):
        from crm_db.connection import build_engine
        with pytest.raises(RuntimeError, match="DATABASE_URL must use"):
            build_engine("mysql+pymysql://user:pw@localhost/db")

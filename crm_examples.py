"""Command-line runner for the CRM record-store examples.

Each subcommand runs one example operation inside a single session
(committed on success, rolled back on error) and prints the affected
records as JSON.

Usage:
    python crm_examples.py create-account
    python crm_examples.py create-named-account --name Acme --industry Tech
    python crm_examples.py upsert-account --name Acme
    python crm_examples.py upsert-opportunities --account-name Acme --names "Deal A" "Deal B"
    python crm_examples.py insert-delete-leads --names Ada Grace Linus
"""
import argparse
import asyncio
import logging
import sys
from uuid import UUID

from crm_db.connection import dispose_engine, get_db
import crm_db.repositories.accounts as account_repo
import crm_db.repositories.cases as case_repo
import crm_db.repositories.contacts as contact_repo
import crm_db.repositories.leads as lead_repo
import crm_db.repositories.opportunities as opportunity_repo
from crm_schemas import AccountRecord, ContactRecord, OperationResult, OpportunityRecord

logger = logging.getLogger(__name__)


async def run_operation(args: argparse.Namespace) -> OperationResult:
    """Dispatch one parsed subcommand against a fresh session."""
    result = OperationResult(operation=args.command)

    async with get_db() as session:
        if args.command == "create-account":
            account_id = await account_repo.create_default_account(session)
            result.record_id = account_id
            account = await account_repo.get_by_id(session, account_id)
            result.accounts = [AccountRecord.model_validate(account)]

        elif args.command == "create-named-account":
            await account_repo.create_account(session, args.name, args.industry)
            account = await account_repo.get_by_name(session, args.name)
            if account is not None:
                result.accounts = [AccountRecord.model_validate(account)]

        elif args.command == "update-account":
            await account_repo.update_account(session, args.id, args.name, args.industry)
            account = await account_repo.get_by_id(session, args.id)
            result.accounts = [AccountRecord.model_validate(account)]

        elif args.command == "upsert-account":
            account = await account_repo.upsert_by_name(session, args.name)
            result.record_id = account.id
            result.accounts = [AccountRecord.model_validate(account)]

        elif args.command == "create-contact":
            contact_id = await contact_repo.create_for_account(session, args.account_id)
            result.record_id = contact_id
            contact = await contact_repo.get_by_id(session, contact_id)
            result.contacts = [ContactRecord.model_validate(contact)]

        elif args.command == "rename-contact":
            await contact_repo.update_last_name(session, args.id, args.last_name)
            contact = await contact_repo.get_by_id(session, args.id)
            result.contacts = [ContactRecord.model_validate(contact)]

        elif args.command == "link-contacts":
            contacts = [await contact_repo.get_by_id(session, cid) for cid in args.ids]
            await contact_repo.link_to_accounts_by_last_name(session, contacts)
            result.contacts = [ContactRecord.model_validate(c) for c in contacts]

        elif args.command == "set-stage":
            await opportunity_repo.update_stage(session, args.id, args.stage)
            opportunity = await opportunity_repo.get_by_id(session, args.id)
            result.opportunities = [OpportunityRecord.model_validate(opportunity)]

        elif args.command == "normalize-opportunities":
            opportunities = [await opportunity_repo.get_by_id(session, oid) for oid in args.ids]
            await opportunity_repo.normalize(session, opportunities)
            result.opportunities = [OpportunityRecord.model_validate(o) for o in opportunities]

        elif args.command == "upsert-opportunities":
            await opportunity_repo.upsert_for_account(session, args.account_name, args.names)
            account = await account_repo.get_by_name(session, args.account_name)
            if account is not None:
                result.accounts = [AccountRecord.model_validate(account)]
                result.opportunities = [
                    OpportunityRecord.model_validate(o)
                    for o in await opportunity_repo.get_by_account(session, account.id)
                ]

        elif args.command == "insert-delete-leads":
            await lead_repo.insert_and_delete(session, args.names)

        elif args.command == "insert-delete-cases":
            await case_repo.insert_and_delete(session, args.account_id, args.count)

        else:
            raise ValueError(f"Unknown command: {args.command}")

    return result


async def main(args: argparse.Namespace) -> None:
    try:
        result = await run_operation(args)
    finally:
        await dispose_engine()
    print(result.model_dump_json(indent=2))


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run one CRM record-store example operation",
    )
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("create-account", help="Insert one account with a fixed name")

    named = sub.add_parser("create-named-account", help="Insert one account with a name and industry")
    named.add_argument("--name", required=True)
    named.add_argument("--industry", required=True)

    update = sub.add_parser("update-account", help="Change an account's name and industry")
    update.add_argument("--id", required=True, type=UUID)
    update.add_argument("--name", required=True)
    update.add_argument("--industry", required=True)

    upsert = sub.add_parser("upsert-account", help="Update the named account or create it")
    upsert.add_argument("--name", required=True)

    contact = sub.add_parser("create-contact", help="Insert a contact under an account")
    contact.add_argument("--account-id", required=True, type=UUID)

    rename = sub.add_parser("rename-contact", help="Change a contact's last name")
    rename.add_argument("--id", required=True, type=UUID)
    rename.add_argument("--last-name", required=True)

    link = sub.add_parser("link-contacts", help="Link contacts to accounts named after their last names")
    link.add_argument("--ids", required=True, nargs="+", type=UUID)

    stage = sub.add_parser("set-stage", help="Move an opportunity to a new stage")
    stage.add_argument("--id", required=True, type=UUID)
    stage.add_argument("--stage", required=True)

    normalize = sub.add_parser("normalize-opportunities", help="Reset stage, close date and amount")
    normalize.add_argument("--ids", required=True, nargs="+", type=UUID)

    upsert_opps = sub.add_parser("upsert-opportunities", help="Upsert opportunities under a named account")
    upsert_opps.add_argument("--account-name", required=True)
    upsert_opps.add_argument("--names", required=True, nargs="+")

    leads = sub.add_parser("insert-delete-leads", help="Insert leads then delete them")
    leads.add_argument("--names", required=True, nargs="+")

    cases = sub.add_parser("insert-delete-cases", help="Insert cases under an account then delete them")
    cases.add_argument("--account-id", required=True, type=UUID)
    cases.add_argument("--count", type=int, default=3, help="Number of cases (default: 3)")

    return parser


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    parser = _build_arg_parser()
    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    asyncio.run(main(args))

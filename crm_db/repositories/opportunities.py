"""Opportunity repository: stage changes, bulk normalization and upserts."""
import logging
from datetime import date
from decimal import Decimal
from uuid import UUID

from dateutil.relativedelta import relativedelta
from sqlalchemy import inspect, select
from sqlalchemy.ext.asyncio import AsyncSession

from crm_db.models import Account, Opportunity
from crm_db.repositories import accounts as accounts_repo

logger = logging.getLogger(__name__)

NORMALIZED_STAGE = "Qualification"
NORMALIZED_AMOUNT = Decimal("1000.00")
NORMALIZED_CLOSE_MONTHS = 3

NEW_OPPORTUNITY_STAGE = "Prospecting"


def _close_date() -> date:
    """Close date used for normalized and newly upserted opportunities."""
    return date.today() + relativedelta(months=NORMALIZED_CLOSE_MONTHS)


def external_key(account_name: str, opportunity_name: str) -> str:
    """Constructed identity used to deduplicate opportunity upserts."""
    return f"{account_name}-{opportunity_name}"


async def get_by_id(session: AsyncSession, opportunity_id: UUID) -> Opportunity:
    """Return the Opportunity with this id. Raises NoResultFound if missing."""
    result = await session.execute(
        select(Opportunity).where(Opportunity.id == opportunity_id)
    )
    return result.scalar_one()


async def get_by_account(session: AsyncSession, account_id: UUID) -> list[Opportunity]:
    """Return all opportunities for an account, oldest first."""
    result = await session.execute(
        select(Opportunity)
        .where(Opportunity.account_id == account_id)
        .order_by(Opportunity.created_at, Opportunity.name)
    )
    return list(result.scalars().all())


async def update_stage(session: AsyncSession, opportunity_id: UUID, stage_name: str) -> None:
    """Fetch an opportunity by id and move it to a new stage."""
    opportunity = await get_by_id(session, opportunity_id)
    opportunity.stage_name = stage_name
    await session.flush()


async def normalize(session: AsyncSession, opportunities: list[Opportunity]) -> None:
    """Reset stage, close date and amount on every opportunity.

    Only stored opportunities are accepted; an unsaved one raises ValueError
    before anything changes. Detached rows are re-attached and updated.
    All rows go out in a single flush: if the store rejects one, none are
    saved and the error reaches the caller.
    """
    for opportunity in opportunities:
        state = inspect(opportunity)
        if state.transient or state.pending:
            raise ValueError(f"Cannot normalize unsaved opportunity {opportunity.name!r}")

    close_date = _close_date()
    for opportunity in opportunities:
        if inspect(opportunity).detached:
            session.add(opportunity)
        opportunity.stage_name = NORMALIZED_STAGE
        opportunity.close_date = close_date
        opportunity.amount = NORMALIZED_AMOUNT

    await session.flush()
    logger.info("Normalized %d opportunities", len(opportunities))


async def upsert_for_account(
    session: AsyncSession, account_name: str, opportunity_names: list[str]
) -> None:
    """Upsert one opportunity per distinct name under the named account.

    The account is looked up by name and created when missing. Each
    opportunity is keyed by external_key(account_name, name); repeated names
    collapse to one row and rows already stored under the key are refreshed
    instead of duplicated.
    """
    account = await accounts_repo.get_by_name(session, account_name)
    if account is None:
        account = Account(name=account_name)
        session.add(account)
        await session.flush()

    # dict keeps first-seen order
    wanted = {
        external_key(account_name, name): name for name in opportunity_names
    }
    existing = {}
    if wanted:
        result = await session.execute(
            select(Opportunity).where(Opportunity.external_key.in_(list(wanted)))
        )
        existing = {opp.external_key: opp for opp in result.scalars().all()}

    close_date = _close_date()
    created = 0
    for key, name in wanted.items():
        opportunity = existing.get(key)
        if opportunity is None:
            session.add(
                Opportunity(
                    name=name,
                    account_id=account.id,
                    stage_name=NEW_OPPORTUNITY_STAGE,
                    close_date=close_date,
                    external_key=key,
                )
            )
            created += 1
        else:
            opportunity.name = name
            opportunity.account_id = account.id

    await session.flush()
    logger.info(
        "Upserted %d opportunities for account %s (%d new)",
        len(wanted), account.id, created,
    )

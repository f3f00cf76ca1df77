"""Account repository: inserts, field updates and upsert-by-name."""
import logging
from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from crm_db.models import Account

logger = logging.getLogger(__name__)

DEFAULT_ACCOUNT_NAME = "Acme Corporation"
UPDATED_DESCRIPTION = "Updated Account"


async def get_by_id(session: AsyncSession, account_id: UUID) -> Account:
    """Return the Account with this id. Raises NoResultFound if missing."""
    result = await session.execute(select(Account).where(Account.id == account_id))
    return result.scalar_one()


async def get_by_name(session: AsyncSession, name: str) -> Optional[Account]:
    """Return the earliest-created Account with this exact name, or None."""
    result = await session.execute(
        select(Account)
        .where(Account.name == name)
        .order_by(Account.created_at, Account.id)
        .limit(1)
    )
    return result.scalar_one_or_none()


async def create_default_account(session: AsyncSession) -> UUID:
    """Insert one account with a fixed name and return its generated id."""
    account = Account(name=DEFAULT_ACCOUNT_NAME)
    session.add(account)
    await session.flush()
    logger.info("Created account %s (%s)", account.id, account.name)
    return account.id


async def create_account(session: AsyncSession, name: str, industry: str) -> None:
    """Insert one account with the given name and industry."""
    account = Account(name=name, industry=industry)
    session.add(account)
    await session.flush()
    logger.info("Created account %s (%s, %s)", account.id, name, industry)


async def update_account(
    session: AsyncSession, account_id: UUID, name: str, industry: str
) -> None:
    """Fetch an account by id and overwrite its name and industry."""
    account = await get_by_id(session, account_id)
    account.name = name
    account.industry = industry
    await session.flush()


async def upsert_by_name(session: AsyncSession, name: str) -> Account:
    """Find an account by name and mark it updated, or create it.

    An existing match gets its description set to "Updated Account"; a miss
    inserts a new account carrying only the name.
    """
    account = await get_by_name(session, name)
    if account is not None:
        account.description = UPDATED_DESCRIPTION
    else:
        account = Account(name=name)
        session.add(account)
    await session.flush()
    return account

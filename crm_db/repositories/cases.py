"""Case repository: bulk insert-then-delete under an account."""
import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from crm_db.models import Case

logger = logging.getLogger(__name__)


async def insert_and_delete(session: AsyncSession, account_id: UUID, count: int) -> None:
    """Insert `count` cases for the account in one flush, then delete them all."""
    cases = [
        Case(account_id=account_id, subject=f"Case {i + 1}")
        for i in range(count)
    ]
    session.add_all(cases)
    await session.flush()
    logger.info("Inserted %d cases for account %s", len(cases), account_id)

    for case in cases:
        await session.delete(case)
    await session.flush()
    logger.info("Deleted %d cases for account %s", len(cases), account_id)

"""Lead repository: bulk insert-then-delete example."""
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from crm_db.models import Lead

logger = logging.getLogger(__name__)

DEFAULT_COMPANY = "Individual"


async def insert_and_delete(session: AsyncSession, names: list[str]) -> None:
    """Insert one lead per name in a single flush, then delete them all."""
    leads = [Lead(last_name=name, company=DEFAULT_COMPANY) for name in names]
    session.add_all(leads)
    await session.flush()
    logger.info("Inserted %d leads", len(leads))

    for lead in leads:
        await session.delete(lead)
    await session.flush()
    logger.info("Deleted %d leads", len(leads))

"""Contact repository: linked inserts, renames and account linking."""
import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from crm_db.models import Contact
from crm_db.repositories import accounts as accounts_repo

logger = logging.getLogger(__name__)

DEFAULT_FIRST_NAME = "Joe"
DEFAULT_LAST_NAME = "Smith"


async def get_by_id(session: AsyncSession, contact_id: UUID) -> Contact:
    """Return the Contact with this id. Raises NoResultFound if missing."""
    result = await session.execute(select(Contact).where(Contact.id == contact_id))
    return result.scalar_one()


async def create_for_account(session: AsyncSession, account_id: UUID) -> UUID:
    """Insert a contact under the given account and return its generated id."""
    contact = Contact(
        first_name=DEFAULT_FIRST_NAME,
        last_name=DEFAULT_LAST_NAME,
        account_id=account_id,
    )
    session.add(contact)
    await session.flush()
    logger.info("Created contact %s under account %s", contact.id, account_id)
    return contact.id


async def update_last_name(session: AsyncSession, contact_id: UUID, last_name: str) -> None:
    """Fetch a contact by id and change its last name."""
    contact = await get_by_id(session, contact_id)
    contact.last_name = last_name
    await session.flush()


async def link_to_accounts_by_last_name(session: AsyncSession, contacts: list[Contact]) -> None:
    """Point every contact at the account named after its last name.

    Runs one account upsert per contact, then saves all contacts at once.
    Kept as an example of the per-row lookup pattern; it does not scale.
    """
    for contact in contacts:
        account = await accounts_repo.upsert_by_name(session, contact.last_name)
        contact.account_id = account.id

    session.add_all(contacts)
    await session.flush()
    logger.info("Linked %d contacts to accounts by last name", len(contacts))

"""Contact repository — linking contacts to accounts by last name."""
import logging
from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from db.models import Contact
from db.repositories import accounts as accounts_repo

logger = logging.getLogger(__name__)


async def get_by_account(session: AsyncSession, account_id: UUID) -> list[Contact]:
    """Return all contacts linked to an account."""
    result = await session.execute(
        select(Contact).where(Contact.account_id == account_id).order_by(Contact.created_at)
    )
    return list(result.scalars().all())


async def upsert(session: AsyncSession, contacts: Sequence[Contact]) -> list[Contact]:
    """Insert new contacts and update loaded ones in a single flush."""
    session.add_all(contacts)
    await session.flush()
    return list(contacts)


async def link_to_accounts(session: AsyncSession, contacts: Sequence[Contact]) -> None:
    """Give every contact an account named after its last name, then save them.

    Each contact resolves its account through accounts.find_or_create, one
    lookup per contact. Two contacts sharing a last name end up on the same
    account because the second lookup finds the first one's write.
    """
    for contact in contacts:
        account = await accounts_repo.find_or_create(session, contact.last_name)
        contact.account_id = account.id
    await upsert(session, contacts)
    logger.info("Linked %d contact(s) to accounts", len(contacts))

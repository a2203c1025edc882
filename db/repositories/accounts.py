"""Account repository — name lookups, find-or-create and the delete demo."""
import logging
from typing import Iterable, Optional, Sequence
from uuid import UUID

from sqlalchemy import delete as sa_delete
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from db.models import CREATED_MARKER, UPDATED_MARKER, Account

logger = logging.getLogger(__name__)


async def get_by_name(session: AsyncSession, name: str) -> Optional[Account]:
    """Return the oldest Account with exactly this name, or None."""
    result = await session.execute(
        select(Account)
        .where(Account.name == name)
        .order_by(Account.created_at)
        .limit(1)
    )
    return result.scalar_one_or_none()


async def get_by_names(session: AsyncSession, names: Iterable[str]) -> list[Account]:
    """Return every Account whose name is in names, oldest first."""
    names = list(names)
    if not names:
        return []
    result = await session.execute(
        select(Account).where(Account.name.in_(names)).order_by(Account.created_at)
    )
    return list(result.scalars().all())


async def count_by_names(session: AsyncSession, names: Iterable[str]) -> int:
    names = list(names)
    if not names:
        return 0
    result = await session.execute(
        select(func.count()).select_from(Account).where(Account.name.in_(names))
    )
    return result.scalar_one()


async def upsert(session: AsyncSession, accounts: Sequence[Account]) -> list[Account]:
    """Insert new accounts and update loaded ones in a single flush.

    Accounts without an identity are inserted and get one assigned; accounts
    already in the session are written back in place.
    """
    session.add_all(accounts)
    await session.flush()
    return list(accounts)


async def delete(session: AsyncSession, account_ids: Iterable[UUID]) -> int:
    """Delete accounts by id. Returns the number of rows removed."""
    account_ids = list(account_ids)
    if not account_ids:
        return 0
    result = await session.execute(
        sa_delete(Account).where(Account.id.in_(account_ids))
    )
    await session.flush()
    logger.info("Deleted %d account(s)", result.rowcount)
    return result.rowcount


async def find_or_create(session: AsyncSession, name: str) -> Account:
    """Return the account named name, creating it if none exists.

    An existing account gets its description set to the "updated" marker; a
    new one is created with the "created" marker. Either way the account is
    written once and comes back with a durable id. Any string is a literal
    key, including "".
    """
    account = await get_by_name(session, name)
    if account is None:
        account = Account(name=name, description=CREATED_MARKER)
        logger.info("Creating account %r", name)
    else:
        account.description = UPDATED_MARKER
        logger.info("Updating existing account %r (%s)", name, account.id)
    await upsert(session, [account])
    return account


async def insert_then_delete(session: AsyncSession, names: Iterable[str]) -> int:
    """Create one account per name, then delete them all.

    Demonstrates the insert and delete primitives back to back. Returns the
    number of accounts removed, which equals the number created.
    """
    created = await upsert(session, [Account(name=n) for n in names])
    logger.info("Inserted %d account(s) for the delete demo", len(created))
    return await delete(session, [a.id for a in created])

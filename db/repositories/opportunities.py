"""Opportunity repository — create only the opportunities an account lacks."""
import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterable, Sequence
from uuid import UUID

from dateutil.relativedelta import relativedelta
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from db.models import CREATED_MARKER, Account, Opportunity

logger = logging.getLogger(__name__)

DEFAULT_STAGE = "Prospecting"
DEFAULT_AMOUNT = Decimal("10000")
DEFAULT_CLOSE_MONTHS = 3


async def get_by_account(session: AsyncSession, account_id: UUID) -> list[Opportunity]:
    """Return all opportunities for an account, oldest first."""
    result = await session.execute(
        select(Opportunity)
        .where(Opportunity.account_id == account_id)
        .order_by(Opportunity.created_at)
    )
    return list(result.scalars().all())


async def get_existing_names(
    session: AsyncSession, account_id: UUID, names: Iterable[str]
) -> set[str]:
    """Return which of names already exist as opportunities on the account."""
    names = list(names)
    if not names:
        return set()
    result = await session.execute(
        select(Opportunity.name)
        .where(Opportunity.account_id == account_id)
        .where(Opportunity.name.in_(names))
    )
    return {row[0] for row in result.all()}


async def create_missing(
    session: AsyncSession, account_name: str, opportunity_names: Sequence[str]
) -> None:
    """Create the named opportunities the account does not have yet.

    The account is looked up by name and created if missing. Existing
    opportunities are left untouched. Missing ones get the default stage, a
    close date three months out and the default amount, and are written in a
    single flush. A name repeated in opportunity_names is created once per
    occurrence when it does not exist yet.
    """
    result = await session.execute(
        select(Account)
        .where(Account.name == account_name)
        .order_by(Account.created_at)
        .limit(1)
    )
    account = result.scalar_one_or_none()
    if account is None:
        account = Account(name=account_name, description=CREATED_MARKER)
        session.add(account)
        await session.flush()
        logger.info("Created account %r for opportunities", account_name)

    existing = await get_existing_names(session, account.id, opportunity_names)
    close_date = datetime.now(timezone.utc).date() + relativedelta(months=DEFAULT_CLOSE_MONTHS)

    missing = []
    for name in opportunity_names:
        if name in existing:
            logger.debug("Opportunity %r already exists on %r, skipping", name, account_name)
            continue
        missing.append(
            Opportunity(
                name=name,
                stage_name=DEFAULT_STAGE,
                close_date=close_date,
                amount=DEFAULT_AMOUNT,
                account_id=account.id,
            )
        )

    if not missing:
        return
    session.add_all(missing)
    await session.flush()
    logger.info("Created %d opportunity(ies) on %r", len(missing), account_name)

"""SQLAlchemy 2.0 ORM models for the CRM exercises.

Covers 3 tables:
  - accounts: the parent record, keyed in practice by name
  - contacts: people linked to an account
  - opportunities: deals linked to an account

Names are not unique at the schema level. The repositories keep at most one
account per name by querying before they write.
"""

import uuid
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Optional

from sqlalchemy import (
    Date,
    DateTime,
    ForeignKey,
    Index,
    Numeric,
    Text,
    Uuid,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


# ---------------------------------------------------------------------------
# Shared base
# ---------------------------------------------------------------------------


class Base(DeclarativeBase):
    pass


def _utcnow() -> datetime:
    # Stamped client-side so rows flushed together keep their insertion order.
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Marker values written to Account.description by the find-or-create helpers
# ---------------------------------------------------------------------------

CREATED_MARKER = "created"
UPDATED_MARKER = "updated"


class Account(Base):
    """accounts — the parent company record."""

    __tablename__ = "accounts"
    __table_args__ = (Index("ix_accounts_name", "name"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    industry: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    billing_city: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False
    )

    # Relationships
    contacts: Mapped[list["Contact"]] = relationship(
        "Contact", back_populates="account"
    )
    opportunities: Mapped[list["Opportunity"]] = relationship(
        "Opportunity", back_populates="account"
    )

    def __repr__(self) -> str:
        return f"<Account {self.name!r} id={self.id}>"


class Contact(Base):
    """contacts — a person, optionally linked to an account."""

    __tablename__ = "contacts"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    first_name: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    last_name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    account_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid, ForeignKey("accounts.id"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False
    )

    # Relationship
    account: Mapped[Optional["Account"]] = relationship(
        "Account", back_populates="contacts"
    )


class Opportunity(Base):
    """opportunities — a deal scoped to an account."""

    __tablename__ = "opportunities"
    __table_args__ = (Index("ix_opportunities_account_name", "account_id", "name"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    stage_name: Mapped[str] = mapped_column(Text, nullable=False)
    close_date: Mapped[date] = mapped_column(Date, nullable=False)
    amount: Mapped[Optional[Decimal]] = mapped_column(Numeric(18, 2), nullable=True)
    account_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid, ForeignKey("accounts.id"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False
    )

    # Relationship
    account: Mapped[Optional["Account"]] = relationship(
        "Account", back_populates="opportunities"
    )

"""Input and output schemas for CRM records."""
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from db.models import Contact


class ContactIn(BaseModel):
    first_name: Optional[str] = None
    last_name: str
    email: Optional[str] = None

    def to_model(self) -> Contact:
        """Build an unsaved Contact ORM object."""
        return Contact(
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email.lower().strip() if self.email else None,
        )


class ContactBatchIn(BaseModel):
    contacts: List[ContactIn] = Field(min_length=1)


class AccountOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    industry: Optional[str] = None
    description: Optional[str] = None
    billing_city: Optional[str] = None
    created_at: datetime


class ContactOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    first_name: Optional[str] = None
    last_name: str
    email: Optional[str] = None
    account_id: Optional[UUID] = None


class OpportunityOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    stage_name: str
    close_date: date
    amount: Optional[Decimal] = None
    account_id: Optional[UUID] = None

"""Unit tests for the record schemas."""
import uuid
from datetime import date, datetime, timezone
from decimal import Decimal

import pytest
from pydantic import ValidationError

from db.models import Account, Opportunity
from schemas import AccountOut, ContactBatchIn, ContactIn, OpportunityOut


class TestContactIn:
    def test_to_model_normalizes_email(self):
        contact = ContactIn(first_name="Jane", last_name="Doe", email="  Jane@Acme.COM ").to_model()
        assert contact.email == "jane@acme.com"
        assert contact.last_name == "Doe"
        assert contact.account_id is None

    def test_last_name_required(self):
        with pytest.raises(ValidationError):
            ContactIn(first_name="Jane")

    def test_empty_last_name_is_allowed(self):
        assert ContactIn(last_name="").to_model().last_name == ""

    def test_batch_rejects_empty_list(self):
        with pytest.raises(ValidationError):
            ContactBatchIn(contacts=[])


class TestReadModels:
    def test_account_out_from_orm(self):
        account = Account(
            id=uuid.uuid4(),
            name="Acme",
            description="created",
            created_at=datetime(2026, 10, 19, tzinfo=timezone.utc),
        )
        out = AccountOut.model_validate(account)
        assert out.name == "Acme"
        assert out.description == "created"
        assert out.model_dump(mode="json")["id"] == str(account.id)

    def test_opportunity_out_from_orm(self):
        opp = Opportunity(
            id=uuid.uuid4(),
            name="Renewal",
            stage_name="Prospecting",
            close_date=date(2027, 1, 19),
            amount=Decimal("10000"),
        )
        dumped = OpportunityOut.model_validate(opp).model_dump(mode="json")
        assert dumped["close_date"] == "2027-01-19"
        assert dumped["account_id"] is None

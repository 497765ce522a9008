"""RecordRepository integration tests (SQLite)."""

from datetime import date

import pytest

from app.domain.exceptions import UnknownEntityTypeException, ValidationException
from app.infrastructure.persistence.repositories import RecordRepository


async def test_get_returns_columns_and_is_tenant_scoped(db_session, seed_lead, tenant_id) -> None:
    lead = await seed_lead(first_name="Ada", email="ada@example.com", score=10)
    repo = RecordRepository(db_session)

    record = await repo.get(tenant_id, "lead", lead.id)

    assert record["first_name"] == "Ada"
    assert record["score"] == 10
    assert record["tenant_id"] == tenant_id
    assert await repo.get("tenant-globex", "lead", lead.id) is None


async def test_update_fields_coerces_text_to_column_type(db_session, seed_lead, tenant_id) -> None:
    lead = await seed_lead(first_name="Ada")
    repo = RecordRepository(db_session)

    updated = await repo.update_fields(
        tenant_id, "lead", lead.id, {"score": "42", "annual_revenue": "1500.5", "status": "hot"}
    )

    assert updated is True
    record = await repo.get(tenant_id, "lead", lead.id)
    assert record["score"] == 42
    assert record["annual_revenue"] == 1500.5
    assert record["status"] == "hot"


async def test_blank_text_clears_non_text_column(db_session, seed_lead, tenant_id) -> None:
    lead = await seed_lead(score=5)
    repo = RecordRepository(db_session)

    await repo.update_fields(tenant_id, "lead", lead.id, {"score": ""})

    assert (await repo.get(tenant_id, "lead", lead.id))["score"] is None


async def test_update_missing_record_returns_false(db_session, tenant_id) -> None:
    repo = RecordRepository(db_session)
    assert await repo.update_fields(tenant_id, "lead", "missing", {"status": "x"}) is False


async def test_update_rejects_unknown_protected_and_invalid_values(
    db_session, seed_lead, tenant_id
) -> None:
    lead = await seed_lead()
    repo = RecordRepository(db_session)

    with pytest.raises(ValidationException, match="Unknown field 'colour' for lead"):
        await repo.update_fields(tenant_id, "lead", lead.id, {"colour": "red"})
    with pytest.raises(ValidationException, match="Unknown field 'tenant_id'"):
        await repo.update_fields(tenant_id, "lead", lead.id, {"tenant_id": "tenant-globex"})
    with pytest.raises(ValidationException, match="Invalid value"):
        await repo.update_fields(tenant_id, "lead", lead.id, {"score": "high"})


async def test_unknown_entity_type(db_session, tenant_id) -> None:
    with pytest.raises(UnknownEntityTypeException):
        await RecordRepository(db_session).get(tenant_id, "opportunity", "x")


async def test_insert_sets_tenant_and_coerces(db_session, tenant_id) -> None:
    repo = RecordRepository(db_session)

    deal_id = await repo.insert(
        tenant_id,
        "deal",
        {"name": "Renewal", "amount": "2500", "close_date": "2026-06-30", "tenant_id": "evil"},
    )

    deal = await repo.get(tenant_id, "deal", deal_id)
    assert deal["name"] == "Renewal"
    assert deal["amount"] == 2500.0
    assert deal["close_date"] == date(2026, 6, 30)
    assert deal["tenant_id"] == tenant_id


async def test_count_owned_by(db_session, seed_lead, tenant_id) -> None:
    await seed_lead(owner_id="u1")
    await seed_lead(owner_id="u1")
    await seed_lead(owner_id="u2")
    await seed_lead(owner_id="u1", tenant_id="tenant-globex")

    counts = await RecordRepository(db_session).count_owned_by(
        tenant_id, "lead", ["u1", "u2", "u3"]
    )

    assert counts == {"u1": 2, "u2": 1, "u3": 0}

"""CRM record repository (implements IRecordStore).

Resolves a workflow entity type to its ORM model and reads or writes
records by column name. Values arriving as resolved template text are
coerced to the column's Python type before they are written.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from sqlalchemy import func, inspect as sa_inspect, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.exceptions import UnknownEntityTypeException, ValidationException
from app.infrastructure.persistence.models.crm import ENTITY_MODELS
from app.infrastructure.persistence.models.mixins import MultiTenantModel

# Managed by the repository, never written from action config
_PROTECTED_COLUMNS = frozenset({"id", "tenant_id", "created_at", "updated_at"})

_TRUE_STRINGS = frozenset({"true", "1", "yes", "y", "on"})
_FALSE_STRINGS = frozenset({"false", "0", "no", "n", "off"})


def _model_for(entity_type: str) -> type[MultiTenantModel]:
    model = ENTITY_MODELS.get(entity_type)
    if model is None:
        raise UnknownEntityTypeException(entity_type)
    return model


def _coerce(python_type: type, field_name: str, value: Any) -> Any:
    """Coerce value to python_type. Blank text means NULL for non-text columns."""
    if value is None or type(value) is python_type:
        return value
    if python_type is str:
        return str(value)
    if isinstance(value, str) and value.strip() == "":
        return None
    try:
        if python_type is bool:
            text = str(value).strip().lower()
            if text in _TRUE_STRINGS:
                return True
            if text in _FALSE_STRINGS:
                return False
            raise ValueError(text)
        if python_type is int:
            number = float(value)
            if not number.is_integer():
                raise ValueError(value)
            return int(number)
        if python_type is float:
            return float(value)
        if python_type is datetime:
            return value if isinstance(value, datetime) else datetime.fromisoformat(str(value))
        if python_type is date:
            if isinstance(value, datetime):
                return value.date()
            return value if isinstance(value, date) else date.fromisoformat(str(value)[:10])
    except (TypeError, ValueError):
        raise ValidationException(
            f"Invalid value {value!r} for field '{field_name}'", field=field_name
        ) from None
    return value


class RecordRepository:
    """Generic access to lead/contact/deal/account rows by entity type."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    @staticmethod
    def _writable_values(
        model: type[MultiTenantModel], entity_type: str, values: dict[str, Any]
    ) -> dict[str, Any]:
        columns = {c.key: c for c in sa_inspect(model).columns}
        coerced: dict[str, Any] = {}
        for name, value in values.items():
            column = columns.get(name)
            if column is None or name in _PROTECTED_COLUMNS:
                raise ValidationException(
                    f"Unknown field '{name}' for {entity_type}", field=name
                )
            coerced[name] = _coerce(column.type.python_type, name, value)
        return coerced

    async def get(
        self, tenant_id: str, entity_type: str, entity_id: str
    ) -> dict[str, Any] | None:
        model = _model_for(entity_type)
        result = await self.db.execute(
            select(model).where(model.id == entity_id, model.tenant_id == tenant_id)
            .execution_options(populate_existing=True)
        )
        row = result.scalar_one_or_none()
        if row is None:
            return None
        return {c.key: getattr(row, c.key) for c in sa_inspect(model).columns}

    async def update_fields(
        self,
        tenant_id: str,
        entity_type: str,
        entity_id: str,
        values: dict[str, Any],
    ) -> bool:
        model = _model_for(entity_type)
        writable = self._writable_values(model, entity_type, values)
        async with self.db.begin_nested():
            result = await self.db.execute(
                update(model)
                .where(model.id == entity_id, model.tenant_id == tenant_id)
                .values(**writable)
                .execution_options(synchronize_session=False)
            )
        return bool(result.rowcount)

    async def insert(
        self, tenant_id: str, entity_type: str, values: dict[str, Any]
    ) -> str:
        model = _model_for(entity_type)
        writable = self._writable_values(
            model, entity_type, {k: v for k, v in values.items() if k != "tenant_id"}
        )
        record = model(**writable)
        record.tenant_id = tenant_id
        async with self.db.begin_nested():
            self.db.add(record)
            await self.db.flush()
        return record.id

    async def count_owned_by(
        self, tenant_id: str, entity_type: str, owner_ids: list[str]
    ) -> dict[str, int]:
        model = _model_for(entity_type)
        counts = {owner_id: 0 for owner_id in owner_ids}
        if not owner_ids:
            return counts
        result = await self.db.execute(
            select(model.owner_id, func.count(model.id))
            .where(model.tenant_id == tenant_id, model.owner_id.in_(owner_ids))
            .group_by(model.owner_id)
        )
        for owner_id, count in result.all():
            counts[owner_id] = count
        return counts

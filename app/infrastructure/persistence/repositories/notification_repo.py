"""Notification repository for workflow send_notification action."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.persistence.models.notification import Notification


class NotificationRepository:
    """Inserts unread system notifications. Implements INotificationRepository."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def create_many(
        self,
        tenant_id: str,
        user_ids: list[str],
        title: str,
        body: str,
        entity_type: str,
        entity_id: str,
    ) -> int:
        """Insert one notification per user in a single savepoint (all or nothing)."""
        rows = [
            Notification(
                tenant_id=tenant_id,
                user_id=user_id,
                title=title,
                body=body,
                type="system",
                entity_type=entity_type,
                entity_id=entity_id,
                read=False,
            )
            for user_id in user_ids
        ]
        async with self.db.begin_nested():
            self.db.add_all(rows)
            await self.db.flush()
        return len(rows)

from __future__ import annotations
from typing import Any
from sqlalchemy import select
from liftbook.models import ActivityFeedItem, ActivityType
from liftbook.repositories.base import BaseRepository

class ActivityRepository(BaseRepository[ActivityFeedItem]):
    """Append-only writer for the activity feed."""
    model = ActivityFeedItem

    def record(
        self,
        user_id: int,
        activity_type: ActivityType,
        *,
        reference_id: int | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> ActivityFeedItem:
        item = ActivityFeedItem(
            user_id=user_id,
            activity_type=activity_type,
            reference_id=reference_id,
            details=metadata or {},
        )
        self.db.add(item)
        self.db.flush()
        return item

    def list_by_user(self, user_id: int, *, activity_type: ActivityType | None = None) -> list[ActivityFeedItem]:
        stmt = select(ActivityFeedItem).where(ActivityFeedItem.user_id == user_id)
        if activity_type is not None:
            stmt = stmt.where(ActivityFeedItem.activity_type == activity_type)
        return list(self.db.execute(stmt.order_by(ActivityFeedItem.id.asc())).scalars().all())

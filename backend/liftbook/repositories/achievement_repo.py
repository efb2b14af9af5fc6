# liftbook/repositories/achievement_repo.py
from __future__ import annotations
from typing import Iterable, Optional

from sqlalchemy import select, update

from liftbook.models import Achievement, UserAchievement
from liftbook.repositories.base import BaseRepository

class AchievementRepository(BaseRepository[Achievement]):
    model = Achievement

    # CATALOG
    def get_by_code(self, code: str) -> Optional[Achievement]:
        return self.db.execute(select(Achievement).where(Achievement.code == code)).scalar_one_or_none()

    def list_catalog(self, *, include_hidden: bool = True) -> list[Achievement]:
        stmt = select(Achievement).order_by(Achievement.sort_order.asc(), Achievement.id.asc())
        if not include_hidden:
            stmt = stmt.where(Achievement.is_hidden.is_(False))
        return list(self.db.execute(stmt).scalars().all())

    # UNLOCKS
    def earned_ids(self, user_id: int) -> set[int]:
        stmt = select(UserAchievement.achievement_id).where(UserAchievement.user_id == user_id)
        return set(self.db.execute(stmt).scalars().all())

    def list_earned(self, user_id: int) -> list[UserAchievement]:
        stmt = select(UserAchievement).where(UserAchievement.user_id == user_id)\
                                      .order_by(UserAchievement.earned_at.desc(), UserAchievement.id.desc())
        return list(self.db.execute(stmt).scalars().all())

    def list_unnotified(self, user_id: int) -> list[UserAchievement]:
        stmt = select(UserAchievement).where(
            UserAchievement.user_id == user_id, UserAchievement.notified.is_(False)
        ).order_by(UserAchievement.earned_at.asc(), UserAchievement.id.asc())
        return list(self.db.execute(stmt).scalars().all())

    def unlock(self, user_id: int, achievement_id: int) -> UserAchievement:
        ua = UserAchievement(user_id=user_id, achievement_id=achievement_id, notified=False)
        return self.add_and_refresh(ua)

    def mark_notified(self, user_id: int, ids: Iterable[int]) -> int:
        ids = list(ids)
        if not ids:
            return 0
        stmt = update(UserAchievement).where(
            UserAchievement.user_id == user_id, UserAchievement.id.in_(ids)
        ).values(notified=True)
        return self.db.execute(stmt).rowcount

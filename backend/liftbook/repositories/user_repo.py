# liftbook/repositories/user_repo.py
from __future__ import annotations
from typing import Optional

from sqlalchemy import select, func

from liftbook.models import User
from liftbook.repositories.base import BaseRepository

class UserRepository(BaseRepository[User]):
    model = User

    def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(User).where(func.lower(User.email) == email.lower())
        return self.db.execute(stmt).scalar_one_or_none()

    def lock(self, user_id: int) -> Optional[User]:
        """SELECT ... FOR UPDATE on the user row; serialises one user's writers."""
        stmt = select(User).where(User.id == user_id).with_for_update()
        return self.db.execute(stmt).scalar_one_or_none()

    def create(self, *, email: str, name: str) -> User:
        return self.add_and_refresh(User(email=email, name=name))

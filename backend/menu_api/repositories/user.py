"""
User Repository - Data access for dashboard principals.
"""

from sqlalchemy import Select, func, select

from menu_api.models import User
from .base import BaseRepository


class UserRepository(BaseRepository[User]):

    @property
    def model(self) -> type[User]:
        return User

    def _base_query(self) -> Select:
        return select(User).order_by(User.id)

    def find_by_username(self, username: str) -> User | None:
        return self._db.scalar(select(User).where(User.username == username))

    def username_taken(self, username: str) -> bool:
        return self.count(User.username == username) > 0

    def email_taken(self, email: str) -> bool:
        return self.count(func.lower(User.email) == email.lower()) > 0

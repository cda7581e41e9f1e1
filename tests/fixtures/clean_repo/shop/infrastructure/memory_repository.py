"""In-memory user repository."""

from ..domain.entity import User
from ..domain.repository import UserRepository


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self.users: dict[int, User] = {}

    def save(self, user: User) -> None:
        self.users[user.user_id] = user

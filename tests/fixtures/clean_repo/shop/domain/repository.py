"""Repository port for users."""

from abc import ABC, abstractmethod

from shop.domain.entity import User


class UserRepository(ABC):
    @abstractmethod
    def save(self, user: User) -> None: ...

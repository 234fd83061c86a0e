"""Account repository abstraction layer."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable

from models.user import User


class AccountRepository(ABC):
    """Interface for account stores.

    Every mutating call is applied as a single unit: either all of the
    given accounts are written or none are.
    """

    @abstractmethod
    def find_by_id(self, account_id: int) -> User | None:
        """Return the account with the given id, if any."""

    @abstractmethod
    def find_by_email(self, email: str) -> User | None:
        """Return the account registered under an already normalized email."""

    @abstractmethod
    def find_by_token(self, token: str) -> User | None:
        """Return the account currently holding the verification token."""

    @abstractmethod
    def find_many_by_ids(self, account_ids: Iterable[int]) -> list[User]:
        """Return the accounts whose ids are in the set; unknown ids are ignored."""

    @abstractmethod
    def exists_by_email(self, email: str) -> bool:
        """Return whether an account uses the normalized email."""

    @abstractmethod
    def list_ordered(self) -> list[User]:
        """Return every account ordered by ascending id."""

    @abstractmethod
    def insert(self, account: User) -> User:
        """Persist a new account, raising ConflictError on a duplicate email."""

    @abstractmethod
    def update_many(self, accounts: Iterable[User]) -> None:
        """Persist changes made to the given accounts."""

    @abstractmethod
    def delete_many(self, accounts: Iterable[User]) -> list[int]:
        """Remove the given accounts and return their ids."""

    @abstractmethod
    def ping(self) -> None:
        """Raise InfrastructureError if the store cannot be reached."""

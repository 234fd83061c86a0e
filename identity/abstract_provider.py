"""Session provider abstraction layer."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import timedelta


class SessionProvider(ABC):
    """Correlates the current request with an account id."""

    @abstractmethod
    def bind(self, account_id: int, ttl: timedelta) -> None:
        """Attach the account id to the caller for ``ttl``."""

    @abstractmethod
    def read(self) -> int | None:
        """Return the account id bound to the caller, or None."""

    @abstractmethod
    def invalidate(self) -> None:
        """Drop the caller's binding, forcing a logout."""

"""Account persistence backends."""

from .abstract_repository import AccountRepository
from .sql_repository import SQLAlchemyAccountRepository

__all__ = ["AccountRepository", "SQLAlchemyAccountRepository"]

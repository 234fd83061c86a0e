"""SQLAlchemy-backed account repository."""

from __future__ import annotations

import logging
from typing import Iterable

from sqlalchemy import select, text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from models import db
from models.user import User
from services.errors import ConflictError, InfrastructureError

from .abstract_repository import AccountRepository

logger = logging.getLogger(__name__)


class SQLAlchemyAccountRepository(AccountRepository):
    """Store accounts in the application database via Flask-SQLAlchemy."""

    def __init__(self, database=db):
        self.db = database

    @property
    def session(self):
        return self.db.session

    def _fail(self, action: str, exc: SQLAlchemyError) -> InfrastructureError:
        self.session.rollback()
        logger.error("Account store failed to %s: %s", action, exc)
        return InfrastructureError(f"Account store failed to {action}.")

    def find_by_id(self, account_id: int) -> User | None:
        try:
            return self.session.get(User, account_id)
        except SQLAlchemyError as exc:
            raise self._fail("load account", exc) from exc

    def find_by_email(self, email: str) -> User | None:
        try:
            return self.session.scalars(select(User).where(User.email == email)).first()
        except SQLAlchemyError as exc:
            raise self._fail("look up email", exc) from exc

    def find_by_token(self, token: str) -> User | None:
        try:
            return self.session.scalars(
                select(User).where(User.verification_token == token)
            ).first()
        except SQLAlchemyError as exc:
            raise self._fail("look up token", exc) from exc

    def find_many_by_ids(self, account_ids: Iterable[int]) -> list[User]:
        ids = list(account_ids)
        if not ids:
            return []
        try:
            return list(
                self.session.scalars(
                    select(User).where(User.id.in_(ids)).order_by(User.id)
                )
            )
        except SQLAlchemyError as exc:
            raise self._fail("load accounts", exc) from exc

    def exists_by_email(self, email: str) -> bool:
        return self.find_by_email(email) is not None

    def list_ordered(self) -> list[User]:
        try:
            return list(self.session.scalars(select(User).order_by(User.id.asc())))
        except SQLAlchemyError as exc:
            raise self._fail("list accounts", exc) from exc

    def insert(self, account: User) -> User:
        self.session.add(account)
        try:
            self.session.commit()
        except IntegrityError as exc:
            # The unique email index decides concurrent registrations.
            self.session.rollback()
            raise ConflictError("Email already registered.") from exc
        except SQLAlchemyError as exc:
            raise self._fail("insert account", exc) from exc
        return account

    def update_many(self, accounts: Iterable[User]) -> None:
        try:
            for account in accounts:
                self.session.add(account)
            self.session.commit()
        except SQLAlchemyError as exc:
            raise self._fail("update accounts", exc) from exc

    def delete_many(self, accounts: Iterable[User]) -> list[int]:
        accounts = list(accounts)
        deleted_ids = [account.id for account in accounts]
        if not accounts:
            return deleted_ids
        try:
            for account in accounts:
                self.session.delete(account)
            self.session.commit()
        except SQLAlchemyError as exc:
            raise self._fail("delete accounts", exc) from exc
        return deleted_ids

    def ping(self) -> None:
        try:
            self.session.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            raise self._fail("answer a health check", exc) from exc

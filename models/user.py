"""User account model definition."""

from datetime import UTC, datetime

from . import db


STATUS_UNVERIFIED = "unverified"
STATUS_ACTIVE = "active"
STATUS_BLOCKED = "blocked"

NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 200
PASSWORD_MAX_LENGTH = 255


def _utcnow() -> datetime:
    return datetime.now(UTC)


class User(db.Model):
    """Represents a registered account."""

    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(NAME_MAX_LENGTH), nullable=False)
    email = db.Column(db.String(EMAIL_MAX_LENGTH), nullable=False)
    password = db.Column(db.String(PASSWORD_MAX_LENGTH), nullable=False)
    status = db.Column(
        db.String(20),
        nullable=False,
        default=STATUS_UNVERIFIED,
        server_default=db.text("'unverified'"),
    )
    last_login = db.Column(db.DateTime, nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=_utcnow)
    verification_token = db.Column(db.String(510), nullable=True)

    __table_args__ = (db.Index("ix_users_email", "email", unique=True),)

    @property
    def is_blocked(self) -> bool:
        return self.status == STATUS_BLOCKED

    @property
    def awaiting_verification(self) -> bool:
        """Whether a verification token is still outstanding."""

        return bool(self.verification_token)

    def mark_verified(self) -> None:
        """Consume the verification token and activate the account."""

        self.verification_token = None
        self.status = STATUS_ACTIVE

    def mark_unblocked(self) -> None:
        """Lift a block, keeping any pending verification in place."""

        if self.awaiting_verification:
            self.status = STATUS_UNVERIFIED
        else:
            self.status = STATUS_ACTIVE

    def to_dict(self) -> dict[str, object]:
        """Public representation; never includes the password or token."""

        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "status": self.status,
            "lastLogin": self.last_login.isoformat() if self.last_login else None,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<User {self.email}>"

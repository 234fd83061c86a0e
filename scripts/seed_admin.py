"""Seed an active administrator account."""

import os

from app import create_app
from models import db
from models.user import STATUS_ACTIVE, User
from services import normalize_email

ADMIN_NAME = os.getenv("ADMIN_NAME", "Administrator")
ADMIN_EMAIL = normalize_email(os.getenv("ADMIN_EMAIL", "admin@example.com"))
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "AdminPass123")


def main() -> None:
    app = create_app()
    with app.app_context():
        admin = User.query.filter_by(email=ADMIN_EMAIL).first()
        if admin is None:
            admin = User(name=ADMIN_NAME, email=ADMIN_EMAIL, password=ADMIN_PASSWORD)
            db.session.add(admin)
            action = "created"
        else:
            admin.password = ADMIN_PASSWORD
            action = "updated"
        admin.status = STATUS_ACTIVE
        admin.verification_token = None
        db.session.commit()
        print(f"Admin account {action}: {ADMIN_EMAIL}")


if __name__ == "__main__":
    main()

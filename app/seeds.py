from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from app.config import settings
from app.models import Team, User

logger = logging.getLogger(__name__)


def seed_admin_user(db: Session) -> bool:
    """Create the configured admin user and their personal team when absent."""
    email = settings.admin_email.strip().lower()
    existing = db.query(User).filter(User.email == email).first()
    if existing is not None:
        if not existing.is_admin:
            existing.is_admin = True
            db.commit()
            logger.info(f"Promoted existing user {existing.id} to admin")
        return False

    admin = User(
        email=email,
        name=settings.admin_name,
        locale="en",
        email_verified=True,
        is_admin=True,
    )
    db.add(admin)
    db.flush()
    db.add(Team(name=f"{settings.admin_name}'s team", is_personal=True, user_id=admin.id))
    db.commit()
    logger.info(f"Seeded admin user {admin.id} ({email})")
    return True

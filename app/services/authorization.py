from __future__ import annotations

import logging

from app.core.exceptions import ForbiddenError, StorePersistenceError
from app.core.results import Result
from app.models import User
from app.repositories.record_store import RecordStore

logger = logging.getLogger(__name__)


class AuthorizationGate:
    """Checks the acting user's admin flag before catalog mutations."""

    def __init__(self, store: RecordStore):
        self.store = store

    async def require_admin(self, user_id: int, action: str) -> Result[User]:
        try:
            user = self.store.get(User, user_id)
        except StorePersistenceError as exc:
            return Result.failure(exc)
        if user is None or not user.is_admin:
            logger.warning(f"User {user_id} denied permission to {action} a plan")
            return Result.failure(ForbiddenError(f"User is not authorized to {action} a plan"))
        return Result.success(user)

"""Shared API dependencies: auth, record store and services."""
from fastapi import Depends
from sqlalchemy.orm import Session

from app.config import settings
from app.core.security import get_current_user
from app.database import get_db
from app.models import User
from app.repositories.record_store import RecordStore, SqlAlchemyRecordStore
from app.schemas.user import CurrentUser
from app.services.authorization import AuthorizationGate
from app.services.plan_catalog import PlanCatalog
from app.services.pricing import PricingEngine


def get_record_store(db: Session = Depends(get_db)) -> RecordStore:
    return SqlAlchemyRecordStore(db)


def get_plan_catalog(store: RecordStore = Depends(get_record_store)) -> PlanCatalog:
    return PlanCatalog(store)


def get_authorization_gate(store: RecordStore = Depends(get_record_store)) -> AuthorizationGate:
    return AuthorizationGate(store)


def get_pricing_engine(catalog: PlanCatalog = Depends(get_plan_catalog)) -> PricingEngine:
    return PricingEngine(catalog, cycle_days=settings.billing_cycle_days)


def require_admin(action: str):
    """Dependency factory refusing non-admin callers for the given plan action."""

    async def _require_admin(
        user: CurrentUser = Depends(get_current_user),
        gate: AuthorizationGate = Depends(get_authorization_gate),
    ) -> User:
        return (await gate.require_admin(user.user_id, action)).unwrap()

    return _require_admin


__all__ = [
    "get_current_user",
    "require_admin",
    "get_record_store",
    "get_plan_catalog",
    "get_authorization_gate",
    "get_pricing_engine",
]

from __future__ import annotations

import logging
from typing import List

from app.core.exceptions import NotFoundError, StorePersistenceError, ValidationError
from app.core.results import Result
from app.models import Plan
from app.repositories.record_store import RecordStore

logger = logging.getLogger(__name__)


def validate_price(price: int) -> None:
    if isinstance(price, bool) or not isinstance(price, int):
        raise ValidationError("Plan price must be an integer amount in minor currency units")
    if price < 0:
        raise ValidationError("Plan price must not be negative")


class PlanCatalog:
    """Reads and writes plan records. Authorization is the caller's concern."""

    def __init__(self, store: RecordStore):
        self.store = store

    async def get_plan_by_id(self, plan_id: int) -> Result[Plan]:
        try:
            plan = self.store.get(Plan, plan_id)
        except StorePersistenceError as exc:
            return Result.failure(exc)
        if plan is None:
            return Result.failure(NotFoundError("Plan not found"))
        return Result.success(plan)

    async def get_all_plans(self) -> Result[List[Plan]]:
        try:
            return Result.success(self.store.find_all(Plan))
        except StorePersistenceError as exc:
            logger.error(f"Error fetching plans: {exc.message}")
            return Result.failure(exc)

    async def create_plan(self, name: str, price: int) -> Result[Plan]:
        try:
            validate_price(price)
        except ValidationError as exc:
            return Result.failure(exc)
        try:
            plan = self.store.insert(Plan, name=name, price=price)
        except StorePersistenceError as exc:
            logger.error(f"Error creating plan {name!r}: {exc.message}")
            return Result.failure(exc)
        logger.info(f"Created plan {plan.id} ({plan.name}, price={plan.price})")
        return Result.success(plan)

    async def update_plan(self, plan_id: int, name: str, price: int) -> Result[int]:
        """
        Overwrite name and price of a plan.

        No existence check is made: updating an unknown id succeeds with zero
        rows matched.
        """
        try:
            validate_price(price)
        except ValidationError as exc:
            return Result.failure(exc)
        try:
            matched = self.store.update(Plan, plan_id, name=name, price=price)
        except StorePersistenceError as exc:
            logger.error(f"Error updating plan {plan_id}: {exc.message}")
            return Result.failure(exc)
        if matched == 0:
            logger.warning(f"Update of plan {plan_id} matched no rows")
        return Result.success(matched)

"""
Prorated pricing for mid-cycle plan changes.

Prices are integer minor currency units. The charge for switching plans is the
price difference scaled by the share of the billing cycle left:

    (new_price - current_price) * remaining_days / cycle_days

computed exactly and rounded half away from zero to the minor unit, so a
downgrade yields a negative amount of the same magnitude as the matching
upgrade.
"""
from __future__ import annotations

from app.core.exceptions import ValidationError
from app.core.results import Result
from app.services.plan_catalog import PlanCatalog

DEFAULT_CYCLE_DAYS = 30


def calculate_prorated_price(
    current_price: int,
    new_price: int,
    remaining_days: int,
    cycle_days: int = DEFAULT_CYCLE_DAYS,
) -> int:
    if cycle_days <= 0:
        raise ValueError("cycle_days must be positive")
    numerator = (new_price - current_price) * remaining_days
    quotient, remainder = divmod(abs(numerator), cycle_days)
    if remainder * 2 >= cycle_days:
        quotient += 1
    return -quotient if numerator < 0 else quotient


class PricingEngine:
    def __init__(self, catalog: PlanCatalog, cycle_days: int = DEFAULT_CYCLE_DAYS):
        self.catalog = catalog
        self.cycle_days = cycle_days

    async def calculate_prorated_upgrade_price(
        self, current_plan_id: int, new_plan_id: int, remaining_days: int
    ) -> Result[int]:
        # Unknown plans are reported ahead of a bad day count.
        current = await self.catalog.get_plan_by_id(current_plan_id)
        if not current.ok:
            return Result.failure(current.error)
        new = await self.catalog.get_plan_by_id(new_plan_id)
        if not new.ok:
            return Result.failure(new.error)

        if not 0 <= remaining_days <= self.cycle_days:
            return Result.failure(
                ValidationError(f"remainingDays must be between 0 and {self.cycle_days}")
            )

        return Result.success(
            calculate_prorated_price(
                current.value.price, new.value.price, remaining_days, self.cycle_days
            )
        )

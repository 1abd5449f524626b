"""
Depreciation Engine - Low-Value Pool

Pool rates:
- 37.5% of additions in the year they enter the pool
- 18.75% of the opening pool balance every year after

Projection tracks a separate pool balance per asset, mirroring per-asset
written-down value tracking. Callers wanting a single merged pool
aggregate before calling.
"""

import logging
from decimal import Decimal

from services.depreciation.models import PoolType, _round_currency
from services.depreciation.plant_equipment import Number, _to_decimal

logger = logging.getLogger(__name__)


# ==================== CONSTANTS ====================

LOW_VALUE_POOL_OPENING_RATE = Decimal("0.1875")    # 18.75%
LOW_VALUE_POOL_ADDITIONS_RATE = Decimal("0.375")   # 37.5%

# Balance at or below which an asset no longer contributes
POOL_BALANCE_FLOOR = Decimal("0.01")

# Cost thresholds used to classify new assets
IMMEDIATE_WRITEOFF_THRESHOLD = Decimal("300")
LOW_VALUE_POOL_THRESHOLD = Decimal("1000")


def calculate_low_value_pool_deduction(opening_balance: Number, additions: Number) -> Decimal:
    """Low-value pool deduction: 18.75% of opening balance + 37.5% of additions."""
    return _round_currency(
        _to_decimal(opening_balance) * LOW_VALUE_POOL_OPENING_RATE
        + _to_decimal(additions) * LOW_VALUE_POOL_ADDITIONS_RATE
    )


def low_value_pool_deduction_for_year(
    cost: Number,
    purchase_fy: int,
    financial_year: int,
) -> Decimal:
    """
    Pool deduction attributable to one asset in a given financial year.

    The full cost enters the pool as an addition in the purchase year;
    each later year is taken against the prior year's closing balance.
    """
    pool_balance = _to_decimal(cost)
    deduction = Decimal("0.00")

    for year in range(purchase_fy, financial_year + 1):
        if pool_balance <= POOL_BALANCE_FLOOR:
            return Decimal("0.00")

        if year == purchase_fy:
            deduction = calculate_low_value_pool_deduction(0, pool_balance)
        else:
            deduction = calculate_low_value_pool_deduction(pool_balance, 0)

        if year == financial_year:
            return deduction

        pool_balance = _round_currency(pool_balance - deduction)

    # financial_year precedes the purchase year
    return Decimal("0.00")


# ==================== POOL CLASSIFICATION ====================

def assign_pool_type(cost: Number) -> PoolType:
    """
    Classify a newly added asset by cost.

    <= $300: immediate write-off
    <= $1,000: low-value pool
    otherwise: depreciated individually
    """
    cost = _to_decimal(cost)
    if cost <= IMMEDIATE_WRITEOFF_THRESHOLD:
        return PoolType.IMMEDIATE_WRITEOFF
    if cost <= LOW_VALUE_POOL_THRESHOLD:
        return PoolType.LOW_VALUE
    return PoolType.INDIVIDUAL


def can_move_to_low_value_pool(remaining_value: Number) -> bool:
    """An individually depreciated asset may join the pool once its value is <= $1,000."""
    eligible = _to_decimal(remaining_value) <= LOW_VALUE_POOL_THRESHOLD
    if not eligible:
        logger.debug(f"Remaining value {remaining_value} exceeds low-value pool threshold")
    return eligible

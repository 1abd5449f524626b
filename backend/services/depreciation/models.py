"""
Depreciation Engine - Value Objects

Plain value objects passed into and out of the calculators.
The engine owns no persistent state: callers build these immediately
before a projection and discard them afterwards.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Any, Dict


CENT = Decimal("0.01")


def _round_currency(amount: Decimal) -> Decimal:
    """Round to 2 decimal places for currency."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


# ==================== ENUMS ====================

class DepreciationMethod(str, Enum):
    """Division 40 depreciation methods."""
    DIMINISHING_VALUE = "diminishing_value"
    PRIME_COST = "prime_cost"


class PoolType(str, Enum):
    """How an asset is depreciated for projection purposes."""
    INDIVIDUAL = "individual"                  # Asset-by-asset using its method
    LOW_VALUE = "low_value"                    # Pooled-balance model
    IMMEDIATE_WRITEOFF = "immediate_writeoff"  # Full cost in the purchase year


class DepreciationCategory(str, Enum):
    """Depreciation regime an extracted schedule line belongs to."""
    PLANT_EQUIPMENT = "plant_equipment"  # Division 40
    CAPITAL_WORKS = "capital_works"      # Division 43


# ==================== PROJECTION INPUTS ====================

@dataclass(frozen=True)
class ProjectionAsset:
    """A Division 40 candidate asset."""
    id: str
    cost: Decimal
    effective_life: Decimal
    method: DepreciationMethod
    purchase_date: date
    pool_type: PoolType


@dataclass(frozen=True)
class ProjectionCapitalWork:
    """A Division 43 building or structural improvement."""
    id: str
    construction_cost: Decimal
    construction_date: date
    # May be later than construction if the property changed hands
    claim_start_date: date


# ==================== PROJECTION OUTPUT ====================

@dataclass(frozen=True)
class ProjectionRow:
    """Deduction totals for one financial year."""
    financial_year: int
    div40_total: Decimal
    div43_total: Decimal
    low_value_pool_total: Decimal
    grand_total: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return {
            "financial_year": self.financial_year,
            "div40_total": float(self.div40_total),
            "div43_total": float(self.div43_total),
            "low_value_pool_total": float(self.low_value_pool_total),
            "grand_total": float(self.grand_total),
        }


@dataclass(frozen=True)
class YearEntry:
    """One line of a single-asset multi-year schedule."""
    year: int
    opening_value: Decimal
    deduction: Decimal
    closing_value: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return {
            "year": self.year,
            "opening_value": float(self.opening_value),
            "deduction": float(self.deduction),
            "closing_value": float(self.closing_value),
        }

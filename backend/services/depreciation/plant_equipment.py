"""
Depreciation Engine - Plant & Equipment (Division 40)

Per-asset deduction formulas:
- Diminishing Value: written-down value x (200% / effective life)
- Prime Cost: cost x (100% / effective life)

The first year (year_index 0) is pro-rated by days held / 365.
Every yearly figure is rounded to cents before it feeds the next year,
so a projection must replay the schedule from the purchase year.
"""

import logging
from decimal import Decimal
from typing import List, Optional, Union

from services.depreciation.models import (
    CENT,
    DepreciationMethod,
    YearEntry,
    _round_currency,
)

logger = logging.getLogger(__name__)

Number = Union[Decimal, int, float, str]


# ==================== CONSTANTS ====================

DAYS_IN_YEAR = Decimal("365")
DIMINISHING_VALUE_MULTIPLIER = Decimal("2")  # 200%

# Residual written-down value treated as fully depreciated
DV_RESIDUAL_FLOOR = Decimal("1")

# Prime cost balance treated as fully recovered
PC_RESIDUAL_FLOOR = Decimal("0.01")

# Longest schedule generate_multi_year_schedule will produce
MAX_SCHEDULE_YEARS = 40


def _to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _first_year_factor(days_first_year: int) -> Decimal:
    return Decimal(days_first_year) / DAYS_IN_YEAR


# ==================== PROJECTION FORMULAS ====================

def calculate_diminishing_value(
    cost: Number,
    effective_life: Number,
    year_index: int,
    days_first_year: int,
) -> Decimal:
    """
    Diminishing value deduction for one year of an asset's life.

    Rate = 200% / effective life, applied to the written-down value.
    Returns 0 once the written-down value drops below $1.
    """
    cost = _to_decimal(cost)
    rate = DIMINISHING_VALUE_MULTIPLIER / _to_decimal(effective_life)
    wdv = cost

    for year in range(year_index + 1):
        if wdv < DV_RESIDUAL_FLOOR:
            return Decimal("0.00")

        if year == 0:
            deduction = wdv * rate * _first_year_factor(days_first_year)
        else:
            deduction = wdv * rate

        deduction = _round_currency(deduction)

        if year == year_index:
            return deduction

        wdv = _round_currency(wdv - deduction)

    return Decimal("0.00")


def calculate_prime_cost(
    cost: Number,
    effective_life: Number,
    year_index: int,
    days_first_year: int,
) -> Decimal:
    """
    Prime cost deduction for one year of an asset's life.

    Annual = cost / effective life. Never deducts more than the remaining
    value, so a pro-rated first year pushes the final (partial) deduction
    into one extra year.
    """
    cost = _to_decimal(cost)
    annual = cost / _to_decimal(effective_life)
    total_deducted = Decimal("0")

    for year in range(year_index + 1):
        remaining = _round_currency(cost - total_deducted)
        if remaining <= PC_RESIDUAL_FLOOR:
            return Decimal("0.00")

        if year == 0:
            deduction = annual * _first_year_factor(days_first_year)
        else:
            deduction = min(annual, remaining)

        deduction = _round_currency(deduction)

        if year == year_index:
            return min(deduction, remaining)

        total_deducted += deduction

    return Decimal("0.00")


def calculate_div40_deduction(
    method: DepreciationMethod,
    cost: Number,
    effective_life: Number,
    year_index: int,
    days_first_year: int,
) -> Decimal:
    """Dispatch to the diminishing value or prime cost formula."""
    if DepreciationMethod(method) == DepreciationMethod.DIMINISHING_VALUE:
        return calculate_diminishing_value(cost, effective_life, year_index, days_first_year)
    return calculate_prime_cost(cost, effective_life, year_index, days_first_year)


# ==================== SINGLE-YEAR HELPERS ====================

def calculate_yearly_deduction(
    cost: Number,
    effective_life: Number,
    method: DepreciationMethod,
    pro_rata_factor: Number = 1,
) -> Decimal:
    """
    Headline yearly deduction from the ATO formulas.

    Prime cost: cost / effective life
    Diminishing value: (cost x 2) / effective life

    pro_rata_factor is the fraction of the year the asset was held (0-1).
    """
    cost = _to_decimal(cost)
    effective_life = _to_decimal(effective_life)
    if cost <= 0 or effective_life <= 0:
        return Decimal("0.00")

    if DepreciationMethod(method) == DepreciationMethod.PRIME_COST:
        deduction = cost / effective_life
    else:
        deduction = (cost * DIMINISHING_VALUE_MULTIPLIER) / effective_life

    return _round_currency(deduction * _to_decimal(pro_rata_factor))


def calculate_remaining_value(
    cost: Number,
    effective_life: Number,
    method: DepreciationMethod,
    years_elapsed: int,
) -> Decimal:
    """
    Book value left after a number of full years.

    Prime cost reduces linearly; diminishing value compounds at
    2 / effective life without intermediate rounding.
    """
    cost = _to_decimal(cost)
    effective_life = _to_decimal(effective_life)
    if cost <= 0 or effective_life <= 0:
        return Decimal("0.00")
    if years_elapsed <= 0:
        return cost

    if DepreciationMethod(method) == DepreciationMethod.PRIME_COST:
        annual = cost / effective_life
        return max(Decimal("0.00"), _round_currency(cost - annual * years_elapsed))

    rate = DIMINISHING_VALUE_MULTIPLIER / effective_life
    value = cost
    for _ in range(years_elapsed):
        value = value * (1 - rate)
        if value < CENT:
            return Decimal("0.00")

    return _round_currency(value)


def generate_multi_year_schedule(
    cost: Number,
    effective_life: Number,
    method: DepreciationMethod,
    max_years: Optional[int] = None,
) -> List[YearEntry]:
    """
    Full-year schedule of opening value, deduction and closing value.

    Runs for max_years (default: the effective life), capped at 40 years,
    and stops early once the asset is written off.
    """
    cost = _to_decimal(cost)
    effective_life = _to_decimal(effective_life)
    if cost <= 0 or effective_life <= 0:
        return []

    method = DepreciationMethod(method)
    years = min(effective_life if max_years is None else Decimal(max_years), MAX_SCHEDULE_YEARS)
    entries: List[YearEntry] = []
    opening_value = cost
    year = 1

    while year <= years:
        if opening_value <= 0:
            break

        if method == DepreciationMethod.PRIME_COST:
            deduction = cost / effective_life
        else:
            deduction = opening_value * (DIMINISHING_VALUE_MULTIPLIER / effective_life)

        deduction = _round_currency(min(deduction, opening_value))
        closing_value = max(Decimal("0.00"), _round_currency(opening_value - deduction))

        entries.append(YearEntry(
            year=year,
            opening_value=_round_currency(opening_value),
            deduction=deduction,
            closing_value=closing_value,
        ))

        opening_value = closing_value
        year += 1

    logger.debug(f"Generated {len(entries)}-year {method.value} schedule for cost {cost}")
    return entries

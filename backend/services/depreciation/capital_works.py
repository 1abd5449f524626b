"""
Depreciation Engine - Capital Works (Division 43)

2.5% of construction cost per year, claimable for 40 financial years
from the year of construction. The first claim year is pro-rated from
the claim start date to 30 June.
"""

import logging
from datetime import date
from decimal import Decimal

from services.depreciation.fiscal_calendar import days_to_fiscal_year_end, fiscal_year_of
from services.depreciation.models import ProjectionCapitalWork, _round_currency
from services.depreciation.plant_equipment import DAYS_IN_YEAR, Number, _to_decimal

logger = logging.getLogger(__name__)


CAPITAL_WORKS_RATE = Decimal("0.025")  # 2.5%
CAPITAL_WORKS_CLAIM_YEARS = 40


def calculate_capital_works_annual(construction_cost: Number) -> Decimal:
    """Flat full-year deduction."""
    return _round_currency(_to_decimal(construction_cost) * CAPITAL_WORKS_RATE)


def calculate_capital_works_deduction(
    construction_cost: Number,
    construction_date: date,
    claim_start_date: date,
    financial_year: int,
) -> Decimal:
    """
    Division 43 deduction for one financial year.

    - 0 before the claim start year
    - 0 once 40 years have passed since construction, whenever claiming began
    - pro-rated in the claim start year
    - flat annual amount otherwise
    """
    construction_fy = fiscal_year_of(construction_date)
    claim_start_fy = fiscal_year_of(claim_start_date)

    if financial_year < claim_start_fy:
        return Decimal("0.00")

    if financial_year - construction_fy >= CAPITAL_WORKS_CLAIM_YEARS:
        return Decimal("0.00")

    annual = calculate_capital_works_annual(construction_cost)

    if financial_year == claim_start_fy:
        days = days_to_fiscal_year_end(claim_start_date)
        return _round_currency(annual * (Decimal(days) / DAYS_IN_YEAR))

    return annual


def capital_work_deduction(work: ProjectionCapitalWork, financial_year: int) -> Decimal:
    """Convenience wrapper taking a ProjectionCapitalWork."""
    return calculate_capital_works_deduction(
        construction_cost=work.construction_cost,
        construction_date=work.construction_date,
        claim_start_date=work.claim_start_date,
        financial_year=financial_year,
    )

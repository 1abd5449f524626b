"""
Depreciation Engine - Financial Year Calendar

Australian financial years run 1 July to 30 June and are identified by
their ending calendar year: 1 July 2025 to 30 June 2026 is FY 2026.
"""

from datetime import date, datetime
from typing import Optional, Tuple


FY_START_MONTH = 7  # July
FY_END_MONTH = 6
FY_END_DAY = 30


def _as_date(value: date) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def fiscal_year_of(value: date) -> int:
    """
    Return the financial year a date falls in.

    Examples:
    - 1 Jul 2025 -> 2026
    - 1 Mar 2026 -> 2026
    - 30 Jun 2025 -> 2025
    """
    value = _as_date(value)
    return value.year + 1 if value.month >= FY_START_MONTH else value.year


def fiscal_year_bounds(financial_year: int) -> Tuple[date, date]:
    """First and last day of a financial year."""
    return (
        date(financial_year - 1, FY_START_MONTH, 1),
        date(financial_year, FY_END_MONTH, FY_END_DAY),
    )


def fiscal_year_label(financial_year: int) -> str:
    """Display label, e.g. 2026 -> "2025-26"."""
    return f"{financial_year - 1}-{financial_year % 100:02d}"


def days_to_fiscal_year_end(value: date) -> int:
    """
    Days from a date to 30 June of its financial year, inclusive of both ends.
    Minimum 1. Used to pro-rate first-year deductions.
    """
    value = _as_date(value)
    _, fy_end = fiscal_year_bounds(fiscal_year_of(value))
    return max((fy_end - value).days + 1, 1)


def current_financial_year(today: Optional[date] = None) -> int:
    """Financial year of `today`, or of the wall-clock date when omitted."""
    return fiscal_year_of(today or date.today())


def default_projection_range(
    today: Optional[date] = None,
    horizon_years: Optional[int] = None,
) -> Tuple[int, int]:
    """
    Range used when the caller does not supply one:
    the current financial year through `horizon_years` years later.
    """
    if horizon_years is None:
        from config import get_settings
        horizon_years = get_settings().PROJECTION_HORIZON_YEARS

    from_fy = current_financial_year(today)
    return from_fy, from_fy + horizon_years

"""
Depreciation Engine - Schedule Projector

Projects deductions across a closed range of financial years:
- immediate_writeoff: full cost in the purchase year
- low_value: 37.5% in the purchase year, 18.75% of the balance thereafter
- individual: diminishing value or prime cost per the asset's method
- capital works: Division 43 flat rate

Each yearly total is re-rounded to cents after every contribution.
"""

import logging
from decimal import Decimal
from typing import List, Sequence

from services.depreciation.capital_works import capital_work_deduction
from services.depreciation.fiscal_calendar import days_to_fiscal_year_end, fiscal_year_of
from services.depreciation.low_value_pool import low_value_pool_deduction_for_year
from services.depreciation.models import (
    PoolType,
    ProjectionAsset,
    ProjectionCapitalWork,
    ProjectionRow,
    _round_currency,
)
from services.depreciation.plant_equipment import _to_decimal, calculate_div40_deduction

logger = logging.getLogger(__name__)


def project_schedule(
    assets: Sequence[ProjectionAsset],
    capital_works: Sequence[ProjectionCapitalWork],
    from_fy: int,
    to_fy: int,
) -> List[ProjectionRow]:
    """
    Project a depreciation schedule, one row per financial year in
    [from_fy, to_fy]. An inverted range yields an empty list.
    """
    if from_fy > to_fy:
        return []

    rows: List[ProjectionRow] = []

    for fy in range(from_fy, to_fy + 1):
        div40_total = Decimal("0.00")
        div43_total = Decimal("0.00")
        low_value_pool_total = Decimal("0.00")

        for asset in assets:
            purchase_fy = fiscal_year_of(asset.purchase_date)

            # Not yet acquired
            if fy < purchase_fy:
                continue

            pool_type = PoolType(asset.pool_type)

            if pool_type == PoolType.IMMEDIATE_WRITEOFF:
                if fy == purchase_fy:
                    div40_total = _round_currency(div40_total + _to_decimal(asset.cost))

            elif pool_type == PoolType.LOW_VALUE:
                deduction = low_value_pool_deduction_for_year(asset.cost, purchase_fy, fy)
                low_value_pool_total = _round_currency(low_value_pool_total + deduction)

            elif pool_type == PoolType.INDIVIDUAL:
                deduction = calculate_div40_deduction(
                    method=asset.method,
                    cost=asset.cost,
                    effective_life=asset.effective_life,
                    year_index=fy - purchase_fy,
                    days_first_year=days_to_fiscal_year_end(asset.purchase_date),
                )
                div40_total = _round_currency(div40_total + deduction)

        for work in capital_works:
            div43_total = _round_currency(div43_total + capital_work_deduction(work, fy))

        rows.append(ProjectionRow(
            financial_year=fy,
            div40_total=div40_total,
            div43_total=div43_total,
            low_value_pool_total=low_value_pool_total,
            grand_total=_round_currency(div40_total + div43_total + low_value_pool_total),
        ))

    logger.debug(
        f"Projected {len(rows)} years ({from_fy}-{to_fy}) for "
        f"{len(assets)} assets and {len(capital_works)} capital works"
    )
    return rows

"""
Depreciation Engine - Package Init

Division 40 (plant & equipment), Division 43 (capital works) and
low-value pool deductions with multi-year projections.
"""

from services.depreciation.models import (
    # Enums
    DepreciationMethod,
    PoolType,
    DepreciationCategory,

    # Value objects
    ProjectionAsset,
    ProjectionCapitalWork,
    ProjectionRow,
    YearEntry,
)

from services.depreciation.fiscal_calendar import (
    fiscal_year_of,
    fiscal_year_bounds,
    fiscal_year_label,
    days_to_fiscal_year_end,
    current_financial_year,
    default_projection_range,
)

from services.depreciation.plant_equipment import (
    calculate_diminishing_value,
    calculate_prime_cost,
    calculate_div40_deduction,
    calculate_yearly_deduction,
    calculate_remaining_value,
    generate_multi_year_schedule,
)

from services.depreciation.low_value_pool import (
    calculate_low_value_pool_deduction,
    low_value_pool_deduction_for_year,
    assign_pool_type,
    can_move_to_low_value_pool,
)

from services.depreciation.capital_works import (
    calculate_capital_works_annual,
    calculate_capital_works_deduction,
)

from services.depreciation.projector import project_schedule

from services.depreciation.schedule_check import (
    ExtractedAssetInput,
    ValidatedAsset,
    validate_and_recalculate,
)

from services.depreciation.errors import DepreciationInputError

from services.depreciation.service import (
    AssetRecord,
    CapitalWorkRecord,
    parse_asset_records,
    parse_capital_work_records,
    project_depreciation,
    get_depreciation_rates,
)

__all__ = [
    "DepreciationMethod",
    "PoolType",
    "DepreciationCategory",
    "ProjectionAsset",
    "ProjectionCapitalWork",
    "ProjectionRow",
    "YearEntry",
    "fiscal_year_of",
    "fiscal_year_bounds",
    "fiscal_year_label",
    "days_to_fiscal_year_end",
    "current_financial_year",
    "default_projection_range",
    "calculate_diminishing_value",
    "calculate_prime_cost",
    "calculate_div40_deduction",
    "calculate_yearly_deduction",
    "calculate_remaining_value",
    "generate_multi_year_schedule",
    "calculate_low_value_pool_deduction",
    "low_value_pool_deduction_for_year",
    "assign_pool_type",
    "can_move_to_low_value_pool",
    "calculate_capital_works_annual",
    "calculate_capital_works_deduction",
    "project_schedule",
    "ExtractedAssetInput",
    "ValidatedAsset",
    "validate_and_recalculate",
    "DepreciationInputError",
    "AssetRecord",
    "CapitalWorkRecord",
    "parse_asset_records",
    "parse_capital_work_records",
    "project_depreciation",
    "get_depreciation_rates",
]

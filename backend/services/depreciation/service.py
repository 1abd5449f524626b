"""
Depreciation Engine - Caller Boundary

Converts stored asset and capital works records (decimal strings, ISO
dates) into engine value objects, resolves the default projection range
and returns JSON-serializable rows.

Usage:
    rows = project_depreciation(
        assets=[{"id": "a1", "original_cost": "10000.00", "effective_life": "10",
                 "method": "diminishing_value", "purchase_date": "2025-07-01",
                 "pool_type": "individual"}],
        capital_works=[],
    )
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError, model_validator

from services.depreciation.capital_works import CAPITAL_WORKS_CLAIM_YEARS, CAPITAL_WORKS_RATE
from services.depreciation.errors import DepreciationInputError
from services.depreciation.fiscal_calendar import default_projection_range, fiscal_year_label
from services.depreciation.low_value_pool import (
    IMMEDIATE_WRITEOFF_THRESHOLD,
    LOW_VALUE_POOL_ADDITIONS_RATE,
    LOW_VALUE_POOL_OPENING_RATE,
    LOW_VALUE_POOL_THRESHOLD,
)
from services.depreciation.models import (
    DepreciationMethod,
    PoolType,
    ProjectionAsset,
    ProjectionCapitalWork,
)
from services.depreciation.plant_equipment import DIMINISHING_VALUE_MULTIPLIER
from services.depreciation.projector import project_schedule

logger = logging.getLogger(__name__)


# ==================== STORED RECORD MODELS ====================

class AssetRecord(BaseModel):
    """Plant & equipment asset as loaded from storage."""
    id: str
    original_cost: Decimal = Field(ge=0)
    effective_life: Decimal = Field(ge=0)
    method: DepreciationMethod = DepreciationMethod.DIMINISHING_VALUE
    pool_type: PoolType = PoolType.INDIVIDUAL
    purchase_date: Optional[date] = None

    # Schedule-level date used when the asset has no purchase date of its own
    schedule_effective_date: Optional[date] = None

    @model_validator(mode="after")
    def check_projectable(self) -> "AssetRecord":
        if self.pool_type == PoolType.INDIVIDUAL and self.effective_life <= 0:
            raise ValueError("effective_life must be greater than 0 for individual assets")
        if self.purchase_date is None and self.schedule_effective_date is None:
            raise ValueError("purchase_date or schedule_effective_date is required")
        return self

    def to_projection(self) -> ProjectionAsset:
        return ProjectionAsset(
            id=self.id,
            cost=self.original_cost,
            effective_life=self.effective_life,
            method=self.method,
            purchase_date=self.purchase_date or self.schedule_effective_date,
            pool_type=self.pool_type,
        )


class CapitalWorkRecord(BaseModel):
    """Capital works entry as loaded from storage."""
    id: str
    construction_cost: Decimal = Field(ge=0)
    construction_date: date
    claim_start_date: date

    def to_projection(self) -> ProjectionCapitalWork:
        return ProjectionCapitalWork(
            id=self.id,
            construction_cost=self.construction_cost,
            construction_date=self.construction_date,
            claim_start_date=self.claim_start_date,
        )


# ==================== PARSING ====================

def _input_error(collection: str, index: int, exc: ValidationError) -> DepreciationInputError:
    first = exc.errors()[0]
    field_path = ".".join(str(part) for part in first.get("loc", ()))
    parameter = f"{collection}[{index}]" + (f".{field_path}" if field_path else "")
    message = first.get("msg", "invalid value")
    value = first.get("input")
    # Only report scalar offenders, not whole records
    if not isinstance(value, (str, int, float, Decimal)):
        value = None
    return DepreciationInputError(parameter=parameter, message=message, value=value)


def parse_asset_records(records: List[Dict[str, Any]]) -> List[ProjectionAsset]:
    """Validate stored asset records and convert them for projection."""
    assets = []
    for index, record in enumerate(records):
        try:
            assets.append(AssetRecord(**record).to_projection())
        except ValidationError as exc:
            error = _input_error("assets", index, exc)
            logger.warning(f"Rejected asset record: {error.parameter}: {error.message}")
            raise error from exc
    return assets


def parse_capital_work_records(records: List[Dict[str, Any]]) -> List[ProjectionCapitalWork]:
    """Validate stored capital works records and convert them for projection."""
    works = []
    for index, record in enumerate(records):
        try:
            works.append(CapitalWorkRecord(**record).to_projection())
        except ValidationError as exc:
            error = _input_error("capital_works", index, exc)
            logger.warning(f"Rejected capital works record: {error.parameter}: {error.message}")
            raise error from exc
    return works


# ==================== ENTRY POINTS ====================

def project_depreciation(
    assets: List[Dict[str, Any]],
    capital_works: List[Dict[str, Any]],
    from_fy: Optional[int] = None,
    to_fy: Optional[int] = None,
    today: Optional[date] = None,
) -> List[Dict[str, Any]]:
    """
    Main entry point for depreciation projections.

    Args:
        assets: Stored asset records (see AssetRecord)
        capital_works: Stored capital works records (see CapitalWorkRecord)
        from_fy: First financial year (defaults to the current financial year)
        to_fy: Last financial year (defaults to the current financial year + horizon)
        today: Date used to resolve the current financial year

    Returns:
        One dict per financial year, ascending
    """
    projection_assets = parse_asset_records(assets)
    projection_works = parse_capital_work_records(capital_works)

    if from_fy is None or to_fy is None:
        default_from, default_to = default_projection_range(today)
        from_fy = default_from if from_fy is None else from_fy
        to_fy = default_to if to_fy is None else to_fy

    logger.info(
        f"Projecting depreciation {fiscal_year_label(from_fy)} to {fiscal_year_label(to_fy)}",
        extra={
            "from_fy": from_fy,
            "to_fy": to_fy,
            "asset_count": len(projection_assets),
            "capital_works_count": len(projection_works),
        },
    )

    rows = project_schedule(
        assets=projection_assets,
        capital_works=projection_works,
        from_fy=from_fy,
        to_fy=to_fy,
    )
    return [row.to_dict() for row in rows]


def get_depreciation_rates() -> Dict[str, Any]:
    """Return the statutory rates and thresholds the engine applies."""
    return {
        "diminishing_value_multiplier": float(DIMINISHING_VALUE_MULTIPLIER),
        "low_value_pool_opening_rate": float(LOW_VALUE_POOL_OPENING_RATE),
        "low_value_pool_additions_rate": float(LOW_VALUE_POOL_ADDITIONS_RATE),
        "low_value_pool_threshold": float(LOW_VALUE_POOL_THRESHOLD),
        "immediate_writeoff_threshold": float(IMMEDIATE_WRITEOFF_THRESHOLD),
        "capital_works_rate": float(CAPITAL_WORKS_RATE),
        "capital_works_claim_years": CAPITAL_WORKS_CLAIM_YEARS,
        "methods": [m.value for m in DepreciationMethod],
        "pool_types": [p.value for p in PoolType],
    }

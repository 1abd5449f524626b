"""
Depreciation Engine - Extracted Schedule Check

Re-derives the yearly deduction for lines read off a quantity surveyor's
depreciation schedule and flags lines whose stated deduction differs
from the ATO formula by more than the configured threshold.

Capital works lines are always prime cost over 40 years (2.5%).
"""

import logging
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Any, Dict, List, Optional

from services.depreciation.capital_works import CAPITAL_WORKS_CLAIM_YEARS
from services.depreciation.models import DepreciationCategory, DepreciationMethod
from services.depreciation.plant_equipment import _to_decimal, calculate_yearly_deduction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExtractedAssetInput:
    """One schedule line as extracted from a document."""
    asset_name: str
    category: DepreciationCategory
    original_cost: Decimal
    effective_life: Decimal
    method: DepreciationMethod
    yearly_deduction: Decimal


@dataclass(frozen=True)
class ValidatedAsset:
    """Schedule line with a recalculated deduction."""
    asset_name: str
    category: DepreciationCategory
    original_cost: Decimal
    effective_life: Decimal
    method: DepreciationMethod
    yearly_deduction: Decimal
    extracted_deduction: Decimal
    discrepancy: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "asset_name": self.asset_name,
            "category": DepreciationCategory(self.category).value,
            "original_cost": float(self.original_cost),
            "effective_life": float(self.effective_life),
            "method": DepreciationMethod(self.method).value,
            "yearly_deduction": float(self.yearly_deduction),
            "extracted_deduction": float(self.extracted_deduction),
            "discrepancy": self.discrepancy,
        }


def _normalise_capital_works(asset: ExtractedAssetInput) -> ExtractedAssetInput:
    if DepreciationCategory(asset.category) != DepreciationCategory.CAPITAL_WORKS:
        return asset
    return replace(
        asset,
        method=DepreciationMethod.PRIME_COST,
        effective_life=Decimal(CAPITAL_WORKS_CLAIM_YEARS),
    )


def validate_and_recalculate(
    assets: List[ExtractedAssetInput],
    threshold: Optional[float] = None,
) -> List[ValidatedAsset]:
    """
    Recalculate each line's yearly deduction from first principles.

    A line is flagged when |calculated - extracted| > calculated x threshold
    (default: EXTRACTION_DISCREPANCY_THRESHOLD, 10%).
    """
    if threshold is None:
        from config import get_settings
        threshold = get_settings().EXTRACTION_DISCREPANCY_THRESHOLD
    threshold = _to_decimal(threshold)

    results = []
    for asset in assets:
        asset = _normalise_capital_works(asset)

        calculated = calculate_yearly_deduction(
            asset.original_cost,
            asset.effective_life,
            asset.method,
        )
        extracted = _to_decimal(asset.yearly_deduction)
        discrepancy = abs(calculated - extracted) > calculated * threshold

        if discrepancy:
            logger.info(
                f"Deduction mismatch for '{asset.asset_name}': "
                f"extracted {extracted}, calculated {calculated}"
            )

        results.append(ValidatedAsset(
            asset_name=asset.asset_name,
            category=asset.category,
            original_cost=_to_decimal(asset.original_cost),
            effective_life=_to_decimal(asset.effective_life),
            method=asset.method,
            yearly_deduction=calculated,
            extracted_deduction=extracted,
            discrepancy=discrepancy,
        ))

    return results

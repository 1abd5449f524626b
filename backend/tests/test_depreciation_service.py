"""
Unit Tests for the Depreciation Caller Boundary

Tests stored-record parsing, default projection range resolution,
input errors, extracted schedule checks and reference rates.

Run with: pytest tests/test_depreciation_service.py -v
"""

import pytest
from datetime import date
from decimal import Decimal

from pydantic import ValidationError

from services.depreciation import (
    project_depreciation,
    parse_asset_records,
    parse_capital_work_records,
    get_depreciation_rates,
    validate_and_recalculate,
    ExtractedAssetInput,
    DepreciationInputError,
    DepreciationCategory,
    DepreciationMethod,
    PoolType,
)


ASSET_RECORD = {
    "id": "a1",
    "original_cost": "10000.00",
    "effective_life": "10.00",
    "method": "diminishing_value",
    "purchase_date": "2025-07-01",
    "pool_type": "individual",
}

CAPITAL_WORK_RECORD = {
    "id": "cw1",
    "construction_cost": "400000.00",
    "construction_date": "2020-01-01",
    "claim_start_date": "2025-07-01",
}


class TestRecordParsing:
    """Test conversion of stored records into projection inputs."""

    def test_decimal_strings_and_iso_dates(self):
        asset = parse_asset_records([ASSET_RECORD])[0]

        assert asset.cost == Decimal("10000.00")
        assert asset.effective_life == Decimal("10.00")
        assert asset.method == DepreciationMethod.DIMINISHING_VALUE
        assert asset.pool_type == PoolType.INDIVIDUAL
        assert asset.purchase_date == date(2025, 7, 1)

    def test_schedule_date_used_when_no_purchase_date(self):
        record = dict(ASSET_RECORD, purchase_date=None, schedule_effective_date="2024-03-15")
        asset = parse_asset_records([record])[0]

        assert asset.purchase_date == date(2024, 3, 15)

    def test_capital_work_record(self):
        work = parse_capital_work_records([CAPITAL_WORK_RECORD])[0]

        assert work.construction_cost == Decimal("400000.00")
        assert work.construction_date == date(2020, 1, 1)
        assert work.claim_start_date == date(2025, 7, 1)

    def test_pool_assets_do_not_need_effective_life(self):
        record = dict(ASSET_RECORD, effective_life="0", pool_type="immediate_writeoff")
        asset = parse_asset_records([record])[0]

        assert asset.pool_type == PoolType.IMMEDIATE_WRITEOFF


class TestInputErrors:
    """Test malformed records are rejected with structured errors."""

    def test_negative_cost(self):
        record = dict(ASSET_RECORD, original_cost="-5.00")

        with pytest.raises(DepreciationInputError) as exc_info:
            parse_asset_records([record])

        error = exc_info.value
        assert error.parameter == "assets[0].original_cost"
        assert error.to_dict()["error"] == "invalid_parameter"
        assert error.to_dict()["received_value"] == "-5.00"
        assert isinstance(error.__cause__, ValidationError)

    def test_zero_effective_life_for_individual_asset(self):
        record = dict(ASSET_RECORD, effective_life="0")

        with pytest.raises(DepreciationInputError) as exc_info:
            parse_asset_records([ASSET_RECORD, record])

        assert exc_info.value.parameter == "assets[1]"
        assert "effective_life" in exc_info.value.message
        assert "received_value" not in exc_info.value.to_dict()

    def test_missing_dates(self):
        record = dict(ASSET_RECORD, purchase_date=None)

        with pytest.raises(DepreciationInputError) as exc_info:
            parse_asset_records([record])

        assert "purchase_date" in exc_info.value.message

    def test_unknown_pool_type(self):
        record = dict(ASSET_RECORD, pool_type="shared_pool")

        with pytest.raises(DepreciationInputError) as exc_info:
            parse_asset_records([record])

        assert exc_info.value.parameter == "assets[0].pool_type"

    def test_bad_capital_works_date(self):
        record = dict(CAPITAL_WORK_RECORD, construction_date="not-a-date")

        with pytest.raises(DepreciationInputError) as exc_info:
            parse_capital_work_records([record])

        assert exc_info.value.parameter == "capital_works[0].construction_date"

    def test_input_error_is_value_error(self):
        with pytest.raises(ValueError):
            project_depreciation([dict(ASSET_RECORD, original_cost="abc")], [], 2026, 2026)


class TestProjectDepreciation:
    """Test the main projection entry point."""

    def test_explicit_range(self):
        rows = project_depreciation([ASSET_RECORD], [CAPITAL_WORK_RECORD], 2026, 2028)

        assert [r["financial_year"] for r in rows] == [2026, 2027, 2028]
        assert rows[0]["div40_total"] == 2000.0
        assert rows[0]["div43_total"] == 10000.0
        assert rows[0]["grand_total"] == 12000.0
        assert rows[2]["div40_total"] == 1280.0

    def test_default_range_from_today(self):
        """18 Oct 2026 is in FY 2027: project FY 2027 to FY 2037."""
        rows = project_depreciation([ASSET_RECORD], [], today=date(2026, 10, 18))

        assert len(rows) == 11
        assert rows[0]["financial_year"] == 2027
        assert rows[-1]["financial_year"] == 2037

    def test_only_from_fy_given(self):
        rows = project_depreciation([], [], from_fy=2030, today=date(2025, 7, 1))

        # to_fy still defaults to the current FY + horizon
        assert rows[0]["financial_year"] == 2030
        assert rows[-1]["financial_year"] == 2036

    def test_inverted_range_empty(self):
        assert project_depreciation([ASSET_RECORD], [], 2030, 2026) == []

    def test_no_records(self):
        rows = project_depreciation([], [], 2026, 2027)
        assert all(r["grand_total"] == 0 for r in rows)


class TestScheduleCheck:
    """Test recalculation of extracted schedule lines."""

    def test_flags_large_discrepancy(self):
        line = ExtractedAssetInput(
            asset_name="Carpet",
            category=DepreciationCategory.PLANT_EQUIPMENT,
            original_cost=Decimal("5000"),
            effective_life=Decimal("10"),
            method=DepreciationMethod.DIMINISHING_VALUE,
            yearly_deduction=Decimal("800"),
        )
        result = validate_and_recalculate([line], threshold=0.10)[0]

        assert result.yearly_deduction == Decimal("1000.00")
        assert result.extracted_deduction == Decimal("800")
        assert result.discrepancy is True

    def test_within_threshold(self):
        line = ExtractedAssetInput(
            asset_name="Blinds",
            category=DepreciationCategory.PLANT_EQUIPMENT,
            original_cost=Decimal("3000"),
            effective_life=Decimal("10"),
            method=DepreciationMethod.PRIME_COST,
            yearly_deduction=Decimal("295"),
        )
        result = validate_and_recalculate([line], threshold=0.10)[0]

        assert result.yearly_deduction == Decimal("300.00")
        assert result.discrepancy is False

    def test_capital_works_forced_to_prime_cost_forty_years(self):
        line = ExtractedAssetInput(
            asset_name="Building Structure",
            category=DepreciationCategory.CAPITAL_WORKS,
            original_cost=Decimal("400000"),
            effective_life=Decimal("20"),
            method=DepreciationMethod.DIMINISHING_VALUE,
            yearly_deduction=Decimal("40000"),
        )
        result = validate_and_recalculate([line], threshold=0.10)[0]

        assert result.method == DepreciationMethod.PRIME_COST
        assert result.effective_life == Decimal("40")
        assert result.yearly_deduction == Decimal("10000.00")
        assert result.discrepancy is True
        assert result.to_dict()["method"] == "prime_cost"

    def test_default_threshold_from_settings(self):
        line = ExtractedAssetInput(
            asset_name="Blinds",
            category=DepreciationCategory.PLANT_EQUIPMENT,
            original_cost=Decimal("3000"),
            effective_life=Decimal("10"),
            method=DepreciationMethod.PRIME_COST,
            yearly_deduction=Decimal("295"),
        )
        assert validate_and_recalculate([line])[0].discrepancy is False


class TestDepreciationRates:
    """Test reference rates."""

    def test_rates(self):
        rates = get_depreciation_rates()

        assert rates["capital_works_rate"] == 0.025
        assert rates["capital_works_claim_years"] == 40
        assert rates["low_value_pool_opening_rate"] == 0.1875
        assert rates["low_value_pool_additions_rate"] == 0.375
        assert set(rates["pool_types"]) == {"individual", "low_value", "immediate_writeoff"}


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

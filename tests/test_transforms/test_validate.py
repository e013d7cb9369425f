"""
tests/test_transforms/test_validate.py — Tests for row validation and cleaning.
"""

from __future__ import annotations

from datetime import date

import pytest

from dpwh_pipeline.transforms.validate import (
    RowError,
    clean_record,
    clean_rows,
    validate_record,
)


class TestValidateRecord:
    def test_valid_row(self, make_row):
        result = validate_record(make_row())
        assert result.is_valid
        assert result.errors == ()

    def test_all_failures_reported_in_check_order(self, make_row):
        row = make_row(
            Region=" ",
            MainIsland="",
            FundingYear="2019",
            ApprovedBudgetForContract="",
            ContractCost=None,
        )
        result = validate_record(row)
        assert not result.is_valid
        assert result.errors == (
            "Missing Region",
            "Missing MainIsland",
            "Invalid FundingYear: 2019",
            "Missing ApprovedBudgetForContract",
            "Missing ContractCost",
        )

    def test_missing_keys_treated_as_blank(self):
        result = validate_record({})
        assert len(result.errors) == 5
        assert "Invalid FundingYear: <missing>" in result.errors

    @pytest.mark.parametrize("year", ["2021", "2022", "2023"])
    def test_years_in_window_pass(self, make_row, year):
        assert validate_record(make_row(FundingYear=year)).is_valid

    @pytest.mark.parametrize("year", ["2020", "2024", "abc", ""])
    def test_years_outside_window_fail(self, make_row, year):
        result = validate_record(make_row(FundingYear=year))
        assert not result.is_valid
        assert result.errors[0].startswith("Invalid FundingYear")

    def test_custom_year_window(self, make_row):
        row = make_row(FundingYear="2019")
        assert validate_record(row, start_year=2018, end_year=2020).is_valid

    def test_unparseable_budget_is_still_present(self, make_row):
        assert validate_record(make_row(ApprovedBudgetForContract="N/A")).is_valid


class TestCleanRecord:
    def test_types_and_values(self, make_row):
        record = clean_record(make_row())
        assert record is not None
        assert record.region == "NCR"
        assert record.funding_year == 2021
        assert record.approved_budget == 1_000_000.0
        assert record.contract_cost == 900_000.0
        assert record.start_date == date(2021, 1, 1)
        assert record.actual_completion_date == date(2021, 2, 15)
        assert record.latitude == pytest.approx(14.6)

    @pytest.mark.parametrize(
        "overrides",
        [
            {"Region": ""},
            {"MainIsland": None},
            {"FundingYear": "2024"},
            {"ApprovedBudgetForContract": ""},
            {"ContractCost": ""},
        ],
    )
    def test_invalid_rows_return_none(self, make_row, overrides):
        assert clean_record(make_row(**overrides)) is None

    @pytest.mark.parametrize("budget", ["N/A", "abc", "12abc", "-5"])
    def test_unparseable_or_negative_amount_returns_none(self, make_row, budget):
        assert clean_record(make_row(ApprovedBudgetForContract=budget)) is None

    def test_bad_optional_fields_become_none(self, make_row):
        record = clean_record(
            make_row(
                StartDate="someday",
                ActualCompletionDate="N/A",
                ProjectLatitude="north",
                ProjectLongitude="",
            )
        )
        assert record is not None
        assert record.start_date is None
        assert record.actual_completion_date is None
        assert record.latitude is None
        assert record.longitude is None

    def test_defaults_for_optional_strings(self, make_row):
        record = clean_record(make_row(Province=None, Contractor="", TypeOfWork="  "))
        assert record is not None
        assert record.province == ""
        assert record.contractor == "Unknown"
        assert record.type_of_work == "Unknown"

    def test_text_fields_are_trimmed(self, make_row):
        record = clean_record(make_row(Region="  NCR ", Contractor=" A "))
        assert record.region == "NCR"
        assert record.contractor == "A"


class TestCleanRows:
    def test_splits_valid_invalid_and_unparseable(self, make_row):
        rows = [
            (2, make_row()),
            (3, make_row(Region="")),
            (4, make_row(ContractCost="abc")),
            (5, make_row(FundingYear="2030", MainIsland="")),
        ]
        outcome = clean_rows(rows)
        assert outcome.rows_seen == 4
        assert len(outcome.records) == 1
        assert outcome.unparseable == 1
        assert outcome.errors == [
            RowError(3, ("Missing Region",)),
            RowError(5, ("Missing MainIsland", "Invalid FundingYear: 2030")),
        ]

    def test_row_error_str(self):
        assert str(RowError(7, ("Missing Region", "Missing MainIsland"))) == (
            "Row 7: Missing Region, Missing MainIsland"
        )

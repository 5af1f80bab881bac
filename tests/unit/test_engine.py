"""Tests for compute_breakdown.

Covers the arithmetic identities every breakdown must satisfy, period
handling, hourly employment, overrides and degenerate input.
"""

import pytest
from pydantic import ValidationError

from ctccalc.sdk.ctc import compute_breakdown
from ctccalc.sdk.schemas import (
    Applicability,
    CompensationBreakdown,
    CompensationInput,
    ComponentConfig,
    MAX_AMOUNT,
    Hourly,
    ManualOverrides,
    Salaried,
)


def assert_identities(b):
    assert b.gross_salary == pytest.approx(b.earnings.total)
    assert b.total_deductions == pytest.approx(b.deductions.total)
    assert b.total_employer_contribution == pytest.approx(b.employer_contributions.total)
    assert b.net_salary == pytest.approx(b.gross_salary - b.total_deductions)
    assert b.total_ctc == pytest.approx(b.gross_salary + b.total_employer_contribution)
    assert b.yearly_ctc == pytest.approx(b.monthly_ctc * 12)
    assert b.net_annual_salary == pytest.approx(b.net_monthly_salary * 12)


INPUTS = [
    CompensationInput(gross_amount=100000),
    CompensationInput(gross_amount=1200000, period="yearly"),
    CompensationInput(gross_amount=8000, applicability=Applicability(epf=False)),
    CompensationInput(
        gross_amount=60000,
        components=ComponentConfig.from_percentages(basic=40, hra=40, special_allowance=20),
        overrides=ManualOverrides(income_tax="3500", rd=1000, health_insurance="750"),
    ),
    CompensationInput(
        gross_amount=0,
        employment=Salaried(input_mode="amount"),
        components=ComponentConfig.from_amounts(basic=30000, hra=20000, lta=2500),
    ),
    CompensationInput(gross_amount=24000, employment=Hourly(working_hours_per_month=240)),
    CompensationInput(gross_amount=360000, period="yearly", employment=Hourly()),
]


class TestIdentities:

    @pytest.mark.parametrize("comp", INPUTS)
    def test_identities_hold(self, comp):
        assert_identities(compute_breakdown(comp))

    @pytest.mark.parametrize("comp", INPUTS)
    def test_deterministic(self, comp):
        assert compute_breakdown(comp) == compute_breakdown(comp)

    def test_inconsistent_breakdown_rejected(self):
        good = compute_breakdown(CompensationInput(gross_amount=100000)).model_dump()
        good["net_salary"] += 1

        with pytest.raises(ValidationError, match="net_salary"):
            CompensationBreakdown.model_validate(good)


class TestSalaried:

    def test_default_monthly(self):
        b = compute_breakdown(CompensationInput(gross_amount=100000))

        assert b.earnings.basic == pytest.approx(50000)
        assert b.gross_salary == pytest.approx(100000)
        assert b.deductions.epf_employee == pytest.approx(1800)
        assert b.employer_contributions.epf_employer == pytest.approx(1800)
        assert b.net_salary == pytest.approx(98200)
        assert b.total_ctc == pytest.approx(101800)
        assert b.yearly_ctc == pytest.approx(1221600)
        assert b.final_ctc == b.total_ctc
        assert b.hourly_rate == 0

    def test_yearly_matches_monthly(self):
        monthly = compute_breakdown(CompensationInput(gross_amount=100000))
        yearly = compute_breakdown(CompensationInput(gross_amount=1200000, period="yearly"))

        assert yearly.deductions.epf_employee == pytest.approx(21600)
        assert yearly.net_monthly_salary == pytest.approx(monthly.net_salary)
        assert yearly.monthly_ctc == pytest.approx(monthly.total_ctc)
        assert yearly.net_annual_salary == pytest.approx(monthly.net_annual_salary)

    def test_amount_mode_gross_is_sum_of_amounts(self):
        comp = CompensationInput(
            gross_amount=99999,
            employment=Salaried(input_mode="amount"),
            components=ComponentConfig.from_amounts(basic=30000, hra=20000),
        )

        b = compute_breakdown(comp)

        assert b.gross_salary == 50000
        assert b.deductions.epf_employee == pytest.approx(1800)

    def test_taxable_income_display(self):
        b = compute_breakdown(CompensationInput(gross_amount=1200000, period="yearly"))

        assert b.standard_deduction == 75000
        assert b.taxable_income == pytest.approx(1125000)


class TestOverrides:

    def test_override_feeds_totals(self):
        comp = CompensationInput(
            gross_amount=100000,
            overrides=ManualOverrides(income_tax="2500", epf_employer=0),
        )

        b = compute_breakdown(comp)

        assert b.deductions.income_tax == 2500
        assert b.total_deductions == pytest.approx(4300)
        assert b.total_employer_contribution == 0
        assert b.calculated_values.epf_employer == pytest.approx(1800)

    def test_non_numeric_override_warns(self):
        comp = CompensationInput(gross_amount=100000, overrides=ManualOverrides(income_tax="n/a"))

        b = compute_breakdown(comp)

        assert b.deductions.income_tax == 0
        assert b.warnings and "income_tax" in b.warnings[0]

    def test_override_larger_than_gross_allowed(self):
        comp = CompensationInput(gross_amount=1000, overrides=ManualOverrides(rd=5000))

        b = compute_breakdown(comp)

        assert b.net_salary < 0
        assert_identities(b)


class TestHourly:

    def test_hourly_rate(self):
        comp = CompensationInput(gross_amount=24000, employment=Hourly(working_hours_per_month=240))

        b = compute_breakdown(comp)

        assert b.is_hourly
        assert b.earnings.basic == 24000
        assert b.earnings.hra == 0
        assert b.hourly_rate == 100
        assert b.final_ctc == pytest.approx(24000 + 1800)

    def test_zero_hours_gives_zero_rate(self):
        comp = CompensationInput(gross_amount=24000, employment=Hourly(working_hours_per_month=0))

        assert compute_breakdown(comp).hourly_rate == 0

    def test_hourly_cannot_use_amount_mode(self):
        with pytest.raises(ValidationError):
            CompensationInput(
                gross_amount=24000,
                employment={"mode": "hourly", "input_mode": "amount"},
            )


class TestDegenerateInput:

    def test_zero_gross_all_zero(self):
        b = compute_breakdown(CompensationInput(gross_amount=0))

        assert b.gross_salary == 0
        assert b.total_deductions == 0
        assert b.net_salary == 0
        assert b.total_ctc == 0

    def test_zero_percentages(self):
        comp = CompensationInput(gross_amount=50000, components=ComponentConfig.from_percentages())

        b = compute_breakdown(comp)

        assert b.gross_salary == 0
        assert_identities(b)

    def test_largest_gross_stays_finite(self):
        comp = CompensationInput(
            gross_amount=MAX_AMOUNT,
            period="yearly",
            components=ComponentConfig.from_percentages(basic=1e300, hra=1e300),
        )

        b = compute_breakdown(comp)

        assert b.gross_salary == pytest.approx(MAX_AMOUNT)
        assert_identities(b)

    def test_huge_override_ignored(self):
        comp = CompensationInput(
            gross_amount=50000,
            overrides=ManualOverrides(rd=1e308, health_insurance="1e308"),
        )

        b = compute_breakdown(comp)

        assert b.deductions.rd == 0
        assert b.deductions.health_insurance == 0
        assert len(b.warnings) == 2

    def test_tiny_hours_gives_zero_rate(self):
        comp = CompensationInput(
            gross_amount=MAX_AMOUNT, employment=Hourly(working_hours_per_month=1e-300)
        )

        assert compute_breakdown(comp).hourly_rate == 0

    @pytest.mark.parametrize("gross", [-1, float("nan"), float("inf"), 1e308])
    def test_invalid_gross_rejected(self, gross):
        with pytest.raises(ValidationError):
            CompensationInput(gross_amount=gross)

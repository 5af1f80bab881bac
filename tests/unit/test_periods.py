"""Tests for period normalization helpers."""

import pytest

from ctccalc.sdk.ctc.periods import (
    PeriodAmounts,
    normalize_period,
    scale_to_period,
    to_monthly,
    to_yearly,
)


class TestNormalizePeriod:

    def test_monthly_input(self):
        assert normalize_period(10000, "monthly") == PeriodAmounts(monthly=10000, yearly=120000)

    def test_yearly_input(self):
        assert normalize_period(120000, "yearly") == PeriodAmounts(monthly=10000, yearly=120000)

    def test_zero(self):
        assert normalize_period(0, "yearly") == PeriodAmounts(monthly=0, yearly=0)

    @pytest.mark.parametrize("amount", [1, 999.99, 45000, 1234567.89])
    def test_monthly_yearly_roundtrip(self, amount):
        yearly = to_yearly(amount, "monthly")
        assert to_monthly(yearly, "yearly") == pytest.approx(amount)


class TestScaleToPeriod:

    def test_monthly_unchanged(self):
        assert scale_to_period(1800, "monthly") == 1800

    def test_yearly_times_twelve(self):
        assert scale_to_period(1800, "yearly") == 21600

    def test_identity_conversions(self):
        assert to_monthly(500, "monthly") == 500
        assert to_yearly(6000, "yearly") == 6000

"""Tests for manual override resolution."""

import pytest

from ctccalc.sdk.ctc.overrides import (
    overridden_fields,
    parse_override,
    reset_to_calculated,
    resolve,
    resolve_overrides,
)
from ctccalc.sdk.schemas import CALCULATED_KEYS, CalculatedValues, ManualOverrides


CALCULATED = CalculatedValues(epf_employee=1800, epf_employer=1800)


class TestParseOverride:

    @pytest.mark.parametrize("raw,expected", [
        (2500, 2500.0),
        (0, 0.0),
        ("2500", 2500.0),
        ("  12.5 ", 12.5),
        ("1,000", 1000.0),
        ("0", 0.0),
    ])
    def test_numeric(self, raw, expected):
        assert parse_override(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "   ", "abc", "nan", "inf", True, 1e16, "-2e15"])
    def test_absent_or_unusable(self, raw):
        assert parse_override(raw) is None


class TestResolve:

    def test_override_wins(self):
        assert resolve(1800, "1500") == 1500

    def test_explicit_zero_wins(self):
        assert resolve(1800, 0) == 0
        assert resolve(1800, "0") == 0

    def test_absent_falls_back(self):
        assert resolve(1800, None) == 1800
        assert resolve(1800, "") == 1800

    def test_non_numeric_falls_back(self):
        assert resolve(1800, "abc") == 1800


class TestResolveOverrides:

    def test_no_overrides_uses_calculated(self):
        resolved = resolve_overrides(CALCULATED, ManualOverrides())

        assert resolved.deductions.epf_employee == 1800
        assert resolved.employer_contributions.epf_employer == 1800
        assert resolved.deductions.rd == 0
        assert resolved.deductions.health_insurance == 0
        assert resolved.warnings == []

    def test_each_field_independent(self):
        overrides = ManualOverrides(epf_employee="1500", income_tax=2500, rd="1,000")

        resolved = resolve_overrides(CALCULATED, overrides)

        assert resolved.deductions.epf_employee == 1500
        assert resolved.employer_contributions.epf_employer == 1800
        assert resolved.deductions.income_tax == 2500
        assert resolved.deductions.rd == 1000

    def test_clearing_restores_calculated(self):
        overrides = ManualOverrides(epf_employer=900)
        assert resolve_overrides(CALCULATED, overrides).employer_contributions.epf_employer == 900

        cleared = overrides.with_value("epf_employer", None)
        assert resolve_overrides(CALCULATED, cleared).employer_contributions.epf_employer == 1800

    def test_non_numeric_warns(self):
        resolved = resolve_overrides(CALCULATED, ManualOverrides(health_insurance="lots"))

        assert resolved.deductions.health_insurance == 0
        assert len(resolved.warnings) == 1
        assert "health_insurance" in resolved.warnings[0]

    def test_blank_does_not_warn(self):
        resolved = resolve_overrides(CALCULATED, ManualOverrides(income_tax="  "))
        assert resolved.warnings == []


class TestOverrideHelpers:

    def test_overridden_fields(self):
        overrides = ManualOverrides(income_tax=0, rd="", health_insurance="200")
        assert overridden_fields(overrides) == ("income_tax", "health_insurance")

    def test_reset_to_calculated_fills_calculated_keys(self):
        overrides = reset_to_calculated(ManualOverrides(rd=500, income_tax=99), CALCULATED)

        for key in CALCULATED_KEYS:
            assert getattr(overrides, key) == getattr(CALCULATED, key)
        assert overrides.rd == 500

    def test_with_value_rejects_unknown_field(self):
        with pytest.raises(ValueError, match="Unknown override field"):
            ManualOverrides().with_value("bonus", 10)

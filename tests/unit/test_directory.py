"""Tests for the employee directory in profile.yaml."""

import pytest
import yaml

from ctccalc.sdk import ProfileInvalidError
from ctccalc.sdk.employee import (
    EmployeeNotFoundError,
    check_suggested_range,
    employment_for,
    get_employee,
    list_employees,
    suggested_range,
)
from ctccalc.sdk.schemas import Hourly, Salaried


PROFILE = {
    "employees": {
        101: {
            "name": "Asha Rao",
            "department": "Operations",
            "employment_type": "salaried",
            "min_ctc": 30000,
            "max_ctc": 45000,
            "average_ctc": 38000,
        },
        102: {
            "name": "Vikram Nair",
            "department": "Warehouse",
            "emp_type_id": 2,
        },
        "103": {
            "name": "Meera Iyer",
            "department": "operations",
            "emp_type_id": 1,
        },
    }
}


@pytest.fixture
def profile_dir(tmp_path, monkeypatch):
    """Isolated config dir with a profile.yaml."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    monkeypatch.setenv("CTC_CALC_CONFIG_PATH", str(config_dir))

    def write(profile):
        (config_dir / "profile.yaml").write_text(yaml.dump(profile))
        return config_dir

    write(PROFILE)
    return write


class TestLookup:

    def test_list_all_sorted(self, profile_dir):
        ids = [e.employee_id for e in list_employees()]
        assert ids == ["101", "102", "103"]

    def test_department_filter_case_insensitive(self, profile_dir):
        ids = [e.employee_id for e in list_employees(department="OPERATIONS")]
        assert ids == ["101", "103"]

    def test_emp_type_id_alias(self, profile_dir):
        assert get_employee("102").employment_type == "hourly"
        assert get_employee("103").employment_type == "salaried"

    def test_numeric_id_lookup(self, profile_dir):
        assert get_employee(101).name == "Asha Rao"

    def test_not_found(self, profile_dir):
        with pytest.raises(EmployeeNotFoundError):
            get_employee("999")

    def test_invalid_entry(self, profile_dir):
        profile_dir({"employees": {"201": {"employment_type": "contractor"}}})

        with pytest.raises(ProfileInvalidError, match="201"):
            list_employees()

    def test_non_integer_type_id(self, profile_dir):
        profile_dir({"employees": {"7": {"name": "Ravi", "emp_type_id": "wage"}}})

        with pytest.raises(ProfileInvalidError, match="emp_type_id"):
            get_employee("7")

    def test_numeric_string_type_id(self, profile_dir):
        profile_dir({"employees": {"8": {"emp_type_id": "2"}}})
        assert get_employee("8").is_hourly

    def test_no_profile(self, tmp_path, monkeypatch):
        monkeypatch.setenv("CTC_CALC_CONFIG_PATH", str(tmp_path / "empty"))
        assert list_employees() == []


class TestEmploymentFor:

    def test_hourly(self, profile_dir):
        employment = employment_for(get_employee("102"), working_hours=200)
        assert employment == Hourly(working_hours_per_month=200)

    def test_salaried_keeps_input_mode(self, profile_dir):
        employment = employment_for(get_employee("101"), input_mode="amount")
        assert employment == Salaried(input_mode="amount")


class TestSuggestedRange:

    def test_monthly(self, profile_dir):
        bounds = suggested_range(get_employee("101"), "monthly")
        assert bounds == {"min": 30000, "max": 45000, "average": 38000}

    def test_yearly_scaled(self, profile_dir):
        bounds = suggested_range(get_employee("101"), "yearly")
        assert bounds == {"min": 360000, "max": 540000, "average": 456000}

    def test_none_when_unset(self, profile_dir):
        assert suggested_range(get_employee("102"), "monthly") is None

    def test_check_within(self, profile_dir):
        assert check_suggested_range(get_employee("101"), 40000, "monthly") is None

    def test_check_below(self, profile_dir):
        message = check_suggested_range(get_employee("101"), 20000, "monthly")
        assert "below" in message

    def test_check_above_yearly(self, profile_dir):
        message = check_suggested_range(get_employee("101"), 600000, "yearly")
        assert "above" in message

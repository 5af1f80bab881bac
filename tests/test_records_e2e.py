"""End-to-end tests for the edit → commit → list → show workflow.

Exercises production code only, against a temporary config and data
directory:
- Real profile.yaml loading (defaults and employee directory)
- Real editing session with overrides and period switches
- Real validation, monthly normalization and JSON storage
- CLI read-back of what the SDK committed

Test scenario:
- Salaried employee 101 edited in yearly terms with manual RD, committed
- Hourly employee 102 committed at two effective dates
- A blocked commit (zero gross) leaves storage untouched
"""

import json

import pytest
import yaml
from click.testing import CliRunner

from ctccalc.cli.__main__ import cli
from ctccalc.sdk import (
    CommitValidationError,
    CompensationInput,
    CtcSession,
    commit_ctc_assignment,
    employment_for,
    get_ctc_defaults,
    get_employee,
    latest_ctc_record,
    list_ctc_records,
)


PROFILE = {
    "defaults": {
        "period": "monthly",
        "working_hours": 200,
        "components": {"basic": 50, "hra": 25, "special_allowance": 25},
    },
    "employees": {
        "101": {"name": "Asha Rao", "department": "Operations", "average_ctc": 50000},
        "102": {"name": "Vikram Nair", "department": "Warehouse", "emp_type_id": 2},
    },
}


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    config_dir = tmp_path / "config"
    data_dir = tmp_path / "data"
    config_dir.mkdir()
    data_dir.mkdir()

    monkeypatch.setenv("CTC_CALC_CONFIG_PATH", str(config_dir))
    (config_dir / "settings.json").write_text(json.dumps({"data_dir": str(data_dir)}))
    (config_dir / "profile.yaml").write_text(yaml.dump(PROFILE))

    return {"config_dir": config_dir, "data_dir": data_dir}


def new_session(employee_id: str) -> CtcSession:
    """Start a session the way the assignment form does: profile defaults + directory."""
    defaults = get_ctc_defaults()
    employee = get_employee(employee_id)
    return CtcSession(CompensationInput(
        gross_amount=0,
        period=defaults.period,
        employment=employment_for(employee, working_hours=defaults.working_hours),
        components=defaults.component_config(),
        applicability=defaults.applicability,
    ))


def test_salaried_yearly_edit_and_commit(workspace):
    session = new_session("101")
    session.update(gross_amount=50000)
    session.set_override("rd", "500")

    # switching period drops the monthly RD entry
    session.update(period="yearly", gross_amount=600000)
    assert session.input.overrides.rd is None

    session.set_override("rd", "6,000")
    breakdown = session.latest
    assert breakdown.earnings.special_allowance == pytest.approx(150000)
    assert breakdown.deductions.epf_employee == pytest.approx(21600)

    path, record = commit_ctc_assignment("101", session.input, effective_date="2025-04-01")

    assert record.ctc_amount == pytest.approx(50000)
    assert record.basic_salary == pytest.approx(25000)
    assert record.special_allowance == pytest.approx(12500)
    assert record.rd == pytest.approx(500)
    assert record.net_monthly_payable == pytest.approx(50000 - 1800 - 500)

    runner = CliRunner()
    result = runner.invoke(cli, ["records", "show", path.stem, "--format", "json"])
    assert result.exit_code == 0, result.output
    shown = json.loads(result.output)
    assert shown["meta"]["period"] == "yearly"
    assert shown["data"]["net_annual_salary"] == pytest.approx(12 * (50000 - 1800 - 500))


def test_hourly_history(workspace):
    session = new_session("102")
    assert session.input.is_hourly
    assert session.input.working_hours == 200

    session.update(gross_amount=20000)
    assert session.latest.hourly_rate == 100
    commit_ctc_assignment("102", session.input, effective_date="2025-01-01")

    session.update(gross_amount=25000)
    assert session.latest.hourly_rate == 125
    commit_ctc_assignment("102", session.input, effective_date="2025-07-01")

    history = list_ctc_records("102")
    assert [r["data"]["monthly_basic_pay"] for r in history] == [20000, 25000]

    latest = latest_ctc_record("102")["data"]
    assert latest["ctc_amount"] == pytest.approx(25000 + 1800)
    assert latest["hourly_rate"] == 125
    assert latest["working_hours"] == 200

    runner = CliRunner()
    result = runner.invoke(cli, ["employees", "show", "102"])
    assert "Current CTC: 26,800.00/month since 2025-07-01" in result.output


def test_blocked_commit_leaves_storage_untouched(workspace):
    session = new_session("102")

    with pytest.raises(CommitValidationError) as exc:
        commit_ctc_assignment("102", session.input)

    assert "monthly basic amount" in str(exc.value)
    assert list_ctc_records() == []
    assert not (workspace["data_dir"] / "records" / "102").exists()

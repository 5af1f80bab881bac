"""
Committed CTC assignment records.

This module is the persistence boundary for the CTC engine. The engine never
touches storage; a caller commits a finished breakdown here once the operator
is done editing. CLI commands are thin wrappers around these functions.

Monthly normalization
---------------------

Records are always stored in monthly terms, whatever period the operator
worked in. Conversion happens once, at commit time:

- earnings, gross, EPF (employee), RD and health insurance are divided by 12
  when the active period was yearly
- net_annual_salary and net_monthly_payable are already period-named and are
  stored as computed
- ctc_amount is the monthly CTC for hourly employees, and the monthly gross
  entry for salaried employees
- hourly_rate, working_hours and monthly_basic_pay are 0 for salaried employees

Commit validation
-----------------

The engine accepts degenerate input and returns zeros. Committing it is
blocked here instead:
- gross amount must be > 0
- hourly employees need working hours > 0

Storage layout:
    <data_dir>/records/<employee_id>/<record_id>.json
    {"meta": {...}, "data": {...CtcRecord...}}
"""

import hashlib
import json
import logging
import os
import re
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from .config import get_data_path
from .ctc.engine import compute_breakdown
from .ctc.periods import to_monthly
from .schemas import CompensationBreakdown, CompensationInput, CtcRecord

# Configure logging based on LOG_LEVEL environment variable
_log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, _log_level, logging.INFO),
    format="%(asctime)s.%(msecs)03d %(levelname)s: %(message)s",
    datefmt="%H:%M:%S"
)
logger = logging.getLogger(__name__)

RECORD_TYPE = "ctc"
RECORD_ID_PATTERN = re.compile(r"[0-9a-f]{8}")


# =============================================================================
# VALIDATION
# =============================================================================

class CommitValidationError(Exception):
    """Raised when an input may not be committed."""
    def __init__(self, errors: List[str]):
        self.errors = errors
        super().__init__(f"Commit blocked: {'; '.join(errors)}")


def validate_employee_id(employee_id: str) -> List[str]:
    """Employee IDs become directory names, so keep them path-safe."""
    errors = []
    if not employee_id or not str(employee_id).strip():
        errors.append("employee_id is required")
    elif any(sep in str(employee_id) for sep in ("/", "\\")) or str(employee_id) in (".", ".."):
        errors.append(f"employee_id contains path characters: {employee_id!r}")
    return errors


def validate_commit(comp: CompensationInput) -> List[str]:
    """Caller-side checks that block committing a breakdown.

    Returns:
        List of error messages (empty if the input may be committed)
    """
    errors = []
    if comp.gross_amount <= 0:
        if comp.is_hourly:
            errors.append("Please enter a valid monthly basic amount (must be > 0)")
        else:
            errors.append("Please enter a valid CTC amount (must be > 0)")
    if comp.is_hourly and comp.working_hours <= 0:
        errors.append("Please enter valid working hours (must be > 0)")
    return errors


# =============================================================================
# MONTHLY NORMALIZATION
# =============================================================================

def _format_effective_date(effective_date: Union[None, str, date, datetime]) -> str:
    if effective_date is None:
        return datetime.now(timezone.utc).isoformat()
    if isinstance(effective_date, (date, datetime)):
        return effective_date.isoformat()
    return str(effective_date)


def build_ctc_record(
    employee_id: str,
    comp: CompensationInput,
    breakdown: CompensationBreakdown,
    effective_date: Union[None, str, date, datetime] = None,
) -> CtcRecord:
    """Convert a breakdown into a monthly-normalized record.

    Args:
        employee_id: Employee the CTC is assigned to
        comp: Input the breakdown was computed from
        breakdown: Result of compute_breakdown(comp)
        effective_date: Effective date (default: now, UTC)

    Returns:
        CtcRecord with every money field in monthly terms
    """
    period = comp.period

    def monthly(value: float) -> float:
        return to_monthly(value or 0.0, period)

    earnings = breakdown.earnings
    is_hourly = comp.is_hourly

    if is_hourly:
        ctc_amount = breakdown.monthly_ctc
    else:
        ctc_amount = monthly(comp.gross_amount)

    return CtcRecord(
        employee_id=str(employee_id),
        is_hourly=is_hourly,
        ctc_amount=ctc_amount,
        hourly_rate=breakdown.hourly_rate if is_hourly else 0,
        working_hours=comp.working_hours if is_hourly else 0,
        monthly_basic_pay=monthly(comp.gross_amount) if is_hourly else 0,
        basic_salary=monthly(earnings.basic),
        hra=monthly(earnings.hra),
        da=monthly(earnings.da),
        lta=monthly(earnings.lta),
        special_allowance=monthly(earnings.special_allowance),
        performance_bonus=monthly(earnings.performance_bonus),
        gross_salary=monthly(breakdown.gross_salary),
        net_annual_salary=breakdown.net_annual_salary,
        net_monthly_payable=breakdown.net_monthly_salary,
        epf_employee=monthly(breakdown.deductions.epf_employee),
        rd=monthly(breakdown.deductions.rd),
        health_insurance=monthly(breakdown.deductions.health_insurance),
        epf_applicable=comp.applicability.epf,
        professional_tax_applicable=comp.applicability.professional_tax,
        esi_applicable=comp.applicability.esi,
        effective_date=_format_effective_date(effective_date),
    )


# =============================================================================
# STORAGE FUNCTIONS
# =============================================================================

def get_records_dir() -> Path:
    """Get the records base directory (<data_dir>/records/)."""
    records_dir = get_data_path() / "records"
    records_dir.mkdir(parents=True, exist_ok=True)
    return records_dir


def _generate_record_id(record: CtcRecord) -> str:
    """Content-based record ID: first 8 hex chars of a sha256.

    Committing the same assignment with the same effective date twice
    overwrites rather than duplicates.
    """
    content = (
        f"{RECORD_TYPE}|{record.employee_id}|{record.effective_date}|"
        f"{record.ctc_amount:.2f}|{record.gross_salary:.2f}|{record.net_monthly_payable:.2f}"
    )
    return hashlib.sha256(content.encode()).hexdigest()[:8]


def save_ctc_record(record: CtcRecord, comp: Optional[CompensationInput] = None) -> Path:
    """Write a record to <records>/<employee_id>/<record_id>.json.

    Args:
        record: Monthly-normalized record
        comp: Optional input, kept in meta for traceability

    Returns:
        Path to the saved JSON file
    """
    errors = validate_employee_id(record.employee_id)
    if errors:
        raise CommitValidationError(errors)

    record_id = _generate_record_id(record)
    target_dir = get_records_dir() / record.employee_id
    target_dir.mkdir(parents=True, exist_ok=True)

    meta: Dict[str, Any] = {
        "type": RECORD_TYPE,
        "employee_id": record.employee_id,
        "committed_at": datetime.now(timezone.utc).isoformat(),
    }
    if comp is not None:
        meta["period"] = comp.period
        meta["input"] = comp.model_dump(mode="json")

    record_path = target_dir / f"{record_id}.json"
    with open(record_path, "w") as f:
        json.dump({"meta": meta, "data": record.model_dump(mode="json")}, f, indent=2)

    logger.debug(f"saved ctc record {record_id} for employee {record.employee_id}")
    return record_path


def commit_ctc_assignment(
    employee_id: str,
    comp: CompensationInput,
    effective_date: Union[None, str, date, datetime] = None,
) -> Tuple[Path, CtcRecord]:
    """Validate, compute, normalize and persist a CTC assignment.

    This is the primary entry point for committing an assignment.

    Returns:
        Tuple of (path, record)

    Raises:
        CommitValidationError: If the input may not be committed
    """
    errors = validate_employee_id(employee_id) + validate_commit(comp)
    if errors:
        raise CommitValidationError(errors)

    breakdown = compute_breakdown(comp)
    for warning in breakdown.warnings:
        logger.warning(f"employee {employee_id}: {warning}")

    record = build_ctc_record(employee_id, comp, breakdown, effective_date)
    path = save_ctc_record(record, comp)
    logger.info(
        f"Committed CTC for employee {employee_id}: "
        f"{record.ctc_amount:,.2f}/month (record {path.stem})"
    )
    return path, record


def _load_record_file(json_file: Path) -> Optional[Dict[str, Any]]:
    try:
        with open(json_file) as f:
            record = json.load(f)
    except (json.JSONDecodeError, IOError) as e:
        logger.warning(f"Skipping unreadable record {json_file}: {e}")
        return None
    record["id"] = json_file.stem
    record["_path"] = str(json_file)
    return record


def list_ctc_records(employee_id: Optional[str] = None) -> List[Dict[str, Any]]:
    """List committed records, optionally for one employee.

    Returns:
        Records (each with 'meta', 'data', 'id', '_path'), oldest effective date first
    """
    records_dir = get_records_dir()

    if employee_id is not None:
        scan_dirs = [records_dir / str(employee_id)]
    else:
        scan_dirs = [d for d in records_dir.iterdir() if d.is_dir()]

    results = []
    for scan_dir in scan_dirs:
        if not scan_dir.exists():
            continue
        for json_file in scan_dir.glob("*.json"):
            record = _load_record_file(json_file)
            if record is None:
                continue
            if record.get("meta", {}).get("type") != RECORD_TYPE:
                continue
            results.append(record)

    results.sort(key=lambda r: (r.get("data") or {}).get("effective_date", ""))
    return results


def _find_record_file(record_id: str) -> Optional[Path]:
    """Locate a record file by ID. Anything but 8 hex chars matches nothing."""
    if not RECORD_ID_PATTERN.fullmatch(str(record_id)):
        return None
    for json_file in get_records_dir().glob(f"*/{record_id}.json"):
        return json_file
    return None


def get_ctc_record(record_id: str) -> Optional[Dict[str, Any]]:
    """Get a single record by its 8-char ID, or None."""
    json_file = _find_record_file(record_id)
    if json_file is None:
        return None
    return _load_record_file(json_file)


def latest_ctc_record(employee_id: str) -> Optional[Dict[str, Any]]:
    """Most recent (by effective date) record for an employee, or None."""
    records = list_ctc_records(employee_id)
    return records[-1] if records else None


def remove_ctc_record(record_id: str) -> bool:
    """Delete a record by ID.

    Returns:
        True if record was found and deleted, False if not found
    """
    json_file = _find_record_file(record_id)
    if json_file is None:
        return False
    json_file.unlink()
    logger.debug(f"removed ctc record {record_id}")
    return True

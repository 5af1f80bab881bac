"""Manual override resolution.

Every overridable deduction follows one rule: an operator-entered value
wins over the calculated one when it is present and numeric. A blank or
cleared field is absent, not zero.

RD and health insurance have no calculated counterpart and default to 0.
"""

import math
from typing import List, NamedTuple, Optional, Tuple

from ..schemas import (
    CALCULATED_KEYS,
    MAX_AMOUNT,
    OVERRIDE_KEYS,
    CalculatedValues,
    Deductions,
    EmployerContributions,
    ManualOverrides,
    OverrideValue,
)


class ResolvedDeductions(NamedTuple):
    deductions: Deductions
    employer_contributions: EmployerContributions
    warnings: List[str]


def parse_override(raw: OverrideValue) -> Optional[float]:
    """Parse an operator entry into a number.

    Returns None for absent entries (None, empty or whitespace-only strings)
    and for entries that are not finite numbers within MAX_AMOUNT.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        text = raw.strip().replace(",", "")
        if not text:
            return None
        try:
            value = float(text)
        except ValueError:
            return None
    if not math.isfinite(value) or abs(value) > MAX_AMOUNT:
        return None
    return value


def is_present(raw: OverrideValue) -> bool:
    """True if the operator typed something into the field."""
    if raw is None:
        return False
    if isinstance(raw, str):
        return bool(raw.strip())
    return True


def resolve(calculated: float, override: OverrideValue) -> float:
    """Effective value: the parsed override if usable, else the calculated value."""
    value = parse_override(override)
    return calculated if value is None else value


def resolve_overrides(
    calculated: CalculatedValues,
    overrides: ManualOverrides,
) -> ResolvedDeductions:
    """Apply resolve() uniformly to every overridable field.

    Returns:
        ResolvedDeductions with employee deductions, employer contributions,
        and warnings for entries that were present but not numeric.
    """
    effective = {}
    warnings = []
    for key in OVERRIDE_KEYS:
        base = getattr(calculated, key) if key in CALCULATED_KEYS else 0.0
        raw = getattr(overrides, key)
        if is_present(raw) and parse_override(raw) is None:
            warnings.append(f"Ignoring unusable override for {key}: {raw!r}")
        effective[key] = resolve(base, raw)

    return ResolvedDeductions(
        deductions=Deductions(
            epf_employee=effective["epf_employee"],
            esi_employee=effective["esi_employee"],
            professional_tax=effective["professional_tax"],
            income_tax=effective["income_tax"],
            rd=effective["rd"],
            health_insurance=effective["health_insurance"],
        ),
        employer_contributions=EmployerContributions(
            epf_employer=effective["epf_employer"],
            esi_employer=effective["esi_employer"],
        ),
        warnings=warnings,
    )


def overridden_fields(overrides: ManualOverrides) -> Tuple[str, ...]:
    """Names of fields that currently hold an operator entry."""
    return tuple(key for key in OVERRIDE_KEYS if is_present(getattr(overrides, key)))


def reset_to_calculated(
    overrides: ManualOverrides,
    calculated: CalculatedValues,
) -> ManualOverrides:
    """Fill every calculated field with its calculated value as an explicit entry.

    RD and health insurance keep whatever the operator entered.
    """
    return overrides.model_copy(update={
        key: getattr(calculated, key) for key in CALCULATED_KEYS
    })


def clear_overrides() -> ManualOverrides:
    """All fields absent."""
    return ManualOverrides()

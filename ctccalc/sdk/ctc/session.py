"""Editing session around the CTC engine.

A CtcSession holds the caller-owned CompensationInput for one editing
session and recomputes the breakdown explicitly on every change. It also
applies the assignment form's side rules:

- changing the period clears all manual overrides (entries are period-specific)
- switching to hourly employment resets the gross amount to 0
- the breakdown kept is always the one for the most recent input
"""

from typing import Any, Optional

from ..schemas import (
    CompensationBreakdown,
    CompensationInput,
    Hourly,
    ManualOverrides,
    OverrideValue,
)
from .engine import compute_breakdown
from .overrides import clear_overrides, reset_to_calculated


class CtcSession:
    """Mutable editing state; every change yields a fresh breakdown."""

    def __init__(self, comp: Optional[CompensationInput] = None):
        self._input = comp if comp is not None else CompensationInput(gross_amount=0)
        self._latest = compute_breakdown(self._input)

    @property
    def input(self) -> CompensationInput:
        return self._input

    @property
    def latest(self) -> CompensationBreakdown:
        return self._latest

    def update(self, **changes: Any) -> CompensationBreakdown:
        """Apply field changes to the input and recompute.

        Args:
            **changes: CompensationInput fields (gross_amount, period,
                       employment, components, applicability, overrides)

        Returns:
            Breakdown for the updated input

        Raises:
            pydantic.ValidationError: If the resulting input is invalid; the
                session keeps its previous input and breakdown.
        """
        data = self._input.model_dump()

        if "period" in changes and changes["period"] != self._input.period:
            if "overrides" not in changes:
                changes["overrides"] = clear_overrides()

        if "employment" in changes and not self._input.is_hourly:
            employment = changes["employment"]
            becomes_hourly = isinstance(employment, Hourly) or (
                isinstance(employment, dict) and employment.get("mode") == "hourly"
            )
            if becomes_hourly and "gross_amount" not in changes:
                changes["gross_amount"] = 0

        data.update(changes)
        new_input = CompensationInput.model_validate(data)

        self._input = new_input
        self._latest = compute_breakdown(new_input)
        return self._latest

    def set_override(self, field: str, value: OverrideValue) -> CompensationBreakdown:
        """Set (or clear with None / blank) a single manual override."""
        return self.update(overrides=self._input.overrides.with_value(field, value))

    def reset_to_calculated(self) -> CompensationBreakdown:
        """Replace statutory entries with the currently calculated values."""
        overrides = reset_to_calculated(self._input.overrides, self._latest.calculated_values)
        return self.update(overrides=overrides)

    def clear_overrides(self) -> CompensationBreakdown:
        return self.update(overrides=ManualOverrides())

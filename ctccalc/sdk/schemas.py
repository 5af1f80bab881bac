"""Pydantic schemas for ctc-calc data validation.

All schemas use extra='forbid' to reject unknown fields, ensuring
typos in config files and CLI overrides cause clear errors rather
than silent ignoring.
"""

from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


Period = Literal["monthly", "yearly"]
InputMode = Literal["percentage", "amount"]

# Ordered as shown on the CTC assignment form
COMPONENT_KEYS = (
    "basic",
    "hra",
    "da",
    "lta",
    "special_allowance",
    "performance_bonus",
)

COMPONENT_LABELS = {
    "basic": "Basic Salary",
    "hra": "HRA",
    "da": "DA",
    "lta": "LTA",
    "special_allowance": "Special Allowance",
    "performance_bonus": "Performance Bonus",
}

OVERRIDE_KEYS = (
    "epf_employee",
    "epf_employer",
    "esi_employee",
    "esi_employer",
    "professional_tax",
    "income_tax",
    "rd",
    "health_insurance",
)

# Overridable fields that have an auto-calculated counterpart
CALCULATED_KEYS = OVERRIDE_KEYS[:6]

# Tolerance for float identities between derived totals
INVARIANT_TOLERANCE = 1e-6

# Upper bound for any entered money figure
MAX_AMOUNT = 1e15


# =============================================================================
# Employment - tagged union (salaried vs hourly)
# =============================================================================


class Salaried(BaseModel):
    """Salaried employment. Components split by percentage or fixed amount."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    mode: Literal["salaried"] = "salaried"
    input_mode: InputMode = Field(
        default="percentage",
        description="Whether component percentages or fixed amounts drive allocation",
    )


class Hourly(BaseModel):
    """Hourly employment. All gross is Basic; allocation is always percentage.

    Hourly has no input_mode field, so hourly + amount mode cannot be
    constructed.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    mode: Literal["hourly"] = "hourly"
    working_hours_per_month: float = Field(
        default=240,
        allow_inf_nan=False,
        description="Working hours per month, used only for the display hourly rate",
    )


Employment = Annotated[Union[Salaried, Hourly], Field(discriminator="mode")]


# =============================================================================
# Compensation input
# =============================================================================


class ComponentSetting(BaseModel):
    """Percentage and fixed amount for a single earning component."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    percentage: float = Field(
        default=0, ge=0, allow_inf_nan=False,
        description="Relative weight in percentage mode",
    )
    amount: float = Field(
        default=0, ge=0, le=MAX_AMOUNT, allow_inf_nan=False,
        description="Current-period amount in amount mode",
    )


class ComponentConfig(BaseModel):
    """Configuration of the six earning components.

    Percentages need not sum to 100; the allocator renormalizes by their sum.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    basic: ComponentSetting = ComponentSetting(percentage=50)
    hra: ComponentSetting = ComponentSetting(percentage=30)
    da: ComponentSetting = ComponentSetting(percentage=20)
    lta: ComponentSetting = ComponentSetting()
    special_allowance: ComponentSetting = ComponentSetting()
    performance_bonus: ComponentSetting = ComponentSetting()

    def items(self):
        """Iterate (key, ComponentSetting) pairs in form order."""
        return [(key, getattr(self, key)) for key in COMPONENT_KEYS]

    @classmethod
    def from_percentages(cls, **percentages: float) -> "ComponentConfig":
        """Build a config where only the given components carry a percentage."""
        return cls(**{
            key: ComponentSetting(percentage=percentages.get(key, 0))
            for key in COMPONENT_KEYS
        })

    @classmethod
    def from_amounts(cls, **amounts: float) -> "ComponentConfig":
        """Build a config where only the given components carry an amount."""
        return cls(**{
            key: ComponentSetting(percentage=0, amount=amounts.get(key, 0))
            for key in COMPONENT_KEYS
        })


class Applicability(BaseModel):
    """Independent statutory applicability toggles."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    epf: bool = True
    esi: bool = True
    professional_tax: bool = True


OverrideValue = Optional[Union[float, str]]


class ManualOverrides(BaseModel):
    """Operator-entered values per deduction field.

    None means the field was never typed into (or was cleared). Strings are
    kept raw so that blank entries stay distinct from a literal zero.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    epf_employee: OverrideValue = None
    epf_employer: OverrideValue = None
    esi_employee: OverrideValue = None
    esi_employer: OverrideValue = None
    professional_tax: OverrideValue = None
    income_tax: OverrideValue = None
    rd: OverrideValue = None
    health_insurance: OverrideValue = None

    def with_value(self, field: str, value: OverrideValue) -> "ManualOverrides":
        """Return a copy with one field set (None clears it)."""
        if field not in OVERRIDE_KEYS:
            raise ValueError(f"Unknown override field: {field}. Must be one of {OVERRIDE_KEYS}")
        return self.model_copy(update={field: value})


class CompensationInput(BaseModel):
    """Everything the engine needs for one calculation."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    gross_amount: float = Field(
        ..., ge=0, le=MAX_AMOUNT, allow_inf_nan=False,
        description="Gross figure entered by the operator",
    )
    period: Period = Field(default="monthly", description="Period gross_amount is expressed in")
    employment: Employment = Field(default_factory=Salaried)
    components: ComponentConfig = Field(default_factory=ComponentConfig)
    applicability: Applicability = Field(default_factory=Applicability)
    overrides: ManualOverrides = Field(default_factory=ManualOverrides)

    @property
    def is_hourly(self) -> bool:
        return self.employment.mode == "hourly"

    @property
    def input_mode(self) -> InputMode:
        """Effective input mode; hourly is always percentage."""
        if isinstance(self.employment, Hourly):
            return "percentage"
        return self.employment.input_mode

    @property
    def working_hours(self) -> float:
        """Working hours per month (0 for salaried)."""
        if isinstance(self.employment, Hourly):
            return self.employment.working_hours_per_month
        return 0.0


# =============================================================================
# Compensation breakdown
# =============================================================================


class Earnings(BaseModel):
    """Earning components in current-period units."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    basic: float = 0.0
    hra: float = 0.0
    da: float = 0.0
    lta: float = 0.0
    special_allowance: float = 0.0
    performance_bonus: float = 0.0

    @property
    def total(self) -> float:
        return sum(getattr(self, key) for key in COMPONENT_KEYS)

    def as_dict(self) -> Dict[str, float]:
        return {key: getattr(self, key) for key in COMPONENT_KEYS}


class Deductions(BaseModel):
    """Effective employee-side deductions in current-period units."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    epf_employee: float = 0.0
    esi_employee: float = 0.0
    professional_tax: float = 0.0
    income_tax: float = 0.0
    rd: float = 0.0
    health_insurance: float = 0.0

    @property
    def total(self) -> float:
        return (
            self.epf_employee
            + self.esi_employee
            + self.professional_tax
            + self.income_tax
            + self.rd
            + self.health_insurance
        )


class EmployerContributions(BaseModel):
    """Effective employer-side contributions in current-period units."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    epf_employer: float = 0.0
    esi_employer: float = 0.0

    @property
    def total(self) -> float:
        return self.epf_employer + self.esi_employer


class CalculatedValues(BaseModel):
    """Auto-calculated statutory figures before manual overrides."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    epf_employee: float = 0.0
    epf_employer: float = 0.0
    esi_employee: float = 0.0
    esi_employer: float = 0.0
    professional_tax: float = 0.0
    income_tax: float = 0.0


class CompensationBreakdown(BaseModel):
    """Derived payroll breakdown. Internally coherent.

    Produced fresh by compute_breakdown() on every input change and never
    mutated afterwards.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    period: Period
    is_hourly: bool
    earnings: Earnings
    gross_salary: float
    deductions: Deductions
    total_deductions: float
    employer_contributions: EmployerContributions
    total_employer_contribution: float
    calculated_values: CalculatedValues
    net_salary: float
    net_annual_salary: float
    net_monthly_salary: float
    total_ctc: float = Field(..., description="Gross + employer contributions, current period")
    monthly_ctc: float
    yearly_ctc: float
    final_ctc: float = Field(..., description="Headline CTC figure")
    hourly_rate: float = Field(default=0, description="Display-only hourly rate")
    standard_deduction: float = Field(default=0, description="Display-only, current period")
    taxable_income: float = Field(default=0, description="Display-only, current period")
    warnings: List[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_invariants(self) -> "CompensationBreakdown":
        """Validate the arithmetic identities between derived totals."""
        errors = []

        def close(a: float, b: float) -> bool:
            return abs(a - b) <= INVARIANT_TOLERANCE * max(1.0, abs(a), abs(b))

        if not close(self.gross_salary, self.earnings.total):
            errors.append(
                f"gross_salary ({self.gross_salary}) != sum(earnings) ({self.earnings.total})"
            )
        if not close(self.total_deductions, self.deductions.total):
            errors.append(
                f"total_deductions ({self.total_deductions}) != "
                f"sum(deductions) ({self.deductions.total})"
            )
        if not close(self.total_employer_contribution, self.employer_contributions.total):
            errors.append(
                f"total_employer_contribution ({self.total_employer_contribution}) != "
                f"sum(employer_contributions) ({self.employer_contributions.total})"
            )
        if not close(self.net_salary, self.gross_salary - self.total_deductions):
            errors.append(
                f"net_salary ({self.net_salary}) != gross_salary - total_deductions "
                f"({self.gross_salary - self.total_deductions})"
            )
        if not close(self.total_ctc, self.gross_salary + self.total_employer_contribution):
            errors.append(
                f"total_ctc ({self.total_ctc}) != gross_salary + total_employer_contribution "
                f"({self.gross_salary + self.total_employer_contribution})"
            )
        if not close(self.yearly_ctc, self.monthly_ctc * 12):
            errors.append(f"yearly_ctc ({self.yearly_ctc}) != 12 * monthly_ctc ({self.monthly_ctc})")
        if not close(self.net_annual_salary, self.net_monthly_salary * 12):
            errors.append(
                f"net_annual_salary ({self.net_annual_salary}) != "
                f"12 * net_monthly_salary ({self.net_monthly_salary})"
            )
        if self.is_hourly:
            others = [key for key in COMPONENT_KEYS[1:] if getattr(self.earnings, key) != 0]
            if not close(self.earnings.basic, self.gross_salary) or others:
                errors.append("hourly breakdown must carry all gross in basic")

        if errors:
            raise ValueError("; ".join(errors))

        return self


# =============================================================================
# Employee directory and persisted CTC record
# =============================================================================


class EmployeeProfile(BaseModel):
    """Employee entry from the directory (profile.yaml `employees:`).

    Suggested CTC bounds are monthly figures and are only ever displayed.
    """

    model_config = ConfigDict(extra="forbid")

    employee_id: str
    name: str = ""
    department: str = ""
    employment_type: Literal["salaried", "hourly"] = "salaried"
    min_ctc: Optional[float] = Field(default=None, ge=0)
    max_ctc: Optional[float] = Field(default=None, ge=0)
    average_ctc: Optional[float] = Field(default=None, ge=0)

    @property
    def is_hourly(self) -> bool:
        return self.employment_type == "hourly"


class CtcRecord(BaseModel):
    """Committed CTC assignment, every money field in monthly terms.

    net_annual_salary and net_monthly_payable are named by their period and
    are stored as such.
    """

    model_config = ConfigDict(extra="forbid")

    employee_id: str
    is_hourly: bool
    ctc_amount: float = Field(..., description="Monthly CTC")
    hourly_rate: float = 0
    working_hours: float = 0
    monthly_basic_pay: float = 0
    basic_salary: float = 0
    hra: float = 0
    da: float = 0
    lta: float = 0
    special_allowance: float = 0
    performance_bonus: float = 0
    gross_salary: float = 0
    net_annual_salary: float = 0
    net_monthly_payable: float = 0
    epf_employee: float = 0
    rd: float = 0
    health_insurance: float = 0
    epf_applicable: bool = True
    professional_tax_applicable: bool = True
    esi_applicable: bool = True
    effective_date: str = Field(..., description="ISO-8601 timestamp")


class CtcDefaults(BaseModel):
    """Form defaults from profile.yaml `defaults:`."""

    model_config = ConfigDict(extra="forbid")

    period: Period = "monthly"
    working_hours: float = Field(default=240, gt=0)
    components: Dict[str, float] = Field(
        default_factory=lambda: {"basic": 50, "hra": 30, "da": 20},
        description="Default component percentages (missing keys are 0)",
    )
    applicability: Applicability = Field(default_factory=Applicability)

    @field_validator("components")
    @classmethod
    def known_components(cls, v: Dict[str, float]) -> Dict[str, float]:
        unknown = set(v) - set(COMPONENT_KEYS)
        if unknown:
            raise ValueError(f"Unknown components: {sorted(unknown)}. Must be among {COMPONENT_KEYS}")
        return v

    def component_config(self) -> ComponentConfig:
        return ComponentConfig.from_percentages(**self.components)

"""Earning component allocation.

Splits the current-period gross into Basic, HRA, DA, LTA, Special Allowance
and Performance Bonus.

- Hourly: everything is Basic (HRA/DA etc. are folded into the hourly basic)
- Salaried, percentage mode: proportional split renormalized by the sum of
  the configured percentages (they need not add up to 100)
- Salaried, amount mode: configured amounts are used directly and the gross
  becomes their sum
"""

from ..schemas import (
    COMPONENT_KEYS,
    ComponentConfig,
    Earnings,
    Employment,
    Hourly,
)


def total_percentage(components: ComponentConfig) -> float:
    """Sum of configured component percentages."""
    return sum(setting.percentage for _, setting in components.items())


def allocate_by_percentage(gross: float, components: ComponentConfig) -> Earnings:
    """Proportional split of gross by each component's share of the total percentage.

    A zero percentage total yields all-zero earnings rather than dividing by zero.
    """
    total_pct = total_percentage(components)
    if total_pct <= 0:
        return Earnings()

    return Earnings(**{
        key: gross * (setting.percentage / total_pct)
        for key, setting in components.items()
    })


def allocate_by_amount(components: ComponentConfig) -> Earnings:
    """Use each component's fixed amount as-is."""
    return Earnings(**{key: setting.amount for key, setting in components.items()})


def allocate_hourly(gross: float) -> Earnings:
    """All gross is Basic; every other component is zero."""
    return Earnings(**{key: 0.0 for key in COMPONENT_KEYS[1:]}, basic=gross)


def allocate_components(
    gross: float,
    employment: Employment,
    components: ComponentConfig,
) -> Earnings:
    """Allocate current-period gross pay into earning components.

    Args:
        gross: Gross amount for the active period
        employment: Salaried or Hourly
        components: Per-component percentage/amount configuration

    Returns:
        Earnings in current-period units. Callers must take the gross salary
        from Earnings.total, since amount mode ignores the entered gross.
    """
    if isinstance(employment, Hourly):
        return allocate_hourly(gross)

    if employment.input_mode == "percentage":
        return allocate_by_percentage(gross, components)

    return allocate_by_amount(components)

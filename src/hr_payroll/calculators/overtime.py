"""Overtime pay from a monthly salary."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from hr_payroll.calculators.validation import InvalidInputError, Number, non_negative, positive

DEFAULT_MULTIPLIER = Decimal("1.5")


def compute_overtime_pay(
    base_salary: Number,
    overtime_hours: Number,
    hours_per_day: Number,
    working_days_per_month: Number,
    multiplier: Number = DEFAULT_MULTIPLIER,
) -> Decimal:
    """Pay for overtime hours at ``multiplier`` times the derived hourly rate.

    hourly rate = base_salary / (hours_per_day * working_days_per_month)
    """
    base = non_negative(base_salary, "base_salary")
    hours = non_negative(overtime_hours, "overtime_hours")
    standard_hours = positive(hours_per_day, "hours_per_day") * positive(
        working_days_per_month, "working_days_per_month"
    )
    factor = positive(multiplier, "multiplier")

    hourly_rate = base / standard_hours
    overtime_rate = hourly_rate * factor
    return hours * overtime_rate


@dataclass(frozen=True)
class OvertimePolicy:
    """Named overtime rule: standard month length and premium multiplier."""

    name: str
    hours_per_day: Decimal
    working_days_per_month: Decimal
    multiplier: Decimal = DEFAULT_MULTIPLIER

    @property
    def standard_monthly_hours(self) -> Decimal:
        return self.hours_per_day * self.working_days_per_month

    def hourly_rate(self, base_salary: Number) -> Decimal:
        return non_negative(base_salary, "base_salary") / self.standard_monthly_hours

    def overtime_rate(self, base_salary: Number) -> Decimal:
        return self.hourly_rate(base_salary) * self.multiplier

    def overtime_pay(self, base_salary: Number, overtime_hours: Number) -> Decimal:
        return compute_overtime_pay(
            base_salary,
            overtime_hours,
            self.hours_per_day,
            self.working_days_per_month,
            self.multiplier,
        )


# 160 standard hours a month.
FIXED_MONTHLY_160 = OvertimePolicy(
    name="fixed_monthly_160",
    hours_per_day=Decimal("8"),
    working_days_per_month=Decimal("20"),
)

# 8 hours a day over 22 working days (176 hours).
DAILY_8_BY_22 = OvertimePolicy(
    name="daily_8x22",
    hours_per_day=Decimal("8"),
    working_days_per_month=Decimal("22"),
)

OVERTIME_POLICIES: dict[str, OvertimePolicy] = {
    policy.name: policy for policy in (FIXED_MONTHLY_160, DAILY_8_BY_22)
}


def get_overtime_policy(name: str) -> OvertimePolicy:
    """Look up a named policy."""
    try:
        return OVERTIME_POLICIES[name]
    except KeyError:
        raise InvalidInputError(
            "overtime_policy", name, f"expected one of {sorted(OVERTIME_POLICIES)}"
        ) from None

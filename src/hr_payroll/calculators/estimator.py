"""Quick paycheck estimate with flat-rate withholding."""

from __future__ import annotations

from decimal import Decimal

from hr_payroll.calculators.overtime import FIXED_MONTHLY_160
from hr_payroll.calculators.social_security import estimate_fica
from hr_payroll.calculators.types import PaycheckEstimate
from hr_payroll.calculators.validation import Number, non_negative

FLAT_TAX_RATE = Decimal("0.22")
HEALTH_INSURANCE = Decimal("350")
RETIREMENT_RATE = Decimal("0.05")


def estimate_paycheck(
    base_salary: Number,
    overtime_hours: Number = 0,
    bonus: Number = 0,
) -> PaycheckEstimate:
    """Estimate a paycheck for what-if comparisons.

    Flat income tax and uncapped FICA on gross, a fixed health premium and a
    retirement contribution on base salary. Amounts are unrounded.
    """
    base = non_negative(base_salary, "base_salary")
    hours = non_negative(overtime_hours, "overtime_hours")
    extra = non_negative(bonus, "bonus")

    overtime_rate = FIXED_MONTHLY_160.overtime_rate(base)
    overtime_pay = hours * overtime_rate
    gross_pay = base + overtime_pay + extra
    fica = estimate_fica(gross_pay)

    return PaycheckEstimate(
        overtime_rate=overtime_rate,
        overtime_pay=overtime_pay,
        gross_pay=gross_pay,
        income_tax=gross_pay * FLAT_TAX_RATE,
        social_security=fica.social_security,
        medicare=fica.medicare,
        health_insurance=HEALTH_INSURANCE,
        retirement=base * RETIREMENT_RATE,
    )

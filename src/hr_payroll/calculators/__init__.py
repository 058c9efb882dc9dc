"""Payroll calculation engine."""

from hr_payroll.calculators.engine import (
    PayrollCalculator,
    compute_allowances,
    compute_net_pay,
)
from hr_payroll.calculators.estimator import estimate_paycheck
from hr_payroll.calculators.line_builder import LineItemBuilder
from hr_payroll.calculators.overtime import (
    DAILY_8_BY_22,
    FIXED_MONTHLY_160,
    OvertimePolicy,
    compute_overtime_pay,
    get_overtime_policy,
)
from hr_payroll.calculators.social_security import compute_social_security, estimate_fica
from hr_payroll.calculators.tax_calculator import (
    DEFAULT_BRACKETS,
    TaxCalculator,
    compute_monthly_tax,
    compute_progressive_tax,
)
from hr_payroll.calculators.types import PayslipResult, PeriodInputs, SalaryStructure
from hr_payroll.calculators.validation import InvalidInputError

__all__ = [
    "DAILY_8_BY_22",
    "DEFAULT_BRACKETS",
    "FIXED_MONTHLY_160",
    "InvalidInputError",
    "LineItemBuilder",
    "OvertimePolicy",
    "PayrollCalculator",
    "PayslipResult",
    "PeriodInputs",
    "SalaryStructure",
    "TaxCalculator",
    "compute_allowances",
    "compute_monthly_tax",
    "compute_net_pay",
    "compute_overtime_pay",
    "compute_progressive_tax",
    "compute_social_security",
    "estimate_fica",
    "estimate_paycheck",
    "get_overtime_policy",
]

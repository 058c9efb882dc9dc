"""Payroll calculation engine - main orchestrator."""

from __future__ import annotations

import hashlib
import json
from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from hr_payroll.calculators.overtime import FIXED_MONTHLY_160, OvertimePolicy
from hr_payroll.calculators.social_security import (
    STATUTORY_CAP,
    STATUTORY_RATE,
    compute_social_security,
)
from hr_payroll.calculators.tax_calculator import (
    DEFAULT_BRACKETS,
    compute_monthly_tax,
    validate_brackets,
)
from hr_payroll.calculators.types import (
    ZERO,
    PayslipResult,
    PeriodInputs,
    SalaryStructure,
    TaxBracket,
)
from hr_payroll.calculators.validation import (
    InvalidInputError,
    Number,
    non_negative,
    optional_non_negative,
    to_decimal,
)

CENTS = Decimal("0.01")


def round_to_cents(amount: Decimal) -> Decimal:
    """Round amount to 2 decimal places."""
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def compute_allowances(structure: SalaryStructure) -> Decimal:
    """Sum of housing, transport and other allowances."""
    return (
        optional_non_negative(structure.housing_allowance, "housing_allowance")
        + optional_non_negative(structure.transport_allowance, "transport_allowance")
        + optional_non_negative(structure.other_allowances, "other_allowances")
    )


def compute_net_pay(
    gross_pay: Number,
    tax_deduction: Number,
    social_security: Number,
    other_deductions: Number = Decimal("0"),
) -> Decimal:
    """Gross minus all deductions. May be negative; it is not clamped."""
    return to_decimal(gross_pay, "gross_pay") - (
        non_negative(tax_deduction, "tax_deduction")
        + non_negative(social_security, "social_security")
        + non_negative(other_deductions, "other_deductions")
    )


class PayrollCalculator:
    """Turns a salary structure and period inputs into a payslip.

    Calculation order:
    1) Allowances
    2) Overtime pay (derived from hours, or the supplied amount)
    3) Social security on base salary, capped
    4) Round each earning and deduction component to cents
    5) Gross = base + allowances + overtime + bonus + commission
    6) Monthly income tax on gross, in whole currency units
    7) Net = gross - (tax + social security + other deductions)

    Components are unrounded until step 4 and each is rounded exactly once,
    so gross and net are exact sums of the figures printed on the payslip.
    """

    def __init__(
        self,
        overtime_policy: OvertimePolicy = FIXED_MONTHLY_160,
        brackets: Sequence[TaxBracket] = DEFAULT_BRACKETS,
        social_security_rate: Number = STATUTORY_RATE,
        social_security_cap: Number = STATUTORY_CAP,
    ):
        validate_brackets(brackets)
        self.overtime_policy = overtime_policy
        self.brackets = tuple(brackets)
        self.social_security_rate = non_negative(social_security_rate, "social_security_rate")
        self.social_security_cap = non_negative(social_security_cap, "social_security_cap")

    def calculate(self, structure: SalaryStructure, inputs: PeriodInputs) -> PayslipResult:
        """Calculate one payslip. Pure and deterministic."""
        base_salary = non_negative(structure.base_salary, "base_salary")
        bonus = optional_non_negative(inputs.bonus, "bonus")
        commission = optional_non_negative(inputs.commission, "commission")
        other_deductions = optional_non_negative(inputs.other_deductions, "other_deductions")

        if inputs.pay_period_end < inputs.pay_period_start:
            raise InvalidInputError(
                "pay_period_end", inputs.pay_period_end, "is before pay_period_start"
            )

        allowances = compute_allowances(structure)
        overtime_pay = self.overtime_pay(base_salary, inputs)
        social_security = compute_social_security(
            base_salary, self.social_security_rate, self.social_security_cap
        )

        earnings = [
            round_to_cents(amount)
            for amount in (base_salary, allowances, overtime_pay, bonus, commission)
        ]
        gross_pay = sum(earnings, ZERO)
        social_security = round_to_cents(social_security)
        other_deductions = round_to_cents(other_deductions)
        tax_deduction = compute_monthly_tax(gross_pay, self.brackets)

        return PayslipResult(
            allowances=earnings[1],
            overtime_pay=earnings[2],
            gross_pay=gross_pay,
            social_security=social_security,
            tax_deduction=round_to_cents(tax_deduction),
            other_deductions=other_deductions,
            net_pay=compute_net_pay(gross_pay, tax_deduction, social_security, other_deductions),
            inputs_fingerprint=self.compute_inputs_fingerprint(structure, inputs),
        )

    def overtime_pay(self, base_salary: Decimal, inputs: PeriodInputs) -> Decimal:
        """Resolve overtime pay from hours or a pre-supplied amount."""
        if inputs.overtime_hours is not None and inputs.overtime_pay is not None:
            raise InvalidInputError(
                "overtime", inputs.overtime_pay, "give overtime hours or pay, not both"
            )
        if inputs.overtime_pay is not None:
            return non_negative(inputs.overtime_pay, "overtime_pay")
        if inputs.overtime_hours is not None:
            return self.overtime_policy.overtime_pay(base_salary, inputs.overtime_hours)
        return Decimal("0")

    def compute_inputs_fingerprint(
        self, structure: SalaryStructure, inputs: PeriodInputs
    ) -> str:
        """Fingerprint of every input and policy that affects the result."""
        data: dict[str, Any] = {
            "base_salary": str(structure.base_salary),
            "housing_allowance": str(structure.housing_allowance),
            "transport_allowance": str(structure.transport_allowance),
            "other_allowances": str(structure.other_allowances),
            "pay_period_start": inputs.pay_period_start.isoformat(),
            "pay_period_end": inputs.pay_period_end.isoformat(),
            "overtime_hours": _str_or_none(inputs.overtime_hours),
            "overtime_pay": _str_or_none(inputs.overtime_pay),
            "bonus": str(inputs.bonus),
            "commission": str(inputs.commission),
            "other_deductions": str(inputs.other_deductions),
            "overtime_policy": self.overtime_policy.name,
            "brackets": [
                [_str_or_none(b.upper_bound), str(b.rate)] for b in self.brackets
            ],
            "social_security": [str(self.social_security_rate), str(self.social_security_cap)],
        }
        json_str = json.dumps(data, sort_keys=True)
        return hashlib.sha256(json_str.encode()).hexdigest()[:32]


def _str_or_none(value: object) -> str | None:
    return str(value) if value is not None else None

"""Type definitions for the calculation pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any

ZERO = Decimal("0")


class LineType(str, Enum):
    """Payslip line item types."""

    EARNING = "EARNING"
    DEDUCTION = "DEDUCTION"
    TAX = "TAX"


@dataclass(frozen=True)
class TaxBracket:
    """One band of a progressive schedule.

    ``upper_bound`` of None means the band has no ceiling.
    """

    upper_bound: Decimal | None
    rate: Decimal  # As decimal, e.g., 0.05 for 5%


@dataclass(frozen=True)
class SalaryStructure:
    """An employee's compensation terms effective from a given date."""

    base_salary: Decimal
    housing_allowance: Decimal = ZERO
    transport_allowance: Decimal = ZERO
    other_allowances: Decimal = ZERO
    effective_date: date | None = None


@dataclass(frozen=True)
class PeriodInputs:
    """Variable pay inputs for one pay period.

    Exactly one of ``overtime_hours`` (rate is derived from the salary) or
    ``overtime_pay`` (amount already computed by HR) may be given.
    """

    pay_period_start: date
    pay_period_end: date
    overtime_hours: Decimal | None = None
    overtime_pay: Decimal | None = None
    bonus: Decimal = ZERO
    commission: Decimal = ZERO
    other_deductions: Decimal = ZERO


@dataclass(frozen=True)
class PayslipResult:
    """Computed payslip amounts, rounded to two decimals."""

    allowances: Decimal
    overtime_pay: Decimal
    gross_pay: Decimal
    social_security: Decimal
    tax_deduction: Decimal
    other_deductions: Decimal
    net_pay: Decimal
    inputs_fingerprint: str

    @property
    def total_deductions(self) -> Decimal:
        return self.tax_deduction + self.social_security + self.other_deductions

    def to_dict(self) -> dict[str, Any]:
        """Return the output contract as a plain dict."""
        return {
            "gross_pay": self.gross_pay,
            "tax_deduction": self.tax_deduction,
            "social_security": self.social_security,
            "net_pay": self.net_pay,
            "allowances": self.allowances,
            "overtime_pay": self.overtime_pay,
        }


@dataclass
class LineCandidate:
    """A payslip line before rendering or persistence."""

    line_type: LineType
    code: str
    amount: Decimal  # Signed per conventions
    quantity: Decimal | None = None
    rate: Decimal | None = None
    explanation: str | None = None

    def to_canonical_dict(self) -> dict[str, Any]:
        """Return canonical dict for hashing (deterministic ordering)."""
        return {
            "line_type": self.line_type.value,
            "code": self.code,
            "quantity": str(self.quantity) if self.quantity is not None else None,
            "rate": str(self.rate) if self.rate is not None else None,
            "amount": str(self.amount),
        }


@dataclass
class PaycheckEstimate:
    """Flat-rate paycheck estimate with itemised deductions."""

    overtime_rate: Decimal
    overtime_pay: Decimal
    gross_pay: Decimal
    income_tax: Decimal
    social_security: Decimal
    medicare: Decimal
    health_insurance: Decimal
    retirement: Decimal

    @property
    def total_deductions(self) -> Decimal:
        return (
            self.income_tax
            + self.social_security
            + self.medicare
            + self.health_insurance
            + self.retirement
        )

    @property
    def net_pay(self) -> Decimal:
        return self.gross_pay - self.total_deductions

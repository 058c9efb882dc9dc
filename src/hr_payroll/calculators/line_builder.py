"""Signed payslip line items."""

from __future__ import annotations

import hashlib
import json
from decimal import Decimal

from hr_payroll.calculators.engine import round_to_cents
from hr_payroll.calculators.types import ZERO, LineCandidate, LineType, PayslipResult

WITHHOLDING_TYPES = (LineType.TAX, LineType.DEDUCTION)


class LineItemBuilder:
    """Renders a computed payslip as line items.

    Earnings carry positive amounts; tax and deductions withheld from the
    employee carry negative ones, so the lines sum to net pay. Zero-amount
    lines are omitted except base salary.
    """

    @staticmethod
    def line_hash(line: LineCandidate) -> str:
        """Stable identifier for a line's type, code, quantity, rate and amount."""
        payload = json.dumps(line.to_canonical_dict(), sort_keys=True)
        return hashlib.sha256(payload.encode()).hexdigest()[:32]

    @staticmethod
    def earning(
        code: str,
        amount: Decimal,
        explanation: str,
        quantity: Decimal | None = None,
        rate: Decimal | None = None,
    ) -> LineCandidate:
        return LineCandidate(
            line_type=LineType.EARNING,
            code=code,
            amount=round_to_cents(abs(amount)),
            quantity=quantity,
            rate=rate,
            explanation=explanation,
        )

    @staticmethod
    def withholding(
        line_type: LineType, code: str, amount: Decimal, explanation: str
    ) -> LineCandidate:
        """A tax or deduction line; the amount is stored negated."""
        if line_type not in WITHHOLDING_TYPES:
            raise ValueError(f"{line_type.value} lines are not withheld")
        return LineCandidate(
            line_type=line_type,
            code=code,
            amount=-round_to_cents(abs(amount)),
            explanation=explanation,
        )

    @classmethod
    def build_lines(
        cls,
        base_salary: Decimal,
        result: PayslipResult,
        bonus: Decimal = ZERO,
        commission: Decimal = ZERO,
        overtime_hours: Decimal | None = None,
    ) -> list[LineCandidate]:
        """BASE, ALLOW, OT, BONUS, COMM, then PIT, SSO, OTHER."""
        lines = [cls.earning("BASE", base_salary, "Base salary")]

        earnings = (
            ("ALLOW", result.allowances, "Allowances", None),
            ("OT", result.overtime_pay, "Overtime", overtime_hours),
            ("BONUS", bonus, "Bonus", None),
            ("COMM", commission, "Commission", None),
        )
        for code, amount, explanation, quantity in earnings:
            if amount:
                lines.append(cls.earning(code, amount, explanation, quantity=quantity))

        withheld = (
            (LineType.TAX, "PIT", result.tax_deduction, "Income tax"),
            (LineType.DEDUCTION, "SSO", result.social_security, "Social security"),
            (LineType.DEDUCTION, "OTHER", result.other_deductions, "Other deductions"),
        )
        for line_type, code, amount, explanation in withheld:
            if amount:
                lines.append(cls.withholding(line_type, code, amount, explanation))

        return lines

    @staticmethod
    def totals(lines: list[LineCandidate]) -> dict[LineType, Decimal]:
        """Signed sum per line type; every type is present."""
        totals = dict.fromkeys(LineType, ZERO)
        for line in lines:
            totals[line.line_type] += line.amount
        return totals

    @staticmethod
    def sign_errors(lines: list[LineCandidate]) -> list[str]:
        """One message per line whose sign contradicts its type."""
        errors = []
        for line in lines:
            if line.line_type == LineType.EARNING and line.amount < 0:
                errors.append(f"{line.code}: earning of {line.amount} is negative")
            elif line.line_type in WITHHOLDING_TYPES and line.amount > 0:
                errors.append(f"{line.code}: {line.line_type.value.lower()} of {line.amount} is positive")
        return errors

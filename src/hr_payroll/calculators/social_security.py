"""Social security contributions."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from hr_payroll.calculators.validation import InvalidInputError, Number, non_negative

STATUTORY_RATE = Decimal("0.05")
STATUTORY_CAP = Decimal("750")

ESTIMATOR_SOCIAL_SECURITY_RATE = Decimal("0.062")
ESTIMATOR_MEDICARE_RATE = Decimal("0.0145")


def _rate(value: Number, field: str) -> Decimal:
    rate = non_negative(value, field)
    if rate > 1:
        raise InvalidInputError(field, value, "must not exceed 1")
    return rate


def compute_social_security(
    base_salary: Number,
    rate: Number = STATUTORY_RATE,
    cap: Number = STATUTORY_CAP,
) -> Decimal:
    """Statutory employee contribution: ``min(base_salary * rate, cap)``."""
    base = non_negative(base_salary, "base_salary")
    return min(base * _rate(rate, "rate"), non_negative(cap, "cap"))


@dataclass(frozen=True)
class FicaEstimate:
    """Uncapped social security and Medicare estimate."""

    social_security: Decimal
    medicare: Decimal

    @property
    def total(self) -> Decimal:
        return self.social_security + self.medicare


def estimate_fica(
    gross_pay: Number,
    social_security_rate: Number = ESTIMATOR_SOCIAL_SECURITY_RATE,
    medicare_rate: Number = ESTIMATOR_MEDICARE_RATE,
) -> FicaEstimate:
    """Illustrative payroll-tax estimate on gross pay, with no wage ceiling.

    Not the statutory contribution; see compute_social_security for that.
    """
    gross = non_negative(gross_pay, "gross_pay")
    return FicaEstimate(
        social_security=gross * _rate(social_security_rate, "social_security_rate"),
        medicare=gross * _rate(medicare_rate, "medicare_rate"),
    )

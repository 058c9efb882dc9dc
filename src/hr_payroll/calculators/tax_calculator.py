"""Progressive personal income tax."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from decimal import ROUND_HALF_UP, Decimal

from hr_payroll.calculators.types import ZERO, TaxBracket
from hr_payroll.calculators.validation import InvalidInputError, Number, non_negative, to_decimal

MONTHS_PER_YEAR = Decimal("12")
WHOLE_UNIT = Decimal("1")

# Annual schedule: (upper bound of band, marginal rate). Last band is open.
DEFAULT_BRACKETS: tuple[TaxBracket, ...] = (
    TaxBracket(Decimal("150000"), Decimal("0")),
    TaxBracket(Decimal("300000"), Decimal("0.05")),
    TaxBracket(Decimal("500000"), Decimal("0.10")),
    TaxBracket(Decimal("750000"), Decimal("0.15")),
    TaxBracket(Decimal("1000000"), Decimal("0.20")),
    TaxBracket(Decimal("2000000"), Decimal("0.25")),
    TaxBracket(Decimal("5000000"), Decimal("0.30")),
    TaxBracket(None, Decimal("0.35")),
)


def validate_brackets(brackets: Sequence[TaxBracket]) -> None:
    """Check that a schedule is usable.

    Bands must be non-empty, have strictly ascending upper bounds, leave only
    the last band open-ended, and carry rates between 0 and 1.
    """
    if not brackets:
        raise InvalidInputError("brackets", brackets, "schedule is empty")

    previous = ZERO
    for index, bracket in enumerate(brackets):
        rate = to_decimal(bracket.rate, f"brackets[{index}].rate")
        if rate < 0 or rate > 1:
            raise InvalidInputError(
                f"brackets[{index}].rate", bracket.rate, "must be between 0 and 1"
            )

        is_last = index == len(brackets) - 1
        if bracket.upper_bound is None:
            if not is_last:
                raise InvalidInputError(
                    f"brackets[{index}].upper_bound", None, "only the last band may be open"
                )
            continue

        upper = to_decimal(bracket.upper_bound, f"brackets[{index}].upper_bound")
        if upper <= previous:
            raise InvalidInputError(
                f"brackets[{index}].upper_bound",
                bracket.upper_bound,
                f"must be greater than {previous}",
            )
        previous = upper


def parse_brackets(rows: Iterable[tuple[Number | None, Number]]) -> tuple[TaxBracket, ...]:
    """Build a validated schedule from ``(upper_bound, rate)`` pairs."""
    brackets = tuple(
        TaxBracket(
            upper_bound=to_decimal(upper, "upper_bound") if upper is not None else None,
            rate=to_decimal(rate, "rate"),
        )
        for upper, rate in rows
    )
    validate_brackets(brackets)
    return brackets


def compute_progressive_tax(
    annual_income: Number,
    brackets: Sequence[TaxBracket] = DEFAULT_BRACKETS,
) -> Decimal:
    """Calculate annual tax by applying each band's rate to the income inside it.

    The result is not rounded.
    """
    income = non_negative(annual_income, "annual_income")
    validate_brackets(brackets)

    total_tax = ZERO
    floor = ZERO

    for bracket in brackets:
        if bracket.upper_bound is None or income <= bracket.upper_bound:
            total_tax += (income - floor) * bracket.rate
            break

        total_tax += (bracket.upper_bound - floor) * bracket.rate
        floor = bracket.upper_bound

    return total_tax


def compute_monthly_tax(
    monthly_gross_pay: Number,
    brackets: Sequence[TaxBracket] = DEFAULT_BRACKETS,
) -> Decimal:
    """Annualise monthly gross, tax it, and spread it back over twelve months.

    Rounded half-up to a whole currency unit.
    """
    gross = non_negative(monthly_gross_pay, "monthly_gross_pay")
    annual_tax = compute_progressive_tax(gross * MONTHS_PER_YEAR, brackets)
    return (annual_tax / MONTHS_PER_YEAR).quantize(WHOLE_UNIT, rounding=ROUND_HALF_UP)


class TaxCalculator:
    """Income tax calculator bound to one schedule."""

    def __init__(self, brackets: Sequence[TaxBracket] = DEFAULT_BRACKETS):
        validate_brackets(brackets)
        self.brackets = tuple(brackets)

    def annual_tax(self, annual_income: Number) -> Decimal:
        return compute_progressive_tax(annual_income, self.brackets)

    def monthly_tax(self, monthly_gross_pay: Number) -> Decimal:
        return compute_monthly_tax(monthly_gross_pay, self.brackets)

    def effective_rate(self, annual_income: Number) -> Decimal:
        """Tax as a fraction of income (0 for zero income)."""
        income = non_negative(annual_income, "annual_income")
        if income == 0:
            return ZERO
        return self.annual_tax(income) / income

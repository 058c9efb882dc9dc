"""Unit tests for progressive income tax."""

from decimal import Decimal

import pytest

from hr_payroll.calculators.tax_calculator import (
    DEFAULT_BRACKETS,
    TaxCalculator,
    compute_monthly_tax,
    compute_progressive_tax,
    parse_brackets,
    validate_brackets,
)
from hr_payroll.calculators.types import TaxBracket
from hr_payroll.calculators.validation import InvalidInputError


class TestProgressiveTaxCalculation:
    """Test progressive bracket calculations on the default schedule."""

    def test_zero_income_returns_zero(self):
        assert compute_progressive_tax(0) == Decimal("0")

    def test_exempt_band_boundary(self):
        """Income up to 150,000 is untaxed."""
        assert compute_progressive_tax(150000) == Decimal("0")

    def test_second_band_boundary(self):
        # 150000 * 0.05
        assert compute_progressive_tax(300000) == Decimal("7500")

    def test_within_band(self):
        # 7500 + 50000 * 0.10
        assert compute_progressive_tax(350000) == Decimal("12500")

    @pytest.mark.parametrize(
        "income,expected",
        [
            (500000, Decimal("27500")),
            (750000, Decimal("65000")),
            (1000000, Decimal("115000")),
            (2000000, Decimal("365000")),
            (5000000, Decimal("1265000")),
            (6000000, Decimal("1615000")),
        ],
    )
    def test_cumulative_band_totals(self, income, expected):
        """Each band only taxes the income inside it."""
        assert compute_progressive_tax(income) == expected

    def test_monotonic(self):
        """More income never means less tax."""
        incomes = [0, 1, 149999, 150000, 150001, 299999.99, 300000, 999999, 1000001, 7500000]
        taxes = [compute_progressive_tax(i) for i in incomes]
        assert taxes == sorted(taxes)

    def test_same_input_same_output(self):
        assert compute_progressive_tax("987654.32") == compute_progressive_tax("987654.32")

    def test_negative_income_rejected(self):
        with pytest.raises(InvalidInputError) as exc_info:
            compute_progressive_tax(-1)

        assert exc_info.value.field == "annual_income"

    @pytest.mark.parametrize("value", ["NaN", float("inf"), "abc", None, True])
    def test_non_numeric_income_rejected(self, value):
        with pytest.raises(InvalidInputError):
            compute_progressive_tax(value)

    def test_custom_schedule(self):
        brackets = parse_brackets([(10000, "0.10"), (40000, "0.12"), (None, "0.22")])

        # 10000 * 0.10 + 30000 * 0.12 + 10000 * 0.22
        assert compute_progressive_tax(50000, brackets) == Decimal("6800.00")


class TestMonthlyTax:
    """Test monthly withholding derived from the annual schedule."""

    def test_matches_annualised_schedule(self):
        # 240000 annual: 90000 * 0.05 = 4500 / 12 = 375
        assert compute_monthly_tax(20000) == Decimal("375")
        assert compute_monthly_tax(20000) == (
            compute_progressive_tax(240000) / 12
        ).quantize(Decimal("1"))

    def test_rounds_half_up(self):
        """0.5 rounds up, not to even."""
        # 150120 annual: 120 * 0.05 = 6 / 12 = 0.5
        assert compute_monthly_tax(12510) == Decimal("1")

    def test_rounds_to_whole_units(self):
        # 280500 annual: 6525 / 12 = 543.75 -> 544; 280440: 6522 / 12 = 543.5 -> 544
        assert compute_monthly_tax(23375) == Decimal("544")
        assert compute_monthly_tax(23370) == Decimal("544")
        # 280320: 6516 / 12 = 543.0
        assert compute_monthly_tax(23360) == Decimal("543")

    def test_below_threshold_is_zero(self):
        assert compute_monthly_tax(12500) == Decimal("0")

    def test_negative_gross_rejected(self):
        with pytest.raises(InvalidInputError):
            compute_monthly_tax(-100)


class TestBracketValidation:
    """Test rejection of malformed schedules."""

    def test_default_schedule_is_valid(self):
        validate_brackets(DEFAULT_BRACKETS)
        assert len(DEFAULT_BRACKETS) == 8
        assert DEFAULT_BRACKETS[-1].upper_bound is None

    def test_empty_schedule_rejected(self):
        with pytest.raises(InvalidInputError):
            validate_brackets([])

    def test_non_ascending_bounds_rejected(self):
        brackets = [
            TaxBracket(Decimal("300000"), Decimal("0")),
            TaxBracket(Decimal("150000"), Decimal("0.05")),
            TaxBracket(None, Decimal("0.10")),
        ]
        with pytest.raises(InvalidInputError):
            compute_progressive_tax(100, brackets)

    def test_duplicate_bounds_rejected(self):
        with pytest.raises(InvalidInputError):
            parse_brackets([(1000, "0.1"), (1000, "0.2"), (None, "0.3")])

    def test_open_band_must_be_last(self):
        with pytest.raises(InvalidInputError):
            parse_brackets([(None, "0.1"), (1000, "0.2")])

    def test_rate_out_of_range_rejected(self):
        with pytest.raises(InvalidInputError):
            parse_brackets([(1000, "1.5"), (None, "0.2")])
        with pytest.raises(InvalidInputError):
            parse_brackets([(1000, "-0.1"), (None, "0.2")])

    def test_bounded_final_band_taxes_nothing_beyond(self):
        """A schedule without an open band leaves income above it untaxed."""
        brackets = parse_brackets([(1000, "0.1")])
        assert compute_progressive_tax(5000, brackets) == Decimal("100.0")


class TestTaxCalculator:
    """Test the schedule-bound calculator."""

    def test_uses_schedule(self):
        calculator = TaxCalculator()
        assert calculator.annual_tax(300000) == Decimal("7500")
        assert calculator.monthly_tax(25000) == Decimal("625")

    def test_effective_rate(self):
        calculator = TaxCalculator()
        assert calculator.effective_rate(0) == Decimal("0")
        assert calculator.effective_rate(300000) == Decimal("0.025")

    def test_rejects_invalid_schedule(self):
        with pytest.raises(InvalidInputError):
            TaxCalculator([])

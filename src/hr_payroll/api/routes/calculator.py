"""Stateless calculation endpoints."""

from decimal import ROUND_HALF_UP, Decimal

from fastapi import APIRouter, status

from hr_payroll.api.dependencies import AppSettings
from hr_payroll.api.schemas import (
    ErrorResponse,
    EstimateRequest,
    EstimateResponse,
    LineItemResponse,
    PayslipCalculationRequest,
    PayslipCalculationResponse,
    TaxCalculationRequest,
    TaxCalculationResponse,
)
from hr_payroll.calculators.engine import PayrollCalculator, round_to_cents
from hr_payroll.calculators.estimator import estimate_paycheck
from hr_payroll.calculators.line_builder import LineItemBuilder
from hr_payroll.calculators.overtime import get_overtime_policy
from hr_payroll.calculators.tax_calculator import (
    DEFAULT_BRACKETS,
    MONTHS_PER_YEAR,
    TaxCalculator,
    parse_brackets,
)
from hr_payroll.calculators.types import PeriodInputs, SalaryStructure

router = APIRouter(prefix="/calculator", tags=["calculator"])

RATE_PRECISION = Decimal("0.0001")


@router.post(
    "/payslip",
    response_model=PayslipCalculationResponse,
    status_code=status.HTTP_200_OK,
    responses={422: {"model": ErrorResponse}},
)
async def calculate_payslip(
    payload: PayslipCalculationRequest, settings: AppSettings
) -> PayslipCalculationResponse:
    """Calculate a payslip without storing it."""
    calculator = PayrollCalculator(
        overtime_policy=get_overtime_policy(payload.overtime_policy or settings.overtime_policy),
        social_security_rate=settings.social_security_rate,
        social_security_cap=settings.social_security_cap,
    )
    structure = SalaryStructure(
        base_salary=payload.base_salary,
        housing_allowance=payload.housing_allowance,
        transport_allowance=payload.transport_allowance,
        other_allowances=payload.other_allowances,
    )
    inputs = PeriodInputs(
        pay_period_start=payload.pay_period_start,
        pay_period_end=payload.pay_period_end,
        overtime_hours=payload.overtime_hours,
        overtime_pay=payload.overtime_pay,
        bonus=payload.bonus,
        commission=payload.commission,
        other_deductions=payload.other_deductions,
    )
    result = calculator.calculate(structure, inputs)
    lines = LineItemBuilder.build_lines(
        payload.base_salary,
        result,
        bonus=payload.bonus,
        commission=payload.commission,
        overtime_hours=payload.overtime_hours,
    )

    return PayslipCalculationResponse(
        **result.to_dict(),
        other_deductions=result.other_deductions,
        inputs_fingerprint=result.inputs_fingerprint,
        lines=[
            LineItemResponse(
                line_type=line.line_type.value,
                code=line.code,
                description=line.explanation,
                amount=line.amount,
                quantity=line.quantity,
                line_hash=LineItemBuilder.line_hash(line),
            )
            for line in lines
        ],
    )


@router.post(
    "/tax",
    response_model=TaxCalculationResponse,
    responses={422: {"model": ErrorResponse}},
)
async def calculate_tax(payload: TaxCalculationRequest) -> TaxCalculationResponse:
    """Progressive income tax for annual income or a monthly gross."""
    brackets = (
        parse_brackets((b.upper_bound, b.rate) for b in payload.brackets)
        if payload.brackets is not None
        else DEFAULT_BRACKETS
    )
    calculator = TaxCalculator(brackets)

    if payload.monthly_gross_pay is not None:
        annual_income = payload.monthly_gross_pay * MONTHS_PER_YEAR
        monthly_tax = calculator.monthly_tax(payload.monthly_gross_pay)
    else:
        annual_income = payload.annual_income
        monthly_tax = None

    return TaxCalculationResponse(
        annual_income=annual_income,
        annual_tax=round_to_cents(calculator.annual_tax(annual_income)),
        monthly_tax=monthly_tax,
        effective_rate=calculator.effective_rate(annual_income).quantize(
            RATE_PRECISION, rounding=ROUND_HALF_UP
        ),
    )


@router.post("/estimate", response_model=EstimateResponse)
async def estimate(payload: EstimateRequest) -> EstimateResponse:
    """Quick flat-rate paycheck estimate."""
    result = estimate_paycheck(payload.base_salary, payload.overtime_hours, payload.bonus)
    return EstimateResponse(
        overtime_rate=round_to_cents(result.overtime_rate),
        overtime_pay=round_to_cents(result.overtime_pay),
        gross_pay=round_to_cents(result.gross_pay),
        income_tax=round_to_cents(result.income_tax),
        social_security=round_to_cents(result.social_security),
        medicare=round_to_cents(result.medicare),
        health_insurance=round_to_cents(result.health_insurance),
        retirement=round_to_cents(result.retirement),
        total_deductions=round_to_cents(result.total_deductions),
        net_pay=round_to_cents(result.net_pay),
    )

"""Pydantic schemas for API request/response models."""

from datetime import date, datetime
from decimal import Decimal
from typing import Annotated, Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

NonNegativeDecimal = Annotated[Decimal, Field(ge=0)]


# ============================================================================
# Calculator schemas
# ============================================================================


class PayslipCalculationRequest(BaseModel):
    """Inputs for a one-off payslip calculation."""

    base_salary: Decimal = Field(ge=0)
    housing_allowance: NonNegativeDecimal = Decimal("0")
    transport_allowance: NonNegativeDecimal = Decimal("0")
    other_allowances: NonNegativeDecimal = Decimal("0")
    overtime_hours: Decimal | None = Field(default=None, ge=0)
    overtime_pay: Decimal | None = Field(default=None, ge=0)
    bonus: NonNegativeDecimal = Decimal("0")
    commission: NonNegativeDecimal = Decimal("0")
    other_deductions: NonNegativeDecimal = Decimal("0")
    pay_period_start: date
    pay_period_end: date
    overtime_policy: str | None = None

    @model_validator(mode="after")
    def check_period(self) -> "PayslipCalculationRequest":
        if self.pay_period_end < self.pay_period_start:
            raise ValueError("pay_period_end must not be before pay_period_start")
        return self


class LineItemResponse(BaseModel):
    """A signed payslip line."""

    line_type: str
    code: str
    description: str | None = None
    amount: Decimal
    quantity: Decimal | None = None
    line_hash: str


class PayslipCalculationResponse(BaseModel):
    """Computed payslip amounts."""

    gross_pay: Decimal
    tax_deduction: Decimal
    social_security: Decimal
    other_deductions: Decimal
    net_pay: Decimal
    allowances: Decimal
    overtime_pay: Decimal
    inputs_fingerprint: str
    lines: list[LineItemResponse]


class TaxBracketSchema(BaseModel):
    """One band of a progressive schedule; null upper bound is open-ended."""

    upper_bound: Decimal | None = Field(default=None, gt=0)
    rate: Decimal = Field(ge=0, le=1)


class TaxCalculationRequest(BaseModel):
    """Monthly gross pay, or annual income, to tax."""

    monthly_gross_pay: Decimal | None = Field(default=None, ge=0)
    annual_income: Decimal | None = Field(default=None, ge=0)
    brackets: list[TaxBracketSchema] | None = None

    @model_validator(mode="after")
    def check_income(self) -> "TaxCalculationRequest":
        if (self.monthly_gross_pay is None) == (self.annual_income is None):
            raise ValueError("give exactly one of monthly_gross_pay or annual_income")
        return self


class TaxCalculationResponse(BaseModel):
    """Progressive tax result."""

    annual_income: Decimal
    annual_tax: Decimal
    monthly_tax: Decimal | None = None
    effective_rate: Decimal


class EstimateRequest(BaseModel):
    """Inputs for the quick paycheck estimate."""

    base_salary: Decimal = Field(ge=0)
    overtime_hours: NonNegativeDecimal = Decimal("0")
    bonus: NonNegativeDecimal = Decimal("0")


class EstimateResponse(BaseModel):
    """Quick paycheck estimate, rounded to cents."""

    overtime_rate: Decimal
    overtime_pay: Decimal
    gross_pay: Decimal
    income_tax: Decimal
    social_security: Decimal
    medicare: Decimal
    health_insurance: Decimal
    retirement: Decimal
    total_deductions: Decimal
    net_pay: Decimal


# ============================================================================
# Salary schemas
# ============================================================================


class SalaryCreate(BaseModel):
    """Schema for appending a salary structure."""

    user_id: UUID
    base_salary: Decimal = Field(ge=0)
    housing_allowance: NonNegativeDecimal = Decimal("0")
    transport_allowance: NonNegativeDecimal = Decimal("0")
    other_allowances: NonNegativeDecimal = Decimal("0")
    effective_date: date


class SalaryResponse(BaseModel):
    """Schema for salary structure response."""

    model_config = ConfigDict(from_attributes=True)

    salary_id: UUID
    user_id: UUID
    base_salary: Decimal
    housing_allowance: Decimal
    transport_allowance: Decimal
    other_allowances: Decimal
    effective_date: date


# ============================================================================
# Overtime request schemas
# ============================================================================


class OvertimeRequestCreate(BaseModel):
    """Schema for submitting an overtime request."""

    user_id: UUID
    request_date: date
    hours: Decimal = Field(gt=0)
    reason: str | None = None


class OvertimeReviewRequest(BaseModel):
    """Schema for approving or rejecting an overtime request."""

    approve: bool
    reviewer_id: UUID | None = None
    notes: str | None = None


class OvertimeRequestResponse(BaseModel):
    """Schema for overtime request response."""

    model_config = ConfigDict(from_attributes=True)

    ot_request_id: UUID
    user_id: UUID
    request_date: date
    hours: Decimal
    reason: str | None = None
    status: str
    reviewed_by: UUID | None = None
    reviewed_at: datetime | None = None
    review_notes: str | None = None


# ============================================================================
# Payslip schemas
# ============================================================================


class PayslipEntry(BaseModel):
    """Manual entries for one employee."""

    user_id: UUID
    bonus: NonNegativeDecimal = Decimal("0")
    commission: NonNegativeDecimal = Decimal("0")
    other_deductions: NonNegativeDecimal = Decimal("0")
    overtime_pay: Decimal | None = Field(default=None, ge=0)


class PayslipGenerateRequest(BaseModel):
    """Schema for generating payslips for a pay period."""

    pay_period_start: date
    pay_period_end: date
    entries: list[PayslipEntry] = Field(min_length=1)

    @model_validator(mode="after")
    def check_period(self) -> "PayslipGenerateRequest":
        if self.pay_period_end < self.pay_period_start:
            raise ValueError("pay_period_end must not be before pay_period_start")
        return self


class PayslipResponse(BaseModel):
    """Schema for payslip response."""

    model_config = ConfigDict(from_attributes=True)

    payslip_id: UUID
    user_id: UUID
    salary_id: UUID
    pay_period_start: date
    pay_period_end: date
    base_salary: Decimal
    allowances: Decimal
    overtime_hours: Decimal | None = None
    overtime_pay: Decimal
    bonus: Decimal
    commission: Decimal
    gross_pay: Decimal
    social_security: Decimal
    tax_deduction: Decimal
    other_deductions: Decimal
    net_pay: Decimal
    status: str
    inputs_fingerprint: str
    engine_version: str
    generated_at: datetime
    paid_at: datetime | None = None


class PayslipGenerateResponse(BaseModel):
    """Schema for batch generation response."""

    payslips: list[PayslipResponse]
    errors: dict[str, str]


class PayslipListResponse(BaseModel):
    """Schema for listing payslips."""

    items: list[PayslipResponse]
    total: int


class MonthlySummaryResponse(BaseModel):
    """HR totals for pending payslips in a month."""

    model_config = ConfigDict(from_attributes=True)

    year: int
    month: int
    payslip_count: int
    employee_count: int
    total_base_salary: Decimal
    total_overtime_pay: Decimal
    total_bonus: Decimal
    total_commission: Decimal
    total_gross_pay: Decimal
    total_net_pay: Decimal


# ============================================================================
# Error schemas
# ============================================================================


class ErrorResponse(BaseModel):
    """Schema for error response."""

    detail: str
    code: str | None = None
    context: dict[str, Any] | None = None

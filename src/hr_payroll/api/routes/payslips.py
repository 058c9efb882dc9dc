"""Payslip ledger and report endpoints."""

from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path, Query, status

from hr_payroll.api.dependencies import DbSession, Payslips
from hr_payroll.api.schemas import (
    ErrorResponse,
    MonthlySummaryResponse,
    PayslipGenerateRequest,
    PayslipGenerateResponse,
    PayslipListResponse,
    PayslipResponse,
)
from hr_payroll.services.payslip_service import PayslipRequest

router = APIRouter(tags=["payslips"])


@router.post(
    "/payslips",
    response_model=PayslipGenerateResponse,
    status_code=status.HTTP_201_CREATED,
    responses={422: {"model": ErrorResponse}},
)
async def generate_payslips(
    db: DbSession, payslips: Payslips, payload: PayslipGenerateRequest
) -> PayslipGenerateResponse:
    """Generate pending payslips for the listed employees.

    Employees that cannot be processed are reported under ``errors``.
    """

    batch = await payslips.generate_batch(
        [
            PayslipRequest(
                user_id=entry.user_id,
                bonus=entry.bonus,
                commission=entry.commission,
                other_deductions=entry.other_deductions,
                overtime_pay=entry.overtime_pay,
            )
            for entry in payload.entries
        ],
        payload.pay_period_start,
        payload.pay_period_end,
    )
    await db.commit()

    return PayslipGenerateResponse(
        payslips=[PayslipResponse.model_validate(p) for p in batch.payslips.values()],
        errors={str(user_id): message for user_id, message in batch.errors.items()},
    )


@router.get("/payslips", response_model=PayslipListResponse)
async def list_payslips(
    payslips: Payslips,
    user_id: UUID | None = None,
    status_filter: Annotated[str | None, Query(alias="status")] = None,
    period_start: date | None = None,
    period_end: date | None = None,
) -> PayslipListResponse:
    """List payslips with optional filters."""
    items = await payslips.list_payslips(
        user_id=user_id,
        status=status_filter,
        period_start=period_start,
        period_end=period_end,
    )
    return PayslipListResponse(
        items=[PayslipResponse.model_validate(p) for p in items],
        total=len(items),
    )


@router.get(
    "/payslips/{payslip_id}",
    response_model=PayslipResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_payslip(
    payslips: Payslips,
    payslip_id: Annotated[UUID, Path()],
) -> PayslipResponse:
    """Get a specific payslip by ID."""
    payslip = await payslips.get(payslip_id)
    return PayslipResponse.model_validate(payslip)


@router.post(
    "/payslips/{payslip_id}/pay",
    response_model=PayslipResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def pay_payslip(
    db: DbSession,
    payslips: Payslips,
    payslip_id: Annotated[UUID, Path()],
) -> PayslipResponse:
    """Mark a pending payslip as paid."""
    payslip = await payslips.mark_paid(payslip_id)
    await db.commit()
    return PayslipResponse.model_validate(payslip)


@router.get("/reports/monthly", response_model=MonthlySummaryResponse)
async def monthly_report(
    payslips: Payslips,
    year: Annotated[int, Query(ge=2000, le=2100)],
    month: Annotated[int, Query(ge=1, le=12)],
) -> MonthlySummaryResponse:
    """Totals of pending payslips for a month."""
    summary = await payslips.monthly_summary(year, month)
    return MonthlySummaryResponse.model_validate(summary)

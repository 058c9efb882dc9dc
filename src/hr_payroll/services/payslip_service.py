"""Payslip generation, disbursement and monthly summaries."""

from __future__ import annotations

import calendar
import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hr_payroll.calculators.engine import PayrollCalculator
from hr_payroll.calculators.overtime import get_overtime_policy
from hr_payroll.calculators.types import PeriodInputs
from hr_payroll.calculators.validation import (
    InvalidInputError,
    Number,
    non_negative,
    optional_non_negative,
)
from hr_payroll.config import get_settings
from hr_payroll.models import Payslip
from hr_payroll.services.overtime_service import OvertimeService
from hr_payroll.services.salary_service import SalaryNotFoundError, SalaryService
from hr_payroll.services.state_machine import PayslipStateMachine, PayslipStatus

logger = logging.getLogger(__name__)


class PayslipNotFoundError(Exception):
    """Raised when a payslip does not exist."""

    def __init__(self, payslip_id: UUID):
        self.payslip_id = payslip_id
        super().__init__(f"Payslip {payslip_id} not found")


class PayslipImmutableError(Exception):
    """Raised when recalculating a payslip that has already been paid."""

    def __init__(self, payslip_id: UUID, status: str):
        self.payslip_id = payslip_id
        self.status = status
        super().__init__(f"Payslip {payslip_id} is {status} and cannot be recalculated")


@dataclass
class PayslipRequest:
    """Manual per-employee entries for one pay period."""

    user_id: UUID
    bonus: Number = Decimal("0")
    commission: Number = Decimal("0")
    other_deductions: Number = Decimal("0")
    overtime_pay: Number | None = None


@dataclass
class BatchResult:
    """Outcome of generating payslips for many employees."""

    payslips: dict[UUID, Payslip] = field(default_factory=dict)
    errors: dict[UUID, str] = field(default_factory=dict)

    @property
    def error_count(self) -> int:
        return len(self.errors)


@dataclass
class MonthlySummary:
    """Totals over pending payslips within one calendar month.

    ``payslip_count`` is the number of pending payslips, the HR screen's
    headline figure; ``employee_count`` counts distinct employees, which is
    lower when someone has several pay periods in the month.
    """

    year: int
    month: int
    payslip_count: int = 0
    employee_count: int = 0
    total_base_salary: Decimal = Decimal("0")
    total_overtime_pay: Decimal = Decimal("0")
    total_bonus: Decimal = Decimal("0")
    total_commission: Decimal = Decimal("0")
    total_gross_pay: Decimal = Decimal("0")
    total_net_pay: Decimal = Decimal("0")


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last day of a calendar month."""
    if not 1 <= month <= 12:
        raise InvalidInputError("month", month, "must be between 1 and 12")
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def default_calculator() -> PayrollCalculator:
    """Calculator configured from settings."""
    settings = get_settings()
    return PayrollCalculator(
        overtime_policy=get_overtime_policy(settings.overtime_policy),
        social_security_rate=settings.social_security_rate,
        social_security_cap=settings.social_security_cap,
    )


class PayslipService:
    """Service for the payslip ledger.

    Operations:
    - generate: compute and store a pending payslip for one employee
    - generate_batch: the same for many employees, collecting failures
    - mark_paid: pending → paid
    - monthly_summary: HR totals for pending payslips of a month
    """

    def __init__(self, session: AsyncSession, calculator: PayrollCalculator | None = None):
        self.session = session
        self.calculator = calculator or default_calculator()
        self.salary_service = SalaryService(session)
        self.overtime_service = OvertimeService(session)

    async def generate(
        self,
        user_id: UUID,
        period_start: date,
        period_end: date,
        bonus: Number = Decimal("0"),
        commission: Number = Decimal("0"),
        other_deductions: Number = Decimal("0"),
        overtime_pay: Number | None = None,
    ) -> Payslip:
        """Compute and store the payslip for one employee and period.

        Uses the salary effective at period end. Overtime comes from the
        supplied amount if given, otherwise from approved overtime requests
        dated inside the period. A pending payslip for the same period is
        recalculated in place.
        """
        if period_end < period_start:
            raise InvalidInputError("pay_period_end", period_end, "is before pay_period_start")

        existing = await self._get_for_period(user_id, period_start, period_end)
        if existing is not None and not PayslipStateMachine.can_recalculate(existing.status):
            raise PayslipImmutableError(existing.payslip_id, existing.status)

        salary = await self.salary_service.get_effective(user_id, period_end)

        overtime_hours: Decimal | None = None
        if overtime_pay is None:
            overtime_hours = await self.overtime_service.approved_hours(
                user_id, period_start, period_end
            )

        inputs = PeriodInputs(
            pay_period_start=period_start,
            pay_period_end=period_end,
            overtime_hours=overtime_hours,
            overtime_pay=None if overtime_pay is None else non_negative(overtime_pay, "overtime_pay"),
            bonus=optional_non_negative(bonus, "bonus"),
            commission=optional_non_negative(commission, "commission"),
            other_deductions=optional_non_negative(other_deductions, "other_deductions"),
        )
        result = self.calculator.calculate(salary.to_structure(), inputs)

        payslip = existing or Payslip(
            user_id=user_id,
            pay_period_start=period_start,
            pay_period_end=period_end,
            status=PayslipStatus.PENDING.value,
        )
        payslip.salary_id = salary.salary_id
        payslip.base_salary = salary.base_salary
        payslip.allowances = result.allowances
        payslip.overtime_hours = overtime_hours
        payslip.overtime_pay = result.overtime_pay
        payslip.bonus = inputs.bonus
        payslip.commission = inputs.commission
        payslip.gross_pay = result.gross_pay
        payslip.social_security = result.social_security
        payslip.tax_deduction = result.tax_deduction
        payslip.other_deductions = result.other_deductions
        payslip.net_pay = result.net_pay
        payslip.inputs_fingerprint = result.inputs_fingerprint
        payslip.engine_version = get_settings().engine_version
        payslip.generated_at = datetime.now(timezone.utc)

        if existing is None:
            self.session.add(payslip)
        await self.session.flush()

        logger.info(
            "Payslip %s generated for user %s (%s to %s): gross=%s net=%s",
            payslip.payslip_id,
            user_id,
            period_start,
            period_end,
            result.gross_pay,
            result.net_pay,
        )
        return payslip

    async def generate_batch(
        self,
        requests: list[PayslipRequest],
        period_start: date,
        period_end: date,
    ) -> BatchResult:
        """Generate payslips for several employees.

        Each employee is independent: a missing salary, invalid input or
        already-paid payslip is recorded against that employee and the rest
        continue.
        """
        batch = BatchResult()

        for request in requests:
            try:
                batch.payslips[request.user_id] = await self.generate(
                    request.user_id,
                    period_start,
                    period_end,
                    bonus=request.bonus,
                    commission=request.commission,
                    other_deductions=request.other_deductions,
                    overtime_pay=request.overtime_pay,
                )
            except (SalaryNotFoundError, InvalidInputError, PayslipImmutableError) as e:
                logger.warning("Payslip for user %s not generated: %s", request.user_id, e)
                batch.errors[request.user_id] = str(e)

        return batch

    async def get(self, payslip_id: UUID) -> Payslip:
        payslip = await self.session.get(Payslip, payslip_id)
        if payslip is None:
            raise PayslipNotFoundError(payslip_id)
        return payslip

    async def mark_paid(self, payslip_id: UUID) -> Payslip:
        """Record disbursement of a pending payslip."""
        payslip = await self.get(payslip_id)
        PayslipStateMachine.validate_transition(payslip.status, PayslipStatus.PAID)

        payslip.status = PayslipStatus.PAID.value
        payslip.paid_at = datetime.now(timezone.utc)
        await self.session.flush()

        logger.info("Payslip %s paid: net=%s", payslip_id, payslip.net_pay)
        return payslip

    async def list_payslips(
        self,
        user_id: UUID | None = None,
        status: str | None = None,
        period_start: date | None = None,
        period_end: date | None = None,
    ) -> list[Payslip]:
        """Payslips matching the filters, newest period first.

        With a date range, only payslips whose whole period lies inside it.
        """
        query = select(Payslip)
        if user_id:
            query = query.where(Payslip.user_id == user_id)
        if status:
            query = query.where(Payslip.status == status)
        if period_start:
            query = query.where(Payslip.pay_period_start >= period_start)
        if period_end:
            query = query.where(Payslip.pay_period_end <= period_end)

        result = await self.session.execute(
            query.order_by(Payslip.pay_period_start.desc(), Payslip.user_id)
        )
        return list(result.scalars().all())

    async def monthly_summary(self, year: int, month: int) -> MonthlySummary:
        """Totals over pending payslips whose period falls inside the month."""
        start, end = month_bounds(year, month)
        payslips = await self.list_payslips(
            status=PayslipStatus.PENDING.value, period_start=start, period_end=end
        )

        summary = MonthlySummary(year=year, month=month)
        summary.payslip_count = len(payslips)
        summary.employee_count = len({p.user_id for p in payslips})
        for p in payslips:
            summary.total_base_salary += p.base_salary
            summary.total_overtime_pay += p.overtime_pay
            summary.total_bonus += p.bonus
            summary.total_commission += p.commission
            summary.total_gross_pay += p.gross_pay
            summary.total_net_pay += p.net_pay
        return summary

    async def _get_for_period(
        self, user_id: UUID, period_start: date, period_end: date
    ) -> Payslip | None:
        result = await self.session.execute(
            select(Payslip).where(
                Payslip.user_id == user_id,
                Payslip.pay_period_start == period_start,
                Payslip.pay_period_end == period_end,
            )
        )
        return result.scalar_one_or_none()

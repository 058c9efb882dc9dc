"""Salary, overtime request and payslip models."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID, uuid4

from sqlalchemy import (
    CheckConstraint,
    Date,
    ForeignKey,
    Index,
    Numeric,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from hr_payroll.calculators.types import SalaryStructure
from hr_payroll.models.base import Base, Money, TimestampMixin


class SalaryRecord(Base, TimestampMixin):
    """Compensation terms for an employee from ``effective_date`` on.

    Rows are never updated; a raise or correction inserts a new row with a
    later effective date.
    """

    __tablename__ = "salaries"
    __table_args__ = (
        CheckConstraint("base_salary >= 0", name="base_nonneg"),
        CheckConstraint("housing_allowance >= 0", name="housing_nonneg"),
        CheckConstraint("transport_allowance >= 0", name="transport_nonneg"),
        CheckConstraint("other_allowances >= 0", name="other_nonneg"),
        Index("ix_salaries_user_effective", "user_id", "effective_date"),
    )

    salary_id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    user_id: Mapped[UUID] = mapped_column(nullable=False)
    base_salary: Mapped[Decimal] = mapped_column(Money, nullable=False)
    housing_allowance: Mapped[Decimal] = mapped_column(Money, nullable=False, default=Decimal("0"))
    transport_allowance: Mapped[Decimal] = mapped_column(Money, nullable=False, default=Decimal("0"))
    other_allowances: Mapped[Decimal] = mapped_column(Money, nullable=False, default=Decimal("0"))
    effective_date: Mapped[date] = mapped_column(Date, nullable=False)

    def to_structure(self) -> SalaryStructure:
        """Snapshot as the calculator's input type."""
        return SalaryStructure(
            base_salary=self.base_salary,
            housing_allowance=self.housing_allowance,
            transport_allowance=self.transport_allowance,
            other_allowances=self.other_allowances,
            effective_date=self.effective_date,
        )


class OvertimeRequest(Base, TimestampMixin):
    """Overtime hours requested by an employee for one day."""

    __tablename__ = "ot_requests"
    __table_args__ = (
        CheckConstraint("hours > 0", name="hours_pos"),
        CheckConstraint(
            "status IN ('pending', 'approved', 'rejected')",
            name="status",
        ),
    )

    ot_request_id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    user_id: Mapped[UUID] = mapped_column(nullable=False, index=True)
    request_date: Mapped[date] = mapped_column(Date, nullable=False)
    hours: Mapped[Decimal] = mapped_column(Numeric(6, 2), nullable=False)
    reason: Mapped[str | None] = mapped_column(String, nullable=True)
    status: Mapped[str] = mapped_column(String, nullable=False, default="pending")
    reviewed_by: Mapped[UUID | None] = mapped_column(nullable=True)
    reviewed_at: Mapped[datetime | None] = mapped_column(nullable=True)
    review_notes: Mapped[str | None] = mapped_column(String, nullable=True)


class Payslip(Base, TimestampMixin):
    """A computed payslip for one employee and pay period."""

    __tablename__ = "payslips"
    __table_args__ = (
        UniqueConstraint(
            "user_id", "pay_period_start", "pay_period_end", name="uq_payslips_user_period"
        ),
        CheckConstraint("pay_period_end >= pay_period_start", name="period"),
        CheckConstraint("status IN ('pending', 'paid')", name="status"),
    )

    payslip_id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    user_id: Mapped[UUID] = mapped_column(nullable=False, index=True)
    salary_id: Mapped[UUID] = mapped_column(
        ForeignKey("salaries.salary_id", ondelete="RESTRICT"),
        nullable=False,
    )
    pay_period_start: Mapped[date] = mapped_column(Date, nullable=False)
    pay_period_end: Mapped[date] = mapped_column(Date, nullable=False)

    base_salary: Mapped[Decimal] = mapped_column(Money, nullable=False)
    allowances: Mapped[Decimal] = mapped_column(Money, nullable=False, default=Decimal("0"))
    overtime_hours: Mapped[Decimal | None] = mapped_column(Numeric(8, 2), nullable=True)
    overtime_pay: Mapped[Decimal] = mapped_column(Money, nullable=False, default=Decimal("0"))
    bonus: Mapped[Decimal] = mapped_column(Money, nullable=False, default=Decimal("0"))
    commission: Mapped[Decimal] = mapped_column(Money, nullable=False, default=Decimal("0"))
    gross_pay: Mapped[Decimal] = mapped_column(Money, nullable=False)
    social_security: Mapped[Decimal] = mapped_column(Money, nullable=False, default=Decimal("0"))
    tax_deduction: Mapped[Decimal] = mapped_column(Money, nullable=False, default=Decimal("0"))
    other_deductions: Mapped[Decimal] = mapped_column(Money, nullable=False, default=Decimal("0"))
    net_pay: Mapped[Decimal] = mapped_column(Money, nullable=False)

    status: Mapped[str] = mapped_column(String, nullable=False, default="pending")
    inputs_fingerprint: Mapped[str] = mapped_column(String(32), nullable=False)
    engine_version: Mapped[str] = mapped_column(String, nullable=False)
    generated_at: Mapped[datetime] = mapped_column(nullable=False)
    paid_at: Mapped[datetime | None] = mapped_column(nullable=True)

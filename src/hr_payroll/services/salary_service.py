"""Salary structure records (append-only, effective-dated)."""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hr_payroll.calculators.validation import Number, non_negative, optional_non_negative
from hr_payroll.models import SalaryRecord

logger = logging.getLogger(__name__)


class SalaryNotFoundError(Exception):
    """Raised when an employee has no salary effective on a date."""

    def __init__(self, user_id: UUID, as_of_date: date):
        self.user_id = user_id
        self.as_of_date = as_of_date
        super().__init__(f"No salary for user {user_id} effective {as_of_date}")


class SalaryService:
    """Reads and appends salary structures.

    Existing rows are never modified; history is kept so past payslips can
    be traced to the terms they were computed from.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def add_structure(
        self,
        user_id: UUID,
        base_salary: Number,
        effective_date: date,
        housing_allowance: Number | None = None,
        transport_allowance: Number | None = None,
        other_allowances: Number | None = None,
    ) -> SalaryRecord:
        """Append a salary structure for an employee."""
        record = SalaryRecord(
            user_id=user_id,
            base_salary=non_negative(base_salary, "base_salary"),
            housing_allowance=optional_non_negative(housing_allowance, "housing_allowance"),
            transport_allowance=optional_non_negative(transport_allowance, "transport_allowance"),
            other_allowances=optional_non_negative(other_allowances, "other_allowances"),
            effective_date=effective_date,
        )
        self.session.add(record)
        await self.session.flush()

        logger.info(
            "Salary structure %s added for user %s effective %s",
            record.salary_id,
            user_id,
            effective_date,
        )
        return record

    async def get_effective(self, user_id: UUID, as_of_date: date) -> SalaryRecord:
        """Latest structure with effective_date on or before ``as_of_date``.

        Ties on the same date go to the most recently inserted row.
        """
        result = await self.session.execute(
            select(SalaryRecord)
            .where(
                SalaryRecord.user_id == user_id,
                SalaryRecord.effective_date <= as_of_date,
            )
            .order_by(SalaryRecord.effective_date.desc(), SalaryRecord.created_at.desc())
            .limit(1)
        )
        record = result.scalar_one_or_none()
        if record is None:
            raise SalaryNotFoundError(user_id, as_of_date)
        return record

    async def history(self, user_id: UUID) -> list[SalaryRecord]:
        """All structures for an employee, newest first."""
        result = await self.session.execute(
            select(SalaryRecord)
            .where(SalaryRecord.user_id == user_id)
            .order_by(SalaryRecord.effective_date.desc(), SalaryRecord.created_at.desc())
        )
        return list(result.scalars().all())

    @staticmethod
    def total_compensation(record: SalaryRecord) -> Decimal:
        """Base salary plus all allowances."""
        return (
            record.base_salary
            + record.housing_allowance
            + record.transport_allowance
            + record.other_allowances
        )

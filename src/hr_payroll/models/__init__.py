"""ORM models."""

from hr_payroll.models.base import Base, Money
from hr_payroll.models.payroll import OvertimeRequest, Payslip, SalaryRecord

__all__ = [
    "Base",
    "Money",
    "OvertimeRequest",
    "Payslip",
    "SalaryRecord",
]

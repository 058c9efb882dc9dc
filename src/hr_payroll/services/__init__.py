"""Payroll services."""

from hr_payroll.services.overtime_service import OvertimeRequestNotFoundError, OvertimeService
from hr_payroll.services.payslip_service import (
    BatchResult,
    MonthlySummary,
    PayslipImmutableError,
    PayslipNotFoundError,
    PayslipRequest,
    PayslipService,
)
from hr_payroll.services.salary_service import SalaryNotFoundError, SalaryService
from hr_payroll.services.state_machine import (
    InvalidTransitionError,
    OvertimeStateMachine,
    OvertimeStatus,
    PayslipStateMachine,
    PayslipStatus,
)

__all__ = [
    "BatchResult",
    "InvalidTransitionError",
    "MonthlySummary",
    "OvertimeRequestNotFoundError",
    "OvertimeService",
    "OvertimeStateMachine",
    "OvertimeStatus",
    "PayslipImmutableError",
    "PayslipNotFoundError",
    "PayslipRequest",
    "PayslipService",
    "PayslipStateMachine",
    "PayslipStatus",
    "SalaryNotFoundError",
    "SalaryService",
]

"""API routes."""

from hr_payroll.api.routes.calculator import router as calculator_router
from hr_payroll.api.routes.health import router as health_router
from hr_payroll.api.routes.overtime import router as overtime_router
from hr_payroll.api.routes.payslips import router as payslips_router
from hr_payroll.api.routes.salaries import router as salaries_router

__all__ = [
    "calculator_router",
    "health_router",
    "overtime_router",
    "payslips_router",
    "salaries_router",
]

"""HR payroll engine: payslip calculation, salary records and pay disbursement."""

__version__ = "1.0.0"

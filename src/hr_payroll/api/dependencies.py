"""Request-scoped dependencies."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from hr_payroll.config import Settings, get_settings
from hr_payroll.database import init_db
from hr_payroll.services import PayslipService


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """One session per request; uncommitted work is rolled back on close."""
    async with init_db()() as session:
        yield session


def get_payslip_service(db: Annotated[AsyncSession, Depends(get_db_session)]) -> PayslipService:
    return PayslipService(db)


DbSession = Annotated[AsyncSession, Depends(get_db_session)]
AppSettings = Annotated[Settings, Depends(get_settings)]
Payslips = Annotated[PayslipService, Depends(get_payslip_service)]

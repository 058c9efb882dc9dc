"""Salary structure endpoints."""

from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path, Query, status

from hr_payroll.api.dependencies import DbSession
from hr_payroll.api.schemas import ErrorResponse, SalaryCreate, SalaryResponse
from hr_payroll.services.salary_service import SalaryService

router = APIRouter(prefix="/salaries", tags=["salaries"])


@router.post(
    "",
    response_model=SalaryResponse,
    status_code=status.HTTP_201_CREATED,
    responses={422: {"model": ErrorResponse}},
)
async def add_salary(db: DbSession, payload: SalaryCreate) -> SalaryResponse:
    """Append a salary structure. Earlier structures are kept unchanged."""
    record = await SalaryService(db).add_structure(
        user_id=payload.user_id,
        base_salary=payload.base_salary,
        effective_date=payload.effective_date,
        housing_allowance=payload.housing_allowance,
        transport_allowance=payload.transport_allowance,
        other_allowances=payload.other_allowances,
    )
    await db.commit()
    return SalaryResponse.model_validate(record)


@router.get("/{user_id}", response_model=list[SalaryResponse])
async def salary_history(
    db: DbSession,
    user_id: Annotated[UUID, Path()],
) -> list[SalaryResponse]:
    """All salary structures for an employee, newest first."""
    records = await SalaryService(db).history(user_id)
    return [SalaryResponse.model_validate(r) for r in records]


@router.get(
    "/{user_id}/effective",
    response_model=SalaryResponse,
    responses={404: {"model": ErrorResponse}},
)
async def effective_salary(
    db: DbSession,
    user_id: Annotated[UUID, Path()],
    as_of: Annotated[date | None, Query()] = None,
) -> SalaryResponse:
    """Salary structure in force on ``as_of`` (default today)."""
    record = await SalaryService(db).get_effective(user_id, as_of or date.today())
    return SalaryResponse.model_validate(record)

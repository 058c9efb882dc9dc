"""Overtime request endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path, Query, status

from hr_payroll.api.dependencies import DbSession
from hr_payroll.api.schemas import (
    ErrorResponse,
    OvertimeRequestCreate,
    OvertimeRequestResponse,
    OvertimeReviewRequest,
)
from hr_payroll.services.overtime_service import OvertimeService

router = APIRouter(prefix="/overtime-requests", tags=["overtime"])


@router.post(
    "",
    response_model=OvertimeRequestResponse,
    status_code=status.HTTP_201_CREATED,
)
async def submit_overtime(db: DbSession, payload: OvertimeRequestCreate) -> OvertimeRequestResponse:
    """Submit an overtime request for review."""
    request = await OvertimeService(db).submit(
        user_id=payload.user_id,
        request_date=payload.request_date,
        hours=payload.hours,
        reason=payload.reason,
    )
    await db.commit()
    return OvertimeRequestResponse.model_validate(request)


@router.get("", response_model=list[OvertimeRequestResponse])
async def list_overtime(
    db: DbSession,
    user_id: UUID | None = None,
    status_filter: Annotated[str | None, Query(alias="status")] = None,
) -> list[OvertimeRequestResponse]:
    """List overtime requests with optional filters."""
    requests = await OvertimeService(db).list_requests(user_id=user_id, status=status_filter)
    return [OvertimeRequestResponse.model_validate(r) for r in requests]


@router.post(
    "/{ot_request_id}/review",
    response_model=OvertimeRequestResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def review_overtime(
    db: DbSession,
    ot_request_id: Annotated[UUID, Path()],
    payload: OvertimeReviewRequest,
) -> OvertimeRequestResponse:
    """Approve or reject a pending overtime request."""
    request = await OvertimeService(db).review(
        ot_request_id,
        approve=payload.approve,
        reviewer_id=payload.reviewer_id,
        notes=payload.notes,
    )
    await db.commit()
    return OvertimeRequestResponse.model_validate(request)

"""Overtime requests: submission, review and period totals."""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from decimal import Decimal
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from hr_payroll.calculators.validation import Number, positive
from hr_payroll.models import OvertimeRequest
from hr_payroll.services.state_machine import OvertimeStateMachine, OvertimeStatus

logger = logging.getLogger(__name__)


class OvertimeRequestNotFoundError(Exception):
    """Raised when an overtime request does not exist."""

    def __init__(self, ot_request_id: UUID):
        self.ot_request_id = ot_request_id
        super().__init__(f"Overtime request {ot_request_id} not found")


class OvertimeService:
    """Service for employee overtime requests."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def submit(
        self,
        user_id: UUID,
        request_date: date,
        hours: Number,
        reason: str | None = None,
    ) -> OvertimeRequest:
        """Record a pending request."""
        request = OvertimeRequest(
            user_id=user_id,
            request_date=request_date,
            hours=positive(hours, "hours"),
            reason=reason,
            status=OvertimeStatus.PENDING.value,
        )
        self.session.add(request)
        await self.session.flush()
        return request

    async def review(
        self,
        ot_request_id: UUID,
        approve: bool,
        reviewer_id: UUID | None = None,
        notes: str | None = None,
    ) -> OvertimeRequest:
        """Approve or reject a pending request."""
        request = await self.session.get(OvertimeRequest, ot_request_id)
        if request is None:
            raise OvertimeRequestNotFoundError(ot_request_id)

        to_status = OvertimeStatus.APPROVED if approve else OvertimeStatus.REJECTED
        OvertimeStateMachine.validate_transition(request.status, to_status)

        request.status = to_status.value
        request.reviewed_by = reviewer_id
        request.reviewed_at = datetime.now(timezone.utc)
        request.review_notes = notes
        await self.session.flush()

        logger.info("Overtime request %s %s", ot_request_id, request.status)
        return request

    async def approved_hours(
        self, user_id: UUID, period_start: date, period_end: date
    ) -> Decimal:
        """Total approved hours with request_date inside the period."""
        total = await self.session.scalar(
            select(func.coalesce(func.sum(OvertimeRequest.hours), 0)).where(
                OvertimeRequest.user_id == user_id,
                OvertimeRequest.status == OvertimeStatus.APPROVED.value,
                OvertimeRequest.request_date >= period_start,
                OvertimeRequest.request_date <= period_end,
            )
        )
        return Decimal(str(total or 0))

    async def list_requests(
        self, user_id: UUID | None = None, status: str | None = None
    ) -> list[OvertimeRequest]:
        query = select(OvertimeRequest)
        if user_id:
            query = query.where(OvertimeRequest.user_id == user_id)
        if status:
            query = query.where(OvertimeRequest.status == status)
        result = await self.session.execute(query.order_by(OvertimeRequest.request_date))
        return list(result.scalars().all())

"""Payslip and overtime request state machines with transition validation."""

from __future__ import annotations

from enum import Enum


class PayslipStatus(str, Enum):
    """Payslip status values."""

    PENDING = "pending"
    PAID = "paid"


class OvertimeStatus(str, Enum):
    """Overtime request status values."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class InvalidTransitionError(Exception):
    """Raised when an invalid state transition is attempted."""

    def __init__(self, from_status: str, to_status: str, reason: str | None = None):
        self.from_status = from_status
        self.to_status = to_status
        self.reason = reason
        msg = f"Invalid transition from '{from_status}' to '{to_status}'"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class PayslipStateMachine:
    """State machine for payslip status transitions.

    Allowed transitions:
    - pending → paid
    """

    VALID_TRANSITIONS: dict[str, list[str]] = {
        PayslipStatus.PENDING: [PayslipStatus.PAID],
        PayslipStatus.PAID: [],  # Terminal state
    }

    # Statuses where amounts may still be recalculated
    CALCULATION_ALLOWED = {PayslipStatus.PENDING}

    @classmethod
    def can_transition(cls, from_status: str, to_status: str) -> bool:
        """Check if a transition is valid."""
        allowed = cls.VALID_TRANSITIONS.get(from_status, [])
        return to_status in allowed

    @classmethod
    def validate_transition(cls, from_status: str, to_status: str) -> None:
        """Validate a transition, raising InvalidTransitionError if invalid."""
        if not cls.can_transition(from_status, to_status):
            raise InvalidTransitionError(from_status, to_status)

    @classmethod
    def can_recalculate(cls, status: str) -> bool:
        return status in cls.CALCULATION_ALLOWED


class OvertimeStateMachine:
    """State machine for overtime request review.

    Allowed transitions:
    - pending → approved
    - pending → rejected
    """

    VALID_TRANSITIONS: dict[str, list[str]] = {
        OvertimeStatus.PENDING: [OvertimeStatus.APPROVED, OvertimeStatus.REJECTED],
        OvertimeStatus.APPROVED: [],
        OvertimeStatus.REJECTED: [],
    }

    @classmethod
    def can_transition(cls, from_status: str, to_status: str) -> bool:
        allowed = cls.VALID_TRANSITIONS.get(from_status, [])
        return to_status in allowed

    @classmethod
    def validate_transition(cls, from_status: str, to_status: str) -> None:
        if not cls.can_transition(from_status, to_status):
            raise InvalidTransitionError(from_status, to_status, "request already reviewed")

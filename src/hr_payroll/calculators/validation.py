"""Input validation at the engine boundary."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Union

Number = Union[Decimal, int, float, str]


class InvalidInputError(ValueError):
    """Raised when an amount or table cannot be used for calculation."""

    def __init__(self, field: str, value: object, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field} {value!r}: {reason}")


def to_decimal(value: Number, field: str) -> Decimal:
    """Convert a numeric input to Decimal, rejecting NaN and infinities.

    Floats go through ``str`` so that 0.05 becomes Decimal("0.05") rather
    than its binary expansion.
    """
    if isinstance(value, bool):
        raise InvalidInputError(field, value, "not a number")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float, str)):
        try:
            result = Decimal(str(value))
        except InvalidOperation:
            raise InvalidInputError(field, value, "not a number") from None
    else:
        raise InvalidInputError(field, value, "not a number")

    if not result.is_finite():
        raise InvalidInputError(field, value, "must be finite")
    return result


def non_negative(value: Number, field: str) -> Decimal:
    """Convert and require ``value >= 0``."""
    result = to_decimal(value, field)
    if result < 0:
        raise InvalidInputError(field, value, "must not be negative")
    return result


def optional_non_negative(value: Number | None, field: str) -> Decimal:
    """Like non_negative, but None counts as zero."""
    if value is None:
        return Decimal("0")
    return non_negative(value, field)


def positive(value: Number, field: str) -> Decimal:
    """Convert and require ``value > 0``."""
    result = to_decimal(value, field)
    if result <= 0:
        raise InvalidInputError(field, value, "must be positive")
    return result

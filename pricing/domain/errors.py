"""Domain error codes for the pricing module.

Domain code raises these. The session boundary catches them and hands them
back to callers as values, so nothing raised here escapes the engine.
"""

from dataclasses import dataclass, field
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    INVALID_INPUT_SHAPE = "INVALID_INPUT_SHAPE"
    PACKAGE_NOT_FOUND = "PACKAGE_NOT_FOUND"
    VENUE_NOT_FOUND = "VENUE_NOT_FOUND"
    COMPONENT_NOT_FOUND = "COMPONENT_NOT_FOUND"
    DUPLICATE_COMPONENT = "DUPLICATE_COMPONENT"
    COMPONENT_NOT_REMOVABLE = "COMPONENT_NOT_REMOVABLE"
    VENUE_INCLUSION_LOCKED = "VENUE_INCLUSION_LOCKED"
    UNKNOWN_VENUE_OPTION = "UNKNOWN_VENUE_OPTION"
    INVALID_GUEST_COUNT = "INVALID_GUEST_COUNT"
    PERCENTAGE_OUT_OF_RANGE = "PERCENTAGE_OUT_OF_RANGE"
    DOWN_PAYMENT_OUT_OF_RANGE = "DOWN_PAYMENT_OUT_OF_RANGE"
    UNSUPPORTED_SCHEDULE_TYPE = "UNSUPPORTED_SCHEDULE_TYPE"
    REFERENCE_NUMBER_REQUIRED = "REFERENCE_NUMBER_REQUIRED"
    UNSUPPORTED_PAYMENT_METHOD = "UNSUPPORTED_PAYMENT_METHOD"
    UNSUPPORTED_PAYMENT_STATUS = "UNSUPPORTED_PAYMENT_STATUS"
    CASH_BOND_NOT_REQUIRED = "CASH_BOND_NOT_REQUIRED"
    INVALID_CASH_BOND_TRANSITION = "INVALID_CASH_BOND_TRANSITION"
    DAMAGE_CLAIM_REQUIRED = "DAMAGE_CLAIM_REQUIRED"
    AMOUNT_OUT_OF_RANGE = "AMOUNT_OUT_OF_RANGE"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str
    details: dict | None = field(default=None, compare=False)

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"

    def to_dict(self) -> dict:
        data = {"code": self.code.value, "message": self.message}
        if self.details:
            data["details"] = self.details
        return data


class InputShapeError(DomainError):
    """Raised when a catalog record from the remote service is malformed."""

    def __init__(self, record: str, details: dict | None = None) -> None:
        super().__init__(
            code=ErrorCode.INVALID_INPUT_SHAPE,
            message=f"Malformed {record} record",
            details=details,
        )


class PackageNotFoundError(DomainError):
    def __init__(self, package_id: str) -> None:
        super().__init__(
            code=ErrorCode.PACKAGE_NOT_FOUND,
            message="Package not found",
            details={"package_id": package_id},
        )


class VenueNotFoundError(DomainError):
    def __init__(self, venue_id: str) -> None:
        super().__init__(
            code=ErrorCode.VENUE_NOT_FOUND,
            message="Venue not found",
            details={"venue_id": venue_id},
        )


class ValidationError(DomainError):
    """A mutation would break an invariant; the prior state is kept."""


class ComponentNotFoundError(ValidationError):
    def __init__(self, component_id: str) -> None:
        super().__init__(
            code=ErrorCode.COMPONENT_NOT_FOUND,
            message="Component not found",
            details={"component_id": component_id},
        )


class DuplicateComponentError(ValidationError):
    def __init__(self, component_id: str) -> None:
        super().__init__(
            code=ErrorCode.DUPLICATE_COMPONENT,
            message="A component with this id already exists",
            details={"component_id": component_id},
        )


class ComponentNotRemovableError(ValidationError):
    def __init__(self, component_id: str) -> None:
        super().__init__(
            code=ErrorCode.COMPONENT_NOT_REMOVABLE,
            message="Component cannot be removed",
            details={"component_id": component_id},
        )


class VenueInclusionLockedError(ValidationError):
    def __init__(self, component_id: str) -> None:
        super().__init__(
            code=ErrorCode.VENUE_INCLUSION_LOCKED,
            message="Venue inclusions are fixed and cannot be removed",
            details={"component_id": component_id},
        )


class UnknownVenueOptionError(ValidationError):
    def __init__(self, component_id: str, option_id: str) -> None:
        super().__init__(
            code=ErrorCode.UNKNOWN_VENUE_OPTION,
            message="Venue option is not offered on this component",
            details={"component_id": component_id, "option_id": option_id},
        )


class InvalidGuestCountError(ValidationError):
    def __init__(self, guest_count: int) -> None:
        super().__init__(
            code=ErrorCode.INVALID_GUEST_COUNT,
            message="Guest count must be a non-negative whole number",
            details={"guest_count": guest_count},
        )


class PercentageOutOfRangeError(ValidationError):
    def __init__(self, percentage) -> None:
        super().__init__(
            code=ErrorCode.PERCENTAGE_OUT_OF_RANGE,
            message="Percentage must be between 0 and 100",
            details={"percentage": str(percentage)},
        )


class DownPaymentOutOfRangeError(ValidationError):
    """Raised when a manual down payment is negative or exceeds the total."""

    def __init__(self, amount, total) -> None:
        super().__init__(
            code=ErrorCode.DOWN_PAYMENT_OUT_OF_RANGE,
            message="Down payment must be between zero and the total budget",
            details={"down_payment": str(amount), "total": str(total)},
        )


class UnsupportedScheduleTypeError(ValidationError):
    def __init__(self, schedule_type: str) -> None:
        super().__init__(
            code=ErrorCode.UNSUPPORTED_SCHEDULE_TYPE,
            message="Unknown payment schedule",
            details={"schedule_type": schedule_type},
        )


class ReferenceNumberRequiredError(ValidationError):
    def __init__(self, method: str) -> None:
        super().__init__(
            code=ErrorCode.REFERENCE_NUMBER_REQUIRED,
            message=f"A reference number is required for {method} payments",
            details={"method": method},
        )


class UnsupportedPaymentMethodError(ValidationError):
    def __init__(self, method: str) -> None:
        super().__init__(
            code=ErrorCode.UNSUPPORTED_PAYMENT_METHOD,
            message="Unsupported payment method",
            details={"method": method},
        )


class UnsupportedPaymentStatusError(ValidationError):
    def __init__(self, status: str) -> None:
        super().__init__(
            code=ErrorCode.UNSUPPORTED_PAYMENT_STATUS,
            message="Unsupported payment status",
            details={"status": status},
        )


class CashBondNotRequiredError(ValidationError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.CASH_BOND_NOT_REQUIRED,
            message="Cash bond is not required for this booking",
        )


class InvalidCashBondTransitionError(ValidationError):
    def __init__(self, current: str, requested: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_CASH_BOND_TRANSITION,
            message=f"Cash bond cannot move from {current} to {requested}",
            details={"from": current, "to": requested},
        )


class DamageClaimRequiredError(ValidationError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.DAMAGE_CLAIM_REQUIRED,
            message="Claiming a cash bond requires a damage description and amount",
        )


class AmountOutOfRangeError(ValidationError):
    """Raised when amounts grow past what the money arithmetic can represent."""

    def __init__(self, command: str) -> None:
        super().__init__(
            code=ErrorCode.AMOUNT_OUT_OF_RANGE,
            message="Amounts are too large to price",
            details={"command": command},
        )


class DiagnosticCode(Enum):
    """Conditions handled by policy that callers may still want to see."""

    DEGENERATE_PRORATION = "DEGENERATE_PRORATION"
    GUEST_COUNT_OVER_CAPACITY = "GUEST_COUNT_OVER_CAPACITY"


@dataclass(frozen=True)
class Diagnostic:
    """Non-fatal note attached to derived totals."""

    code: DiagnosticCode
    message: str

    def to_dict(self) -> dict:
        return {"code": self.code.value, "message": self.message}

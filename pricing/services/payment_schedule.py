"""Down payment, balance and cash bond bookkeeping.

Every function takes a plan (or bond) and returns a new one. Invalid edits
raise a ValidationError subclass and leave the caller's plan untouched.

The down payment is always derived from the current percentage, so a
change of total can never leave a stale amount above the new total.
"""

import logging
from dataclasses import replace
from decimal import Decimal, InvalidOperation

from pricing.conf import pricing_settings
from pricing.domain.errors import (
    CashBondNotRequiredError,
    DamageClaimRequiredError,
    DownPaymentOutOfRangeError,
    InvalidCashBondTransitionError,
    PercentageOutOfRangeError,
    ReferenceNumberRequiredError,
    UnsupportedPaymentMethodError,
    UnsupportedPaymentStatusError,
    UnsupportedScheduleTypeError,
)
from pricing.domain.models import CashBond, DamageClaim, PaymentAttempt, PaymentPlan
from pricing.domain.value_objects import (
    HUNDRED,
    ZERO,
    CashBondStatus,
    PaymentMethod,
    PaymentStatus,
    Percentage,
    ScheduleType,
    round_whole,
    to_decimal,
)

logger = logging.getLogger(__name__)

CASH_BOND_TRANSITIONS = {
    CashBondStatus.PENDING: {CashBondStatus.PAID},
    CashBondStatus.PAID: {CashBondStatus.CLAIMED, CashBondStatus.REFUNDED},
    CashBondStatus.CLAIMED: {CashBondStatus.CLAIMED, CashBondStatus.REFUNDED},
    CashBondStatus.REFUNDED: set(),
}


def split(total: Decimal, percentage: Decimal) -> tuple[Decimal, Decimal]:
    """Return (down_payment, balance) for a percentage of the total.

    The down payment is rounded half up to the whole currency unit and
    capped at the total; the balance takes whatever is left.
    """
    down_payment = min(round_whole(total * percentage / HUNDRED), total)
    return down_payment, total - down_payment


def parse_schedule_type(value: ScheduleType | str) -> ScheduleType:
    if isinstance(value, ScheduleType):
        return value
    try:
        return ScheduleType(str(value).strip().lower())
    except ValueError:
        raise UnsupportedScheduleTypeError(str(value)) from None


def new_cash_bond(required: bool | None = None) -> CashBond:
    if required is None:
        required = pricing_settings.CASH_BOND_REQUIRED
    return CashBond(amount=pricing_settings.CASH_BOND_AMOUNT, required=required)


def create_plan(
    total: Decimal,
    schedule_type: ScheduleType | str | None = None,
    cash_bond: CashBond | None = None,
) -> PaymentPlan:
    schedule = parse_schedule_type(
        schedule_type or pricing_settings.DEFAULT_SCHEDULE_TYPE
    )
    percentage = schedule.default_percentage
    if percentage is None:
        percentage = ScheduleType.HALF.default_percentage
    down_payment, balance = split(total, percentage)
    return PaymentPlan(
        total=total,
        schedule_type=schedule,
        percentage=percentage,
        down_payment=down_payment,
        balance=balance,
        cash_bond=cash_bond or new_cash_bond(),
    )


def _with_percentage(
    plan: PaymentPlan, schedule: ScheduleType, percentage: Decimal
) -> PaymentPlan:
    down_payment, balance = split(plan.total, percentage)
    return replace(
        plan,
        schedule_type=schedule,
        percentage=percentage,
        down_payment=down_payment,
        balance=balance,
    )


def select_schedule(plan: PaymentPlan, schedule_type: ScheduleType | str) -> PaymentPlan:
    """Switch policy; the percentage resets to the policy's default.

    Custom has no default and keeps the current percentage.
    """
    schedule = parse_schedule_type(schedule_type)
    percentage = schedule.default_percentage
    if percentage is None:
        percentage = plan.percentage
    logger.info("Payment schedule set to %s (%s%%)", schedule.value, percentage)
    return _with_percentage(plan, schedule, percentage)


def edit_percentage(plan: PaymentPlan, percentage) -> PaymentPlan:
    """Set a custom down payment percentage (0-100 inclusive)."""
    try:
        value = Percentage.of(percentage).value
    except (InvalidOperation, TypeError, ValueError):
        raise PercentageOutOfRangeError(percentage) from None
    return _with_percentage(plan, ScheduleType.CUSTOM, value)


def edit_down_payment(plan: PaymentPlan, amount) -> PaymentPlan:
    """Take a manually entered down payment.

    The amount is rounded like a computed down payment (whole unit, capped
    at the total) and the percentage is derived from it, so later total
    changes scale the down payment instead of reusing it.
    """
    try:
        value = to_decimal(amount)
    except (InvalidOperation, TypeError, ValueError):
        raise DownPaymentOutOfRangeError(amount, plan.total) from None
    if not value.is_finite() or value < ZERO or value > plan.total:
        raise DownPaymentOutOfRangeError(amount, plan.total)
    value = min(round_whole(value), plan.total)

    percentage = plan.percentage
    if plan.total > ZERO:
        percentage = value / plan.total * HUNDRED
    return replace(
        plan,
        schedule_type=ScheduleType.CUSTOM,
        percentage=percentage,
        down_payment=value,
        balance=plan.total - value,
    )


def retotal(plan: PaymentPlan, total: Decimal) -> PaymentPlan:
    """Re-run the split against a new total using the current percentage."""
    if total == plan.total:
        return plan
    down_payment, balance = split(total, plan.percentage)
    return replace(plan, total=total, down_payment=down_payment, balance=balance)


def set_cash_bond_required(bond: CashBond, required: bool) -> CashBond:
    if bond.required == required:
        return bond
    if bond.status is not CashBondStatus.PENDING:
        raise InvalidCashBondTransitionError(
            bond.status.value, "required" if required else "not-required"
        )
    return replace(bond, required=required)


def transition_cash_bond(
    bond: CashBond,
    status: CashBondStatus | str,
    damage: DamageClaim | None = None,
) -> CashBond:
    """Move the bond through pending -> paid -> claimed/refunded.

    Claiming needs a damage record; the claimed amount becomes the amount
    shown to the user, but the bond never enters the event total.
    """
    if not bond.required:
        raise CashBondNotRequiredError()
    try:
        target = CashBondStatus(status)
    except ValueError:
        raise InvalidCashBondTransitionError(bond.status.value, str(status)) from None

    if target is bond.status and target is not CashBondStatus.CLAIMED:
        return bond
    if target not in CASH_BOND_TRANSITIONS[bond.status]:
        raise InvalidCashBondTransitionError(bond.status.value, target.value)

    if target is CashBondStatus.CLAIMED:
        if damage is None or not damage.description.strip() or damage.amount < ZERO:
            raise DamageClaimRequiredError()
        logger.info("Cash bond claimed for damages of %s", damage.amount)
        return replace(bond, status=target, damage=damage)

    logger.info("Cash bond moved from %s to %s", bond.status.value, target.value)
    return replace(bond, status=target)


def record_payment(
    method: PaymentMethod | str,
    reference_number: str = "",
    status: PaymentStatus | str = PaymentStatus.PENDING,
    notes: str = "",
) -> PaymentAttempt:
    """Validate the down payment method and its reference number."""
    try:
        payment_method = PaymentMethod(method)
    except ValueError:
        raise UnsupportedPaymentMethodError(str(method)) from None

    reference = (reference_number or "").strip()
    if payment_method.value in pricing_settings.REFERENCE_REQUIRED_METHODS and not reference:
        raise ReferenceNumberRequiredError(payment_method.value)

    try:
        payment_status = PaymentStatus(status)
    except ValueError:
        raise UnsupportedPaymentStatusError(str(status)) from None

    logger.info("Down payment method recorded: %s", payment_method.value)
    return PaymentAttempt(
        method=payment_method,
        reference_number=reference,
        status=payment_status,
        notes=notes,
    )

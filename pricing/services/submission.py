"""Assembly of the booking payload.

The engine only shapes the record; posting it to the booking endpoint is
the caller's job.
"""

from pricing.domain.models import BuilderState
from pricing.domain.value_objects import (
    InclusionSource,
    PaymentMethod,
    PaymentStatus,
    round_cents,
)
from pricing.handlers.serializers import BookingPayloadSerializer
from pricing.services.inclusions import effective_price


def _component_lines(state: BuilderState) -> list[dict]:
    lines = []
    items = [c for c in state.components if c.source is not InclusionSource.VENUE_LOCKED]
    items += list(state.custom_inclusions)
    for order, component in enumerate(items):
        lines.append(
            {
                "component_name": component.name,
                "component_price": component.price,
                "effective_price": effective_price(component),
                "selected_option_id": component.selected_option_id,
                "component_description": component.description,
                "category": component.category.value,
                "is_custom": component.source is InclusionSource.CUSTOM,
                "is_included": component.included is not False,
                "original_package_component_id": component.original_id,
                "display_order": order,
            }
        )
    return lines


def build_booking_payload(state: BuilderState, derived) -> dict:
    plan = derived.plan
    bond = plan.cash_bond
    payment = state.payment
    damage = None
    if bond.damage is not None:
        damage = {
            "description": bond.damage.description,
            "amount": bond.damage.amount,
            "date": bond.damage.claimed_on,
        }

    # The payload carries cents; the balance is taken from the rounded
    # figures so down_payment + balance == total_budget holds on the wire.
    total_budget = round_cents(derived.total_budget)
    down_payment = min(round_cents(plan.down_payment), total_budget)

    record = {
        "package_id": state.package.id,
        "venue_id": state.venue.id if state.venue is not None else None,
        "guest_count": state.guest_count,
        "total_budget": total_budget,
        "down_payment": down_payment,
        "balance": total_budget - down_payment,
        "down_payment_percentage": plan.percentage,
        "payment_schedule_type_id": plan.schedule_type_id,
        "payment_schedule_type": plan.schedule_type.value,
        "payment_method": payment.method.value if payment else PaymentMethod.CASH.value,
        "payment_status": payment.status.value if payment else PaymentStatus.PENDING.value,
        "reference_number": (payment.reference_number or None) if payment else None,
        "payment_notes": payment.notes if payment else "",
        "cash_bond_required": bond.required,
        "cash_bond_status": bond.status.value,
        "cash_bond_amount": bond.display_amount,
        "cash_bond_damage_details": damage,
        "components": _component_lines(state),
        "supplier_services": [
            {
                "supplier_id": service.supplier_id,
                "service_name": service.name,
                "service_price": service.price,
                "category": service.category.value,
            }
            for service in state.supplier_services
        ],
    }
    return BookingPayloadSerializer(record).data

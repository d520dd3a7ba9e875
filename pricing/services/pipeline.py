"""The recompute pipeline.

One explicit pass over the current state, run after every mutation:
partition -> prorate -> compose budget -> aggregate categories -> reconcile
the payment plan with the new total. Nothing is cached between passes.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal

from pricing.domain.errors import Diagnostic, DiagnosticCode
from pricing.domain.models import BuilderState, PaymentPlan
from pricing.services.budget import BudgetSummary, compose
from pricing.services.categories import CategoryRow, aggregate
from pricing.services.inclusions import partition
from pricing.services.payment_schedule import retotal
from pricing.services.proration import Proration, prorate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DerivedTotals:
    budget: BudgetSummary
    proration: Proration
    categories: tuple[CategoryRow, ...]
    plan: PaymentPlan
    diagnostics: tuple[Diagnostic, ...] = ()

    @property
    def total_budget(self) -> Decimal:
        return self.budget.total_budget

    def adjusted_price(self, component_id: str) -> Decimal | None:
        return self.proration.adjusted.get(component_id)


def capacity_diagnostics(state: BuilderState) -> tuple[Diagnostic, ...]:
    guest_count = state.guest_count
    if guest_count is None:
        return ()

    limits = []
    if state.venue is not None and state.venue.capacity:
        limits.append((state.venue.title, state.venue.capacity))
    for component in state.components:
        option = component.selected_option
        if component.included and option is not None and option.max_guests:
            limits.append((option.name, option.max_guests))

    diagnostics = []
    for name, limit in limits:
        if guest_count > limit:
            logger.warning(
                "Guest count %s exceeds capacity of %s (%s)", guest_count, name, limit
            )
            diagnostics.append(
                Diagnostic(
                    code=DiagnosticCode.GUEST_COUNT_OVER_CAPACITY,
                    message=f"{name} accommodates up to {limit} guests",
                )
            )
    return tuple(diagnostics)


def recompute(state: BuilderState) -> DerivedTotals:
    parts = partition(state.components)
    nominal_price = state.package.nominal_price

    prorated = prorate(nominal_price, parts.catalog_components)
    summary = compose(
        nominal_price,
        parts.catalog_components,
        venue=state.venue,
        custom_inclusions=state.custom_inclusions,
        supplier_services=state.supplier_services,
        venue_inclusions=parts.venue_inclusions,
        guest_count=state.guest_count,
    )
    total_budget = summary.total_budget
    rows = aggregate(parts.catalog_components, prorated, total_budget)
    plan = retotal(state.plan, total_budget)

    logger.debug(
        "Recomputed package %s: package=%s venue=%s total=%s",
        state.package.id,
        summary.package_price,
        summary.venue_cost,
        total_budget,
    )
    return DerivedTotals(
        budget=summary,
        proration=prorated,
        categories=rows,
        plan=plan,
        diagnostics=prorated.diagnostics + capacity_diagnostics(state),
    )

"""Total budget composition.

The total is a pure function of the current state and is recomputed after
every mutation; proration only redistributes inside the package price and
never changes the total.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from pricing.domain.models import Component, Venue
from pricing.domain.value_objects import ZERO
from pricing.services.inclusions import option_adjustment, sum_prices


@dataclass(frozen=True)
class BudgetSummary:
    package_price: Decimal
    venue_cost: Decimal
    custom_total: Decimal
    supplier_total: Decimal
    venue_inclusions: tuple[Component, ...] = ()

    @property
    def total_budget(self) -> Decimal:
        return self.package_price + self.venue_cost + self.custom_total + self.supplier_total


def package_price(
    nominal_price: Decimal | None, catalog_components: Iterable[Component]
) -> Decimal:
    components = tuple(catalog_components)
    if nominal_price is None:
        return sum_prices(components)
    return nominal_price + option_adjustment(components)


def compose(
    nominal_price: Decimal | None,
    catalog_components: Iterable[Component],
    venue: Venue | None = None,
    custom_inclusions: Iterable[Component] = (),
    supplier_services: Iterable[Component] = (),
    venue_inclusions: Iterable[Component] = (),
    guest_count: int | None = None,
) -> BudgetSummary:
    """Combine every price source into one summary.

    Venue inclusions are carried for display only; their value is already
    part of the venue fee. Guests above the venue's base capacity add the
    per-guest rate to the venue cost.
    """
    return BudgetSummary(
        package_price=package_price(nominal_price, catalog_components),
        venue_cost=venue.cost_for(guest_count) if venue is not None else ZERO,
        custom_total=sum_prices(custom_inclusions),
        supplier_total=sum_prices(supplier_services),
        venue_inclusions=tuple(venue_inclusions),
    )

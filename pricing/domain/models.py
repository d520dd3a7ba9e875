"""Domain models for package pricing and payment scheduling.

These are pure domain objects with no API input rules. Remote records are
turned into these by the serializers in pricing/handlers/serializers.py.
Every model is frozen; mutations build a new instance with dataclasses.replace.
"""

from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal

from pricing.domain.value_objects import (
    ZERO,
    CashBondStatus,
    Category,
    InclusionSource,
    PaymentMethod,
    PaymentStatus,
    ScheduleType,
)

DEFAULT_BASE_CAPACITY = 100


@dataclass(frozen=True)
class SubComponent:
    """Display-only breakdown line of a component."""

    name: str
    quantity: int = 1
    unit_price: Decimal = ZERO
    included: bool = True

    @property
    def subtotal(self) -> Decimal:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class VenueChoice:
    """One of several mutually exclusive venue options on a component."""

    id: str
    name: str
    price: Decimal
    max_guests: int | None = None


@dataclass(frozen=True)
class Component:
    """A priced line item, whatever its origin."""

    id: str
    name: str
    price: Decimal
    category: Category = Category.OTHER
    source: InclusionSource = InclusionSource.CATALOG
    description: str = ""
    included: bool = True
    is_removable: bool = True
    sub_components: tuple[SubComponent, ...] = ()
    venue_options: tuple[VenueChoice, ...] = ()
    selected_option_id: str | None = None
    original_id: str | None = None
    supplier_id: str | None = None

    def __post_init__(self) -> None:
        if self.price < 0:
            raise ValueError("Component price cannot be negative")

    @property
    def is_venue_inclusion(self) -> bool:
        return self.source is InclusionSource.VENUE_LOCKED

    @property
    def selected_option(self) -> VenueChoice | None:
        if self.selected_option_id is None:
            return None
        for option in self.venue_options:
            if option.id == self.selected_option_id:
                return option
        return None

    @property
    def sub_total(self) -> Decimal:
        """Informational sum of included sub-components."""
        return sum(
            (sub.subtotal for sub in self.sub_components if sub.included), ZERO
        )


@dataclass(frozen=True)
class Package:
    """A catalog bundle sold for one contracted price."""

    id: str
    title: str
    nominal_price: Decimal | None
    guest_capacity: int | None = None
    components: tuple[Component, ...] = ()


@dataclass(frozen=True)
class VenueInclusion:
    name: str
    price: Decimal


@dataclass(frozen=True)
class Venue:
    """A venue whose fee already covers its inclusions.

    The fee covers up to ``base_capacity`` guests; each guest above that is
    charged ``extra_pax_rate``.
    """

    id: str
    title: str
    price: Decimal
    capacity: int | None = None
    inclusions: tuple[VenueInclusion, ...] = ()
    extra_pax_rate: Decimal = ZERO
    base_capacity: int = DEFAULT_BASE_CAPACITY

    def overflow_charge(self, guest_count: int | None) -> Decimal:
        if not guest_count or guest_count <= self.base_capacity:
            return ZERO
        return (guest_count - self.base_capacity) * self.extra_pax_rate

    def cost_for(self, guest_count: int | None) -> Decimal:
        return self.price + self.overflow_charge(guest_count)

    def inclusion_components(self) -> tuple[Component, ...]:
        """Inclusions as locked components, for display alongside the catalog."""
        return tuple(
            Component(
                id=f"venue-inclusion-{self.id}-{index}",
                name=inclusion.name,
                price=inclusion.price,
                category=Category.VENUE,
                source=InclusionSource.VENUE_LOCKED,
                is_removable=False,
            )
            for index, inclusion in enumerate(self.inclusions)
        )


@dataclass(frozen=True)
class DamageClaim:
    description: str
    amount: Decimal
    claimed_on: date | None = None


@dataclass(frozen=True)
class CashBond:
    """Refundable security deposit, tracked apart from the event total."""

    amount: Decimal
    required: bool = True
    status: CashBondStatus = CashBondStatus.PENDING
    damage: DamageClaim | None = None

    @property
    def display_amount(self) -> Decimal:
        if self.status is CashBondStatus.CLAIMED and self.damage is not None:
            return self.damage.amount
        return self.amount


@dataclass(frozen=True)
class PaymentPlan:
    """Down payment / balance split of a total.

    Invariant: down_payment + balance == total.
    """

    total: Decimal
    schedule_type: ScheduleType
    percentage: Decimal
    down_payment: Decimal
    balance: Decimal
    cash_bond: CashBond

    @property
    def schedule_type_id(self) -> int:
        return self.schedule_type.schedule_type_id


@dataclass(frozen=True)
class PaymentAttempt:
    """Method metadata attached to the down payment."""

    method: PaymentMethod
    reference_number: str = ""
    status: PaymentStatus = PaymentStatus.PENDING
    notes: str = ""


@dataclass(frozen=True)
class BuilderState:
    """Everything one event-builder session knows, as an immutable snapshot."""

    package: Package
    components: tuple[Component, ...]
    plan: PaymentPlan
    venue: Venue | None = None
    custom_inclusions: tuple[Component, ...] = ()
    supplier_services: tuple[Component, ...] = ()
    guest_count: int | None = None
    payment: PaymentAttempt | None = None

    def with_components(self, components: tuple[Component, ...]) -> "BuilderState":
        return replace(self, components=components)

    def find_component(self, component_id: str) -> Component | None:
        for component in self.components:
            if component.id == component_id:
                return component
        return None

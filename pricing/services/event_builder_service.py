"""Event builder service - mutation commands over one booking session.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Run the recompute pipeline after every accepted mutation
- Hand domain errors back as values; nothing raised by domain code leaves here
"""

import itertools
import logging
from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Callable

from pricing.conf import pricing_settings
from pricing.domain.errors import (
    AmountOutOfRangeError,
    DamageClaimRequiredError,
    DomainError,
    InputShapeError,
    InvalidGuestCountError,
    PackageNotFoundError,
    VenueNotFoundError,
)
from pricing.domain.models import (
    BuilderState,
    Component,
    DamageClaim,
    Venue,
)
from pricing.domain.value_objects import (
    ZERO,
    Capacity,
    CashBondStatus,
    Category,
    InclusionSource,
    Money,
)
from pricing.services import inclusions, payment_schedule
from pricing.services.pipeline import DerivedTotals, recompute
from pricing.services.submission import build_booking_payload
from pricing.stores.interfaces import CatalogStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MutationResult:
    """Outcome of one mutation command."""

    accepted: bool
    derived: DerivedTotals
    errors: tuple[DomainError, ...] = ()


@dataclass(frozen=True)
class SessionResult:
    session: "EventBuilderSession | None"
    errors: tuple[DomainError, ...] = ()

    @property
    def ok(self) -> bool:
        return self.session is not None and not self.errors


def _parse_money(value, record: str, field: str) -> Decimal:
    try:
        return Money.of(value).amount
    except (InvalidOperation, TypeError, ValueError):
        raise InputShapeError(record, details={field: [f"Invalid amount: {value!r}"]}) from None


def _parse_category(value: Category | str | None, fallback: Category) -> Category:
    if isinstance(value, Category):
        return value
    if value is None:
        return fallback
    return Category.parse(value)


class EventBuilderSession:
    """Holds the state of one event-builder session.

    Each mutation builds a new BuilderState; the state only changes when the
    mutation is accepted. ``errors`` reports the last mutation's errors.
    """

    def __init__(self, state: BuilderState, store: CatalogStore) -> None:
        self._store = store
        self._ids = itertools.count(1)
        self._derived = recompute(state)
        self._state = replace(state, plan=self._derived.plan)
        self._errors: tuple[DomainError, ...] = ()

    @property
    def state(self) -> BuilderState:
        return self._state

    @property
    def derived(self) -> DerivedTotals:
        return self._derived

    @property
    def errors(self) -> tuple[DomainError, ...]:
        return self._errors

    @property
    def total_budget(self) -> Decimal:
        return self._derived.total_budget

    def _apply(self, command: str, mutate: Callable[[BuilderState], BuilderState]) -> MutationResult:
        try:
            state = mutate(self._state)
            derived = recompute(state)
        except DomainError as exc:
            return self._reject(command, exc)
        except ArithmeticError:
            return self._reject(command, AmountOutOfRangeError(command))

        self._state = replace(state, plan=derived.plan)
        self._derived = derived
        self._errors = ()
        return MutationResult(accepted=True, derived=derived)

    def _reject(self, command: str, error: DomainError) -> MutationResult:
        logger.warning("Rejected %s: %s", command, error)
        self._errors = (error,)
        return MutationResult(accepted=False, derived=self._derived, errors=self._errors)

    def _next_id(self, prefix: str) -> str:
        taken = {
            c.id
            for c in self._state.components
            + self._state.custom_inclusions
            + self._state.supplier_services
        }
        while True:
            candidate = f"{prefix}-{next(self._ids)}"
            if candidate not in taken:
                return candidate

    # -- components ---------------------------------------------------------

    def add_component(self, component: Component) -> MutationResult:
        """Add a catalog component; it takes part in proration."""
        component = replace(component, source=InclusionSource.CATALOG)
        return self._apply(
            "add_component",
            lambda s: s.with_components(inclusions.add_component(s.components, component)),
        )

    def remove_component(self, component_id: str) -> MutationResult:
        return self._apply(
            "remove_component",
            lambda s: s.with_components(inclusions.remove_component(s.components, component_id)),
        )

    def restore_component(self, component_id: str) -> MutationResult:
        return self._apply(
            "restore_component",
            lambda s: s.with_components(inclusions.restore_component(s.components, component_id)),
        )

    def select_venue_option(self, component_id: str, option_id: str | None) -> MutationResult:
        return self._apply(
            "select_venue_option",
            lambda s: s.with_components(
                inclusions.select_venue_option(s.components, component_id, option_id)
            ),
        )

    # -- venue --------------------------------------------------------------

    def select_venue(self, venue_id: str | None) -> MutationResult:
        """Select a venue by id, or clear the selection with None."""

        def mutate(state: BuilderState) -> BuilderState:
            venue = None
            if venue_id is not None:
                venue = self._store.get_venue(venue_id)
                if venue is None:
                    raise VenueNotFoundError(str(venue_id))
            return with_venue(state, venue)

        return self._apply("select_venue", mutate)

    # -- custom inclusions and supplier services ----------------------------

    def add_custom_inclusion(
        self,
        name: str,
        price,
        category: Category | str | None = None,
        description: str = "",
    ) -> MutationResult:
        def mutate(state: BuilderState) -> BuilderState:
            item = Component(
                id=self._next_id("custom"),
                name=name,
                description=description or name,
                price=_parse_money(price, "custom inclusion", "price"),
                category=_parse_category(category, Category.EXTRAS),
                source=InclusionSource.CUSTOM,
            )
            return replace(state, custom_inclusions=state.custom_inclusions + (item,))

        return self._apply("add_custom_inclusion", mutate)

    def remove_custom_inclusion(self, inclusion_id: str) -> MutationResult:
        return self._apply(
            "remove_custom_inclusion",
            lambda s: replace(
                s, custom_inclusions=inclusions.drop_component(s.custom_inclusions, inclusion_id)
            ),
        )

    def add_supplier_service(
        self,
        supplier_id: str,
        name: str,
        price,
        category: Category | str | None = None,
    ) -> MutationResult:
        def mutate(state: BuilderState) -> BuilderState:
            item = Component(
                id=self._next_id("supplier"),
                name=name,
                price=_parse_money(price, "supplier service", "price"),
                category=_parse_category(category, Category.SERVICES),
                source=InclusionSource.SUPPLIER,
                supplier_id=str(supplier_id),
            )
            return replace(state, supplier_services=state.supplier_services + (item,))

        return self._apply("add_supplier_service", mutate)

    def remove_supplier_service(self, service_id: str) -> MutationResult:
        return self._apply(
            "remove_supplier_service",
            lambda s: replace(
                s, supplier_services=inclusions.drop_component(s.supplier_services, service_id)
            ),
        )

    def set_guest_count(self, guest_count: int) -> MutationResult:
        def mutate(state: BuilderState) -> BuilderState:
            if isinstance(guest_count, bool) or not isinstance(guest_count, int):
                raise InvalidGuestCountError(guest_count)
            try:
                Capacity(guest_count)
            except ValueError:
                raise InvalidGuestCountError(guest_count) from None
            return replace(state, guest_count=guest_count)

        return self._apply("set_guest_count", mutate)

    # -- payment plan -------------------------------------------------------

    def change_schedule_type(self, schedule_type) -> MutationResult:
        return self._apply(
            "change_schedule_type",
            lambda s: replace(s, plan=payment_schedule.select_schedule(s.plan, schedule_type)),
        )

    def edit_custom_percentage(self, percentage) -> MutationResult:
        return self._apply(
            "edit_custom_percentage",
            lambda s: replace(s, plan=payment_schedule.edit_percentage(s.plan, percentage)),
        )

    def edit_down_payment(self, amount) -> MutationResult:
        return self._apply(
            "edit_down_payment",
            lambda s: replace(s, plan=payment_schedule.edit_down_payment(s.plan, amount)),
        )

    def set_cash_bond_required(self, required: bool) -> MutationResult:
        def mutate(state: BuilderState) -> BuilderState:
            bond = payment_schedule.set_cash_bond_required(state.plan.cash_bond, required)
            return replace(state, plan=replace(state.plan, cash_bond=bond))

        return self._apply("set_cash_bond_required", mutate)

    def edit_cash_bond_status(
        self,
        status: CashBondStatus | str,
        damage_description: str | None = None,
        damage_amount=None,
        claimed_on: date | None = None,
    ) -> MutationResult:
        def mutate(state: BuilderState) -> BuilderState:
            damage = None
            if damage_description is not None or damage_amount is not None:
                try:
                    amount = Money.of(damage_amount).amount
                except (InvalidOperation, TypeError, ValueError):
                    raise DamageClaimRequiredError() from None
                damage = DamageClaim(
                    description=damage_description or "",
                    amount=amount,
                    claimed_on=claimed_on,
                )
            bond = payment_schedule.transition_cash_bond(state.plan.cash_bond, status, damage)
            return replace(state, plan=replace(state.plan, cash_bond=bond))

        return self._apply("edit_cash_bond_status", mutate)

    def record_payment(
        self,
        method: str,
        reference_number: str = "",
        status: str = "pending",
        notes: str = "",
    ) -> MutationResult:
        return self._apply(
            "record_payment",
            lambda s: replace(
                s,
                payment=payment_schedule.record_payment(method, reference_number, status, notes),
            ),
        )

    # -- submission ---------------------------------------------------------

    def build_payload(self) -> dict:
        """Flat booking payload for the booking-creation endpoint."""
        return build_booking_payload(self._state, self._derived)


def with_venue(state: BuilderState, venue: Venue | None) -> BuilderState:
    """Swap the selected venue and its locked inclusions."""
    previous = set()
    if state.venue is not None:
        previous = {c.id for c in state.venue.inclusion_components()}
    components = tuple(c for c in state.components if c.id not in previous)
    if venue is not None:
        components += venue.inclusion_components()
    return replace(state, venue=venue, components=components)


class EventBuilderService:
    """Service that opens event-builder sessions from the catalog."""

    def __init__(self, store: CatalogStore) -> None:
        self._store = store

    def start_session(
        self,
        package_id: str,
        venue_id: str | None = None,
        guest_count: int | None = None,
        schedule_type: str | None = None,
    ) -> SessionResult:
        """Open a session on a package, optionally with a venue preselected.

        Unknown package or venue ids, and an unknown schedule type, come back
        as errors on the result.
        """
        package = self._store.get_package(package_id)
        if package is None:
            return SessionResult(session=None, errors=(PackageNotFoundError(str(package_id)),))

        venue = None
        if venue_id is not None:
            venue = self._store.get_venue(venue_id)
            if venue is None:
                return SessionResult(session=None, errors=(VenueNotFoundError(str(venue_id)),))

        try:
            plan = payment_schedule.create_plan(ZERO, schedule_type)
        except DomainError as exc:
            return SessionResult(session=None, errors=(exc,))

        if guest_count is None:
            guest_count = package.guest_capacity or pricing_settings.DEFAULT_GUEST_COUNT
        try:
            Capacity(guest_count)
        except (TypeError, ValueError):
            return SessionResult(session=None, errors=(InvalidGuestCountError(guest_count),))

        state = BuilderState(
            package=package,
            components=package.components,
            plan=plan,
            guest_count=guest_count,
        )
        if venue is not None:
            state = with_venue(state, venue)

        try:
            session = EventBuilderSession(state, self._store)
        except ArithmeticError:
            error = AmountOutOfRangeError("start_session")
            logger.warning("Rejected start_session for package %s: %s", package.id, error)
            return SessionResult(session=None, errors=(error,))

        logger.info("Started event builder session for package %s", package.id)
        return SessionResult(session=session)

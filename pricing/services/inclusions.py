"""Classification of priced items.

Every later stage consumes the ``Partition`` built here, so venue
inclusions never reach proration and excluded items never reach a sum.
"""

from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Iterable

from pricing.domain.errors import (
    ComponentNotFoundError,
    ComponentNotRemovableError,
    DuplicateComponentError,
    UnknownVenueOptionError,
    VenueInclusionLockedError,
)
from pricing.domain.models import Component
from pricing.domain.value_objects import ZERO, InclusionSource


@dataclass(frozen=True)
class Partition:
    venue_inclusions: tuple[Component, ...]
    catalog_components: tuple[Component, ...]


def is_effectively_included(component: Component) -> bool:
    return component.included is not False


def effective_price(component: Component) -> Decimal:
    """Selected venue option price if one is active, else the nominal price."""
    option = component.selected_option
    if option is not None:
        return option.price
    return component.price


def partition(components: Iterable[Component]) -> Partition:
    venue_inclusions = []
    catalog_components = []
    for component in components:
        if not is_effectively_included(component):
            continue
        if component.source is InclusionSource.VENUE_LOCKED:
            venue_inclusions.append(component)
        elif component.source is InclusionSource.CATALOG:
            catalog_components.append(component)
    return Partition(
        venue_inclusions=tuple(venue_inclusions),
        catalog_components=tuple(catalog_components),
    )


def sum_prices(components: Iterable[Component]) -> Decimal:
    return sum(
        (effective_price(c) for c in components if is_effectively_included(c)),
        ZERO,
    )


def option_adjustment(catalog_components: Iterable[Component]) -> Decimal:
    """Net price change caused by active venue options."""
    return sum(
        (
            effective_price(c) - c.price
            for c in catalog_components
            if c.selected_option is not None
        ),
        ZERO,
    )


def _replace_component(
    components: tuple[Component, ...], updated: Component
) -> tuple[Component, ...]:
    return tuple(updated if c.id == updated.id else c for c in components)


def _get(components: tuple[Component, ...], component_id: str) -> Component:
    for component in components:
        if component.id == component_id:
            return component
    raise ComponentNotFoundError(component_id)


def add_component(
    components: tuple[Component, ...], component: Component
) -> tuple[Component, ...]:
    if any(c.id == component.id for c in components):
        raise DuplicateComponentError(component.id)
    return components + (component,)


def remove_component(
    components: tuple[Component, ...], component_id: str
) -> tuple[Component, ...]:
    """Mark a component excluded. It stays in the collection for restore."""
    component = _get(components, component_id)
    if component.is_venue_inclusion:
        raise VenueInclusionLockedError(component_id)
    if not component.is_removable:
        raise ComponentNotRemovableError(component_id)
    if not component.included:
        return components
    return _replace_component(components, replace(component, included=False))


def restore_component(
    components: tuple[Component, ...], component_id: str
) -> tuple[Component, ...]:
    component = _get(components, component_id)
    if component.included:
        return components
    return _replace_component(components, replace(component, included=True))


def select_venue_option(
    components: tuple[Component, ...], component_id: str, option_id: str | None
) -> tuple[Component, ...]:
    """Activate one venue option on a component, or clear it with None."""
    component = _get(components, component_id)
    if option_id is not None and not any(
        option.id == option_id for option in component.venue_options
    ):
        raise UnknownVenueOptionError(component_id, option_id)
    return _replace_component(
        components, replace(component, selected_option_id=option_id)
    )


def drop_component(
    components: tuple[Component, ...], component_id: str
) -> tuple[Component, ...]:
    """Delete a user-added item outright."""
    _get(components, component_id)
    return tuple(c for c in components if c.id != component_id)

"""Proration of catalog component prices onto the contracted package price.

The package's nominal price is the headline number; the itemized
components are scaled uniformly so their sum matches it. Uniform scaling
keeps every component's share of the naive sum, so the most expensive
item stays the most expensive.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from pricing.conf import pricing_settings
from pricing.domain.errors import Diagnostic, DiagnosticCode
from pricing.domain.models import Component
from pricing.domain.value_objects import ZERO
from pricing.services.inclusions import effective_price, option_adjustment

logger = logging.getLogger(__name__)

ONE = Decimal("1")


@dataclass(frozen=True)
class Proration:
    """Adjusted prices keyed by component id.

    ``target`` is None when there was no nominal price to force.
    """

    naive_sum: Decimal
    target: Decimal | None
    ratio: Decimal
    adjusted: dict[str, Decimal]
    diagnostics: tuple[Diagnostic, ...] = ()

    @property
    def adjusted_sum(self) -> Decimal:
        return sum(self.adjusted.values(), ZERO)

    def price_of(self, component: Component) -> Decimal:
        return self.adjusted.get(component.id, effective_price(component))


def prorate(
    nominal_price: Decimal | None, catalog_components: Iterable[Component]
) -> Proration:
    """Scale ``catalog_components`` so they sum to the nominal price.

    ``catalog_components`` must already be filtered to included catalog
    items (see ``inclusions.partition``).
    """
    components = tuple(catalog_components)
    naive_sum = sum((effective_price(c) for c in components), ZERO)
    identity = {c.id: effective_price(c) for c in components}

    if nominal_price is None:
        return Proration(naive_sum=naive_sum, target=None, ratio=ONE, adjusted=identity)

    target = nominal_price + option_adjustment(components)

    if naive_sum == ZERO:
        diagnostics = ()
        if target != ZERO:
            logger.warning(
                "Degenerate proration: components sum to zero but package price is %s",
                target,
            )
            diagnostics = (
                Diagnostic(
                    code=DiagnosticCode.DEGENERATE_PRORATION,
                    message="Component prices sum to zero; package price shown as-is",
                ),
            )
        return Proration(
            naive_sum=naive_sum,
            target=target,
            ratio=ONE,
            adjusted=identity,
            diagnostics=diagnostics,
        )

    if abs(target - naive_sum) <= pricing_settings.PRORATION_TOLERANCE:
        return Proration(naive_sum=naive_sum, target=target, ratio=ONE, adjusted=identity)

    ratio = target / naive_sum
    quantum = pricing_settings.PRORATION_TOLERANCE
    adjusted = {c.id: (effective_price(c) * ratio).quantize(quantum) for c in components}
    _absorb_residual(adjusted, target)
    return Proration(naive_sum=naive_sum, target=target, ratio=ratio, adjusted=adjusted)


def _absorb_residual(adjusted: dict[str, Decimal], target: Decimal) -> None:
    # Adjusted prices are quantized to the tolerance; the largest line takes the
    # leftover so the adjusted prices sum to the target exactly.
    residual = target - sum(adjusted.values(), ZERO)
    if residual == ZERO:
        return
    largest = max(adjusted, key=lambda component_id: adjusted[component_id])
    adjusted[largest] += residual

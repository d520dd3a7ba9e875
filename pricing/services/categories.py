"""Per-category subtotals of the prorated catalog."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from pricing.domain.models import Component, SubComponent
from pricing.domain.value_objects import HUNDRED, ZERO, Category, InclusionSource
from pricing.services.proration import Proration


@dataclass(frozen=True)
class BreakdownItem:
    id: str
    name: str
    price: Decimal
    adjusted_price: Decimal
    source: InclusionSource
    sub_components: tuple[SubComponent, ...] = ()
    sub_total: Decimal = ZERO


@dataclass(frozen=True)
class CategoryRow:
    category: Category
    total: Decimal
    percentage: Decimal
    items: tuple[BreakdownItem, ...]

    @property
    def label(self) -> str:
        return self.category.label


def category_percentage(category_total: Decimal, total_budget: Decimal) -> Decimal:
    if total_budget == ZERO:
        return ZERO
    return category_total / total_budget * HUNDRED


def aggregate(
    catalog_components: Iterable[Component],
    proration: Proration,
    total_budget: Decimal,
) -> tuple[CategoryRow, ...]:
    """Group catalog components into category rows.

    Rows come out by descending total; equal totals keep category
    declaration order. Categories with no components are not emitted.
    """
    grouped: dict[Category, list[BreakdownItem]] = {}
    for component in catalog_components:
        grouped.setdefault(component.category, []).append(
            BreakdownItem(
                id=component.id,
                name=component.name,
                price=component.price,
                adjusted_price=proration.price_of(component),
                source=component.source,
                sub_components=component.sub_components,
                sub_total=component.sub_total,
            )
        )

    rows = []
    for category, items in grouped.items():
        total = sum((item.adjusted_price for item in items), ZERO)
        rows.append(
            CategoryRow(
                category=category,
                total=total,
                percentage=category_percentage(total, total_budget),
                items=tuple(items),
            )
        )

    rows.sort(key=lambda row: row.category.rank)
    rows.sort(key=lambda row: row.total, reverse=True)
    return tuple(rows)

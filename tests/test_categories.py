"""Unit tests for the category aggregator.

Run with: pytest tests/test_categories.py -v
"""

from decimal import Decimal

from pricing.domain.models import Component, SubComponent
from pricing.domain.value_objects import Category
from pricing.services.categories import aggregate, category_percentage
from pricing.services.proration import prorate


def make(id, price, category):
    return Component(id=id, name=id, price=Decimal(price), category=category)


class TestAggregate:
    """Tests for aggregate()."""

    def test_rows_are_sorted_by_descending_total(self):
        components = [
            make("photo", "20000", Category.PHOTOGRAPHY),
            make("food", "50000", Category.CATERING),
            make("flowers", "5000", Category.DECOR),
            make("cake", "10000", Category.CATERING),
        ]
        proration = prorate(None, components)

        rows = aggregate(components, proration, Decimal("85000"))

        assert [row.category for row in rows] == [
            Category.CATERING,
            Category.PHOTOGRAPHY,
            Category.DECOR,
        ]
        assert rows[0].total == Decimal("60000")
        assert [item.id for item in rows[0].items] == ["food", "cake"]

    def test_ties_follow_category_declaration_order(self):
        components = [
            make("band", "10000", Category.ENTERTAINMENT),
            make("host", "10000", Category.COORDINATION),
            make("gown", "10000", Category.ATTIRE),
        ]

        rows = aggregate(components, prorate(None, components), Decimal("30000"))

        assert [row.category for row in rows] == [
            Category.COORDINATION,
            Category.ATTIRE,
            Category.ENTERTAINMENT,
        ]

    def test_uses_adjusted_prices(self):
        components = [
            make("a", "50000", Category.CATERING),
            make("b", "20000", Category.MEDIA),
            make("c", "10000", Category.MEDIA),
        ]
        proration = prorate(Decimal("100000"), components)

        rows = aggregate(components, proration, Decimal("100000"))

        totals = {row.category: row.total for row in rows}
        assert totals == {Category.CATERING: Decimal("62500"), Category.MEDIA: Decimal("37500")}
        assert rows[0].percentage == Decimal("62.5")

    def test_percentage_is_of_total_budget(self):
        components = [make("a", "50000", Category.CATERING)]

        rows = aggregate(components, prorate(None, components), Decimal("200000"))

        assert rows[0].percentage == Decimal("25")

    def test_empty_categories_are_omitted(self):
        assert aggregate([], prorate(None, []), Decimal("0")) == ()

    def test_items_carry_sub_components(self):
        component = Component(
            id="photo",
            name="Photo",
            price=Decimal("40000"),
            category=Category.PHOTOGRAPHY,
            sub_components=(SubComponent(name="Prenup", unit_price=Decimal("15000")),),
        )

        rows = aggregate([component], prorate(None, [component]), Decimal("40000"))

        item = rows[0].items[0]
        assert item.sub_total == Decimal("15000")
        assert rows[0].label == "Photography"


class TestCategoryPercentage:
    def test_zero_total_budget(self):
        assert category_percentage(Decimal("100"), Decimal("0")) == Decimal("0")

"""Unit tests for proration.

These test the sum and identity properties of uniform scaling.
Run with: pytest tests/test_proration.py -v
"""

import pytest
from decimal import Decimal

from pricing.domain.errors import DiagnosticCode
from pricing.domain.models import Component, VenueChoice
from pricing.services.proration import prorate


def make(id, price, **kwargs):
    return Component(id=id, name=id, price=Decimal(price), **kwargs)


class TestProrate:
    """Tests for prorate()."""

    def test_scales_to_nominal_price(self):
        """Components summing to 80,000 scale by 1.25 onto 100,000."""
        components = [make("a", "50000"), make("b", "20000"), make("c", "10000")]

        result = prorate(Decimal("100000"), components)

        assert result.ratio == Decimal("1.25")
        assert result.adjusted == {
            "a": Decimal("62500"),
            "b": Decimal("25000"),
            "c": Decimal("12500"),
        }
        assert result.adjusted_sum == Decimal("100000")

    def test_identity_when_nominal_matches_sum(self):
        components = [make("a", "50000"), make("b", "30000")]

        result = prorate(Decimal("80000"), components)

        assert result.ratio == Decimal("1")
        assert result.adjusted == {"a": Decimal("50000"), "b": Decimal("30000")}

    def test_identity_without_nominal_price(self):
        components = [make("a", "50000"), make("b", "30000")]

        result = prorate(None, components)

        assert result.target is None
        assert result.adjusted == {"a": Decimal("50000"), "b": Decimal("30000")}
        assert result.diagnostics == ()

    def test_zero_sum_with_nominal_price_is_degenerate(self):
        components = [make("a", "0"), make("b", "0")]

        result = prorate(Decimal("100000"), components)

        assert result.adjusted == {"a": Decimal("0"), "b": Decimal("0")}
        assert [d.code for d in result.diagnostics] == [DiagnosticCode.DEGENERATE_PRORATION]

    def test_zero_sum_with_zero_price_is_not_degenerate(self):
        result = prorate(Decimal("0"), [make("a", "0")])
        assert result.diagnostics == ()

    @pytest.mark.parametrize(
        "nominal,prices",
        [
            ("100", ["30", "30", "30"]),
            ("150000", ["80000", "40000", "20000"]),
            ("99999.99", ["1", "2", "3", "4", "5", "6", "7"]),
            ("1", ["33333", "33333", "33334"]),
        ],
    )
    def test_sum_is_exact(self, nominal, prices):
        components = [make(f"c{i}", price) for i, price in enumerate(prices)]

        result = prorate(Decimal(nominal), components)

        assert result.adjusted_sum == Decimal(nominal)

    def test_ordering_is_preserved(self):
        components = [make("a", "70000"), make("b", "20000"), make("c", "10000")]

        result = prorate(Decimal("85000"), components)

        assert result.adjusted["a"] > result.adjusted["b"] > result.adjusted["c"]

    def test_zero_priced_component_stays_zero(self):
        components = [make("a", "50000"), make("free", "0")]

        result = prorate(Decimal("60000"), components)

        assert result.adjusted["free"] == Decimal("0")
        assert result.adjusted["a"] == Decimal("60000")

    def test_selected_option_raises_the_target(self):
        hall = make(
            "hall",
            "20000",
            venue_options=(VenueChoice(id="garden", name="Garden", price=Decimal("25000")),),
            selected_option_id="garden",
        )
        components = [make("a", "80000"), hall]

        result = prorate(Decimal("100000"), components)

        assert result.target == Decimal("105000")
        assert result.adjusted_sum == Decimal("105000")

"""Unit tests for inclusion classification and component mutations.

Run with: pytest tests/test_inclusions.py -v
"""

import pytest
from decimal import Decimal

from pricing.domain.errors import (
    ComponentNotFoundError,
    ComponentNotRemovableError,
    DuplicateComponentError,
    UnknownVenueOptionError,
    VenueInclusionLockedError,
)
from pricing.domain.models import Component, VenueChoice
from pricing.domain.value_objects import Category, InclusionSource
from pricing.services import inclusions


def make(id, price, **kwargs):
    return Component(id=id, name=id.title(), price=Decimal(price), **kwargs)


@pytest.fixture
def components():
    return (
        make("catering", "50000", category=Category.CATERING),
        make("photo", "20000", category=Category.PHOTOGRAPHY),
        make("host", "10000", is_removable=False),
        make("tables", "10000", source=InclusionSource.VENUE_LOCKED, is_removable=False),
        make("cake", "5000", source=InclusionSource.CUSTOM),
        make(
            "hall",
            "20000",
            venue_options=(
                VenueChoice(id="main", name="Main hall", price=Decimal("20000")),
                VenueChoice(id="garden", name="Garden", price=Decimal("26000")),
            ),
        ),
    )


class TestPartition:
    """Tests for splitting components by source."""

    def test_partition_separates_venue_inclusions(self, components):
        parts = inclusions.partition(components)

        assert [c.id for c in parts.venue_inclusions] == ["tables"]
        assert [c.id for c in parts.catalog_components] == ["catering", "photo", "host", "hall"]

    def test_partition_drops_excluded_components(self, components):
        components = inclusions.remove_component(components, "photo")
        parts = inclusions.partition(components)

        assert "photo" not in [c.id for c in parts.catalog_components]


class TestEffectivePrice:
    def test_nominal_price_without_option(self, components):
        assert inclusions.effective_price(components[-1]) == Decimal("20000")

    def test_selected_option_price(self, components):
        components = inclusions.select_venue_option(components, "hall", "garden")
        hall = components[-1]

        assert inclusions.effective_price(hall) == Decimal("26000")
        assert inclusions.option_adjustment([hall]) == Decimal("6000")

    def test_sum_prices_skips_excluded(self, components):
        components = inclusions.remove_component(components, "catering")
        assert inclusions.sum_prices(components) == Decimal("65000")


class TestComponentMutations:
    """Tests for add/remove/restore commands."""

    def test_add_component_rejects_duplicate_id(self, components):
        with pytest.raises(DuplicateComponentError):
            inclusions.add_component(components, make("photo", "1000"))

    def test_add_component_appends(self, components):
        result = inclusions.add_component(components, make("band", "15000"))
        assert result[-1].id == "band"
        assert len(result) == len(components) + 1

    def test_remove_unknown_component(self, components):
        with pytest.raises(ComponentNotFoundError):
            inclusions.remove_component(components, "missing")

    def test_remove_venue_inclusion_is_rejected(self, components):
        with pytest.raises(VenueInclusionLockedError):
            inclusions.remove_component(components, "tables")

    def test_remove_non_removable_component_is_rejected(self, components):
        with pytest.raises(ComponentNotRemovableError):
            inclusions.remove_component(components, "host")

    def test_remove_is_idempotent(self, components):
        once = inclusions.remove_component(components, "photo")
        twice = inclusions.remove_component(once, "photo")
        assert once == twice

    def test_exclusion_round_trip_restores_component(self, components):
        removed = inclusions.remove_component(components, "catering")
        restored = inclusions.restore_component(removed, "catering")

        assert restored == components
        assert restored[0].price == Decimal("50000")
        assert restored[0].category is Category.CATERING

    def test_select_unknown_option_is_rejected(self, components):
        with pytest.raises(UnknownVenueOptionError):
            inclusions.select_venue_option(components, "hall", "rooftop")

    def test_clear_option(self, components):
        selected = inclusions.select_venue_option(components, "hall", "garden")
        cleared = inclusions.select_venue_option(selected, "hall", None)
        assert cleared[-1].selected_option is None

    def test_drop_component(self, components):
        result = inclusions.drop_component(components, "cake")
        assert "cake" not in [c.id for c in result]

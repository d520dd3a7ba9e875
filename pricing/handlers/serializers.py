"""Serializers at the edges of the engine.

Ingestion serializers check the shape of catalog records fetched from the
remote event-data service and build domain models from them. The booking
serializer turns a finished session into the flat payload the booking
endpoint expects.
"""

import logging
from decimal import Decimal

from rest_framework import serializers

from pricing.domain.errors import InputShapeError
from pricing.domain.models import (
    DEFAULT_BASE_CAPACITY,
    Component,
    Package,
    SubComponent,
    Venue,
    VenueChoice,
    VenueInclusion,
)
from pricing.domain.value_objects import Category, InclusionSource

logger = logging.getLogger(__name__)


def price_field(**kwargs) -> serializers.DecimalField:
    return serializers.DecimalField(
        max_digits=None, decimal_places=None, min_value=Decimal("0"), **kwargs
    )


def money_field(**kwargs) -> serializers.DecimalField:
    return serializers.DecimalField(max_digits=16, decimal_places=2, **kwargs)


def ingest(serializer_class: type[serializers.Serializer], record: dict, name: str):
    """Validate ``record`` and return the domain object it describes.

    Raises:
        InputShapeError: If the record does not have the expected shape.
    """
    serializer = serializer_class(data=record)
    if not serializer.is_valid():
        raise InputShapeError(name, details=dict(serializer.errors))
    return serializer.save()


class SubComponentSerializer(serializers.Serializer):
    subcomponent_name = serializers.CharField(source="name")
    quantity = serializers.IntegerField(min_value=0, default=1)
    subcomponent_price = price_field(source="unit_price", default=Decimal("0"))
    included = serializers.BooleanField(default=True)


class VenueChoiceSerializer(serializers.Serializer):
    option_id = serializers.CharField(source="id")
    option_name = serializers.CharField(source="name")
    option_price = price_field(source="price")
    max_guests = serializers.IntegerField(min_value=0, required=False, allow_null=True)


class ComponentSerializer(serializers.Serializer):
    """A package component as the remote service sends it."""

    component_id = serializers.CharField(source="id")
    component_name = serializers.CharField(source="name")
    component_description = serializers.CharField(
        source="description", required=False, allow_blank=True, allow_null=True, default=""
    )
    component_price = price_field(source="price")
    category = serializers.CharField(required=False, allow_blank=True, allow_null=True, default=None)
    is_venue_inclusion = serializers.BooleanField(default=False)
    is_removable = serializers.BooleanField(default=True)
    included = serializers.BooleanField(default=True)
    subcomponents = SubComponentSerializer(
        source="sub_components", many=True, required=False, default=list
    )
    venue_options = VenueChoiceSerializer(many=True, required=False, default=list)

    def validate_category(self, value: str | None) -> Category:
        category = Category.parse(value)
        if category is Category.OTHER and value and value.strip().lower() not in ("other", "default"):
            logger.debug("Unknown component category %r filed under other", value)
        return category

    def create(self, validated_data: dict) -> Component:
        return build_component(validated_data)


def build_component(data: dict) -> Component:
    locked = data.get("is_venue_inclusion", False)
    category = data.get("category")
    if not isinstance(category, Category):
        category = Category.parse(category)
    return Component(
        id=str(data["id"]),
        name=data["name"],
        description=data.get("description") or "",
        price=data["price"],
        category=category,
        source=InclusionSource.VENUE_LOCKED if locked else InclusionSource.CATALOG,
        included=data.get("included", True),
        is_removable=False if locked else data.get("is_removable", True),
        sub_components=tuple(SubComponent(**sub) for sub in data.get("sub_components", [])),
        venue_options=tuple(
            VenueChoice(
                id=str(option["id"]),
                name=option["name"],
                price=option["price"],
                max_guests=option.get("max_guests"),
            )
            for option in data.get("venue_options", [])
        ),
        original_id=str(data["id"]),
    )


class PackageSerializer(serializers.Serializer):
    package_id = serializers.CharField(source="id")
    package_title = serializers.CharField(source="title")
    package_price = price_field(source="nominal_price", required=False, allow_null=True, default=None)
    guest_capacity = serializers.IntegerField(min_value=0, required=False, allow_null=True)
    components = ComponentSerializer(many=True, required=False, default=list)

    def to_internal_value(self, data):
        if isinstance(data, dict) and data.get("package_price") == "":
            data = {**data, "package_price": None}
        return super().to_internal_value(data)

    def create(self, validated_data: dict) -> Package:
        return Package(
            id=validated_data["id"],
            title=validated_data["title"],
            nominal_price=validated_data.get("nominal_price"),
            guest_capacity=validated_data.get("guest_capacity"),
            components=dedupe_components(
                build_component(item) for item in validated_data.get("components", [])
            ),
        )


def dedupe_components(components) -> tuple[Component, ...]:
    """Drop repeated catalog rows (same trimmed name and price), keeping the first."""
    seen = set()
    unique = []
    for component in components:
        key = (component.name.strip().lower(), component.price)
        if key in seen:
            logger.debug("Dropping duplicate component %r", component.name)
            continue
        seen.add(key)
        unique.append(component)
    return tuple(unique)


class VenueInclusionSerializer(serializers.Serializer):
    inclusion_name = serializers.CharField(source="name")
    inclusion_price = price_field(source="price", default=Decimal("0"))


class VenueSerializer(serializers.Serializer):
    venue_id = serializers.CharField(source="id")
    venue_title = serializers.CharField(source="title")
    venue_price = price_field(source="price")
    venue_capacity = serializers.IntegerField(
        source="capacity", min_value=0, required=False, allow_null=True
    )
    extra_pax_rate = price_field(required=False, allow_null=True, default=None)
    base_capacity = serializers.IntegerField(
        min_value=0, required=False, allow_null=True, default=None
    )
    inclusions = VenueInclusionSerializer(many=True, required=False, default=list)

    def create(self, validated_data: dict) -> Venue:
        # The remote total_venue_price is priced for the backend's guest
        # count; the overflow charge is recomputed per session instead.
        return Venue(
            id=validated_data["id"],
            title=validated_data["title"],
            price=validated_data["price"],
            capacity=validated_data.get("capacity"),
            inclusions=tuple(
                VenueInclusion(name=item["name"], price=item["price"])
                for item in validated_data.get("inclusions", [])
            ),
            extra_pax_rate=validated_data.get("extra_pax_rate") or Decimal("0"),
            base_capacity=validated_data.get("base_capacity") or DEFAULT_BASE_CAPACITY,
        )


class ComponentLineSerializer(serializers.Serializer):
    component_name = serializers.CharField()
    component_price = money_field()
    effective_price = money_field()
    selected_option_id = serializers.CharField(allow_null=True)
    component_description = serializers.CharField(allow_blank=True)
    category = serializers.CharField()
    is_custom = serializers.BooleanField()
    is_included = serializers.BooleanField()
    original_package_component_id = serializers.CharField(allow_null=True)
    display_order = serializers.IntegerField()


class SupplierServiceLineSerializer(serializers.Serializer):
    supplier_id = serializers.CharField(allow_null=True)
    service_name = serializers.CharField()
    service_price = money_field()
    category = serializers.CharField()


class DamageDetailsSerializer(serializers.Serializer):
    description = serializers.CharField()
    amount = money_field()
    date = serializers.DateField(allow_null=True)


class BookingPayloadSerializer(serializers.Serializer):
    """Flat booking record handed to the booking-creation endpoint."""

    package_id = serializers.CharField()
    venue_id = serializers.CharField(allow_null=True)
    guest_count = serializers.IntegerField(allow_null=True)
    total_budget = money_field()
    down_payment = money_field()
    balance = money_field()
    down_payment_percentage = serializers.DecimalField(max_digits=7, decimal_places=2)
    payment_schedule_type_id = serializers.IntegerField()
    payment_schedule_type = serializers.CharField()
    payment_method = serializers.CharField()
    payment_status = serializers.CharField()
    reference_number = serializers.CharField(allow_null=True)
    payment_notes = serializers.CharField(allow_blank=True)
    cash_bond_required = serializers.BooleanField()
    cash_bond_status = serializers.CharField()
    cash_bond_amount = money_field()
    cash_bond_damage_details = DamageDetailsSerializer(allow_null=True)
    components = ComponentLineSerializer(many=True)
    supplier_services = SupplierServiceLineSerializer(many=True)

"""Pytest configuration and shared fixtures."""

import copy

import pytest

from pricing.services import EventBuilderService
from pricing.stores import InMemoryCatalogStore

PACKAGE_RECORD = {
    "package_id": "pkg-1",
    "package_title": "Garden Wedding",
    "package_price": "150000",
    "guest_capacity": 120,
    "venue_ids": ["v1", "v2"],
    "components": [
        {
            "component_id": "c1",
            "component_name": "Catering",
            "component_price": "80000",
            "category": "catering",
        },
        {
            "component_id": "c2",
            "component_name": "Photo and video",
            "component_price": "40000",
            "category": "photography",
            "subcomponents": [
                {"subcomponent_name": "Prenup shoot", "subcomponent_price": "15000"},
                {"subcomponent_name": "Same-day edit", "subcomponent_price": "25000"},
            ],
        },
        {
            "component_id": "c3",
            "component_name": "Coordination",
            "component_price": "20000",
            "category": "coordination",
            "is_removable": False,
        },
    ],
}

VENUE_RECORD = {
    "venue_id": "v1",
    "venue_title": "Hillside Pavilion",
    "venue_price": "30000",
    "venue_capacity": 150,
    "inclusions": [
        {"inclusion_name": "Tables and chairs", "inclusion_price": "10000"},
        {"inclusion_name": "Sound system", "inclusion_price": "5000"},
    ],
}

SMALL_VENUE_RECORD = {
    "venue_id": "v2",
    "venue_title": "Courtyard",
    "venue_price": "20000",
    "venue_capacity": 80,
}


PAX_VENUE_RECORD = {
    "venue_id": "v3",
    "venue_title": "Demiren Hotel",
    "venue_price": "25000",
    "venue_capacity": 300,
    "extra_pax_rate": "200",
    "base_capacity": 100,
}


@pytest.fixture
def package_record() -> dict:
    return copy.deepcopy(PACKAGE_RECORD)


@pytest.fixture
def venue_record() -> dict:
    return copy.deepcopy(VENUE_RECORD)


@pytest.fixture
def store(package_record, venue_record) -> InMemoryCatalogStore:
    return InMemoryCatalogStore.from_records(
        packages=[package_record],
        venues=[
            venue_record,
            copy.deepcopy(SMALL_VENUE_RECORD),
            copy.deepcopy(PAX_VENUE_RECORD),
        ],
    )


@pytest.fixture
def service(store) -> EventBuilderService:
    return EventBuilderService(store)


@pytest.fixture
def session(service):
    result = service.start_session("pkg-1")
    assert result.ok, result.errors
    return result.session

"""In-memory catalog store fed with raw records from the remote service."""

from collections.abc import Iterable

from pricing.domain import Package, Venue
from pricing.handlers.serializers import PackageSerializer, VenueSerializer, ingest
from pricing.stores.interfaces import CatalogStore


class InMemoryCatalogStore(CatalogStore):
    """Catalog snapshot held in memory for one session or batch run.

    Records are validated when loaded, so a malformed record raises
    InputShapeError here instead of surfacing later as a wrong total.
    """

    def __init__(self) -> None:
        self._packages: dict[str, Package] = {}
        self._venues: dict[str, Venue] = {}
        self._package_venues: dict[str, list[str]] = {}

    @classmethod
    def from_records(
        cls, packages: Iterable[dict] = (), venues: Iterable[dict] = ()
    ) -> "InMemoryCatalogStore":
        store = cls()
        for record in venues:
            store.load_venue(record)
        for record in packages:
            store.load_package(record)
        return store

    def load_package(self, record: dict) -> Package:
        package = ingest(PackageSerializer, record, "package")
        self._packages[package.id] = package
        self._package_venues[package.id] = [
            str(venue_id) for venue_id in record.get("venue_ids", [])
        ]
        return package

    def load_venue(self, record: dict) -> Venue:
        venue = ingest(VenueSerializer, record, "venue")
        self._venues[venue.id] = venue
        return venue

    def get_package(self, package_id: str) -> Package | None:
        return self._packages.get(str(package_id))

    def get_venue(self, venue_id: str) -> Venue | None:
        return self._venues.get(str(venue_id))

    def list_venues_for_package(self, package_id: str) -> list[Venue]:
        venue_ids = self._package_venues.get(str(package_id), [])
        return [self._venues[v] for v in venue_ids if v in self._venues]

"""Store interfaces (repository pattern).

Stores must be swappable and return domain models. The engine never talks
to the remote event-data service itself; a store implementation does.
"""

from abc import ABC, abstractmethod

from pricing.domain import Package, Venue


class CatalogStore(ABC):
    """Interface for catalog lookups."""

    @abstractmethod
    def get_package(self, package_id: str) -> Package | None:
        """Return a package with its components, or None if not found."""
        ...

    @abstractmethod
    def get_venue(self, venue_id: str) -> Venue | None:
        """Return a venue with its inclusions, or None if not found."""
        ...

    @abstractmethod
    def list_venues_for_package(self, package_id: str) -> list[Venue]:
        """Return the venues a package may be booked with, in catalog order."""
        ...

from pricing.handlers.serializers import (
    BookingPayloadSerializer,
    PackageSerializer,
    VenueSerializer,
    ingest,
)

__all__ = ["BookingPayloadSerializer", "PackageSerializer", "VenueSerializer", "ingest"]

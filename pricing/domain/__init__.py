from pricing.domain.models import (
    BuilderState,
    CashBond,
    Component,
    DamageClaim,
    Package,
    PaymentAttempt,
    PaymentPlan,
    SubComponent,
    Venue,
    VenueChoice,
    VenueInclusion,
)
from pricing.domain.value_objects import (
    CashBondStatus,
    Category,
    InclusionSource,
    Money,
    PaymentMethod,
    PaymentStatus,
    Percentage,
    ScheduleType,
)

__all__ = [
    "BuilderState",
    "CashBond",
    "Component",
    "DamageClaim",
    "Package",
    "PaymentAttempt",
    "PaymentPlan",
    "SubComponent",
    "Venue",
    "VenueChoice",
    "VenueInclusion",
    "CashBondStatus",
    "Category",
    "InclusionSource",
    "Money",
    "PaymentMethod",
    "PaymentStatus",
    "Percentage",
    "ScheduleType",
]

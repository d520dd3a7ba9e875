"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Self

ZERO = Decimal("0")
HUNDRED = Decimal("100")
WHOLE_UNIT = Decimal("1")
CENT = Decimal("0.01")


def to_decimal(value: Decimal | int | float | str) -> Decimal:
    """Convert a remote numeric value to Decimal without binary float noise."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def round_whole(amount: Decimal) -> Decimal:
    """Round half up to the whole currency unit."""
    return amount.quantize(WHOLE_UNIT, rounding=ROUND_HALF_UP)


def round_cents(amount: Decimal) -> Decimal:
    """Round half up to the cent, the precision of the booking payload."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class Money:
    """Price representation with validation."""

    amount: Decimal

    def __post_init__(self) -> None:
        if not self.amount.is_finite():
            raise ValueError("Money amount must be finite")
        if self.amount < 0:
            raise ValueError("Money amount cannot be negative")

    @classmethod
    def of(cls, value: Decimal | int | float | str) -> Self:
        return cls(amount=to_decimal(value))

    def __str__(self) -> str:
        return f"{self.amount:.2f}"


@dataclass(frozen=True)
class Percentage:
    """Share of a total, bounded to [0, 100]."""

    value: Decimal

    def __post_init__(self) -> None:
        if self.value < 0 or self.value > HUNDRED:
            raise ValueError("Percentage must be between 0 and 100")

    @classmethod
    def of(cls, value: Decimal | int | float | str) -> Self:
        return cls(value=to_decimal(value))

    def apply_to(self, total: Decimal) -> Decimal:
        return total * self.value / HUNDRED


@dataclass(frozen=True)
class Capacity:
    """Non-negative integer representing guest capacity."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("Capacity cannot be negative")


class Category(Enum):
    """Inclusion categories. Declaration order is the display tie-break."""

    COORDINATION = "coordination"
    VENUE = "venue"
    VENUE_FEE = "venue_fee"
    ATTIRE = "attire"
    DECOR = "decor"
    MEDIA = "media"
    EXTRAS = "extras"
    HOTEL = "hotel"
    FOOD = "food"
    SERVICES = "services"
    PHOTOGRAPHY = "photography"
    BEAUTY = "beauty"
    CATERING = "catering"
    DECORATION = "decoration"
    ENTERTAINMENT = "entertainment"
    EQUIPMENT = "equipment"
    TRANSPORTATION = "transportation"
    OTHER = "other"

    @classmethod
    def parse(cls, value: str | None) -> Self:
        """Return the category for a remote value, falling back to OTHER."""
        if not value:
            return cls.OTHER
        normalized = value.strip().lower()
        if normalized == "default":
            return cls.OTHER
        try:
            return cls(normalized)
        except ValueError:
            return cls.OTHER

    @property
    def rank(self) -> int:
        return _CATEGORY_ORDER[self]

    @property
    def label(self) -> str:
        return CATEGORY_LABELS[self]


_CATEGORY_ORDER = {category: index for index, category in enumerate(Category)}

CATEGORY_LABELS = {
    Category.COORDINATION: "Coordination",
    Category.VENUE: "Venue & Food",
    Category.VENUE_FEE: "Venue Fee",
    Category.ATTIRE: "Attire",
    Category.DECOR: "Decoration",
    Category.MEDIA: "Photo & Video",
    Category.EXTRAS: "Extras",
    Category.HOTEL: "Hotel & Accommodation",
    Category.FOOD: "Food",
    Category.SERVICES: "Services",
    Category.PHOTOGRAPHY: "Photography",
    Category.BEAUTY: "Beauty",
    Category.CATERING: "Catering",
    # decor and decoration are both in use upstream and share one label
    Category.DECORATION: "Decoration",
    Category.ENTERTAINMENT: "Entertainment",
    Category.EQUIPMENT: "Equipment",
    Category.TRANSPORTATION: "Transportation",
    Category.OTHER: "Other",
}


class InclusionSource(Enum):
    """Where a priced item comes from."""

    CATALOG = "catalog"
    VENUE_LOCKED = "venue_locked"
    CUSTOM = "custom"
    SUPPLIER = "supplier"


class ScheduleType(Enum):
    """Named payment-split policies."""

    FULL = "full"
    HALF = "half"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    CUSTOM = "custom"

    @property
    def default_percentage(self) -> Decimal | None:
        """Percentage a schedule starts at; None for the user-supplied one."""
        return _SCHEDULE_DEFAULTS[self]

    @property
    def schedule_type_id(self) -> int:
        """Identifier the booking service uses for this schedule."""
        return _SCHEDULE_IDS[self]


_SCHEDULE_DEFAULTS = {
    ScheduleType.FULL: Decimal("100"),
    ScheduleType.HALF: Decimal("50"),
    ScheduleType.MONTHLY: Decimal("30"),
    ScheduleType.QUARTERLY: Decimal("25"),
    ScheduleType.CUSTOM: None,
}

_SCHEDULE_IDS = {
    ScheduleType.FULL: 1,
    ScheduleType.HALF: 2,
    ScheduleType.MONTHLY: 3,
    ScheduleType.QUARTERLY: 4,
    ScheduleType.CUSTOM: 5,
}


class CashBondStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    CLAIMED = "claimed"
    REFUNDED = "refunded"


class PaymentMethod(Enum):
    CASH = "cash"
    GCASH = "gcash"
    BANK_TRANSFER = "bank-transfer"


class PaymentStatus(Enum):
    PENDING = "pending"
    PARTIAL = "partial"
    PAID = "paid"
    FAILED = "failed"

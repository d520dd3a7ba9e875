"""Settings for the pricing app.

Read from the ``PRICING`` dict in Django settings, falling back to the
defaults below::

    PRICING = {
        "CASH_BOND_AMOUNT": "5000",
    }

Access values through ``pricing_settings``, e.g.
``pricing_settings.CASH_BOND_AMOUNT``.
"""

from decimal import Decimal

from django.conf import settings
from django.core.signals import setting_changed
from django.dispatch import receiver

DEFAULTS = {
    "CASH_BOND_AMOUNT": "3000",
    "CASH_BOND_REQUIRED": True,
    "DEFAULT_SCHEDULE_TYPE": "half",
    "PRORATION_TOLERANCE": "0.000001",
    "DEFAULT_GUEST_COUNT": 100,
    "REFERENCE_REQUIRED_METHODS": ["gcash", "bank-transfer"],
}

DECIMAL_SETTINGS = {"CASH_BOND_AMOUNT", "PRORATION_TOLERANCE"}


class PricingSettings:
    """Lazy view over ``settings.PRICING`` with defaults applied."""

    def __init__(self, defaults: dict | None = None) -> None:
        self.defaults = defaults or DEFAULTS
        self._cached_attrs: set[str] = set()

    @property
    def user_settings(self) -> dict:
        if not hasattr(self, "_user_settings"):
            self._user_settings = getattr(settings, "PRICING", {})
        return self._user_settings

    def __getattr__(self, attr: str):
        if attr not in self.defaults:
            raise AttributeError(f"Invalid pricing setting: '{attr}'")

        value = self.user_settings.get(attr, self.defaults[attr])
        if attr in DECIMAL_SETTINGS:
            value = Decimal(str(value))

        self._cached_attrs.add(attr)
        setattr(self, attr, value)
        return value

    def reload(self) -> None:
        for attr in self._cached_attrs:
            delattr(self, attr)
        self._cached_attrs.clear()
        if hasattr(self, "_user_settings"):
            delattr(self, "_user_settings")


pricing_settings = PricingSettings(DEFAULTS)


@receiver(setting_changed)
def reload_pricing_settings(*args, setting=None, **kwargs) -> None:
    if setting == "PRICING":
        pricing_settings.reload()

from django.apps import AppConfig


class PricingConfig(AppConfig):
    name = "pricing"
    verbose_name = "Package pricing and payment scheduling"

    def ready(self) -> None:
        # Registers the setting_changed receiver.
        from pricing import conf  # noqa: F401

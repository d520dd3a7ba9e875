"""
Django settings for the pricing engine.

Django is the container for configuration, logging and the DRF
serializers at the engine's edges. There is no database and no URL
routing: the engine never performs I/O.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "pricing-dev-key-not-for-deployment")

DEBUG = os.environ.get("DJANGO_DEBUG", "false").lower() == "true"

ALLOWED_HOSTS: list[str] = []

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "rest_framework",
    "pricing.apps.PricingConfig",
]

DATABASES: dict = {}

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

REST_FRAMEWORK = {
    "COERCE_DECIMAL_TO_STRING": True,
}

PRICING = {
    "CASH_BOND_AMOUNT": os.environ.get("PRICING_CASH_BOND_AMOUNT", "3000"),
    "DEFAULT_SCHEDULE_TYPE": "half",
}

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "simple",
        },
    },
    "loggers": {
        "pricing": {
            "handlers": ["console"],
            "level": os.environ.get("PRICING_LOG_LEVEL", "INFO"),
            "propagate": True,
        },
    },
}

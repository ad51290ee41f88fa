"""
Base Django settings for LicenseActivationService.

These settings are shared across all environments.
Environment-specific overrides are in dev.py, test.py, and prod.py
"""
import os
from pathlib import Path

from .logging import get_logging_config

# Build paths inside the project
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = os.environ.get("SECRET_KEY", "django-insecure-license-activation-service-dev-key")

# Application definition
INSTALLED_APPS = [
    # Local apps
    "LicenseActivationService.apps.LicenseActivationServiceConfig",
    "core",
    "licenses",
    "activations",
]

# Database
# https://docs.djangoproject.com/en/4.2/ref/settings/#databases
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.postgresql",
        "NAME": "license_service",
        "USER": "postgres",
        "PASSWORD": "postgres",
        "HOST": "localhost",
        "PORT": "5432",
        "OPTIONS": {
            "connect_timeout": 10,
        },
    }
}

# Internationalization
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = False
USE_TZ = True

# Default primary key field type
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# License store
LICENSE_STORE = {
    # Seconds a writer waits for a locked customer record
    "LOCK_TIMEOUT": float(os.environ.get("LICENSE_LOCK_TIMEOUT", "5")),
    # Extra attempts after a contention failure, with exponential backoff
    "MAX_RETRIES": int(os.environ.get("LICENSE_MAX_RETRIES", "3")),
    "RETRY_BACKOFF": float(os.environ.get("LICENSE_RETRY_BACKOFF", "0.05")),
    "KEY_PREFIX": os.environ.get("LICENSE_KEY_PREFIX", "LIC"),
    "KEY_GENERATION_ATTEMPTS": 5,
}

# Observability
LOGGING = get_logging_config(os.environ.get("ENVIRONMENT", "development"))

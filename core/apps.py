import logging

from django.apps import AppConfig
from django.conf import settings


logger = logging.getLogger(__name__)


class CoreConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'core'

    def ready(self):
        """Registriert Signal-Handler."""
        from . import signals  # noqa: F401

        logger.debug(
            "Navigation cache freshness=%ss timeout=%ss",
            getattr(settings, "NAVIGATION_CACHE_FRESHNESS", 300),
            getattr(settings, "NAVIGATION_CACHE_TIMEOUT", 24 * 60 * 60),
        )

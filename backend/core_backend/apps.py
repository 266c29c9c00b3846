from django.apps import AppConfig
from django.core.signals import setting_changed
import logging

logger = logging.getLogger(__name__)


def _reload_ordering_settings(sender, setting, **kwargs):
    """Keep the lazy ORDERING singleton in sync with override_settings()."""
    if setting == "ORDERING":
        from core_backend.config import ordering_settings

        ordering_settings.reload()
        logger.debug("ORDERING settings changed, configuration reloaded")


class CoreBackendConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "core_backend"

    def ready(self):
        setting_changed.connect(_reload_ordering_settings, dispatch_uid="ordering_settings_reload")

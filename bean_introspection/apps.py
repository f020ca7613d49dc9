"""
Django app configuration for bean-introspection.

This module configures:
- Library settings validation
- Startup clearing and warming of the global metadata cache
"""

import logging

from django.apps import AppConfig as BaseAppConfig
from django.conf import settings as django_settings
from django.utils.module_loading import import_string

logger = logging.getLogger(__name__)


class AppConfig(BaseAppConfig):
    """Django app configuration for bean-introspection."""

    name = "bean_introspection"
    verbose_name = "Bean Introspection"
    label = "bean_introspection"

    def ready(self):
        """Initialize the application after Django has loaded."""
        logger.info("Bean introspection AppConfig.ready() called")
        try:
            self._validate_configuration()
            self._clear_cache_on_startup()
            self._warm_cache()
            logger.info("Bean introspection initialized successfully")
        except Exception as e:
            logger.error(f"Error initializing bean introspection: {e}")
            if self._is_debug_mode():
                raise

    def _validate_configuration(self):
        """Validate the BEAN_INTROSPECTION setting against the library defaults."""
        from .config_proxy import SETTINGS_NAME
        from .defaults import validate_settings

        errors = validate_settings(getattr(django_settings, SETTINGS_NAME, {}) or {})
        for error in errors:
            logger.warning("Configuration issue: %s", error)
        return errors

    def _clear_cache_on_startup(self):
        """Clear the global metadata cache if configured."""
        from .config_proxy import get_setting
        from .core import bean_cache

        if get_setting("cache_settings.clear_on_startup", False):
            bean_cache.clear()
            logger.debug("Metadata cache cleared on startup")

    def _warm_cache(self):
        """Load the full field tables of the configured classes."""
        from .config_proxy import get_setting
        from .core import bean_cache

        warmed = 0
        for path in get_setting("cache_settings.warm_types", []) or []:
            try:
                python_type = import_string(path)
            except ImportError as e:
                logger.warning("Could not import '%s' for cache warming: %s", path, e)
                continue
            bean_cache.get_all_fields(python_type)
            warmed += 1
        if warmed:
            logger.info("Warmed metadata cache for %d types", warmed)
        return warmed

    def _is_debug_mode(self):
        return getattr(django_settings, "DEBUG", False)

"""
Configuration management for bean introspection.

This module provides a settings proxy that resolves configuration from the
``BEAN_INTROSPECTION`` Django setting, then from the library defaults.
"""

from typing import Any

from django.conf import settings

from .defaults import LIBRARY_DEFAULTS

SETTINGS_NAME = "BEAN_INTROSPECTION"


class SettingsProxy:
    """
    Proxy for accessing bean introspection settings with hierarchical resolution.

    Settings are resolved in the following order:
    1. Global Django settings (BEAN_INTROSPECTION)
    2. Library defaults (LIBRARY_DEFAULTS)
    3. The default passed to ``get``
    """

    def __init__(self):
        self._cache: dict[str, Any] = {}

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a setting value with hierarchical resolution and caching.

        Args:
            key: Setting key to retrieve (dot notation for nested access)
            default: Default value if setting is not found

        Returns:
            The setting value from the highest priority source
        """
        if key in self._cache:
            return self._cache[key]

        django_value = self._get_django_setting(key)
        if django_value is not None:
            self._cache[key] = django_value
            return django_value

        library_value = self._get_nested_value(LIBRARY_DEFAULTS, key)
        if library_value is not None:
            self._cache[key] = library_value
            return library_value

        self._cache[key] = default
        return default

    def _get_django_setting(self, key: str) -> Any:
        """
        Get setting from the global Django BEAN_INTROSPECTION dict.

        Outside a configured Django project only the defaults apply.
        """
        if not settings.configured:
            return None
        return self._get_nested_value(getattr(settings, SETTINGS_NAME, {}), key)

    def _get_nested_value(self, data: dict[str, Any], key: str) -> Any:
        """
        Get nested value from dictionary using dot notation.

        Args:
            data: Dictionary to search in
            key: Key to retrieve (supports dot notation for nested access)

        Returns:
            The value or None if not found
        """
        if not isinstance(data, dict):
            return None

        current = data
        for k in key.split("."):
            if not isinstance(current, dict) or k not in current:
                return None
            current = current[k]

        return current

    def set(self, key: str, value: Any) -> None:
        """
        Set a setting value (runtime only, not persistent).

        Args:
            key: Setting key to set
            value: Value to set
        """
        self._cache.pop(key, None)

        if not hasattr(settings, SETTINGS_NAME):
            setattr(settings, SETTINGS_NAME, {})

        current = getattr(settings, SETTINGS_NAME)
        keys = key.split(".")
        for k in keys[:-1]:
            if k not in current:
                current[k] = {}
            current = current[k]
        current[keys[-1]] = value

    def clear_cache(self) -> None:
        """
        Clear the settings cache.
        """
        self._cache.clear()


# Global settings proxy instance
settings_proxy = SettingsProxy()


def get_setting(key: str, default: Any = None) -> Any:
    """
    Get a setting value using the hierarchical settings system.

    Args:
        key: Setting key to retrieve
        default: Default value if setting is not found

    Returns:
        The setting value from the highest priority source
    """
    return settings_proxy.get(key, default)

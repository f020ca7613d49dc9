"""
Default configuration for the bean-introspection library.

Every setting the library consumes lives here, grouped by feature area.
Projects override them through the ``BEAN_INTROSPECTION`` Django setting.
"""

from __future__ import annotations

from typing import Any

# --------------------------------------------------------------------------- #
# Library-wide defaults (grouped by feature area)
# --------------------------------------------------------------------------- #
LIBRARY_DEFAULTS: dict[str, Any] = {
    "field_settings": {
        "include_private_fields": True,
        "include_slots": True,
    },
    "logging_settings": {
        "log_swallowed_errors": True,
    },
    "cache_settings": {
        "warm_types": [],
        "clear_on_startup": False,
    },
}


def get_default_settings() -> dict[str, Any]:
    """Return a copy of the library defaults."""
    return merge_settings(LIBRARY_DEFAULTS)


def merge_settings(*settings_dicts: dict[str, Any]) -> dict[str, Any]:
    """Deep-merge settings dictionaries, later ones taking precedence."""
    merged: dict[str, Any] = {}
    for settings_dict in settings_dicts:
        for key, value in (settings_dict or {}).items():
            if isinstance(value, dict) and isinstance(merged.get(key), dict):
                merged[key] = merge_settings(merged[key], value)
            elif isinstance(value, dict):
                merged[key] = merge_settings(value)
            elif isinstance(value, list):
                merged[key] = list(value)
            else:
                merged[key] = value
    return merged


def validate_settings(settings: dict[str, Any]) -> list[str]:
    """
    Validate a settings dictionary and return a list of validation errors.
    """
    errors: list[str] = []

    for section, values in settings.items():
        if section not in LIBRARY_DEFAULTS:
            errors.append(f"Unknown settings section '{section}'")
            continue
        if not isinstance(values, dict):
            errors.append(f"Settings section '{section}' must be a dict")
            continue
        for key in values:
            if key not in LIBRARY_DEFAULTS[section]:
                errors.append(f"Unknown setting '{section}.{key}'")

    warm_types = settings.get("cache_settings", {}).get("warm_types")
    if warm_types is not None and not isinstance(warm_types, (list, tuple)):
        errors.append("cache_settings.warm_types must be a list of dotted paths")

    return errors

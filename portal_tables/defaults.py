"""
Default configuration for the portal-tables library.

Every setting the table controller consumes is declared here once. The
``table_settings`` section mirrors the ``TableSettings`` dataclass defined
in ``portal_tables.core.settings``; projects override it through the
``PORTAL_TABLES`` Django setting.
"""

from __future__ import annotations

from typing import Any

LIBRARY_VERSION = "0.1.0"

SETTINGS_NAME = "PORTAL_TABLES"


# --------------------------------------------------------------------------- #
# Library-wide defaults
# --------------------------------------------------------------------------- #
LIBRARY_DEFAULTS: dict[str, Any] = {
    "table_settings": {
        "default_rows_per_page": 10,
        "rows_per_page_options": [5, 10, 20, 50],
        "default_order": "desc",
        "delayed_loading_ms": 200,
        "disable_url_params": True,
        "num_rows_no_content": 10,
    },
}


# --------------------------------------------------------------------------- #
# Helper functions
# --------------------------------------------------------------------------- #
def get_default_settings() -> dict[str, Any]:
    """Return a deep-enough copy of the library defaults."""
    return merge_settings(LIBRARY_DEFAULTS)


def merge_settings(*settings_dicts: dict[str, Any]) -> dict[str, Any]:
    """
    Merge multiple settings dictionaries with deep merging for nested dicts.
    Later dictionaries override earlier ones.
    """
    result: dict[str, Any] = {}
    for settings_dict in settings_dicts:
        if not settings_dict:
            continue
        for key, value in settings_dict.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = merge_settings(result[key], value)
            elif isinstance(value, dict):
                result[key] = merge_settings(value)
            else:
                result[key] = value
    return result

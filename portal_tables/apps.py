"""
Django app configuration for the portal-tables library.

On startup the configured table defaults are loaded and validated so a bad
``PORTAL_TABLES`` setting fails at boot rather than on the first table.
"""

import logging

from django.apps import AppConfig as BaseAppConfig

logger = logging.getLogger(__name__)


class AppConfig(BaseAppConfig):
    """Django app configuration for portal-tables."""

    name = "portal_tables"
    verbose_name = "Portal Tables"
    label = "portal_tables"

    def ready(self):
        from .core.settings import get_table_settings, validate_table_settings

        table_settings = get_table_settings()
        validate_table_settings(table_settings)
        logger.info(
            "portal-tables ready (rows per page %s of %s, order %s, url params %s)",
            table_settings.default_rows_per_page,
            table_settings.rows_per_page_options,
            table_settings.default_order,
            "disabled" if table_settings.disable_url_params else "enabled",
        )

"""
TableSettings implementation.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

from django.conf import settings as django_settings
from django.core.exceptions import ImproperlyConfigured

from ..defaults import LIBRARY_DEFAULTS, SETTINGS_NAME, merge_settings
from .validation import (
    SORT_DIRECTIONS,
    validate_per_page_options,
    validate_rows_per_page,
)

logger = logging.getLogger(__name__)


def _get_project_settings() -> Dict[str, Any]:
    """Get the ``PORTAL_TABLES`` block from Django settings, if any."""
    if not django_settings.configured:
        return {}
    project_settings = getattr(django_settings, SETTINGS_NAME, None) or {}
    if not isinstance(project_settings, dict):
        logger.warning(f"Ignoring {SETTINGS_NAME}: expected a dict, got {type(project_settings).__name__}")
        return {}
    return project_settings


@dataclass
class TableSettings:
    """Defaults applied to every table controller unless overridden per instance."""
    default_rows_per_page: int = 10
    rows_per_page_options: List[int] = field(default_factory=lambda: [5, 10, 20, 50])
    default_order: str = "desc"
    delayed_loading_ms: int = 200
    disable_url_params: bool = True
    num_rows_no_content: int = 10

    @classmethod
    def load(cls) -> "TableSettings":
        defaults = LIBRARY_DEFAULTS.get("table_settings", {})
        project = _get_project_settings().get("table_settings", {})
        merged = merge_settings(defaults, project)
        valid_fields = set(cls.__dataclass_fields__.keys())
        unknown = sorted(set(merged) - valid_fields)
        if unknown:
            logger.warning(f"Unknown table settings ignored: {', '.join(unknown)}")
        return cls(**{k: v for k, v in merged.items() if k in valid_fields})


def validate_table_settings(table_settings: TableSettings) -> None:
    """Raise ``ImproperlyConfigured`` when the configured defaults contradict each other."""
    errors = []
    if not validate_per_page_options(table_settings.rows_per_page_options):
        errors.append("rows_per_page_options must be a non-empty list of positive integers")
    elif not validate_rows_per_page(
        table_settings.default_rows_per_page, table_settings.rows_per_page_options
    ):
        errors.append(
            f"default_rows_per_page={table_settings.default_rows_per_page!r} "
            f"is not one of {table_settings.rows_per_page_options!r}"
        )
    if table_settings.default_order not in SORT_DIRECTIONS:
        errors.append(f"default_order must be one of {', '.join(SORT_DIRECTIONS)}")
    if not isinstance(table_settings.delayed_loading_ms, (int, float)) or table_settings.delayed_loading_ms < 0:
        errors.append("delayed_loading_ms must be a non-negative number")
    if errors:
        raise ImproperlyConfigured(f"Invalid {SETTINGS_NAME} settings: " + "; ".join(errors))


def get_table_settings() -> TableSettings:
    return TableSettings.load()

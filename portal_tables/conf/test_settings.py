SECRET_KEY = "portal-tables-tests"
DEBUG = False
USE_TZ = True
ENVIRONMENT = "testing"

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "portal_tables",
]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PORTAL_TABLES = {
    "table_settings": {
        "rows_per_page_options": [5, 10, 20, 50],
        "default_rows_per_page": 10,
    },
}

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {"console": {"class": "logging.StreamHandler"}},
    "loggers": {"portal_tables": {"handlers": ["console"], "level": "WARNING"}},
}

"""
Logging setup for the Django ``LOGGING`` setting.

Every record carries the current request id; payloads passed as
``extra={"data": ...}`` or as format args are scrubbed of credentials and
raw audio before any handler sees them.
"""
from __future__ import annotations
import os
import logging
from pathlib import Path
import contextvars

BASE_DIR = Path(__file__).resolve().parent.parent
LOG_DIR = Path(os.getenv("LOG_DIR", BASE_DIR / "logs"))
LOG_DIR.mkdir(parents=True, exist_ok=True)

APP_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
DJANGO_LEVEL = os.getenv("DJANGO_LOG_LEVEL", "INFO").upper()
SQL_DEBUG = os.getenv("SQL_LOG", "0") == "1"

# set per request by utils.middleware.RequestIDMiddleware
request_id_ctx: contextvars.ContextVar[str] = contextvars.ContextVar("request_id", default="-")


class RequestIDFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_ctx.get("-")
        return True


SENSITIVE_KEYS = {
    "password", "access", "refresh", "token", "authorization", "secret",
    "audio", "audiodata", "audio_base64",
}
MAX_DEPTH = 3
MAX_ITEMS = 50


def scrub_for_log(obj, depth=0):
    """Copy of `obj` with sensitive values masked; long lists are cut at MAX_ITEMS."""
    if depth > MAX_DEPTH:
        return "<deep>"
    if isinstance(obj, dict):
        return {
            k: "***" if str(k).lower() in SENSITIVE_KEYS else scrub_for_log(v, depth + 1)
            for k, v in obj.items()
        }
    if isinstance(obj, (list, tuple)):
        return [scrub_for_log(x, depth + 1) for x in list(obj)[:MAX_ITEMS]]
    return obj


class ScrubFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        if hasattr(record, "data"):
            record.data = scrub_for_log(record.data)

        args = record.args
        if isinstance(args, dict):
            record.args = scrub_for_log(args)
        elif isinstance(args, tuple):
            record.args = tuple(scrub_for_log(v) for v in args)
        return True


def _rotating(filename: str, level: str, backups: int = 5, filters=("request_id", "scrub")) -> dict:
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "level": level,
        "formatter": "verbose",
        "filters": list(filters),
        "filename": str(LOG_DIR / filename),
        "maxBytes": 10 * 1024 * 1024,
        "backupCount": backups,
        "encoding": "utf-8",
    }


HANDLERS = {
    "console": {
        "class": "logging.StreamHandler",
        "level": APP_LEVEL,
        "formatter": "verbose",
        "filters": ["request_id", "scrub"],
    },
    "app_file": _rotating("app.log", APP_LEVEL),
    "error_file": _rotating("error.log", "ERROR"),
}
if SQL_DEBUG:
    HANDLERS["sql_file"] = _rotating("sql.log", "DEBUG", backups=3, filters=("request_id",))

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "filters": {
        "request_id": {"()": RequestIDFilter},
        "scrub": {"()": ScrubFilter},
    },
    "formatters": {
        "verbose": {
            "format": "[%(asctime)s] [%(levelname)s] [%(name)s] [req=%(request_id)s] %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": HANDLERS,
    "loggers": {
        "django": {
            "handlers": ["console", "app_file", "error_file"],
            "level": DJANGO_LEVEL,
            "propagate": False,
        },
        "django.request": {
            "handlers": ["console", "error_file"],
            "level": "ERROR",
            "propagate": False,
        },
        # ORM SQL, only with SQL_LOG=1
        "django.db.backends": {
            "handlers": ["sql_file", "console"] if SQL_DEBUG else [],
            "level": "DEBUG" if SQL_DEBUG else "WARNING",
            "propagate": False,
        },
        # app modules log via logging.getLogger(__name__)
        "": {
            "handlers": ["console", "app_file", "error_file"],
            "level": APP_LEVEL,
        },
    },
}

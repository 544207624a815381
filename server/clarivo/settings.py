import os
from pathlib import Path

from utils.config_log import LOGGING  # noqa: F401

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "dev-insecure-change-me")
DEBUG = os.getenv("DJANGO_DEBUG", "0") == "1"
ALLOWED_HOSTS = [h.strip() for h in os.getenv("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",") if h.strip()]
APP_ENV = os.getenv("APP_ENV", "development")

INSTALLED_APPS = [
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.staticfiles",
    "rest_framework",
    "drf_spectacular",
    "corsheaders",
    "users",
    "practice",
    "speech",
]

MIDDLEWARE = [
    "utils.middleware.RequestIDMiddleware",
    "corsheaders.middleware.CorsMiddleware",
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "clarivo.urls"
WSGI_APPLICATION = "clarivo.wsgi.application"
ASGI_APPLICATION = "clarivo.asgi.application"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
            ],
        },
    },
]

# sqlite unless DB_ENGINE points at postgres
DB_ENGINE = os.getenv("DB_ENGINE", "django.db.backends.sqlite3")
if DB_ENGINE.endswith("sqlite3"):
    DATABASES = {
        "default": {
            "ENGINE": DB_ENGINE,
            "NAME": os.getenv("DB_NAME", str(BASE_DIR / "db.sqlite3")),
        }
    }
else:
    DATABASES = {
        "default": {
            "ENGINE": DB_ENGINE,
            "NAME": os.getenv("DB_NAME", "clarivo"),
            "USER": os.getenv("DB_USER", "postgres"),
            "PASSWORD": os.getenv("DB_PASSWORD", ""),
            "HOST": os.getenv("DB_HOST", "localhost"),
            "PORT": os.getenv("DB_PORT", "5432"),
            "CONN_HEALTH_CHECKS": True,
        }
    }

AUTH_USER_MODEL = "users.User"
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

LANGUAGE_CODE = "en-us"
TIME_ZONE = os.getenv("TIME_ZONE", "UTC")
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": (
        "rest_framework_simplejwt.authentication.JWTAuthentication",
    ),
    "DEFAULT_PERMISSION_CLASSES": (
        "rest_framework.permissions.IsAuthenticated",
    ),
    "DEFAULT_RENDERER_CLASSES": (
        "rest_framework.renderers.JSONRenderer",
    ),
    "DEFAULT_PAGINATION_CLASS": "utils.pagination.SessionPagination",
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
    "EXCEPTION_HANDLER": "utils.exceptions.api_exception_handler",
}

SPECTACULAR_SETTINGS = {
    "TITLE": "Clarivo API",
    "DESCRIPTION": "Speech practice scoring and statistics",
    "VERSION": "1.0.0",
    "SERVE_INCLUDE_SCHEMA": False,
}

# ==== Analysis engine ====
ANALYSIS_ENGINE_URL = os.getenv("ANALYSIS_ENGINE_URL", "http://localhost:8000").rstrip("/")
# audio scoring is slow and variable; tts/exercise lookups are not
ANALYSIS_TIMEOUT = float(os.getenv("ANALYSIS_TIMEOUT", "30"))
ENGINE_REQUEST_TIMEOUT = float(os.getenv("ENGINE_REQUEST_TIMEOUT", "10"))
ANALYSIS_MAX_AUDIO_BYTES = int(os.getenv("ANALYSIS_MAX_AUDIO_BYTES", str(50 * 1024 * 1024)))
DEFAULT_LANGUAGE = os.getenv("DEFAULT_LANGUAGE", "en-US")

# base64 inflates audio by ~4/3, leave headroom for the JSON envelope
DATA_UPLOAD_MAX_MEMORY_SIZE = ANALYSIS_MAX_AUDIO_BYTES * 4 // 3 + 1024 * 1024

# ==== CORS ====
# browser frontend; comma-separated when more than one origin is served
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:5173")
CORS_ALLOWED_ORIGINS = [o.strip().rstrip("/") for o in FRONTEND_URL.split(",") if o.strip()]
CORS_ALLOW_CREDENTIALS = True
CORS_EXPOSE_HEADERS = ["X-Request-ID"]

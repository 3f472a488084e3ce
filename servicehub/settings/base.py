import os
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent.parent
load_dotenv(BASE_DIR / ".env")


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "dev-insecure-change-me")
DEBUG = _env_bool("DJANGO_DEBUG")
ALLOWED_HOSTS = [h.strip() for h in os.getenv("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1").split(",") if h.strip()]

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "orders",
    "payments",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "servicehub.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "servicehub.wsgi.application"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.getenv("SQLITE_PATH", str(BASE_DIR / "db.sqlite3")),
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"

# CCAvenue hosted checkout. The callback/cancel URLs fall back to this
# server's own endpoints when left blank.
CCAVENUE = {
    "MERCHANT_ID": os.getenv("CCAVENUE_MERCHANT_ID", ""),
    "ACCESS_CODE": os.getenv("CCAVENUE_ACCESS_CODE", ""),
    "WORKING_KEY": os.getenv("CCAVENUE_WORKING_KEY", ""),
    "PAYMENT_URL": os.getenv(
        "CCAVENUE_PAYMENT_URL",
        "https://secure.ccavenue.ae/transaction/transaction.do?command=initiateTransaction",
    ),
    "CALLBACK_URL": os.getenv("CCAVENUE_CALLBACK_URL", ""),
    "CANCEL_URL": os.getenv("CCAVENUE_CANCEL_URL", ""),
    "FRONTEND_URL": os.getenv("FRONTEND_URL", "http://localhost:3000"),
    "CURRENCY": os.getenv("CCAVENUE_CURRENCY", "AED"),
    "LANGUAGE": os.getenv("CCAVENUE_LANGUAGE", "EN"),
}

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "loggers": {
        "payments": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": True},
        "orders": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": True},
    },
}

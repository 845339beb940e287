"""
Django settings for ForumProject.

Only what the post rendering pipeline needs is configured here; values that
differ per deployment are read from the environment.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def _env_bool(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "forum-project-insecure-dev-key")
DEBUG = _env_bool("DJANGO_DEBUG", False)
ALLOWED_HOSTS = [h for h in os.environ.get("DJANGO_ALLOWED_HOSTS", "").split(",") if h]

INSTALLED_APPS = [
    "posts",
]

USE_TZ = True
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# --- Cache ---
# Parsed post content lives in its own alias so its keys can be plain post ids.
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "forum-default",
    },
    "posts": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "forum-posts",
        "TIMEOUT": None,
        "OPTIONS": {"MAX_ENTRIES": int(os.environ.get("POSTS_CACHE_MAX_ENTRIES", "10000"))},
    },
}

# --- Post rendering ---
BASE_URL = os.environ.get("FORUM_BASE_URL", "http://localhost:4567")
SIGNATURES_DISABLE_LINKS = _env_bool("SIGNATURES_DISABLE_LINKS", False)
SIGNATURES_DISABLE_IMAGES = _env_bool("SIGNATURES_DISABLE_IMAGES", False)

POSTS_CACHE_ALIAS = "posts"
POSTS_PROFANITY_CENSOR_CHAR = "*"
POSTS_PROFANITY_EXTRA_WORDS = [
    w.strip() for w in os.environ.get("POSTS_PROFANITY_EXTRA_WORDS", "").split(",") if w.strip()
]
POSTS_WARM_CACHE_ON_EDIT = _env_bool("POSTS_WARM_CACHE_ON_EDIT", False)

# --- Celery ---
CELERY_BROKER_URL = os.environ.get("REDIS_URL", "redis://localhost:6379/0")
CELERY_RESULT_BACKEND = CELERY_BROKER_URL
CELERY_TASK_ALWAYS_EAGER = _env_bool("CELERY_TASK_ALWAYS_EAGER", False)

# --- Logging ---
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "{levelname} {name}: {message}", "style": "{"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "simple"},
    },
    "loggers": {
        "posts": {
            "handlers": ["console"],
            "level": os.environ.get("POSTS_LOG_LEVEL", "INFO"),
        },
    },
}

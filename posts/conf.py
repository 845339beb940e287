"""
Read-only access to the settings the rendering pipeline consumes.

Every lookup goes through ``django.conf.settings`` at call time so that
``override_settings`` and per-deployment values are always honoured.
"""

from django.conf import settings

DEFAULTS = {
    "BASE_URL": "",
    "SIGNATURES_DISABLE_LINKS": False,
    "SIGNATURES_DISABLE_IMAGES": False,
    "POSTS_CACHE_ALIAS": "default",
    "POSTS_PROFANITY_CENSOR_CHAR": "*",
    "POSTS_PROFANITY_EXTRA_WORDS": (),
    "POSTS_WARM_CACHE_ON_EDIT": False,
}


def get_setting(name):
    """Return a pipeline setting, falling back to its default."""
    return getattr(settings, name, DEFAULTS[name])


def get_base_url() -> str:
    return (get_setting("BASE_URL") or "").rstrip("/")


def signatures_disable_links() -> bool:
    return bool(get_setting("SIGNATURES_DISABLE_LINKS"))


def signatures_disable_images() -> bool:
    return bool(get_setting("SIGNATURES_DISABLE_IMAGES"))

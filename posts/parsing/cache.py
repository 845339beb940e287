# posts/parsing/cache.py
"""
Memoized parse results, keyed by post id.

The parser only fills this cache. Entries are removed when a post is edited
(see ``posts.signals``) or by the ``clear_post_cache`` command.
"""

import logging
from collections.abc import Mapping

from django.core.cache import caches

from posts.conf import get_setting

logger = logging.getLogger(__name__)


def get_cache():
    return caches[get_setting("POSTS_CACHE_ALIAS")]


def cache_key(post_data):
    """
    Return the cache key for a post payload, or None when the payload has no
    identity. Anonymous payloads are never cached.
    """
    if not isinstance(post_data, Mapping):
        return None
    pid = post_data.get("pid")
    if pid is None or pid == "":
        return None
    return str(pid)


async def get_cached(key):
    if key is None:
        return None
    return await get_cache().aget(key)


async def set_cached(key, content: str) -> None:
    if key is None:
        return
    await get_cache().aset(key, content)


def invalidate(pid) -> bool:
    """Drop the cached rendering of ``pid``; returns True if one existed."""
    key = cache_key({"pid": pid})
    if key is None:
        return False
    deleted = get_cache().delete(key)
    logger.debug(f"Invalidated parsed content for post {key}")
    return bool(deleted)


def clear() -> None:
    get_cache().clear()
    logger.info("Cleared all parsed post content")

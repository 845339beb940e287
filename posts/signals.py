"""
Signal handlers for the posts app.

The parser fills the parsed content cache but never decides when an entry is
stale; whoever edits a post sends ``post_edited`` and the entry is dropped.
"""

import logging

from django.dispatch import Signal, receiver

from posts.conf import get_setting
from posts.parsing import cache

logger = logging.getLogger(__name__)

# Sent with ``pid`` and, optionally, the new raw ``content`` of the post.
post_edited = Signal()


@receiver(post_edited)
def invalidate_parsed_content(sender, pid, content=None, **kwargs):
    """
    Drop the cached rendering of an edited post.

    When ``POSTS_WARM_CACHE_ON_EDIT`` is set and the new content is known,
    the post is re-parsed in the background so the next reader hits the
    cache.

    Args:
        sender: Whoever changed the post
        pid: Id of the edited post
        content: New raw content, if available
        **kwargs: Additional keyword arguments
    """
    had_entry = cache.invalidate(pid)
    logger.debug(f"Post {pid} edited (cached: {had_entry})")

    if content is None or not get_setting("POSTS_WARM_CACHE_ON_EDIT"):
        return

    from posts.tasks import warm_post_cache

    try:
        warm_post_cache.delay(pid, content)
    except Exception as e:
        # The entry is already gone; the next read re-parses it
        logger.warning(f"Could not enqueue cache warming for post {pid}: {e}")

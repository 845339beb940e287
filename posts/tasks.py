"""
Celery tasks for the posts app.

To use Celery, you need to:
1. Install celery: pip install celery redis
2. Configure CELERY_BROKER_URL in settings.py
3. Run celery worker: celery -A ForumProject worker -l info
"""

import logging

from asgiref.sync import async_to_sync
from celery import shared_task

logger = logging.getLogger(__name__)


@shared_task
def warm_post_cache(pid, content):
    """
    Parse a post so its rendering is cached before anyone reads it.

    Args:
        pid: Id of the post
        content: Raw post content

    Returns:
        Dict with the outcome
    """
    from posts.parsing import parse_post

    try:
        post_data = async_to_sync(parse_post)({"pid": pid, "content": content})
    except Exception as e:
        logger.error(f"Warming parsed content for post {pid} failed: {e}", exc_info=True)
        return {
            "success": False,
            "pid": pid,
            "error": str(e),
        }

    return {
        "success": True,
        "pid": pid,
        "length": len(post_data["content"]),
    }

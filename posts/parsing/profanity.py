# posts/parsing/profanity.py

import logging
from functools import lru_cache

from better_profanity.better_profanity import Profanity

from posts.conf import get_setting

logger = logging.getLogger(__name__)

# Stand-in for empty input; the word matcher is never handed an empty string
_EMPTY_SENTINEL = "_"


@lru_cache(maxsize=1)
def _get_profanity_filter() -> Profanity:
    """Build the word-list matcher once, with any site-specific extra words."""
    profanity_filter = Profanity()
    profanity_filter.load_censor_words()

    extra_words = list(get_setting("POSTS_PROFANITY_EXTRA_WORDS") or ())
    if extra_words:
        profanity_filter.add_censor_words(extra_words)
        logger.debug(f"Added {len(extra_words)} extra censor words")

    return profanity_filter


def filter_profanity(content) -> str:
    """Mask denylisted words in ``content``. Empty or missing input gives ``""``."""
    content = str(content) if content else _EMPTY_SENTINEL

    cleaned = _get_profanity_filter().censor(
        content, censor_char=get_setting("POSTS_PROFANITY_CENSOR_CHAR")
    )
    if cleaned == _EMPTY_SENTINEL:
        cleaned = ""
    return cleaned

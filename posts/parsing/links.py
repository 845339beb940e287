# posts/parsing/links.py
"""
Rewrites relative URLs in rendered HTML so the content can be used outside
the site (feeds, emails, embeds).

Converts:
    href="/topic/1"        → href="https://forum.example.com/topic/1"
    href="other.com/page"  → href="//other.com/page"
    href="https://x.com"   → unchanged
"""

import logging
import re
from dataclasses import dataclass
from typing import Pattern
from urllib.parse import urlparse

from posts.conf import get_base_url

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegexRule:
    """
    Where a rewritable attribute value sits in a match.

    ``pattern`` has exactly one group, the attribute value; ``length`` is the
    number of characters in the match before that group (``href="`` is 6).
    """

    pattern: Pattern
    length: int

    def __post_init__(self):
        if self.pattern.groups != 1:
            raise ValueError(f"RegexRule pattern must have exactly one group: {self.pattern.pattern!r}")


URL_RULE = RegexRule(re.compile(r'href="([^"]+)"'), 6)
IMG_RULE = RegexRule(re.compile(r'src="([^"]+)"'), 5)


def _absolute_url(value: str, base_url: str) -> str:
    if value.startswith("/"):
        # Internal link
        return base_url + value
    # External link without a scheme
    return f"//{value}"


def relative_to_absolute(content, rule: RegexRule = URL_RULE):
    """
    Turn relative URLs matched by ``rule`` into absolute ones.

    Every splice shifts the offsets of everything after it, so each search
    runs on the current string, starting right after the value just written.
    """
    if not content:
        return content

    base_url = get_base_url()
    match = rule.pattern.search(content)

    while match is not None:
        value = match.group(1)
        resume_at = match.end()

        if value:
            try:
                parsed = urlparse(value)
            except ValueError as e:
                logger.debug(f"Skipping unparseable URL {value!r}: {e}")
            else:
                if not parsed.scheme:
                    absolute = _absolute_url(value, base_url)
                    start = match.start() + rule.length
                    content = content[:start] + absolute + content[start + len(value):]
                    resume_at = start + len(absolute)

        match = rule.pattern.search(content, resume_at)

    return content

# posts/parsing/signature.py

import re

from posts import translator
from posts.conf import signatures_disable_images, signatures_disable_links


def strip_html_tags(html: str, tags) -> str:
    """
    Remove the opening and closing tags of every element named in ``tags``,
    keeping whatever text was inside.
    """
    tags = [t for t in tags if t]
    if not html or not tags:
        return html

    pattern = re.compile(
        r"</?(?:%s)(?=[\s/>])[^>]*>" % "|".join(re.escape(t) for t in tags),
        re.IGNORECASE,
    )
    return pattern.sub("", html)


def sanitize_signature(signature: str) -> str:
    """Escape translation keys and drop links/images the site disallows in signatures."""
    signature = translator.escape(signature)
    tags_to_strip = []

    if signatures_disable_links():
        tags_to_strip.append("a")

    if signatures_disable_images():
        tags_to_strip.append("img")

    return strip_html_tags(signature, tags_to_strip)

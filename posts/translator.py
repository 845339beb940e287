"""
Escaping of translation keys in user content.

Rendered templates run ``[[namespace:key]]`` tokens through the translator,
so user-supplied text must not be able to smuggle such tokens in.
"""

import re

_ESCAPE_OPEN = re.compile(r"\[\[")
_ESCAPE_CLOSE = re.compile(r"\]\]")


def escape(text):
    """Neutralise ``[[`` / ``]]`` so the text is never translated."""
    if not isinstance(text, str):
        return text
    text = _ESCAPE_OPEN.sub("&lsqb;&lsqb;", text)
    return _ESCAPE_CLOSE.sub("&rsqb;&rsqb;", text)

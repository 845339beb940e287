# posts/parsing/math_renderer.py
"""
Expands TeX math in sanitized post content into MathML.

Runs after sanitization (the allow-list does not know MathML elements) and
before translation escaping. Display math ``$$...$$`` is expanded first;
inline math ``$...$`` is then expanded on that result.

A span that fails to render is left exactly as the author wrote it; the
rest of the post still renders.
"""

import html
import logging
import re
from collections.abc import Mapping
from xml.etree.ElementTree import tostring

import latex2mathml.converter

from .exceptions import InvalidDataError

logger = logging.getLogger(__name__)

BLOCK_MATH_RE = re.compile(r"\$\$([\s\S]*?)\$\$")
INLINE_MATH_RE = re.compile(r"\$([\s\S]*?)\$")

# latex2mathml stores symbols as character references in text nodes
_ESCAPED_CHAR_REF_RE = re.compile(r"&amp;(#(?:x[0-9A-Fa-f]+|[0-9]+);)")
_CONTROL_SEQUENCE_RE = re.compile(r"\\[A-Za-z]+")


class MathRenderError(ValueError):
    pass


def _check_control_sequences(element) -> None:
    # Unknown commands come back as text instead of raising
    for node in element.iter():
        if node.text and _CONTROL_SEQUENCE_RE.match(node.text):
            raise MathRenderError(f"Undefined control sequence: {node.text}")


def render_tex(source: str, display_mode: bool) -> str:
    """
    Render a TeX snippet to MathML.

    The source comes from sanitized HTML, so its entities are decoded before
    rendering and the output text is re-escaped on serialization. Any ``$``
    in the output is encoded so the inline pass cannot mistake it for a
    delimiter.
    """
    element = latex2mathml.converter.convert_to_element(
        html.unescape(source),
        display="block" if display_mode else "inline",
    )
    _check_control_sequences(element)

    mathml = _ESCAPED_CHAR_REF_RE.sub(r"&\1", tostring(element, encoding="unicode"))
    return mathml.replace("$", "&#36;")


def _span_replacer(render, display_mode: bool):
    def replace(match):
        source = match.group(1)
        if not source.strip():
            return match.group(0)
        try:
            return render(source, display_mode)
        except Exception as e:
            logger.debug(f"Leaving math span unrendered {match.group(0)!r}: {e}")
            return match.group(0)

    return replace


def expand_math(text: str, render=render_tex) -> str:
    """Replace ``$$...$$`` then ``$...$`` spans in ``text`` with rendered math."""
    if not text or "$" not in text:
        return text

    text = BLOCK_MATH_RE.sub(_span_replacer(render, True), text)
    return INLINE_MATH_RE.sub(_span_replacer(render, False), text)


def render_latex(post_data, render=render_tex):
    """Expand math in a post payload's ``content`` in place."""
    if post_data is None:
        return post_data

    if not isinstance(post_data, Mapping) or not isinstance(post_data.get("content"), str):
        raise InvalidDataError()

    post_data["content"] = expand_math(post_data["content"], render=render)
    return post_data

# posts/parsing/__init__.py

from .config import SanitizeConfig, SanitizePolicy
from .exceptions import InvalidDataError
from .links import IMG_RULE, URL_RULE, RegexRule, relative_to_absolute
from .math_renderer import expand_math, render_latex, render_tex
from .parser import (
    configure_sanitize,
    parse_aboutme,
    parse_post,
    parse_raw,
    parse_signature,
    register_hooks,
)
from .profanity import filter_profanity
from .sanitizer import sanitize

__all__ = [
    "IMG_RULE",
    "URL_RULE",
    "InvalidDataError",
    "RegexRule",
    "SanitizeConfig",
    "SanitizePolicy",
    "configure_sanitize",
    "expand_math",
    "filter_profanity",
    "parse_aboutme",
    "parse_post",
    "parse_raw",
    "parse_signature",
    "register_hooks",
    "relative_to_absolute",
    "render_latex",
    "render_tex",
    "sanitize",
]

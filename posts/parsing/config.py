# posts/parsing/config.py
"""
Allow-list configuration for post sanitization.

``SanitizeConfig`` is the mutable form that ``sanitize.config`` hook handlers
receive and may extend. Once the chain has run it is frozen into a
``SanitizePolicy``, which is what the sanitizer actually uses.
"""

from __future__ import annotations

import copy
import fnmatch
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

# Base set of block/inline/table tags every post may use
BASE_ALLOWED_TAGS = {
    # sections
    "address", "article", "aside", "footer", "header",
    "h1", "h2", "h3", "h4", "h5", "h6", "hgroup", "main", "nav", "section",
    # block text
    "blockquote", "dd", "div", "dl", "dt", "figcaption", "figure",
    "hr", "li", "ol", "p", "pre", "ul",
    # inline text
    "a", "abbr", "b", "bdi", "bdo", "br", "cite", "code", "data", "dfn",
    "em", "i", "kbd", "mark", "q", "rb", "rp", "rt", "rtc", "ruby", "s",
    "samp", "small", "span", "strong", "sub", "sup", "time", "u", "var", "wbr",
    # tables
    "caption", "col", "colgroup", "table", "tbody", "td", "tfoot", "th", "thead", "tr",
}

EXTRA_ALLOWED_TAGS = {
    "sup", "ins", "del", "img", "button",
    "video", "audio", "iframe", "embed",
}

DEFAULT_ALLOWED_ATTRIBUTES = {
    "a": {"href", "name", "hreflang", "media", "rel", "target", "type"},
    "img": {"alt", "height", "ismap", "src", "usemap", "width", "srcset"},
    "iframe": {"height", "name", "src", "width"},
    "video": {"autoplay", "controls", "height", "loop", "muted", "poster", "preload", "src", "width"},
    "audio": {"autoplay", "controls", "loop", "muted", "preload", "src"},
    "embed": {"height", "src", "type", "width"},
}

# Merged into every allowed tag by SanitizeConfig.finalize()
DEFAULT_GLOBAL_ATTRIBUTES = {
    "accesskey", "class", "contenteditable", "dir",
    "draggable", "dropzone", "hidden", "id", "lang", "spellcheck", "style",
    "tabindex", "title", "translate", "aria-expanded", "data-*",
}

DEFAULT_ALLOWED_PROTOCOLS = {"http", "https", "mailto", "ftp", "tel"}


@dataclass
class SanitizeConfig:
    allowed_tags: set[str] = field(default_factory=set)
    allowed_attributes: dict[str, set[str]] = field(default_factory=dict)
    allowed_classes: dict[str, set[str]] = field(default_factory=dict)
    global_attributes: set[str] = field(default_factory=set)
    allowed_protocols: set[str] = field(default_factory=set)

    @classmethod
    def default(cls) -> "SanitizeConfig":
        """Return a fresh copy of the default configuration."""
        return cls(
            allowed_tags=BASE_ALLOWED_TAGS | EXTRA_ALLOWED_TAGS,
            allowed_attributes=copy.deepcopy(DEFAULT_ALLOWED_ATTRIBUTES),
            allowed_classes={},
            global_attributes=set(DEFAULT_GLOBAL_ATTRIBUTES),
            allowed_protocols=set(DEFAULT_ALLOWED_PROTOCOLS),
        )

    def finalize(self) -> "SanitizeConfig":
        """
        Give each allowed tag the global attributes.

        Uses set union, so finalizing an already finalized config changes
        nothing.
        """
        for tag in self.allowed_tags:
            self.allowed_attributes[tag] = set(self.allowed_attributes.get(tag, ())) | self.global_attributes
        return self

    def freeze(self) -> "SanitizePolicy":
        return SanitizePolicy(
            allowed_tags=frozenset(self.allowed_tags),
            allowed_attributes=MappingProxyType(
                {tag: frozenset(attrs) for tag, attrs in self.allowed_attributes.items()}
            ),
            allowed_classes=MappingProxyType(
                {tag: frozenset(classes) for tag, classes in self.allowed_classes.items()}
            ),
            global_attributes=frozenset(self.global_attributes),
            allowed_protocols=frozenset(self.allowed_protocols),
        )


@dataclass(frozen=True)
class SanitizePolicy:
    """Read-only allow-list handed to the sanitizer."""

    allowed_tags: frozenset
    allowed_attributes: Mapping[str, frozenset]
    allowed_classes: Mapping[str, frozenset]
    global_attributes: frozenset
    allowed_protocols: frozenset

    def allows_attribute(self, tag: str, name: str) -> bool:
        """Check an attribute against the tag's list; ``data-*`` style entries match by prefix."""
        if tag not in self.allowed_tags:
            return False
        for allowed in self.allowed_attributes.get(tag, ()):
            if allowed == name or (allowed.endswith("*") and fnmatch.fnmatchcase(name, allowed)):
                return True
        return False

    def classes_for(self, tag: str):
        """Return the class allow-list for ``tag``, or None when any class is accepted."""
        if tag not in self.allowed_classes and "*" not in self.allowed_classes:
            return None
        return self.allowed_classes.get(tag, frozenset()) | self.allowed_classes.get("*", frozenset())

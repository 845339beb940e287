# posts/parsing/sanitizer.py

import logging
import threading
from functools import partial

import bleach
from bleach import html5lib_shim
from bleach.css_sanitizer import CSSSanitizer

from .config import SanitizePolicy
from .profanity import filter_profanity

logger = logging.getLogger(__name__)

_CLASS_ATTR = (None, "class")


class ClassAllowListFilter(html5lib_shim.Filter):
    """Drop class names a tag is not allowed to carry."""

    def __init__(self, source, policy: SanitizePolicy):
        super().__init__(source)
        self.policy = policy

    def __iter__(self):
        for token in super().__iter__():
            if token["type"] in ("StartTag", "EmptyTag") and token.get("data"):
                allowed = self.policy.classes_for(token["name"])
                if allowed is not None and _CLASS_ATTR in token["data"]:
                    classes = [c for c in token["data"][_CLASS_ATTR].split() if c in allowed]
                    if classes:
                        token["data"][_CLASS_ATTR] = " ".join(classes)
                    else:
                        del token["data"][_CLASS_ATTR]
            yield token


class Sanitizer:
    """
    Applies a frozen ``SanitizePolicy`` to HTML.

    bleach Cleaner instances must not be shared between threads, so one is
    built lazily per thread.
    """

    def __init__(self, policy: SanitizePolicy):
        self.policy = policy
        self._local = threading.local()

    def _allow_attribute(self, tag, name, value):
        return self.policy.allows_attribute(tag, name)

    def _build_cleaner(self) -> bleach.Cleaner:
        return bleach.Cleaner(
            tags=self.policy.allowed_tags,
            attributes=self._allow_attribute,
            protocols=self.policy.allowed_protocols,
            strip=True,  # Drop disallowed tags but keep their text
            strip_comments=True,
            filters=[partial(ClassAllowListFilter, policy=self.policy)],
            css_sanitizer=CSSSanitizer(),
        )

    @property
    def cleaner(self) -> bleach.Cleaner:
        cleaner = getattr(self._local, "cleaner", None)
        if cleaner is None:
            cleaner = self._build_cleaner()
            self._local.cleaner = cleaner
        return cleaner

    def apply(self, content) -> str:
        """
        Mask profanity, then reduce the HTML to the allow-list.

        Masking goes first: its output is still untrusted and must pass
        through the allow-list like any other user text.
        """
        return self.cleaner.clean(filter_profanity(content))


_active_sanitizer = None


def install_policy(policy: SanitizePolicy) -> Sanitizer:
    """Make ``policy`` the one used by ``sanitize``."""
    global _active_sanitizer
    _active_sanitizer = Sanitizer(policy)
    logger.debug(
        f"Installed sanitize policy with {len(policy.allowed_tags)} allowed tags"
    )
    return _active_sanitizer


def reset_policy() -> None:
    global _active_sanitizer
    _active_sanitizer = None


def is_configured() -> bool:
    return _active_sanitizer is not None


def get_sanitizer() -> Sanitizer:
    assert _active_sanitizer is not None, (
        "Sanitize policy is not configured; await configure_sanitize() first"
    )
    return _active_sanitizer


def sanitize(content) -> str:
    """Sanitize post HTML with the active policy."""
    return get_sanitizer().apply(content)

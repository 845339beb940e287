# posts/parsing/parser.py
"""
Entry points that turn user-submitted post and signature text into HTML
that is safe to embed.

Post pipeline order:
    cache lookup → ``parse.post`` hook (core stage: sanitize) →
    math expansion → translation escaping → cache store

Sanitizing before math expansion keeps the MathML out of the allow-list's
reach; escaping last avoids escaping the rendered math twice. The cache only
ever holds text that went through every stage.
"""

import logging
from collections.abc import Mapping, MutableMapping

from posts import translator
from posts.hooks import hooks

from .cache import cache_key, get_cached, set_cached
from .config import SanitizeConfig, SanitizePolicy
from .exceptions import InvalidDataError
from .math_renderer import expand_math
from .sanitizer import install_policy, is_configured, sanitize
from .signature import sanitize_signature

logger = logging.getLogger(__name__)

CORE_NAMESPACE = "core"


def _coerce_content(value) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise InvalidDataError()


async def configure_sanitize(registry=hooks) -> SanitizePolicy:
    """
    Build the sanitize policy and make it active.

    Every allowed tag first receives the global attributes, then plugins get
    the config through the ``sanitize.config`` hook to allow their own tags
    and attributes before it is frozen.
    """
    config = SanitizeConfig.default().finalize()
    config = await registry.fire("sanitize.config", config)
    if not isinstance(config, SanitizeConfig):
        raise TypeError(
            f"'sanitize.config' handlers must return a SanitizeConfig, got {type(config).__name__}"
        )

    return install_policy(config.freeze()).policy


async def ensure_sanitize_configured(registry=hooks) -> None:
    """Configure the sanitizer the first time any entry point runs."""
    if not is_configured():
        await configure_sanitize(registry)


async def parse_post(post_data):
    """
    Sanitize, render and escape ``post_data["content"]`` in place.

    Posts with a ``pid`` are served from / stored in the parsed content
    cache; anonymous payloads always run the full pipeline.
    """
    if post_data is None:
        return post_data

    if not isinstance(post_data, MutableMapping):
        raise InvalidDataError()

    post_data["content"] = _coerce_content(post_data.get("content"))

    key = cache_key(post_data)
    cached_content = await get_cached(key)
    if cached_content is not None:
        post_data["content"] = cached_content
        return post_data

    await ensure_sanitize_configured()
    data = await hooks.fire("parse.post", {"post_data": post_data})
    if not isinstance(data, Mapping) or not isinstance(data.get("post_data"), MutableMapping):
        raise InvalidDataError()

    post_data = data["post_data"]
    content = _coerce_content(post_data.get("content"))

    # Math renders just before we escape the content
    content = expand_math(content)
    post_data["content"] = translator.escape(content)

    await set_cached(key, post_data["content"])
    return post_data


async def parse_signature(user_data, uid=None):
    """Clean ``user_data["signature"]`` in place. Signatures are never cached."""
    if not isinstance(user_data, MutableMapping):
        raise InvalidDataError()

    user_data["signature"] = sanitize_signature(_coerce_content(user_data.get("signature")))

    await ensure_sanitize_configured()
    data = await hooks.fire("parse.signature", {"user_data": user_data, "uid": uid})
    return data["user_data"]


async def parse_raw(content) -> str:
    """Sanitize free-standing HTML through the ``parse.raw`` hook."""
    await ensure_sanitize_configured()
    return await hooks.fire("parse.raw", content)


async def parse_aboutme(content) -> str:
    """Sanitize a profile "about me" through the ``parse.aboutme`` hook."""
    await ensure_sanitize_configured()
    return await hooks.fire("parse.aboutme", content)


# --- Core hook stages ---

def sanitize_post_stage(data):
    data["post_data"]["content"] = sanitize(data["post_data"]["content"])
    return data


def sanitize_signature_stage(data):
    data["user_data"]["signature"] = sanitize(data["user_data"]["signature"])
    return data


def sanitize_text_stage(content):
    return sanitize(content)


CORE_STAGES = [
    ("parse.post", sanitize_post_stage),
    ("parse.raw", sanitize_text_stage),
    ("parse.aboutme", sanitize_text_stage),
    ("parse.signature", sanitize_signature_stage),
]


def register_hooks(registry=hooks) -> None:
    """Register the default sanitize stages so every hook has a baseline."""
    added = 0
    for hook, method in CORE_STAGES:
        if registry.register(CORE_NAMESPACE, hook, method):
            added += 1
    if added:
        logger.debug(f"Registered {added} core parse hooks")

import os
import sys
from pathlib import Path

import django
import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "ForumProject.settings")
django.setup()

from asgiref.sync import async_to_sync  # noqa: E402

from posts.hooks import hooks  # noqa: E402
from posts.parsing import cache, configure_sanitize  # noqa: E402
from posts.parsing.sanitizer import reset_policy  # noqa: E402

TEST_NAMESPACE = "test"
PIPELINE_HOOKS = ("parse.post", "parse.raw", "parse.aboutme", "parse.signature", "sanitize.config")


@pytest.fixture(autouse=True)
def isolated_pipeline_state():
    cache.clear()
    reset_policy()
    yield
    for hook in PIPELINE_HOOKS:
        hooks.unregister(TEST_NAMESPACE, hook)
    reset_policy()
    cache.clear()


@pytest.fixture
def policy():
    """Configure the sanitizer with whatever sanitize.config hooks are registered."""
    return async_to_sync(configure_sanitize)()


@pytest.fixture
def register_test_hook():
    def register(hook, method, priority=10):
        hooks.register(TEST_NAMESPACE, hook, method, priority=priority)
        return method

    return register


@pytest.fixture
def run():
    """Run a coroutine function to completion from a sync test."""

    def runner(func, *args, **kwargs):
        return async_to_sync(func)(*args, **kwargs)

    return runner

import pytest
from asgiref.sync import async_to_sync

from posts.hooks import HookRegistry


def fire(registry, hook, payload):
    return async_to_sync(registry.fire)(hook, payload)


def test_fire_without_listeners_returns_payload():
    registry = HookRegistry()
    assert fire(registry, "parse.raw", "text") == "text"
    assert registry.has_listeners("parse.raw") is False


def test_handlers_accumulate_sequentially_sync_and_async():
    registry = HookRegistry()

    def add_a(value):
        return value + "a"

    async def add_b(value):
        return value + "b"

    registry.register("one", "parse.raw", add_a)
    registry.register("two", "parse.raw", add_b)

    assert fire(registry, "parse.raw", "") == "ab"


def test_priority_orders_handlers_and_ties_keep_registration_order():
    registry = HookRegistry()
    calls = []

    def make(name):
        def handler(value):
            calls.append(name)
            return value
        return handler

    registry.register("p", "parse.raw", make("late"), priority=20)
    registry.register("p", "parse.raw", make("first-default"))
    registry.register("p", "parse.raw", make("second-default"))
    registry.register("p", "parse.raw", make("early"), priority=1)

    fire(registry, "parse.raw", "x")
    assert calls == ["early", "first-default", "second-default", "late"]


def test_duplicate_registration_is_ignored():
    registry = HookRegistry()

    def handler(value):
        return value + "!"

    assert registry.register("p", "parse.raw", handler) is True
    assert registry.register("p", "parse.raw", handler) is False
    assert fire(registry, "parse.raw", "hi") == "hi!"


def test_handler_returning_none_keeps_previous_payload():
    registry = HookRegistry()
    registry.register("p", "parse.raw", lambda value: None)
    registry.register("p", "parse.raw", lambda value: value.upper())

    assert fire(registry, "parse.raw", "keep") == "KEEP"


def test_handler_errors_propagate_and_stop_the_chain():
    registry = HookRegistry()
    later = []

    def broken(value):
        raise RuntimeError("plugin exploded")

    registry.register("p", "parse.raw", broken)
    registry.register("p", "parse.raw", lambda value: later.append(value) or value)

    with pytest.raises(RuntimeError, match="plugin exploded"):
        fire(registry, "parse.raw", "x")
    assert later == []


def test_unregister_by_namespace_and_method():
    registry = HookRegistry()

    def a(value):
        return value + "a"

    def b(value):
        return value + "b"

    registry.register("mine", "parse.raw", a)
    registry.register("mine", "parse.raw", b)
    registry.register("other", "parse.raw", a)

    assert registry.unregister("mine", "parse.raw", a) == 1
    assert fire(registry, "parse.raw", "") == "ba"
    assert registry.unregister("mine", "parse.raw") == 1
    assert [l.namespace for l in registry.listeners("parse.raw")] == ["other"]


def test_register_rejects_non_callables():
    with pytest.raises(TypeError):
        HookRegistry().register("p", "parse.raw", "not callable")

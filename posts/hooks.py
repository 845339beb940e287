# posts/hooks.py
"""
Named filter chains that plugins use to extend post parsing.

Each hook is an ordered list of handlers. ``fire`` passes the payload through
them one after another, each handler receiving the previous handler's return
value. Handlers may be plain functions or coroutines.

Hooks used by the parsing pipeline:
- ``parse.post``       payload ``{"post_data": dict}``
- ``parse.signature``  payload ``{"user_data": dict, "uid": ...}``
- ``parse.raw``        payload ``str``
- ``parse.aboutme``    payload ``str``
- ``sanitize.config``  payload ``SanitizeConfig``
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable

logger = logging.getLogger(__name__)

DEFAULT_PRIORITY = 10


@dataclass(frozen=True)
class Listener:
    namespace: str
    hook: str
    method: Callable[[Any], Any]
    priority: int = DEFAULT_PRIORITY


class HookRegistry:
    """Ordered, sequential filter chains keyed by hook name."""

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = {}

    def register(self, namespace: str, hook: str, method, priority: int = DEFAULT_PRIORITY) -> bool:
        """
        Add ``method`` to the chain for ``hook``.

        Handlers run by ascending priority, then in registration order.
        Registering the same method twice for the same namespace and hook is
        ignored. Returns True if the handler was added.
        """
        if not callable(method):
            raise TypeError(f"Hook method for '{hook}' from '{namespace}' is not callable")

        listeners = self._listeners.setdefault(hook, [])
        if any(l.namespace == namespace and l.method == method for l in listeners):
            logger.debug(f"Skipping duplicate registration of '{hook}' from '{namespace}'")
            return False

        listeners.append(Listener(namespace, hook, method, priority))
        # sort() is stable, so equal priorities keep registration order
        listeners.sort(key=lambda l: l.priority)
        return True

    def unregister(self, namespace: str, hook: str, method=None) -> int:
        """Remove handlers of ``namespace`` from ``hook``; returns how many."""
        listeners = self._listeners.get(hook, [])
        kept = [
            l for l in listeners
            if not (l.namespace == namespace and (method is None or l.method == method))
        ]
        self._listeners[hook] = kept
        return len(listeners) - len(kept)

    def has_listeners(self, hook: str) -> bool:
        return bool(self._listeners.get(hook))

    def listeners(self, hook: str) -> tuple[Listener, ...]:
        return tuple(self._listeners.get(hook, ()))

    async def fire(self, hook: str, payload):
        """
        Run every handler registered for ``hook`` in order and return the
        accumulated payload.

        Handler errors are logged and re-raised; an extension may be
        responsible for required sanitization, so the chain never continues
        past a failing handler.
        """
        for listener in self.listeners(hook):
            try:
                result = listener.method(payload)
                if inspect.isawaitable(result):
                    result = await result
            except Exception:
                logger.error(
                    f"Hook '{hook}' handler from '{listener.namespace}' failed",
                    exc_info=True,
                )
                raise

            if result is None:
                logger.warning(
                    f"Hook '{hook}' handler from '{listener.namespace}' returned None; "
                    f"keeping the previous payload"
                )
                continue
            payload = result

        return payload


hooks = HookRegistry()

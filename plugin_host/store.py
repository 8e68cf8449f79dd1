"""Application state store: dispatch actions, reduce into state, notify subscribers."""

import copy
import logging
from typing import Any, Callable, Protocol, runtime_checkable

logger = logging.getLogger(__name__)

Action = dict[str, Any]
Listener = Callable[[Action], None]


class StoreActions:
    """Action types understood by AppStore."""

    # A plugin was loaded and is compatible with this app version.
    # Payload: {"plugin": {"id": str, "views": dict, "contentScripts": dict}}
    PLUGIN_ADD = "PLUGIN_ADD"


@runtime_checkable
class Store(Protocol):
    """What the plugin loader needs from the store."""

    def dispatch(self, action: Action) -> None:
        """Apply an action."""


def _initial_state() -> dict[str, Any]:
    return {"plugin_service": {"plugins": {}}}


def reduce(state: dict[str, Any], action: Action) -> dict[str, Any]:
    """Return the state after action. Does not mutate state."""
    if action.get("type") == StoreActions.PLUGIN_ADD:
        plugin = action.get("plugin") or {}
        plugin_id = plugin.get("id")
        if not plugin_id:
            logger.warning("PLUGIN_ADD without plugin id: %s", action)
            return state
        new_state = copy.deepcopy(state)
        new_state["plugin_service"]["plugins"][plugin_id] = {
            "id": plugin_id,
            "views": dict(plugin.get("views") or {}),
            "contentScripts": dict(plugin.get("contentScripts") or {}),
        }
        return new_state
    return state


class AppStore:
    """In-memory store. Single writer; no locking."""

    def __init__(self, state: dict[str, Any] | None = None) -> None:
        self._state = state if state is not None else _initial_state()
        self._listeners: list[Listener] = []

    @property
    def state(self) -> dict[str, Any]:
        return self._state

    def dispatch(self, action: Action) -> None:
        self._state = reduce(self._state, action)
        for listener in list(self._listeners):
            try:
                listener(action)
            except Exception as e:
                logger.exception("Store listener failed for %s: %s", action.get("type"), e)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register listener; returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

"""
API events and the listener registry.

Listeners are attached to an event name and an identifier. When an event is
triggered, listeners registered for ``'*'`` or for one of the target's
identifiers run in descending priority order until one stops propagation.
Adapters identify themselves by resource name and class name.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


class Event:
    API_EXECUTE_PRE = "api.execute.pre"
    API_EXECUTE_POST = "api.execute.post"
    API_SEARCH_PRE = "api.search.pre"
    API_SEARCH_POST = "api.search.post"
    API_CREATE_PRE = "api.create.pre"
    API_CREATE_POST = "api.create.post"
    API_BATCH_CREATE_PRE = "api.batch_create.pre"
    API_BATCH_CREATE_POST = "api.batch_create.post"
    API_READ_PRE = "api.read.pre"
    API_READ_POST = "api.read.post"
    API_UPDATE_PRE = "api.update.pre"
    API_UPDATE_POST = "api.update.post"
    API_DELETE_PRE = "api.delete.pre"
    API_DELETE_POST = "api.delete.post"
    API_SEARCH_QUERY = "api.search.query"
    API_READ_FIND_POST = "api.read.find.post"
    API_DELETE_FIND_POST = "api.delete.find.post"
    API_CREATE_VALIDATE_PRE = "api.create.validate.pre"
    API_UPDATE_VALIDATE_PRE = "api.update.validate.pre"

    def __init__(self, name: str, target: Any = None, params: Optional[Dict[str, Any]] = None):
        self.name = name
        self.target = target
        self.params = dict(params or {})
        self._propagation_stopped = False

    def get_param(self, name: str, default: Any = None) -> Any:
        return self.params.get(name, default)

    def set_param(self, name: str, value: Any) -> None:
        self.params[name] = value

    def stop_propagation(self, flag: bool = True) -> None:
        self._propagation_stopped = flag

    def propagation_is_stopped(self) -> bool:
        return self._propagation_stopped

    def __repr__(self) -> str:
        return f"Event({self.name!r})"


@dataclass(order=True)
class _Listener:
    sort_key: tuple
    event_name: str = field(compare=False)
    identifier: str = field(compare=False)
    callback: Callable[[Event], Any] = field(compare=False)


def _identifiers_for(target: Any) -> set[str]:
    """Return the identifiers a target answers to."""
    if target is None:
        return set()
    ids = {type(target).__name__}
    get_resource_name = getattr(target, "get_resource_name", None)
    if callable(get_resource_name):
        ids.add(get_resource_name())
    extra = getattr(target, "event_identifiers", None)
    if extra:
        ids.update(extra)
    return ids


class EventManager:
    def __init__(self):
        self._listeners: Dict[str, List[_Listener]] = {}
        self._sequence = 0

    def attach(
        self,
        event_name: str,
        listener: Callable[[Event], Any],
        identifier: str = "*",
        priority: int = 1,
    ) -> Callable[[Event], Any]:
        # Ties are resolved in attachment order.
        self._sequence += 1
        entry = _Listener((-priority, self._sequence), event_name, identifier, listener)
        bucket = self._listeners.setdefault(event_name, [])
        bucket.append(entry)
        bucket.sort()
        return listener

    def detach(self, listener: Callable[[Event], Any], event_name: Optional[str] = None) -> bool:
        removed = False
        names = [event_name] if event_name else list(self._listeners)
        for name in names:
            bucket = self._listeners.get(name, [])
            kept = [entry for entry in bucket if entry.callback is not listener]
            removed = removed or len(kept) != len(bucket)
            self._listeners[name] = kept
        return removed

    def clear_listeners(self, event_name: Optional[str] = None) -> None:
        if event_name is None:
            self._listeners.clear()
        else:
            self._listeners.pop(event_name, None)

    def get_listeners(self, event_name: str) -> List[Callable[[Event], Any]]:
        return [entry.callback for entry in self._listeners.get(event_name, [])]

    def trigger(self, event: Event) -> List[Any]:
        """Run matching listeners and return their results."""
        identifiers = _identifiers_for(event.target)
        results = []
        for entry in list(self._listeners.get(event.name, [])):
            if entry.identifier != "*" and entry.identifier not in identifiers:
                continue
            logger.debug("event %s -> %r", event.name, entry.callback)
            results.append(entry.callback(event))
            if event.propagation_is_stopped():
                break
        return results


def event_manager_factory(services):
    return EventManager()

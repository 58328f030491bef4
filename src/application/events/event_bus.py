"""
In-process publish/subscribe for domain events.

The scene store and keyframe timeline publish; views and the timeline itself
subscribe, so neither side holds a reference to the other.
"""
from collections import defaultdict
from threading import Lock
from typing import Callable, DefaultDict, List, Type, Union

from src.application.events.events import DomainEvent
from src.utils.message import Log

Handler = Callable[[DomainEvent], None]
EventKey = Union[str, Type[DomainEvent]]


def event_key(event: EventKey) -> str:
    """Subscription key for an event class or name ("SceneDeleted")."""
    if isinstance(event, str):
        return event
    return getattr(event, "name", None) or event.__name__


class EventBus:
    """
    Synchronous event bus.

    Handlers run on the publishing thread in subscription order; one that
    raises is logged and the rest still run.

        bus.subscribe(SceneDeleted, timeline.on_scene_deleted)
        bus.publish(SceneDeleted(project_id=pid, data={"scene_id": sid}))
    """

    def __init__(self):
        self._handlers: DefaultDict[str, List[Handler]] = defaultdict(list)
        self._lock = Lock()

    def subscribe(self, event: EventKey, handler: Handler) -> None:
        """Register handler for an event type. Subscribing twice is a no-op."""
        key = event_key(event)
        with self._lock:
            if handler not in self._handlers[key]:
                self._handlers[key].append(handler)

    def unsubscribe(self, event: EventKey, handler: Handler) -> None:
        key = event_key(event)
        with self._lock:
            if handler in self._handlers.get(key, ()):
                self._handlers[key].remove(handler)

    def publish(self, event: DomainEvent) -> None:
        # Snapshot the list: handlers may unsubscribe while being called
        with self._lock:
            handlers = tuple(self._handlers.get(event.name, ()))

        for handler in handlers:
            try:
                handler(event)
            except Exception as e:
                Log.error(f"EventBus: handler {getattr(handler, '__name__', handler)!r} failed on {event.name}: {e}")

    def get_subscriber_count(self, event: EventKey) -> int:
        with self._lock:
            return len(self._handlers.get(event_key(event), ()))

    def clear(self) -> None:
        with self._lock:
            self._handlers.clear()

from enum import Enum, auto
from typing import Callable, Dict, Any
import uuid
import logging

logger = logging.getLogger(__name__)


class AppEvent(Enum):
    """Application-wide events for the observer pattern."""
    TASK_CREATED = auto()
    TASK_COMPLETED = auto()
    TASK_UNCOMPLETED = auto()
    TASK_DELETED = auto()
    COMPLETED_CLEARED = auto()
    FILTER_CHANGED = auto()
    CATEGORY_CHANGED = auto()
    THEME_CHANGED = auto()
    ANALYTICS_UPDATED = auto()
    PERSISTENCE_FAILED = auto()
    REFRESH_UI = auto()


class Subscription:
    """Represents an event subscription that can be unsubscribed."""

    def __init__(self, event_bus: "EventBus", event: AppEvent, subscription_id: str) -> None:
        self._event_bus = event_bus
        self._event = event
        self._subscription_id = subscription_id
        self._active = True

    @property
    def id(self) -> str:
        return self._subscription_id

    @property
    def active(self) -> bool:
        return self._active

    def unsubscribe(self) -> None:
        if self._active:
            self._event_bus._unsubscribe_by_id(self._event, self._subscription_id)
            self._active = False


class EventBus:
    """Event bus for decoupled component communication.

    One instance per application context; the entry point creates it and
    hands it to every component that publishes or listens. Callbacks are
    held strongly until their Subscription is unsubscribed or the bus is
    cleared.
    """

    def __init__(self) -> None:
        # Dict[event -> Dict[subscription_id -> callback]], insertion ordered
        self._listeners: Dict[AppEvent, Dict[str, Callable[[Any], None]]] = {}

    def subscribe(self, event: AppEvent, callback: Callable[[Any], None]) -> Subscription:
        """Subscribe a callback to an event. Returns a Subscription for cleanup.

        Callbacks run in subscription order, synchronously, inside emit().
        """
        subscription_id = str(uuid.uuid4())
        self._listeners.setdefault(event, {})[subscription_id] = callback
        return Subscription(self, event, subscription_id)

    def _unsubscribe_by_id(self, event: AppEvent, subscription_id: str) -> None:
        if event in self._listeners:
            self._listeners[event].pop(subscription_id, None)

    def emit(self, event: AppEvent, data: Any = None) -> None:
        """Emit an event to all subscribers.

        A failing handler is logged and does not stop the remaining handlers.
        """
        # Copy to avoid modification during iteration
        for callback in list(self._listeners.get(event, {}).values()):
            try:
                callback(data)
            except Exception:
                logger.exception(f"Error in event handler for {event.name}")

    def listener_count(self, event: AppEvent) -> int:
        return len(self._listeners.get(event, {}))

    def clear(self) -> None:
        """Clear all event subscriptions."""
        self._listeners.clear()

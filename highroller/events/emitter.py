"""
Event system for the highroller engines.

Engines never render anything. Instead they emit events describing what just
happened (a card dealt, a wheel spun, a round settled) and the presentation
layer subscribes to the ones it wants to animate. Handler failures are logged
and never affect the outcome that was already computed.
"""

from collections import defaultdict
from enum import Enum
from typing import Any, Callable, Dict, Union
import logging
import threading

logger = logging.getLogger("highroller.events")


class EventPriority(Enum):
    """Priority levels for event handlers."""

    LOW = 0
    NORMAL = 1
    HIGH = 2
    CRITICAL = 3


class EventEmitter:
    """
    Thread-safe event emitter with priority-ordered handlers.

    Features:
    - Supports event subscription with priorities
    - Allows once-only subscriptions
    - Supports subscribing to all events
    """

    def __init__(self):
        """Initialize the event emitter."""
        self._listeners = defaultdict(list)
        self._global_listeners = []
        self._listener_lock = threading.RLock()

    @staticmethod
    def _key(event_type: Union[str, Enum]) -> str:
        return event_type.name if isinstance(event_type, Enum) else event_type

    @staticmethod
    def _insert(handlers: list, handler: Dict[str, Any]) -> None:
        # Higher priority handlers run first; equal priorities keep insertion order
        for i, existing in enumerate(handlers):
            if existing["priority"] < handler["priority"]:
                handlers.insert(i, handler)
                return
        handlers.append(handler)

    def on(
        self,
        event_type: Union[str, Enum],
        callback: Callable,
        priority: EventPriority = EventPriority.NORMAL,
    ) -> Callable:
        """
        Subscribe to an event type.

        Args:
            event_type: The event type to subscribe to (string or enum)
            callback: Function to call when event occurs, signature: fn(event_data)
            priority: Priority level for this handler

        Returns:
            Unsubscribe function that can be called to remove this subscription
        """
        key = self._key(event_type)
        handler = {"callback": callback, "priority": priority.value}

        with self._listener_lock:
            self._insert(self._listeners[key], handler)

        def unsubscribe():
            with self._listener_lock:
                handlers = self._listeners[key]
                if handler in handlers:
                    handlers.remove(handler)

        return unsubscribe

    def once(
        self,
        event_type: Union[str, Enum],
        callback: Callable,
        priority: EventPriority = EventPriority.NORMAL,
    ) -> Callable:
        """
        Subscribe to an event type for a single occurrence.

        Returns:
            Unsubscribe function that can be called to remove this subscription
        """
        unsubscribe_ref = []

        def one_time_handler(event_data):
            try:
                callback(event_data)
            finally:
                unsubscribe_ref[0]()

        unsubscribe_ref.append(self.on(event_type, one_time_handler, priority))
        return unsubscribe_ref[0]

    def on_any(
        self, callback: Callable, priority: EventPriority = EventPriority.NORMAL
    ) -> Callable:
        """
        Subscribe to all events.

        Args:
            callback: Function to call for any event, signature: fn((event_type, event_data))
            priority: Priority level for this handler

        Returns:
            Unsubscribe function that can be called to remove this subscription
        """
        handler = {"callback": callback, "priority": priority.value}

        with self._listener_lock:
            self._insert(self._global_listeners, handler)

        def unsubscribe():
            with self._listener_lock:
                if handler in self._global_listeners:
                    self._global_listeners.remove(handler)

        return unsubscribe

    def emit(self, event_type: Union[str, Enum], data: Dict[str, Any]) -> None:
        """
        Emit an event to all registered listeners.

        Args:
            event_type: The type of event to emit
            data: The data to include with the event
        """
        key = self._key(event_type)

        with self._listener_lock:
            handlers_to_call = [
                (handler["callback"], data) for handler in self._listeners.get(key, [])
            ]
            handlers_to_call.extend(
                (handler["callback"], (key, data)) for handler in self._global_listeners
            )

        # Call handlers outside of the lock to avoid deadlocks
        for callback, args in handlers_to_call:
            try:
                callback(args)
            except Exception as e:
                logger.error(f"Error in event handler for {key}: {e}", exc_info=True)

    def remove_all_listeners(self, event_type: Union[str, Enum, None] = None) -> None:
        """
        Remove all listeners for a specific event type or all events.
        """
        with self._listener_lock:
            if event_type is None:
                self._listeners.clear()
                self._global_listeners.clear()
            else:
                self._listeners[self._key(event_type)].clear()


class EventBus:
    """
    Process-wide event bus.

    Engines default to this instance when no emitter is injected.
    """

    _instance = None
    _lock = threading.Lock()

    @classmethod
    def get_instance(cls) -> EventEmitter:
        """
        Get the singleton instance of the EventBus.

        Returns:
            EventEmitter instance
        """
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = EventEmitter()
        return cls._instance


class CasinoEventType(Enum):
    """
    Event types emitted by the engines and the ledger.
    """

    ROUND_STARTED = "round_started"
    CARD_DEALT = "card_dealt"
    PLAYER_ACTION = "player_action"
    DEALER_ACTION = "dealer_action"
    STAKE_PLACED = "stake_placed"
    STAKES_CLEARED = "stakes_cleared"
    WHEEL_SPUN = "wheel_spun"
    CELL_REVEALED = "cell_revealed"
    REELS_SPUN = "reels_spun"
    BALL_DROPPED = "ball_dropped"
    JACKPOT_WON = "jackpot_won"
    ROUND_SETTLED = "round_settled"
    LEDGER_UPDATED = "ledger_updated"

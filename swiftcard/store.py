"""
Observable state container.

Holds one owned value with a version counter and notifies subscribers on
every change. Used for the live card list and for form state.
"""

import logging
import threading
from typing import Callable, Generic, List, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Listener = Callable[[T], None]


class ObservableStore(Generic[T]):
    """Versioned value plus subscription mechanism."""

    def __init__(self, initial: T):
        self._value = initial
        self._version = 0
        self._listeners: List[Listener] = []
        self._lock = threading.RLock()

    @property
    def value(self) -> T:
        with self._lock:
            return self._value

    @property
    def version(self) -> int:
        with self._lock:
            return self._version

    def set(self, value: T) -> int:
        """Replace the value, bump the version and notify subscribers.

        Returns:
            The new version number
        """
        with self._lock:
            self._value = value
            self._version += 1
            version = self._version
            listeners = list(self._listeners)
        # Notify outside the lock so listeners may read the store
        for listener in listeners:
            self._notify(listener, value)
        return version

    def update(self, func: Callable[[T], T]) -> int:
        with self._lock:
            value = func(self._value)
        return self.set(value)

    def subscribe(self, listener: Listener, emit_current: bool = True) -> Callable[[], None]:
        """Register a listener.

        Args:
            listener: Called with the value on every change
            emit_current: Deliver the current value immediately

        Returns:
            Function that removes the listener
        """
        with self._lock:
            self._listeners.append(listener)
            current = self._value
        if emit_current:
            self._notify(listener, current)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._listeners)

    def _notify(self, listener: Listener, value: T) -> None:
        try:
            listener(value)
        except Exception as e:
            logger.warning(f"Store listener failed: {e}")

"""Current-value subject used to broadcast store and view-model state."""

from collections.abc import Callable
from typing import Generic, TypeVar

T = TypeVar("T")


class Subscription:
    """Handle returned by ``Publisher.subscribe``; cancel it to stop updates."""

    def __init__(self, publisher: "Publisher", callback: Callable):
        self._publisher = publisher
        self._callback = callback

    @property
    def active(self) -> bool:
        return self._callback in self._publisher._subscribers

    def cancel(self) -> None:
        self._publisher._unsubscribe(self._callback)

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *_: object) -> None:
        self.cancel()


class Publisher(Generic[T]):
    """Holds a current value and pushes every new value to subscribers.

    Subscribers receive the complete value, never a diff. New subscribers
    get the current value immediately.
    """

    def __init__(self, value: T):
        self._value = value
        self._subscribers: list[Callable[[T], None]] = []

    @property
    def value(self) -> T:
        return self._value

    def send(self, value: T) -> None:
        self._value = value
        for callback in list(self._subscribers):
            callback(value)

    def subscribe(self, callback: Callable[[T], None], *, replay: bool = True) -> Subscription:
        self._subscribers.append(callback)
        if replay:
            callback(self._value)
        return Subscription(self, callback)

    def _unsubscribe(self, callback: Callable) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

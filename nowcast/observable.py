from __future__ import annotations

import logging
from typing import Callable, Generic, List, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)

Handler = Callable[[T], None]


class ObservableValue(Generic[T]):
    """Holds a value and pushes every new value to its subscribers.

    Notification is synchronous, on whichever thread calls :meth:`set`.
    A handler that raises is logged and does not stop delivery to the rest.
    Subscribing does not replay the current value.
    """

    def __init__(self, value: T) -> None:
        self._value = value
        self._handlers: List[Handler] = []

    @property
    def value(self) -> T:
        return self._value

    def set(self, value: T) -> None:
        self._value = value
        for handler in list(self._handlers):
            try:
                handler(value)
            except Exception:
                logger.exception("Subscriber %r failed", handler)

    def subscribe(self, handler: Handler) -> Callable[[], None]:
        self._handlers.append(handler)

        def unsubscribe() -> None:
            try:
                self._handlers.remove(handler)
            except ValueError:
                pass

        return unsubscribe


__all__ = ["ObservableValue"]

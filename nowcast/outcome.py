"""Resolve-once bridge between callback APIs and futures."""
from __future__ import annotations

import logging
from concurrent.futures import Future, InvalidStateError
from threading import Lock
from typing import Generic, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


class Outcome(Generic[T]):
    """A cell that accepts exactly one result or one error.

    The first call to :meth:`resolve` or :meth:`fail` settles the underlying
    future; every later attempt is rejected and reported by returning False.
    """

    def __init__(self) -> None:
        self._future: Future = Future()
        self._lock = Lock()

    @property
    def future(self) -> Future:
        return self._future

    @property
    def settled(self) -> bool:
        return self._future.done()

    def resolve(self, value: T) -> bool:
        with self._lock:
            if self._future.done():
                logger.debug("Outcome already settled, dropping value %r", value)
                return False
            try:
                self._future.set_result(value)
            except InvalidStateError:
                # Cancelled by a consumer between the check and the set.
                return False
        return True

    def fail(self, error: BaseException) -> bool:
        with self._lock:
            if self._future.done():
                logger.debug("Outcome already settled, dropping error %r", error)
                return False
            try:
                self._future.set_exception(error)
            except InvalidStateError:
                return False
        return True


__all__ = ["Outcome"]

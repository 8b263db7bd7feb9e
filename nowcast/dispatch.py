"""Execution contexts on which pipeline results are applied."""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable

logger = logging.getLogger(__name__)

Dispatch = Callable[[Callable[[], None]], None]


def immediate_dispatch(callback: Callable[[], None]) -> None:
    callback()


class SerialDispatcher:
    """Runs callbacks one at a time, in submission order, on one thread."""

    def __init__(self, name: str = "nowcast-main") -> None:
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=name)
        self._closed = False

    def __call__(self, callback: Callable[[], None]) -> None:
        if self._closed:
            logger.debug("Dispatcher closed, dropping %r", callback)
            return
        self._executor.submit(self._run, callback)

    def shutdown(self, wait: bool = True) -> None:
        self._closed = True
        self._executor.shutdown(wait=wait)

    @staticmethod
    def _run(callback: Callable[[], None]) -> None:
        try:
            callback()
        except Exception:
            # The executor would otherwise park the exception on a future nobody reads.
            logger.exception("Dispatched callback failed")
            raise


__all__ = ["Dispatch", "SerialDispatcher", "immediate_dispatch"]

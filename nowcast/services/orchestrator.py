"""Runs the location -> forecast -> publish pipeline."""
from __future__ import annotations

import logging
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from enum import Enum
from functools import partial
from threading import RLock
from typing import Any, Optional, Type

from ..dispatch import Dispatch, SerialDispatcher
from ..entities import PublishedState
from ..errors import LocationUnavailable, NetworkRequestFailed, PipelineError
from ..observable import ObservableValue


class RunPhase(Enum):
    IDLE = "idle"
    RESOLVING_LOCATION = "resolving_location"
    FETCHING_WEATHER = "fetching_weather"
    PUBLISHED = "published"
    FAILED = "failed"


class ForecastOrchestrator:
    """Owns the published state and the runs that produce it.

    Each run gets a number from a monotonically increasing counter.  Results
    are applied on ``dispatch`` and only when they belong to the latest run;
    anything older is dropped, so a slow superseded run can never overwrite a
    newer result.
    """

    def __init__(
        self,
        *,
        location_authority: Any,
        weather_client: Any,
        credential: Optional[str],
        executor: Optional[Executor] = None,
        dispatch: Optional[Dispatch] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.location_authority = location_authority
        self.weather_client = weather_client
        self.credential = credential
        self.state: ObservableValue[PublishedState] = ObservableValue(PublishedState.empty())

        self._owned_executor: Optional[ThreadPoolExecutor] = None
        if executor is None:
            executor = self._owned_executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="nowcast-fetch")
        self._executor = executor
        self._owned_dispatcher: Optional[SerialDispatcher] = None
        if dispatch is None:
            dispatch = self._owned_dispatcher = SerialDispatcher()
        self._dispatch = dispatch

        self._log = logger or logging.getLogger(self.__class__.__name__)
        self._lock = RLock()
        self._run_id = 0
        self._phase = RunPhase.IDLE
        self._inflight: Optional[Future] = None

    # Public API ---------------------------------------------------------
    @property
    def phase(self) -> RunPhase:
        return self._phase

    @property
    def run_id(self) -> int:
        return self._run_id

    def start(self) -> bool:
        """Begin a run unless one is already in progress."""
        with self._lock:
            if self._phase is not RunPhase.IDLE:
                self._log.debug("Run %s still %s, ignoring start", self._run_id, self._phase.value)
                return False
            run_id = self._begin_run()
        self._resolve_location(run_id)
        return True

    def refresh(self) -> int:
        """Begin a run now, superseding any run in progress."""
        with self._lock:
            superseded, self._inflight = self._inflight, None
            run_id = self._begin_run()
        if superseded is not None and superseded.cancel():
            self._log.debug("Cancelled queued fetch of superseded run %s", run_id - 1)
        self._resolve_location(run_id)
        return run_id

    def close(self) -> None:
        for collaborator in (self.location_authority, self.weather_client):
            close = getattr(collaborator, "close", None)
            if callable(close):
                close()
        if self._owned_executor is not None:
            self._owned_executor.shutdown(wait=False)
        if self._owned_dispatcher is not None:
            self._owned_dispatcher.shutdown(wait=True)

    def __enter__(self) -> "ForecastOrchestrator":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # Pipeline -----------------------------------------------------------
    def _begin_run(self) -> int:
        self._run_id += 1
        self._phase = RunPhase.RESOLVING_LOCATION
        self._log.info("Run %s: resolving location", self._run_id)
        return self._run_id

    def _resolve_location(self, run_id: int) -> None:
        try:
            future = self.location_authority.resolve_location()
            future.add_done_callback(lambda done: self._dispatch(partial(self._on_location, run_id, done)))
        except Exception as exc:
            with self._lock:
                if self._is_current(run_id):
                    self._fail(run_id, self._as_pipeline_error(exc, LocationUnavailable))

    def _on_location(self, run_id: int, future: Future) -> None:
        with self._lock:
            if not self._is_current(run_id):
                return
            if future.cancelled():
                self._fail(run_id, LocationUnavailable("location request cancelled"))
                return
            error = future.exception()
            if error is not None:
                self._fail(run_id, self._as_pipeline_error(error, LocationUnavailable))
                return
            coordinate = future.result()
            self._phase = RunPhase.FETCHING_WEATHER
            self._log.info(
                "Run %s: fetching weather for %.4f, %.4f", run_id, coordinate.latitude, coordinate.longitude
            )
            fetch = self._executor.submit(self.weather_client.fetch, coordinate, self.credential)
            self._inflight = fetch
        fetch.add_done_callback(lambda done: self._dispatch(partial(self._on_weather, run_id, done)))

    def _on_weather(self, run_id: int, future: Future) -> None:
        with self._lock:
            if not self._is_current(run_id) or future.cancelled():
                return
            self._inflight = None
            error = future.exception()
            if error is not None:
                self._fail(run_id, self._as_pipeline_error(error, NetworkRequestFailed))
                return
            snapshot = future.result()
            self._log.info("Run %s: publishing forecast for %s", run_id, snapshot.location_name)
            self._publish(run_id, PublishedState.from_snapshot(snapshot), RunPhase.PUBLISHED)

    # Helpers ------------------------------------------------------------
    def _is_current(self, run_id: int) -> bool:
        if run_id != self._run_id:
            self._log.debug("Dropping result of run %s, run %s is current", run_id, self._run_id)
            return False
        return True

    def _fail(self, run_id: int, error: PipelineError) -> None:
        self._log.warning("Run %s failed (%s): %s", run_id, error.code, error)
        self._publish(run_id, PublishedState.from_error(error.user_message), RunPhase.FAILED)

    def _publish(self, run_id: int, state: PublishedState, phase: RunPhase) -> None:
        # Caller holds the lock, so another thread cannot begin a run mid-publication.
        self._phase = phase
        try:
            self.state.set(state)
        finally:
            if run_id == self._run_id:
                # A subscriber may have started the next run from its handler.
                self._phase = RunPhase.IDLE

    def _as_pipeline_error(self, error: BaseException, fallback: Type[PipelineError]) -> PipelineError:
        if isinstance(error, PipelineError):
            return error
        self._log.error("Unexpected pipeline failure", exc_info=error)
        wrapped = fallback(str(error) or error.__class__.__name__)
        wrapped.__cause__ = error
        return wrapped


__all__ = ["ForecastOrchestrator", "RunPhase"]

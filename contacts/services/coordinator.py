"""
Roster state coordinator.

Owns the fetch state machine, the sorted roster, the search query and the
current selection. All mutation happens through the methods below on a
single asyncio event loop, so no locking is needed; readers only ever get
immutable snapshots.

Transitions:
    Idle    -> Loading   refresh()/load() on mount
    Loading -> Success   roster fetched and installed
    Loading -> Loading   retryable failure, backoff then next attempt
    Loading -> Error     non-retryable failure or retry budget spent
    Error   -> Loading   retry()
    Success -> Loading   refresh(); the old roster stays readable meanwhile
"""

import asyncio
import logging
from typing import Awaitable, Callable, List, Optional, Tuple, Union

from contacts.config.settings import Settings, get_settings
from contacts.models.schemas import StudentRecord
from contacts.models.state import (
    Error,
    FetchFailure,
    FetchState,
    FetchSuccess,
    Idle,
    Loading,
    Success,
)
from contacts.services.backend_client import StudentAPIClient
from contacts.utils.roster import filter_roster, find_record, sort_roster

logger = logging.getLogger(__name__)

StateListener = Callable[[FetchState], None]
SleepFunc = Callable[[float], Awaitable[None]]


class RosterCoordinator:
    """Drives roster fetches, automatic retries and the derived search view."""

    def __init__(
        self,
        client: StudentAPIClient = None,
        settings: Settings = None,
        sleep: SleepFunc = None
    ):
        """Initialize coordinator.

        Args:
            client: Fetch client (default built from settings)
            settings: Retry budget and backoff source (default from environment)
            sleep: Coroutine used for backoff delays (default asyncio.sleep)
        """
        self._settings = settings or get_settings()
        self._client = client or StudentAPIClient()
        self._sleep = sleep or asyncio.sleep
        self._max_retries = self._settings.MAX_AUTO_RETRIES

        self._state: FetchState = Idle()
        self._roster: Tuple[StudentRecord, ...] = ()
        self._query = ""
        self._filtered: Tuple[StudentRecord, ...] = ()
        self._selected_id: Optional[Union[int, str]] = None
        self._detail: Optional[StudentRecord] = None
        self._attempts = 0

        # Bumped by every new cycle; results tagged with an older value are dropped
        self._generation = 0
        self._detail_generation = 0
        self._task: Optional[asyncio.Task] = None
        self._listeners: List[StateListener] = []

    # Read-only snapshots
    @property
    def state(self) -> FetchState:
        return self._state

    @property
    def roster(self) -> Tuple[StudentRecord, ...]:
        return self._roster

    @property
    def query(self) -> str:
        return self._query

    @property
    def filtered_view(self) -> Tuple[StudentRecord, ...]:
        return self._filtered

    @property
    def selected(self) -> Optional[StudentRecord]:
        """Currently selected record, looked up by id in the current roster."""
        if self._selected_id is None:
            return None
        return find_record(self._roster, self._selected_id)

    @property
    def detail(self) -> Optional[StudentRecord]:
        """Last record fetched through load_detail()."""
        return self._detail

    @property
    def attempts(self) -> int:
        """Requests made in the current fetch cycle."""
        return self._attempts

    @property
    def is_loading(self) -> bool:
        return isinstance(self._state, Loading)

    # Listeners
    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a callback invoked after every state transition.

        Returns:
            Function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _transition(self, state: FetchState) -> None:
        logger.debug(f"State {type(self._state).__name__} -> {type(state).__name__}")
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("State listener failed")

    # Fetch cycle
    async def load(self) -> FetchState:
        """Run one fetch cycle, retrying transient failures with backoff.

        Returns:
            The state after the cycle; for a superseded cycle this is whatever
            the newer cycle has produced so far.
        """
        self._generation += 1
        generation = self._generation
        self._attempts = 0
        self._transition(Loading(attempt=0))

        while True:
            result = await self._client.fetch_roster()
            if generation != self._generation:
                logger.debug("Discarding roster result from a superseded fetch")
                return self._state

            self._attempts += 1

            if isinstance(result, FetchSuccess):
                self._install(result.records)
                self._transition(Success(roster=self._roster))
                logger.info(f"Roster loaded: {len(self._roster)} students")
                return self._state

            if not self._should_retry(result):
                logger.error(
                    f"Roster fetch failed after {self._attempts} attempt(s): {result.reason}"
                )
                self._transition(Error.from_failure(result, attempts=self._attempts))
                return self._state

            delay = self._settings.backoff_delay_seconds(self._attempts - 1)
            logger.info(
                f"Roster fetch failed ({result.reason}); retrying in {delay:g}s "
                f"({self._attempts}/{self._max_retries})"
            )
            await self._sleep(delay)
            if generation != self._generation:
                logger.debug("Fetch superseded during backoff")
                return self._state
            self._transition(Loading(attempt=self._attempts))

    def _should_retry(self, failure: FetchFailure) -> bool:
        return failure.retryable and self._attempts <= self._max_retries

    def _install(self, records) -> None:
        self._roster = sort_roster(records)
        self._filtered = filter_roster(self._roster, self._query)
        self._selected_id = None
        self._detail = None

    def refresh(self) -> asyncio.Task:
        """Schedule a fetch cycle on the running loop.

        A cycle still pending is cancelled and replaced; its result, should
        it arrive anyway, is discarded.
        """
        if self._task is not None and not self._task.done():
            logger.info("Refresh requested while loading; replacing pending fetch")
            self._task.cancel()
        self._task = asyncio.get_running_loop().create_task(self.load())
        return self._task

    def retry(self) -> asyncio.Task:
        """Manual retry from the error state; resets the attempt counter."""
        if not isinstance(self._state, Error):
            logger.debug(f"Retry requested in {type(self._state).__name__}; treating as refresh")
        return self.refresh()

    # Search and selection
    def set_query(self, text: str) -> Tuple[StudentRecord, ...]:
        """Update the search query and recompute the filtered view."""
        self._query = text or ""
        self._filtered = filter_roster(self._roster, self._query)
        return self._filtered

    def select(self, record_id: Union[int, str]) -> None:
        """Select a record for detail viewing; unknown ids are ignored."""
        record = find_record(self._roster, record_id)
        if record is None:
            logger.debug(f"Ignoring selection of unknown student {record_id}")
            return
        self._selected_id = record.id

    def deselect(self) -> None:
        self._selected_id = None
        self._detail = None

    async def load_detail(self, record_id: Union[int, str]) -> Optional[StudentRecord]:
        """Fetch a single student for the detail view.

        Only the most recent request may set ``detail``.

        Returns:
            The fetched record, or None if unavailable or superseded
        """
        self._detail_generation += 1
        generation = self._detail_generation

        record = await self._client.fetch_record(record_id)
        if generation != self._detail_generation:
            logger.debug(f"Discarding superseded detail for student {record_id}")
            return None

        self._detail = record
        if record is None:
            logger.warning(f"Student {record_id} could not be loaded")
        return record

    async def aclose(self) -> None:
        """Cancel any pending fetch; its connection is closed with it."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                logger.debug("Pending fetch cancelled on close")

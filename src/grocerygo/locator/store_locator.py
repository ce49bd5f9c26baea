"""Nearby store search driven by location permission and position fixes."""
import asyncio
from typing import Callable, Dict, List, Optional, Sequence, Set, Tuple

from pydantic import BaseModel, ConfigDict

from grocerygo.config.settings import get_settings
from grocerygo.domain.types import Coordinate, PermissionStatus, SearchPhase, StoreResult
from grocerygo.utils.logger import get_logger
from .provider import LocationProvider, RawStoreResult

# Used as the map centre until the first position fix arrives
DEFAULT_MAP_CENTER = Coordinate(latitude=37.3349, longitude=-122.0090)


class LocatorState(BaseModel):
    """Immutable snapshot of everything a store finder screen shows."""
    model_config = ConfigDict(frozen=True)

    permission: PermissionStatus = PermissionStatus.NOT_DETERMINED
    user_location: Optional[Coordinate] = None
    map_center: Coordinate = DEFAULT_MAP_CENTER
    phase: SearchPhase = SearchPhase.IDLE
    results: Tuple[StoreResult, ...] = ()
    error_message: Optional[str] = None
    last_query: Optional[str] = None

    @property
    def permission_blocked(self) -> bool:
        return self.permission.is_blocked

    @property
    def is_searching(self) -> bool:
        return self.phase == SearchPhase.SEARCHING


StateListener = Callable[[LocatorState], None]


class StoreLocator:
    """State container for the store finder.

    All state changes happen on one asyncio event loop. Provider callbacks
    are handed over with ``call_soon_threadsafe``; ``search`` must be called
    from the loop itself.
    """

    def __init__(
        self,
        provider: LocationProvider,
        *,
        loop: Optional[asyncio.AbstractEventLoop] = None,
        default_query: Optional[str] = None,
        span_degrees: Optional[float] = None,
        map_center: Optional[Coordinate] = None
    ):
        settings = get_settings()
        self.provider = provider
        self.default_query = default_query or settings.DEFAULT_STORE_QUERY
        self.span_degrees = span_degrees or settings.SEARCH_SPAN_DEGREES
        self.logger = get_logger(self.__class__.__name__)

        self._loop = loop
        self._listeners: List[StateListener] = []
        self._tasks: Set[asyncio.Task] = set()
        self._sequence = 0
        self._has_searched = False
        self._updating = False
        self._state = LocatorState(
            permission=provider.authorization_status(),
            map_center=map_center or DEFAULT_MAP_CENTER,
        )

    # -- state container -------------------------------------------------

    @property
    def state(self) -> LocatorState:
        return self._state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Call ``listener`` with every new state; returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _update(self, **changes) -> None:
        self._state = self._state.model_copy(update=changes)
        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception:
                self.logger.exception("State listener failed")

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    # -- lifecycle --------------------------------------------------------

    def start(self) -> None:
        """Begin observing permission changes; resumes updates if already authorized."""
        self._get_loop()
        self.provider.watch_authorization(self._on_authorization_threadsafe)
        if self._state.permission.is_authorized:
            self._start_updates()

    def stop(self) -> None:
        """Stop position updates. Searches already running still complete."""
        if self._updating:
            self.provider.stop_position_updates()
            self._updating = False
            self.logger.debug("Stopped position updates")

    def request_permission(self) -> None:
        self.logger.info("Requesting location permission")
        self.provider.request_permission()

    def _start_updates(self) -> None:
        if self._updating:
            return
        self.provider.start_position_updates(
            self._on_fix_threadsafe,
            self._on_error_threadsafe
        )
        self._updating = True
        self.logger.debug("Started position updates")

    # -- provider events ---------------------------------------------------

    def _on_authorization_threadsafe(self, status: PermissionStatus) -> None:
        self._get_loop().call_soon_threadsafe(self.handle_authorization_change, status)

    def _on_fix_threadsafe(self, coordinate: Coordinate) -> None:
        self._get_loop().call_soon_threadsafe(self.handle_position_fix, coordinate)

    def _on_error_threadsafe(self, error: Exception) -> None:
        self._get_loop().call_soon_threadsafe(self.handle_location_error, error)

    def handle_authorization_change(self, status: PermissionStatus) -> None:
        """Apply a permission change reported by the platform."""
        status = PermissionStatus(status)
        previous = self._state.permission
        self._update(permission=status)
        self.logger.info(
            "Location permission changed",
            previous=previous.value,
            status=status.value
        )

        if status.is_authorized:
            self._start_updates()
        else:
            self.stop()

    def handle_position_fix(self, coordinate: Coordinate) -> None:
        """Keep the latest fix; the first one triggers the default search."""
        self._update(user_location=coordinate, map_center=coordinate)
        if not self._has_searched:
            self.logger.debug("First position fix, running default search", location=coordinate.key())
            self.search()

    def handle_location_error(self, error: Exception) -> None:
        self.logger.warning("Location error", error=str(error))
        self._update(error_message=f"Location error: {_describe(error)}")

    def set_map_center(self, coordinate: Coordinate) -> None:
        """Record where the user has panned the map."""
        self._update(map_center=coordinate)

    # -- search -----------------------------------------------------------

    def search(self, query: str = "") -> asyncio.Task:
        """
        Start a nearby-store search without waiting for it.

        Searches around the user's position, or the map centre when no
        position is known. Only the most recently started search may
        change the results.

        Args:
            query: Free text; empty searches for the default query

        Returns:
            The task running the search
        """
        loop = self._get_loop()
        text = (query or "").strip() or self.default_query
        center = self._state.user_location or self._state.map_center

        self._sequence += 1
        sequence = self._sequence
        self._has_searched = True
        self._update(phase=SearchPhase.SEARCHING, last_query=text)
        self.logger.info(
            "Searching for stores",
            query=text,
            center=center.key(),
            request=sequence
        )

        task = loop.create_task(self._run_search(sequence, text, center))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _run_search(self, sequence: int, query: str, center: Coordinate) -> None:
        try:
            raw_results = await self.provider.search(query, center, self.span_degrees)
            results = _dedupe(raw_results)
        except Exception as e:
            if sequence != self._sequence:
                self.logger.debug("Ignoring failure of superseded search", request=sequence)
                return
            self.logger.warning("Store search failed", query=query, error=str(e))
            self._update(
                phase=SearchPhase.ERROR,
                results=(),
                error_message=f"Failed to search for stores: {_describe(e)}"
            )
            return

        if sequence != self._sequence:
            self.logger.debug(
                "Discarding results of superseded search",
                request=sequence,
                latest=self._sequence
            )
            return

        self.logger.info("Store search finished", query=query, count=len(results))
        self._update(phase=SearchPhase.RESULTS, results=results, error_message=None)

    async def wait_for_searches(self) -> None:
        """Wait until every started search has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))


def _describe(error: Exception) -> str:
    return getattr(error, "reason", None) or str(error) or error.__class__.__name__


def _dedupe(raw_results: Sequence[RawStoreResult]) -> Tuple[StoreResult, ...]:
    seen: Dict[str, StoreResult] = {}
    for raw in raw_results:
        result = raw if isinstance(raw, StoreResult) else StoreResult.model_validate(raw)
        seen.setdefault(result.identity, result)
    return tuple(seen.values())

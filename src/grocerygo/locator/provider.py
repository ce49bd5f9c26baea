"""Location and map search collaborator interface."""
from typing import Callable, Protocol, Sequence, Union, Mapping, Any, runtime_checkable

from grocerygo.domain.types import Coordinate, PermissionStatus, StoreResult

PositionCallback = Callable[[Coordinate], None]
ErrorCallback = Callable[[Exception], None]
AuthorizationCallback = Callable[[PermissionStatus], None]
RawStoreResult = Union[StoreResult, Mapping[str, Any]]


class LocationSearchError(Exception):
    """Raised by a provider when a nearby search cannot be completed."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


@runtime_checkable
class LocationProvider(Protocol):
    """Platform location services plus the map search API.

    Callbacks may fire on any thread; the store locator moves them onto
    its own event loop before touching state.
    """

    def authorization_status(self) -> PermissionStatus:
        """Current location permission."""
        ...

    def watch_authorization(self, on_change: AuthorizationCallback) -> None:
        """Register the handler for every later permission change."""
        ...

    def request_permission(self) -> None:
        """Ask the user for location access; the answer arrives through ``watch_authorization``."""
        ...

    def start_position_updates(self, on_fix: PositionCallback, on_error: ErrorCallback) -> None:
        ...

    def stop_position_updates(self) -> None:
        ...

    async def search(
        self,
        query: str,
        center: Coordinate,
        span_degrees: float
    ) -> Sequence[RawStoreResult]:
        """Find places matching ``query`` in a square region around ``center``.

        Raises:
            Exception: Any failure; its message is shown to the user
        """
        ...

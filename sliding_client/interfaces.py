#
# This file is licensed under the Affero General Public License (AGPL) version 3.
#
# Copyright (C) 2025 New Vector, Ltd
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as
# published by the Free Software Foundation, either version 3 of the
# License, or (at your option) any later version.
#
# See the GNU Affero General Public License for more details:
# <https://www.gnu.org/licenses/agpl-3.0.html>.
#
#

"""Interfaces of the collaborators the client core talks to.

The transport (which does the actual HTTP long-polling and range negotiation), the
platform's view layer and the presentation helpers all live outside the core and are
only reached through these.
"""

from typing import TYPE_CHECKING, Any, Callable, Protocol, Sequence

from sliding_client.api.constants import LifecycleState
from sliding_client.types import JsonDict
from sliding_client.types.rest.client import ClientEvent

if TYPE_CHECKING:
    from sliding_client.handlers.visibility import VisibilityKey
    from sliding_client.types.handlers.room_list import RoomList


LifecycleListener = Callable[[LifecycleState, Any, Exception | None], None]
"""Called with `(state, response, error)` as a sync round progresses."""

RoomDataListener = Callable[[str, JsonDict, bool], None]
"""Called with `(room_id, room_payload, is_incremental)` for each room in a
response."""


class ISyncConnection(Protocol):
    def abort(self) -> None:
        """Interrupt any in-flight request so that it is resent straight away with
        the current ranges and filters.

        Must be safe to call when there is no request in flight, and must not wait
        for anything.
        """


class ISyncEngine(Protocol):
    def start(self, credential: str) -> None:
        """Begin the request loop, authenticating with `credential`."""

    def stop(self) -> None:
        """Stop the request loop. No listener may be called after this returns."""

    def add_lifecycle_listener(self, listener: LifecycleListener) -> None: ...

    def add_room_data_listener(self, listener: RoomDataListener) -> None: ...

    def set_room_subscription(self, room_id: str | None) -> None:
        """Explicitly track `room_id` (with its full state) from the next request."""


SyncEngineFactory = Callable[[Sequence["RoomList"], ISyncConnection], ISyncEngine]
"""Builds a fresh engine generation over the given lists and connection."""


class IViewport(Protocol):
    """Source of viewport membership changes.

    Once a slot is observed, the platform reports it entering or leaving the screen
    by calling `SlidingSyncHandler.on_intersection`.
    """

    def observe(self, key: "VisibilityKey") -> None: ...

    def unobserve(self, key: "VisibilityKey") -> None: ...


class IPresenter(Protocol):
    """Turns events into display strings. Must be free of side effects."""

    def text_for_event(self, event: ClientEvent) -> str: ...

    def format_timestamp(self, ts_ms: int | None) -> str: ...


class IDiagnosticsSink(Protocol):
    def visualise(self, lists: Sequence["RoomList"], response: Any) -> None:
        """Receives every list and the latest response after each round."""

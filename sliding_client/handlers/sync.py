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

import logging
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from sliding_client.api.constants import LifecycleState
from sliding_client.api.errors import MalformedRoomUpdateError, UnknownListError
from sliding_client.handlers.visibility import VisibilityKey
from sliding_client.interfaces import ISyncEngine
from sliding_client.types import JsonDict
from sliding_client.types.rest.client import RoomUpdate

if TYPE_CHECKING:
    from sliding_client.server import SlidingSyncClient

logger = logging.getLogger(__name__)


def parse_room_update(room_id: str, payload: JsonDict) -> RoomUpdate:
    """Validate one room's payload from a sync response.

    The room ID defaults to the one the payload was delivered under.

    Raises:
        MalformedRoomUpdateError: if the payload is not a valid room update.
    """
    if not isinstance(payload, dict):
        raise MalformedRoomUpdateError(room_id, "payload is not an object")
    if payload.get("room_id") is None and room_id:
        payload = {**payload, "room_id": room_id}
    try:
        return RoomUpdate.model_validate(payload)
    except ValidationError as e:
        raise MalformedRoomUpdateError(room_id, str(e)) from e


class SlidingSyncHandler:
    """Drives the client core from the events of the outside world: sync engine
    callbacks, viewport changes, clicks and filter input.

    Only one engine generation is live at a time. Starting a new loop stops the old
    engine first, and anything the old generation still delivers is dropped.
    """

    def __init__(self, hs: "SlidingSyncClient"):
        self.lists = hs.get_room_lists()
        self.connection = hs.get_connection()
        self.store = hs.get_room_store()
        self.visibility_tracker = hs.get_visibility_tracker()
        self.interest_debouncer = hs.get_interest_debouncer()
        self.reconciler = hs.get_list_view_reconciler()
        self.consistency_checker = hs.get_consistency_checker()
        self.room_view = hs.get_room_timeline_view()
        self.diagnostics = hs.get_diagnostics_sink()
        self._engine_factory = hs.get_sync_engine_factory()

        self._engine: ISyncEngine | None = None
        self._generation = 0

        self.room_subscription: str | None = None
        self.last_error: str | None = None

        self.reconciler.set_click_handler(self.select_room)

    @property
    def is_running(self) -> bool:
        return self._engine is not None

    def start(self, credential: str) -> None:
        """Start a new sync loop, retiring the current one if there is one."""
        if self._engine is not None:
            logger.info("Terminating old loop")
            self._retire_engine()

        logger.info("Starting sync loop")
        self._generation += 1
        generation = self._generation

        engine = self._engine_factory(self.lists, self.connection)
        engine.add_lifecycle_listener(
            lambda state, response, error: self._on_lifecycle(
                generation, state, response, error
            )
        )
        engine.add_room_data_listener(
            lambda room_id, payload, is_incremental: self._on_room_data(
                generation, room_id, payload, is_incremental
            )
        )
        if self.room_subscription is not None:
            engine.set_room_subscription(self.room_subscription)
        self._engine = engine
        engine.start(credential)

    def stop(self) -> None:
        """Stop the sync loop and drop any pending range update."""
        if self._engine is not None:
            self._retire_engine()
        self.interest_debouncer.cancel()

    def _retire_engine(self) -> None:
        assert self._engine is not None
        # Bump the generation first so that nothing the old engine delivers while
        # stopping is acted upon.
        self._generation += 1
        engine = self._engine
        self._engine = None
        engine.stop()

    def on_intersection(self, key: VisibilityKey, is_visible: bool) -> None:
        """Called by the viewport when an observed slot enters or leaves the screen."""
        self.visibility_tracker.on_intersection(key, is_visible)
        self.interest_debouncer.on_visibility_changed()

    def select_room(self, key: VisibilityKey) -> None:
        """Open the room shown in slot `key`, subscribing to it."""
        room_id = None
        if 0 <= key.list_index < len(self.lists):
            room_list = self.lists[key.list_index]
            room_id = room_list.room_index_to_room_id.get(key.room_index)
        if room_id is None:
            logger.warning("failed to find room for click on %s", key.to_string())
            return

        self.room_subscription = room_id
        if self._engine is not None:
            self._engine.set_room_subscription(room_id)

        self.room_view.subscribed_room_id = room_id
        self.room_view.render(room_id, refresh=True)

        # Re-render the lists to move the selection highlight.
        self.reconciler.selected_room_id = room_id
        self.reconciler.reconcile_all()

        # interrupt the sync to get extra state events
        self.connection.abort()

    def set_room_name_filter(self, room_name_like: str | None) -> None:
        """Filter every list by room name. An empty string or None clears it."""
        for room_list in self.lists:
            filters = room_list.get_filters()
            room_list.set_filters(
                filters.model_copy(update={"room_name_like": room_name_like or None})
            )

        # interrupt the sync request to send up new filters
        self.connection.abort()

    def _on_lifecycle(
        self,
        generation: int,
        state: LifecycleState,
        response: Any,
        error: Exception | None,
    ) -> None:
        if generation != self._generation:
            logger.debug("Ignoring %s from retired sync loop", state)
            return

        if state == LifecycleState.SYNC_COMPLETE:
            self._on_sync_complete(response)
        elif state == LifecycleState.REQUEST_FINISHED:
            if error is not None:
                logger.error("/sync failed: %s", error)
                self.last_error = str(error)
            else:
                self.last_error = None

    def _on_sync_complete(self, response: Any) -> None:
        self.reconciler.reconcile_all()

        # check for duplicates and rooms outside tracked ranges which should never
        # happen but can if there's a bug
        for list_index, room_list in enumerate(self.lists):
            self.consistency_checker.audit(room_list, list_index)

        if self.diagnostics is not None:
            self.diagnostics.visualise(self.lists, response)

    def _on_room_data(
        self,
        generation: int,
        room_id: str,
        payload: JsonDict,
        is_incremental: bool,
    ) -> None:
        if generation != self._generation:
            logger.debug("Ignoring data for %s from retired sync loop", room_id)
            return

        try:
            update = parse_room_update(room_id, payload)
        except MalformedRoomUpdateError as e:
            logger.warning("Dropping room data: %s", e)
            return

        # A room we already know about is always merged into, even if the engine
        # did not flag the payload as incremental.
        is_incremental = is_incremental or self.store.has_room(update.room_id)
        self.store.merge(update, is_incremental)
        self.room_view.render(update.room_id)

    def reconcile(self, list_index: int) -> None:
        """Re-render one list, e.g. after the platform recreated its view."""
        try:
            self.reconciler.reconcile(list_index)
        except UnknownListError as e:
            logger.error("reconcile(): cannot render list: %s", e)

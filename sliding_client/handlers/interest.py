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
from typing import TYPE_CHECKING

from sliding_client.util.clock import DelayedCallWrapper

if TYPE_CHECKING:
    from sliding_client.server import SlidingSyncClient

logger = logging.getLogger(__name__)


class InterestDebouncer:
    """Coalesces bursts of visibility changes into a single range update.

    Every change (re)starts a quiescence timer. Only when the timer runs out without
    being restarted are the windows recomputed, stored on the lists, and the
    connection interrupted so that the new ranges go up straight away. Fast scrolling
    therefore costs at most one interrupted request per quiescence period.
    """

    def __init__(self, hs: "SlidingSyncClient"):
        self.clock = hs.get_clock()
        self.lists = hs.get_room_lists()
        self.connection = hs.get_connection()
        self.visibility_tracker = hs.get_visibility_tracker()
        self.range_computer = hs.get_range_computer()
        self._debounce_secs = hs.config.sliding_sync.debounce_ms / 1000.0

        self._pending_call: DelayedCallWrapper | None = None
        # Bumped every time the timer is (re)started, so that a firing belonging to a
        # cancelled timer can tell it is stale.
        self._generation = 0

    def on_visibility_changed(self) -> None:
        """Note that the set of visible slots changed, and restart the timer."""
        self.cancel()
        self._generation += 1
        self._pending_call = self.clock.call_later(
            self._debounce_secs, self._on_quiescent, self._generation
        )

    def has_pending(self) -> bool:
        return self._pending_call is not None

    def cancel(self) -> None:
        """Drop any pending range update."""
        if self._pending_call is None:
            return
        if self._pending_call.active():
            self.clock.cancel_call_later(self._pending_call)
        self._pending_call = None

    def _on_quiescent(self, generation: int) -> None:
        if generation != self._generation:
            logger.debug("Ignoring stale debounce timer %d", generation)
            return
        self._pending_call = None

        ranges = self.range_computer.compute_ranges(
            self.visibility_tracker.visible_keys(), self.lists
        )
        self.range_computer.apply_ranges(ranges, self.lists)
        logger.debug("Committed ranges %s, interrupting the connection", ranges)

        # interrupt the sync connection to send up new ranges
        self.connection.abort()

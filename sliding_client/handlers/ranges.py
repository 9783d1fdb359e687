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
from typing import Iterable, Mapping, Sequence

from sliding_client.api.constants import DEFAULT_BUFFER_RANGE, STATIC_RANGE_END
from sliding_client.handlers.visibility import VisibilityKey
from sliding_client.types import Range
from sliding_client.types.handlers.room_list import RoomList

logger = logging.getLogger(__name__)


class RangeComputer:
    """Turns the set of on-screen slots into the window each list should request.

    Args:
        buffer_range: How many positions to request either side of what is visible.
        static_range_end: The end (exclusive) of the prefix every list always
            requests. Windows are never emitted inside it.
    """

    def __init__(
        self,
        buffer_range: int = DEFAULT_BUFFER_RANGE,
        static_range_end: int = STATIC_RANGE_END,
    ):
        self._buffer_range = buffer_range
        self._static_range_end = static_range_end

    def compute_ranges(
        self, visible: Iterable[VisibilityKey], lists: Sequence[RoomList]
    ) -> dict[int, Range]:
        """Compute the dynamic window of every list with something on screen.

        For each list, the lowest and highest visible positions are widened by the
        buffer and clamped to the list. Lists whose window would end inside the
        static prefix get no window, and windows never start inside it.

        Returns:
            Mapping from list index to the inclusive `(start, end)` window.
        """
        bounds: dict[int, tuple[int, int]] = {}
        for key in visible:
            lowest, highest = bounds.get(
                key.list_index, (key.room_index, key.room_index)
            )
            bounds[key.list_index] = (
                min(lowest, key.room_index),
                max(highest, key.room_index),
            )

        logger.debug("Intersection indexes: %s", bounds)

        ranges: dict[int, Range] = {}
        for list_index, (lowest, highest) in sorted(bounds.items()):
            if not 0 <= list_index < len(lists):
                logger.warning("Ignoring visible slots of unknown list %d", list_index)
                continue

            joined_count = lists[list_index].joined_count
            start = max(lowest - self._buffer_range, 0)
            end = min(highest + self._buffer_range, joined_count - 1)

            # The static prefix is always requested, so there is no need for a window.
            if end <= self._static_range_end:
                continue
            start = max(start, self._static_range_end)

            if start > end:
                # Only possible if the visible slots are beyond the end of the list,
                # i.e. the list shrank under us.
                logger.debug(
                    "list %d: visible slots %d-%d are past the end of the list",
                    list_index,
                    lowest,
                    highest,
                )
                continue

            ranges[list_index] = (start, end)

        return ranges

    def apply_ranges(
        self, ranges: Mapping[int, Range], lists: Sequence[RoomList]
    ) -> None:
        """Store each computed window as the dynamic range of its list."""
        for list_index, new_range in ranges.items():
            lists[list_index].set_dynamic_range(new_range)

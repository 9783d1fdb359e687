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

import attr

from sliding_client.api.constants import STATIC_RANGE_END, ActiveRangeSlot
from sliding_client.types import Range
from sliding_client.types.rest.client import ListFilters

logger = logging.getLogger(__name__)


def _default_active_ranges() -> list[Range]:
    return [(0, STATIC_RANGE_END - 1)]


@attr.s(slots=True, auto_attribs=True)
class RoomList:
    """One filtered, ordered view over the rooms of the account, e.g. "Direct
    Messages".

    The sync engine keeps `joined_count` and `room_index_to_room_id` up to date from
    the server's responses; the client decides `active_ranges` and the filters.

    Attributes:
        name: The display name of the list.
        joined_count: The total number of rooms matching the filters, as reported by
            the server. May exceed the number of positions we know a room for.
        room_index_to_room_id: Sparse mapping from position to room ID. Positions
            without an entry are shown as placeholders.
        active_ranges: The inclusive ranges the client is interested in. The first
            entry is the always-loaded prefix, the second (if any) is the window
            computed from what is on screen.
    """

    name: str
    _filters: ListFilters = attr.ib(factory=ListFilters)
    joined_count: int = 0
    room_index_to_room_id: dict[int, str] = attr.ib(factory=dict)
    active_ranges: list[Range] = attr.ib(factory=_default_active_ranges)
    _filters_changed: bool = attr.ib(default=False, init=False)

    def get_filters(self) -> ListFilters:
        return self._filters

    def set_filters(self, filters: ListFilters) -> None:
        """Replace the filters. The change is sent up on the next request."""
        if filters == self._filters:
            return
        logger.debug("list %r: filters changed to %s", self.name, filters)
        self._filters = filters
        self._filters_changed = True

    def take_filters_changed(self) -> bool:
        """Returns whether the filters changed since the last call, and resets the
        flag. Used by the sync engine to decide whether to resend the filters."""
        changed = self._filters_changed
        self._filters_changed = False
        return changed

    @property
    def dynamic_range(self) -> Range | None:
        if len(self.active_ranges) > ActiveRangeSlot.DYNAMIC:
            return self.active_ranges[ActiveRangeSlot.DYNAMIC]
        return None

    def set_dynamic_range(self, new_range: Range) -> None:
        """Replace the window computed from the viewport. There is only ever one."""
        if len(self.active_ranges) > ActiveRangeSlot.DYNAMIC:
            self.active_ranges[ActiveRangeSlot.DYNAMIC] = new_range
        else:
            self.active_ranges.append(new_range)

    def is_tracked(self, index: int) -> bool:
        """Whether `index` falls inside one of the active ranges."""
        return any(start <= index <= end for start, end in self.active_ranges)

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

logger = logging.getLogger(__name__)

_KEY_PREFIX = "room-"


@attr.s(slots=True, frozen=True, auto_attribs=True, order=True)
class VisibilityKey:
    """Identifies a slot of a room list view: position `room_index` of list
    `list_index`."""

    list_index: int
    room_index: int

    def to_string(self) -> str:
        return "%s%d-%d" % (_KEY_PREFIX, self.list_index, self.room_index)

    @classmethod
    def from_string(cls, s: str) -> "VisibilityKey":
        """Parse a key of the form `room-<list index>-<room index>`.

        Raises:
            ValueError: if `s` is not such a key.
        """
        if not s.startswith(_KEY_PREFIX):
            raise ValueError("Invalid visibility key %r" % (s,))
        list_index, sep, room_index = s[len(_KEY_PREFIX) :].partition("-")
        if not sep:
            raise ValueError("Invalid visibility key %r" % (s,))
        return cls(int(list_index), int(room_index))


class VisibilityTracker:
    """Tracks which room list slots are currently on screen."""

    def __init__(self) -> None:
        self._visible: set[VisibilityKey] = set()

    def on_intersection(self, key: VisibilityKey, is_visible: bool) -> None:
        if is_visible:
            self._visible.add(key)
        else:
            self._visible.discard(key)

    def forget(self, key: VisibilityKey) -> None:
        """Drop `key`, whose slot no longer exists."""
        self._visible.discard(key)

    def is_visible(self, key: VisibilityKey) -> bool:
        return key in self._visible

    def visible_keys(self) -> frozenset[VisibilityKey]:
        return frozenset(self._visible)

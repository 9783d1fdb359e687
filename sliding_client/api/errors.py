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

"""Contains exceptions and error codes."""


class SlidingSyncClientError(Exception):
    """Base class for errors raised by the client core."""


class MalformedRoomUpdateError(SlidingSyncClientError):
    """A room payload could not be turned into a room update.

    Args:
        room_id: The room the payload was delivered for, if known.
        msg: What was wrong with it.
    """

    def __init__(self, room_id: str | None, msg: str):
        super().__init__("Malformed update for room %s: %s" % (room_id, msg))
        self.room_id = room_id
        self.msg = msg


class UnknownListError(SlidingSyncClientError):
    """An operation referred to a list index that has not been configured."""

    def __init__(self, list_index: int):
        super().__init__("No room list at index %d" % (list_index,))
        self.list_index = list_index

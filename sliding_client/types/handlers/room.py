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

import attr

from sliding_client.types.rest.client import ClientEvent


@attr.s(slots=True, frozen=True, auto_attribs=True)
class Room:
    """What the client knows about a room, accumulated over every update it has
    received for it.

    Records are immutable: the `RoomStore` replaces a room's record each time it
    merges an update into it.

    Attributes:
        room_id: The ID of the room. Never changes.
        name: Room name or calculated room name, if we have been told one.
        avatar: The `mxc://` URI of the room avatar.
        topic: The room topic.
        obsolete: Set to the tombstone reason once the room has been replaced.
            Never cleared.
        highlight_count: The number of unread notifications with the highlight flag
            set.
        notification_count: The total number of unread notifications.
        timeline: Every timeline event received for the room, oldest first.
    """

    room_id: str
    name: str | None = None
    avatar: str | None = None
    topic: str | None = None
    obsolete: str | None = None
    highlight_count: int = 0
    notification_count: int = 0
    timeline: tuple[ClientEvent, ...] = ()

    @property
    def display_name(self) -> str:
        return self.name or self.room_id

    @property
    def latest_event(self) -> ClientEvent | None:
        if self.timeline:
            return self.timeline[-1]
        return None

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
from typing import Any, Iterable

import attr

from sliding_client.api.constants import DEFAULT_TOMBSTONE_REASON, EventTypes
from sliding_client.types.handlers.room import Room
from sliding_client.types.rest.client import ClientEvent

logger = logging.getLogger(__name__)

_PROJECTED_TYPES = frozenset(
    (EventTypes.RoomAvatar, EventTypes.Topic, EventTypes.Tombstone)
)


def _string_or_none(value: Any) -> str | None:
    if isinstance(value, str):
        return value
    return None


class ViewModelProjector:
    """Derives the display fields of a room (avatar, topic, obsolete marker) from a
    batch of current state events."""

    def project(self, room: Room, required_state: Iterable[ClientEvent]) -> Room:
        """Returns `room` with the avatar, topic and obsolete reason taken from
        `required_state`.

        The batch holds the current value of each state type, so the last event of a
        type wins. Types missing from the batch, and avatar or topic events
        without a string value, leave the room's existing value alone. A
        tombstone is terminal: nothing here ever clears `obsolete`.
        """
        latest: dict[str, ClientEvent] = {}
        for event in required_state:
            if event.type in _PROJECTED_TYPES:
                latest[event.type] = event

        if not latest:
            return room

        changes: dict[str, str] = {}

        avatar_event = latest.get(EventTypes.RoomAvatar)
        if avatar_event is not None:
            avatar = _string_or_none(avatar_event.content.get("url"))
            if avatar is not None:
                changes["avatar"] = avatar

        topic_event = latest.get(EventTypes.Topic)
        if topic_event is not None:
            topic = _string_or_none(topic_event.content.get("topic"))
            if topic is not None:
                changes["topic"] = topic

        tombstone_event = latest.get(EventTypes.Tombstone)
        if tombstone_event is not None:
            reason = _string_or_none(tombstone_event.content.get("body"))
            changes["obsolete"] = reason or DEFAULT_TOMBSTONE_REASON
            if room.obsolete is None:
                logger.info("Room %s has been tombstoned", room.room_id)

        return attr.evolve(room, **changes)

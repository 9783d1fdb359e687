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
from typing import Iterator

import attr

from sliding_client.handlers.projector import ViewModelProjector
from sliding_client.types.handlers.room import Room
from sliding_client.types.rest.client import RoomUpdate

logger = logging.getLogger(__name__)

# Scalar fields which an incremental update only overwrites when it carries them.
_SCALAR_FIELDS = ("name", "highlight_count", "notification_count")


class RoomStore:
    """In-memory store of every room the client has seen this session.

    This is the single owner of room state: `merge` is the only way to change it,
    and callers only ever get immutable `Room` records back.

    Rooms are never evicted. The store grows with the number of distinct rooms seen
    and with their timelines.
    """

    def __init__(self, projector: ViewModelProjector):
        self._projector = projector
        self._rooms: dict[str, Room] = {}

    def __len__(self) -> int:
        return len(self._rooms)

    def __contains__(self, room_id: object) -> bool:
        return room_id in self._rooms

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._rooms))

    def has_room(self, room_id: str) -> bool:
        return room_id in self._rooms

    def get_room(self, room_id: str) -> Room | None:
        return self._rooms.get(room_id)

    def merge(self, update: RoomUpdate, is_incremental: bool) -> Room:
        """Fold a room update into the stored state of its room.

        If `is_incremental` is set and we already know the room, only the fields the
        update carries are changed and its timeline events are appended after the
        ones we have. Otherwise the update replaces what we know about the room,
        except that a room once marked obsolete stays obsolete.

        In both cases the avatar, topic and obsolete marker are then re-derived from
        `update.required_state`, if given.

        Args:
            update: The room payload, as delivered by the sync engine.
            is_incremental: Whether `update` only describes what changed.

        Returns:
            The new record for the room.
        """
        existing = self._rooms.get(update.room_id)

        if is_incremental and existing is not None:
            changes: dict[str, object] = {
                field: getattr(update, field)
                for field in _SCALAR_FIELDS
                if update.is_set(field)
            }
            if update.timeline:
                changes["timeline"] = existing.timeline + tuple(update.timeline)
            room = attr.evolve(existing, **changes)
        else:
            room = Room(
                room_id=update.room_id,
                name=update.name,
                obsolete=existing.obsolete if existing is not None else None,
                highlight_count=update.highlight_count or 0,
                notification_count=update.notification_count or 0,
                timeline=tuple(update.timeline or ()),
            )
            if existing is not None:
                logger.debug("Replacing state of room %s", update.room_id)

        if update.required_state:
            room = self._projector.project(room, update.required_state)

        self._rooms[room.room_id] = room
        logger.debug(
            "Merged %s update for room %s (%d timeline events)",
            "incremental" if is_incremental else "full",
            room.room_id,
            len(room.timeline),
        )
        return room

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
from typing import Mapping

import attr

from sliding_client.types.handlers.room_list import RoomList

logger = logging.getLogger(__name__)


@attr.s(slots=True, frozen=True, auto_attribs=True)
class AuditResult:
    """
    Attributes:
        duplicates: Room IDs which occupy more than one position, mapped to all the
            positions they occupy (ascending).
        out_of_range: Occupied positions which fall outside every active range
            (ascending).
    """

    duplicates: Mapping[str, tuple[int, ...]]
    out_of_range: tuple[int, ...]

    def __bool__(self) -> bool:
        """Whether anything was found."""
        return bool(self.duplicates or self.out_of_range)


class ConsistencyChecker:
    """Checks the position to room mapping of a list after each sync round.

    Neither a room sitting at two positions nor a room tracked outside the active
    ranges should ever happen, but can if the server or the client has a bug. They
    are only reported: fixing them up here would hide the bug.
    """

    def audit(self, room_list: RoomList, list_index: int | None = None) -> AuditResult:
        room_id_to_positions: dict[str, list[int]] = {}
        out_of_range: list[int] = []

        for index, room_id in sorted(room_list.room_index_to_room_id.items()):
            if not room_id:
                continue
            room_id_to_positions.setdefault(room_id, []).append(index)
            if not room_list.is_tracked(index):
                out_of_range.append(index)

        duplicates = {
            room_id: tuple(positions)
            for room_id, positions in room_id_to_positions.items()
            if len(positions) > 1
        }

        label = room_list.name if list_index is None else list_index
        for room_id, positions in duplicates.items():
            logger.warning(
                "%s in list %s has duplicate indexes: %s", room_id, label, positions
            )
        if out_of_range:
            logger.warning(
                "list %s tracking indexes outside of tracked ranges: %s",
                label,
                out_of_range,
            )

        return AuditResult(duplicates=duplicates, out_of_range=tuple(out_of_range))

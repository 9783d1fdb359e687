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
from typing import Any

from pydantic import Field, StrictBool, StrictInt, StrictStr, StringConstraints
from typing_extensions import Annotated

from sliding_client.types.rest import SyncBodyModel

NonEmptyStr = Annotated[str, StringConstraints(min_length=1, strict=True)]
NonNegativeInt = Annotated[int, Field(ge=0, strict=True)]


class ClientEvent(SyncBodyModel):
    """An event as found in the `timeline` or `required_state` of a room.

    Only the keys the client looks at are modelled. State events carry a
    `state_key`; timeline events may or may not.
    """

    type: StrictStr
    content: dict[str, Any] = Field(default_factory=dict)
    sender: StrictStr | None = None
    event_id: StrictStr | None = None
    origin_server_ts: StrictInt | None = None
    state_key: StrictStr | None = None


class RoomUpdate(SyncBodyModel):
    """One room's entry in a sliding sync response, full or partial.

    Every field other than `room_id` may be omitted. Use `is_set` to tell "not sent"
    from "sent": an omitted field leaves whatever the client already knows untouched.

    Attributes:
        room_id: The room this update is for.
        name: Room name or calculated room name.
        highlight_count: The number of unread notifications for this room with the
            highlight flag set.
        notification_count: The total number of unread notifications for this room.
        timeline: New events in the room, oldest first.
        required_state: The current value of the requested state events. Only ever
            the latest value per type, never history.
    """

    room_id: NonEmptyStr
    name: StrictStr | None = None
    highlight_count: NonNegativeInt | None = None
    notification_count: NonNegativeInt | None = None
    timeline: list[ClientEvent] | None = None
    required_state: list[ClientEvent] | None = None


class ListFilters(SyncBodyModel):
    """
    Filters applied to a sliding window list before sorting.

    All fields are applied with AND operators, hence if `is_dm: True` and
    `is_encrypted: True` then only Encrypted DM rooms will be returned. The
    absence of fields implies no filter on that criteria: it does NOT imply
    `False`.

    Attributes:
        is_dm: Flag which only returns rooms present (or not) in the DM section
            of account data. If unset, both DM rooms and non-DM rooms are returned.
        spaces: Only return rooms which are children of one of the given spaces.
        is_encrypted: Flag which only returns rooms which have an
            `m.room.encryption` state event.
        is_invite: Flag which only returns rooms the user is currently invited
            to.
        room_types: If specified, only rooms where the `m.room.create` event has
            a `type` matching one of the strings in this array will be returned.
        not_room_types: Same as `room_types` but inverted.
        room_name_like: Filter the room name. Case-insensitive partial matching
            e.g 'foo' matches 'abFooab'.
        tags: Filter the room based on its room tags (OR'd).
        not_tags: Exclude rooms with any of these tags. Takes priority over `tags`.
    """

    is_dm: StrictBool | None = None
    spaces: list[StrictStr] | None = None
    is_encrypted: StrictBool | None = None
    is_invite: StrictBool | None = None
    room_types: list[StrictStr | None] | None = None
    not_room_types: list[StrictStr | None] | None = None
    room_name_like: StrictStr | None = None
    tags: list[StrictStr] | None = None
    not_tags: list[StrictStr] | None = None

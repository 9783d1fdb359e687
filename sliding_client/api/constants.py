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

"""Contains constants used throughout the client core."""

import enum
from typing import Final

# Exclusive end of the always-loaded prefix. `[0, STATIC_RANGE_END)` is requested on
# every list, so the dynamic window never needs to cover it.
STATIC_RANGE_END: Final = 20

# Number of positions either side of the visible rows to ask for.
DEFAULT_BUFFER_RANGE: Final = 5

# How long visibility must be stable before the new ranges are sent up.
DEFAULT_DEBOUNCE_MS: Final = 100

# The value used for `obsolete` when a tombstone carries no `body`.
DEFAULT_TOMBSTONE_REASON: Final = "m.room.tombstone"


class ActiveRangeSlot:
    """Indexes into `RoomList.active_ranges`."""

    STATIC: Final = 0
    DYNAMIC: Final = 1


class EventTypes:
    Member: Final = "m.room.member"
    Create: Final = "m.room.create"
    Tombstone: Final = "m.room.tombstone"
    JoinRules: Final = "m.room.join_rules"
    PowerLevels: Final = "m.room.power_levels"
    Redaction: Final = "m.room.redaction"

    CanonicalAlias: Final = "m.room.canonical_alias"
    Encrypted: Final = "m.room.encrypted"
    RoomAvatar: Final = "m.room.avatar"
    RoomEncryption: Final = "m.room.encryption"

    Message: Final = "m.room.message"
    Topic: Final = "m.room.topic"
    Name: Final = "m.room.name"

    Reaction: Final = "m.reaction"
    Sticker: Final = "m.sticker"


class Membership:
    """Represents the membership states of a user in a room."""

    INVITE: Final = "invite"
    JOIN: Final = "join"
    KNOCK: Final = "knock"
    LEAVE: Final = "leave"
    BAN: Final = "ban"
    LIST: Final = frozenset((INVITE, JOIN, KNOCK, LEAVE, BAN))


class LifecycleState(enum.Enum):
    """The lifecycle notifications a sync engine delivers to its listeners.

    Attributes:
        SYNC_COMPLETE: A full request/response round has been processed and every
            room payload of that round has been delivered.
        REQUEST_FINISHED: The HTTP request of a round finished, successfully or not.
            The listener receives the error if it failed.
    """

    SYNC_COMPLETE = "sync_complete"
    REQUEST_FINISHED = "request_finished"


class UnreadBadgeClass:
    """Styling classes for the unread count badge of a room list entry."""

    HIGHLIGHT: Final = "unreadcounthighlight"
    NOTIFY: Final = "unreadcountnotify"

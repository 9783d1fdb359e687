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

"""Default presentation helpers: display text for events, timestamps and avatar
URLs."""

import datetime
import logging
from typing import TYPE_CHECKING, Final

from sliding_client.api.constants import EventTypes, Membership
from sliding_client.types.rest.client import ClientEvent

if TYPE_CHECKING:
    from sliding_client.config.media import MediaConfig

logger = logging.getLogger(__name__)

MXC_PREFIX: Final = "mxc://"

_MEMBERSHIP_PHRASES: Final = {
    Membership.JOIN: "joined the room",
    Membership.LEAVE: "left the room",
    Membership.INVITE: "was invited",
    Membership.KNOCK: "asked to join",
    Membership.BAN: "was banned",
}


def _str_or_empty(value: object) -> str:
    return value if isinstance(value, str) else ""


class DefaultPresenter:
    """Renders events as one line of plain text.

    Args:
        tz: The time zone timestamps are shown in. Defaults to the local one.
    """

    def __init__(self, tz: datetime.tzinfo | None = None):
        self._tz = tz

    def text_for_event(self, event: ClientEvent) -> str:
        content = event.content
        sender = event.sender or ""

        if event.type in (EventTypes.Message, EventTypes.Sticker):
            return _str_or_empty(content.get("body"))

        if event.type == EventTypes.Member:
            target = (
                _str_or_empty(content.get("displayname"))
                or event.state_key
                or sender
            )
            phrase = _MEMBERSHIP_PHRASES.get(
                _str_or_empty(content.get("membership")), "changed their membership"
            )
            return "%s %s" % (target, phrase)

        if event.type == EventTypes.Name:
            return "%s changed the room name to %s" % (
                sender,
                _str_or_empty(content.get("name")),
            )
        if event.type == EventTypes.Topic:
            return "%s changed the topic to %s" % (
                sender,
                _str_or_empty(content.get("topic")),
            )
        if event.type == EventTypes.Tombstone:
            return "%s upgraded this room" % (sender,)
        if event.type == EventTypes.Encrypted:
            return "Encrypted message"

        return "%s event" % (event.type,)

    def format_timestamp(self, ts_ms: int | None) -> str:
        if ts_ms is None:
            return ""
        try:
            when = datetime.datetime.fromtimestamp(ts_ms / 1000, tz=self._tz)
        except (ValueError, OverflowError, OSError) as e:
            logger.warning("Cannot format timestamp %r: %s", ts_ms, e)
            return ""
        return when.strftime("%H:%M")


class MediaUrlBuilder:
    """Builds thumbnail URLs for `mxc://` avatars."""

    def __init__(self, config: "MediaConfig"):
        self._base_url = config.thumbnail_base_url.rstrip("/")
        self._size = config.thumbnail_size
        self._method = config.thumbnail_method
        self.placeholder_avatar = config.placeholder_avatar

    def thumbnail_url(self, mxc: str) -> str | None:
        """Returns the thumbnail URL for `mxc`, or None if it has no media path."""
        if not mxc.startswith(MXC_PREFIX):
            logger.debug("Not an mxc URI: %r", mxc)
            return None
        path = mxc[len(MXC_PREFIX) :]
        if not path:
            return None
        return "%s/%s?width=%d&height=%d&method=%s" % (
            self._base_url,
            path,
            self._size,
            self._size,
            self._method,
        )

    def avatar_url(self, mxc: str | None) -> str:
        """Returns the URL to show for an avatar, falling back to the placeholder."""
        if mxc:
            url = self.thumbnail_url(mxc)
            if url:
                return url
        return self.placeholder_avatar

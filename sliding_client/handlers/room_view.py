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
from typing import TYPE_CHECKING

import attr

from sliding_client.types.rest.client import ClientEvent

if TYPE_CHECKING:
    from sliding_client.server import SlidingSyncClient

logger = logging.getLogger(__name__)


@attr.s(slots=True, frozen=True, auto_attribs=True)
class RenderedMessage:
    event_id: str | None
    sender: str
    text: str
    timestamp: str


class RoomTimelineView:
    """The open room: its header and the messages rendered so far.

    Only the room the sync engine is subscribed to is ever rendered here.
    """

    def __init__(self, hs: "SlidingSyncClient"):
        self.store = hs.get_room_store()
        self.presenter = hs.get_presenter()
        self.media_urls = hs.get_media_url_builder()

        self.subscribed_room_id: str | None = None

        self.name = ""
        self.avatar_url = self.media_urls.placeholder_avatar
        self.topic = ""
        self.messages: list[RenderedMessage] = []
        self._rendered_event_ids: set[str] = set()
        # How much of the (append only) timeline has been looked at.
        self._timeline_position = 0

    def clear(self) -> None:
        self.name = ""
        self.messages = []
        self._rendered_event_ids = set()
        self._timeline_position = 0

    def render(self, room_id: str, refresh: bool = False) -> None:
        """Bring the view up to date with the store.

        Args:
            room_id: The room that changed. Nothing happens unless it is the
                subscribed room.
            refresh: Wipe the rendered messages first, e.g. because a different room
                was opened.
        """
        if room_id != self.subscribed_room_id:
            return

        if refresh:
            self.clear()

        room = self.store.get_room(room_id)
        if room is None:
            logger.error("render: unknown active room ID %s", room_id)
            return

        self.name = room.display_name
        self.avatar_url = self.media_urls.avatar_url(room.avatar)
        self.topic = room.topic or ""

        for event in room.timeline[self._timeline_position :]:
            self._render_message(event)
        self._timeline_position = len(room.timeline)

    def _render_message(self, event: ClientEvent) -> None:
        # Events we have already shown are not shown again.
        if event.event_id is not None:
            if event.event_id in self._rendered_event_ids:
                return
            self._rendered_event_ids.add(event.event_id)

        self.messages.append(
            RenderedMessage(
                event_id=event.event_id,
                sender=event.sender or "",
                text=self.presenter.text_for_event(event),
                timestamp=self.presenter.format_timestamp(event.origin_server_ts),
            )
        )

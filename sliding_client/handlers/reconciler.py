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
from typing import TYPE_CHECKING, Callable

import attr

from sliding_client.api.constants import EventTypes, UnreadBadgeClass
from sliding_client.api.errors import UnknownListError
from sliding_client.handlers.visibility import VisibilityKey
from sliding_client.types.handlers.room import Room
from sliding_client.types.handlers.room_list import RoomList
from sliding_client.util.placeholders import placeholder_text

if TYPE_CHECKING:
    from sliding_client.server import SlidingSyncClient

logger = logging.getLogger(__name__)

SlotClickHandler = Callable[[VisibilityKey], None]


@attr.s(slots=True, frozen=True, auto_attribs=True)
class SlotContent:
    """What a room list slot shows.

    Attributes:
        room_id: The room shown, or None for a placeholder.
        name: The room name line.
        content: The message preview line.
        sender: The line above the preview. Holds the tombstone reason for obsolete
            rooms and the whole text of membership events.
        timestamp: When the previewed event was sent.
        avatar_url: The avatar to show.
        unread_count: The text of the unread badge. Empty if there is no badge.
        unread_class: The styling class of the unread badge, if any.
        is_placeholder: Whether the room at this position is unknown so far.
        is_selected: Whether this is the room currently open.
    """

    room_id: str | None
    name: str
    content: str
    sender: str = ""
    timestamp: str = ""
    avatar_url: str = ""
    unread_count: str = ""
    unread_class: str | None = None
    is_placeholder: bool = False
    is_selected: bool = False


@attr.s(slots=True, auto_attribs=True)
class ViewSlot:
    """One entry of a room list view."""

    key: VisibilityKey
    content: SlotContent | None = None
    _on_click: SlotClickHandler | None = None

    def click(self) -> None:
        if self._on_click is not None:
            self._on_click(self.key)


class ListViewReconciler:
    """Keeps a pool of view slots per list, one per room in the list, and fills
    each slot from the room store.
    """

    def __init__(self, hs: "SlidingSyncClient"):
        self.lists = hs.get_room_lists()
        self.store = hs.get_room_store()
        self.presenter = hs.get_presenter()
        self.media_urls = hs.get_media_url_builder()
        self.viewport = hs.get_viewport()
        self.visibility_tracker = hs.get_visibility_tracker()

        self._pools: dict[int, list[ViewSlot]] = {}
        self._on_click: SlotClickHandler | None = None
        self.selected_room_id: str | None = None

    def set_click_handler(self, on_click: SlotClickHandler) -> None:
        self._on_click = on_click

    def _handle_click(self, key: VisibilityKey) -> None:
        if self._on_click is None:
            logger.debug("Ignoring click on %s: no click handler", key.to_string())
            return
        self._on_click(key)

    def slots(self, list_index: int) -> list[ViewSlot]:
        return list(self._pools.get(list_index, ()))

    def reconcile_all(self) -> None:
        for list_index in range(len(self.lists)):
            self.reconcile(list_index)

    def reconcile(self, list_index: int) -> None:
        """Resize the pool of `list_index` to the list's `joined_count` and
        re-render every slot.

        Raises:
            UnknownListError: if there is no list at `list_index`.
        """
        if not 0 <= list_index < len(self.lists):
            raise UnknownListError(list_index)
        room_list = self.lists[list_index]
        pool = self._pools.setdefault(list_index, [])

        removed = 0
        while len(pool) > room_list.joined_count:
            slot = pool[-1]
            self.viewport.unobserve(slot.key)
            self.visibility_tracker.forget(slot.key)
            pool.pop()
            removed += 1

        added = 0
        for i in range(len(pool), room_list.joined_count):
            slot = ViewSlot(
                key=VisibilityKey(list_index, i), on_click=self._handle_click
            )
            pool.append(slot)
            self.viewport.observe(slot.key)
            added += 1

        if added or removed:
            logger.debug(
                "list %d: added %d slots, removed %d slots", list_index, added, removed
            )

        for i, slot in enumerate(pool):
            slot.content = self._render_position(room_list, i)

    def _render_position(self, room_list: RoomList, index: int) -> SlotContent:
        room_id = room_list.room_index_to_room_id.get(index)
        room = self.store.get_room(room_id) if room_id else None
        if room is None:
            return SlotContent(
                room_id=None,
                name=placeholder_text(index, long=False),
                content=placeholder_text(index, long=True),
                avatar_url=self.media_urls.placeholder_avatar,
                is_placeholder=True,
            )
        return self._render_room(room)

    def _render_room(self, room: Room) -> SlotContent:
        # The highlight badge shows the notification count rather than the
        # highlight count, so that the number doesn't drop when the colour changes.
        if room.highlight_count > 0:
            unread_count = str(room.notification_count)
            unread_class: str | None = UnreadBadgeClass.HIGHLIGHT
        elif room.notification_count > 0:
            unread_count = str(room.notification_count)
            unread_class = UnreadBadgeClass.NOTIFY
        else:
            unread_count = ""
            unread_class = None

        content = ""
        sender = ""
        timestamp = ""
        latest_event = room.latest_event
        if room.obsolete:
            sender = room.obsolete
        elif latest_event is not None:
            timestamp = self.presenter.format_timestamp(latest_event.origin_server_ts)
            body = self.presenter.text_for_event(latest_event)
            if latest_event.type == EventTypes.Member:
                sender = body
            else:
                sender = latest_event.sender or ""
                content = body

        return SlotContent(
            room_id=room.room_id,
            name=room.display_name,
            content=content,
            sender=sender,
            timestamp=timestamp,
            avatar_url=self.media_urls.avatar_url(room.avatar),
            unread_count=unread_count,
            unread_class=unread_class,
            is_selected=room.room_id == self.selected_room_id,
        )

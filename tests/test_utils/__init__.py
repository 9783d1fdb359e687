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

"""
Utilities for running the unit tests
"""

from typing import Any

from sliding_client.types import JsonDict


def make_event(
    event_type: str = "m.room.message",
    sender: str = "@alice:test",
    content: JsonDict | None = None,
    event_id: str | None = None,
    origin_server_ts: int | None = None,
    state_key: str | None = None,
) -> JsonDict:
    """Build an event as it appears in a sync response."""
    event: JsonDict = {
        "type": event_type,
        "sender": sender,
        "content": content if content is not None else {},
    }
    if event_id is not None:
        event["event_id"] = event_id
    if origin_server_ts is not None:
        event["origin_server_ts"] = origin_server_ts
    if state_key is not None:
        event["state_key"] = state_key
    return event


def make_message(body: str, event_id: str, **kwargs: Any) -> JsonDict:
    return make_event(
        content={"msgtype": "m.text", "body": body}, event_id=event_id, **kwargs
    )


def make_state_event(event_type: str, content: JsonDict) -> JsonDict:
    return make_event(event_type=event_type, content=content, state_key="")


def make_room_payload(room_id: str, **fields: Any) -> JsonDict:
    """Build one room's entry of a sync response. Only the given fields are set."""
    return {"room_id": room_id, **fields}

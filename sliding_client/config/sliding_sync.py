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

from pydantic import Field, StrictStr, ValidationError
from typing_extensions import Annotated

from sliding_client.api.constants import (
    DEFAULT_BUFFER_RANGE,
    DEFAULT_DEBOUNCE_MS,
    STATIC_RANGE_END,
)
from sliding_client.types import JsonDict
from sliding_client.types.handlers.room_list import RoomList
from sliding_client.types.rest.client import ListFilters
from sliding_client.util.pydantic_models import ParseModel

from ._base import Config, ConfigError


class RoomListConfigModel(ParseModel):
    name: StrictStr
    filters: ListFilters = Field(default_factory=ListFilters)


def _default_lists() -> list[RoomListConfigModel]:
    return [
        RoomListConfigModel(name="Direct Messages", filters=ListFilters(is_dm=True)),
        RoomListConfigModel(name="Group Chats", filters=ListFilters(is_dm=False)),
    ]


class SlidingSyncConfigModel(ParseModel):
    debounce_ms: Annotated[int, Field(gt=0)] = DEFAULT_DEBOUNCE_MS
    buffer_range: Annotated[int, Field(ge=0)] = DEFAULT_BUFFER_RANGE
    static_range_end: Annotated[int, Field(gt=0)] = STATIC_RANGE_END
    lists: Annotated[list[RoomListConfigModel], Field(min_length=1)] = Field(
        default_factory=_default_lists
    )


class SlidingSyncConfig(Config):
    """Configuration for the room lists and how the client windows them."""

    section = "sliding_sync"

    def read_config(self, config: JsonDict, **kwargs: Any) -> None:
        sliding_sync_config = config.get("sliding_sync") or {}
        if not isinstance(sliding_sync_config, dict):
            raise ConfigError("Must be a mapping", ("sliding_sync",))

        try:
            parsed = SlidingSyncConfigModel(**sliding_sync_config)
        except ValidationError as e:
            raise ConfigError(
                "Could not validate the sliding sync configuration",
                path=("sliding_sync",),
            ) from e

        self.debounce_ms = parsed.debounce_ms
        self.buffer_range = parsed.buffer_range
        self.static_range_end = parsed.static_range_end
        self.lists = parsed.lists

    def build_room_lists(self) -> list[RoomList]:
        """Create the configured lists, each tracking the static prefix only."""
        return [
            RoomList(
                name=list_config.name,
                filters=list_config.filters,
                active_ranges=[(0, self.static_range_end - 1)],
            )
            for list_config in self.lists
        ]

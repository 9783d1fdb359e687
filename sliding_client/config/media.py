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

from sliding_client.types import JsonDict
from sliding_client.util.pydantic_models import ParseModel

from ._base import Config, ConfigError

DEFAULT_THUMBNAIL_BASE_URL = (
    "https://matrix-client.matrix.org/_matrix/media/r0/thumbnail/"
)


class MediaConfigModel(ParseModel):
    thumbnail_base_url: StrictStr = DEFAULT_THUMBNAIL_BASE_URL
    thumbnail_size: Annotated[int, Field(gt=0)] = 64
    thumbnail_method: StrictStr = "crop"
    placeholder_avatar: StrictStr = "/client/placeholder.svg"


class MediaConfig(Config):
    """Where avatars are fetched from."""

    section = "media"

    def read_config(self, config: JsonDict, **kwargs: Any) -> None:
        media_config = config.get("media") or {}
        if not isinstance(media_config, dict):
            raise ConfigError("Must be a mapping", ("media",))

        try:
            parsed = MediaConfigModel(**media_config)
        except ValidationError as e:
            raise ConfigError(
                "Could not validate the media configuration", path=("media",)
            ) from e

        self.thumbnail_base_url = parsed.thumbnail_base_url
        self.thumbnail_size = parsed.thumbnail_size
        self.thumbnail_method = parsed.thumbnail_method
        self.placeholder_avatar = parsed.placeholder_avatar

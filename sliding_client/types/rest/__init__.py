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
from pydantic import ConfigDict

from sliding_client.util.pydantic_models import ParseModel


class SyncBodyModel(ParseModel):
    model_config = ConfigDict(
        # By default, do not allow coercing field types.
        #
        # This saves subclassing models from needing to write i.e. "StrictStr"
        # instead of "str" in their fields.
        #
        # To revert to "lax" mode for a given field, use:
        #
        # ```
        # my_field: Annotated[str, Field(strict=False)]
        # ````
        strict=True,
    )

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

from pydantic import BaseModel, ConfigDict


class ParseModel(BaseModel):
    """A custom version of Pydantic's BaseModel which

     - ignores unknown fields,
     - does not allow fields to be overwritten after construction and
     - enables strict mode,

    but otherwise uses Pydantic's default behaviour.

    Unknown fields are ignored because servers are free to add keys to sync responses
    and config files may carry sections for other tools.

    Subclassing in this way is recommended by
    https://pydantic-docs.helpmanual.io/usage/model_config/#change-behaviour-globally
    """

    model_config = ConfigDict(extra="ignore", frozen=True, strict=True)

    def is_set(self, field_name: str) -> bool:
        """Whether `field_name` was sent with a non-null value.

        Absent fields and explicit nulls both mean "unchanged" to callers merging
        partial payloads, whereas an empty string or a zero is a real value.
        """
        return (
            field_name in self.model_fields_set
            and getattr(self, field_name) is not None
        )

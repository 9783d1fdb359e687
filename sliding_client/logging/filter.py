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
from typing import Mapping

from typing_extensions import Literal


class MetadataFilter(logging.Filter):
    """Logging filter that stamps each record with fields describing this client
    instance (e.g. its version), so that logs of several clients can be told apart.

    Args:
        metadata: Key-value pairs to add to each record.
    """

    def __init__(self, metadata: Mapping[str, object]):
        super().__init__()
        self._metadata = dict(metadata)

    def filter(self, record: logging.LogRecord) -> Literal[True]:
        for key, value in self._metadata.items():
            setattr(record, key, value)
        return True

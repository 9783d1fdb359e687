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

from matrix_common.versionstring import get_distribution_version_string

logger = logging.getLogger(__name__)


# Version string with git info. Computed here once so that we don't invoke git multiple
# times.
SLIDING_CLIENT_VERSION = get_distribution_version_string(
    "sliding-sync-client", __file__
)

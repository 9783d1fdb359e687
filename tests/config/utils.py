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

import os
import shutil
import tempfile
import unittest

import yaml

from sliding_client.types import JsonDict


class ConfigFileTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.dir = tempfile.mkdtemp()
        self.config_file = os.path.join(self.dir, "client.yaml")

    def tearDown(self) -> None:
        shutil.rmtree(self.dir)

    def write_config(self, config: JsonDict, path: str | None = None) -> None:
        with open(path or self.config_file, "w") as f:
            yaml.safe_dump(config, f)

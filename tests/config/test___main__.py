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

from contextlib import redirect_stderr, redirect_stdout
from io import StringIO

from sliding_client.config.__main__ import main

from tests.config.utils import ConfigFileTestCase


class ConfigMainFileTestCase(ConfigFileTestCase):
    def test_executes_without_an_action(self) -> None:
        self.write_config({})
        with redirect_stdout(StringIO()):
            main(["", "-c", self.config_file])

    def test_read__error_if_key_not_found(self) -> None:
        self.write_config({})
        with redirect_stdout(StringIO()), self.assertRaises(SystemExit):
            main(["", "read", "foo.bar.hello", "-c", self.config_file])

    def test_read__passes_if_key_found(self) -> None:
        self.write_config({"sliding_sync": {"debounce_ms": 250}})
        out = StringIO()
        with redirect_stdout(out):
            main(["", "read", "sliding_sync.debounce_ms", "-c", self.config_file])
        self.assertIn("sliding_sync.debounce_ms: 250", out.getvalue())

    def test_invalid_config_exits(self) -> None:
        self.write_config({"sliding_sync": {"debounce_ms": 0}})
        err = StringIO()
        with redirect_stderr(err), self.assertRaises(SystemExit):
            main(["", "-c", self.config_file])
        self.assertIn("Error in configuration at 'sliding_sync'", err.getvalue())

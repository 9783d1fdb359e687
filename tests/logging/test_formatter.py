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

import io
import logging
import sys

from sliding_client.config.logger import LoggingConfig, setup_logging
from sliding_client.logging.filter import MetadataFilter
from sliding_client.logging.formatter import LogFormatter

from tests import unittest


class TestException(Exception):
    pass


class LogFormatterTestCase(unittest.TestCase):
    def test_formatter(self) -> None:
        formatter = LogFormatter()

        try:
            raise TestException("testytest")
        except TestException:
            ei = sys.exc_info()

        output = formatter.formatException(ei)

        # check the output looks vaguely sane
        self.assertIn("testytest", output)
        self.assertIn("Capture point", output)

    def test_defaults(self) -> None:
        formatter = LogFormatter("%(client)s %(message)s", defaults={"client": "c1"})
        record = logging.LogRecord("test", logging.INFO, __file__, 1, "hi", (), None)

        self.assertEqual(formatter.format(record), "c1 hi")
        self.assertFalse(hasattr(record, "client"))

        record.client = "c2"
        self.assertEqual(formatter.format(record), "c2 hi")


class MetadataFilterTestCase(unittest.TestCase):
    def test_filter_overwrites(self) -> None:
        metadata_filter = MetadataFilter({"client": "c1", "version": "1.0"})
        record = logging.LogRecord("test", logging.INFO, __file__, 1, "hi", (), None)
        record.version = "2.0"

        self.assertTrue(metadata_filter.filter(record))

        self.assertEqual(record.client, "c1")  # type: ignore[attr-defined]
        self.assertEqual(record.version, "1.0")


class SetupLoggingTestCase(unittest.TestCase):
    def setUp(self) -> None:
        root_logger = logging.getLogger()
        self._old_level = root_logger.level
        self.addCleanup(root_logger.setLevel, self._old_level)

    def test_setup_logging(self) -> None:
        config = LoggingConfig(root_config=None)  # type: ignore[arg-type]
        config.read_config(
            {
                "logging": {
                    "level": "info",
                    "format": "%(client)s - %(name)s - %(message)s",
                    "loggers": {"test.quiet": "ERROR"},
                    "instance_name": "client-a",
                }
            }
        )
        stream = io.StringIO()

        handler = setup_logging(config, stream)
        self.addCleanup(logging.getLogger().removeHandler, handler)
        self.addCleanup(logging.getLogger("test.quiet").setLevel, logging.NOTSET)

        logging.getLogger("test.loud").info("hello")
        logging.getLogger("test.quiet").warning("hidden")

        lines = stream.getvalue().splitlines()
        self.assertIn("client-a - test.loud - hello", lines)
        self.assertNotIn("client-a - test.quiet - hidden", lines)

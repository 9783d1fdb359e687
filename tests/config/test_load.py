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

from parameterized import parameterized

from sliding_client.config import ClientConfig, ConfigError
from sliding_client.config._base import format_config_error

from tests.config.utils import ConfigFileTestCase


class ConfigLoadingFileTestCase(ConfigFileTestCase):
    def test_load_fails_without_config_path(self) -> None:
        with self.assertRaises(ConfigError):
            ClientConfig.load_config("", [])

    def test_defaults(self) -> None:
        self.write_config({})
        config = ClientConfig.load_config("", ["-c", self.config_file])

        self.assertEqual(config.sliding_sync.debounce_ms, 100)
        self.assertEqual(config.sliding_sync.buffer_range, 5)
        self.assertEqual(config.sliding_sync.static_range_end, 20)
        self.assertEqual(
            [c.name for c in config.sliding_sync.lists],
            ["Direct Messages", "Group Chats"],
        )
        self.assertEqual(config.media.thumbnail_size, 64)
        self.assertEqual(config.logging.level, "INFO")

    def test_empty_file(self) -> None:
        with open(self.config_file, "w"):
            pass

        config = ClientConfig.load_config("", ["-c", self.config_file])

        self.assertEqual(config.sliding_sync.debounce_ms, 100)

    def test_load_lists(self) -> None:
        self.write_config(
            {
                "sliding_sync": {
                    "lists": [
                        {"name": "Invites", "filters": {"is_invite": True}},
                        {"name": "Everything"},
                    ]
                }
            }
        )
        config = ClientConfig.load_config("", ["-c", self.config_file])

        lists = config.sliding_sync.build_room_lists()
        self.assertEqual(
            [room_list.name for room_list in lists], ["Invites", "Everything"]
        )
        self.assertTrue(lists[0].get_filters().is_invite)
        self.assertIsNone(lists[1].get_filters().is_invite)
        self.assertEqual(lists[0].active_ranges, [(0, 19)])

    def test_static_range_end_sets_prefix(self) -> None:
        self.write_config({"sliding_sync": {"static_range_end": 10}})
        config = ClientConfig.load_config("", ["-c", self.config_file])

        lists = config.sliding_sync.build_room_lists()
        self.assertEqual(lists[0].active_ranges, [(0, 9)])

    @parameterized.expand(
        [
            ("zero_debounce", {"sliding_sync": {"debounce_ms": 0}}, "sliding_sync"),
            ("negative_buffer", {"sliding_sync": {"buffer_range": -1}}, "sliding_sync"),
            ("no_lists", {"sliding_sync": {"lists": []}}, "sliding_sync"),
            ("section_not_a_mapping", {"media": ["nope"]}, "media"),
            ("bad_size", {"media": {"thumbnail_size": "64"}}, "media"),
            ("bad_level", {"logging": {"level": "LOUD"}}, "logging"),
        ]
    )
    def test_invalid_config(self, _: str, config: dict, section: str) -> None:
        self.write_config(config)

        with self.assertRaises(ConfigError) as cm:
            ClientConfig.load_config("", ["-c", self.config_file])

        self.assertEqual(cm.exception.path, (section,))
        self.assertTrue(
            "".join(format_config_error(cm.exception)).startswith(
                "Error in configuration at '%s'" % (section,)
            )
        )

    def test_log_levels_are_normalised(self) -> None:
        self.write_config(
            {"logging": {"level": "debug", "loggers": {"sliding_client": "warning"}}}
        )
        config = ClientConfig.load_config("", ["-c", self.config_file])

        self.assertEqual(config.logging.level, "DEBUG")
        self.assertEqual(config.logging.loggers, {"sliding_client": "WARNING"})

    def test_later_files_replace_sections(self) -> None:
        """Config directories are read in order, later files replacing whole
        sections of earlier ones."""
        config_dir = os.path.join(self.dir, "conf.d")
        os.mkdir(config_dir)
        self.write_config(
            {"sliding_sync": {"debounce_ms": 250, "buffer_range": 2}},
            os.path.join(config_dir, "00-base.yaml"),
        )
        self.write_config(
            {"sliding_sync": {"buffer_range": 8}},
            os.path.join(config_dir, "10-override.yaml"),
        )
        # Not a yaml file, so ignored.
        self.write_config(
            {"sliding_sync": {"buffer_range": 99}},
            os.path.join(config_dir, "20-ignored.yml"),
        )

        config = ClientConfig.load_config("", ["-c", config_dir])

        self.assertEqual(config.sliding_sync.buffer_range, 8)
        self.assertEqual(config.sliding_sync.debounce_ms, 100)

    def test_unknown_sections_are_ignored(self) -> None:
        self.write_config({"homeserver": {"url": "https://example.com"}})

        config = ClientConfig.load_config("", ["-c", self.config_file])

        self.assertEqual(config.config_files, [self.config_file])

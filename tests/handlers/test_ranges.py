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

from sliding_client.handlers.ranges import RangeComputer
from sliding_client.handlers.visibility import VisibilityKey
from sliding_client.types.handlers.room_list import RoomList

from tests import unittest


def _visible(list_index: int, *room_indexes: int) -> list[VisibilityKey]:
    return [VisibilityKey(list_index, i) for i in room_indexes]


class RangeComputerTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.computer = RangeComputer(buffer_range=5, static_range_end=20)
        self.lists = [
            RoomList(name="Direct Messages", joined_count=100),
            RoomList(name="Group Chats", joined_count=50),
        ]

    def test_window_is_buffered_and_clamped_to_static_prefix(self) -> None:
        ranges = self.computer.compute_ranges(
            _visible(0, *range(25, 31)), self.lists
        )

        self.assertEqual(ranges, {0: (20, 35)})

    def test_window_inside_static_prefix_is_not_emitted(self) -> None:
        ranges = self.computer.compute_ranges(_visible(1, *range(0, 11)), self.lists)

        self.assertEqual(ranges, {})

    def test_window_ending_on_static_boundary_is_not_emitted(self) -> None:
        # 15 + 5 == 20, which is still covered by the static prefix.
        ranges = self.computer.compute_ranges(_visible(0, 10, 15), self.lists)

        self.assertEqual(ranges, {})

    def test_window_clamped_to_list_end(self) -> None:
        ranges = self.computer.compute_ranges(_visible(1, 40, 48), self.lists)

        self.assertEqual(ranges, {1: (35, 49)})

    def test_only_extremes_matter(self) -> None:
        ranges = self.computer.compute_ranges(_visible(0, 60, 30, 45), self.lists)

        self.assertEqual(ranges, {0: (25, 65)})

    def test_lists_are_independent(self) -> None:
        ranges = self.computer.compute_ranges(
            _visible(0, 50, 55) + _visible(1, 30), self.lists
        )

        self.assertEqual(ranges, {0: (45, 60), 1: (25, 35)})

    def test_visible_slots_past_end_of_list(self) -> None:
        # The list shrank to 22 rooms but slots far down are still reported.
        self.lists[0].joined_count = 22
        ranges = self.computer.compute_ranges(_visible(0, 80, 90), self.lists)

        self.assertEqual(ranges, {})

    def test_unknown_list_is_ignored(self) -> None:
        ranges = self.computer.compute_ranges(
            _visible(5, 30) + _visible(0, 30), self.lists
        )

        self.assertEqual(ranges, {0: (25, 35)})

    def test_nothing_visible(self) -> None:
        self.assertEqual(self.computer.compute_ranges([], self.lists), {})

    def test_buffer_range_is_configurable(self) -> None:
        computer = RangeComputer(buffer_range=0, static_range_end=20)

        ranges = computer.compute_ranges(_visible(0, 30, 31), self.lists)

        self.assertEqual(ranges, {0: (30, 31)})

    def test_apply_ranges(self) -> None:
        self.computer.apply_ranges({0: (20, 35)}, self.lists)

        self.assertEqual(self.lists[0].active_ranges, [(0, 19), (20, 35)])
        self.assertEqual(self.lists[1].active_ranges, [(0, 19)])

        # The window is replaced rather than added to.
        self.computer.apply_ranges({0: (40, 60)}, self.lists)

        self.assertEqual(self.lists[0].active_ranges, [(0, 19), (40, 60)])
        self.assertEqual(self.lists[0].dynamic_range, (40, 60))

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

"""Synthetic names shown in room list entries whose room is not known yet.

The text is picked from the position alone, so the same slot always shows the same
placeholder no matter how often it is re-rendered.
"""

from typing import Final

# (modulus, short text, long text). The first modulus dividing the position wins.
_PLACEHOLDERS: Final = (
    (
        17,
        "There is no spoon",
        "Ever have that feeling where you’re not sure if you’re awake or dreaming?",
    ),
    (
        13,
        "Get Up Trinity",
        "Choice is an illusion created between those with power and those without.",
    ),
    (
        11,
        "I know kung fu",
        "That’s how it is with people. Nobody cares how it works as long as it works.",
    ),
    (7, "Free your mind", "The body cannot live without the mind."),
    (5, "Agent Smith", "Perhaps we are asking the wrong questions…"),
    (3, "Mr Anderson", "You've been living in a dream world, Neo."),
)

_FALLBACK_SHORT: Final = "Morpheus"
_FALLBACK_LONG: Final = "Mr. Wizard, get me the hell out of here! "


def placeholder_text(index: int, long: bool) -> str:
    """Returns the placeholder for list position `index`.

    Args:
        index: The position in the room list.
        long: True for the text shown in place of the message preview, False for the
            text shown in place of the room name.
    """
    for modulus, short_text, long_text in _PLACEHOLDERS:
        if index % modulus == 0:
            return long_text if long else short_text
    return _FALLBACK_LONG if long else _FALLBACK_SHORT

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

from typing import Any, Mapping, TypeAlias

# JSON types. These could be made stronger, but will do for now.
# A JSON-serialisable dict.
JsonDict: TypeAlias = dict[str, Any]
# A JSON-serialisable mapping; roughly speaking an immutable JSONDict.
JsonMapping: TypeAlias = Mapping[str, Any]

# Collection[str] that does not include str itself; str being a Sequence[str]
# is very misleading and results in bugs.
StrCollection: TypeAlias = tuple[str, ...] | list[str] | set[str] | frozenset[str]
StrSequence: TypeAlias = tuple[str, ...] | list[str]

# An inclusive `(start, end)` range of positions in a room list.
Range: TypeAlias = tuple[int, int]

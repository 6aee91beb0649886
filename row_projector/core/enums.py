"""Source shape enumeration."""

from __future__ import annotations

from enum import Enum


class SourceShape(Enum):
    """Shapes of tabular source a projection can read from."""

    CURSOR = "cursor"
    ROW = "row"

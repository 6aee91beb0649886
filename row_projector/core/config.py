"""Mapper configuration.

MapperOptions is a Pydantic model for type-safe, immutable mapper settings.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict


class MapperOptions(BaseModel):
    """Configuration for a Mapper.

    Args:
        aliases: Column-name to parameter-name mapping.
        case_insensitive: Fall back to a case-insensitive column match when
            the exact name is missing.
        unsupported_parameters: ``"drop"`` leaves parameters of unsupported
            types unbound; ``"reject"`` fails compilation instead.
    """

    model_config = ConfigDict(frozen=True)

    aliases: dict[str, str] = {}
    case_insensitive: bool = False
    unsupported_parameters: Literal["drop", "reject"] = "drop"

    def column_for(self, parameter: str) -> str:
        """Return the column name bound to *parameter*."""
        for column, target in self.aliases.items():
            if target == parameter:
                return column
        return parameter


DEFAULT_OPTIONS = MapperOptions()

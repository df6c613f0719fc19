"""Room-specific color palettes derived from a primary color."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List

from models.color_theory import (
    HSL,
    generate_cool_neutrals,
    generate_harmonious_colors,
    generate_neutral_colors,
    generate_warm_neutrals,
    hex_to_hsl,
)
from models.taxonomy import DEFAULT_ROOM_TYPE, normalize_key

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoomPalette:
    """Accent, neutral and secondary colors suggested for one room."""

    accent: List[str]
    neutral: List[str]
    secondary: List[str]

    def all_colors(self) -> List[str]:
        return [*self.accent, *self.neutral, *self.secondary]

    def as_dict(self) -> Dict[str, List[str]]:
        return {"accent": list(self.accent), "neutral": list(self.neutral), "secondary": list(self.secondary)}


def _living(primary: str, base: HSL) -> RoomPalette:
    return RoomPalette(
        accent=generate_harmonious_colors(primary, "complementary"),
        neutral=generate_neutral_colors(base),
        secondary=generate_harmonious_colors(primary, "analogous"),
    )


def _bedroom(primary: str, base: HSL) -> RoomPalette:
    return RoomPalette(
        accent=generate_harmonious_colors(primary, "monochromatic"),
        neutral=generate_warm_neutrals(),
        secondary=generate_harmonious_colors(primary, "analogous"),
    )


def _kitchen(primary: str, base: HSL) -> RoomPalette:
    return RoomPalette(
        accent=generate_harmonious_colors(primary, "complementary"),
        neutral=generate_cool_neutrals(),
        secondary=generate_harmonious_colors(primary, "splitComplementary"),
    )


def _dining(primary: str, base: HSL) -> RoomPalette:
    return RoomPalette(
        accent=generate_harmonious_colors(primary, "triadic"),
        neutral=generate_warm_neutrals(),
        secondary=generate_harmonious_colors(primary, "analogous"),
    )


_ROOM_PALETTE_BUILDERS: Dict[str, Callable[[str, HSL], RoomPalette]] = {
    "living": _living,
    "bedroom": _bedroom,
    "kitchen": _kitchen,
    "dining": _dining,
}


def get_room_color_palette(primary_color: str, room_type: str | None = DEFAULT_ROOM_TYPE) -> RoomPalette:
    """Return the :class:`RoomPalette` for ``primary_color`` in ``room_type``.

    Unsupported room types fall back to the living room palette. Raises
    :class:`~models.color_theory.ColorFormatError` for a malformed primary color.
    """

    base = hex_to_hsl(primary_color)
    key = normalize_key(room_type)
    if key not in _ROOM_PALETTE_BUILDERS:
        logger.info("No palette for room type '%s', using %s", room_type, DEFAULT_ROOM_TYPE)
        key = DEFAULT_ROOM_TYPE
    return _ROOM_PALETTE_BUILDERS[key](primary_color, base)


__all__ = ["RoomPalette", "get_room_color_palette"]

"""Color-first ranking of candidate items against a target palette."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence

from models.color_theory import (
    HSL,
    NO_HARMONY,
    ColorFormatError,
    Harmony,
    calculate_color_compatibility,
    color_distance,
    find_color_harmonies,
    generate_neutral_colors,
    hex_to_hsl,
)
from models.furniture_item import FurnitureItem
from models.room_palettes import RoomPalette, get_room_color_palette
from models.taxonomy import DEFAULT_ROOM_TYPE

logger = logging.getLogger(__name__)

COLOR_MATCH_WEIGHTS = {
    "compatibility": 0.4,
    "harmony": 0.3,
    "room": 0.2,
    "neutral": 0.1,
}

REASON_NO_COLORS = "No colors available"
REASON_NO_TARGET = "No target colors"
REASON_COMPATIBLE = "Good color compatibility"
REASON_NEUTRAL = "Neutral coordination"
REASON_BASIC = "Basic color match"

_REFERENCE_NEUTRALS = generate_neutral_colors(HSL(0, 0, 50))


@dataclass(frozen=True)
class ColorMatchOptions:
    """Tuning knobs for :func:`find_color_matches`.

    ``harmony_type`` and ``tolerance_level`` are echoed in diagnostics; the
    scoring policy itself is fixed.
    """

    harmony_type: str = "complementary"
    tolerance_level: float = 0.5
    include_neutrals: bool = True
    room_type: str = DEFAULT_ROOM_TYPE


@dataclass(frozen=True)
class ColorMatchedItem:
    """A candidate wrapped with its color-first ranking signals."""

    item: FurnitureItem
    color_match_score: float
    match_reason: str
    harmonies: Harmony = NO_HARMONY
    compatibility_score: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        payload = self.item.to_dict()
        payload.update(
            {
                "color_match_score": self.color_match_score,
                "match_reason": self.match_reason,
                "harmonies": self.harmonies.as_dict(),
                "compatibility_score": self.compatibility_score,
            }
        )
        return payload


def harmony_reason(harmony_type: str) -> str:
    return f"{harmony_type} color harmony"


def calculate_room_color_score(item_colors: Sequence[str], room_palette: RoomPalette) -> float:
    """Best ``1 - distance/300`` proximity between item and room colors."""

    best = 0.0
    for item_color in item_colors:
        for room_color in room_palette.all_colors():
            try:
                distance = color_distance(item_color, room_color)
            except ColorFormatError as exc:
                logger.warning("Skipping malformed color in room palette scoring: %s", exc)
                break
            best = max(best, max(0.0, 1 - distance / 300))
    return best


def calculate_neutral_score(colors: Sequence[str]) -> float:
    """How neutral a palette reads: low saturation or close to known neutrals."""

    if not colors:
        return 0.0
    score = 0.0
    for color in colors:
        try:
            hsl = hex_to_hsl(color)
        except ColorFormatError as exc:
            logger.warning("Neutral default for malformed color: %s", exc)
            score += 0.5
            continue
        if hsl.s < 20:
            score += 0.3
        if any(color_distance(color, neutral) < 50 for neutral in _REFERENCE_NEUTRALS):
            score += 0.4
    return min(1.0, score / len(colors))


def _match_reason(harmony: Harmony, compatibility: float, neutral: float) -> str:
    if harmony.type:
        return harmony_reason(harmony.type)
    if compatibility > 0.6:
        return REASON_COMPATIBLE
    if neutral > 0.7:
        return REASON_NEUTRAL
    return REASON_BASIC


def _room_palette(target_colors: Sequence[str], room_type: str) -> Optional[RoomPalette]:
    try:
        return get_room_color_palette(target_colors[0], room_type)
    except ColorFormatError as exc:
        logger.warning("No room palette for malformed primary color: %s", exc)
        return None


def score_color_match(
    target_colors: Sequence[str],
    item: FurnitureItem,
    options: ColorMatchOptions,
    room_palette: Optional[RoomPalette],
) -> ColorMatchedItem:
    """Blend compatibility, harmony, room proximity and neutral signals."""

    if not item.colors:
        return ColorMatchedItem(item=item, color_match_score=0.0, match_reason=REASON_NO_COLORS)
    if not target_colors:
        return ColorMatchedItem(item=item, color_match_score=0.0, match_reason=REASON_NO_TARGET)

    compatibility = calculate_color_compatibility(target_colors, item.colors)
    harmony = find_color_harmonies(target_colors, item.colors)
    room_score = calculate_room_color_score(item.colors, room_palette) if room_palette else 0.5
    neutral = calculate_neutral_score(item.colors)

    score = (
        compatibility * COLOR_MATCH_WEIGHTS["compatibility"]
        + harmony.score * COLOR_MATCH_WEIGHTS["harmony"]
        + room_score * COLOR_MATCH_WEIGHTS["room"]
    )
    if options.include_neutrals:
        score += neutral * COLOR_MATCH_WEIGHTS["neutral"]

    return ColorMatchedItem(
        item=item,
        color_match_score=max(0.0, min(1.0, score)),
        match_reason=_match_reason(harmony, compatibility, neutral),
        harmonies=harmony,
        compatibility_score=compatibility,
    )


def find_color_matches(
    target_colors: Sequence[str],
    candidates: Iterable[FurnitureItem],
    options: ColorMatchOptions | None = None,
) -> List[ColorMatchedItem]:
    """Rank ``candidates`` by how well their colors suit ``target_colors``."""

    opts = options or ColorMatchOptions()
    targets = list(target_colors)
    room_palette = _room_palette(targets, opts.room_type) if targets else None
    matches = [score_color_match(targets, item, opts, room_palette) for item in candidates]
    matches.sort(key=lambda match: match.color_match_score, reverse=True)
    logger.info(
        "Color matched %s candidates (harmony=%s tolerance=%s room=%s)",
        len(matches),
        opts.harmony_type,
        opts.tolerance_level,
        opts.room_type,
    )
    return matches


__all__ = [
    "COLOR_MATCH_WEIGHTS",
    "ColorMatchOptions",
    "ColorMatchedItem",
    "calculate_room_color_score",
    "calculate_neutral_score",
    "score_color_match",
    "find_color_matches",
    "harmony_reason",
]

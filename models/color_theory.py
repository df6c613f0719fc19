"""Color theory helpers: HSL conversion, distances and harmony rules.

Colors travel through the engine as ``#RRGGBB`` strings. Everything here is a
pure function so that scoring can run on any number of worker threads.
"""
from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence

logger = logging.getLogger(__name__)

_HEX_PATTERN = re.compile(r"^[0-9a-fA-F]{6}$")

HUE_WEIGHT = 2
SATURATION_WEIGHT = 1
LIGHTNESS_WEIGHT = 1

HARMONY_ANGLES: Dict[str, int] = {
    "complementary": 180,
    "triadic": 120,
    "analogous": 30,
    "splitComplementary": 150,
    "tetradic": 90,
    "monochromatic": 0,
}

_HARMONY_ALIASES = {
    "split_complementary": "splitComplementary",
    "split-complementary": "splitComplementary",
}


class ColorFormatError(ValueError):
    """Raised when a color is not a 6 digit hex string."""


@dataclass(frozen=True)
class HSL:
    """Integer hue/saturation/lightness triple."""

    h: int
    s: int
    l: int  # noqa: E741

    def as_dict(self) -> Dict[str, int]:
        return {"h": self.h, "s": self.s, "l": self.l}


@dataclass(frozen=True)
class Harmony:
    """Best harmony relationship found between two palettes."""

    type: Optional[str]
    score: float

    def as_dict(self) -> Dict[str, object]:
        return {"type": self.type, "score": self.score}


NO_HARMONY = Harmony(type=None, score=0.0)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _parse_hex(color: str) -> tuple[float, float, float]:
    if not isinstance(color, str):
        raise ColorFormatError(f"Color must be a string, got {type(color).__name__}")
    digits = color.strip()
    if digits.startswith("#"):
        digits = digits[1:]
    if not _HEX_PATTERN.match(digits):
        raise ColorFormatError(f"Invalid hex color '{color}'")
    return (
        int(digits[0:2], 16) / 255,
        int(digits[2:4], 16) / 255,
        int(digits[4:6], 16) / 255,
    )


def canonical_color(color: str) -> str:
    """Upper-case ``#RRGGBB`` form of ``color``; malformed input is only stripped."""

    digits = color.strip()
    if not is_valid_color(digits):
        return digits
    return "#" + digits.lstrip("#").upper()


def is_valid_color(color: object) -> bool:
    """Return True when ``color`` parses as ``#RRGGBB``."""

    try:
        _parse_hex(color)  # type: ignore[arg-type]
    except ColorFormatError:
        return False
    return True


def hex_to_hsl(color: str) -> HSL:
    """Convert ``#RRGGBB`` to rounded integer HSL.

    Achromatic colors (r == g == b) yield hue 0 and saturation 0.
    """

    r, g, b = _parse_hex(color)
    high = max(r, g, b)
    low = min(r, g, b)
    lightness = (high + low) / 2

    if high == low:
        hue = saturation = 0.0
    else:
        delta = high - low
        saturation = delta / (2 - high - low) if lightness > 0.5 else delta / (high + low)
        if high == r:
            hue = (g - b) / delta + (6 if g < b else 0)
        elif high == g:
            hue = (b - r) / delta + 2
        else:
            hue = (r - g) / delta + 4
        hue /= 6

    return HSL(
        h=_round_half_up(hue * 360) % 360,
        s=_round_half_up(saturation * 100),
        l=_round_half_up(lightness * 100),
    )


def _hue_to_rgb(p: float, q: float, t: float) -> float:
    if t < 0:
        t += 1
    if t > 1:
        t -= 1
    if t < 1 / 6:
        return p + (q - p) * 6 * t
    if t < 1 / 2:
        return q
    if t < 2 / 3:
        return p + (q - p) * (2 / 3 - t) * 6
    return p


def hsl_to_hex(h: float, s: float, l: float) -> str:  # noqa: E741
    """Convert HSL back to a lowercase ``#rrggbb`` string."""

    hue = (h % 360) / 360
    saturation = max(0.0, min(100.0, s)) / 100
    lightness = max(0.0, min(100.0, l)) / 100

    if saturation == 0:
        r = g = b = lightness
    else:
        q = lightness * (1 + saturation) if lightness < 0.5 else lightness + saturation - lightness * saturation
        p = 2 * lightness - q
        r = _hue_to_rgb(p, q, hue + 1 / 3)
        g = _hue_to_rgb(p, q, hue)
        b = _hue_to_rgb(p, q, hue - 1 / 3)

    channels = [max(0, min(255, _round_half_up(channel * 255))) for channel in (r, g, b)]
    return "#" + "".join(f"{channel:02x}" for channel in channels)


def hue_difference(first: HSL, second: HSL) -> int:
    """Circular hue difference in degrees, always within [0, 180]."""

    diff = abs(first.h - second.h)
    return min(diff, 360 - diff)


def color_distance(color1: str, color2: str) -> float:
    """Weighted HSL distance used for relative color comparison.

    Hue counts double. This is a fixed heuristic, not a perceptual metric.
    """

    hsl1 = hex_to_hsl(color1)
    hsl2 = hex_to_hsl(color2)
    return math.sqrt(
        (hue_difference(hsl1, hsl2) * HUE_WEIGHT) ** 2
        + ((hsl1.s - hsl2.s) * SATURATION_WEIGHT) ** 2
        + ((hsl1.l - hsl2.l) * LIGHTNESS_WEIGHT) ** 2
    )


def generate_harmonious_colors(base_color: str, harmony_type: str = "complementary") -> List[str]:
    """Return ``base_color`` followed by its harmony rotations."""

    base = hex_to_hsl(base_color)
    rule = _HARMONY_ALIASES.get(harmony_type, harmony_type)
    colors = [base_color]

    if rule == "complementary":
        colors.append(hsl_to_hex((base.h + 180) % 360, base.s, base.l))
    elif rule == "triadic":
        colors.extend(
            [
                hsl_to_hex((base.h + 120) % 360, base.s, base.l),
                hsl_to_hex((base.h + 240) % 360, base.s, base.l),
            ]
        )
    elif rule == "analogous":
        colors.extend(
            [
                hsl_to_hex((base.h + 30) % 360, base.s, base.l),
                hsl_to_hex((base.h - 30 + 360) % 360, base.s, base.l),
            ]
        )
    elif rule == "splitComplementary":
        colors.extend(
            [
                hsl_to_hex((base.h + 150) % 360, base.s, base.l),
                hsl_to_hex((base.h + 210) % 360, base.s, base.l),
            ]
        )
    elif rule == "monochromatic":
        colors.extend(
            [
                hsl_to_hex(base.h, max(10, base.s - 30), base.l),
                hsl_to_hex(base.h, min(90, base.s + 20), max(10, base.l - 20)),
                hsl_to_hex(base.h, base.s, min(90, base.l + 20)),
            ]
        )
    else:
        logger.debug("Unknown harmony type '%s', returning base color only", harmony_type)
    return colors


def _pair_score(distance: float) -> float:
    score = 0.0
    if 150 < distance < 210:
        score += 0.9
    if distance < 50:
        score += 0.7
    if 100 < distance < 140:
        score += 0.8
    # identical colors land here too and score 0.4 overall
    if distance < 20:
        score -= 0.3
    if distance > 250:
        score -= 0.2
    return max(0.0, score)


def calculate_color_compatibility(colors1: Sequence[str], colors2: Sequence[str]) -> float:
    """Average bucketed harmony score over every cross-palette pair."""

    if not colors1 or not colors2:
        return 0.0

    total = 0.0
    comparisons = 0
    for color1 in colors1:
        for color2 in colors2:
            try:
                total += _pair_score(color_distance(color1, color2))
            except ColorFormatError as exc:
                logger.warning("Neutral score for malformed color pair: %s", exc)
                total += 0.5
            comparisons += 1
    return max(0.0, min(1.0, total / comparisons)) if comparisons else 0.0


def _classify_hue_difference(diff: int) -> Harmony:
    if abs(diff - 180) < 15:
        return Harmony("complementary", 0.9)
    if abs(diff - 120) < 15 or abs(diff - 240) < 15:
        return Harmony("triadic", 0.8)
    if diff < 30:
        return Harmony("analogous", 0.7)
    if abs(diff - 150) < 15 or abs(diff - 210) < 15:
        return Harmony("split-complementary", 0.75)
    return NO_HARMONY


def find_color_harmonies(colors1: Iterable[str], colors2: Iterable[str]) -> Harmony:
    """Return the single best harmony found across all color pairs."""

    second = list(colors2)
    best = NO_HARMONY
    for color1 in colors1:
        for color2 in second:
            try:
                candidate = _classify_hue_difference(hue_difference(hex_to_hsl(color1), hex_to_hsl(color2)))
            except ColorFormatError as exc:
                logger.warning("Skipping malformed color in harmony scan: %s", exc)
                continue
            if candidate.score > best.score:
                best = candidate
    return best


def generate_neutral_colors(base_hsl: HSL) -> List[str]:
    """Grays and whites plus two pale tints of the base hue."""

    return [
        "#F5F5F5",
        "#E8E8E8",
        "#D3D3D3",
        "#FFFFFF",
        "#F9F9F9",
        hsl_to_hex(base_hsl.h, 5, 85),
        hsl_to_hex(base_hsl.h, 10, 75),
    ]


def generate_warm_neutrals() -> List[str]:
    return ["#F5F5DC", "#FAF0E6", "#FDF5E6", "#FFFAF0", "#F5DEB3", "#DEB887", "#D2B48C"]


def generate_cool_neutrals() -> List[str]:
    return ["#F0F8FF", "#F5F5F5", "#E6E6FA", "#F0FFFF", "#F8F8FF", "#E0E0E0", "#D3D3D3"]


__all__ = [
    "ColorFormatError",
    "HSL",
    "Harmony",
    "HARMONY_ANGLES",
    "NO_HARMONY",
    "canonical_color",
    "is_valid_color",
    "hex_to_hsl",
    "hsl_to_hex",
    "hue_difference",
    "color_distance",
    "generate_harmonious_colors",
    "calculate_color_compatibility",
    "find_color_harmonies",
    "generate_neutral_colors",
    "generate_warm_neutrals",
    "generate_cool_neutrals",
]

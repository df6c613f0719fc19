"""Room-level style aggregation and style suggestions."""

from __future__ import annotations

import logging
import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from logic.match_scoring import calculate_style_compatibility, round_score
from logic.style_classifier import analyze_item_style, dominant_style
from models.color_theory import canonical_color
from models.furniture_item import FurnitureItem
from models.room_palettes import get_room_color_palette
from models.taxonomy import (
    DEFAULT_ROOM_TYPE,
    MIXED_STYLE,
    STYLE_DEFINITIONS,
    UNKNOWN_STYLE,
    get_style_definition,
    get_style_description,
    styles_for_room,
)

logger = logging.getLogger(__name__)

CONFIDENCE_FLOOR = 0.3
MAX_PALETTE_COLORS = 8
RECOMMENDED_STYLE_COUNT = 3


@dataclass(frozen=True)
class RoomStyleSummary:
    """Dominant style of a set of items plus supporting statistics."""

    style: str
    confidence: float
    style_scores: Dict[str, float] = field(default_factory=dict)
    analysis: Dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "style": self.style,
            "confidence": self.confidence,
            "style_scores": dict(self.style_scores),
            "analysis": dict(self.analysis),
        }


def get_recommended_styles(style_scores: Dict[str, float], count: int = RECOMMENDED_STYLE_COUNT) -> List[Dict[str, Any]]:
    ranked = sorted(style_scores.items(), key=lambda kv: kv[1], reverse=True)
    return [{"style": style, "score": round_score(score)} for style, score in ranked[:count]]


def extract_color_palette(items: Sequence[FurnitureItem], limit: int = MAX_PALETTE_COLORS) -> List[str]:
    """Most frequent colors across ``items``, compared case-insensitively; ties keep first-seen order."""

    counts = Counter(canonical_color(color) for item in items for color in item.colors)
    return [color for color, _ in counts.most_common(limit)]


def analyze_price_range(items: Sequence[FurnitureItem]) -> Dict[str, float]:
    prices = [float(item.price) for item in items if item.price and item.price > 0]
    if not prices:
        return {"min": 0, "max": 0, "average": 0}
    return {
        "min": min(prices),
        "max": max(prices),
        "average": int(math.floor(sum(prices) / len(prices) + 0.5)),
    }


def analyze_room_style(items: Sequence[FurnitureItem]) -> RoomStyleSummary:
    """Confidence-weighted average of per-item style scores.

    Items whose classification confidence is at or below ``CONFIDENCE_FLOOR``
    are left out of the average.
    """

    if not items:
        return RoomStyleSummary(style=UNKNOWN_STYLE, confidence=0.0)

    totals = {style: 0.0 for style in STYLE_DEFINITIONS}
    included = 0
    for item in items:
        item_analysis = analyze_item_style(item)
        if item_analysis.confidence <= CONFIDENCE_FLOOR:
            logger.debug("Skipping low-confidence item %s", item.item_id)
            continue
        for style, score in item_analysis.style_scores.items():
            totals[style] += score * item_analysis.confidence
        included += 1

    if included:
        totals = {style: score / included for style, score in totals.items()}
        style = dominant_style(totals, fallback=MIXED_STYLE)
        confidence = totals.get(style, 0.0)
    else:
        style, confidence = MIXED_STYLE, 0.0

    summary = RoomStyleSummary(
        style=style,
        confidence=confidence,
        style_scores=totals,
        analysis={
            "items_analyzed": included,
            "total_items": len(items),
            "recommended_styles": get_recommended_styles(totals),
            "color_palette": extract_color_palette(items),
            "price_range": analyze_price_range(items),
        },
    )
    logger.info("Room style %s (confidence %.2f) from %s/%s items", style, confidence, included, len(items))
    return summary


def get_room_style_suggestions(
    room_type: Optional[str], current_items: Sequence[FurnitureItem] = ()
) -> List[Dict[str, Any]]:
    """Rank the styles typical for ``room_type`` against the current room."""

    current_style: Optional[str] = None
    if current_items:
        summary = analyze_room_style(current_items)
        if summary.style not in {UNKNOWN_STYLE, MIXED_STYLE}:
            current_style = summary.style

    suggestions = []
    for style in styles_for_room(room_type):
        definition = STYLE_DEFINITIONS[style]
        score = 0.5
        if current_style:
            score += calculate_style_compatibility(current_style, style) * 0.5
        suggestions.append(
            {
                "style": style,
                "score": score,
                "definition": {
                    "colors": list(definition.palette[:4]),
                    "characteristics": list(definition.characteristics[:3]),
                    "price_range": definition.price_range.as_dict(),
                    "description": definition.description,
                },
            }
        )
    suggestions.sort(key=lambda suggestion: suggestion["score"], reverse=True)
    return suggestions


def get_style_palette(style: str, room_type: Optional[str] = DEFAULT_ROOM_TYPE) -> Optional[Dict[str, Any]]:
    """Primary palette of ``style`` expanded into a room palette, or ``None``."""

    definition = get_style_definition(style)
    if definition is None:
        return None
    room_palette = get_room_color_palette(definition.palette[0], room_type).as_dict()
    return {
        "style": style,
        "room_type": room_type or DEFAULT_ROOM_TYPE,
        "palette": {"primary": list(definition.palette), **room_palette},
        "style_info": {
            "characteristics": list(definition.characteristics),
            "materials": list(definition.materials),
            "price_range": definition.price_range.as_dict(),
            "description": get_style_description(style),
        },
    }


__all__ = [
    "RoomStyleSummary",
    "CONFIDENCE_FLOOR",
    "analyze_room_style",
    "analyze_price_range",
    "extract_color_palette",
    "get_recommended_styles",
    "get_room_style_suggestions",
    "get_style_palette",
]

"""Deterministic scoring of candidate items against a selected item."""

from __future__ import annotations

import logging
import math
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from logic.color_matching import ColorMatchedItem, ColorMatchOptions, find_color_matches
from logic.style_classifier import analyze_item_style
from models.color_theory import ColorFormatError, calculate_color_compatibility, color_distance
from models.furniture_item import FurnitureItem
from models.taxonomy import (
    CATEGORY_ROOM_TYPES,
    DEFAULT_ROOM_TYPE,
    MATCHER_COMPATIBLE_STYLES,
    ROOM_COMPLEMENTARY_CATEGORIES,
    PriceRange,
    get_style_definition,
    normalize_key,
)

logger = logging.getLogger(__name__)

WEIGHTS = {
    "style": 0.3,
    "color": 0.25,
    "category": 0.2,
    "price": 0.15,
    "size": 0.1,
}

NEUTRAL_SCORE = 0.5
SAME_CATEGORY_SCORE = 0.1
COMPLEMENTARY_CATEGORY_SCORE = 0.95
UNRELATED_CATEGORY_SCORE = 0.3
COLOR_MATCH_THRESHOLD = 0.3

MODE_SCORE = "score"
MODE_COLOR = "color"


def _clamp(value: float) -> float:
    if math.isnan(value):
        return NEUTRAL_SCORE
    return max(0.0, min(1.0, value))


@dataclass(frozen=True)
class MatchScore:
    overall: float
    style_score: float
    color_score: float
    category_score: float
    price_score: float
    size_score: float

    def as_dict(self) -> Dict[str, float]:
        return {
            "overall": self.overall,
            "style_score": self.style_score,
            "color_score": self.color_score,
            "category_score": self.category_score,
            "price_score": self.price_score,
            "size_score": self.size_score,
        }


@dataclass(frozen=True)
class ScoredItem:
    """A candidate wrapped with its weighted match score."""

    item: FurnitureItem
    match_score: MatchScore

    def to_dict(self) -> Dict[str, Any]:
        payload = self.item.to_dict()
        payload["match_score"] = self.match_score.as_dict()
        return payload


def style_score(selected: FurnitureItem, candidate: FurnitureItem) -> float:
    if not selected.style or not candidate.style:
        return NEUTRAL_SCORE
    if selected.style == candidate.style:
        return 1.0
    if candidate.style in MATCHER_COMPATIBLE_STYLES.get(selected.style, frozenset()):
        return 0.7
    return 0.3


def color_score(selected: FurnitureItem, candidate: FurnitureItem) -> float:
    """Fraction of the selected colors echoed somewhere in the candidate."""

    if not selected.colors or not candidate.colors:
        return NEUTRAL_SCORE

    matched = 0.0
    for color in selected.colors:
        try:
            if any(color_distance(color, other) / 300 < COLOR_MATCH_THRESHOLD for other in candidate.colors):
                matched += 1
        except ColorFormatError as exc:
            logger.warning("Neutral color credit for malformed color: %s", exc)
            matched += NEUTRAL_SCORE
    return _clamp(matched / len(selected.colors))


def category_score(selected: FurnitureItem, candidate: FurnitureItem) -> float:
    if not selected.category or not candidate.category:
        return NEUTRAL_SCORE
    if selected.category == candidate.category:
        return SAME_CATEGORY_SCORE
    if candidate.category in ROOM_COMPLEMENTARY_CATEGORIES.get(selected.category, frozenset()):
        return COMPLEMENTARY_CATEGORY_SCORE
    return UNRELATED_CATEGORY_SCORE


def price_score(selected: FurnitureItem, candidate: FurnitureItem) -> float:
    if not selected.has_price or not candidate.has_price:
        return NEUTRAL_SCORE
    low, high = sorted((float(selected.price), float(candidate.price)))  # type: ignore[arg-type]
    return low / high


def size_score(selected: FurnitureItem, candidate: FurnitureItem) -> float:
    if not selected.dimensions or not candidate.dimensions:
        return NEUTRAL_SCORE
    first, second = selected.dimensions.footprint, candidate.dimensions.footprint
    if first <= 0 or second <= 0:
        return NEUTRAL_SCORE
    return min(first, second) / max(first, second)


def compute_match_score(selected: FurnitureItem, candidate: FurnitureItem) -> MatchScore:
    """Weighted style, color, category, price and size score for one pair."""

    scores = {
        "style": style_score(selected, candidate),
        "color": color_score(selected, candidate),
        "category": category_score(selected, candidate),
        "price": price_score(selected, candidate),
        "size": size_score(selected, candidate),
    }
    overall = _clamp(sum(scores[name] * weight for name, weight in WEIGHTS.items()))
    return MatchScore(
        overall=overall,
        style_score=scores["style"],
        color_score=scores["color"],
        category_score=scores["category"],
        price_score=scores["price"],
        size_score=scores["size"],
    )


def calculate_price_range_overlap(range1: PriceRange, range2: PriceRange) -> float:
    """Shared price span divided by the combined span; 0 when disjoint."""

    overlap_min = max(range1.min, range2.min)
    overlap_max = min(range1.max, range2.max)
    if overlap_min > overlap_max:
        return 0.0
    total = max(range1.max, range2.max) - min(range1.min, range2.min)
    if total <= 0:
        return 1.0
    return (overlap_max - overlap_min) / total


def calculate_style_compatibility(style_a: Optional[str], style_b: Optional[str]) -> float:
    """How well two taxonomy styles sit together in one room."""

    if style_a == style_b and style_a is not None:
        return 1.0
    first = get_style_definition(style_a)
    second = get_style_definition(style_b)
    if first is None or second is None:
        return NEUTRAL_SCORE
    if second.name in first.compatible_with:
        return 0.8
    if second.name in first.opposites:
        return 0.2

    palette = calculate_color_compatibility(first.palette, second.palette)
    overlap = calculate_price_range_overlap(first.price_range, second.price_range)
    return _clamp(palette * 0.6 + overlap * 0.4)


def detect_room_type(category: Optional[str]) -> str:
    return CATEGORY_ROOM_TYPES.get(normalize_key(category), DEFAULT_ROOM_TYPE)


def _cap(candidates: Sequence[FurnitureItem], max_candidates: Optional[int]) -> List[FurnitureItem]:
    pool = list(candidates)
    if max_candidates is not None and len(pool) > max_candidates:
        logger.info("Capping candidate pool from %s to %s", len(pool), max_candidates)
        pool = pool[:max_candidates]
    return pool


def rank_by_match_score(
    selected: FurnitureItem,
    candidates: Sequence[FurnitureItem],
    max_workers: int = 1,
) -> List[ScoredItem]:
    """Score every candidate and sort by ``overall`` descending (stable)."""

    if max_workers > 1 and len(candidates) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            scores = list(executor.map(lambda candidate: compute_match_score(selected, candidate), candidates))
    else:
        scores = [compute_match_score(selected, candidate) for candidate in candidates]

    ranked = [ScoredItem(item=item, match_score=score) for item, score in zip(candidates, scores)]
    ranked.sort(key=lambda scored: scored.match_score.overall, reverse=True)
    return ranked


def rank_matches(
    selected: FurnitureItem,
    candidates: Sequence[FurnitureItem],
    mode: Optional[str] = None,
    options: ColorMatchOptions | None = None,
    max_candidates: Optional[int] = None,
    max_workers: int = 1,
) -> List[ScoredItem] | List[ColorMatchedItem]:
    """Rank ``candidates`` for ``selected``.

    ``mode="color"`` ranks by color match, ``mode="score"`` by the weighted
    match score. Without a mode, color ranking is used whenever the selected
    item carries colors.
    """

    resolved = mode or (MODE_COLOR if selected.colors else MODE_SCORE)
    if resolved not in {MODE_COLOR, MODE_SCORE}:
        raise ValueError(f"Unsupported ranking mode '{mode}'. Allowed: {[MODE_COLOR, MODE_SCORE]}")

    pool = _cap(candidates, max_candidates)
    logger.info("Ranking %s candidates for %s using %s mode", len(pool), selected.item_id, resolved)
    if resolved == MODE_COLOR:
        opts = options or ColorMatchOptions(room_type=detect_room_type(selected.category))
        return find_color_matches(selected.colors, pool, opts)
    return rank_by_match_score(selected, pool, max_workers=max_workers)


def compatibility_level(score: float) -> str:
    if score >= 0.8:
        return "Excellent"
    if score >= 0.6:
        return "Good"
    if score >= 0.4:
        return "Fair"
    return "Poor"


def round_score(value: float) -> float:
    """Round to two decimals with halves rounded up."""

    return math.floor(value * 100 + 0.5) / 100


def analyze_item_compatibility(item1: FurnitureItem, item2: FurnitureItem) -> Dict[str, Any]:
    """Compare two items through their dominant styles and their colors."""

    first = analyze_item_style(item1)
    second = analyze_item_style(item2)
    style_value = calculate_style_compatibility(first.dominant_style, second.dominant_style)
    color_value = (
        calculate_color_compatibility(item1.colors, item2.colors) if item1.colors and item2.colors else 0.0
    )
    overall = style_value * 0.7 + color_value * 0.3

    return {
        "compatibility": {
            "overall": round_score(overall),
            "style": round_score(style_value),
            "color": round_score(color_value),
        },
        "analysis": {
            "item1": {
                "dominant_style": first.dominant_style,
                "confidence": round_score(first.confidence),
                "style_scores": first.style_scores,
            },
            "item2": {
                "dominant_style": second.dominant_style,
                "confidence": round_score(second.confidence),
                "style_scores": second.style_scores,
            },
        },
        "level": compatibility_level(overall),
    }


__all__ = [
    "WEIGHTS",
    "MatchScore",
    "ScoredItem",
    "MODE_SCORE",
    "MODE_COLOR",
    "compute_match_score",
    "calculate_style_compatibility",
    "calculate_price_range_overlap",
    "detect_room_type",
    "rank_by_match_score",
    "rank_matches",
    "analyze_item_compatibility",
    "compatibility_level",
    "round_score",
]

"""Deterministic style classification for single furniture items."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Sequence

from models.color_theory import ColorFormatError, color_distance, hex_to_hsl
from models.furniture_item import FurnitureItem
from models.taxonomy import (
    CATEGORY_STYLE_AFFINITY,
    DEFAULT_CATEGORY_AFFINITY,
    STYLE_DEFINITIONS,
    UNKNOWN_STYLE,
    StyleDefinition,
    is_known_style,
    normalize_key,
)

logger = logging.getLogger(__name__)

SIGNAL_WEIGHTS = {
    "tag": 0.5,
    "color": 0.3,
    "price": 0.1,
    "text": 0.2,
    "category": 0.1,
}

CONFIDENCE_INCREMENTS = {
    "tag": 0.3,
    "color": 0.2,
    "price": 0.1,
    "text": 0.15,
    "category": 0.05,
}

COLOR_SIMILARITY_THRESHOLD = 100


@dataclass(frozen=True)
class StyleAnalysis:
    """Per-style scores for one item and how much signal backed them."""

    style_scores: Dict[str, float]
    confidence: float
    dominant_style: str

    def as_dict(self) -> Dict[str, object]:
        return {
            "style_scores": dict(self.style_scores),
            "confidence": self.confidence,
            "dominant_style": self.dominant_style,
        }


def _empty_scores(definitions: Mapping[str, StyleDefinition]) -> Dict[str, float]:
    return {style: 0.0 for style in definitions}


def dominant_style(scores: Mapping[str, float], fallback: str = UNKNOWN_STYLE) -> str:
    """Return the first style reaching the maximum score, in declaration order."""

    best_style: Optional[str] = None
    best_score = 0.0
    for style, score in scores.items():
        if score > best_score:
            best_style, best_score = style, score
    return best_style or fallback


def score_colors(
    colors: Sequence[str], definitions: Mapping[str, StyleDefinition] = STYLE_DEFINITIONS
) -> Dict[str, float]:
    """Closeness of the item colors to each style palette, normalised to [0, 1]."""

    scores = _empty_scores(definitions)
    for color in colors:
        try:
            hex_to_hsl(color)
        except ColorFormatError as exc:
            logger.warning("Ignoring malformed item color during classification: %s", exc)
            continue
        for style, definition in definitions.items():
            for style_color in definition.palette:
                distance = color_distance(color, style_color)
                if distance < COLOR_SIMILARITY_THRESHOLD:
                    scores[style] += (COLOR_SIMILARITY_THRESHOLD - distance) / COLOR_SIMILARITY_THRESHOLD

    top = max(scores.values(), default=0.0)
    if top > 0:
        scores = {style: score / top for style, score in scores.items()}
    return scores


def score_price(price: float, definitions: Mapping[str, StyleDefinition] = STYLE_DEFINITIONS) -> Dict[str, float]:
    """Fit of ``price`` against each style's typical price range."""

    scores: Dict[str, float] = {}
    for style, definition in definitions.items():
        low, high = definition.price_range.min, definition.price_range.max
        if low <= price <= high:
            scores[style] = 1.0
        elif price < low:
            scores[style] = price / low * 0.7
        else:
            scores[style] = max(0.0, 1 - (price - high) / high * 0.5)
    return scores


def score_text(
    title: str = "", description: str = "", definitions: Mapping[str, StyleDefinition] = STYLE_DEFINITIONS
) -> Dict[str, float]:
    """Keyword hits for style names, characteristics and materials."""

    text = f"{title or ''} {description or ''}".lower()
    scores: Dict[str, float] = {}
    for style, definition in definitions.items():
        score = 0.0
        if style in text:
            score += 0.5
        score += 0.2 * sum(1 for keyword in definition.characteristics if keyword in text)
        score += 0.3 * sum(1 for material in definition.materials if material in text)
        scores[style] = min(1.0, score)
    return scores


def score_category(
    category: Optional[str], definitions: Mapping[str, StyleDefinition] = STYLE_DEFINITIONS
) -> Dict[str, float]:
    affinities = CATEGORY_STYLE_AFFINITY.get(normalize_key(category), {})
    return {style: affinities.get(style, DEFAULT_CATEGORY_AFFINITY) for style in definitions}


def analyze_item_style(item: FurnitureItem) -> StyleAnalysis:
    """Blend the tag, color, price, text and category signals for ``item``."""

    scores = _empty_scores(STYLE_DEFINITIONS)
    confidence = 0.0

    if is_known_style(item.style):
        scores[item.style] += SIGNAL_WEIGHTS["tag"]  # type: ignore[index]
        confidence += CONFIDENCE_INCREMENTS["tag"]

    if item.colors:
        for style, score in score_colors(item.colors).items():
            scores[style] += score * SIGNAL_WEIGHTS["color"]
        confidence += CONFIDENCE_INCREMENTS["color"]

    if item.has_price:
        for style, score in score_price(float(item.price)).items():  # type: ignore[arg-type]
            scores[style] += score * SIGNAL_WEIGHTS["price"]
        confidence += CONFIDENCE_INCREMENTS["price"]

    for style, score in score_text(item.title, item.description).items():
        scores[style] += score * SIGNAL_WEIGHTS["text"]
    confidence += CONFIDENCE_INCREMENTS["text"]

    for style, score in score_category(item.category).items():
        scores[style] += score * SIGNAL_WEIGHTS["category"]
    confidence += CONFIDENCE_INCREMENTS["category"]

    analysis = StyleAnalysis(
        style_scores=scores,
        confidence=min(1.0, confidence),
        dominant_style=dominant_style(scores),
    )
    logger.debug(
        "Classified item %s as %s (confidence %.2f)", item.item_id, analysis.dominant_style, analysis.confidence
    )
    return analysis


__all__ = [
    "StyleAnalysis",
    "SIGNAL_WEIGHTS",
    "CONFIDENCE_INCREMENTS",
    "analyze_item_style",
    "dominant_style",
    "score_colors",
    "score_price",
    "score_text",
    "score_category",
]

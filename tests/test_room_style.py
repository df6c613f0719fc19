"""Tests for room-level style aggregation and suggestions."""

from pathlib import Path
import sys

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic.room_style import (
    analyze_price_range,
    analyze_room_style,
    extract_color_palette,
    get_recommended_styles,
    get_room_style_suggestions,
    get_style_palette,
)
from models.furniture_item import FurnitureItem


def _modern_item(item_id: str, **overrides) -> FurnitureItem:
    fields = dict(
        item_id=item_id,
        title="Sleek table",
        style="modern",
        price=500,
        category="table",
        colors=("#FFFFFF",),
    )
    fields.update(overrides)
    return FurnitureItem(**fields)


def test_empty_room_returns_unknown():
    summary = analyze_room_style([])
    assert summary.as_dict() == {"style": "unknown", "confidence": 0.0, "style_scores": {}, "analysis": {}}


def test_low_confidence_items_yield_mixed():
    summary = analyze_room_style([FurnitureItem(item_id="a"), FurnitureItem(item_id="b")])
    assert summary.style == "mixed"
    assert summary.confidence == 0.0
    assert summary.analysis["items_analyzed"] == 0
    assert summary.analysis["total_items"] == 2
    assert set(summary.style_scores.values()) == {0.0}


def test_modern_room_is_detected():
    items = [_modern_item("t1"), _modern_item("t2"), FurnitureItem(item_id="weak")]
    summary = analyze_room_style(items)
    assert summary.style == "modern"
    assert summary.analysis["items_analyzed"] == 2
    assert summary.analysis["total_items"] == 3
    assert summary.confidence == pytest.approx(summary.style_scores["modern"])
    recommended = summary.analysis["recommended_styles"]
    assert len(recommended) == 3
    assert recommended[0]["style"] == "modern"


def test_recommended_styles_are_rounded():
    ranked = get_recommended_styles({"modern": 0.12345, "rustic": 0.5, "bohemian": 0.3, "industrial": 0.1})
    assert ranked == [
        {"style": "rustic", "score": 0.5},
        {"style": "bohemian", "score": 0.3},
        {"style": "modern", "score": 0.12},
    ]


def test_color_palette_orders_by_frequency_then_first_seen():
    items = [
        FurnitureItem(item_id="1", colors=("#AAAAAA", "#BBBBBB")),
        FurnitureItem(item_id="2", colors=("#BBBBBB", "#CCCCCC")),
        FurnitureItem(item_id="3", colors=("#CCCCCC",)),
    ]
    assert extract_color_palette(items) == ["#BBBBBB", "#CCCCCC", "#AAAAAA"]


def test_color_palette_is_capped_at_eight():
    items = [FurnitureItem(item_id=str(i), colors=(f"#0000{i:02X}",)) for i in range(12)]
    assert len(extract_color_palette(items)) == 8


def test_price_range_statistics():
    items = [
        FurnitureItem(item_id="a", price=100),
        FurnitureItem(item_id="b", price=251),
        FurnitureItem(item_id="c"),
        FurnitureItem(item_id="d", price=0),
    ]
    assert analyze_price_range(items) == {"min": 100, "max": 251, "average": 176}
    assert analyze_price_range([FurnitureItem(item_id="e")]) == {"min": 0, "max": 0, "average": 0}


def test_room_suggestions_without_current_items_keep_room_order():
    suggestions = get_room_style_suggestions("bedroom")
    assert [s["style"] for s in suggestions] == ["scandinavian", "minimalist", "bohemian", "traditional"]
    assert all(s["score"] == 0.5 for s in suggestions)
    assert len(suggestions[0]["definition"]["colors"]) == 4
    assert len(suggestions[0]["definition"]["characteristics"]) == 3


def test_room_suggestions_favour_current_style():
    suggestions = get_room_style_suggestions("living", [_modern_item("t1"), _modern_item("t2")])
    assert suggestions[0]["style"] == "modern"
    assert suggestions[0]["score"] == pytest.approx(1.0)


def test_unknown_room_type_falls_back_to_living():
    assert [s["style"] for s in get_room_style_suggestions("garage")] == [
        s["style"] for s in get_room_style_suggestions("living")
    ]


def test_style_palette():
    palette = get_style_palette("modern", "kitchen")
    assert palette["palette"]["primary"][0] == "#FFFFFF"
    assert set(palette["palette"]) == {"primary", "accent", "neutral", "secondary"}
    assert palette["style_info"]["description"].startswith("Clean lines")
    assert get_style_palette("gothic") is None


def test_recommended_scores_round_halves_up():
    assert get_recommended_styles({"modern": 0.125}) == [{"style": "modern", "score": 0.13}]


def test_color_palette_counts_colors_case_insensitively():
    items = [
        FurnitureItem(item_id="1", colors=("#AAAAAA",)),
        FurnitureItem(item_id="2", colors=("#ffffff",)),
        FurnitureItem(item_id="3", colors=("#FFFFFF", "ffffff")),
    ]
    assert extract_color_palette(items) == ["#FFFFFF", "#AAAAAA"]

"""Tests for color-first candidate ranking."""

from pathlib import Path
import sys

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic.color_matching import (
    REASON_BASIC,
    REASON_NO_COLORS,
    REASON_NO_TARGET,
    ColorMatchOptions,
    calculate_neutral_score,
    calculate_room_color_score,
    find_color_matches,
    harmony_reason,
)
from models.furniture_item import FurnitureItem
from models.room_palettes import get_room_color_palette

RED = FurnitureItem(item_id="red", colors=("#FF0000",))
CYAN = FurnitureItem(item_id="cyan", colors=("#00FFFF",))
BARE = FurnitureItem(item_id="bare")
WHITE = FurnitureItem(item_id="white", colors=("#FFFFFF",))


def test_ranking_order_and_reasons() -> None:
    matches = find_color_matches(["#FF0000"], [BARE, CYAN, RED])

    assert [match.item.item_id for match in matches] == ["red", "cyan", "bare"]
    assert matches[0].match_reason == harmony_reason("analogous")
    assert matches[1].match_reason == "complementary color harmony"
    assert matches[2].match_reason == REASON_NO_COLORS
    assert matches[2].color_match_score == 0.0
    scores = [match.color_match_score for match in matches]
    assert scores == sorted(scores, reverse=True)
    assert all(0.0 <= score <= 1.0 for score in scores)


def test_harmony_is_reported_on_matches() -> None:
    match = find_color_matches(["#FF0000"], [CYAN])[0]
    assert match.harmonies.type == "complementary"
    assert match.harmonies.score == 0.9
    assert match.compatibility_score == 0.0


def test_neutral_score_for_white() -> None:
    assert calculate_neutral_score(["#FFFFFF"]) == pytest.approx(0.7)
    assert calculate_neutral_score([]) == 0.0
    assert calculate_neutral_score(["#FF0000"]) == 0.0


def test_excluding_neutrals_drops_neutral_weight() -> None:
    with_neutrals = find_color_matches(["#FF0000"], [WHITE])[0]
    without = find_color_matches(["#FF0000"], [WHITE], ColorMatchOptions(include_neutrals=False))[0]
    assert with_neutrals.color_match_score - without.color_match_score == pytest.approx(0.07)


def test_empty_target_scores_zero() -> None:
    matches = find_color_matches([], [RED, CYAN])
    assert all(match.color_match_score == 0.0 for match in matches)
    assert all(match.match_reason == REASON_NO_TARGET for match in matches)


def test_malformed_candidate_colors_fall_back() -> None:
    broken = FurnitureItem(item_id="broken", colors=("not-a-color",))
    match = find_color_matches(["#FF0000"], [broken])[0]
    assert match.match_reason == REASON_BASIC
    assert 0.0 < match.color_match_score < 0.5


def test_room_color_score_is_best_proximity() -> None:
    palette = get_room_color_palette("#FF0000", "living")
    assert calculate_room_color_score(["#FF0000"], palette) == pytest.approx(1.0)
    assert calculate_room_color_score([], palette) == 0.0


def test_match_to_dict_extends_item_fields() -> None:
    payload = find_color_matches(["#FF0000"], [RED])[0].to_dict()
    assert payload["id"] == "red"
    assert payload["colors"] == ["#FF0000"]
    assert set(payload) >= {"color_match_score", "match_reason", "harmonies", "compatibility_score"}
    assert payload["harmonies"]["type"] == "analogous"


def test_inputs_are_not_mutated() -> None:
    candidates = [CYAN, RED]
    find_color_matches(["#FF0000"], candidates)
    assert [item.item_id for item in candidates] == ["cyan", "red"]

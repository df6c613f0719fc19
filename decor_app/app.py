"""Style engine facade used by the HTTP layer and local scripts."""

from __future__ import annotations

import dataclasses
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from decor_app.config import EngineConfig
from decor_app.logging_config import configure_logging, get_logger, log_event
from logic.color_matching import ColorMatchedItem, ColorMatchOptions, find_color_matches
from logic.match_scoring import (
    MatchScore,
    ScoredItem,
    analyze_item_compatibility,
    calculate_style_compatibility,
    compute_match_score,
    detect_room_type,
    rank_matches,
)
from logic.room_style import (
    RoomStyleSummary,
    analyze_room_style,
    get_room_style_suggestions,
    get_style_palette,
)
from logic.style_classifier import StyleAnalysis, analyze_item_style
from models.furniture_item import FurnitureItem, from_raw_metadata
from models.room_palettes import RoomPalette, get_room_color_palette
from tools.observability import instrument_operation

LOGGER = get_logger(__name__)

ItemLike = Union[FurnitureItem, Mapping[str, Any]]


class StyleEngine:
    """Stateless entry points over the style taxonomy and scoring policy.

    Every method accepts :class:`FurnitureItem` instances or loose listing
    dictionaries. Inputs are never mutated.
    """

    def __init__(self, config: EngineConfig | None = None, configure: bool = False) -> None:
        self.config = config or EngineConfig.from_env()
        if configure:
            configure_logging(self.config.log_level)

    def _coerce_item(self, raw: ItemLike) -> FurnitureItem:
        item = raw if isinstance(raw, FurnitureItem) else from_raw_metadata(dict(raw))
        if len(item.colors) > self.config.max_colors_per_item:
            item = dataclasses.replace(item, colors=item.colors[: self.config.max_colors_per_item])
        return item

    def _coerce_items(self, raw_items: Iterable[ItemLike]) -> List[FurnitureItem]:
        items = []
        for raw in raw_items:
            try:
                items.append(self._coerce_item(raw))
            except ValueError as exc:
                log_event(LOGGER, logging.WARNING, "item_skipped", reason=str(exc))
        return items

    def _cap_colors(self, colors: Sequence[str]) -> List[str]:
        return list(colors)[: self.config.max_colors_per_item]

    @instrument_operation("classify_item_style")
    def classify_item_style(self, item: ItemLike) -> StyleAnalysis:
        return analyze_item_style(self._coerce_item(item))

    @instrument_operation("analyze_room_style")
    def analyze_room_style(self, items: Iterable[ItemLike]) -> RoomStyleSummary:
        return analyze_room_style(self._coerce_items(items))

    @instrument_operation("style_compatibility")
    def style_compatibility(self, style_a: Optional[str], style_b: Optional[str]) -> float:
        return calculate_style_compatibility(style_a, style_b)

    @instrument_operation("find_color_matches")
    def find_color_matches(
        self,
        target_colors: Sequence[str],
        candidates: Iterable[ItemLike],
        options: ColorMatchOptions | None = None,
    ) -> List[ColorMatchedItem]:
        pool = self._coerce_items(candidates)[: self.config.max_candidates]
        opts = options or ColorMatchOptions(room_type=self.config.default_room_type)
        return find_color_matches(self._cap_colors(target_colors), pool, opts)

    @instrument_operation("compute_match_score")
    def compute_match_score(self, selected: ItemLike, candidate: ItemLike) -> MatchScore:
        return compute_match_score(self._coerce_item(selected), self._coerce_item(candidate))

    @instrument_operation("rank_matches")
    def rank_matches(
        self,
        selected: ItemLike,
        candidates: Iterable[ItemLike],
        mode: Optional[str] = None,
        options: ColorMatchOptions | None = None,
    ) -> Union[List[ScoredItem], List[ColorMatchedItem]]:
        return rank_matches(
            self._coerce_item(selected),
            self._coerce_items(candidates),
            mode=mode,
            options=options,
            max_candidates=self.config.max_candidates,
            max_workers=self.config.max_workers,
        )

    @instrument_operation("get_room_color_palette")
    def get_room_color_palette(self, primary_color: str, room_type: Optional[str] = None) -> RoomPalette:
        return get_room_color_palette(primary_color, room_type or self.config.default_room_type)

    @instrument_operation("room_style_suggestions")
    def room_style_suggestions(
        self, room_type: Optional[str], current_items: Iterable[ItemLike] = ()
    ) -> List[Dict[str, Any]]:
        return get_room_style_suggestions(room_type, self._coerce_items(current_items))

    @instrument_operation("item_compatibility")
    def item_compatibility(self, item1: ItemLike, item2: ItemLike) -> Dict[str, Any]:
        return analyze_item_compatibility(self._coerce_item(item1), self._coerce_item(item2))

    @instrument_operation("style_palette")
    def style_palette(self, style: str, room_type: Optional[str] = None) -> Optional[Dict[str, Any]]:
        return get_style_palette(style, room_type or self.config.default_room_type)

    def room_type_for(self, item: ItemLike) -> str:
        return detect_room_type(self._coerce_item(item).category)


__all__ = ["StyleEngine", "ItemLike"]

"""Pydantic schemas for validating engine request payloads."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from logic.color_matching import ColorMatchOptions
from models.color_theory import HARMONY_ANGLES


class DimensionsPayload(BaseModel):
    width: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    height: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    depth: Optional[float] = Field(None, ge=0, allow_inf_nan=False)


class ItemPayload(BaseModel):
    """Loose listing record accepted at the HTTP boundary."""

    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    title: str = ""
    description: str = ""
    price: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    category: Optional[str] = None
    style: Optional[str] = None
    colors: List[str] = Field(default_factory=list)
    dimensions: Optional[DimensionsPayload] = None
    source: Optional[str] = None
    url: Optional[str] = None
    image_url: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> Any:
        return str(value) if isinstance(value, int) else value

    def to_raw(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class ColorMatchOptionsPayload(BaseModel):
    harmony_type: str = "complementary"
    tolerance_level: float = Field(0.5, ge=0, le=1)
    include_neutrals: bool = True
    room_type: str = "living"

    @field_validator("harmony_type")
    @classmethod
    def _validate_harmony(cls, value: str) -> str:
        if value not in HARMONY_ANGLES:
            raise ValueError(f"Unsupported harmony type '{value}'. Allowed: {sorted(HARMONY_ANGLES)}")
        return value

    def to_options(self) -> ColorMatchOptions:
        return ColorMatchOptions(**self.model_dump())


class RoomAnalysisRequest(BaseModel):
    items: List[ItemPayload]
    room_type: Optional[str] = None


class CompatibilityRequest(BaseModel):
    item1: ItemPayload
    item2: ItemPayload


class FindMatchesRequest(BaseModel):
    selected_item: ItemPayload
    candidates: List[ItemPayload] = Field(default_factory=list)
    mode: Optional[Literal["score", "color"]] = None
    options: Optional[ColorMatchOptionsPayload] = None


class MatchScoreRequest(BaseModel):
    selected_item: ItemPayload
    candidate: ItemPayload


class PaletteRequest(BaseModel):
    primary_color: str = Field(min_length=6)
    room_type: Optional[str] = None


__all__ = [
    "DimensionsPayload",
    "ItemPayload",
    "ColorMatchOptionsPayload",
    "RoomAnalysisRequest",
    "CompatibilityRequest",
    "FindMatchesRequest",
    "MatchScoreRequest",
    "PaletteRequest",
]

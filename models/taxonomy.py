"""Canonical interior-design style taxonomy.

This module centralises the eight recognised styles together with the lookup
tables that the classifier and matcher share: category affinities, the
room-completing category map and room type defaults. Everything is built once
at import time and exposed through read-only mappings.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, FrozenSet, List, Mapping, Optional, Tuple


def normalize_key(value: Optional[str]) -> str:
    """Normalise a free-form string into a taxonomy key."""

    return (value or "").strip().lower().replace(" ", "_")


@dataclass(frozen=True)
class PriceRange:
    min: float
    max: float

    def contains(self, price: float) -> bool:
        return self.min <= price <= self.max

    def as_dict(self) -> Dict[str, float]:
        return {"min": self.min, "max": self.max}


@dataclass(frozen=True)
class StyleDefinition:
    """Reference data describing one interior-design style."""

    name: str
    palette: Tuple[str, ...]
    materials: Tuple[str, ...]
    characteristics: Tuple[str, ...]
    price_range: PriceRange
    compatible_with: FrozenSet[str]
    opposites: FrozenSet[str]
    description: str


def _style(
    name: str,
    palette: List[str],
    materials: List[str],
    characteristics: List[str],
    price: Tuple[float, float],
    compatible_with: List[str],
    opposites: List[str],
    description: str,
) -> StyleDefinition:
    return StyleDefinition(
        name=name,
        palette=tuple(palette),
        materials=tuple(materials),
        characteristics=tuple(characteristics),
        price_range=PriceRange(min=price[0], max=price[1]),
        compatible_with=frozenset(compatible_with),
        opposites=frozenset(opposites),
        description=description,
    )


# Declaration order is the tie-break order for every argmax over styles.
_STYLES: Tuple[StyleDefinition, ...] = (
    _style(
        "modern",
        ["#FFFFFF", "#000000", "#808080", "#C0C0C0"],
        ["glass", "metal", "leather", "concrete"],
        ["clean lines", "minimal", "geometric", "sleek"],
        (300, 2000),
        ["minimalist", "industrial", "scandinavian"],
        ["traditional", "rustic", "vintage"],
        "Clean lines, minimal ornamentation, and a focus on function over form.",
    ),
    _style(
        "minimalist",
        ["#FFFFFF", "#F5F5F5", "#E8E8E8", "#CCCCCC"],
        ["wood", "glass", "steel", "ceramic"],
        ["simple", "functional", "uncluttered", "serene"],
        (200, 1500),
        ["modern", "scandinavian", "japanese"],
        ["maximalist", "baroque", "ornate"],
        "Less is more - emphasizing simplicity, functionality, and open space.",
    ),
    _style(
        "rustic",
        ["#8B4513", "#DEB887", "#D2B48C", "#CD853F"],
        ["reclaimed wood", "iron", "stone", "leather"],
        ["weathered", "natural", "handcrafted", "cozy"],
        (150, 1200),
        ["industrial", "farmhouse", "traditional"],
        ["modern", "minimalist", "futuristic"],
        "Natural materials, weathered textures, and a cozy, lived-in feel.",
    ),
    _style(
        "industrial",
        ["#2F2F2F", "#4A4A4A", "#C0C0C0", "#8B4513"],
        ["metal", "exposed brick", "concrete", "reclaimed wood"],
        ["raw", "utilitarian", "exposed", "urban"],
        (250, 1800),
        ["modern", "rustic", "loft"],
        ["traditional", "romantic", "ornate"],
        "Raw materials like metal and concrete with an urban, warehouse aesthetic.",
    ),
    _style(
        "traditional",
        ["#8B0000", "#DAA520", "#228B22", "#4B0082"],
        ["mahogany", "cherry wood", "brass", "velvet"],
        ["elegant", "formal", "symmetric", "classic"],
        (400, 3000),
        ["transitional", "classic", "formal"],
        ["modern", "industrial", "minimalist"],
        "Classic elegance with rich materials, formal symmetry, and timeless appeal.",
    ),
    _style(
        "scandinavian",
        ["#FFFFFF", "#F0F0F0", "#8FBC8F", "#DDA0DD"],
        ["light wood", "wool", "linen", "ceramic"],
        ["hygge", "functional", "light", "cozy"],
        (200, 1000),
        ["minimalist", "modern", "nordic"],
        ["baroque", "gothic", "heavy"],
        "Light woods, neutral colors, and hygge-inspired coziness.",
    ),
    _style(
        "bohemian",
        ["#FF69B4", "#FFD700", "#32CD32", "#FF4500"],
        ["textiles", "rattan", "macrame", "brass"],
        ["eclectic", "layered", "artistic", "free-spirited"],
        (100, 800),
        ["eclectic", "artistic", "global"],
        ["minimalist", "modern", "formal"],
        "Eclectic mix of colors, patterns, and global influences for a free-spirited vibe.",
    ),
    _style(
        "mediterranean",
        ["#4682B4", "#F0E68C", "#CD853F", "#FF6347"],
        ["terracotta", "wrought iron", "ceramic", "stone"],
        ["warm", "textured", "coastal", "earthy"],
        (300, 1500),
        ["coastal", "rustic", "southwestern"],
        ["industrial", "modern", "minimalist"],
        "Warm earth tones, natural textures, and coastal-inspired elements.",
    ),
)

STYLE_DEFINITIONS: Mapping[str, StyleDefinition] = MappingProxyType({style.name: style for style in _STYLES})
STYLE_NAMES: Tuple[str, ...] = tuple(STYLE_DEFINITIONS)

UNKNOWN_STYLE = "unknown"
MIXED_STYLE = "mixed"
DEFAULT_STYLE_DESCRIPTION = "A distinctive style with its own unique characteristics."

ROOM_TYPE_STYLES: Mapping[str, Tuple[str, ...]] = MappingProxyType(
    {
        "living": ("modern", "traditional", "scandinavian", "industrial"),
        "bedroom": ("scandinavian", "minimalist", "bohemian", "traditional"),
        "kitchen": ("modern", "industrial", "traditional", "mediterranean"),
        "dining": ("traditional", "modern", "industrial", "mediterranean"),
        "office": ("modern", "minimalist", "industrial", "scandinavian"),
        "bathroom": ("modern", "scandinavian", "mediterranean", "minimalist"),
    }
)
DEFAULT_ROOM_TYPE = "living"

CATEGORY_STYLE_AFFINITY: Mapping[str, Mapping[str, float]] = MappingProxyType(
    {
        "sofa": MappingProxyType({"modern": 0.8, "minimalist": 0.7, "traditional": 0.9}),
        "chair": MappingProxyType({"modern": 0.7, "industrial": 0.8, "traditional": 0.8}),
        "table": MappingProxyType({"modern": 0.9, "rustic": 0.8, "industrial": 0.7}),
        "lamp": MappingProxyType({"modern": 0.8, "industrial": 0.9, "scandinavian": 0.7}),
        "rug": MappingProxyType({"bohemian": 0.9, "traditional": 0.8, "scandinavian": 0.7}),
        "bed": MappingProxyType({"minimalist": 0.8, "scandinavian": 0.9, "traditional": 0.7}),
    }
)
DEFAULT_CATEGORY_AFFINITY = 0.5

ROOM_COMPLEMENTARY_CATEGORIES: Mapping[str, FrozenSet[str]] = MappingProxyType(
    {
        "table": frozenset({"sofa", "chair", "rug", "lamp", "curtains", "decor", "side_table"}),
        "sofa": frozenset({"table", "side_table", "rug", "lamp", "curtains", "decor"}),
        "chair": frozenset({"table", "side_table", "rug", "lamp", "decor"}),
        "bed": frozenset({"dresser", "lamp", "rug", "curtains", "decor", "side_table"}),
        "dresser": frozenset({"bed", "lamp", "decor", "curtains"}),
        "lamp": frozenset({"sofa", "chair", "table", "bed", "dresser", "side_table"}),
        "rug": frozenset({"sofa", "chair", "table", "bed"}),
        "curtains": frozenset({"sofa", "chair", "table", "bed", "dresser"}),
        "decor": frozenset({"sofa", "chair", "table", "bed", "dresser", "lamp", "side_table"}),
        "side_table": frozenset({"sofa", "chair", "table", "bed", "lamp"}),
    }
)

# The matcher's pairwise table is narrower than the taxonomy's compatible sets.
MATCHER_COMPATIBLE_STYLES: Mapping[str, FrozenSet[str]] = MappingProxyType(
    {
        "modern": frozenset({"minimalist", "industrial"}),
        "minimalist": frozenset({"modern", "scandinavian"}),
        "rustic": frozenset({"traditional", "industrial"}),
        "traditional": frozenset({"rustic"}),
        "scandinavian": frozenset({"minimalist", "modern"}),
        "industrial": frozenset({"modern", "rustic"}),
    }
)

CATEGORY_ROOM_TYPES: Mapping[str, str] = MappingProxyType(
    {
        "sofa": "living",
        "chair": "living",
        "table": "living",
        "coffee_table": "living",
        "side_table": "living",
        "bed": "bedroom",
        "dresser": "bedroom",
        "nightstand": "bedroom",
        "dining_table": "dining",
        "dining_chair": "dining",
        "kitchen_island": "kitchen",
        "bar_stool": "kitchen",
    }
)


def is_known_style(name: Optional[str]) -> bool:
    return bool(name) and name in STYLE_DEFINITIONS


def get_style_definition(name: Optional[str]) -> Optional[StyleDefinition]:
    """Return the definition for ``name`` or ``None`` for unknown styles."""

    if not name:
        return None
    return STYLE_DEFINITIONS.get(name)


def get_style_description(name: Optional[str]) -> str:
    definition = get_style_definition(name)
    return definition.description if definition else DEFAULT_STYLE_DESCRIPTION


def styles_for_room(room_type: Optional[str]) -> Tuple[str, ...]:
    """Return the candidate styles for a room, defaulting to the living room."""

    return ROOM_TYPE_STYLES.get(normalize_key(room_type), ROOM_TYPE_STYLES[DEFAULT_ROOM_TYPE])


__all__ = [
    "PriceRange",
    "StyleDefinition",
    "STYLE_DEFINITIONS",
    "STYLE_NAMES",
    "UNKNOWN_STYLE",
    "MIXED_STYLE",
    "DEFAULT_STYLE_DESCRIPTION",
    "ROOM_TYPE_STYLES",
    "DEFAULT_ROOM_TYPE",
    "CATEGORY_STYLE_AFFINITY",
    "DEFAULT_CATEGORY_AFFINITY",
    "ROOM_COMPLEMENTARY_CATEGORIES",
    "MATCHER_COMPATIBLE_STYLES",
    "CATEGORY_ROOM_TYPES",
    "normalize_key",
    "is_known_style",
    "get_style_definition",
    "get_style_description",
    "styles_for_room",
]

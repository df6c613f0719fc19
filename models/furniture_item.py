"""Furniture item data model and helpers."""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from models.taxonomy import normalize_key

logger = logging.getLogger(__name__)


def _ensure_list(value: Any) -> List[Any]:
    """Coerce a scalar, iterable or JSON-encoded list into a list."""

    if value is None:
        return []
    if isinstance(value, str):
        stripped = value.strip()
        if stripped.startswith("["):
            try:
                decoded = json.loads(stripped)
            except json.JSONDecodeError:
                logger.warning("Could not decode color list %r", value)
                return []
            return _ensure_list(decoded)
        return [stripped] if stripped else []
    if isinstance(value, (list, tuple, set)):
        return list(value)
    return [value]


def _clean_colors(values: Iterable[Any]) -> Tuple[str, ...]:
    return tuple(str(value).strip() for value in values if value is not None and str(value).strip())


def _optional_number(value: Any, name: str) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Field '{name}' must be numeric, got {value!r}") from exc
    if not math.isfinite(number):
        raise ValueError(f"Field '{name}' must be a finite number, got {value!r}")
    return number


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass(frozen=True)
class Dimensions:
    """Physical size in inches; any side may be missing."""

    width: Optional[float] = None
    height: Optional[float] = None
    depth: Optional[float] = None

    def __post_init__(self) -> None:
        for side in ("width", "height", "depth"):
            value = getattr(self, side)
            if value is not None and (value < 0 or not math.isfinite(value)):
                raise ValueError(f"Dimension '{side}' must be a non-negative number, got {value!r}")

    @property
    def footprint(self) -> float:
        return (self.width or 0) * (self.depth or 0)

    def as_dict(self) -> Dict[str, Optional[float]]:
        return {"width": self.width, "height": self.height, "depth": self.depth}


@dataclass(frozen=True)
class FurnitureItem:
    """A single listing as supplied by search or scraping collaborators.

    The engine never mutates items; ranking helpers wrap them instead.
    """

    item_id: str
    title: str = ""
    description: str = ""
    price: Optional[float] = None
    category: Optional[str] = None
    style: Optional[str] = None
    colors: Tuple[str, ...] = field(default_factory=tuple)
    dimensions: Optional[Dimensions] = None
    source: Optional[str] = None
    url: Optional[str] = None
    image_url: Optional[str] = None

    def __post_init__(self) -> None:
        if self.price is not None and (self.price < 0 or not math.isfinite(self.price)):
            raise ValueError(f"Price must be a non-negative number for item '{self.item_id}'")
        if not isinstance(self.colors, tuple):
            object.__setattr__(self, "colors", _clean_colors(_ensure_list(self.colors)))

    @property
    def has_price(self) -> bool:
        return bool(self.price)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.item_id,
            "title": self.title,
            "description": self.description,
            "price": self.price,
            "category": self.category,
            "style": self.style,
            "colors": list(self.colors),
            "dimensions": self.dimensions.as_dict() if self.dimensions else None,
            "source": self.source,
            "url": self.url,
            "image_url": self.image_url,
        }


def _dimensions_from_raw(raw: Any) -> Optional[Dimensions]:
    if not isinstance(raw, dict):
        return None
    return Dimensions(
        width=_optional_number(raw.get("width"), "dimensions.width"),
        height=_optional_number(raw.get("height"), "dimensions.height"),
        depth=_optional_number(raw.get("depth"), "dimensions.depth"),
    )


def from_raw_metadata(metadata: Dict[str, Any]) -> FurnitureItem:
    """Factory to build a :class:`FurnitureItem` from a loose listing record.

    Accepts both ``id`` and ``item_id`` as well as camelCase ``imageUrl``.
    Raises a :class:`ValueError` when the identifier is missing or a numeric
    field cannot be parsed.
    """

    item_id = metadata.get("item_id", metadata.get("id"))
    if item_id is None or str(item_id).strip() == "":
        raise ValueError("Missing required field for FurnitureItem: id")

    category = _optional_text(metadata.get("category"))
    style = _optional_text(metadata.get("style"))
    return FurnitureItem(
        item_id=str(item_id),
        title=str(metadata.get("title") or ""),
        description=str(metadata.get("description") or ""),
        price=_optional_number(metadata.get("price"), "price"),
        category=normalize_key(category) if category else None,
        style=style.lower() if style else None,
        colors=_clean_colors(_ensure_list(metadata.get("colors"))),
        dimensions=_dimensions_from_raw(metadata.get("dimensions")),
        source=_optional_text(metadata.get("source")),
        url=_optional_text(metadata.get("url")),
        image_url=_optional_text(metadata.get("image_url", metadata.get("imageUrl"))),
    )


__all__ = ["Dimensions", "FurnitureItem", "from_raw_metadata"]

"""Model package exports."""

from models.taxonomy import *  # noqa: F401,F403
from models.color_theory import ColorFormatError, HSL, Harmony
from models.furniture_item import Dimensions, FurnitureItem, from_raw_metadata

__all__ = ["ColorFormatError", "HSL", "Harmony", "Dimensions", "FurnitureItem", "from_raw_metadata"]

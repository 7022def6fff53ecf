"""Static palette catalog."""

from .palettes import PALETTE_CATALOG, PRESET_PALETTES, PaletteCatalog

__all__ = ["PALETTE_CATALOG", "PRESET_PALETTES", "PaletteCatalog"]

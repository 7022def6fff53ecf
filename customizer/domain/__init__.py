"""Domain models for garments and customizations."""

from .models import (
    DEFAULT_COLOR_SETTINGS,
    DRAFT_GARMENT_ID,
    Color,
    ColorSettings,
    CustomizationState,
    EnabledOptions,
    FixedTint,
    Garment,
    GarmentLayer,
    LogoState,
    Palette,
    Plain,
    Recolorable,
    TextState,
    TintMode,
)

__all__ = [
    "DEFAULT_COLOR_SETTINGS",
    "DRAFT_GARMENT_ID",
    "Color",
    "ColorSettings",
    "CustomizationState",
    "EnabledOptions",
    "FixedTint",
    "Garment",
    "GarmentLayer",
    "LogoState",
    "Palette",
    "Plain",
    "Recolorable",
    "TextState",
    "TintMode",
]

"""Resolution of the paint order and styling of garment layers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from customizer.catalog.palettes import PALETTE_CATALOG, PaletteCatalog
from customizer.domain.models import (
    DEFAULT_COLOR_SETTINGS,
    ColorSettings,
    CustomizationState,
    FixedTint,
    Garment,
    GarmentLayer,
    Recolorable,
)
from customizer.engine.resolution import resolve_selected_color

NO_TINT = "none"
FIXED_TINT_COLOR = "#000000"

OVERLAY_BASE_Z = 100
LOGO_POSITION = (50.0, 100.0 / 3)
LOGO_WIDTH = 150
TEXT_POSITION = (50.0, 200.0 / 3)


@dataclass(frozen=True, slots=True)
class LayerInstruction:
    """A garment image plus the tint overlay painted on top of it."""

    layer_id: str
    image_ref: str
    z_index: int
    tint_color: str = NO_TINT
    opacity: float = 1.0
    brightness: float = 1.0
    contrast: float = 1.0

    @property
    def has_tint(self) -> bool:
        return self.tint_color != NO_TINT


@dataclass(frozen=True, slots=True)
class LogoOverlay:
    """Customer logo centred at ``x``/``y`` percent of the canvas."""

    image_ref: str
    z_index: int
    x: float = LOGO_POSITION[0]
    y: float = LOGO_POSITION[1]
    width: int = LOGO_WIDTH


@dataclass(frozen=True, slots=True)
class TextOverlay:
    """Customer text centred at ``x``/``y`` percent of the canvas."""

    content: str
    font: str
    color: str
    z_index: int
    x: float = TEXT_POSITION[0]
    y: float = TEXT_POSITION[1]


RenderInstruction = Union[LayerInstruction, LogoOverlay, TextOverlay]


def resolve_render_layers(
    garment: Garment,
    customization: CustomizationState,
    *,
    catalog: PaletteCatalog = PALETTE_CATALOG,
) -> list[RenderInstruction]:
    """Return the instructions a renderer paints, bottom to top.

    Only the front of a garment is modelled; the back view yields nothing.
    """

    if customization.view == "back":
        return []

    instructions: list[RenderInstruction] = [
        _layer_instruction(layer, customization, catalog)
        for layer in garment.layers
        if customization.is_layer_visible(layer)
    ]
    # stable sort: equal z-indexes keep declaration order
    instructions.sort(key=lambda item: item.z_index)

    overlay_z = OVERLAY_BASE_Z
    if instructions:
        overlay_z = max(overlay_z, instructions[-1].z_index + 1)

    logo = customization.logo
    if logo.enabled and logo.image_ref:
        instructions.append(LogoOverlay(image_ref=logo.image_ref, z_index=overlay_z))

    text = customization.text
    if text.enabled and text.content:
        instructions.append(
            TextOverlay(
                content=text.content,
                font=text.font,
                color=text.color,
                z_index=overlay_z + 1,
            ),
        )

    return instructions


def _layer_instruction(
    layer: GarmentLayer,
    customization: CustomizationState,
    catalog: PaletteCatalog,
) -> LayerInstruction:
    mode = layer.tint_mode()
    tint = NO_TINT
    settings: ColorSettings = DEFAULT_COLOR_SETTINGS

    if isinstance(mode, Recolorable):
        color = resolve_selected_color(layer, customization, catalog)
        if color is not None:
            tint = color.value
            settings = layer.color_settings.get(color.id, DEFAULT_COLOR_SETTINGS)
    elif isinstance(mode, FixedTint):
        tint = FIXED_TINT_COLOR
        settings = mode.settings

    return LayerInstruction(
        layer_id=layer.id,
        image_ref=layer.image_ref,
        z_index=layer.z_index,
        tint_color=tint,
        opacity=settings.opacity,
        brightness=settings.brightness,
        contrast=settings.contrast,
    )

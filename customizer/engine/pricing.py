"""Price computation for a customized garment."""

from __future__ import annotations

from customizer.catalog.palettes import PALETTE_CATALOG, PaletteCatalog
from customizer.domain.models import CustomizationState, Garment
from customizer.engine.resolution import resolve_selected_color

LOGO_PRICE = 10.0
TEXT_PRICE = 7.0


def compute_total_price(
    garment: Garment,
    customization: CustomizationState,
    *,
    catalog: PaletteCatalog = PALETTE_CATALOG,
    logo_price: float = LOGO_PRICE,
    text_price: float = TEXT_PRICE,
) -> float:
    """Return base price plus every add-on that applies to ``customization``.

    Optional layers count only while switched on, and so do the colors picked
    for them. Selections that cannot be resolved are ignored.
    """

    total = garment.base_price

    for layer in garment.layers:
        if not customization.is_layer_visible(layer):
            continue
        if layer.is_optional:
            total += layer.price
        color = resolve_selected_color(layer, customization, catalog)
        if color is not None:
            total += color.price

    if customization.logo.enabled:
        total += logo_price
    if customization.text.enabled:
        total += text_price

    return total


def format_price(value: float) -> str:
    """Render a price for display, e.g. ``$57.00``."""

    return f"${value:.2f}"

"""Lookup of customer color selections against the palette catalog."""

from __future__ import annotations

import logging
from typing import Optional

from customizer.catalog.palettes import PaletteCatalog
from customizer.domain.models import Color, CustomizationState, GarmentLayer

logger = logging.getLogger(__name__)


def resolve_selected_color(
    layer: GarmentLayer,
    customization: CustomizationState,
    catalog: PaletteCatalog,
) -> Optional[Color]:
    """Return the catalog color currently selected for ``layer``.

    Selections whose layer lost its palette, or whose color no longer exists in
    the palette, resolve to ``None``.
    """

    selected = customization.layer_colors.get(layer.id)
    if selected is None:
        return None
    color = catalog.resolve_color(layer.palette_id, selected.id)
    if color is None:
        logger.debug(
            "Skipping stale color %s for layer %s (palette %s)",
            selected.id,
            layer.id,
            layer.palette_id,
        )
    return color

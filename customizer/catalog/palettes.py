"""Preset color palettes offered to admins when building a garment."""

from __future__ import annotations

from typing import Iterable, Iterator, Optional

from customizer.domain.models import Color, Palette

PRESET_PALETTES: tuple[Palette, ...] = (
    Palette(
        id="lycra",
        name="Lycra",
        colors=(
            Color(id="lycra-white", name="White", value="#ffffff", price=0),
            Color(id="lycra-black", name="Black", value="#111111", price=0),
            Color(id="lycra-red", name="Racing Red", value="#c8102e", price=0),
            Color(id="lycra-blue", name="Royal Blue", value="#4169e1", price=0),
            Color(id="lycra-green", name="Forest Green", value="#228b22", price=2),
            Color(id="lycra-gold", name="Metallic Gold", value="#d4af37", price=5),
        ),
    ),
    Palette(
        id="velvet",
        name="Velvet",
        colors=(
            Color(id="velvet-burgundy", name="Burgundy", value="#800020", price=4),
            Color(id="velvet-midnight", name="Midnight", value="#191970", price=4),
            Color(id="velvet-emerald", name="Emerald", value="#046307", price=6),
            Color(id="velvet-plum", name="Plum", value="#580f41", price=6),
        ),
    ),
    Palette(
        id="cotton",
        name="Cotton",
        colors=(
            Color(id="cotton-natural", name="Natural", value="#f5f0e1", price=0),
            Color(id="cotton-grey", name="Heather Grey", value="#9e9e9e", price=0),
            Color(id="cotton-navy", name="Navy", value="#1f2a44", price=1),
            Color(id="cotton-maroon", name="Maroon", value="#6d1a36", price=1),
        ),
    ),
)


class PaletteCatalog:
    """Read-only registry of palettes looked up by id."""

    def __init__(self, palettes: Iterable[Palette]) -> None:
        self._palettes: dict[str, Palette] = {}
        for palette in palettes:
            if palette.id in self._palettes:
                raise ValueError(f"Duplicate palette id: {palette.id}")
            self._palettes[palette.id] = palette

    def get(self, palette_id: Optional[str]) -> Optional[Palette]:
        """Return the palette or ``None`` when the id is unknown."""

        if palette_id is None:
            return None
        return self._palettes.get(palette_id)

    def resolve_color(self, palette_id: Optional[str], color_id: str) -> Optional[Color]:
        """Return the color ``color_id`` of palette ``palette_id`` if both exist."""

        palette = self.get(palette_id)
        if palette is None:
            return None
        return palette.color(color_id)

    def __iter__(self) -> Iterator[Palette]:
        return iter(self._palettes.values())

    def __len__(self) -> int:
        return len(self._palettes)

    def __contains__(self, palette_id: object) -> bool:
        return palette_id in self._palettes


PALETTE_CATALOG = PaletteCatalog(PRESET_PALETTES)

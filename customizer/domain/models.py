"""Pydantic models describing garments and customer selections.

Persisted records use camelCase keys (``basePrice``, ``zIndex``,
``imageDataUri`` ...) so existing ``garments.json`` files stay readable.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

DRAFT_GARMENT_ID = "g-initial"
DEFAULT_FONT = "Arial, sans-serif"
DEFAULT_TEXT_COLOR = "#000000"

View = Literal["front", "back"]


class CamelModel(BaseModel):
    """Base model serialising field names as camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_record(self) -> dict:
        """Return the JSON-compatible representation used on disk and over HTTP."""

        return self.model_dump(mode="json", by_alias=True)


class Color(CamelModel):
    """Selectable palette entry with its price delta."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    value: str
    price: float = Field(default=0.0, ge=0)


class Palette(CamelModel):
    """Named, ordered set of colors."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    colors: tuple[Color, ...] = ()

    @model_validator(mode="after")
    def _unique_color_ids(self) -> "Palette":
        ids = [color.id for color in self.colors]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Palette {self.id!r} contains duplicate color ids.")
        return self

    def color(self, color_id: str) -> Optional[Color]:
        """Return the color with the given id, or ``None``."""

        for color in self.colors:
            if color.id == color_id:
                return color
        return None


class ColorSettings(CamelModel):
    """Opacity, brightness and contrast applied to a tint overlay."""

    opacity: float = Field(default=1.0, ge=0, le=1)
    brightness: float = Field(default=1.0, ge=0, le=2)
    contrast: float = Field(default=1.0, ge=0, le=2)


DEFAULT_COLOR_SETTINGS = ColorSettings()


@dataclass(frozen=True, slots=True)
class Recolorable:
    """Layer tinted by whichever palette color the customer selects."""

    palette_id: str


@dataclass(frozen=True, slots=True)
class FixedTint:
    """Layer with a single tint applied whenever it is visible (e.g. shadows)."""

    settings: ColorSettings


@dataclass(frozen=True, slots=True)
class Plain:
    """Layer drawn as its raw image."""


TintMode = Union[Recolorable, FixedTint, Plain]


class GarmentLayer(CamelModel):
    """One image layer of a garment."""

    id: str
    name: str
    image_ref: str = Field(alias="imageDataUri")
    z_index: int = 0
    price: float = Field(default=0.0, ge=0)
    palette_id: Optional[str] = None
    color_settings: dict[str, ColorSettings] = Field(default_factory=dict)
    is_optional: bool = False
    optional_label: Optional[str] = None

    @field_validator("palette_id")
    @classmethod
    def _blank_palette_is_none(cls, value: Optional[str]) -> Optional[str]:
        return value or None

    def tint_mode(self) -> TintMode:
        """Classify how the layer is tinted."""

        if self.palette_id:
            return Recolorable(palette_id=self.palette_id)
        if self.color_settings:
            first_key = next(iter(self.color_settings))
            return FixedTint(settings=self.color_settings[first_key])
        return Plain()

    @property
    def display_label(self) -> str:
        """Label shown next to the toggle of an optional layer."""

        return self.optional_label or f"Enable {self.name}"


class EnabledOptions(CamelModel):
    """Customer-facing extras the admin allows on a garment."""

    logo: bool = False
    text: bool = False


class Garment(CamelModel):
    """A customizable product definition."""

    id: str = DRAFT_GARMENT_ID
    name: str
    base_price: float = Field(default=0.0, ge=0)
    enabled_options: EnabledOptions = Field(default_factory=EnabledOptions)
    layers: list[GarmentLayer] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_layer_ids(self) -> "Garment":
        ids = [layer.id for layer in self.layers]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Garment {self.id!r} contains duplicate layer ids.")
        return self

    def layer(self, layer_id: str) -> Optional[GarmentLayer]:
        """Return the layer with the given id, or ``None``."""

        for layer in self.layers:
            if layer.id == layer_id:
                return layer
        return None


class LogoState(CamelModel):
    enabled: bool = False
    image_ref: Optional[str] = Field(default=None, alias="dataUri")


class TextState(CamelModel):
    enabled: bool = False
    content: str = ""
    font: str = DEFAULT_FONT
    color: str = DEFAULT_TEXT_COLOR


class CustomizationState(CamelModel):
    """Selections of a single customer session. Read-only for the engine."""

    layer_colors: dict[str, Color] = Field(default_factory=dict)
    optional_layers: dict[str, bool] = Field(default_factory=dict)
    logo: LogoState = Field(default_factory=LogoState)
    text: TextState = Field(default_factory=TextState)
    view: View = "front"

    def is_layer_visible(self, layer: GarmentLayer) -> bool:
        """Return ``True`` unless the layer is optional and not switched on."""

        return not layer.is_optional or bool(self.optional_layers.get(layer.id))

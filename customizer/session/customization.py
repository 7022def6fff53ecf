"""Customer-side editing session around a single garment."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from customizer.catalog.palettes import PALETTE_CATALOG, PaletteCatalog
from customizer.config.settings import Settings, get_settings
from customizer.domain.models import CustomizationState, Garment, View
from customizer.engine.compositor import RenderInstruction, resolve_render_layers
from customizer.engine.pricing import compute_total_price
from customizer.errors import ValidationRejectedError
from customizer.metrics.prometheus_exporter import logo_checks_total
from customizer.moderation.client import LogoClassifier, ModerationResult, check_logo
from customizer.uploads import to_data_uri, validate_upload

logger = logging.getLogger(__name__)

FONTS: dict[str, str] = {
    "Arial": "Arial, sans-serif",
    "Times New Roman": "'Times New Roman', serif",
    "Courier New": "'Courier New', monospace",
    "Brush Script MT": "'Brush Script MT', cursive",
}


class SelectionError(ValidationRejectedError):
    """Raised when a selection does not fit the garment being customized."""


@dataclass(slots=True)
class LogoUploadOutcome:
    """Result of a logo upload: the verdict and whether it reached the state."""

    result: ModerationResult
    applied: bool


class CustomizationSession:
    """Owns the customization state of one customer.

    Every operation builds a new state and swaps it in only on success.
    """

    def __init__(
        self,
        garment: Garment,
        moderation: LogoClassifier,
        *,
        catalog: PaletteCatalog = PALETTE_CATALOG,
        settings: Settings | None = None,
        state: CustomizationState | None = None,
    ) -> None:
        self._garment = garment
        self._moderation = moderation
        self._catalog = catalog
        self._settings = settings or get_settings()
        self._state = state or CustomizationState()
        self._upload_seq = 0

    @property
    def garment(self) -> Garment:
        return self._garment

    @property
    def state(self) -> CustomizationState:
        return self._state

    def total_price(self) -> float:
        """Return the running price of the current selections."""

        return compute_total_price(
            self._garment,
            self._state,
            catalog=self._catalog,
            logo_price=self._settings.logo_price,
            text_price=self._settings.text_price,
        )

    def render_layers(self) -> list[RenderInstruction]:
        """Return the paint order for the current selections."""

        return resolve_render_layers(self._garment, self._state, catalog=self._catalog)

    def select_color(self, layer_id: str, color_id: str) -> None:
        """Pick ``color_id`` from the palette of a recolorable layer."""

        layer = self._garment.layer(layer_id)
        if layer is None:
            raise SelectionError(f"Unknown layer: {layer_id}")
        palette = self._catalog.get(layer.palette_id)
        if palette is None:
            raise SelectionError(f"Layer {layer.name!r} cannot be recolored.")
        color = palette.color(color_id)
        if color is None:
            raise SelectionError(f"Color {color_id!r} is not part of the {palette.name} palette.")

        self._replace(layer_colors={**self._state.layer_colors, layer_id: color})

    def set_optional_layer(self, layer_id: str, enabled: bool) -> None:
        """Switch an optional layer on or off. Its color selection is kept."""

        layer = self._garment.layer(layer_id)
        if layer is None:
            raise SelectionError(f"Unknown layer: {layer_id}")
        if not layer.is_optional:
            raise SelectionError(f"Layer {layer.name!r} is not optional.")

        self._replace(optional_layers={**self._state.optional_layers, layer_id: enabled})

    def set_logo_enabled(self, enabled: bool) -> None:
        if enabled and not self._garment.enabled_options.logo:
            raise SelectionError("Logos are not available for this garment.")
        self._replace(logo=self._state.logo.model_copy(update={"enabled": enabled}))

    def clear_logo(self) -> None:
        """Drop the uploaded logo image, keeping the logo option as it is."""

        self._upload_seq += 1
        self._replace(logo=self._state.logo.model_copy(update={"image_ref": None}))

    def update_text(
        self,
        *,
        enabled: Optional[bool] = None,
        content: Optional[str] = None,
        font: Optional[str] = None,
        color: Optional[str] = None,
    ) -> None:
        """Change any subset of the text options."""

        if enabled and not self._garment.enabled_options.text:
            raise SelectionError("Text is not available for this garment.")
        if font is not None and font not in FONTS.values():
            raise SelectionError(f"Unsupported font: {font}")

        changes: dict[str, Any] = {
            key: value
            for key, value in {"enabled": enabled, "content": content, "font": font, "color": color}.items()
            if value is not None
        }
        self._replace(text=self._state.text.model_copy(update=changes))

    def set_view(self, view: View) -> None:
        if view not in ("front", "back"):
            raise SelectionError(f"Unknown view: {view}")
        self._replace(view=view)

    def reset(self) -> None:
        """Return to the initial, empty selection."""

        self._upload_seq += 1
        self._state = CustomizationState()

    async def upload_logo(self, data: bytes, content_type: str | None) -> LogoUploadOutcome:
        """Validate, moderate and (if still current and safe) apply a logo.

        Oversized or unreadable files raise before moderation is called. A
        verdict that arrives after a newer upload was issued is discarded.
        """

        if not self._garment.enabled_options.logo:
            raise SelectionError("Logos are not available for this garment.")
        mime = validate_upload(data, content_type, max_bytes=self._settings.max_upload_bytes)
        data_uri = to_data_uri(data, mime)

        self._upload_seq += 1
        ticket = self._upload_seq
        result = await check_logo(self._moderation, data_uri)
        logo_checks_total.labels(outcome="safe" if result.is_safe else "unsafe").inc()

        if ticket != self._upload_seq:
            logger.info("Discarding moderation verdict for superseded logo upload %s", ticket)
            return LogoUploadOutcome(result=result, applied=False)
        if not result.is_safe:
            logger.info("Logo rejected: %s", result.reason)
            return LogoUploadOutcome(result=result, applied=False)

        self._replace(logo=self._state.logo.model_copy(update={"image_ref": data_uri}))
        return LogoUploadOutcome(result=result, applied=True)

    def _replace(self, **changes: Any) -> None:
        self._state = self._state.model_copy(update=changes)

"""Pure pricing and compositing functions."""

from .compositor import (
    LayerInstruction,
    LogoOverlay,
    RenderInstruction,
    TextOverlay,
    resolve_render_layers,
)
from .pricing import LOGO_PRICE, TEXT_PRICE, compute_total_price, format_price

__all__ = [
    "LOGO_PRICE",
    "TEXT_PRICE",
    "LayerInstruction",
    "LogoOverlay",
    "RenderInstruction",
    "TextOverlay",
    "compute_total_price",
    "format_price",
    "resolve_render_layers",
]

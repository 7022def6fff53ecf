"""Garment customization engine: pricing, layer compositing and the glue around them."""

__version__ = "0.1.0"

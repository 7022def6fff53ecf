"""Shared fixtures: a sample garment modelled on the storefront demo product."""

from __future__ import annotations

from io import BytesIO
from pathlib import Path

import pytest
from PIL import Image

from customizer.config.settings import Settings
from customizer.domain.models import ColorSettings, EnabledOptions, Garment, GarmentLayer


def make_png(color: str = "red", size: tuple[int, int] = (8, 8)) -> bytes:
    buffer = BytesIO()
    Image.new("RGBA", size, color).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def garment() -> Garment:
    return Garment(
        id="g-demo",
        name="Race Suit",
        base_price=20,
        enabled_options=EnabledOptions(logo=True, text=True),
        layers=[
            GarmentLayer(
                id="l1",
                name="Base Fabric",
                image_ref="https://placehold.co/800x800/eeeeee/eeeeee.png",
                z_index=10,
                palette_id="lycra",
            ),
            GarmentLayer(
                id="l3",
                name="Arm Gauntlets",
                image_ref="https://placehold.co/800x800/bbbbbb/bbbbbb.png",
                z_index=15,
                price=30,
                palette_id="velvet",
                is_optional=True,
                optional_label="Add Arm Gauntlets?",
            ),
            GarmentLayer(
                id="l2",
                name="Shadows",
                image_ref="https://placehold.co/800x800/000000/000000.png",
                z_index=20,
                color_settings={"shadow": ColorSettings(opacity=0.15, brightness=1, contrast=1)},
            ),
        ],
    )


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(garments_db_path=str(tmp_path / "garments.json"))


@pytest.fixture
def png_bytes() -> bytes:
    return make_png()


@pytest.fixture
def png_factory():
    return make_png

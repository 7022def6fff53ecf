"""Tests for the price computation."""

from __future__ import annotations

import pytest

from customizer.catalog.palettes import PALETTE_CATALOG
from customizer.domain.models import Color, CustomizationState, Garment, GarmentLayer
from customizer.engine.pricing import compute_total_price, format_price


def _color(palette_id: str, color_id: str) -> Color:
    color = PALETTE_CATALOG.resolve_color(palette_id, color_id)
    assert color is not None
    return color


def test_plain_garment_costs_base_price(garment: Garment) -> None:
    assert compute_total_price(garment, CustomizationState()) == 20


def test_optional_layer_price_only_when_enabled() -> None:
    garment = Garment(
        name="Tee",
        base_price=20,
        layers=[
            GarmentLayer(id="base", name="Base", image_ref="base.png", z_index=10),
            GarmentLayer(id="hood", name="Hood", image_ref="hood.png", z_index=20, price=30, is_optional=True),
        ],
    )

    assert compute_total_price(garment, CustomizationState()) == 20
    enabled = CustomizationState(optional_layers={"hood": True})
    assert compute_total_price(garment, enabled) == 50


def test_color_and_logo_surcharges(garment: Garment) -> None:
    state = CustomizationState(
        layer_colors={"l1": _color("lycra", "lycra-gold")},
        logo={"enabled": True},
    )

    assert compute_total_price(garment, state) == 20 + 5 + 10


def test_text_surcharge(garment: Garment) -> None:
    state = CustomizationState(text={"enabled": True, "content": "GO"})

    assert compute_total_price(garment, state) == 27


def test_color_on_disabled_optional_layer_is_free_until_enabled(garment: Garment) -> None:
    emerald = _color("velvet", "velvet-emerald")
    without_color = CustomizationState()
    with_color = CustomizationState(layer_colors={"l3": emerald})

    assert compute_total_price(garment, with_color) == compute_total_price(garment, without_color)

    enabled = with_color.model_copy(update={"optional_layers": {"l3": True}})
    assert compute_total_price(garment, enabled) == 20 + 30 + emerald.price


def test_toggle_round_trip_restores_total(garment: Garment) -> None:
    state = CustomizationState(
        layer_colors={"l3": _color("velvet", "velvet-plum"), "l1": _color("lycra", "lycra-green")},
        optional_layers={"l3": True},
        text={"enabled": True},
    )
    before = compute_total_price(garment, state)

    disabled = state.model_copy(update={"optional_layers": {"l3": False}})
    assert compute_total_price(garment, disabled) == before - 30 - 6

    reenabled = disabled.model_copy(update={"optional_layers": {"l3": True}})
    assert compute_total_price(garment, reenabled) == before


def test_stale_selections_are_ignored(garment: Garment) -> None:
    state = CustomizationState(
        layer_colors={
            "removed-layer": _color("lycra", "lycra-gold"),
            "l1": Color(id="retired", name="Retired", value="#123456", price=99),
            "l2": _color("lycra", "lycra-gold"),
        },
        optional_layers={"removed-optional": True},
    )

    assert compute_total_price(garment, state) == 20


def test_catalog_price_wins_over_stored_color_price(garment: Garment) -> None:
    stored = Color(id="lycra-gold", name="Metallic Gold", value="#d4af37", price=500)
    state = CustomizationState(layer_colors={"l1": stored})

    assert compute_total_price(garment, state) == 25


def test_custom_surcharges(garment: Garment) -> None:
    state = CustomizationState(logo={"enabled": True}, text={"enabled": True})

    assert compute_total_price(garment, state, logo_price=2.5, text_price=0) == 22.5


@pytest.mark.parametrize(
    "state",
    [
        CustomizationState(),
        CustomizationState(optional_layers={"l3": False}),
        CustomizationState(layer_colors={"l3": Color(id="x", name="x", value="#fff")}),
        CustomizationState(view="back", logo={"enabled": True}),
    ],
)
def test_total_never_below_base_price(garment: Garment, state: CustomizationState) -> None:
    assert compute_total_price(garment, state) >= garment.base_price


def test_pricing_does_not_mutate_inputs(garment: Garment) -> None:
    state = CustomizationState(optional_layers={"l3": True}, logo={"enabled": True})
    garment_before = garment.model_dump()
    state_before = state.model_dump()

    compute_total_price(garment, state)

    assert garment.model_dump() == garment_before
    assert state.model_dump() == state_before


def test_format_price() -> None:
    assert format_price(57) == "$57.00"
    assert format_price(20.5) == "$20.50"

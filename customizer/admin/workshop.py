"""Garment editing operations used by the admin product workshop.

Each function returns a new :class:`Garment`; the input is left untouched.
Whenever the layer list changes, z-indexes are renumbered from the list
position as ``(position + 1) * 10``.
"""

from __future__ import annotations

import uuid
from typing import Any, Literal, Sequence

from customizer.domain.models import (
    DEFAULT_COLOR_SETTINGS,
    DRAFT_GARMENT_ID,
    ColorSettings,
    EnabledOptions,
    Garment,
    GarmentLayer,
)
from customizer.errors import ValidationRejectedError

PLACEHOLDER_IMAGE = "https://placehold.co/800x800.png"
NEW_LAYER_IMAGE = "https://placehold.co/800x800/e0e0e0/e0e0e0.png"

EDITABLE_LAYER_FIELDS = frozenset(
    {"name", "image_ref", "price", "palette_id", "is_optional", "optional_label"},
)
SETTING_FIELDS = frozenset({"opacity", "brightness", "contrast"})


class WorkshopError(ValidationRejectedError):
    """Raised for edits that reference missing layers or invalid fields."""


def new_draft_garment() -> Garment:
    """Return the starting point for a garment that has never been saved."""

    return Garment(
        id=DRAFT_GARMENT_ID,
        name="New Custom Garment",
        base_price=20,
        enabled_options=EnabledOptions(logo=False, text=False),
        layers=[
            GarmentLayer(
                id="l-base",
                name="Base Layer",
                image_ref=PLACEHOLDER_IMAGE,
                z_index=10,
            ),
        ],
    )


def renumber_layers(layers: Sequence[GarmentLayer]) -> list[GarmentLayer]:
    return [
        layer.model_copy(update={"z_index": (index + 1) * 10})
        for index, layer in enumerate(layers)
    ]


def _with_layers(garment: Garment, layers: Sequence[GarmentLayer]) -> Garment:
    return garment.model_copy(update={"layers": renumber_layers(layers)})


def _index_of(garment: Garment, layer_id: str) -> int:
    for index, layer in enumerate(garment.layers):
        if layer.id == layer_id:
            return index
    raise WorkshopError(f"Unknown layer: {layer_id}")


def _validated(garment: Garment, changes: dict[str, Any]) -> Garment:
    try:
        return Garment.model_validate({**garment.model_dump(), **changes})
    except ValueError as exc:
        raise WorkshopError(str(exc)) from exc


def update_garment(garment: Garment, **changes: Any) -> Garment:
    """Change the name or base price of the garment."""

    unknown = set(changes) - {"name", "base_price"}
    if unknown:
        raise WorkshopError(f"Cannot edit garment fields: {', '.join(sorted(unknown))}")
    return _validated(garment, changes)


def set_enabled_option(garment: Garment, option: Literal["logo", "text"], value: bool) -> Garment:
    if option not in ("logo", "text"):
        raise WorkshopError(f"Unknown option: {option}")
    options = {**garment.enabled_options.model_dump(), option: value}
    return _validated(garment, {"enabled_options": options})


def add_layer(garment: Garment, *, name: str = "New Layer", image_ref: str = NEW_LAYER_IMAGE) -> Garment:
    """Append a plain, non-optional layer on top of the stack."""

    layer = GarmentLayer(id=str(uuid.uuid4()), name=name, image_ref=image_ref)
    return _with_layers(garment, [*garment.layers, layer])


def delete_layer(garment: Garment, layer_id: str) -> Garment:
    index = _index_of(garment, layer_id)
    layers = list(garment.layers)
    del layers[index]
    return _with_layers(garment, layers)


def move_layer(garment: Garment, index: int, direction: Literal["up", "down"]) -> Garment:
    """Swap the layer at ``index`` with its neighbour; out-of-range moves are no-ops.

    "up" moves towards the start of the list, i.e. further down the paint order.
    """

    if direction not in ("up", "down"):
        raise WorkshopError(f"Unknown direction: {direction}")
    new_index = index - 1 if direction == "up" else index + 1
    if index < 0 or index >= len(garment.layers) or new_index < 0 or new_index >= len(garment.layers):
        return garment

    layers = list(garment.layers)
    moved = layers.pop(index)
    layers.insert(new_index, moved)
    return _with_layers(garment, layers)


def update_layer(garment: Garment, layer_id: str, **changes: Any) -> Garment:
    """Edit layer fields; the result is validated like a stored record."""

    unknown = set(changes) - EDITABLE_LAYER_FIELDS
    if unknown:
        raise WorkshopError(f"Cannot edit layer fields: {', '.join(sorted(unknown))}")
    index = _index_of(garment, layer_id)
    current = garment.layers[index]
    try:
        updated = GarmentLayer.model_validate({**current.model_dump(), **changes})
    except ValueError as exc:
        raise WorkshopError(str(exc)) from exc

    layers = list(garment.layers)
    layers[index] = updated
    return _with_layers(garment, layers)


def set_color_setting(
    garment: Garment,
    layer_id: str,
    key: str,
    field: str,
    value: float,
) -> Garment:
    """Set opacity, brightness or contrast of one color (or the fixed tint) of a layer."""

    if field not in SETTING_FIELDS:
        raise WorkshopError(f"Unknown color setting: {field}")
    index = _index_of(garment, layer_id)
    layer = garment.layers[index]
    current = layer.color_settings.get(key, DEFAULT_COLOR_SETTINGS)
    try:
        settings = ColorSettings.model_validate({**current.model_dump(), field: value})
    except ValueError as exc:
        raise WorkshopError(str(exc)) from exc

    updated = layer.model_copy(update={"color_settings": {**layer.color_settings, key: settings}})
    layers = list(garment.layers)
    layers[index] = updated
    return garment.model_copy(update={"layers": layers})

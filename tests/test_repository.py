"""Tests for the JSON garment store."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from customizer.domain.models import DRAFT_GARMENT_ID, Garment
from customizer.storage import GarmentRepository, RepositoryError


@pytest.mark.asyncio
async def test_list_creates_empty_store(tmp_path: Path) -> None:
    path = tmp_path / "data" / "garments.json"
    repository = GarmentRepository(path)

    assert await repository.list() == []
    assert json.loads(path.read_text(encoding="utf-8")) == []


@pytest.mark.asyncio
async def test_first_save_assigns_permanent_id(tmp_path: Path, garment: Garment) -> None:
    repository = GarmentRepository(tmp_path / "garments.json")
    draft = garment.model_copy(update={"id": DRAFT_GARMENT_ID})

    saved = await repository.save(draft)

    assert saved.id != DRAFT_GARMENT_ID
    assert draft.id == DRAFT_GARMENT_ID
    assert await repository.get(saved.id) == saved


@pytest.mark.asyncio
async def test_save_existing_replaces_in_place(tmp_path: Path, garment: Garment) -> None:
    repository = GarmentRepository(tmp_path / "garments.json")
    first = await repository.save(garment)
    second = await repository.save(garment.model_copy(update={"name": "Second"}))

    renamed = first.model_copy(update={"name": "Renamed", "base_price": 42})
    await repository.save(renamed)

    stored = await repository.list()
    assert [item.id for item in stored] == [first.id, second.id]
    assert stored[0].name == "Renamed"
    assert stored[0].base_price == 42


@pytest.mark.asyncio
async def test_get_unknown_returns_none(tmp_path: Path) -> None:
    repository = GarmentRepository(tmp_path / "garments.json")

    assert await repository.get("missing") is None


@pytest.mark.asyncio
async def test_records_use_camel_case_keys(tmp_path: Path, garment: Garment) -> None:
    path = tmp_path / "garments.json"
    repository = GarmentRepository(path)

    await repository.save(garment)

    (record,) = json.loads(path.read_text(encoding="utf-8"))
    assert record["basePrice"] == 20
    assert record["enabledOptions"] == {"logo": True, "text": True}
    layer = record["layers"][1]
    assert layer["imageDataUri"].startswith("https://")
    assert layer["zIndex"] == 15
    assert layer["paletteId"] == "velvet"
    assert layer["isOptional"] is True
    assert layer["optionalLabel"] == "Add Arm Gauntlets?"
    assert record["layers"][2]["colorSettings"]["shadow"]["opacity"] == 0.15


@pytest.mark.asyncio
async def test_corrupted_store_raises_repository_error(tmp_path: Path) -> None:
    path = tmp_path / "garments.json"
    path.write_text("{not json", encoding="utf-8")
    repository = GarmentRepository(path)

    with pytest.raises(RepositoryError):
        await repository.list()

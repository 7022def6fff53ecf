"""Simple JSON-backed storage for garment definitions."""

from __future__ import annotations

import asyncio
import json
import logging
import uuid
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from customizer.domain.models import Garment
from customizer.errors import UpstreamUnavailableError

logger = logging.getLogger(__name__)


class RepositoryError(UpstreamUnavailableError):
    """Raised when the garments file cannot be read or written."""


class GarmentRepository:
    """Stores every garment as one JSON array, rewritten as a whole on save.

    Concurrent saves of the same id are last-write-wins.
    """

    def __init__(self, path: Path) -> None:
        self._path = path
        self._lock = asyncio.Lock()

    @property
    def path(self) -> Path:
        return self._path

    async def list(self) -> list[Garment]:
        """Return all stored garments in insertion order."""

        async with self._lock:
            return await self._read_all()

    async def get(self, garment_id: str) -> Optional[Garment]:
        """Return the garment with ``garment_id`` or ``None`` if it is unknown."""

        for garment in await self.list():
            if garment.id == garment_id:
                return garment
        return None

    async def save(self, garment: Garment) -> Garment:
        """Persist the garment and return the stored copy.

        A garment whose id is not stored yet (e.g. the draft id) receives a new
        UUID; an existing id is replaced in place.
        """

        async with self._lock:
            garments = await self._read_all()
            for index, existing in enumerate(garments):
                if existing.id == garment.id:
                    stored = garment.model_copy(deep=True)
                    garments[index] = stored
                    break
            else:
                stored = garment.model_copy(update={"id": str(uuid.uuid4())}, deep=True)
                garments.append(stored)
                logger.info("Created garment %s (%s)", stored.id, stored.name)

            await self._write_all(garments)
            return stored

    async def _read_all(self) -> list[Garment]:
        if not self._path.exists():
            await self._write_all([])
            return []
        try:
            data = await asyncio.to_thread(self._path.read_text, encoding="utf-8")
            payload = json.loads(data)
            if not isinstance(payload, list):
                raise ValueError("garments file must contain a JSON array")
            return [Garment.model_validate(item) for item in payload]
        except (OSError, ValueError, ValidationError) as exc:
            logger.error("Error reading garments DB %s: %s", self._path, exc)
            raise RepositoryError("Could not read garments database.") from exc

    async def _write_all(self, garments: list[Garment]) -> None:
        body = json.dumps([garment.to_record() for garment in garments], ensure_ascii=False, indent=2)
        try:
            await asyncio.to_thread(self._write_file, self._path, body)
        except OSError as exc:
            logger.error("Error writing garments DB %s: %s", self._path, exc)
            raise RepositoryError("Could not write to garments database.") from exc

    @staticmethod
    def _write_file(path: Path, body: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(body, encoding="utf-8")

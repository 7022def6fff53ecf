"""Connectivity checks for external providers."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import Awaitable, Callable

from customizer.config.settings import get_settings
from customizer.moderation.client import LogoModerationClient
from customizer.storage.repository import GarmentRepository


@dataclass(slots=True)
class IntegrationCheckResult:
    """Structured result describing the integration check outcome."""

    name: str
    success: bool
    message: str


async def _run_check(
    name: str,
    factory: Callable[[], Awaitable[bool]],
    success_message: str,
) -> IntegrationCheckResult:
    try:
        result = await factory()
    except Exception as exc:
        return IntegrationCheckResult(name=name, success=False, message=str(exc))

    if result:
        return IntegrationCheckResult(name=name, success=True, message=success_message)
    return IntegrationCheckResult(
        name=name,
        success=False,
        message="Service responded with non-success status.",
    )


async def check_moderation() -> IntegrationCheckResult:
    """Ping the logo moderation provider and return the result."""

    async def _ping() -> bool:
        client = LogoModerationClient()
        try:
            return await client.ping()
        finally:
            await client.close()

    return await _run_check(
        name="Logo moderation",
        factory=_ping,
        success_message="Moderation API is reachable.",
    )


async def check_garment_store() -> IntegrationCheckResult:
    """Make sure the garments file can be read (it is created when missing)."""

    repository = GarmentRepository(Path(get_settings().garments_db_path))

    async def _read() -> bool:
        await repository.list()
        return True

    return await _run_check(
        name="Garment store",
        factory=_read,
        success_message=f"{repository.path} is readable.",
    )


async def run_all_checks() -> list[IntegrationCheckResult]:
    """Execute all integration checks concurrently."""

    return list(await asyncio.gather(check_moderation(), check_garment_store()))

"""FastAPI entrypoint and HTTP routes."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager, suppress
from dataclasses import asdict
from pathlib import Path
from typing import Any, AsyncIterator

from fastapi import FastAPI, File, HTTPException, Request, UploadFile, status
from prometheus_client import make_asgi_app
from pydantic.alias_generators import to_camel

from customizer.catalog.palettes import PALETTE_CATALOG
from customizer.config.settings import Settings, get_settings
from customizer.domain.models import CustomizationState, Garment
from customizer.engine.compositor import LayerInstruction, LogoOverlay, RenderInstruction, resolve_render_layers
from customizer.engine.pricing import compute_total_price, format_price
from customizer.metrics.prometheus_exporter import garments_saved_total, logo_checks_total, quotes_computed_total
from customizer.moderation.client import LogoClassifier, LogoModerationClient, ModerationResult, check_logo
from customizer.storage.repository import GarmentRepository, RepositoryError
from customizer.uploads import UploadRejectedError, UploadTooLargeError, to_data_uri, validate_upload

logger = logging.getLogger(__name__)

_INSTRUCTION_KINDS = {LayerInstruction: "layer", LogoOverlay: "logo"}


def _instruction_payload(instruction: RenderInstruction) -> dict[str, Any]:
    payload = {to_camel(key): value for key, value in asdict(instruction).items()}
    payload["kind"] = _INSTRUCTION_KINDS.get(type(instruction), "text")
    return payload


def _build_moderation(settings: Settings) -> LogoClassifier | None:
    try:
        return LogoModerationClient(settings)
    except RuntimeError as exc:
        logger.warning("Logo moderation disabled: %s", exc)
        return None


async def _read_upload(request: Request, file: UploadFile) -> tuple[bytes, str]:
    settings: Settings = request.app.state.settings
    # at most limit + 1 bytes, anything longer is oversized
    data = await file.read(settings.max_upload_bytes + 1)
    try:
        mime = validate_upload(data, file.content_type, max_bytes=settings.max_upload_bytes)
    except UploadTooLargeError as exc:
        raise HTTPException(
            status_code=413,
            detail={"title": exc.title, "description": exc.description},
        ) from exc
    except UploadRejectedError as exc:
        raise HTTPException(
            status_code=422,
            detail={"title": exc.title, "description": exc.description},
        ) from exc
    return data, mime


def create_app(
    settings: Settings | None = None,
    *,
    repository: GarmentRepository | None = None,
    moderation: LogoClassifier | None = None,
) -> FastAPI:
    """Initialise the FastAPI application."""

    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        client = app.state.moderation
        if isinstance(client, LogoModerationClient):
            with suppress(Exception):
                await client.close()

    app = FastAPI(
        title="Garment Customizer API",
        version="0.1.0",
        docs_url="/docs" if settings.environment != "prod" else None,
        redoc_url="/redoc" if settings.environment != "prod" else None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.repository = repository or GarmentRepository(Path(settings.garments_db_path))
    app.state.moderation = moderation if moderation is not None else _build_moderation(settings)
    app.mount("/metrics", make_asgi_app())

    @app.get("/health", tags=["system"])
    async def health_check() -> dict[str, str]:
        """Simple health endpoint used for readiness probes."""

        return {"status": "ok"}

    @app.get("/palettes", tags=["catalog"])
    async def list_palettes() -> list[dict[str, Any]]:
        return [palette.to_record() for palette in PALETTE_CATALOG]

    @app.get("/garments", tags=["garments"])
    async def list_garments(request: Request) -> list[dict[str, Any]]:
        try:
            garments = await request.app.state.repository.list()
        except RepositoryError as exc:
            raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
        return [garment.to_record() for garment in garments]

    async def _load_garment(request: Request, garment_id: str) -> Garment:
        try:
            garment = await request.app.state.repository.get(garment_id)
        except RepositoryError as exc:
            raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
        if garment is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found.")
        return garment

    @app.get("/garments/{garment_id}", tags=["garments"])
    async def get_garment(request: Request, garment_id: str) -> dict[str, Any]:
        garment = await _load_garment(request, garment_id)
        return garment.to_record()

    @app.post("/garments", tags=["garments"])
    async def save_garment(request: Request, garment: Garment) -> dict[str, Any]:
        """Create a garment (unknown or draft id) or replace an existing one."""

        try:
            saved = await request.app.state.repository.save(garment)
        except RepositoryError as exc:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="There was a problem saving your product. Please try again.",
            ) from exc
        garments_saved_total.inc()
        return saved.to_record()

    @app.post("/garments/{garment_id}/quote", tags=["customizer"])
    async def quote(request: Request, garment_id: str, customization: CustomizationState) -> dict[str, Any]:
        """Return the running price and paint order for a set of selections."""

        garment = await _load_garment(request, garment_id)
        total = compute_total_price(
            garment,
            customization,
            logo_price=settings.logo_price,
            text_price=settings.text_price,
        )
        layers = resolve_render_layers(garment, customization)
        quotes_computed_total.inc()
        return {
            "totalPrice": total,
            "displayPrice": format_price(total),
            "layers": [_instruction_payload(item) for item in layers],
        }

    @app.post("/uploads/logo", tags=["customizer"])
    async def upload_logo(request: Request, file: UploadFile = File(...)) -> dict[str, Any]:
        """Validate a logo and run it through the content-policy check."""

        data, mime = await _read_upload(request, file)
        data_uri = to_data_uri(data, mime)
        classifier = request.app.state.moderation
        if classifier is None:
            result = ModerationResult(is_safe=False, reason="Logo moderation is not configured.")
        else:
            result = await check_logo(classifier, data_uri)
        logo_checks_total.labels(outcome="safe" if result.is_safe else "unsafe").inc()

        payload = result.to_record()
        payload["dataUri"] = data_uri if result.is_safe else None
        return payload

    @app.post("/uploads/layer-image", tags=["garments"])
    async def upload_layer_image(request: Request, file: UploadFile = File(...)) -> dict[str, str]:
        data, mime = await _read_upload(request, file)
        return {"imageDataUri": to_data_uri(data, mime)}

    return app


app = create_app()

"""Logo content-policy check backed by an OpenAI-compatible vision model."""

from __future__ import annotations

import json
import logging
from typing import Protocol

from openai import APIError, AsyncOpenAI
from pydantic import Field, ValidationError

from customizer.config.settings import Settings, get_settings
from customizer.domain.models import CamelModel
from customizer.errors import UpstreamUnavailableError

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You review logos that customers want printed on garments. "
    "Decide whether the image is safe to print: reject hate symbols, nudity, graphic violence, "
    "drug references and obvious trademark infringement. "
    'Answer strictly in JSON: {"isSafe": true|false, "reason": "..."}. '
    "The reason must be a short sentence a customer can understand."
)


class ModerationError(UpstreamUnavailableError):
    """Raised when the moderation provider fails or answers in an unexpected format."""


class ModerationResult(CamelModel):
    """Verdict on an uploaded logo."""

    is_safe: bool
    reason: str = Field(default="")


class LogoClassifier(Protocol):
    async def classify(self, image_data_uri: str) -> ModerationResult: ...


class LogoModerationClient:
    """Thin client that asks the vision model whether a logo may be printed."""

    def __init__(self, settings: Settings | None = None) -> None:
        settings = settings or get_settings()
        if not settings.moderation_api_key:
            raise RuntimeError("Moderation API key is not configured.")

        self._settings = settings
        self._client = AsyncOpenAI(
            api_key=settings.moderation_api_key,
            base_url=settings.moderation_base_url.rstrip("/"),
            timeout=settings.moderation_timeout,
        )

    async def classify(self, image_data_uri: str) -> ModerationResult:
        """Return the model's verdict for the image encoded as a data URI."""

        try:
            response = await self._client.chat.completions.create(
                model=self._settings.moderation_model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {
                        "role": "user",
                        "content": [
                            {"type": "text", "text": "Check this logo."},
                            {"type": "image_url", "image_url": {"url": image_data_uri}},
                        ],
                    },
                ],
                response_format={"type": "json_object"},
            )
        except APIError as exc:
            raise ModerationError(f"Moderation service request failed: {exc}") from exc

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise ModerationError("Moderation service returned an empty answer.")
        try:
            return ModerationResult.model_validate(json.loads(content))
        except (json.JSONDecodeError, ValidationError) as exc:
            logger.warning("Failed to parse moderation verdict: %s", content)
            raise ModerationError("Moderation service returned an invalid verdict.") from exc

    async def ping(self) -> bool:
        """Return ``True`` when the service responds to a model listing call."""

        models = await self._client.models.list()
        return bool(models.data)

    async def close(self) -> None:
        """Close the underlying HTTP session."""

        await self._client.close()


async def check_logo(classifier: LogoClassifier, image_data_uri: str) -> ModerationResult:
    """Classify a logo, turning every failure into an unsafe verdict."""

    if not image_data_uri:
        return ModerationResult(is_safe=False, reason="No logo data provided.")

    try:
        return await classifier.classify(image_data_uri)
    except Exception as exc:
        logger.error("Error in logo content policy check: %s", exc)
        return ModerationResult(
            is_safe=False,
            reason=f"An unexpected error occurred on the server: {exc}",
        )

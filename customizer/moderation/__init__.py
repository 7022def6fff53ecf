"""Logo moderation gateway."""

from .client import (
    LogoClassifier,
    LogoModerationClient,
    ModerationError,
    ModerationResult,
    check_logo,
)

__all__ = [
    "LogoClassifier",
    "LogoModerationClient",
    "ModerationError",
    "ModerationResult",
    "check_logo",
]

"""Customer customization sessions."""

from .customization import FONTS, CustomizationSession, LogoUploadOutcome, SelectionError

__all__ = ["FONTS", "CustomizationSession", "LogoUploadOutcome", "SelectionError"]

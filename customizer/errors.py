"""Exception hierarchy shared across the customizer package."""

from __future__ import annotations


class CustomizerError(Exception):
    """Base class for errors raised by the customizer."""


class UpstreamUnavailableError(CustomizerError, RuntimeError):
    """Raised when storage or an external provider cannot serve a request.

    The failure is local to one user action and can be retried.
    """


class ValidationRejectedError(CustomizerError, ValueError):
    """Raised when user input is rejected before any processing happens."""

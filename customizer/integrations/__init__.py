"""Integration check helpers."""

from .checks import (
    IntegrationCheckResult,
    check_garment_store,
    check_moderation,
    run_all_checks,
)

__all__ = [
    "IntegrationCheckResult",
    "check_garment_store",
    "check_moderation",
    "run_all_checks",
]

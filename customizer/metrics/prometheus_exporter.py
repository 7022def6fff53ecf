"""Prometheus exporter helpers."""

from __future__ import annotations

from prometheus_client import Counter


quotes_computed_total = Counter(
    "quotes_computed_total",
    "Total number of price and preview quotes computed.",
)

logo_checks_total = Counter(
    "logo_checks_total",
    "Logo moderation checks grouped by outcome.",
    ["outcome"],
)

garments_saved_total = Counter(
    "garments_saved_total",
    "Total number of garment definitions persisted.",
)

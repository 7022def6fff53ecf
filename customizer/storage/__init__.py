"""Persistence helpers."""

from .repository import GarmentRepository, RepositoryError

__all__ = ["GarmentRepository", "RepositoryError"]

"""Pydantic schemas for the Parfum Consultant."""

from .parfum import (
    Gender,
    PriceRange,
    Sillage,
    Notes,
    ParfumFields,
    Parfum,
    CatalogDocument,
    CatalogStats,
    RecommendationRequest,
)

__all__ = [
    "Gender",
    "PriceRange",
    "Sillage",
    "Notes",
    "ParfumFields",
    "Parfum",
    "CatalogDocument",
    "CatalogStats",
    "RecommendationRequest",
]

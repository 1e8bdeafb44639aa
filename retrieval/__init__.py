"""Catalog storage layer."""

from .catalog_store import CatalogStore

__all__ = ["CatalogStore"]

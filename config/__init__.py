"""Configuration for the Parfum Consultant."""

from .settings import Settings, DEFAULT_API_URL

__all__ = ["Settings", "DEFAULT_API_URL"]

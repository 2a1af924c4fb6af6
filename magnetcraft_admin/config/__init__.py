"""Configuration for the MagnetCraft admin client."""

from .settings import Settings, settings

__all__ = ["Settings", "settings"]

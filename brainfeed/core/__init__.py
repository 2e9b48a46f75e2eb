"""Core app configuration, database, sessions and signing."""

from brainfeed.core.config import Settings, get_settings
from brainfeed.core.database import get_db

__all__ = ["Settings", "get_settings", "get_db"]

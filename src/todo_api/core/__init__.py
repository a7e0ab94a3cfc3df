"""Configuration, logging and request plumbing shared by every surface."""

from __future__ import annotations

from .config import Settings, get_settings
from .context import REQUEST_ID_HEADER, current_context
from .logging import configure_logging

__all__ = ["REQUEST_ID_HEADER", "Settings", "configure_logging", "current_context", "get_settings"]

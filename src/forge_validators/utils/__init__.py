"""Small shared utilities."""

from .logging_config import coerce_level, setup_logging

__all__ = ["coerce_level", "setup_logging"]

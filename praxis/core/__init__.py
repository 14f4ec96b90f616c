"""praxis.core — Configuration and logging setup."""

from praxis.core.config import Config
from praxis.core.logging import StructuredFormatter, configure_logging

__all__ = [
    "Config",
    "StructuredFormatter",
    "configure_logging",
]

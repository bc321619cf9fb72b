"""
Shared utility helpers: structured logging and request context.
"""

from .logging import get_logger, log_context, setup_logging

__all__ = [
    "get_logger",
    "log_context",
    "setup_logging",
]

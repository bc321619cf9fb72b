"""
Core utilities package for PlantScope.
Provides the exception taxonomy shared by every layer.
"""

from .exceptions import (
    PlantScopeException,
    InvalidInputError,
    ProviderError,
    ProviderTransportError,
    ProviderTimeoutError,
    ProviderRateLimitError,
    ProviderAuthError,
    ExtractionError,
    NoStructuredBlockFoundError,
    MalformedStructuredBlockError,
    InsufficientDataError,
)

__all__ = [
    "PlantScopeException",
    "InvalidInputError",
    "ProviderError",
    "ProviderTransportError",
    "ProviderTimeoutError",
    "ProviderRateLimitError",
    "ProviderAuthError",
    "ExtractionError",
    "NoStructuredBlockFoundError",
    "MalformedStructuredBlockError",
    "InsufficientDataError",
]

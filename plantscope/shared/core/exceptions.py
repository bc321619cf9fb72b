# 📄 File: plantscope/shared/core/exceptions.py
# 🧭 Purpose (Layman Explanation):
# This file defines all the special error types PlantScope uses to say what went wrong
# (a bad search term, a provider that is down, a garbled AI answer) in a clear, organized way.
# 🧪 Purpose (Technical Summary):
# Custom exception hierarchy providing specific error types with HTTP status codes,
# machine-readable error codes and details consumed by the error handlers and the aggregation manifest.
# 🔗 Dependencies:
# typing, FastAPI HTTP status constants
# 🔄 Connected Modules / Calls From:
# Provider clients, fallback orchestrator, query handlers, middleware, main.py handlers

from typing import Any, Dict, Optional

from fastapi import status


class PlantScopeException(Exception):
    """
    Base exception class for PlantScope.
    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.error_code = error_code or self.__class__.__name__.upper()
        super().__init__(self.message)


# =============================================================================
# INPUT VALIDATION EXCEPTIONS
# =============================================================================

class InvalidInputError(PlantScopeException):
    """
    Exception raised when a required query parameter is empty or missing.
    Surfaced to the caller as a client error and never retried.
    """

    def __init__(
        self,
        message: str = "Invalid input",
        field: Optional[str] = None,
        value: Optional[Any] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)

        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details,
            error_code="INVALID_INPUT"
        )


# =============================================================================
# PROVIDER EXCEPTIONS
# =============================================================================

class ProviderError(PlantScopeException):
    """
    Base class for failures of a single upstream provider.
    The orchestrator downgrades these to manifest entries.
    """

    def __init__(
        self,
        message: str = "Provider error",
        provider: Optional[str] = None,
        status_code: int = status.HTTP_502_BAD_GATEWAY,
        error_code: str = "PROVIDER_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if provider:
            details["provider"] = provider
        self.provider = provider

        super().__init__(
            message=message,
            status_code=status_code,
            details=details,
            error_code=error_code
        )


class ProviderTransportError(ProviderError):
    """
    Exception raised for network failures, timeouts and 4xx/5xx upstream responses.
    """

    def __init__(
        self,
        message: str = "Provider request failed",
        provider: Optional[str] = None,
        upstream_status: Optional[int] = None,
        error_code: str = "PROVIDER_TRANSPORT_FAILURE",
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if upstream_status:
            details["upstream_status"] = upstream_status
        self.upstream_status = upstream_status

        super().__init__(
            message=message,
            provider=provider,
            status_code=status.HTTP_502_BAD_GATEWAY,
            error_code=error_code,
            details=details
        )


class ProviderTimeoutError(ProviderTransportError):
    """Exception raised when a provider call exceeds its deadline."""

    def __init__(self, provider: str, timeout_seconds: float):
        super().__init__(
            message=f"{provider} did not respond within {timeout_seconds:g} seconds",
            provider=provider,
            error_code="PROVIDER_TIMEOUT",
            details={"timeout_seconds": timeout_seconds}
        )


class ProviderRateLimitError(ProviderTransportError):
    """Exception raised when a provider answers 429."""

    def __init__(self, provider: str, retry_after: Optional[str] = None):
        details = {}
        if retry_after:
            details["retry_after"] = retry_after

        super().__init__(
            message=f"Rate limit exceeded for {provider}",
            provider=provider,
            upstream_status=429,
            error_code="PROVIDER_RATE_LIMITED",
            details=details
        )


class ProviderAuthError(ProviderError):
    """
    Exception raised when credentials for a provider are missing or rejected.
    Treated as a configuration error for that provider's feature.
    """

    def __init__(
        self,
        provider: str,
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message or f"Authentication failed for {provider}",
            provider=provider,
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            error_code="PROVIDER_AUTH_FAILURE",
            details=details
        )


# =============================================================================
# EXTRACTION EXCEPTIONS
# =============================================================================

class ExtractionError(PlantScopeException):
    """
    Exception raised when generative-text output carries no usable JSON object.
    Degrades the affected field group only.
    """

    def __init__(
        self,
        message: str = "Could not extract structured data",
        excerpt: Optional[str] = None,
        error_code: str = "EXTRACTION_FAILURE",
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if excerpt:
            details["excerpt"] = excerpt[:200]

        super().__init__(
            message=message,
            status_code=status.HTTP_502_BAD_GATEWAY,
            details=details,
            error_code=error_code
        )


class NoStructuredBlockFoundError(ExtractionError):
    """No balanced {...} span exists in the text."""

    def __init__(self, excerpt: Optional[str] = None):
        super().__init__(
            message="No JSON object found in model output",
            excerpt=excerpt,
            error_code="NO_STRUCTURED_BLOCK_FOUND"
        )


class MalformedStructuredBlockError(ExtractionError):
    """A balanced {...} span exists but does not parse as JSON."""

    def __init__(self, excerpt: Optional[str] = None, reason: Optional[str] = None):
        details = {}
        if reason:
            details["reason"] = reason

        super().__init__(
            message="JSON object in model output is malformed",
            excerpt=excerpt,
            error_code="MALFORMED_STRUCTURED_BLOCK",
            details=details
        )


# =============================================================================
# AGGREGATION EXCEPTIONS
# =============================================================================

class InsufficientDataError(PlantScopeException):
    """
    Exception raised when every provider failed or returned nothing usable
    and the resulting record is entirely empty.
    """

    def __init__(
        self,
        message: str = "No provider returned usable data",
        subject: Optional[str] = None,
        missing_groups: Optional[list] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if subject:
            details["subject"] = subject
        if missing_groups:
            details["missing_groups"] = missing_groups

        super().__init__(
            message=message,
            status_code=status.HTTP_502_BAD_GATEWAY,
            details=details,
            error_code="INSUFFICIENT_DATA"
        )

# 📄 File: plantscope/shared/infrastructure/external_apis/api_client.py

# 🧭 Purpose (Layman Explanation):
# This file creates the HTTP client every data provider uses to talk to the outside world,
# making sure a slow or broken service gives up in time and reports clearly what went wrong.

# 🧪 Purpose (Technical Summary):
# Generic async HTTP client wrapping aiohttp with a per-call deadline, status-code to
# typed-failure mapping, request statistics and a bounded error history. No retries and
# no response caching: every lookup is aggregated live.

# 🔗 Dependencies:
# - aiohttp: Async HTTP client
# - plantscope.shared.core.exceptions: typed provider failures

# 🔄 Connected Modules / Calls From:
# Used by: Plant.id, Gemini, Perplexity, GBIF, Wikimedia, Unsplash and OpenWeather clients

import asyncio
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

import aiohttp
from aiohttp import ClientSession, ClientTimeout

from plantscope.shared.core.exceptions import (
    ProviderAuthError,
    ProviderError,
    ProviderRateLimitError,
    ProviderTimeoutError,
    ProviderTransportError,
)
from plantscope.shared.utils.logging import get_logger

logger = get_logger(__name__)


class APIClient:
    """
    Generic async HTTP client for provider integrations.

    Features:
    - Per-call deadline (a hung upstream never blocks the request)
    - Typed failures mapped from HTTP status codes
    - Pre-flight check for providers that require a key
    - Request statistics and recent error history for health reporting
    """

    def __init__(
        self,
        base_url: str,
        api_name: str,
        api_key: Optional[str] = None,
        timeout: float = 15.0,
        requires_key: bool = False,
        default_headers: Optional[Dict[str, str]] = None
    ):
        self.base_url = base_url.rstrip('/')
        self.api_name = api_name
        self.api_key = api_key
        self.timeout = timeout
        self.requires_key = requires_key
        self.extra_headers = default_headers or {}

        self.session: Optional[ClientSession] = None

        self.stats = {
            'total_requests': 0,
            'successful_requests': 0,
            'failed_requests': 0,
            'average_response_time': 0,
            'last_request_time': None,
        }

        self.error_history: List[Dict[str, Any]] = []
        self.max_error_history = 100

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key) or not self.requires_key

    async def initialize(self):
        """Create the underlying aiohttp session."""
        if self.session is not None:
            return

        connector = aiohttp.TCPConnector(limit=10, limit_per_host=5, ttl_dns_cache=300)
        self.session = ClientSession(
            timeout=ClientTimeout(total=self.timeout),
            connector=connector,
            headers=self._get_default_headers()
        )
        logger.info(f"API client initialized for {self.api_name}")

    def _get_default_headers(self) -> Dict[str, str]:
        headers = {
            'User-Agent': f'PlantScope/1.0 ({self.api_name}-client)',
            'Accept': 'application/json',
        }
        headers.update(self.extra_headers)
        return headers

    def ensure_configured(self):
        """Raise ProviderAuthError before any network call when the key is missing."""
        if not self.is_configured:
            raise ProviderAuthError(
                provider=self.api_name,
                message=f"{self.api_name} API key is not configured"
            )

    def _build_url(self, endpoint: str) -> str:
        if not endpoint:
            return self.base_url
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    async def _make_request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict] = None,
        data: Optional[Union[Dict, str, bytes]] = None,
        headers: Optional[Dict] = None,
        timeout: Optional[float] = None
    ) -> Dict[str, Any]:
        """Send one request under a deadline and return the decoded JSON body."""
        self.ensure_configured()

        if not self.session:
            await self.initialize()

        url = self._build_url(endpoint)
        deadline = timeout or self.timeout

        request_kwargs: Dict[str, Any] = {'method': method, 'url': url}
        if headers:
            request_kwargs['headers'] = headers
        if params:
            request_kwargs['params'] = params
        if data is not None:
            if isinstance(data, dict):
                request_kwargs['json'] = data
            else:
                request_kwargs['data'] = data

        start_time = time.monotonic()
        status_code = None

        try:
            response_data, status_code = await asyncio.wait_for(
                self._send(request_kwargs),
                timeout=deadline
            )
        except asyncio.CancelledError:
            raise
        except Exception as e:
            duration_ms = (time.monotonic() - start_time) * 1000
            self.stats['total_requests'] += 1
            self.stats['failed_requests'] += 1
            error = self._transform_exception(e, deadline)
            self._record_error(error, method, url)
            logger.performance.log_provider_call(
                self.api_name, endpoint or '/', method,
                getattr(error, 'upstream_status', None), duration_ms, False,
                extra={'error_type': type(error).__name__}
            )
            raise error

        duration_ms = (time.monotonic() - start_time) * 1000
        self._update_stats(duration_ms / 1000)
        logger.performance.log_provider_call(
            self.api_name, endpoint or '/', method, status_code, duration_ms, True
        )
        return response_data

    async def _send(self, request_kwargs: Dict[str, Any]):
        async with self.session.request(**request_kwargs) as response:
            await self._handle_response_status(response)

            try:
                response_data = await response.json(content_type=None)
            except (aiohttp.ContentTypeError, ValueError):
                response_data = {'raw_response': await response.text()}

            return response_data, response.status

    async def _handle_response_status(self, response: aiohttp.ClientResponse):
        """Map HTTP status codes onto typed provider failures."""
        if 200 <= response.status < 300:
            return
        elif response.status in (401, 403):
            raise ProviderAuthError(
                provider=self.api_name,
                details={'upstream_status': response.status}
            )
        elif response.status == 429:
            raise ProviderRateLimitError(
                provider=self.api_name,
                retry_after=response.headers.get('Retry-After')
            )
        elif 400 <= response.status < 500:
            response_text = await response.text()
            raise ProviderTransportError(
                message=f"Client error for {self.api_name} ({response.status}): {response_text[:200]}",
                provider=self.api_name,
                upstream_status=response.status
            )
        elif 500 <= response.status < 600:
            response_text = await response.text()
            raise ProviderTransportError(
                message=f"Server error for {self.api_name} ({response.status}): {response_text[:200]}",
                provider=self.api_name,
                upstream_status=response.status
            )
        else:
            raise ProviderTransportError(
                message=f"Unexpected status code for {self.api_name}: {response.status}",
                provider=self.api_name,
                upstream_status=response.status
            )

    def _transform_exception(self, exception: Exception, deadline: float) -> Exception:
        """Transform low-level exceptions into provider failures."""
        if isinstance(exception, ProviderError):
            return exception
        elif isinstance(exception, asyncio.TimeoutError):
            return ProviderTimeoutError(provider=self.api_name, timeout_seconds=deadline)
        elif isinstance(exception, aiohttp.ClientError):
            return ProviderTransportError(
                message=f"Network error for {self.api_name}: {exception}",
                provider=self.api_name
            )
        else:
            return exception

    def _update_stats(self, response_time: float):
        self.stats['total_requests'] += 1
        self.stats['successful_requests'] += 1
        self.stats['last_request_time'] = datetime.now(timezone.utc).isoformat()

        if self.stats['average_response_time'] == 0:
            self.stats['average_response_time'] = response_time
        else:
            self.stats['average_response_time'] = (
                self.stats['average_response_time'] * 0.7 + response_time * 0.3
            )

    def _record_error(self, error: Exception, method: str, url: str):
        error_record = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'error_type': type(error).__name__,
            'error_message': str(error),
            'method': method,
            'url': url,
            'api_name': self.api_name
        }

        self.error_history.append(error_record)
        if len(self.error_history) > self.max_error_history:
            self.error_history = self.error_history[-self.max_error_history:]

    async def get(
        self,
        endpoint: str = '',
        params: Optional[Dict] = None,
        headers: Optional[Dict] = None,
        timeout: Optional[float] = None
    ) -> Dict[str, Any]:
        """Make GET request."""
        return await self._make_request('GET', endpoint, params, None, headers, timeout)

    async def post(
        self,
        endpoint: str = '',
        data: Optional[Union[Dict, str, bytes]] = None,
        params: Optional[Dict] = None,
        headers: Optional[Dict] = None,
        timeout: Optional[float] = None
    ) -> Dict[str, Any]:
        """Make POST request."""
        return await self._make_request('POST', endpoint, params, data, headers, timeout)

    def get_stats(self) -> Dict[str, Any]:
        """Get client statistics."""
        return {
            **self.stats,
            'api_name': self.api_name,
            'configured': self.is_configured,
            'error_rate': (
                self.stats['failed_requests'] / max(self.stats['total_requests'], 1)
            ) * 100,
        }

    def get_recent_errors(self, limit: int = 10) -> List[Dict]:
        """Get recent error history."""
        return self.error_history[-limit:]

    async def close(self):
        """Close the client session."""
        if self.session:
            await self.session.close()
            self.session = None
            logger.info(f"API client closed for {self.api_name}")

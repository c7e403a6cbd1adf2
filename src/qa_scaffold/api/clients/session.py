"""
API session shared by all API clients.

A session bundles the Playwright request context, the endpoint registry
and the API base URL. Clients hold a session instead of inheriting from
a base class.
"""

from typing import Any, Optional

from playwright.async_api import APIRequestContext

from ...config import Settings
from ..common_requests import send_request
from ..endpoints import ENDPOINTS, Endpoints
from ..http_methods import HttpMethod
from ..models import ApiRequest, RequestOptions


class ApiSession:
    """Request context, endpoint registry and base URL for API clients."""

    def __init__(
        self,
        request_context: APIRequestContext,
        base_url: str,
        endpoints: Endpoints = ENDPOINTS,
        fallback_token: Optional[str] = None,
    ):
        self._request_context = request_context
        self._base_url = base_url.rstrip("/")
        self._endpoints = endpoints
        self._fallback_token = fallback_token

    @classmethod
    def from_settings(
        cls,
        request_context: APIRequestContext,
        settings: Settings,
        endpoints: Endpoints = ENDPOINTS,
    ) -> "ApiSession":
        """Create a session for the API configured in ``settings``."""
        return cls(
            request_context,
            base_url=settings.env.api_base_url,
            endpoints=endpoints,
            fallback_token=settings.env.api_fallback_token,
        )

    @property
    def endpoints(self) -> Endpoints:
        return self._endpoints

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def request_context(self) -> APIRequestContext:
        return self._request_context

    async def send(
        self,
        method: HttpMethod,
        endpoint: str,
        *,
        body: Any = None,
        token: Optional[str] = None,
        options: Optional[RequestOptions] = None,
    ) -> Any:
        """Send one request relative to the session's base URL."""
        return await send_request(
            self._request_context,
            ApiRequest(
                method=method,
                endpoint=endpoint,
                body=body,
                token=token,
                base_url=self._base_url,
            ),
            options,
            fallback_token=self._fallback_token,
        )

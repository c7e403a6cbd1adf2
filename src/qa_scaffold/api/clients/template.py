"""
Template API client.

Each method maps to one request with a fixed method and endpoint.
Replace the methods with the application's own operations.
"""

from typing import Any, Optional
from urllib.parse import urlencode

from ..http_methods import HttpMethod
from ..models import RequestOptions
from .session import ApiSession

TOKEN_KEYS = ("token", "access_token", "accessToken")


def extract_token(payload: Any) -> Optional[str]:
    """Read the bearer token from a login response payload."""
    if not isinstance(payload, dict):
        return None
    for key in TOKEN_KEYS:
        if payload.get(key):
            return payload[key]
    return None


class TemplateApiClient:
    """API client for the template endpoints. Holds no tokens."""

    def __init__(self, session: ApiSession):
        self.session = session

    @property
    def urls(self):
        return self.session.endpoints

    # Auth endpoints
    async def login(
        self, email: str, password: str, options: Optional[RequestOptions] = None
    ) -> Any:
        """Log in and return the response payload."""
        return await self.session.send(
            HttpMethod.POST,
            self.urls.auth.login,
            body={"email": email, "password": password},
            options=options,
        )

    async def logout(self, token: str, options: Optional[RequestOptions] = None) -> Any:
        return await self.session.send(
            HttpMethod.POST, self.urls.auth.logout, token=token, options=options)

    async def refresh(self, token: str, options: Optional[RequestOptions] = None) -> Any:
        return await self.session.send(
            HttpMethod.POST, self.urls.auth.refresh, token=token, options=options)

    # User endpoints
    async def get_profile(
        self,
        user_id: str,
        token: Optional[str] = None,
        options: Optional[RequestOptions] = None,
    ) -> Any:
        """Fetch a user profile by id."""
        return await self.session.send(
            HttpMethod.GET,
            f"{self.urls.users.profile}/{user_id}",
            token=token,
            options=options,
        )

    # Template endpoints
    async def get_data(
        self, token: Optional[str] = None, options: Optional[RequestOptions] = None
    ) -> Any:
        return await self.session.send(
            HttpMethod.GET, self.urls.template.get_data, token=token, options=options)

    async def list_data(
        self,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        token: Optional[str] = None,
        options: Optional[RequestOptions] = None,
    ) -> Any:
        """List template data, optionally paginated."""
        params = {
            key: value
            for key, value in (("page", page), ("limit", limit))
            if value is not None
        }
        endpoint = self.urls.template.get_data
        if params:
            endpoint = f"{endpoint}?{urlencode(params)}"
        return await self.session.send(
            HttpMethod.GET, endpoint, token=token, options=options)

    async def post_data(
        self,
        data: Any,
        token: Optional[str] = None,
        options: Optional[RequestOptions] = None,
    ) -> Any:
        return await self.session.send(
            HttpMethod.POST,
            self.urls.template.post_data,
            body=data,
            token=token,
            options=options,
        )

    async def update_data(
        self,
        item_id: str,
        data: Any,
        token: Optional[str] = None,
        options: Optional[RequestOptions] = None,
    ) -> Any:
        return await self.session.send(
            HttpMethod.PUT,
            f"{self.urls.template.update_data}/{item_id}",
            body=data,
            token=token,
            options=options,
        )

    async def delete_data(
        self,
        item_id: str,
        token: Optional[str] = None,
        options: Optional[RequestOptions] = None,
    ) -> Any:
        return await self.session.send(
            HttpMethod.DELETE,
            f"{self.urls.template.delete_data}/{item_id}",
            token=token,
            options=options,
        )

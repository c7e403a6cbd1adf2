"""
Request and response value objects for the HTTP request helper.

All of them are created per call and never retained.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from playwright.async_api import APIResponse

from .http_methods import HttpMethod


class ReturnType(Enum):
    """Shape of the value returned by the request helper."""

    DATA = "data"
    BOTH = "both"
    FULL = "full"


@dataclass(frozen=True)
class ApiRequest:
    """A single request: method, relative endpoint and optional body/token."""

    method: HttpMethod | str
    endpoint: str
    body: Any = None
    token: Optional[str] = None
    base_url: Optional[str] = None


@dataclass(frozen=True)
class RequestOptions:
    """
    Per-call behavior of the request helper.

    Attributes:
        allow_bad_request: Return responses with status >= 400 instead of
            raising. Use ``False`` for positive tests and ``True`` for
            negative tests that assert on the error payload.
        return_type: Which shape to return (payload, both, raw response).
        expected_status: If set, any other status raises.
    """

    allow_bad_request: bool = False
    return_type: ReturnType = ReturnType.DATA
    expected_status: Optional[int] = None


@dataclass(frozen=True)
class ApiResult:
    """Raw response together with its decoded payload."""

    response: APIResponse
    data: Any

    @property
    def status(self) -> int:
        return self.response.status


DEFAULT_OPTIONS = RequestOptions()

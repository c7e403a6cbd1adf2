"""
HTTP API layer: endpoint registry, request helper and clients.
"""

from .clients import ApiSession, TemplateApiClient, extract_token
from .common_requests import (
    build_headers,
    build_url,
    send_for_both,
    send_for_data,
    send_for_response,
    send_request,
)
from .endpoints import ENDPOINTS, Endpoints, load_endpoints
from .http_methods import HttpMethod
from .models import ApiRequest, ApiResult, RequestOptions, ReturnType

__all__ = [
    "ApiRequest",
    "ApiResult",
    "ApiSession",
    "ENDPOINTS",
    "Endpoints",
    "HttpMethod",
    "RequestOptions",
    "ReturnType",
    "TemplateApiClient",
    "build_headers",
    "build_url",
    "extract_token",
    "load_endpoints",
    "send_for_both",
    "send_for_data",
    "send_for_response",
    "send_request",
]

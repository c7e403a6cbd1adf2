"""
Common API request helper.

Every API client call goes through ``send_request``: it builds the URL and
headers, dispatches exactly one call on a Playwright ``APIRequestContext``
and applies the status gating policy.

``RequestOptions.allow_bad_request`` controls error handling:

* ``False`` (default): for positive tests. Responses with status >= 400
  raise ``ApiRequestError``.
* ``True``: for negative tests. Error responses are returned like any
  other so the test can assert on them.

Nothing is retried or cached; timeouts are Playwright's defaults.
"""

import logging
from typing import Any, Optional

from playwright.async_api import APIRequestContext, APIResponse

from ..config import get_settings
from ..exceptions import ApiRequestError, UnexpectedStatusError, UnsupportedMethodError
from .http_methods import HttpMethod
from .models import DEFAULT_OPTIONS, ApiRequest, ApiResult, RequestOptions, ReturnType

logger = logging.getLogger(__name__)


def build_headers(token: Optional[str] = None) -> dict[str, str]:
    """
    Headers sent with every request.

    Args:
        token: Optional bearer token.

    Returns:
        Headers dictionary for API requests.
    """
    headers = {
        "Accept": "*/*",
        "Content-Type": "application/json",
    }

    if token:
        headers["Authorization"] = f"Bearer {token}"

    return headers


def build_url(base_url: str, endpoint: str) -> str:
    """Join a base URL and a relative endpoint with a single slash."""
    return f"{base_url.rstrip('/')}/{endpoint.lstrip('/')}"


def _coerce_method(method: HttpMethod | str) -> HttpMethod:
    try:
        return HttpMethod(method.upper() if isinstance(method, str) else method)
    except ValueError:
        raise UnsupportedMethodError(method) from None


async def _read_payload(response: APIResponse) -> Any:
    body = await response.body()
    if not body:
        return None
    if "json" in response.headers.get("content-type", ""):
        try:
            return await response.json()
        except ValueError:
            logger.debug("Response declared JSON but did not parse, reading text")
    return await response.text()


async def send_request(
    request_context: APIRequestContext,
    api_request: ApiRequest,
    options: Optional[RequestOptions] = None,
    *,
    fallback_token: Optional[str] = None,
) -> Any:
    """
    Send one API request.

    Args:
        request_context: Playwright request context performing the call.
        api_request: Method, relative endpoint, body, token and optional
            base URL override. Without an override the API base URL from
            the loaded settings is used.
        options: Error handling and return shape for this call.
        fallback_token: Token used when ``api_request`` has none.

    Returns:
        The decoded payload (``ReturnType.DATA``), an ``ApiResult``
        (``ReturnType.BOTH``) or the raw ``APIResponse`` (``ReturnType.FULL``).

    Raises:
        UnsupportedMethodError: If the method is not a known HTTP method.
        ApiRequestError: If status >= 400 and bad requests are not allowed.
        UnexpectedStatusError: If ``expected_status`` is set and differs.
    """
    options = options or DEFAULT_OPTIONS
    method = _coerce_method(api_request.method)

    base_url = api_request.base_url or get_settings().env.api_base_url
    url = build_url(base_url, api_request.endpoint)
    headers = build_headers(api_request.token or fallback_token)

    logger.debug("%s %s", method.value, url)

    if method is HttpMethod.GET:
        response = await request_context.get(
            url, headers=headers, fail_on_status_code=False)
    elif method is HttpMethod.POST:
        response = await request_context.post(
            url, headers=headers, data=api_request.body, fail_on_status_code=False)
    elif method is HttpMethod.PUT:
        response = await request_context.put(
            url, headers=headers, data=api_request.body, fail_on_status_code=False)
    elif method is HttpMethod.DELETE:
        response = await request_context.delete(
            url, headers=headers, fail_on_status_code=False)
    elif method is HttpMethod.PATCH:
        response = await request_context.patch(
            url, headers=headers, data=api_request.body, fail_on_status_code=False)
    else:
        raise UnsupportedMethodError(method)

    payload = await _read_payload(response)

    if response.status >= 400 and not options.allow_bad_request:
        logger.warning("%s %s returned %s", method.value, url, response.status)
        raise ApiRequestError(method.value, url, response.status, payload)

    if options.expected_status is not None and response.status != options.expected_status:
        raise UnexpectedStatusError(url, options.expected_status, response.status)

    if options.return_type is ReturnType.BOTH:
        return ApiResult(response=response, data=payload)
    if options.return_type is ReturnType.FULL:
        return response
    return payload


async def send_for_data(
    request_context: APIRequestContext,
    api_request: ApiRequest,
    allow_bad_request: bool = False,
) -> Any:
    """Send a request and return only the decoded payload."""
    return await send_request(
        request_context,
        api_request,
        RequestOptions(allow_bad_request=allow_bad_request),
    )


async def send_for_both(
    request_context: APIRequestContext,
    api_request: ApiRequest,
    allow_bad_request: bool = False,
) -> ApiResult:
    """Send a request and return the raw response with its payload."""
    return await send_request(
        request_context,
        api_request,
        RequestOptions(allow_bad_request=allow_bad_request, return_type=ReturnType.BOTH),
    )


async def send_for_response(
    request_context: APIRequestContext,
    api_request: ApiRequest,
    allow_bad_request: bool = False,
) -> APIResponse:
    """Send a request and return the raw response."""
    return await send_request(
        request_context,
        api_request,
        RequestOptions(allow_bad_request=allow_bad_request, return_type=ReturnType.FULL),
    )

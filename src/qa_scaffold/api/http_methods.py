"""HTTP methods supported by the request helper."""

from enum import Enum


class HttpMethod(str, Enum):
    """HTTP methods enumeration for API requests."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"

    @property
    def sends_body(self) -> bool:
        """Whether requests with this method carry a body."""
        return self in (HttpMethod.POST, HttpMethod.PUT, HttpMethod.PATCH)

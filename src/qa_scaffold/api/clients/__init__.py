"""API clients built on the common request helper."""

from .session import ApiSession
from .template import TemplateApiClient, extract_token

__all__ = [
    "ApiSession",
    "TemplateApiClient",
    "extract_token",
]

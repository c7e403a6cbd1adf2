"""
Endpoint registry for API clients.

Maps logical endpoint names to paths relative to the API base URL.
Customize the groups below for the application under test; adding a
group only needs a new model and a field on ``Endpoints``.
"""

from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..exceptions import InvalidConfigError


class _EndpointGroup(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class AuthEndpoints(_EndpointGroup):
    """Authentication endpoints."""

    login: str = "auth/login"
    logout: str = "auth/logout"
    refresh: str = "auth/refresh"


class UserEndpoints(_EndpointGroup):
    """User management endpoints."""

    profile: str = "users/profile"
    create: str = "users"
    update: str = "users"
    delete: str = "users"


class TemplateEndpoints(_EndpointGroup):
    """Template endpoints - replace with the application's own."""

    get_data: str = "template/data"
    post_data: str = "template/data"
    update_data: str = "template/data"
    delete_data: str = "template/data"


class Endpoints(BaseModel):
    """All endpoint groups, each entry defaulted when absent."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    auth: AuthEndpoints = Field(default_factory=AuthEndpoints)
    users: UserEndpoints = Field(default_factory=UserEndpoints)
    template: TemplateEndpoints = Field(default_factory=TemplateEndpoints)


def load_endpoints(data: Optional[Mapping[str, Any]] = None) -> Endpoints:
    """
    Validate a nested ``{group: {name: path}}`` mapping.

    Args:
        data: Overrides for the default paths. Omitted groups and names
            keep their defaults.

    Returns:
        Read-only endpoint registry.

    Raises:
        InvalidConfigError: If an entry is not a string or a group is not
            a mapping.
    """
    try:
        return Endpoints.model_validate(dict(data or {}))
    except ValidationError as e:
        errors = [
            (".".join(str(part) for part in error["loc"]), error.get("input"), error["msg"])
            for error in e.errors()
        ]
        raise InvalidConfigError(
            config_key=", ".join(path for path, _, _ in errors),
            value=errors[0][1] if len(errors) == 1 else [value for _, value, _ in errors],
            reason="; ".join(f"{path}: {msg}" for path, _, msg in errors),
        ) from e


ENDPOINTS = load_endpoints()

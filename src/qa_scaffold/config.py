"""
Configuration management for qa-scaffold.

This module loads the environment of the application under test from
process environment variables and an optional ``.env`` file, validates it
with type-safe settings classes and exposes it as one read-only object.
"""

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping, Optional
from urllib.parse import urlparse

from dotenv import dotenv_values, load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import InvalidConfigError, MissingConfigError

logger = logging.getLogger(__name__)

ENV_FILE_VARIABLE = "QA_ENV_FILE"
SUPPORTED_BROWSERS = ("chromium", "firefox", "webkit")


class EnvSettings(BaseSettings):
    """Application under test: URLs and the main user's credentials."""

    model_config = SettingsConfigDict(
        frozen=True,
        extra="ignore",
    )

    base_url: str = Field(..., description="Base URL for the application under test")
    api_base_url: str = Field(..., description="Base URL for the API of the application under test")
    main_user_login: str = Field(..., min_length=1, description="Main user login")
    main_user_password: str = Field(
        ..., min_length=1, repr=False, description="Main user password"
    )
    api_fallback_token: Optional[str] = Field(
        None,
        repr=False,
        description="Bearer token sent when a request carries none",
    )

    @field_validator("base_url", "api_base_url")
    @classmethod
    def validate_absolute_url(cls, v: str) -> str:
        """Require an absolute http(s) URL."""
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("must be an absolute http:// or https:// URL")
        return v.rstrip("/")


class BrowserSettings(BaseSettings):
    """Browser and test run settings."""

    model_config = SettingsConfigDict(
        env_prefix="E2E_",
        frozen=True,
        extra="ignore",
    )

    browser: str = Field(default="chromium", description="Browser engine to launch")
    headless: bool = Field(default=True, description="Run the browser headless")
    slow_mo: int = Field(default=0, ge=0, description="Slow motion delay in ms")
    timeout: int = Field(
        default=30000, gt=0, description="Action and navigation timeout in ms"
    )
    expect_timeout: int = Field(
        default=5000, gt=0, description="Timeout for expect() assertions in ms"
    )
    viewport_width: int = Field(default=1280, gt=0)
    viewport_height: int = Field(default=720, gt=0)
    test_id_attribute: str = Field(
        default="data-testid", min_length=1,
        description="Attribute used by get_by_test_id()",
    )
    screenshot_on_failure: bool = Field(
        default=True, description="Save a screenshot when a UI test fails"
    )
    record_video: bool = Field(
        default=False, description="Record video, kept only for failed tests"
    )
    trace: bool = Field(
        default=False, description="Record a Playwright trace, kept only for failed tests"
    )
    results_dir: Path = Field(
        default=Path("test-results"), description="Directory for test artifacts"
    )

    @field_validator("browser")
    @classmethod
    def validate_browser(cls, v: str) -> str:
        """Validate browser engine name."""
        v_lower = v.lower()
        if v_lower not in SUPPORTED_BROWSERS:
            raise ValueError(
                f"Browser must be one of: {', '.join(SUPPORTED_BROWSERS)}")
        return v_lower

    @property
    def screenshots_dir(self) -> Path:
        return self.results_dir / "screenshots"

    @property
    def videos_dir(self) -> Path:
        return self.results_dir / "videos"

    @property
    def traces_dir(self) -> Path:
        return self.results_dir / "traces"


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        frozen=True,
        extra="ignore",
    )

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format",
    )

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of: {', '.join(valid_levels)}")
        return v_upper


class Settings(BaseModel):
    """Main settings aggregating all configuration sections."""

    model_config = ConfigDict(frozen=True)

    env: EnvSettings
    browser: BrowserSettings = Field(default_factory=BrowserSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


_SECTIONS: dict[str, type[BaseSettings]] = {
    "env": EnvSettings,
    "browser": BrowserSettings,
    "logging": LoggingSettings,
}


def _env_name(settings_cls: type[BaseSettings], loc: tuple[Any, ...]) -> str:
    prefix = settings_cls.model_config.get("env_prefix") or ""
    return f"{prefix}{loc[0]}".upper() if loc else prefix.rstrip("_")


def _from_mapping(
    settings_cls: type[BaseSettings], source: Mapping[str, str]
) -> BaseSettings:
    # model_validate skips the settings sources, so only `source` is read.
    prefix = settings_cls.model_config.get("env_prefix") or ""
    values = {}
    for name in settings_cls.model_fields:
        key = f"{prefix}{name}".upper()
        if key in source:
            values[name] = source[key]
    return settings_cls.model_validate(values)


def resolve_env_file(
    env_file: Optional[str | Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Path:
    """
    Resolve the path of the ``.env`` file.

    Args:
        env_file: Explicit path. Falls back to ``$QA_ENV_FILE`` and then to
            ``.env`` in the current working directory.
        environ: Mapping to read ``$QA_ENV_FILE`` from instead of the
            process environment.

    Returns:
        Path of the file, which may not exist.
    """
    if env_file is not None:
        return Path(env_file)
    from_env = (os.environ if environ is None else environ).get(ENV_FILE_VARIABLE)
    if from_env:
        return Path(from_env)
    return Path.cwd() / ".env"


def load_settings(
    env_file: Optional[str | Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """
    Load and validate settings.

    Values from the ``.env`` file override values already present in the
    process environment. A missing file is not an error.

    Args:
        env_file: Optional path to the ``.env`` file.
        environ: Read variables from this mapping instead of the process
            environment. The ``.env`` file is merged into a copy of it and
            ``os.environ`` is left untouched.

    Returns:
        Validated, read-only Settings instance.

    Raises:
        MissingConfigError: If required variables are absent.
        InvalidConfigError: If any variable has a malformed value.
    """
    path = resolve_env_file(env_file, environ)
    source: Optional[dict[str, str]] = None if environ is None else dict(environ)
    if path.is_file():
        if source is None:
            load_dotenv(path, override=True)
        else:
            source.update(
                (key, value) for key, value in dotenv_values(path).items()
                if value is not None
            )
        logger.debug("Loaded environment overrides from %s", path)

    sections: dict[str, BaseSettings] = {}
    missing: list[str] = []
    invalid: list[tuple[str, Any, str]] = []

    for name, settings_cls in _SECTIONS.items():
        try:
            sections[name] = (
                settings_cls() if source is None
                else _from_mapping(settings_cls, source)
            )
        except ValidationError as e:
            for error in e.errors():
                key = _env_name(settings_cls, error["loc"])
                if error["type"] == "missing":
                    missing.append(key)
                else:
                    invalid.append((key, error.get("input"), error["msg"]))

    if invalid:
        keys = ", ".join(key for key, _, _ in invalid)
        raise InvalidConfigError(
            config_key=keys,
            value=invalid[0][1] if len(invalid) == 1 else [v for _, v, _ in invalid],
            reason="; ".join(f"{key}: {msg}" for key, _, msg in invalid),
            details={"missing": missing} if missing else None,
        )
    if missing:
        raise MissingConfigError(missing)

    return Settings(**sections)


@lru_cache()
def get_settings(env_file: Optional[str] = None) -> Settings:
    """
    Get cached settings.

    The first successful load is kept for the rest of the process.

    Returns:
        Settings instance.
    """
    return load_settings(env_file)


def reload_settings(env_file: Optional[str] = None) -> Settings:
    """
    Reload settings, clearing the cache.

    Returns:
        Fresh Settings instance.
    """
    get_settings.cache_clear()
    return get_settings(env_file)

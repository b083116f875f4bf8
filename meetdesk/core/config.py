from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

AppEnv = Literal["dev", "test", "prod"]
LogLevel = Literal["debug", "info", "warning", "error"]


def _getenv(name: str, default: str) -> str:
    return os.environ.get(name, default).strip()


def _getbool(name: str, default: bool) -> bool:
    raw = _getenv(name, "true" if default else "false").lower()
    if raw in ("1", "true", "yes", "on"):
        return True
    if raw in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"{name} must be a boolean (got {raw!r})")


def _getchoice(name: str, default: str, choices: tuple[str, ...]) -> str:
    raw = _getenv(name, default).lower()
    if raw not in choices:
        raise ValueError(f"{name} must be {'|'.join(choices)} (got {raw!r})")
    return raw


def _getnumber(
    name: str, cast: type[int] | type[float], kind: str
) -> int | float | None:
    """Empty or unset means None; anything else must parse as ``cast``."""
    raw = _getenv(name, "")
    if not raw:
        return None
    try:
        return cast(raw)
    except ValueError:
        raise ValueError(f"{name} must be {kind} (got {raw!r})") from None


def _getoptional(name: str) -> str | None:
    return _getenv(name, "") or None


def _gettimezone(name: str, default: str) -> str:
    raw = _getenv(name, default)
    try:
        ZoneInfo(raw)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValueError(f"{name} must be an IANA time zone (got {raw!r})") from None
    return raw


@dataclass(frozen=True)
class Settings:
    app_env: AppEnv
    log_level: LogLevel
    log_json: bool
    port: int
    cors_origins: tuple[str, ...]
    conference_api_url: str | None
    conference_auth_token: str | None
    conference_host_id: int | None
    conference_time_zone: str
    conference_timeout: float | None
    default_meeting_minutes: int

    @property
    def is_dev(self) -> bool:
        return self.app_env == "dev"

    @property
    def is_test(self) -> bool:
        return self.app_env == "test"

    @property
    def is_prod(self) -> bool:
        return self.app_env == "prod"

    @property
    def conference_enabled(self) -> bool:
        """The provider is only used when URL, token and host id are all set."""
        return None not in (
            self.conference_api_url,
            self.conference_auth_token,
            self.conference_host_id,
        )


def load_settings() -> Settings:
    port = _getnumber("PORT", int, "an integer")
    default_minutes = _getnumber("DEFAULT_MEETING_MINUTES", int, "an integer")
    if default_minutes is not None and default_minutes <= 0:
        raise ValueError(
            f"DEFAULT_MEETING_MINUTES must be positive (got {default_minutes})"
        )
    api_url = _getoptional("CONFERENCE_API_URL")

    return Settings(  # type: ignore[arg-type]
        app_env=_getchoice("APP_ENV", "dev", ("dev", "test", "prod")),
        log_level=_getchoice(
            "LOG_LEVEL", "info", ("debug", "info", "warning", "error")
        ),
        log_json=_getbool("LOG_JSON", False),
        port=8000 if port is None else port,
        cors_origins=tuple(
            origin.strip()
            for origin in _getenv("CORS_ORIGINS", "http://localhost:5173").split(",")
            if origin.strip()
        ),
        conference_api_url=api_url.rstrip("/") if api_url else None,
        conference_auth_token=_getoptional("CONFERENCE_AUTH_TOKEN"),
        conference_host_id=_getnumber("CONFERENCE_HOST_ID", int, "an integer"),
        conference_time_zone=_gettimezone("CONFERENCE_TIME_ZONE", "US/Eastern"),
        conference_timeout=_getnumber(
            "CONFERENCE_TIMEOUT", float, "a number of seconds"
        ),
        default_meeting_minutes=30 if default_minutes is None else default_minutes,
    )


SETTINGS = load_settings()

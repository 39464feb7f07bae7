from __future__ import annotations

import os
from dataclasses import dataclass
from urllib.parse import urlsplit

from dotenv import load_dotenv

ENV_PREFIX = "TABLEKIT_"


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ClientConfig:
    env_name: str
    api_base_url: str
    connect_timeout_seconds: float = 5.0
    read_timeout_seconds: float = 15.0
    max_connections: int = 20
    verify_ssl: bool = True
    debounce_ms: int = 300


def _env(name: str) -> str | None:
    value = os.getenv(ENV_PREFIX + name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _number(name: str, default: float, cast: type, *, minimum: float, inclusive: bool) -> float:
    raw = _env(name)
    if raw is None:
        value = default
    else:
        try:
            value = cast(raw)
        except ValueError as exc:
            kind = "an integer" if cast is int else "a number"
            raise ConfigError(f"Invalid {ENV_PREFIX}{name}: expected {kind}, got {raw!r}") from exc
    if value < minimum or (value == minimum and not inclusive):
        bound = ">=" if inclusive else ">"
        raise ConfigError(f"Invalid {ENV_PREFIX}{name}: expected {bound} {minimum:g}, got {value}")
    return value


def _base_url(env_key: str) -> str:
    url = _env(f"API_BASE_URL_{env_key}") or _env("API_BASE_URL")
    if url is None:
        raise ConfigError(f"Missing required config values: {ENV_PREFIX}API_BASE_URL")
    parts = urlsplit(url)
    if parts.scheme not in {"http", "https"} or not parts.netloc:
        raise ConfigError(f"Invalid {ENV_PREFIX}API_BASE_URL: expected an http(s) URL, got {url!r}")
    return url.rstrip("/")


def load_config(env_file: str | None = None) -> ClientConfig:
    """Build the client config from ``TABLEKIT_*`` variables, after loading an optional .env file.

    ``TABLEKIT_API_BASE_URL_<ENV>`` wins over ``TABLEKIT_API_BASE_URL`` for the
    environment named by ``TABLEKIT_ENV`` (default ``dev``).
    """
    load_dotenv(env_file)

    env_name = _env("ENV") or "dev"
    read_timeout = _number("TIMEOUT_SECONDS", 10.0, float, minimum=0, inclusive=False)
    verify = _env("VERIFY_SSL")
    return ClientConfig(
        env_name=env_name,
        api_base_url=_base_url(env_name.upper()),
        connect_timeout_seconds=_number(
            "CONNECT_TIMEOUT_SECONDS", min(read_timeout, 5.0), float, minimum=0, inclusive=False
        ),
        read_timeout_seconds=read_timeout,
        max_connections=int(_number("MAX_CONNECTIONS", 20, int, minimum=1, inclusive=True)),
        verify_ssl=True if verify is None else verify.lower() in {"1", "true", "yes", "on"},
        debounce_ms=int(_number("DEBOUNCE_MS", 300, int, minimum=0, inclusive=True)),
    )

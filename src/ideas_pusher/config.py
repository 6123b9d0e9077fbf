from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from .errors import ConfigurationError
from .payload import DEFAULT_ORIGIN
from .ranking import DEFAULT_MIN_LIQUIDITY, DEFAULT_TOP_N, DEFAULT_TTL_SEC
from .sources import select_sources, source_names


@dataclass(frozen=True)
class Settings:
    push_url: str
    push_token: str | None = None
    top_n: int = DEFAULT_TOP_N
    min_quote_volume: float = DEFAULT_MIN_LIQUIDITY
    ttl_sec: int = DEFAULT_TTL_SEC
    origin: str = DEFAULT_ORIGIN
    sources: tuple[str, ...] = source_names()
    request_timeout: float = 15.0


def _required(name: str) -> str:
    value = os.getenv(name, "").strip()
    if not value:
        raise ConfigurationError(f"Missing required environment variable: {name}")
    return value


def _optional_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc


def _optional_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from exc


def _optional_list(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return tuple(part.strip().lower() for part in raw.split(",") if part.strip())


def log_level_from_env() -> str:
    return os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"


def validate(settings: Settings) -> Settings:
    if settings.top_n <= 0:
        raise ConfigurationError(f"TOP_N must be positive, got {settings.top_n}")
    if settings.ttl_sec <= 0:
        raise ConfigurationError(f"TTL_SEC must be positive, got {settings.ttl_sec}")
    if not settings.min_quote_volume >= 0:
        raise ConfigurationError(
            f"MIN_QUOTE_VOLUME must be non-negative, got {settings.min_quote_volume}"
        )
    if settings.request_timeout <= 0:
        raise ConfigurationError(
            f"REQUEST_TIMEOUT_SECONDS must be positive, got {settings.request_timeout}"
        )
    if not settings.sources:
        raise ConfigurationError("IDEAS_SOURCES must name at least one source")
    select_sources(settings.sources)
    return settings


def load_settings() -> Settings:
    load_dotenv()
    return validate(
        Settings(
            push_url=_required("WORKER_PUSH_URL"),
            push_token=os.getenv("PUSH_TOKEN", "").strip() or None,
            top_n=_optional_int("TOP_N", DEFAULT_TOP_N),
            min_quote_volume=_optional_float("MIN_QUOTE_VOLUME", DEFAULT_MIN_LIQUIDITY),
            ttl_sec=_optional_int("TTL_SEC", DEFAULT_TTL_SEC),
            origin=os.getenv("IDEAS_ORIGIN", DEFAULT_ORIGIN).strip() or DEFAULT_ORIGIN,
            sources=_optional_list("IDEAS_SOURCES", source_names()),
            request_timeout=_optional_float("REQUEST_TIMEOUT_SECONDS", 15.0),
        )
    )

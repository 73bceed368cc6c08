from __future__ import annotations

from dataclasses import dataclass
import os

from komorph.nlp.errors import ConfigurationError
from komorph.services.extraction import DEFAULT_KEYWORD_COUNT


DEFAULT_CORS_ORIGINS = ("http://127.0.0.1:4173", "http://localhost:4173")
_TRUE_VALUES = {"1", "true", "yes"}


@dataclass(frozen=True)
class Settings:
    environment: str
    app_name: str
    host: str
    port: int
    mecab_args: str = ""
    keyword_count: int = DEFAULT_KEYWORD_COUNT
    parse_timeout_seconds: float | None = None
    serialize_parses: bool = False
    log_level: str = "INFO"
    cors_origins: tuple[str, ...] = DEFAULT_CORS_ORIGINS


def _int_from_env(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc


def _optional_float_from_env(name: str) -> float | None:
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from exc
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {raw!r}")
    return value


def load_settings() -> Settings:
    raw_cors_origins = os.getenv("KOMORPH_CORS_ORIGINS", "")
    parsed_cors_origins = tuple(
        origin.strip()
        for origin in raw_cors_origins.split(",")
        if origin.strip()
    )
    keyword_count = _int_from_env("KOMORPH_KEYWORD_COUNT", str(DEFAULT_KEYWORD_COUNT))
    if keyword_count < 1:
        raise ConfigurationError(f"KOMORPH_KEYWORD_COUNT must be >= 1, got {keyword_count}")
    return Settings(
        environment=os.getenv("KOMORPH_ENV", "development"),
        app_name=os.getenv("KOMORPH_APP_NAME", "komorph-backend"),
        host=os.getenv("KOMORPH_HOST", "127.0.0.1"),
        port=_int_from_env("KOMORPH_PORT", "8000"),
        mecab_args=os.getenv("KOMORPH_MECAB_ARGS", ""),
        keyword_count=keyword_count,
        parse_timeout_seconds=_optional_float_from_env("KOMORPH_PARSE_TIMEOUT"),
        serialize_parses=os.getenv("KOMORPH_SERIALIZE_PARSES", "0").lower() in _TRUE_VALUES,
        log_level=os.getenv("KOMORPH_LOG_LEVEL", "INFO").upper(),
        cors_origins=parsed_cors_origins or DEFAULT_CORS_ORIGINS,
    )

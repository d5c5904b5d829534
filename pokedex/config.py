from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_API_BASE_URL = "https://pokeapi.co/api/v2"

# The original page loads the whole dex in one request.
DEFAULT_LIST_LIMIT = 2000
DEFAULT_PAGE_SIZE = 20


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class AppConfig:
    api_base_url: str = DEFAULT_API_BASE_URL
    list_limit: int = DEFAULT_LIST_LIMIT
    page_size: int = DEFAULT_PAGE_SIZE

    # HTTP
    http_timeout: float = 25.0
    probe_timeout: float = 5.0  # per candidate

    # Rendering
    max_moves: int = 10

    # Keep the sprite candidate even without a numeric id (original page behaviour).
    image_without_id: bool = False

    probe_log_path: Path | None = None
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "AppConfig":
        probe_log = os.getenv("POKEDEX_PROBE_LOG")
        return cls(
            api_base_url=(os.getenv("POKEDEX_API_BASE_URL") or DEFAULT_API_BASE_URL).rstrip("/"),
            list_limit=_env_int("POKEDEX_LIST_LIMIT", DEFAULT_LIST_LIMIT),
            page_size=max(1, _env_int("POKEDEX_PAGE_SIZE", DEFAULT_PAGE_SIZE)),
            http_timeout=_env_float("POKEDEX_HTTP_TIMEOUT", 25.0),
            probe_timeout=_env_float("POKEDEX_PROBE_TIMEOUT", 5.0),
            max_moves=_env_int("POKEDEX_MAX_MOVES", 10),
            image_without_id=_env_bool("POKEDEX_IMAGE_WITHOUT_ID", False),
            probe_log_path=Path(probe_log).expanduser() if probe_log else None,
            log_level=(os.getenv("POKEDEX_LOG_LEVEL") or "WARNING").upper(),
        )

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar, Optional

_APP_DIR = Path(__file__).resolve().parents[2]


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"Invalid {name}; must be an integer") from exc
    if value < 0:
        raise ValueError(f"Invalid {name}; must not be negative")
    return value


@dataclass(frozen=True)
class AppConfig:
    """Web host configuration: environment name, listener and HTTP pipeline options."""

    environment: str = "Production"
    host: str = "0.0.0.0"
    port: int = 8080
    forwarded_allow_ips: str = "127.0.0.1"
    ssl_certfile: Optional[str] = None
    ssl_keyfile: Optional[str] = None

    _DEFAULT_HSTS_MAX_AGE_SECONDS: ClassVar[int] = 30 * 24 * 60 * 60
    hsts_max_age_seconds: int = _DEFAULT_HSTS_MAX_AGE_SECONDS
    hsts_include_subdomains: bool = False
    hsts_preload: bool = False

    error_path: str = "/Home/Error"
    static_dir: Path = _APP_DIR / "static"
    templates_dir: Path = _APP_DIR / "templates"

    @property
    def is_development(self) -> bool:
        return self.environment.strip().lower() == "development"

    @staticmethod
    def from_env() -> "AppConfig":
        return AppConfig(
            environment=(os.getenv("APP_ENVIRONMENT") or "Production").strip(),
            host=os.getenv("HOST") or "0.0.0.0",
            port=_env_int("PORT", 8080),
            forwarded_allow_ips=os.getenv("FORWARDED_ALLOW_IPS") or "127.0.0.1",
            ssl_certfile=os.getenv("SSL_CERTFILE") or None,
            ssl_keyfile=os.getenv("SSL_KEYFILE") or None,
            hsts_max_age_seconds=_env_int("HSTS_MAX_AGE_SECONDS", AppConfig._DEFAULT_HSTS_MAX_AGE_SECONDS),
            hsts_include_subdomains=_env_flag("HSTS_INCLUDE_SUBDOMAINS"),
            hsts_preload=_env_flag("HSTS_PRELOAD"),
        )

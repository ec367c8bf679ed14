"""Environment-driven client configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass


def _safe_float(value: str | None, default: float) -> float:
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


@dataclass(frozen=True)
class ClientConfig:
    scheme: str = "http"
    jolokia_path: str = "/jolokia/"
    timeout_sec: float = 10.0
    username: str | None = None
    password: str | None = None
    log_level: str | None = None

    @classmethod
    def from_env(cls) -> "ClientConfig":
        timeout_sec = _safe_float(os.getenv("JKL_TIMEOUT_SEC"), 10.0)
        return cls(
            scheme=(os.getenv("JKL_SCHEME", "http").strip().lower() or "http"),
            jolokia_path=_normalize_path(os.getenv("JKL_JOLOKIA_PATH", "/jolokia/")),
            timeout_sec=timeout_sec if timeout_sec > 0 else 10.0,
            username=os.getenv("JKL_USERNAME") or None,
            password=os.getenv("JKL_PASSWORD") or None,
            log_level=(os.getenv("JKL_LOG_LEVEL") or "").strip().upper() or None,
        )


def _normalize_path(path: str) -> str:
    path = path.strip() or "/jolokia/"
    if not path.startswith("/"):
        path = "/" + path
    if not path.endswith("/"):
        path += "/"
    return path

"""
Configuration — frozen settings objects, loadable from the environment.

    settings = Settings.from_env()
    configure_logging(settings.log_level)

    store = OrderStore(HttpSource(settings.source), policy=settings.completion)

Environment variables:
    ORDERVIEW_BASE_URL          required, e.g. "https://shop.example.com"
    ORDERVIEW_ORDERS_PATH       default "/api/orders"
    ORDERVIEW_TIMEOUT_SECONDS   default 10
    ORDERVIEW_COMPLETION        "last_issued" (default) | "last_resolved"
    ORDERVIEW_LOG_LEVEL         default "INFO"
"""

from __future__ import annotations

import logging
import math
import os
from collections.abc import Mapping
from dataclasses import dataclass

from orderview.store import CompletionPolicy

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# ═══════════════════════════════════════════════════════════════════════════════
# Errors
# ═══════════════════════════════════════════════════════════════════════════════


class ConfigError(ValueError):
    """Raised when a configuration value is missing or cannot be parsed."""

    def __init__(self, var_name: str, message: str, value: str | None = None) -> None:
        super().__init__(f"{var_name}: {message}")
        self.var_name = var_name
        self.message = message
        self.value = value


# ═══════════════════════════════════════════════════════════════════════════════
# Settings
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class SourceConfig:
    """Where and how HttpSource fetches orders."""

    base_url: str
    path: str = "/api/orders"
    timeout_seconds: float = 10.0

    def __post_init__(self) -> None:
        if not self.base_url:
            raise ConfigError("base_url", "must not be empty")
        if not self.path.startswith("/"):
            raise ConfigError("path", "must start with '/'", self.path)
        if not (math.isfinite(self.timeout_seconds) and self.timeout_seconds > 0):
            raise ConfigError("timeout_seconds", "must be a positive number", str(self.timeout_seconds))

    @property
    def url(self) -> str:
        return f"{self.base_url.rstrip('/')}{self.path}"


@dataclass(frozen=True, slots=True)
class Settings:
    """Everything an application needs to wire up an order view."""

    source: SourceConfig
    completion: CompletionPolicy = CompletionPolicy.LAST_ISSUED
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ

        base_url = _get(env, "ORDERVIEW_BASE_URL")
        if base_url is None:
            raise ConfigError("ORDERVIEW_BASE_URL", "is required but was not set")

        source = SourceConfig(
            base_url=base_url,
            path=_get(env, "ORDERVIEW_ORDERS_PATH") or "/api/orders",
            timeout_seconds=_get_float(env, "ORDERVIEW_TIMEOUT_SECONDS", default=10.0),
        )
        return cls(
            source=source,
            completion=_get_completion(env, "ORDERVIEW_COMPLETION"),
            log_level=_get_log_level(env, "ORDERVIEW_LOG_LEVEL"),
        )


# ═══════════════════════════════════════════════════════════════════════════════
# Env Helpers
# ═══════════════════════════════════════════════════════════════════════════════


def _get(env: Mapping[str, str], var_name: str) -> str | None:
    """Fetch and normalise an environment variable; blank counts as unset."""
    raw = env.get(var_name)
    if raw is None:
        return None
    value = raw.strip()
    return value if value else None


def _get_float(env: Mapping[str, str], var_name: str, *, default: float) -> float:
    raw = _get(env, var_name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ConfigError(var_name, "must be a number", raw) from None
    if not (math.isfinite(value) and value > 0):
        raise ConfigError(var_name, "must be a positive number", raw)
    return value


def _get_completion(env: Mapping[str, str], var_name: str) -> CompletionPolicy:
    raw = _get(env, var_name)
    if raw is None:
        return CompletionPolicy.LAST_ISSUED
    try:
        return CompletionPolicy(raw.lower())
    except ValueError:
        choices = ", ".join(policy.value for policy in CompletionPolicy)
        raise ConfigError(var_name, f"must be one of: {choices}", raw) from None


def _get_log_level(env: Mapping[str, str], var_name: str) -> str:
    raw = _get(env, var_name)
    if raw is None:
        return "INFO"
    level = raw.upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigError(var_name, "is not a logging level", raw)
    return level


# ═══════════════════════════════════════════════════════════════════════════════
# Logging
# ═══════════════════════════════════════════════════════════════════════════════


def configure_logging(level: str | int = "INFO") -> None:
    """
    Send orderview's logs to the console.

    Safe to call repeatedly: the console handler is added once and only
    the level is updated afterwards.
    """
    package_logger = logging.getLogger("orderview")
    package_logger.setLevel(level)

    if not any(getattr(h, "_orderview_console", False) for h in package_logger.handlers):
        console = logging.StreamHandler()
        console.setFormatter(logging.Formatter(LOG_FORMAT))
        console._orderview_console = True  # type: ignore[attr-defined]
        package_logger.addHandler(console)


__all__ = (
    "LOG_FORMAT",
    "ConfigError",
    "SourceConfig",
    "Settings",
    "configure_logging",
)

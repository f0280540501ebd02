from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

from .client import AcubeClient, Environment

log = logging.getLogger("acube_mcp.config")


@dataclass(frozen=True)
class AcubeSettings:
    email: str
    password: str
    environment: Environment = "sandbox"
    log_level: str = "INFO"


def _parse_environment(value: str) -> Environment:
    value = value.strip().lower()
    if value == "production":
        return "production"
    if value and value != "sandbox":
        log.warning("Unknown ACUBE_ENVIRONMENT %r, falling back to sandbox", value)
    return "sandbox"


def load_env_config(*, use_dotenv: bool = True) -> AcubeSettings:
    """Load A-Cube credentials and environment from env vars (optional .env)."""
    if use_dotenv:
        load_dotenv()
    return AcubeSettings(
        email=os.getenv("ACUBE_EMAIL", "").strip(),
        password=os.getenv("ACUBE_PASSWORD", ""),
        environment=_parse_environment(os.getenv("ACUBE_ENVIRONMENT", "")),
        log_level=os.getenv("ACUBE_LOG_LEVEL", "").strip() or "INFO",
    )


def create_client_from_env(*, use_dotenv: bool = True, **kwargs) -> AcubeClient:
    """Create an AcubeClient from environment variables."""
    settings = load_env_config(use_dotenv=use_dotenv)
    missing = [
        name
        for name, value in (
            ("ACUBE_EMAIL", settings.email),
            ("ACUBE_PASSWORD", settings.password),
        )
        if not value
    ]
    if missing:
        raise ValueError(f"Missing {' and '.join(missing)} in environment.")
    return AcubeClient(
        email=settings.email,
        password=settings.password,
        environment=settings.environment,
        **kwargs,
    )


__all__ = ["AcubeSettings", "load_env_config", "create_client_from_env"]

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent
ENV_PATH = BASE_DIR / ".env"

TRUTHY_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    """Configuration container for logging, the game context, and routing."""
    log_level: str = "INFO"
    debug: bool = False
    context_name: str = "playing"
    context_lifespan: int = 1
    webhook_path: str = "/"


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in TRUTHY_VALUES


def load_settings() -> Settings:
    """Purpose: Load configuration from environment variables and defaults.
    Inputs/Outputs: No inputs; returns a Settings instance.
    Side Effects / State: Loads the package .env file into os.environ when present.
    Failure Modes: Invalid CONTEXT_LIFESPAN values raise ValueError.
    Testing Notes: Verify defaults and overrides via environment variables.
    """
    # Existing environment variables win over .env entries.
    if ENV_PATH.exists():
        load_dotenv(ENV_PATH, override=False)

    webhook_path = os.getenv("WEBHOOK_PATH", "/").strip() or "/"
    if not webhook_path.startswith("/"):
        webhook_path = "/" + webhook_path

    return Settings(
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        debug=_env_flag("WEBHOOK_DEBUG"),
        context_name=os.getenv("CONTEXT_NAME", "playing"),
        context_lifespan=int(os.getenv("CONTEXT_LIFESPAN", "1")),
        webhook_path=webhook_path,
    )

"""
Configuration management for hep.

Loads settings from environment variables or a .env file. The CLI
builds one HepConfig at startup and passes it to the HTTP client.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from hep import __version__

ENV_LOCATIONS = [
    Path.home() / ".hep" / ".env",
    Path.home() / ".config" / "hep" / ".env",
    Path.cwd() / ".env",
]

TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off", ""}


def load_env_files(locations: list[Path] | None = None) -> Path | None:
    """Load the first .env file found. Existing variables win."""
    for env_path in locations if locations is not None else ENV_LOCATIONS:
        if env_path.exists():
            load_dotenv(env_path)
            return env_path
    return None


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value


@dataclass(frozen=True)
class HepConfig:
    """Runtime settings for building and sending requests."""

    verbose: bool = False
    log_file: str | None = None

    # Transport
    timeout: float = 30.0
    verify_ssl: bool = True
    follow_redirects: bool = True
    user_agent: str = f"hep/{__version__}"

    @classmethod
    def from_env(cls, load_files: bool = True) -> "HepConfig":
        """Load configuration from environment variables."""
        if load_files:
            load_env_files()
        return cls(
            verbose=_env_bool("HEP_VERBOSE", False),
            log_file=os.getenv("HEP_LOG_FILE") or None,
            timeout=_env_float("HEP_TIMEOUT", 30.0),
            verify_ssl=_env_bool("HEP_VERIFY_SSL", True),
            follow_redirects=_env_bool("HEP_FOLLOW_REDIRECTS", True),
            user_agent=os.getenv("HEP_USER_AGENT") or f"hep/{__version__}",
        )

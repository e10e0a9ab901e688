"""
Runtime configuration, read from environment variables.
"""

import os
from dataclasses import dataclass

from .policy import DEFAULT_POLICY


@dataclass(frozen=True)
class Settings:
    environment: str = "dev"
    port: int = 8080
    default_policy: str = DEFAULT_POLICY
    agency_passphrase: str = ""
    log_level: str = "INFO"


def load_settings(environ=None) -> Settings:
    """Build Settings from the environment (os.environ by default)."""
    env = os.environ if environ is None else environ
    return Settings(
        environment=env.get("ENVIRONMENT", "dev"),
        port=int(env.get("PORT", 8080)),
        default_policy=env.get("SETTLEMENT_POLICY", DEFAULT_POLICY),
        agency_passphrase=env.get("AGENCY_PASSPHRASE", ""),
        log_level=env.get("LOG_LEVEL", "INFO").upper(),
    )

"""
Daraja Client Configuration

Provides the credential model, environment selector and base URLs, plus
environment-variable loaders for applications that keep their Daraja
credentials in a ``.env`` file.
"""

import os
from enum import Enum
from typing import Dict, Optional

import dotenv
from pydantic import BaseModel, ConfigDict, Field

from .exceptions import ConfigurationError

dotenv.load_dotenv()


DEFAULT_TIMEOUT = 30.0

# Tokens are reported valid for 3599 seconds; never trust more than this.
DEFAULT_TOKEN_TTL_CAP = 3500


class Environment(str, Enum):
    SANDBOX = "sandbox"
    PRODUCTION = "production"

    @classmethod
    def from_string(cls, value: str) -> "Environment":
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ConfigurationError(
                f"Unsupported environment: {value!r} (expected 'sandbox' or 'production')"
            )


BASE_URLS: Dict[Environment, str] = {
    Environment.SANDBOX: "https://sandbox.safaricom.co.ke",
    Environment.PRODUCTION: "https://api.safaricom.co.ke",
}


class DarajaConfig(BaseModel):
    """Credentials and transport settings shared by every client built from them.

    Attributes:
        consumer_key: App consumer key from the Daraja developer portal.
        consumer_secret: App consumer secret from the Daraja developer portal.
        timeout: Per-request timeout in seconds.
        token_ttl_cap: Upper bound, in seconds, on how long a fetched token is cached.
    """
    model_config = ConfigDict(frozen=True)

    consumer_key: str = Field(..., min_length=1, description="Daraja app consumer key")
    consumer_secret: str = Field(..., min_length=1, repr=False, description="Daraja app consumer secret")
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0, description="Request timeout in seconds")
    token_ttl_cap: int = Field(
        default=DEFAULT_TOKEN_TTL_CAP,
        gt=0,
        description="Maximum number of seconds a token is reused",
    )

    @classmethod
    def from_env(cls) -> "DarajaConfig":
        """
        Load credentials from environment variables.

        Example:
            # In your .env file or environment setup:
            DARAJA_CONSUMER_KEY=xxxx
            DARAJA_CONSUMER_SECRET=xxxx
            DARAJA_TIMEOUT=30

        Raises:
            ConfigurationError: If key or secret is missing, or timeout is not a number.
        """
        key = get_consumer_key_from_env()
        secret = get_consumer_secret_from_env()
        if not key or not secret:
            raise ConfigurationError(
                "DARAJA_CONSUMER_KEY and DARAJA_CONSUMER_SECRET must be set"
            )

        timeout = os.getenv("DARAJA_TIMEOUT")
        if timeout is None:
            return cls(consumer_key=key, consumer_secret=secret)
        try:
            return cls(consumer_key=key, consumer_secret=secret, timeout=float(timeout))
        except ValueError:
            raise ConfigurationError(f"DARAJA_TIMEOUT must be a positive number, got {timeout!r}")


def get_consumer_key_from_env() -> Optional[str]:
    return os.getenv("DARAJA_CONSUMER_KEY")


def get_consumer_secret_from_env() -> Optional[str]:
    return os.getenv("DARAJA_CONSUMER_SECRET")


def get_environment_from_env() -> Environment:
    """
    Read the target environment from ``DARAJA_ENVIRONMENT``.

    Returns:
        Environment: Defaults to sandbox when the variable is unset.
    """
    return Environment.from_string(os.getenv("DARAJA_ENVIRONMENT", Environment.SANDBOX.value))

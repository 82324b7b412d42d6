"""
Async client for the Safaricom Daraja (M-Pesa) STK Push API.
"""

from .clients import Daraja, DarajaClient
from .config import BASE_URLS, DarajaConfig, Environment
from .exceptions import (
    AuthenticationError,
    ConfigurationError,
    DarajaError,
    PaymentInitiationError,
    PaymentQueryError,
)
from .schemas import (
    StkCallback,
    StkCallbackEnvelope,
    StkPushPayload,
    StkPushQueryPayload,
    StkPushQueryResponse,
    StkPushResponse,
)
from .security import derive_password, generate_timestamp

__all__ = [
    "Daraja",
    "DarajaClient",
    "BASE_URLS",
    "DarajaConfig",
    "Environment",
    "AuthenticationError",
    "ConfigurationError",
    "DarajaError",
    "PaymentInitiationError",
    "PaymentQueryError",
    "StkCallback",
    "StkCallbackEnvelope",
    "StkPushPayload",
    "StkPushQueryPayload",
    "StkPushQueryResponse",
    "StkPushResponse",
    "derive_password",
    "generate_timestamp",
]

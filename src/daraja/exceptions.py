"""
Exception and Error Definitions Module

Defines the exception hierarchy raised by the Daraja client. Every failed
remote operation surfaces as exactly one of these, carrying the message the
provider returned when there was one, otherwise the transport error message.

Exception Hierarchy:
    DarajaError (root)
    ├── AuthenticationError
    ├── PaymentInitiationError
    ├── PaymentQueryError
    └── ConfigurationError
"""

from typing import Optional


class DarajaError(Exception):
    """
    Root exception class for all project-specific exceptions.

    Attributes:
        message: Human readable failure description
        status_code: HTTP status of the failed response, if one was received
        error_code: Provider error code (``errorCode`` in Daraja error bodies)
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        error_code: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_code = error_code


class AuthenticationError(DarajaError):
    """
    Raised when an access token cannot be obtained.

    This includes scenarios such as:
    - Invalid consumer key / secret (provider rejects Basic auth)
    - Network failure or timeout on the token endpoint
    - Token response without an ``access_token`` field
    """
    pass


class PaymentInitiationError(DarajaError):
    """
    Raised when an STK Push request fails or is rejected by the provider.
    """
    pass


class PaymentQueryError(DarajaError):
    """
    Raised when an STK Push status query fails.
    """
    pass


class ConfigurationError(DarajaError):
    """
    Raised when configuration is missing or invalid.

    This includes scenarios such as:
    - Missing consumer key / secret in the environment
    - Unknown environment name
    """

    def __init__(self, message: str):
        super().__init__(message)

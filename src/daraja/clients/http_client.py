"""
Daraja STK Push HTTP Client

Provides an httpx.AsyncClient subclass bound to one Daraja environment that
obtains and caches OAuth access tokens and exposes the STK Push initiation
and status-query calls.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple, Type, TypeVar, Union

import httpx
from pydantic import ValidationError

from ..config import BASE_URLS, DarajaConfig, Environment, get_environment_from_env
from ..exceptions import (
    AuthenticationError,
    DarajaError,
    PaymentInitiationError,
    PaymentQueryError,
)
from ..schemas.bases import WireModel
from ..schemas.https import (
    AccessTokenResponse,
    StkPushPayload,
    StkPushQueryPayload,
    StkPushQueryRequest,
    StkPushQueryResponse,
    StkPushRequest,
    StkPushResponse,
)
from ..security import basic_credentials, bearer_credentials, derive_password, generate_timestamp

logger = logging.getLogger(__name__)

TOKEN_PATH = "/oauth/v1/generate?grant_type=client_credentials"
STK_PUSH_PATH = "/mpesa/stkpush/v1/processrequest"
STK_PUSH_QUERY_PATH = "/mpesa/stkpushquery/v1/query"

ResponseModel = TypeVar("ResponseModel", bound=WireModel)


@dataclass(frozen=True)
class CachedToken:
    """An access token and the clock reading after which it must not be used."""
    value: str
    expires_at: float

    def is_valid(self, now: float) -> bool:
        return now < self.expires_at


def _error_details(exc: httpx.HTTPError) -> Tuple[str, Optional[int], Optional[str]]:
    """
    Extract a failure message from an httpx error.

    Prefers the provider's ``errorMessage`` when the error response carries
    a JSON body, otherwise falls back to the transport error text.

    Returns:
        (message, status_code, error_code)
    """
    if isinstance(exc, httpx.HTTPStatusError):
        response = exc.response
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("errorMessage"):
            error_code = body.get("errorCode")
            return (
                str(body["errorMessage"]),
                response.status_code,
                None if error_code is None else str(error_code),
            )
        return str(exc), response.status_code, None
    return str(exc) or type(exc).__name__, None, None


class DarajaClient(httpx.AsyncClient):
    """
    Extended httpx.AsyncClient for the Daraja STK Push API.

    The client is bound to one environment (sandbox or production) for its
    whole lifetime. The first remote call fetches an OAuth token using the
    consumer key and secret; the token is reused until it nears expiry.

    Fully compatible with httpx.AsyncClient and usable as an async context
    manager. Extra keyword arguments (``transport``, ``headers``...) are
    passed through to httpx.

    Usage:
        ```python
        config = DarajaConfig(consumer_key="...", consumer_secret="...")
        async with DarajaClient(config, Environment.SANDBOX) as client:
            response = await client.stk_push(StkPushPayload(...))
            status = await client.stk_push_query(StkPushQueryPayload(
                business_short_code="174379",
                pass_key="...",
                checkout_request_id=response.checkout_request_id,
            ))
        ```
    """

    def __init__(
        self,
        config: DarajaConfig,
        environment: Union[Environment, str] = Environment.SANDBOX,
        *,
        clock: Callable[[], float] = time.monotonic,
        **kwargs
    ):
        """
        Initialize client for one environment.

        Args:
            config: Consumer credentials, timeout and token TTL cap
            environment: ``Environment`` or its name ("sandbox" / "production")
            clock: Monotonic seconds source used for token expiry
            **kwargs: All standard httpx.AsyncClient arguments except base_url
        """
        if not isinstance(environment, Environment):
            environment = Environment.from_string(environment)
        kwargs.setdefault("timeout", config.timeout)
        super().__init__(base_url=BASE_URLS[environment], **kwargs)

        self._config = config
        self._environment = environment
        self._clock = clock
        self._cached_token: Optional[CachedToken] = None
        self._token_lock: Optional[asyncio.Lock] = None

    @classmethod
    def from_env(cls, **kwargs) -> "DarajaClient":
        """Build a client from ``DARAJA_*`` environment variables."""
        return cls(DarajaConfig.from_env(), get_environment_from_env(), **kwargs)

    def get_environment(self) -> Environment:
        return self._environment

    def invalidate_token(self) -> None:
        """Drop the cached token so the next call fetches a fresh one."""
        self._cached_token = None

    # =========================================================================
    # Access token
    # =========================================================================

    async def _get_access_token(self) -> str:
        """
        Return a usable access token, fetching one if none is cached.

        Concurrent callers wait on a single in-flight fetch instead of each
        issuing their own.

        Raises:
            AuthenticationError: If the token could not be obtained
        """
        token = self._cached_token
        if token is not None and token.is_valid(self._clock()):
            logger.debug("Using cached access token for %s", self._environment.value)
            return token.value

        # Created on first use so it belongs to the loop running the call
        if self._token_lock is None:
            self._token_lock = asyncio.Lock()
        async with self._token_lock:
            token = self._cached_token
            if token is not None and token.is_valid(self._clock()):
                return token.value
            token = await self._fetch_access_token()
            self._cached_token = token
            return token.value

    async def _fetch_access_token(self) -> CachedToken:
        logger.debug("Requesting access token from %s", self._environment.value)
        try:
            response = await self.get(
                TOKEN_PATH,
                headers={
                    "Authorization": basic_credentials(
                        self._config.consumer_key, self._config.consumer_secret
                    ),
                },
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            message, status_code, error_code = _error_details(e)
            logger.error("Access token request failed: %s", message)
            raise AuthenticationError(
                f"Failed to get access token: {message}",
                status_code=status_code,
                error_code=error_code,
            ) from e

        try:
            token_response = AccessTokenResponse.model_validate(response.json())
        except ValueError as e:
            logger.error("Access token response could not be parsed")
            raise AuthenticationError(
                f"Failed to get access token: invalid token response ({e})",
                status_code=response.status_code,
            ) from e

        ttl = self._config.token_ttl_cap
        if token_response.expires_in is not None:
            ttl = min(token_response.expires_in, ttl)
        return CachedToken(value=token_response.access_token, expires_at=self._clock() + ttl)

    # =========================================================================
    # STK Push
    # =========================================================================

    async def stk_push(self, payload: StkPushPayload) -> StkPushResponse:
        """
        Initiate an STK Push payment prompt on the payer's phone.

        Args:
            payload: Payment details

        Returns:
            Provider response as received; keep ``checkout_request_id`` to
            query the outcome later

        Raises:
            AuthenticationError: If no access token could be obtained
            PaymentInitiationError: If the request failed or was rejected
        """
        token = await self._get_access_token()
        timestamp = generate_timestamp()
        request = StkPushRequest.build(
            payload,
            password=derive_password(payload.business_short_code, payload.pass_key, timestamp),
            timestamp=timestamp,
        )
        response = await self._submit(
            STK_PUSH_PATH,
            request,
            token=token,
            response_model=StkPushResponse,
            error_cls=PaymentInitiationError,
            operation="STK Push",
        )
        logger.info(
            "STK Push accepted: checkout_request_id=%s", response.checkout_request_id
        )
        return response

    async def stk_push_query(self, payload: StkPushQueryPayload) -> StkPushQueryResponse:
        """
        Query the status of a previously initiated STK Push.

        Raises:
            AuthenticationError: If no access token could be obtained
            PaymentQueryError: If the request failed or was rejected
        """
        token = await self._get_access_token()
        timestamp = generate_timestamp()
        request = StkPushQueryRequest(
            business_short_code=payload.business_short_code,
            password=derive_password(payload.business_short_code, payload.pass_key, timestamp),
            timestamp=timestamp,
            checkout_request_id=payload.checkout_request_id,
        )
        return await self._submit(
            STK_PUSH_QUERY_PATH,
            request,
            token=token,
            response_model=StkPushQueryResponse,
            error_cls=PaymentQueryError,
            operation="STK Push query",
        )

    async def _submit(
        self,
        path: str,
        body: WireModel,
        *,
        token: str,
        response_model: Type[ResponseModel],
        error_cls: Type[DarajaError],
        operation: str,
    ) -> ResponseModel:
        """
        POST a wire body with bearer authorization and parse the response.

        Any failure is raised as ``error_cls`` with the provider message
        when one is available.
        """
        try:
            response = await self.post(
                path,
                json=body.to_wire(),
                headers={"Authorization": bearer_credentials(token)},
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            message, status_code, error_code = _error_details(e)
            logger.error("%s failed: %s", operation, message)
            raise error_cls(
                f"{operation} failed: {message}",
                status_code=status_code,
                error_code=error_code,
            ) from e

        try:
            data = response.json()
        except ValueError as e:
            logger.error("%s returned a non-JSON body", operation)
            raise error_cls(
                f"{operation} failed: invalid JSON response",
                status_code=response.status_code,
            ) from e

        try:
            return response_model.model_validate(data)
        except ValidationError as e:
            message = data.get("errorMessage") if isinstance(data, dict) else None
            error_code = data.get("errorCode") if isinstance(data, dict) else None
            logger.error("%s returned an unexpected body: %s", operation, message or e)
            raise error_cls(
                f"{operation} failed: {message or e}",
                status_code=response.status_code,
                error_code=None if error_code is None else str(error_code),
            ) from e


class Daraja:
    """
    Holds one credential set and hands out a client per environment.

    Clients are created on first access and reused afterwards, each with its
    own token cache.

    Usage:
        ```python
        daraja = Daraja(DarajaConfig.from_env())
        client = daraja.production if is_live else daraja.sandbox
        ```
    """

    def __init__(self, config: DarajaConfig, **client_kwargs):
        """
        Args:
            config: Credentials shared by every environment
            **client_kwargs: Passed to each ``DarajaClient`` on creation
        """
        self._config = config
        self._client_kwargs = client_kwargs
        self._clients: Dict[Environment, DarajaClient] = {}

    @classmethod
    def from_env(cls, **client_kwargs) -> "Daraja":
        return cls(DarajaConfig.from_env(), **client_kwargs)

    def client(self, environment: Union[Environment, str]) -> DarajaClient:
        if not isinstance(environment, Environment):
            environment = Environment.from_string(environment)
        client = self._clients.get(environment)
        if client is None:
            client = DarajaClient(self._config, environment, **self._client_kwargs)
            self._clients[environment] = client
        return client

    @property
    def sandbox(self) -> DarajaClient:
        return self.client(Environment.SANDBOX)

    @property
    def production(self) -> DarajaClient:
        return self.client(Environment.PRODUCTION)

    async def aclose(self) -> None:
        """Close every client created so far."""
        clients = list(self._clients.values())
        self._clients.clear()
        for client in clients:
            await client.aclose()

    async def __aenter__(self) -> "Daraja":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

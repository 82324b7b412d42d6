"""
Shared fixtures for the Daraja client tests.

Key Components:
    - FakeClock: controllable monotonic clock for token expiry
    - FakeDarajaAPI: httpx.MockTransport handler that routes the three Daraja
      endpoints to canned responses and records every request
"""

import json
from typing import Any, Callable, Dict, List, Optional, Union

import httpx
import pytest

from daraja.config import DarajaConfig


MOCK_CONSUMER_KEY = "test-consumer-key"
MOCK_CONSUMER_SECRET = "test-consumer-secret"
MOCK_SHORT_CODE = "174379"
MOCK_PASS_KEY = "bfb279f9aa9bdbcf158e97dd71a467cd2e0c893059b10f78e6b72ada1ed2c919"
MOCK_PHONE = "254708374149"
MOCK_CALLBACK_URL = "https://example.com/mpesa/callback"

TOKEN_BODY = {"access_token": "T", "expires_in": "3599"}

STK_PUSH_BODY = {
    "MerchantRequestID": "29115-34620561-1",
    "CheckoutRequestID": "ws_CO_191220191020363925",
    "ResponseCode": "0",
    "ResponseDescription": "Success. Request accepted for processing",
    "CustomerMessage": "Success. Request accepted for processing",
}

STK_QUERY_BODY = {
    "ResponseCode": "0",
    "ResponseDescription": "The service request has been accepted successsfully",
    "MerchantRequestID": "29115-34620561-1",
    "CheckoutRequestID": "ws_CO_191220191020363925",
    "ResultCode": "0",
    "ResultDesc": "The service request is processed successfully.",
}

Route = Union[httpx.Response, Exception, Callable[[httpx.Request], httpx.Response]]


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeDarajaAPI:
    """
    Request handler standing in for the Daraja API.

    Each route is a response, an exception to raise (e.g. httpx.ConnectError),
    or a callable producing a response. Routes can be swapped between calls.
    """

    def __init__(self):
        self.routes: Dict[str, Route] = {
            "/oauth/v1/generate": httpx.Response(200, json=TOKEN_BODY),
            "/mpesa/stkpush/v1/processrequest": httpx.Response(200, json=STK_PUSH_BODY),
            "/mpesa/stkpushquery/v1/query": httpx.Response(200, json=STK_QUERY_BODY),
        }
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, json={"errorMessage": "Not found"})
        if isinstance(route, Exception):
            raise route
        if callable(route):
            return route(request)
        return httpx.Response(route.status_code, headers=route.headers, content=route.content)

    def requests_to(self, path: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.path == path]

    @property
    def token_requests(self) -> List[httpx.Request]:
        return self.requests_to("/oauth/v1/generate")

    @staticmethod
    def json_body(request: httpx.Request) -> Dict[str, Any]:
        return json.loads(request.content)


@pytest.fixture
def config() -> DarajaConfig:
    return DarajaConfig(consumer_key=MOCK_CONSUMER_KEY, consumer_secret=MOCK_CONSUMER_SECRET)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def api() -> FakeDarajaAPI:
    return FakeDarajaAPI()


@pytest.fixture
def transport(api: FakeDarajaAPI) -> httpx.MockTransport:
    return httpx.MockTransport(api)


def error_response(status_code: int, message: str, code: Optional[str] = None) -> httpx.Response:
    body = {"requestId": "11728-2929992-1", "errorMessage": message}
    if code is not None:
        body["errorCode"] = code
    return httpx.Response(status_code, json=body)

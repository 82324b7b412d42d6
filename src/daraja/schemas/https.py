"""
HTTP Request/Response Schema Models for the Daraja STK Push API

This module defines the Pydantic models used on both sides of the HTTP
calls made by ``DarajaClient``:

1. Client obtains an OAuth access token (GET, Basic auth)
2. Client initiates an STK Push (POST, Bearer auth)
3. Client queries the STK Push status (POST, Bearer auth)

Caller payloads (``StkPushPayload``, ``StkPushQueryPayload``) use snake_case
names. Wire bodies and responses use the provider's exact field names as
aliases.
"""

from typing import Optional, Union

from pydantic import Field

from .bases import DarajaModel, WireModel


TRANSACTION_TYPE_PAYBILL = "CustomerPayBillOnline"


# ============================================================================
# Step 1: OAuth token
# ============================================================================

class AccessTokenResponse(WireModel):
    """Token endpoint response.

    Attributes:
        access_token: Bearer token for subsequent requests.
        expires_in: Nominal lifetime in seconds. Sent as a string by the
            provider (``"3599"``) and coerced to int.
    """
    access_token: str = Field(..., min_length=1, description="OAuth bearer token")
    expires_in: Optional[int] = Field(None, ge=0, description="Token lifetime in seconds")


# ============================================================================
# Step 2: STK Push initiation
# ============================================================================

class StkPushPayload(DarajaModel):
    """Payment request supplied by the caller.

    Attributes:
        business_short_code: Paybill shortcode receiving the payment.
        pass_key: Lipa na M-Pesa Online passkey for the shortcode.
        amount: Amount in whole currency units, must be positive.
        phone_number: Payer MSISDN, e.g. ``"254712345678"``.
        callback_url: Public URL the provider POSTs the final result to.
        account_reference: Reference shown to the payer.
        transaction_desc: Short description of the payment.
    """
    business_short_code: str = Field(..., min_length=1)
    pass_key: str = Field(..., min_length=1, repr=False)
    amount: int = Field(..., gt=0)
    phone_number: str = Field(..., min_length=1)
    callback_url: str = Field(..., min_length=1)
    account_reference: str
    transaction_desc: str


class StkPushRequest(WireModel):
    """Wire body for ``/mpesa/stkpush/v1/processrequest``."""
    business_short_code: str = Field(..., alias="BusinessShortCode")
    password: str = Field(..., alias="Password")
    timestamp: str = Field(..., alias="Timestamp")
    transaction_type: str = Field(default=TRANSACTION_TYPE_PAYBILL, alias="TransactionType")
    amount: int = Field(..., alias="Amount")
    party_a: str = Field(..., alias="PartyA")
    party_b: str = Field(..., alias="PartyB")
    phone_number: str = Field(..., alias="PhoneNumber")
    callback_url: str = Field(..., alias="CallBackURL")
    account_reference: str = Field(..., alias="AccountReference")
    transaction_desc: str = Field(..., alias="TransactionDesc")

    @classmethod
    def build(cls, payload: StkPushPayload, *, password: str, timestamp: str) -> "StkPushRequest":
        """Map a caller payload onto the provider's field layout.

        The payer's number goes into both ``PartyA`` and ``PhoneNumber``;
        ``PartyB`` is the receiving shortcode.
        """
        return cls(
            business_short_code=payload.business_short_code,
            password=password,
            timestamp=timestamp,
            transaction_type=TRANSACTION_TYPE_PAYBILL,
            amount=payload.amount,
            party_a=payload.phone_number,
            party_b=payload.business_short_code,
            phone_number=payload.phone_number,
            callback_url=payload.callback_url,
            account_reference=payload.account_reference,
            transaction_desc=payload.transaction_desc,
        )


class StkPushResponse(WireModel):
    """Accepted STK Push. Persist ``checkout_request_id`` to query later."""
    merchant_request_id: str = Field(..., alias="MerchantRequestID")
    checkout_request_id: str = Field(..., alias="CheckoutRequestID")
    response_code: Union[str, int] = Field(..., alias="ResponseCode")
    response_description: Optional[str] = Field(None, alias="ResponseDescription")
    customer_message: Optional[str] = Field(None, alias="CustomerMessage")


# ============================================================================
# Step 3: STK Push status query
# ============================================================================

class StkPushQueryPayload(DarajaModel):
    business_short_code: str = Field(..., min_length=1)
    pass_key: str = Field(..., min_length=1, repr=False)
    checkout_request_id: str = Field(..., min_length=1)


class StkPushQueryRequest(WireModel):
    """Wire body for ``/mpesa/stkpushquery/v1/query``."""
    business_short_code: str = Field(..., alias="BusinessShortCode")
    password: str = Field(..., alias="Password")
    timestamp: str = Field(..., alias="Timestamp")
    checkout_request_id: str = Field(..., alias="CheckoutRequestID")


class StkPushQueryResponse(WireModel):
    """Status of a previously initiated STK Push.

    ``result_code`` is ``"0"`` for a completed payment; any other value is a
    failure or cancellation described by ``result_desc``.
    """
    response_code: Union[str, int] = Field(..., alias="ResponseCode")
    response_description: Optional[str] = Field(None, alias="ResponseDescription")
    merchant_request_id: str = Field(..., alias="MerchantRequestID")
    checkout_request_id: str = Field(..., alias="CheckoutRequestID")
    result_code: Union[str, int] = Field(..., alias="ResultCode")
    result_desc: Optional[str] = Field(None, alias="ResultDesc")

    @property
    def is_successful(self) -> bool:
        return str(self.result_code) == "0"

from .bases import DarajaModel, WireModel
from .https import (
    TRANSACTION_TYPE_PAYBILL,
    AccessTokenResponse,
    StkPushPayload,
    StkPushRequest,
    StkPushResponse,
    StkPushQueryPayload,
    StkPushQueryRequest,
    StkPushQueryResponse,
)
from .callbacks import CallbackItem, CallbackMetadata, StkCallback, StkCallbackBody, StkCallbackEnvelope

__all__ = [
    "DarajaModel",
    "WireModel",
    "TRANSACTION_TYPE_PAYBILL",
    "AccessTokenResponse",
    "StkPushPayload",
    "StkPushRequest",
    "StkPushResponse",
    "StkPushQueryPayload",
    "StkPushQueryRequest",
    "StkPushQueryResponse",
    "CallbackItem",
    "CallbackMetadata",
    "StkCallback",
    "StkCallbackBody",
    "StkCallbackEnvelope",
]

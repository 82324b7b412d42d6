"""
STK Push Callback Schema Models

After an STK Push is accepted, the provider POSTs the final outcome to the
``CallBackURL`` given in the request. The receiving endpoint belongs to the
application; these models only parse the body it receives:

    {
      "Body": {
        "stkCallback": {
          "MerchantRequestID": "...",
          "CheckoutRequestID": "...",
          "ResultCode": 0,
          "ResultDesc": "The service request is processed successfully.",
          "CallbackMetadata": {
            "Item": [
              {"Name": "Amount", "Value": 1.0},
              {"Name": "MpesaReceiptNumber", "Value": "NLJ7RT61SV"},
              {"Name": "PhoneNumber", "Value": 254708374149}
            ]
          }
        }
      }
    }

``CallbackMetadata`` is only present for successful payments.
"""

from typing import Any, List, Optional, Union

from pydantic import Field

from .bases import WireModel


class CallbackItem(WireModel):
    name: str = Field(..., alias="Name")
    value: Optional[Union[int, float, str]] = Field(None, alias="Value")


class CallbackMetadata(WireModel):
    items: List[CallbackItem] = Field(default_factory=list, alias="Item")


class StkCallback(WireModel):
    """Final outcome of one STK Push, correlated by ``checkout_request_id``."""
    merchant_request_id: str = Field(..., alias="MerchantRequestID")
    checkout_request_id: str = Field(..., alias="CheckoutRequestID")
    result_code: Union[int, str] = Field(..., alias="ResultCode")
    result_desc: str = Field(..., alias="ResultDesc")
    callback_metadata: Optional[CallbackMetadata] = Field(None, alias="CallbackMetadata")

    @property
    def is_successful(self) -> bool:
        return str(self.result_code) == "0"

    def get_item(self, name: str, default: Any = None) -> Any:
        """
        Look up a metadata value by its ``Name``.

        Args:
            name: Item name, e.g. ``"MpesaReceiptNumber"``.
            default: Returned when the metadata or the item is absent.
        """
        if self.callback_metadata is None:
            return default
        for item in self.callback_metadata.items:
            if item.name == name:
                return item.value
        return default

    @property
    def amount(self) -> Optional[Union[int, float, str]]:
        return self.get_item("Amount")

    @property
    def receipt_number(self) -> Optional[str]:
        value = self.get_item("MpesaReceiptNumber")
        return None if value is None else str(value)

    @property
    def phone_number(self) -> Optional[str]:
        value = self.get_item("PhoneNumber")
        return None if value is None else str(value)


class StkCallbackBody(WireModel):
    stk_callback: StkCallback = Field(..., alias="stkCallback")


class StkCallbackEnvelope(WireModel):
    """Top-level callback document as POSTed by the provider."""
    body: StkCallbackBody = Field(..., alias="Body")

    @property
    def callback(self) -> StkCallback:
        return self.body.stk_callback

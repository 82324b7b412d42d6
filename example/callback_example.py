"""
Parse a callback body saved to a file:

    python example/callback_example.py callback.json
"""

import json
import sys

from daraja import StkCallbackEnvelope


def process_callback(body: dict) -> None:
    callback = StkCallbackEnvelope.model_validate(body).callback

    if callback.is_successful:
        print("Payment Successful!")
        print("Amount:", callback.amount)
        print("Receipt:", callback.receipt_number)
        print("Phone:", callback.phone_number)
        # Update the order matching callback.checkout_request_id here
    else:
        print("Payment Failed:", callback.result_desc)


if __name__ == "__main__":
    with open(sys.argv[1], "r", encoding="utf-8") as f:
        process_callback(json.load(f))

"""
Reads DARAJA_CONSUMER_KEY / DARAJA_CONSUMER_SECRET / DARAJA_ENVIRONMENT and
MPESA_SHORT_CODE / MPESA_PASSKEY / APP_URL from the environment or a .env file.

    python example/stk_push_example.py 254712345678 10
"""

import asyncio
import logging
import os

from daraja import Daraja, StkPushPayload, StkPushQueryPayload

logging.basicConfig(level=logging.DEBUG)


async def main(phone_number: str, amount: int):
    async with Daraja.from_env() as daraja:
        client = daraja.client(os.getenv("DARAJA_ENVIRONMENT", "sandbox"))
        print(f"Using {client.get_environment().value} environment")

        response = await client.stk_push(
            StkPushPayload(
                business_short_code=os.environ["MPESA_SHORT_CODE"],
                pass_key=os.environ["MPESA_PASSKEY"],
                amount=amount,
                phone_number=phone_number,
                callback_url=f"{os.environ['APP_URL']}/api/mpesa/callback",
                account_reference="ORDER-123",
                transaction_desc="Payment for order #123",
            )
        )
        print("Payment initiated:", response.to_wire())

        # Give the payer time to answer the prompt
        await asyncio.sleep(30)
        status = await client.stk_push_query(
            StkPushQueryPayload(
                business_short_code=os.environ["MPESA_SHORT_CODE"],
                pass_key=os.environ["MPESA_PASSKEY"],
                checkout_request_id=response.checkout_request_id,
            )
        )
        if status.is_successful:
            print("Payment successful:", status.result_desc)
        else:
            print("Payment failed:", status.result_desc)


if __name__ == "__main__":
    import sys
    asyncio.run(main(sys.argv[1], int(sys.argv[2])))

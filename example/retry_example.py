"""
The client never retries. Callers that want resilience wrap calls in their
own backoff loop, as below.
"""

import asyncio
import os

from daraja import (
    AuthenticationError,
    DarajaClient,
    PaymentInitiationError,
    StkPushPayload,
    StkPushResponse,
)


async def initiate_payment_with_retry(
    client: DarajaClient,
    phone_number: str,
    amount: int,
    reference: str,
    max_retries: int = 3,
) -> StkPushResponse:
    payload = StkPushPayload(
        business_short_code=os.environ["MPESA_SHORT_CODE"],
        pass_key=os.environ["MPESA_PASSKEY"],
        amount=amount,
        phone_number=phone_number,
        callback_url=f"{os.environ['APP_URL']}/api/mpesa/callback",
        account_reference=reference,
        transaction_desc=f"Payment for {reference}",
    )

    last_error = None
    for attempt in range(1, max_retries + 1):
        try:
            response = await client.stk_push(payload)
            print(f"Payment initiated successfully on attempt {attempt}")
            return response
        except (AuthenticationError, PaymentInitiationError) as e:
            last_error = e
            print(f"Attempt {attempt} failed: {e}")
            if attempt < max_retries:
                delay = 2 ** attempt
                print(f"Retrying in {delay}s...")
                await asyncio.sleep(delay)

    raise RuntimeError(f"Payment failed after {max_retries} attempts: {last_error}")


async def main():
    async with DarajaClient.from_env() as client:
        response = await initiate_payment_with_retry(client, "254712345678", 1, "ORDER-123")
        print("Response:", response.to_wire())


if __name__ == "__main__":
    asyncio.run(main())

import base64
from datetime import datetime, timezone
from typing import Optional


TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"


def _b64encode(data: str) -> str:
    return base64.b64encode(data.encode("utf-8")).decode("ascii")


def generate_timestamp(now: Optional[datetime] = None) -> str:
    """
    Build the 14-digit request timestamp (YYYYMMDDHHMMSS, UTC).

    Args:
        now: Optional instant to format. Naive datetimes are taken as UTC.
            Defaults to the current time.

    Returns:
        Timestamp string such as ``"20240101120000"``.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return now.strftime(TIMESTAMP_FORMAT)


def derive_password(short_code: str, pass_key: str, timestamp: str) -> str:
    """
    Derive the STK Push password: base64(short_code + pass_key + timestamp).

    The concatenation has no delimiters and must match the timestamp sent
    in the same request, otherwise the provider rejects it.
    """
    return _b64encode(f"{short_code}{pass_key}{timestamp}")


def basic_credentials(consumer_key: str, consumer_secret: str) -> str:
    """Return the value for a Basic ``Authorization`` header."""
    return f"Basic {_b64encode(f'{consumer_key}:{consumer_secret}')}"


def bearer_credentials(token: str) -> str:
    return f"Bearer {token}"

import base64
import re
from datetime import datetime, timedelta, timezone

from daraja import security

from conftest import MOCK_CONSUMER_KEY, MOCK_CONSUMER_SECRET, MOCK_PASS_KEY, MOCK_SHORT_CODE


def test_generate_timestamp_format():
    """Timestamps are always 14 digits."""
    assert re.fullmatch(r"\d{14}", security.generate_timestamp())

    fixed = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
    assert security.generate_timestamp(fixed) == "20240101120000"


def test_generate_timestamp_converts_to_utc():
    nairobi = timezone(timedelta(hours=3))
    assert security.generate_timestamp(datetime(2024, 1, 1, 15, 0, 0, tzinfo=nairobi)) == "20240101120000"
    # Naive values are formatted as-is
    assert security.generate_timestamp(datetime(2024, 12, 31, 23, 59, 59)) == "20241231235959"


def test_derive_password_known_vector():
    timestamp = "20240101120000"
    expected = base64.b64encode(f"174379{MOCK_PASS_KEY}{timestamp}".encode()).decode()

    password = security.derive_password(MOCK_SHORT_CODE, MOCK_PASS_KEY, timestamp)

    assert password == expected
    assert base64.b64decode(password).decode() == f"174379{MOCK_PASS_KEY}20240101120000"


def test_derive_password_is_deterministic():
    args = (MOCK_SHORT_CODE, MOCK_PASS_KEY, "20240101120000")
    assert security.derive_password(*args) == security.derive_password(*args)

    base = security.derive_password(*args)
    assert security.derive_password("600000", MOCK_PASS_KEY, "20240101120000") != base
    assert security.derive_password(MOCK_SHORT_CODE, "other-pass-key", "20240101120000") != base
    assert security.derive_password(MOCK_SHORT_CODE, MOCK_PASS_KEY, "20240101120001") != base


def test_basic_and_bearer_credentials():
    header = security.basic_credentials(MOCK_CONSUMER_KEY, MOCK_CONSUMER_SECRET)
    scheme, encoded = header.split(" ")
    assert scheme == "Basic"
    assert base64.b64decode(encoded).decode() == f"{MOCK_CONSUMER_KEY}:{MOCK_CONSUMER_SECRET}"

    assert security.bearer_credentials("T") == "Bearer T"

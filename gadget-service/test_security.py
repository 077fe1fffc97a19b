from datetime import timedelta

import pytest
from jose import JWTError, jwt

from config import load_token_expiry, parse_duration
from security import create_access_token, decode_access_token, get_password_hash, verify_password


@pytest.mark.parametrize(
    "value,expected",
    [
        ("24h", timedelta(hours=24)),
        ("30m", timedelta(minutes=30)),
        ("7d", timedelta(days=7)),
        ("90s", timedelta(seconds=90)),
        ("3600", timedelta(seconds=3600)),
        ("1 day", timedelta(days=1)),
        ("2 hours", timedelta(hours=2)),
        ("10 Minutes", timedelta(minutes=10)),
        ("1.5h", timedelta(minutes=90)),
        ("500ms", timedelta(milliseconds=500)),
        ("1w", timedelta(weeks=1)),
    ],
)
def test_parse_duration(value, expected):
    assert parse_duration(value) == expected


@pytest.mark.parametrize("value", ["", "h", "-5m", "24 fortnights", "one day"])
def test_parse_duration_rejects_garbage(value):
    with pytest.raises(ValueError):
        parse_duration(value)


def test_token_expiry_falls_back_on_bad_setting():
    assert load_token_expiry("not a duration") == ("24h", timedelta(hours=24))


def test_token_expiry_keeps_valid_setting():
    assert load_token_expiry("1 day") == ("1 day", timedelta(days=1))


def test_password_hash_roundtrip():
    hashed = get_password_hash("secret123")
    assert hashed != "secret123"
    assert verify_password("secret123", hashed)
    assert not verify_password("secret124", hashed)


def test_token_carries_claims_and_expiry():
    token = create_access_token({"userId": "u-1", "email": "a@imf.gov", "role": "agent"})
    payload = decode_access_token(token)
    assert payload["userId"] == "u-1"
    assert payload["role"] == "agent"
    assert "exp" in payload


def test_expired_token_is_rejected():
    token = create_access_token({"userId": "u-1"}, expires_delta=timedelta(seconds=-10))
    with pytest.raises(JWTError):
        decode_access_token(token)


def test_token_signed_with_other_secret_is_rejected():
    token = jwt.encode({"userId": "u-1"}, "not-the-secret", algorithm="HS256")
    with pytest.raises(JWTError):
        decode_access_token(token)

"""
Password hashing and token signing tests.
"""

from datetime import UTC, datetime, timedelta

import pytest
from jose import jwt

from postboard.utils.auth import (
    create_access_token,
    decode_access_token,
    extract_user_id_from_token,
    get_password_hash,
    verify_password,
)

SECRET = "unit-test-secret"


@pytest.mark.parametrize("password", ["pw1", "correct horse battery staple", "пароль"])
def test_hash_is_not_plaintext_and_verifies(password):
    hashed = get_password_hash(password, rounds=4)

    assert hashed != password
    assert verify_password(password, hashed) is True


def test_hash_is_salted():
    first = get_password_hash("same-password", rounds=4)
    second = get_password_hash("same-password", rounds=4)

    assert first != second
    assert verify_password("same-password", first)
    assert verify_password("same-password", second)


def test_hash_uses_requested_cost_factor():
    assert get_password_hash("pw", rounds=10).startswith("$2b$10$")


def test_wrong_password_does_not_verify():
    hashed = get_password_hash("pw1", rounds=4)

    assert verify_password("pw2", hashed) is False


def test_malformed_hash_returns_false():
    assert verify_password("pw1", "not-a-bcrypt-hash") is False


def test_token_round_trips_user_id():
    token = create_access_token(42, secret_key=SECRET)

    assert extract_user_id_from_token(token, secret_key=SECRET) == 42


def test_token_payload_shape():
    token = create_access_token(7, secret_key=SECRET)
    payload = decode_access_token(token, secret_key=SECRET)

    assert payload["user"] == {"id": 7}
    assert payload["exp"] - payload["iat"] == 5 * 60 * 60


def test_token_expires_after_five_hours():
    issued = datetime.now(UTC) - timedelta(hours=5, seconds=5)
    token = create_access_token(1, secret_key=SECRET, issued_at=issued)

    assert extract_user_id_from_token(token, secret_key=SECRET) is None


def test_token_still_valid_just_before_expiry():
    issued = datetime.now(UTC) - timedelta(hours=4, minutes=59)
    token = create_access_token(1, secret_key=SECRET, issued_at=issued)

    assert extract_user_id_from_token(token, secret_key=SECRET) == 1


def test_token_signed_with_other_secret_is_rejected():
    token = create_access_token(1, secret_key="someone-else")

    assert extract_user_id_from_token(token, secret_key=SECRET) is None


def test_tampered_token_is_rejected():
    token = create_access_token(1, secret_key=SECRET)
    header, payload, signature = token.split(".")
    forged = jwt.encode({"user": {"id": 2}}, "guess", algorithm="HS256").split(".")[1]

    assert extract_user_id_from_token(f"{header}.{forged}.{signature}", secret_key=SECRET) is None


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
def test_malformed_token_is_rejected(token):
    assert extract_user_id_from_token(token, secret_key=SECRET) is None


def test_token_without_user_claim_is_rejected():
    token = jwt.encode({"sub": "1"}, SECRET, algorithm="HS256")

    assert extract_user_id_from_token(token, secret_key=SECRET) is None


def test_signing_without_secret_fails():
    with pytest.raises(RuntimeError):
        create_access_token(1, secret_key="")

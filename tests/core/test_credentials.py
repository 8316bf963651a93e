"""Credential Freshness — tests for decode_claims and is_credential_usable.

Tests cover:
    - Expiry boundary (exp == now is expired, exp = now + 1 is usable)
    - Structural failures (segment count, base64, JSON, non-object payload)
    - exp type checks (missing, string, bool, non-finite)
    - Both base64 alphabets, with and without padding
"""

import base64
import json

from crowdfund.core.credentials import decode_claims, is_credential_usable
from tests.helpers import make_token

NOW = 1_700_000_000


def test_future_exp_is_usable():
    assert is_credential_usable(make_token({"exp": NOW + 3600}), now=NOW)


def test_exp_equal_to_now_is_expired():
    assert not is_credential_usable(make_token({"exp": NOW}), now=NOW)


def test_exp_one_second_ahead_is_usable():
    assert is_credential_usable(make_token({"exp": NOW + 1}), now=NOW)


def test_fractional_now_is_floored():
    token = make_token({"exp": NOW + 1})
    assert is_credential_usable(token, now=NOW + 0.999)
    assert not is_credential_usable(token, now=NOW + 1.2)


def test_exp_zero_is_always_expired():
    assert not is_credential_usable(make_token({"exp": 0}), now=NOW)


def test_past_exp_is_expired():
    assert not is_credential_usable(make_token({"exp": NOW - 60}), now=NOW)


def test_float_exp_accepted():
    assert is_credential_usable(make_token({"exp": NOW + 10.5}), now=NOW)


def test_missing_exp_is_unusable():
    assert not is_credential_usable(make_token({"sub": "1"}), now=NOW)


def test_string_exp_is_unusable():
    assert not is_credential_usable(make_token({"exp": str(NOW + 3600)}), now=NOW)


def test_bool_exp_is_unusable():
    assert not is_credential_usable(make_token({"exp": True}), now=0)


def test_null_exp_is_unusable():
    assert not is_credential_usable(make_token({"exp": None}), now=NOW)


def test_two_segments_rejected():
    assert not is_credential_usable("header.payload", now=NOW)


def test_four_segments_rejected():
    token = make_token({"exp": NOW + 3600}) + ".extra"
    assert not is_credential_usable(token, now=NOW)


def test_empty_and_non_string_rejected():
    assert not is_credential_usable("", now=NOW)
    assert not is_credential_usable(None, now=NOW)
    assert not is_credential_usable(12345, now=NOW)


def test_invalid_base64_rejected():
    assert not is_credential_usable(make_token(payload="!!!not-base64!!!"), now=NOW)


def test_payload_not_json_rejected():
    payload = base64.urlsafe_b64encode(b"not json").decode("ascii").rstrip("=")
    assert not is_credential_usable(make_token(payload=payload), now=NOW)


def test_payload_json_array_rejected():
    payload = base64.urlsafe_b64encode(b"[1, 2, 3]").decode("ascii")
    assert decode_claims(make_token(payload=payload)) is None


def test_standard_alphabet_with_padding_accepted():
    raw = json.dumps({"exp": NOW + 3600, "name": "??>"}).encode("utf-8")
    payload = base64.b64encode(raw).decode("ascii")
    assert is_credential_usable(make_token(payload=payload), now=NOW)


def test_url_safe_alphabet_without_padding_accepted():
    raw = json.dumps({"exp": NOW + 3600, "name": "??>"}).encode("utf-8")
    payload = base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")
    assert decode_claims(make_token(payload=payload)) == {"exp": NOW + 3600, "name": "??>"}


def test_decode_claims_returns_payload():
    claims = decode_claims(make_token({"sub": "42", "exp": NOW}))
    assert claims == {"sub": "42", "exp": NOW}


def test_signature_is_not_checked():
    token = make_token({"exp": NOW + 3600}).rsplit(".", 1)[0] + ".tampered"
    assert is_credential_usable(token, now=NOW)


def test_defaults_to_wall_clock():
    assert is_credential_usable(make_token({"exp": 4_102_444_800}))
    assert not is_credential_usable(make_token({"exp": 1}))


def test_exp_too_wide_for_float_is_compared_exactly():
    assert is_credential_usable(make_token({"sub": "1", "exp": 10**400}), now=NOW)


def test_huge_negative_exp_is_expired():
    assert not is_credential_usable(make_token({"exp": -(10**400)}), now=NOW)


def test_exp_overflowing_to_infinity_is_unusable():
    raw = b'{"sub": "1", "exp": 1e400}'
    payload = base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")
    assert not is_credential_usable(make_token(payload=payload), now=NOW)


def test_exp_beyond_int_digit_limit_is_unusable():
    raw = b'{"exp": ' + b"9" * 5000 + b"}"
    payload = base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")
    assert not is_credential_usable(make_token(payload=payload), now=NOW)
